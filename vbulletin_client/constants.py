"""
Constants for the vBulletin API client library.
Field and method names match the remote api.php RPC endpoint.
"""

# Handshake (unsigned bootstrap call)
METHOD_API_INIT = "api_init"

# Session methods
METHOD_LOGIN = "login_login"
METHOD_LOGOUT = "login_logout"

# Messaging
METHOD_SHOW_PM = "private_showpm"
METHOD_INSERT_PM = "private_insertpm"

# Forum content
METHOD_NEW_REPLY = "newreply_postreply"
METHOD_EDIT_POST = "editpost_updatepost"
METHOD_NEW_THREAD = "newthread_postthread"

# Reserved request fields, always written by the client
FIELD_METHOD = "api_m"
FIELD_CLIENT_ID = "api_c"
FIELD_ACCESS_TOKEN = "api_s"
FIELD_API_VERSION = "api_v"
FIELD_SIGNATURE = "api_sig"

RESERVED_FIELDS = (
    FIELD_METHOD,
    FIELD_CLIENT_ID,
    FIELD_ACCESS_TOKEN,
    FIELD_API_VERSION,
    FIELD_SIGNATURE,
)

# Handshake response fields that must all be present
HANDSHAKE_FIELDS = (
    "apiversion",
    "apiaccesstoken",
    "sessionhash",
    "apiclientid",
    "secret",
)

# Remote codes that occupy the error slot but mean success
CODE_REDIRECT_LOGIN = "redirect_login"
CODE_COOKIE_CLEAR = "cookieclear"
CODE_PM_SENT = "pm_messagesent"
CODE_POST_THANKS = "redirect_postthanks"
CODE_EDIT_THANKS = "redirect_editthanks"

RECOVERABLE_CODES = {
    METHOD_LOGIN: frozenset({CODE_REDIRECT_LOGIN}),
    METHOD_LOGOUT: frozenset({CODE_COOKIE_CLEAR}),
    METHOD_INSERT_PM: frozenset({CODE_PM_SENT}),
    METHOD_NEW_REPLY: frozenset({CODE_POST_THANKS}),
    METHOD_NEW_THREAD: frozenset({CODE_POST_THANKS}),
    METHOD_EDIT_POST: frozenset({CODE_EDIT_THANKS}),
}

# Remote codes meaning the credentials were rejected
AUTHENTICATION_CODES = frozenset({"badlogin", "badlogin_strikes"})

DEFAULT_CLIENT_NAME = "vbulletin-client"
CLIENT_VERSION = "1.0.0"
DEFAULT_INIT_TIMEOUT = 5  # seconds

# Default configuration values
DEFAULT_CONFIG = {
    'timeout': 30,              # HTTP timeout in seconds
    'init_timeout': DEFAULT_INIT_TIMEOUT,
    'client_name': DEFAULT_CLIENT_NAME,
    'client_version': CLIENT_VERSION,
}

