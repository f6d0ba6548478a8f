"""
vBulletin API Client Library

A Python client library for the vBulletin mobile API (api.php). It performs
the api_init handshake, signs every request and maps remote status codes
to exceptions.

Example usage:
    from vbulletin_client import VBulletinClient

    async with VBulletinClient("https://forum.example.com/api.php", "api-key",
                               "my-app", "1.0") as client:
        user = await client.login("alice", "password")
"""

from .client import VBulletinClient
from .exceptions import (
    VBulletinError,
    ConfigurationError,
    HandshakeError,
    InitializationTimeoutError,
    NotInitializedError,
    InvalidMethodError,
    TransportError,
    RemoteError,
    AuthenticationError
)
from .envelope import (
    Recoverable,
    Failure,
    extract_error,
    interpret
)
from .gate import InitializationGate
from .message import Message, MessageUser
from .session import ClientIdentity, SessionCredentials, UserSession
from .signing import md5_hex, sign
from .constants import (
    CLIENT_VERSION,
    DEFAULT_CONFIG,
    DEFAULT_INIT_TIMEOUT
)

__version__ = CLIENT_VERSION
__all__ = [
    "VBulletinClient",
    "VBulletinError",
    "ConfigurationError",
    "HandshakeError",
    "InitializationTimeoutError",
    "NotInitializedError",
    "InvalidMethodError",
    "TransportError",
    "RemoteError",
    "AuthenticationError",
    "Recoverable",
    "Failure",
    "extract_error",
    "interpret",
    "InitializationGate",
    "Message",
    "MessageUser",
    "ClientIdentity",
    "SessionCredentials",
    "UserSession",
    "md5_hex",
    "sign",
    "CLIENT_VERSION",
    "DEFAULT_CONFIG",
    "DEFAULT_INIT_TIMEOUT"
]
