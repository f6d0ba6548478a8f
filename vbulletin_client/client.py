"""
vBulletin API client.

This module owns the session lifecycle: the unsigned api_init handshake
started at construction, the gate that callers wait on until it settles,
and the signing of every later call.
"""

import asyncio
from dataclasses import replace
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

import requests
from requests.cookies import RequestsCookieJar
from loguru import logger

from . import message as message_api
from . import posting
from .constants import (
    DEFAULT_CONFIG,
    FIELD_ACCESS_TOKEN,
    FIELD_API_VERSION,
    FIELD_CLIENT_ID,
    FIELD_METHOD,
    FIELD_SIGNATURE,
    METHOD_API_INIT,
    METHOD_LOGIN,
    METHOD_LOGOUT,
)
from .envelope import Failure, Recoverable, extract_error, interpret
from .exceptions import (
    ConfigurationError,
    HandshakeError,
    InvalidMethodError,
    NotInitializedError,
    TransportError,
    VBulletinError,
)
from .gate import InitializationGate
from .session import ClientIdentity, SessionCredentials, UserSession
from .signing import md5_hex, sign


class VBulletinClient:
    """
    Client for a vBulletin api.php endpoint.

    Construction starts the handshake in the background. Every other call
    waits for it (up to ``init_timeout`` seconds) and is then signed with
    the returned session credentials.
    """

    def __init__(self, api_url: str = '', api_key: str = '', platform_name: str = '',
                 platform_version: str = '', **config):
        """
        Initialize the client and start the handshake.

        Args:
            api_url: Full URL of the forum's api.php
            api_key: API key configured in the forum's admin panel
            platform_name: Name of the integrating application
            platform_version: Version of the integrating application
            **config: Configuration options (timeout, init_timeout,
                client_name, client_version)
        """
        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}
        self._validate_config()

        self.identity = ClientIdentity.build(
            api_url, api_key, platform_name, platform_version,
            self.config['client_name'], self.config['client_version'],
        )
        self._platform_name = platform_name
        self._platform_version = platform_version

        self.credentials = SessionCredentials()
        self.user = UserSession()
        self.gate = InitializationGate()
        self._handshake_task: Optional[asyncio.Task] = None

        # Create HTTP session
        self.session = requests.Session()

        missing = [
            name for name, value in (
                ('api_url', api_url),
                ('api_key', api_key),
                ('platform_name', platform_name),
                ('platform_version', platform_version),
            ) if not value
        ]
        if missing:
            self._fail(ConfigurationError(
                "Initialization requires api_url, api_key, platform_name and "
                f"platform_version (missing: {', '.join(missing)})"
            ))
            return

        try:
            self._start_handshake()
        except RuntimeError:
            # No running loop; the first awaiting caller starts it.
            logger.debug("No running event loop, deferring handshake for {}", api_url)

    def _validate_config(self):
        """Validate client configuration."""
        if self.config['timeout'] is not None and self.config['timeout'] <= 0:
            raise ConfigurationError("timeout must be positive")

        if self.config['init_timeout'] is not None and self.config['init_timeout'] <= 0:
            raise ConfigurationError("init_timeout must be positive")

        if not self.config['client_name']:
            raise ConfigurationError("client_name cannot be empty")

    @property
    def is_initialized(self) -> bool:
        return self.credentials.initialized

    @property
    def is_logged_in(self) -> bool:
        return self.user.logged_in

    def _start_handshake(self):
        loop = asyncio.get_running_loop()
        self._handshake_task = loop.create_task(self._handshake())

    def _ensure_handshake(self):
        if self._handshake_task is None and not self.gate.settled:
            self._start_handshake()

    async def _handshake(self):
        """Exchange client identity for session credentials, exactly once."""
        logger.debug("Starting api_init handshake with {}", self.identity.api_url)
        try:
            response = await self.call_method(METHOD_API_INIT, {
                'clientname': self.identity.client_name,
                'clientversion': self.identity.client_version,
                'platformname': self._platform_name,
                'platformversion': self._platform_version,
                'uniqueid': self.identity.unique_id,
            })
        except Exception as e:
            error = HandshakeError(f"Handshake request failed: {e}")
            error.__cause__ = e
            self._fail(error)
            return

        if SessionCredentials.is_complete(response):
            self.credentials = SessionCredentials.from_handshake(response)
            logger.debug("Handshake complete, api version {}", self.credentials.api_version)
            self.gate.open()
            return

        code = extract_error(response) or None
        self._fail(HandshakeError(
            code or "api connection did not return a session", code=code
        ))

    def _fail(self, error: BaseException):
        """Record a terminal initialization error and release all waiters."""
        logger.warning("vBulletin client initialization failed: {}", error)
        self.credentials = SessionCredentials(init_error=error)
        self.gate.fail(error)

    async def wait_for_initialization(self, timeout: Optional[float] = None):
        """
        Wait until the handshake has completed.

        Args:
            timeout: Seconds to wait, defaults to the init_timeout option

        Raises:
            InitializationTimeoutError: If this caller's wait times out
            ConfigurationError, HandshakeError: If initialization failed
        """
        self._ensure_handshake()
        if timeout is None:
            timeout = self.config['init_timeout']
        await self.gate.wait(timeout)

    def _build_params(self, method: str, params: Dict[str, Any], signed: bool) -> Dict[str, Any]:
        """Merge caller params with the reserved session fields."""
        request_params = dict(params)
        request_params.pop(FIELD_SIGNATURE, None)
        request_params.update({
            FIELD_METHOD: method,
            FIELD_CLIENT_ID: self.credentials.api_client_id,
            FIELD_ACCESS_TOKEN: self.credentials.api_access_token,
            FIELD_API_VERSION: self.credentials.api_version,
        })

        if signed:
            if not self.credentials.initialized:
                raise NotInitializedError("call_method() requires initialization. Not initialized")
            request_params[FIELD_SIGNATURE] = sign(
                self.credentials.api_access_token,
                self.credentials.api_client_id,
                self.credentials.secret,
                self.identity.api_key,
            )
        return request_params

    def _cookie_jar(self, cookies: Dict[str, Any]) -> RequestsCookieJar:
        """Build a cookie jar scoped to the forum's base URL."""
        jar = RequestsCookieJar()
        domain = urlsplit(self.identity.base_url).hostname or ''
        for name, value in cookies.items():
            jar.set(name, str(value), domain=domain, path='/')
        return jar

    async def _post(self, data: Dict[str, Any], cookies: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        POST a form-encoded request and return the decoded JSON body.

        Raises:
            TransportError: On network failure, non-200 status or invalid JSON
        """
        kwargs = {
            'data': data,
            'headers': {'User-Agent': self.identity.client_name},
            'timeout': self.config['timeout'],
        }
        if cookies:
            kwargs['cookies'] = self._cookie_jar(cookies)

        try:
            response = await asyncio.to_thread(self.session.post, self.identity.api_url, **kwargs)
        except requests.RequestException as e:
            raise TransportError(f"call_method(): no response: {e}") from e

        if response.status_code != 200:
            raise TransportError(
                f"call_method(): no response (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                "call_method(): no response (malformed JSON)",
                status_code=response.status_code,
            ) from e

    async def call_method(self, method: str, params: Optional[Dict[str, Any]] = None,
                          cookies: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Call a remote API method and return the raw response envelope.

        All methods except api_init wait for the handshake and are signed.
        The envelope is not interpreted; use envelope.interpret() for that.

        Args:
            method: Remote method name (api_m)
            params: Method parameters; reserved api_* keys are overwritten
            cookies: Optional cookies sent with the request

        Returns:
            Parsed JSON envelope

        Raises:
            InvalidMethodError: If method is empty
            TransportError: If the request fails
            VBulletinError: If initialization failed or timed out
        """
        if not method:
            raise InvalidMethodError("call_method() requires a supplied method")

        signed = method != METHOD_API_INIT
        if signed:
            await self.wait_for_initialization()

        request_params = self._build_params(method, params or {}, signed)
        logger.debug("Calling {}", method)
        return await self._post(request_params, cookies)

    async def login(self, username: str, password: str) -> UserSession:
        """
        Log a user in with a clear text password.

        The password is MD5 hashed locally and never sent in clear text.
        """
        return await self.login_md5(username, md5_hex(password))

    async def login_md5(self, username: str, md5_password: str) -> UserSession:
        """
        Log a user in with a pre-hashed (MD5) password.

        Args:
            username: Forum username
            md5_password: Hex MD5 digest of the password

        Returns:
            The new UserSession

        Raises:
            AuthenticationError: On badlogin or badlogin_strikes
            RemoteError: On any other remote error code
        """
        response = await self.call_method(METHOD_LOGIN, {
            'vb_login_username': username,
            'vb_login_md5password': md5_password,
        })
        outcome = interpret(METHOD_LOGIN, response)

        remote_session = response.get('session')
        if isinstance(remote_session, dict):
            self.user = UserSession.from_remote(remote_session)

        if isinstance(outcome, Failure):
            raise outcome.to_exception(response)
        if isinstance(outcome, Recoverable):
            # redirect_login does not echo the username back
            self.user = replace(self.user, username=username, logged_in=True)
            logger.debug("Logged in as {}", username)
        return self.user

    async def logout(self) -> bool:
        """
        Log the current user out.

        Returns:
            True on success

        Raises:
            RemoteError: If the remote reports an error
        """
        response = await self.call_method(METHOD_LOGOUT)
        outcome = interpret(METHOD_LOGOUT, response)
        if isinstance(outcome, Failure):
            raise outcome.to_exception(response)

        remote_session = response.get('session')
        if isinstance(remote_session, dict):
            self.user = replace(UserSession.from_remote(remote_session), username='', logged_in=False)
        else:
            self.user = UserSession()
        return True

    async def get_message(self, pm_id: int) -> "message_api.Message":
        """Get a private message of the logged in user."""
        return await message_api.get_message(self, pm_id)

    async def send_message(self, username: str, title: str, message: str,
                           signature: bool = False) -> None:
        """Send a private message to a member."""
        await message_api.send_message(self, username, title, message, signature=signature)

    async def new_post(self, thread_id: int, message: str, signature: bool = False) -> Dict[str, Any]:
        """Reply to a thread."""
        return await posting.new_post(self, thread_id, message, signature=signature)

    async def edit_post(self, post_id: int, message: str, reason: Optional[str] = None,
                        signature: bool = False) -> Dict[str, Any]:
        """Edit an existing post."""
        return await posting.edit_post(self, post_id, message, reason=reason, signature=signature)

    async def new_thread(self, forum_id: int, subject: str, message: str,
                         signature: bool = False) -> Dict[str, Any]:
        """Start a new thread in a forum."""
        return await posting.new_thread(self, forum_id, subject, message, signature=signature)

    def close(self):
        """Cancel a pending handshake and close the HTTP session."""
        if self._handshake_task is not None and not self._handshake_task.done():
            self._handshake_task.cancel()
        if not self.gate.settled:
            self._fail(VBulletinError("Client closed before initialization completed"))
        if self.session:
            self.session.close()

    async def __aenter__(self):
        """Async context manager entry."""
        self._ensure_handshake()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        task = self._handshake_task
        self.close()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)
