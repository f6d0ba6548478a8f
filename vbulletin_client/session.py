"""
Session records owned by VBulletinClient.

ClientIdentity is fixed at construction, SessionCredentials is filled by the
handshake and UserSession follows login and logout.
"""

import time
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

from .constants import HANDSHAKE_FIELDS
from .machine import get_mac_address
from .signing import md5_hex


def derive_base_url(api_url: str) -> str:
    """Return the scheme://host[:port]/ root of an API URL."""
    parts = urlsplit(api_url)
    if not parts.scheme or not parts.hostname:
        return ''
    host = parts.hostname
    if parts.port:
        host = f"{host}:{parts.port}"
    return f"{parts.scheme}://{host}/"


def make_unique_id(client_name: str, client_version: str, platform_name: str,
                   platform_version: str, mac_address: Optional[str] = None,
                   now_ms: Optional[int] = None) -> str:
    """Fingerprint identifying this client installation to the remote."""
    if mac_address is None:
        mac_address = get_mac_address()
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return md5_hex(
        f"{client_name}{client_version}{platform_name}{platform_version}{mac_address}{now_ms}"
    )


@dataclass(frozen=True)
class ClientIdentity:
    """Static identity sent with the handshake and used for every call."""

    base_url: str
    api_url: str
    api_key: str
    client_name: str
    client_version: str
    unique_id: str

    @classmethod
    def build(cls, api_url: str, api_key: str, platform_name: str,
              platform_version: str, client_name: str,
              client_version: str) -> "ClientIdentity":
        return cls(
            base_url=derive_base_url(api_url),
            api_url=api_url,
            api_key=api_key,
            client_name=client_name,
            client_version=client_version,
            unique_id=make_unique_id(client_name, client_version,
                                     platform_name, platform_version),
        )

    def __repr__(self) -> str:
        return (
            f"ClientIdentity(api_url={self.api_url!r}, "
            f"client={self.client_name!r}/{self.client_version!r})"
        )


@dataclass
class SessionCredentials:
    """Tokens returned by the handshake, plus the terminal handshake error."""

    api_version: str = ''
    api_access_token: str = ''
    session_hash: str = ''
    api_client_id: str = ''
    secret: str = ''
    initialized: bool = False
    init_error: Optional[BaseException] = None

    @staticmethod
    def is_complete(response: Any) -> bool:
        """True when a handshake response carries every required field."""
        return isinstance(response, dict) and all(
            response.get(name) for name in HANDSHAKE_FIELDS
        )

    @classmethod
    def from_handshake(cls, response: Dict[str, Any]) -> "SessionCredentials":
        return cls(
            api_version=str(response['apiversion']),
            api_access_token=str(response['apiaccesstoken']),
            session_hash=str(response['sessionhash']),
            api_client_id=str(response['apiclientid']),
            secret=str(response['secret']),
            initialized=True,
        )

    def __repr__(self) -> str:
        state = 'ready' if self.initialized else ('failed' if self.init_error else 'pending')
        return f"SessionCredentials(state={state!r}, api_version={self.api_version!r})"


@dataclass
class UserSession:
    """The logged-in user as reported by the remote."""

    userid: int = 0
    username: str = ''
    dbsessionhash: str = ''
    logged_in: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_remote(cls, data: Dict[str, Any]) -> "UserSession":
        """Build a session from the ``session`` object of an envelope."""
        known = {f.name for f in fields(cls)} - {'extra', 'logged_in'}
        try:
            userid = int(data.get('userid') or 0)
        except (TypeError, ValueError):
            userid = 0
        return cls(
            userid=userid,
            username=str(data.get('username') or ''),
            dbsessionhash=str(data.get('dbsessionhash') or ''),
            logged_in=bool(data.get('loggedIn', False)),
            extra={k: v for k, v in data.items() if k not in known and k != 'loggedIn'},
        )
