"""
Custom exceptions for the vBulletin API client library.
"""


class VBulletinError(Exception):
    """Base exception for vBulletin client errors."""
    pass


class ConfigurationError(VBulletinError):
    """Raised when client configuration is missing or invalid."""
    pass


class HandshakeError(VBulletinError):
    """Raised when the remote rejects the handshake or returns no session."""

    def __init__(self, message, code=None):
        super().__init__(message)
        self.code = code


class InitializationTimeoutError(VBulletinError, TimeoutError):
    """Raised when a caller gives up waiting for the handshake."""
    pass


class NotInitializedError(VBulletinError):
    """Raised when a signed call is attempted without session credentials."""
    pass


class InvalidMethodError(VBulletinError):
    """Raised when call_method is given no method name."""
    pass


class TransportError(VBulletinError):
    """Raised when the HTTP call fails or returns no usable JSON."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class RemoteError(VBulletinError):
    """Raised when the remote reports an error code in the envelope."""

    def __init__(self, code, envelope=None):
        super().__init__(code)
        self.code = code
        self.envelope = envelope


class AuthenticationError(RemoteError):
    """Raised when the remote rejects the login credentials."""
    pass
