"""
Request signing for the vBulletin API.

Every call except the handshake carries an ``api_sig`` field computed from
the session secret material. The remote recomputes it the same way, so the
concatenation order below must not change.
"""

import hashlib


def md5_hex(value: str) -> str:
    """
    Return the hex MD5 digest of a string.

    Used both for request signatures and for hashing login passwords.

    Args:
        value: Text to hash (UTF-8 encoded before hashing)

    Returns:
        32 character lowercase hex digest
    """
    return hashlib.md5(value.encode('utf-8')).hexdigest()


def sign(access_token: str, client_id: str, secret: str, api_key: str) -> str:
    """
    Compute the api_sig value for a signed request.

    Format: MD5(access_token + client_id + secret + api_key)

    Args:
        access_token: apiaccesstoken returned by the handshake
        client_id: apiclientid returned by the handshake
        secret: secret returned by the handshake
        api_key: API key configured on the forum

    Returns:
        Hex-encoded signature
    """
    return md5_hex(f"{access_token}{client_id}{secret}{api_key}")
