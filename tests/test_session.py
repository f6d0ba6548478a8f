"""
Unit tests for session records and client identity.
"""

from unittest.mock import patch

from vbulletin_client import ClientIdentity, SessionCredentials, UserSession
from vbulletin_client.machine import get_mac_address
from vbulletin_client.session import derive_base_url, make_unique_id
from vbulletin_client.signing import md5_hex

from conftest import HANDSHAKE_RESPONSE


class TestIdentity:
    """Test identity derivation."""

    def test_derive_base_url(self):
        assert derive_base_url("https://example.com/forum/api.php") == "https://example.com/"
        assert derive_base_url("http://example.com:8080/api.php?x=1") == "http://example.com:8080/"
        assert derive_base_url("") == ""

    def test_unique_id(self):
        expected = md5_hex("clientv1platformp1aa:bb:cc:dd:ee:ff1500000000000")
        assert make_unique_id("client", "v1", "platform", "p1",
                              mac_address="aa:bb:cc:dd:ee:ff",
                              now_ms=1500000000000) == expected

    def test_unique_id_changes_with_time(self):
        first = make_unique_id("c", "v", "p", "1", mac_address="", now_ms=1)
        second = make_unique_id("c", "v", "p", "1", mac_address="", now_ms=2)
        assert first != second

    def test_build_identity(self):
        identity = ClientIdentity.build("https://example.com/api.php", "key",
                                        "platform", "1", "client", "2")
        assert identity.base_url == "https://example.com/"
        assert identity.api_key == "key"
        assert len(identity.unique_id) == 32
        assert "key" not in repr(identity)

    @patch('vbulletin_client.machine.uuid.getnode', return_value=0x0223456789ab)
    def test_mac_address(self, mock_getnode):
        assert get_mac_address() == "02:23:45:67:89:ab"

    @patch('vbulletin_client.machine.uuid.getnode', return_value=0x010000000000)
    def test_mac_address_random_node(self, mock_getnode):
        assert get_mac_address() == ""


class TestCredentials:
    """Test handshake credential handling."""

    def test_is_complete(self):
        assert SessionCredentials.is_complete(HANDSHAKE_RESPONSE)
        assert not SessionCredentials.is_complete({**HANDSHAKE_RESPONSE, "secret": ""})
        assert not SessionCredentials.is_complete(None)

    def test_from_handshake(self):
        credentials = SessionCredentials.from_handshake(HANDSHAKE_RESPONSE)
        assert credentials.initialized
        assert credentials.init_error is None
        assert "sec" not in repr(credentials)


class TestUserSession:
    """Test user session mapping."""

    def test_defaults(self):
        user = UserSession()
        assert user.userid == 0
        assert user.username == ""
        assert user.logged_in is False

    def test_from_remote(self):
        user = UserSession.from_remote({"dbsessionhash": "x", "userid": "3",
                                        "username": "alice", "sessionurl": ""})
        assert user.userid == 3
        assert user.username == "alice"
        assert user.dbsessionhash == "x"
        assert user.logged_in is False
        assert user.extra == {"sessionurl": ""}

    def test_from_remote_bad_userid(self):
        assert UserSession.from_remote({"userid": "guest"}).userid == 0
