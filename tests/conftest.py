"""
Shared fixtures for the vBulletin client tests.

The transport is replaced by patching requests.Session.post, so no test
talks to a real forum.
"""

import threading
from unittest.mock import Mock, patch

import pytest


API_URL = "http://forum.example.com:8080/forum/api.php"
API_KEY = "test-api-key"

HANDSHAKE_RESPONSE = {
    "apiversion": "1",
    "apiaccesstoken": "tok",
    "sessionhash": "sh",
    "apiclientid": "cid",
    "secret": "sec",
}


def make_response(body=None, status_code=200, json_error=None):
    """Build a fake requests.Response."""
    response = Mock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    return response


class FakeForum:
    """
    Routes posted forms to canned envelopes by api_m.

    ``replies`` maps a method name to an envelope or a Response mock.
    ``gates`` maps a method name to a threading.Event the call waits on.
    """

    def __init__(self, replies=None):
        self.replies = {"api_init": HANDSHAKE_RESPONSE}
        self.replies.update(replies or {})
        self.gates = {}
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        method = kwargs["data"]["api_m"]
        if method in self.gates:
            self.gates[method].wait(5)
        reply = self.replies.get(method, {})
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, Mock):
            return reply
        return make_response(reply)

    def hold(self, method):
        event = threading.Event()
        self.gates[method] = event
        return event

    def forms(self, method=None):
        return [
            kwargs["data"] for _, kwargs in self.calls
            if method is None or kwargs["data"]["api_m"] == method
        ]


@pytest.fixture
def forum():
    """Patch the HTTP layer with a FakeForum."""
    fake = FakeForum()
    with patch('vbulletin_client.client.requests.Session.post', side_effect=fake) as mock_post:
        fake.mock = mock_post
        yield fake
