"""
Integration tests against a real vBulletin forum.

Skipped unless VBULLETIN_API_URL, VBULLETIN_API_KEY, VBULLETIN_USERNAME and
VBULLETIN_PASSWORD are set in the environment.
"""

import asyncio
import os

import pytest

from vbulletin_client import AuthenticationError, VBulletinClient

API_URL = os.environ.get("VBULLETIN_API_URL", "")
API_KEY = os.environ.get("VBULLETIN_API_KEY", "")
USERNAME = os.environ.get("VBULLETIN_USERNAME", "")
PASSWORD = os.environ.get("VBULLETIN_PASSWORD", "")

pytestmark = pytest.mark.skipif(
    not (API_URL and API_KEY and USERNAME and PASSWORD),
    reason="vBulletin forum credentials not configured",
)


class TestIntegration:
    """Integration tests with a live forum."""

    def test_handshake(self):
        async def scenario():
            async with VBulletinClient(API_URL, API_KEY, "integration-tests", "1") as client:
                await client.wait_for_initialization(timeout=15)
                return client.credentials

        credentials = asyncio.run(scenario())
        assert credentials.initialized
        assert credentials.api_client_id

    def test_login_logout(self):
        async def scenario():
            async with VBulletinClient(API_URL, API_KEY, "integration-tests", "1",
                                       init_timeout=15) as client:
                user = await client.login(USERNAME, PASSWORD)
                assert user.logged_in
                assert user.username == USERNAME
                assert await client.logout() is True
                return client.user

        user = asyncio.run(scenario())
        assert not user.logged_in

    def test_bad_login(self):
        async def scenario():
            async with VBulletinClient(API_URL, API_KEY, "integration-tests", "1",
                                       init_timeout=15) as client:
                await client.login(USERNAME, PASSWORD + "-wrong")

        with pytest.raises(AuthenticationError):
            asyncio.run(scenario())
