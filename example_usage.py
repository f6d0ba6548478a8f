#!/usr/bin/env python3
"""
Basic usage examples for the vBulletin API client library.

This script logs in to a forum, reads a private message and logs out.
Configure it through VBULLETIN_API_URL, VBULLETIN_API_KEY,
VBULLETIN_USERNAME and VBULLETIN_PASSWORD.
"""

import asyncio
import os
import sys

from vbulletin_client import AuthenticationError, VBulletinClient, VBulletinError


async def main():
    """Run basic usage examples."""

    api_url = os.environ.get("VBULLETIN_API_URL", "http://localhost/forum/api.php")
    api_key = os.environ.get("VBULLETIN_API_KEY", "xXxXxXxX")
    username = os.environ.get("VBULLETIN_USERNAME", "username")
    password = os.environ.get("VBULLETIN_PASSWORD", "password")

    print("=== vBulletin Client Basic Usage Examples ===\n")

    print("1. Creating client (handshake starts in the background)...")
    async with VBulletinClient(api_url, api_key, "example script", "1") as client:
        print(f"   Client created for: {client.identity.api_url}")
        print(f"   Unique id: {client.identity.unique_id}\n")

        print("2. Waiting for the handshake...")
        await client.wait_for_initialization(timeout=15)
        print(f"   API version: {client.credentials.api_version}\n")

        print("3. Logging in...")
        try:
            user = await client.login(username, password)
        except AuthenticationError as e:
            print(f"   Login rejected: {e.code}")
            return 1
        print(f"   Logged in as {user.username} (id {user.userid})\n")

        print("4. Reading private message 1...")
        try:
            message = await client.get_message(1)
            print(f"   From {message.username}: {message.title}")
        except VBulletinError as e:
            print(f"   Could not read message: {e}")
        print()

        print("5. Logging out...")
        await client.logout()
        print("   Logged out\n")

    print("=== All Examples Completed ===")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except VBulletinError as e:
        print(f"vBulletin Client Error: {e}")
        sys.exit(1)
