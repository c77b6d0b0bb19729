"""Shared fixtures: relay config, fake Discord client, relay with a mocked IRC client."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from discord_irc.gateway import Relay
from tests.fakes import make_user

RELAY_USER_ID = 1


@pytest.fixture
def base_config() -> dict[str, Any]:
    return {
        "server": "irc.example.org",
        "nickname": "relay",
        "discordToken": "discord-token",
        "channelMapping": {
            "#general": "#Project",
            "#staff": "#staff sekrit",
        },
        "commandCharacters": ["!", "."],
    }


@pytest.fixture
def discord_client() -> MagicMock:
    client = MagicMock()
    client.user = make_user(RELAY_USER_ID, "relay")
    client.users = []
    client.get_channel.return_value = None
    client.get_all_channels.return_value = []
    client.start = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def irc_client() -> MagicMock:
    client = MagicMock()
    client.join = AsyncMock()
    client.send_command = AsyncMock()
    client.disconnect = AsyncMock()
    return client


@pytest.fixture
def relay(base_config: dict[str, Any], discord_client: MagicMock, irc_client: MagicMock) -> Relay:
    r = Relay(base_config, discord_client=discord_client)
    r.irc_client = irc_client
    return r
