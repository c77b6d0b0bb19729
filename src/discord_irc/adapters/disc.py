"""Discord side: client factory, member/user lookups, channel lookup."""

from __future__ import annotations

from typing import Any

import discord
from discord import ChannelType, Intents


def create_discord_client(*, debug: bool = False) -> discord.Client:
    """discord.py client with the intents the relay needs (content, members for nicknames)."""
    intents = Intents.default()
    intents.guilds = True
    intents.members = True
    intents.message_content = True
    return discord.Client(intents=intents, enable_debug_events=debug)


class DiscordDirectory:
    """Member and user lookups backed by the discord.py cache."""

    def __init__(self, client: discord.Client) -> None:
        self._client = client

    def find_member_by_nickname(self, guild: discord.Guild, name: str) -> discord.Member | None:
        return discord.utils.get(guild.members, nick=name)

    def find_user_by_username(self, name: str) -> discord.User | None:
        return discord.utils.get(self._client.users, name=name)

    def get_member(self, guild: discord.Guild, user_id: int) -> discord.Member | None:
        return guild.get_member(user_id)


def find_text_channel(client: discord.Client, name: str) -> Any | None:
    """First text channel called name (no leading '#') in any guild the client is in."""
    for channel in client.get_all_channels():
        if channel.type == ChannelType.text and channel.name == name:
            return channel
    return None
