"""Stand-ins for discord.py objects: just the attributes the relay reads."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

from discord import ChannelType


def make_user(user_id: int, name: str) -> SimpleNamespace:
    return SimpleNamespace(id=user_id, name=name, mention=f"<@{user_id}>", bot=False)


def make_member(user_id: int, name: str, nick: str | None = None) -> SimpleNamespace:
    return SimpleNamespace(id=user_id, name=name, nick=nick, mention=f"<@{user_id}>")


class FakeGuild:
    """Guild with a member list and get_member()."""

    def __init__(self, members: list[Any] | None = None) -> None:
        self.members = list(members or [])

    def get_member(self, user_id: int) -> Any | None:
        for member in self.members:
            if member.id == user_id:
                return member
        return None


def make_text_channel(name: str, guild: FakeGuild | None = None, channel_id: int = 500) -> SimpleNamespace:
    return SimpleNamespace(
        id=channel_id,
        name=name,
        type=ChannelType.text,
        guild=guild or FakeGuild(),
        send=AsyncMock(),
    )


def make_attachment(url: str) -> SimpleNamespace:
    return SimpleNamespace(url=url)


def make_message(
    content: str,
    *,
    author: Any,
    channel_name: str | None = "general",
    guild: FakeGuild | None = None,
    mentions: list[Any] | None = None,
    attachments: list[Any] | None = None,
) -> SimpleNamespace:
    channel = SimpleNamespace(name=channel_name) if channel_name is not None else SimpleNamespace()
    return SimpleNamespace(
        content=content,
        author=author,
        channel=channel,
        guild=guild,
        mentions=list(mentions or []),
        attachments=list(attachments or []),
    )
