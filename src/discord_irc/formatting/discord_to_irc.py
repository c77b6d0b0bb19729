"""Convert Discord message content to a single plain IRC line."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from typing import Any

_NEWLINE_PATTERN = re.compile(r"\r\n|\r|\n")
_CHANNEL_PATTERN = re.compile(r"<#(\d+)>")
# Custom emotes: <:name:id>, animated <a:name:id>
_EMOTE_PATTERN = re.compile(r"<a?(:\w+:)\d+>")

ChannelLookup = Callable[[int], Any]


def guild_display_name(user: Any, guild: Any | None) -> str:
    """Guild nickname when set, otherwise the global username."""
    if guild is not None:
        member = guild.get_member(user.id)
        if member is not None and member.nick:
            return str(member.nick)
    return str(user.name)


def replace_mentions(content: str, mentions: Sequence[Any], guild: Any | None) -> str:
    """Replace <@id>, <@!id> and <@&id> for each mentioned user with @display-name."""
    for user in mentions:
        display = f"@{guild_display_name(user, guild)}"
        for token in (f"<@{user.id}>", f"<@!{user.id}>", f"<@&{user.id}>"):
            content = content.replace(token, display)
    return content


def collapse_newlines(content: str) -> str:
    """IRC is line based; every newline variant becomes one space."""
    return _NEWLINE_PATTERN.sub(" ", content)


def replace_channels(content: str, get_channel: ChannelLookup) -> str:
    """<#id> -> #name. Channels missing from the cache are left as-is."""

    def _sub(m: re.Match[str]) -> str:
        channel = get_channel(int(m.group(1)))
        name = getattr(channel, "name", None) if channel is not None else None
        return f"#{name}" if name else m.group(0)

    return _CHANNEL_PATTERN.sub(_sub, content)


def replace_emotes(content: str) -> str:
    """<:name:id> -> :name:"""
    return _EMOTE_PATTERN.sub(r"\1", content)


def parse_text(message: Any, get_channel: ChannelLookup) -> str:
    """Discord message -> IRC text: mentions, newlines, channel references, custom emotes."""
    text = replace_mentions(message.content or "", message.mentions, message.guild)
    text = collapse_newlines(text)
    text = replace_channels(text, get_channel)
    return replace_emotes(text)


def is_command_message(text: str, command_characters: Sequence[str]) -> bool:
    """True when text starts with one of the configured command characters."""
    return bool(text) and text[0] in command_characters
