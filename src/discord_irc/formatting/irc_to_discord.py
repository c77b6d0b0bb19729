"""Convert IRC text to a Discord message: @name -> mention, bold author."""

from __future__ import annotations

import re
from typing import Any, Protocol

# @ followed by non-space, trimmed back to a word boundary ("@bob," -> "@bob")
_AT_PATTERN = re.compile(r"@[^\s]+\b")


class MentionDirectory(Protocol):
    """Lookups needed to turn IRC @names into Discord mentions."""

    def find_member_by_nickname(self, guild: Any, name: str) -> Any | None:
        """Guild member whose guild nickname is exactly name."""
        ...

    def find_user_by_username(self, name: str) -> Any | None:
        """Known user whose global username is exactly name."""
        ...

    def get_member(self, guild: Any, user_id: int) -> Any | None:
        """Guild member for a user id."""
        ...


def _resolve(search: str, guild: Any, directory: MentionDirectory) -> str | None:
    member = directory.find_member_by_nickname(guild, search)
    if member is not None:
        return member.mention

    user = directory.find_user_by_username(search)
    if user is None:
        return None
    member = directory.get_member(guild, user.id)
    if member is None:
        return None
    # A user known under a different guild nickname is mentioned by nickname only
    if not member.nick or member.nick == search:
        return user.mention
    return None


def resolve_mentions(text: str, guild: Any, directory: MentionDirectory) -> str:
    """Replace @nickname / @username with Discord mentions; unknown names stay verbatim."""
    if not text or guild is None:
        return text

    def _sub(m: re.Match[str]) -> str:
        mention = _resolve(m.group(0)[1:], guild, directory)
        return mention if mention is not None else m.group(0)

    return _AT_PATTERN.sub(_sub, text)


def with_author(author: str, text: str) -> str:
    """Bold IRC-style attribution: **<nick>** text"""
    return f"**<{author}>** {text}"
