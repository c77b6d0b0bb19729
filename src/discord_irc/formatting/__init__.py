"""Message formatting between Discord and IRC."""

from discord_irc.formatting.colors import NICK_COLORS, colorize_nick, nick_color_index, wrap
from discord_irc.formatting.discord_to_irc import guild_display_name, is_command_message, parse_text
from discord_irc.formatting.irc_to_discord import MentionDirectory, resolve_mentions, with_author

__all__ = [
    "NICK_COLORS",
    "MentionDirectory",
    "colorize_nick",
    "guild_display_name",
    "is_command_message",
    "nick_color_index",
    "parse_text",
    "resolve_mentions",
    "with_author",
    "wrap",
]
