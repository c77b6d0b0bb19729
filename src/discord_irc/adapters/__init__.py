"""Protocol client wrappers for Discord (discord.py) and IRC (pydle)."""

from discord_irc.adapters.disc import DiscordDirectory, create_discord_client, find_text_channel
from discord_irc.adapters.irc import IRCClient, connect_with_retries, split_irc_options

__all__ = [
    "DiscordDirectory",
    "IRCClient",
    "connect_with_retries",
    "create_discord_client",
    "find_text_channel",
    "split_irc_options",
]
