"""Gateway: channel router and relay."""

from discord_irc.gateway.router import ChannelRouter, IrcJoin, invert_mapping
from discord_irc.gateway.relay import Relay

__all__ = ["ChannelRouter", "IrcJoin", "Relay", "invert_mapping"]
