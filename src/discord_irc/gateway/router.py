"""Channel router: Discord channel name <-> IRC channel name."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from loguru import logger


@dataclass(frozen=True)
class IrcJoin:
    """IRC channel to join at startup, with optional key."""

    channel: str
    password: str | None = None


def _parse_irc_channel(value: str) -> IrcJoin:
    """Split "#chan key" into channel and key."""
    name, _, password = value.strip().partition(" ")
    return IrcJoin(channel=name, password=password.strip() or None)


def invert_mapping(mapping: Mapping[str, str]) -> dict[str, str]:
    """IRC channel -> Discord channel. Later Discord channels win on duplicate IRC channels."""
    return {irc: discord for discord, irc in mapping.items()}


class ChannelRouter:
    """Immutable forward and inverted channel mappings, built once from config."""

    def __init__(self, channel_mapping: Mapping[str, str]) -> None:
        forward: dict[str, str] = {}
        joins: list[IrcJoin] = []
        for discord_channel, irc_value in channel_mapping.items():
            join = _parse_irc_channel(irc_value)
            joins.append(join)
            # Channel keys are only needed to join; lookups use the lowercased name
            forward[discord_channel] = join.channel.lower()

        inverted = invert_mapping(forward)
        for discord_channel, irc_channel in forward.items():
            if inverted[irc_channel] != discord_channel:
                logger.warning(
                    "Router: {} shares {} with {}; IRC messages go to {}",
                    discord_channel,
                    irc_channel,
                    inverted[irc_channel],
                    inverted[irc_channel],
                )

        self._forward = MappingProxyType(forward)
        self._inverted = MappingProxyType(inverted)
        self._joins = tuple(joins)
        logger.info("Router: loaded {} channel mappings", len(forward))

    @property
    def forward(self) -> Mapping[str, str]:
        """Discord channel name -> IRC channel name (lowercased, no key)."""
        return self._forward

    @property
    def inverted(self) -> Mapping[str, str]:
        """IRC channel name -> Discord channel name."""
        return self._inverted

    @property
    def irc_joins(self) -> tuple[IrcJoin, ...]:
        """Configured IRC channels with their keys, in config order."""
        return self._joins

    def get_irc_channel(self, discord_channel: str) -> str | None:
        """IRC channel for a Discord channel name (with leading '#')."""
        return self._forward.get(discord_channel)

    def get_discord_channel(self, irc_channel: str) -> str | None:
        """Discord channel name for an IRC channel; case-insensitive."""
        return self._inverted.get(irc_channel.lower())

    def get_irc_join(self, irc_channel: str) -> IrcJoin | None:
        """Configured join (with key) for an IRC channel; case-insensitive."""
        lowered = irc_channel.lower()
        for join in self._joins:
            if join.channel.lower() == lowered:
                return join
        return None

    def is_bridged_irc_channel(self, irc_channel: str) -> bool:
        return self.get_discord_channel(irc_channel) is not None
