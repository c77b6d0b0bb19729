"""Config schema and accessor for one relay."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger

from discord_irc.config.validators import (
    validate_auto_send_commands,
    validate_channel_mapping,
    validate_command_characters,
)
from discord_irc.errors import ConfigurationError

# Checked in this order; the first missing one is reported.
REQUIRED_FIELDS = ("server", "nickname", "channelMapping", "discordToken")


def _is_missing(value: Any) -> bool:
    """Absent or falsy scalar. An empty mapping is present and left to the mapping check."""
    if isinstance(value, Mapping):
        return False
    return not value


class BotConfig:
    """Config accessor for a single relay (one IRC server, one Discord token)."""

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})

    def validate(self) -> None:
        """Raise ConfigurationError naming the first missing or malformed field."""
        for field in REQUIRED_FIELDS:
            if _is_missing(self._data.get(field)):
                raise ConfigurationError(
                    f"Missing configuration field {field}",
                    code="missing_field",
                    details={"field": field},
                )
        if not validate_channel_mapping(self._data["channelMapping"]):
            logger.warning("Config for {} on {} maps no channels; nothing will be relayed", self.nickname, self.server)
        validate_auto_send_commands(self._data.get("autoSendCommands") or [])
        validate_command_characters(self._data.get("commandCharacters") or [])
        logger.debug(
            "Config validated: {} on {}, {} channel mappings",
            self.nickname,
            self.server,
            len(self.channel_mapping),
        )

    @property
    def server(self) -> str:
        return str(self._data.get("server", ""))

    @property
    def nickname(self) -> str:
        return str(self._data.get("nickname", ""))

    @property
    def discord_token(self) -> str:
        return str(self._data.get("discordToken", ""))

    @property
    def channel_mapping(self) -> dict[str, str]:
        """Discord channel -> IRC channel, as configured (passwords included)."""
        m = self._data.get("channelMapping")
        return dict(m) if isinstance(m, Mapping) else {}

    @property
    def irc_options(self) -> dict[str, Any]:
        val = self._data.get("ircOptions")
        return dict(val) if isinstance(val, Mapping) else {}

    @property
    def command_characters(self) -> list[str]:
        val = self._data.get("commandCharacters")
        return list(val) if isinstance(val, (list, tuple)) else []

    @property
    def irc_nick_color(self) -> bool:
        """Colored usernames on IRC; only an explicit false disables it."""
        return self._data.get("ircNickColor") is not False

    @property
    def auto_send_commands(self) -> list[list[str]]:
        val = self._data.get("autoSendCommands")
        if isinstance(val, (list, tuple)):
            return [list(c) for c in val]
        return []
