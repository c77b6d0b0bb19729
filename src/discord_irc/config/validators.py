"""Shape checks for config values that the relay cannot recover from."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from discord_irc.errors import ConfigurationError


def validate_channel_mapping(mapping: Any) -> Mapping[str, str]:
    """Check that mapping is {"#discord-channel": "#irc-channel [password]"}.

    IRC values are not required to start with "#"; they are used as-is.
    """
    if not isinstance(mapping, Mapping):
        raise ConfigurationError(
            "Invalid channel mapping given",
            code="invalid_channel_mapping",
            details={"type": type(mapping).__name__},
        )
    for discord_channel, irc_channel in mapping.items():
        if not isinstance(discord_channel, str) or not discord_channel.startswith("#") or len(discord_channel) < 2:
            raise ConfigurationError(
                f"Invalid Discord channel in channel mapping: {discord_channel!r} (expected '#name')",
                code="invalid_channel_mapping",
                details={"discord_channel": discord_channel},
            )
        if not isinstance(irc_channel, str) or not irc_channel.strip():
            raise ConfigurationError(
                f"Invalid IRC channel for {discord_channel} in channel mapping: {irc_channel!r}",
                code="invalid_channel_mapping",
                details={"discord_channel": discord_channel, "irc_channel": irc_channel},
            )
    return mapping


def validate_auto_send_commands(commands: Any) -> list[list[str]]:
    """Each auto-send command is a non-empty list of string arguments, e.g. ["PRIVMSG", "NickServ", "IDENTIFY pw"]."""
    if not isinstance(commands, (list, tuple)):
        raise ConfigurationError(
            "autoSendCommands must be a list",
            code="invalid_auto_send_commands",
            details={"type": type(commands).__name__},
        )
    result: list[list[str]] = []
    for i, command in enumerate(commands):
        if (
            not isinstance(command, (list, tuple))
            or not command
            or not all(isinstance(arg, str) for arg in command)
        ):
            raise ConfigurationError(
                f"autoSendCommands[{i}] must be a non-empty list of strings",
                code="invalid_auto_send_commands",
                details={"index": i},
            )
        result.append(list(command))
    return result


def validate_command_characters(characters: Any) -> list[str]:
    if not isinstance(characters, (list, tuple)) or not all(isinstance(c, str) and c for c in characters):
        raise ConfigurationError(
            "commandCharacters must be a list of non-empty strings",
            code="invalid_command_characters",
        )
    return list(characters)
