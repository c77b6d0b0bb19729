"""Configuration: YAML/JSON files + env fallbacks."""

from discord_irc.config.loader import load_bot_configs, load_config, load_config_with_env
from discord_irc.config.schema import REQUIRED_FIELDS, BotConfig
from discord_irc.config.validators import validate_auto_send_commands, validate_channel_mapping

__all__ = [
    "REQUIRED_FIELDS",
    "BotConfig",
    "load_bot_configs",
    "load_config",
    "load_config_with_env",
    "validate_auto_send_commands",
    "validate_channel_mapping",
]
