"""Config loading: YAML or JSON file, .env overlay."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from discord_irc.config.schema import BotConfig
from discord_irc.errors import ConfigurationError

# Config key -> env var used when the key is missing from the file
_ENV_FALLBACK_KEYS = {
    "discordToken": "DISCORD_TOKEN",
    "server": "IRC_SERVER",
    "nickname": "IRC_NICKNAME",
}


def load_config(path: str | Path) -> Any:
    """Load config from a YAML file (JSON is valid YAML). Uses SafeLoader. Returns the parsed document."""
    path = Path(path)
    if not path.exists():
        logger.warning("Config file not found: {}", path)
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as exc:
        logger.error("Failed to parse config {}: {}", path, exc)
        raise ConfigurationError(
            f"Could not parse config file {path}",
            code="invalid_config_file",
            details={"path": str(path)},
            original_error=exc,
        ) from exc


def load_config_with_env(path: str | Path) -> Any:
    """Load config document after loading .env into the process environment."""
    from dotenv import load_dotenv

    load_dotenv()
    return load_config(path)


def _apply_env_fallbacks(data: dict[str, Any]) -> dict[str, Any]:
    result = dict(data)
    for key, env_key in _ENV_FALLBACK_KEYS.items():
        if not result.get(key) and os.environ.get(env_key):
            result[key] = os.environ[env_key]
    return result


def load_bot_configs(path: str | Path) -> list[BotConfig]:
    """Load one relay config or a list of them from path.

    Entries are not validated here; each Relay validates its own config.
    """
    data = load_config_with_env(path)
    if isinstance(data, dict):
        entries = [data]
    elif isinstance(data, list):
        entries = data
    else:
        raise ConfigurationError(
            "Config file must contain a mapping or a list of mappings",
            code="invalid_config_file",
            details={"path": str(path), "type": type(data).__name__},
        )

    configs: list[BotConfig] = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ConfigurationError(
                f"Config entry {i} must be a mapping",
                code="invalid_config_file",
                details={"path": str(path), "index": i},
            )
        configs.append(BotConfig(_apply_env_fallbacks(entry)))
    logger.debug("Loaded {} relay config(s) from {}", len(configs), path)
    return configs
