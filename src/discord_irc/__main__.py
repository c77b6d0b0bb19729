"""Relay entrypoint. Loads config file, builds one relay per config entry, runs until interrupted."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import sys
from pathlib import Path

from loguru import logger

from discord_irc import __version__
from discord_irc.config import BotConfig, load_bot_configs
from discord_irc.errors import ConfigurationError
from discord_irc.gateway import Relay

# Third-party libraries to intercept and route through loguru
_INTERCEPTED_LIBRARIES = ["discord", "pydle"]


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records (discord.py, pydle) to loguru at the same level."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.patch(
            lambda r: r.update(
                name=record.name,
                function=record.funcName,
                line=record.lineno,
            ),
        ).opt(exception=record.exc_info).log(level, "{}", record.getMessage())


def setup_logging(verbose: bool = False) -> None:
    """Configure loguru and route library logging into it."""
    level = "DEBUG" if verbose else "INFO"
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
            "<cyan>{name}</cyan> | {message}"
        ),
    )
    for lib in _INTERCEPTED_LIBRARIES:
        lib_logger = logging.getLogger(lib)
        lib_logger.handlers = [InterceptHandler()]
        lib_logger.propagate = False
        lib_logger.setLevel(level)


def create_relays(configs: list[BotConfig], *, debug: bool = False) -> list[Relay]:
    """Build (and validate) one relay per config. Raises ConfigurationError before anything connects."""
    return [Relay(config, debug=debug) for config in configs]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="discord-irc",
        description="Relay messages between Discord and IRC channels",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to config file, YAML or JSON (default: config.yaml)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entrypoint."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    if not args.config.exists():
        logger.error("Config file not found: {}", args.config)
        sys.exit(1)

    try:
        configs = load_bot_configs(args.config)
        relays = create_relays(configs, debug=args.verbose)
    except ConfigurationError as exc:
        logger.error("Invalid configuration: {}", exc)
        sys.exit(1)

    logger.info("Config loaded from {}: {} relay(s)", args.config, len(relays))

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(_run(relays))


async def _run(relays: list[Relay]) -> None:
    """Connect every relay and wait; disconnect on cancellation."""
    for relay in relays:
        await relay.connect()

    try:
        while True:
            await asyncio.sleep(60)
    except asyncio.CancelledError:
        logger.info("Relay shutting down")
        for relay in relays:
            await relay.disconnect()
        raise


if __name__ == "__main__":
    main()
