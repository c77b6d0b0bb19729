"""IRC client: pydle-based, flood-protected outbound queue, typed events."""

from __future__ import annotations

import asyncio
import contextlib
import random
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

import pydle
from loguru import logger

from discord_irc.events import Dispatcher, Invite, IrcError, IrcMessage, Registered

if TYPE_CHECKING:
    from discord_irc.gateway.router import IrcJoin

# Fixed flood protection and retry settings
FLOOD_DELAY = 0.5
RETRY_COUNT = 10
DEFAULT_PORT = 6667

# Backoff: min 2s, max 60s, jitter
_BACKOFF_MIN = 2
_BACKOFF_MAX = 60

# ircOptions keys, split between pydle.Client() and Client.connect()
CONNECT_OPTIONS = frozenset({"port", "tls", "tls_verify", "password", "source_address"})
CLIENT_OPTIONS = frozenset(
    {
        "username",
        "realname",
        "fallback_nicknames",
        "sasl_username",
        "sasl_password",
        "sasl_identity",
        "sasl_mechanism",
        "tls_client_cert",
        "tls_client_cert_key",
        "tls_client_cert_password",
    }
)


def split_irc_options(options: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split ircOptions into (client kwargs, connect kwargs). Unknown keys are dropped with a warning."""
    client_kwargs: dict[str, Any] = {}
    connect_kwargs: dict[str, Any] = {"port": DEFAULT_PORT}
    for key, value in options.items():
        if key in CONNECT_OPTIONS:
            connect_kwargs[key] = value
        elif key in CLIENT_OPTIONS:
            client_kwargs[key] = value
        else:
            logger.warning("Ignoring unknown IRC option {}", key)
    return client_kwargs, connect_kwargs


async def connect_with_retries(
    client: pydle.Client,
    hostname: str,
    *,
    attempts: int = RETRY_COUNT,
    **connect_kwargs: Any,
) -> None:
    """Connect with exponential backoff and jitter; give up after attempts failures.

    Reconnects after an established connection drops are left to pydle.
    """
    attempt = 0
    while True:
        try:
            await client.connect(hostname=hostname, **connect_kwargs)
            return
        except Exception as exc:
            attempt += 1
            if attempt >= attempts:
                logger.error("IRC connect to {} failed after {} attempts: {}", hostname, attempts, exc)
                raise
            delay = min(_BACKOFF_MAX, _BACKOFF_MIN * (2 ** (attempt - 1)))
            wait = delay * random.uniform(0.5, 1.5)
            logger.warning(
                "IRC connect failed (attempt {}): {}, retrying in {:.1f}s",
                attempt,
                exc,
                wait,
            )
            await asyncio.sleep(wait)


class IRCClient(pydle.Client):
    """Pydle IRC client that publishes channel traffic as events and throttles sends."""

    RECONNECT_MAX_ATTEMPTS = RETRY_COUNT

    def __init__(
        self,
        nickname: str,
        *,
        server: str,
        channels: Sequence[IrcJoin] = (),
        flood_delay: float = FLOOD_DELAY,
        **kwargs: Any,
    ) -> None:
        super().__init__(nickname, **kwargs)
        self.event_dispatcher = Dispatcher()
        self._server = server
        self._joins = tuple(channels)
        self._flood_delay = flood_delay
        self._outbound: asyncio.Queue[tuple[str, str]] = asyncio.Queue()
        self._consumer_task: asyncio.Task | None = None
        # Lines are only queued between registration and disconnect
        self._accepting = False

    async def on_connect(self) -> None:
        """Registration complete: start sending, announce, then join channels."""
        await super().on_connect()
        if self._consumer_task is None or self._consumer_task.done():
            self._consumer_task = asyncio.create_task(self._consume_outbound())
        self._accepting = True

        await self.event_dispatcher.dispatch("irc", Registered(self._server))

        for join in self._joins:
            try:
                await self.join(join.channel, join.password)
            except pydle.Error as exc:
                logger.warning("Could not join {}: {}", join.channel, exc)

    async def on_channel_message(self, target: str, by: str, message: str) -> None:
        await super().on_channel_message(target, by, message)
        if by == self.nickname:
            return
        await self.event_dispatcher.dispatch("irc", IrcMessage(by, target, message))

    async def on_notice(self, target: str, by: str, message: str) -> None:
        await super().on_notice(target, by, message)
        if by == self.nickname:
            return
        await self.event_dispatcher.dispatch("irc", IrcMessage(by, target, message, kind="notice"))

    async def on_ctcp_action(self, by: str, target: str, contents: str) -> None:
        """Handle /me action. pydle calls on_ctcp_<type> only when defined, so there is no super() to chain."""
        if by == self.nickname:
            return
        await self.event_dispatcher.dispatch("irc", IrcMessage(by, target, contents, kind="action"))

    async def on_invite(self, channel: str, by: str) -> None:
        await super().on_invite(channel, by)
        await self.event_dispatcher.dispatch("irc", Invite(channel, by))

    async def on_data_error(self, exception: BaseException) -> None:
        """Connection-level error; pydle disconnects and reconnects afterwards."""
        await self.event_dispatcher.dispatch("irc", IrcError(exception))
        await super().on_data_error(exception)

    async def on_disconnect(self, expected: bool) -> None:
        """Stop accepting lines and drop any backlog before pydle decides whether to reconnect."""
        self._accepting = False
        self._drop_backlog()
        await super().on_disconnect(expected)

    def say(self, target: str, text: str) -> None:
        """Queue one line for target. Returns immediately; sends are spaced by the flood delay.

        Lines arriving while the client is not registered are logged and dropped.
        """
        if not self._accepting:
            logger.info("IRC not connected, dropping message for {}", target)
            return
        self._outbound.put_nowait((target, text))

    def _drop_backlog(self) -> None:
        dropped = 0
        while not self._outbound.empty():
            self._outbound.get_nowait()
            dropped += 1
        if dropped:
            logger.info("Dropped {} unsent IRC line(s)", dropped)

    async def send_command(self, *args: str) -> None:
        """Send a raw IRC command, e.g. ("PRIVMSG", "NickServ", "IDENTIFY pw")."""
        command, *params = args
        await self.rawmsg(command, *params)

    async def _consume_outbound(self) -> None:
        """Drain the outbound queue one line at a time (flood protection)."""
        while True:
            try:
                target, text = await self._outbound.get()
                await self.message(target, text)
                await asyncio.sleep(self._flood_delay)
            except asyncio.CancelledError:
                break
            except Exception as exc:
                logger.exception("IRC send failed: {}", exc)

    async def disconnect(self, expected: bool = True) -> None:
        """Stop the outbound consumer and disconnect."""
        self._accepting = False
        if self._consumer_task:
            self._consumer_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._consumer_task
            self._consumer_task = None
        self._drop_backlog()
        await super().disconnect(expected)
