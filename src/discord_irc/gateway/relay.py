"""Relay: Discord <-> IRC message forwarding for one bot config."""

from __future__ import annotations

import asyncio
import contextlib
import functools
from collections.abc import Coroutine, Mapping
from typing import Any

import discord
from loguru import logger

from discord_irc.adapters.disc import DiscordDirectory, create_discord_client, find_text_channel
from discord_irc.adapters.irc import IRCClient, connect_with_retries, split_irc_options
from discord_irc.config.schema import BotConfig
from discord_irc.events import Invite, IrcError, IrcMessage, Registered
from discord_irc.formatting import (
    colorize_nick,
    guild_display_name,
    is_command_message,
    parse_text,
    resolve_mentions,
    with_author,
)
from discord_irc.gateway.router import ChannelRouter


def _wrap_irc_text(evt: IrcMessage) -> str:
    """Notices are italic, actions emphasized."""
    if evt.kind == "notice":
        return f"*{evt.text}*"
    if evt.kind == "action":
        return f"_{evt.text}_"
    return evt.text


class Relay:
    """Forwards messages between mapped Discord and IRC channels.

    Construction validates config and never touches the network; connect()
    starts both clients in the background.
    """

    def __init__(
        self,
        config: BotConfig | Mapping[str, Any],
        *,
        discord_client: discord.Client | None = None,
        debug: bool = False,
    ) -> None:
        cfg = config if isinstance(config, BotConfig) else BotConfig(config)
        cfg.validate()

        self.server = cfg.server
        self.nickname = cfg.nickname
        self.discord_token = cfg.discord_token
        self.irc_options = cfg.irc_options
        self.command_characters = cfg.command_characters
        self.irc_nick_color = cfg.irc_nick_color
        self.auto_send_commands = cfg.auto_send_commands
        self.router = ChannelRouter(cfg.channel_mapping)

        self._debug = debug
        self.discord = discord_client if discord_client is not None else create_discord_client(debug=debug)
        self.directory = DiscordDirectory(self.discord)
        self.irc_client: IRCClient | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def channel_mapping(self) -> Mapping[str, str]:
        return self.router.forward

    @property
    def inverted_mapping(self) -> Mapping[str, str]:
        return self.router.inverted

    def _create_irc_client(self, client_kwargs: dict[str, Any]) -> IRCClient:
        kwargs: dict[str, Any] = {"username": self.nickname, "realname": self.nickname}
        kwargs.update(client_kwargs)
        return IRCClient(
            self.nickname,
            server=self.server,
            channels=self.router.irc_joins,
            **kwargs,
        )

    def _spawn(self, coro: Coroutine[Any, Any, Any], what: str) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(functools.partial(self._on_task_done, what))

    def _on_task_done(self, what: str, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.opt(exception=exc).error("{} stopped: {}", what, exc)

    async def connect(self) -> None:
        """Start Discord login and IRC connection in the background; returns immediately."""
        logger.debug("Connecting to IRC and Discord")
        client_kwargs, connect_kwargs = split_irc_options(self.irc_options)
        self.irc_client = self._create_irc_client(client_kwargs)
        self.attach_listeners()

        self._spawn(self.discord.start(self.discord_token), "Discord client")
        self._spawn(
            connect_with_retries(self.irc_client, self.server, **connect_kwargs),
            "IRC connection",
        )

    async def disconnect(self) -> None:
        """Close both clients and cancel background tasks."""
        if self.irc_client is not None:
            self.irc_client.event_dispatcher.unregister(self)
            if self.irc_client.connected:
                await self.irc_client.disconnect()
        await self.discord.close()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        logger.info("Relay for {} on {} stopped", self.nickname, self.server)

    def attach_listeners(self) -> None:
        """Wire Discord events through discord.py and IRC events through the client dispatcher."""
        client = self.discord

        @client.event
        async def on_ready() -> None:
            logger.info("Connected to Discord")

        @client.event
        async def on_error(event_method: str, *args: Any, **kwargs: Any) -> None:
            logger.exception("Received error event from Discord in {}", event_method)

        @client.event
        async def on_disconnect() -> None:
            logger.warning("Received warn event from Discord: gateway disconnected")

        @client.event
        async def on_message(message: discord.Message) -> None:
            self.send_to_irc(message)

        if self._debug:

            @client.event
            async def on_socket_raw_receive(msg: str) -> None:
                logger.debug("Received debug event from Discord: {}", msg)

        if self.irc_client is not None:
            self.irc_client.event_dispatcher.register(self)

    def accept_event(self, source: str, evt: object) -> bool:
        """Accept IRC lifecycle and channel events."""
        return isinstance(evt, (Registered, IrcError, IrcMessage, Invite))

    async def push_event(self, source: str, evt: object) -> None:
        if isinstance(evt, Registered):
            await self._on_irc_registered(evt)
        elif isinstance(evt, IrcError):
            logger.error("Received error event from IRC: {}", evt.error)
        elif isinstance(evt, IrcMessage):
            await self.send_to_discord(evt.author, evt.channel, _wrap_irc_text(evt))
        elif isinstance(evt, Invite):
            await self._on_irc_invite(evt)

    async def _on_irc_registered(self, evt: Registered) -> None:
        logger.info("Connected to IRC")
        logger.debug("Registered event: {}", evt)
        if self.irc_client is None:
            return
        for command in self.auto_send_commands:
            try:
                await self.irc_client.send_command(*command)
            except Exception as exc:
                logger.exception("Auto-send command {} failed: {}", command[0], exc)

    async def _on_irc_invite(self, evt: Invite) -> None:
        logger.debug("Received invite: {} from {}", evt.channel, evt.by)
        join = self.router.get_irc_join(evt.channel)
        if join is None or not self.router.is_bridged_irc_channel(evt.channel):
            logger.debug("Channel not found in config, not joining: {}", evt.channel)
            return
        if self.irc_client is None:
            return
        await self.irc_client.join(join.channel, join.password)
        logger.debug("Joining channel: {}", join.channel)

    def send_to_irc(self, message: discord.Message) -> None:
        """Discord message -> one IRC line (plus one per attachment), or a command prelude + raw text."""
        author = message.author
        own = self.discord.user
        if own is not None and author.id == own.id:
            return

        name = getattr(message.channel, "name", None)
        if not name:
            return
        channel_name = f"#{name}"
        irc_channel = self.router.get_irc_channel(channel_name)
        logger.debug("Channel mapping {} -> {}", channel_name, irc_channel)
        if not irc_channel:
            return
        if self.irc_client is None:
            logger.warning("IRC client not started; dropping message for {}", irc_channel)
            return

        nickname = guild_display_name(author, message.guild)
        text = parse_text(message, self.discord.get_channel)
        display_username = colorize_nick(nickname) if self.irc_nick_color else nickname

        if is_command_message(text, self.command_characters):
            prelude = f"Command sent from Discord by {nickname}:"
            self.irc_client.say(irc_channel, prelude)
            self.irc_client.say(irc_channel, text)
            return

        if text:
            line = f"<{display_username}> {text}"
            logger.debug("Sending message to IRC {}: {}", irc_channel, line)
            self.irc_client.say(irc_channel, line)

        for attachment in message.attachments or ():
            url_line = f"<{display_username}> {attachment.url}"
            logger.debug("Sending attachment URL to IRC {}: {}", irc_channel, url_line)
            self.irc_client.say(irc_channel, url_line)

    async def send_to_discord(self, author: str, channel: str, text: str) -> None:
        """IRC line -> Discord message with bold author and resolved @mentions."""
        discord_channel_name = self.router.get_discord_channel(channel)
        if not discord_channel_name:
            return

        discord_channel = find_text_channel(self.discord, discord_channel_name[1:])
        if discord_channel is None:
            logger.info("Tried to send a message to a channel the bot isn't in: {}", discord_channel_name)
            return

        with_mentions = resolve_mentions(text, discord_channel.guild, self.directory)
        content = with_author(author, with_mentions)
        logger.debug("Sending message to Discord {} -> {}: {}", channel, discord_channel_name, content)
        try:
            await discord_channel.send(content)
        except discord.HTTPException as exc:
            logger.error("Failed to send message to Discord {}: {}", discord_channel_name, exc)
