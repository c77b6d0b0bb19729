"""IRC-side event types and dispatcher.

pydle delivers protocol callbacks on the IRC client; the client turns them
into these events and the relay subscribes to them through a Dispatcher.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from loguru import logger

MessageKind = Literal["message", "notice", "action"]


@dataclass
class Registered:
    """IRC registration completed (RPL_WELCOME received)."""

    server: str


@dataclass
class IrcError:
    """Error reported by the IRC connection."""

    error: object


@dataclass
class IrcMessage:
    """Channel message, notice or CTCP ACTION."""

    author: str
    channel: str
    text: str
    kind: MessageKind = "message"


@dataclass
class Invite:
    """We were invited to a channel."""

    channel: str
    by: str


class EventTarget(Protocol):
    """Subscriber interface: accept_event + push_event."""

    def accept_event(self, source: str, evt: object) -> bool:
        """Return True if this target wants the event."""
        ...

    async def push_event(self, source: str, evt: object) -> None:
        """Handle the event."""
        ...


class Dispatcher:
    """Async event dispatcher. A failing target is logged and does not stop delivery to the rest."""

    def __init__(self) -> None:
        self._targets: list[EventTarget] = []

    def register(self, target: EventTarget) -> None:
        self._targets.append(target)

    def unregister(self, target: EventTarget) -> None:
        if target in self._targets:
            self._targets.remove(target)

    async def dispatch(self, source: str, evt: object) -> None:
        """Deliver event to every target that accepts it, in registration order."""
        for target in list(self._targets):
            try:
                if target.accept_event(source, evt):
                    await target.push_event(source, evt)
            except Exception as exc:
                logger.exception("Failed to pass event to target {}: {}", target, exc)
