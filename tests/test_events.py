"""Test IRC event types and the dispatcher."""

import pytest

from discord_irc.events import Dispatcher, Invite, IrcMessage, Registered


class Collector:
    def __init__(self, accept=True):
        self.accept = accept
        self.events = []

    def accept_event(self, source, evt):
        return self.accept

    async def push_event(self, source, evt):
        self.events.append((source, evt))


class Exploder:
    def accept_event(self, source, evt):
        return True

    async def push_event(self, source, evt):
        raise RuntimeError("boom")


class TestEvents:
    """IRC events are plain dataclasses."""

    def test_irc_message_default_kind(self):
        evt = IrcMessage("alice", "#project", "hi")

        assert evt.kind == "message"

    def test_equality(self):
        assert IrcMessage("alice", "#project", "hi", kind="action") == IrcMessage(
            "alice", "#project", "hi", kind="action"
        )
        assert Invite("#staff", "op") != Invite("#staff", "someone")


class TestDispatcher:
    """Async dispatch to registered targets."""

    @pytest.mark.asyncio
    async def test_only_accepting_targets_receive(self):
        # Arrange
        dispatcher = Dispatcher()
        yes, no = Collector(), Collector(accept=False)
        dispatcher.register(yes)
        dispatcher.register(no)
        evt = Registered("irc.example.org")

        # Act
        await dispatcher.dispatch("irc", evt)

        # Assert
        assert yes.events == [("irc", evt)]
        assert no.events == []

    @pytest.mark.asyncio
    async def test_failing_target_does_not_stop_others(self):
        dispatcher = Dispatcher()
        collector = Collector()
        dispatcher.register(Exploder())
        dispatcher.register(collector)

        await dispatcher.dispatch("irc", Registered("irc.example.org"))

        assert len(collector.events) == 1

    @pytest.mark.asyncio
    async def test_unregister(self):
        dispatcher = Dispatcher()
        collector = Collector()
        dispatcher.register(collector)
        dispatcher.unregister(collector)
        dispatcher.unregister(collector)  # second time is a no-op

        await dispatcher.dispatch("irc", Registered("irc.example.org"))

        assert collector.events == []
