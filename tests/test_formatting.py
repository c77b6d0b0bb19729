"""Test Discord <-> IRC text conversion."""

from types import SimpleNamespace

import pytest

from discord_irc.adapters.disc import DiscordDirectory
from discord_irc.formatting import (
    NICK_COLORS,
    colorize_nick,
    guild_display_name,
    is_command_message,
    nick_color_index,
    parse_text,
    resolve_mentions,
    with_author,
    wrap,
)
from tests.fakes import FakeGuild, make_member, make_message, make_user


def _no_channels(channel_id):
    return None


class TestDisplayName:
    """Guild nickname, falling back to username."""

    def test_nickname_preferred(self):
        user = make_user(123, "robert")
        guild = FakeGuild([make_member(123, "robert", nick="Bob")])

        assert guild_display_name(user, guild) == "Bob"

    def test_username_without_nickname(self):
        user = make_user(123, "robert")
        guild = FakeGuild([make_member(123, "robert")])

        assert guild_display_name(user, guild) == "robert"

    def test_username_when_not_member(self):
        assert guild_display_name(make_user(123, "robert"), FakeGuild()) == "robert"

    def test_username_without_guild(self):
        assert guild_display_name(make_user(123, "robert"), None) == "robert"


class TestParseText:
    """Discord content -> IRC text."""

    def test_plain_text_unchanged(self):
        msg = make_message("hello there, world!", author=make_user(2, "ann"))

        assert parse_text(msg, _no_channels) == "hello there, world!"

    @pytest.mark.parametrize("token", ["<@123>", "<@!123>", "<@&123>"])
    def test_user_mention_replaced_with_nickname(self, token):
        # Arrange
        bob = make_user(123, "robert")
        guild = FakeGuild([make_member(123, "robert", nick="Bob")])
        msg = make_message(f"hi {token}!", author=make_user(2, "ann"), guild=guild, mentions=[bob])

        # Act
        text = parse_text(msg, _no_channels)

        # Assert
        assert text == "hi @Bob!"

    def test_repeated_mentions_all_replaced(self):
        bob = make_user(123, "robert")
        msg = make_message("<@123> <@!123>", author=make_user(2, "ann"), guild=FakeGuild(), mentions=[bob])

        assert parse_text(msg, _no_channels) == "@robert @robert"

    @pytest.mark.parametrize("newline", ["\n", "\r\n", "\r"])
    def test_newlines_collapse_to_single_space(self, newline):
        msg = make_message(f"line one{newline}line two", author=make_user(2, "ann"))

        text = parse_text(msg, _no_channels)

        assert text == "line one line two"
        assert "\n" not in text and "\r" not in text

    def test_channel_reference(self):
        channels = {456: SimpleNamespace(name="general")}
        msg = make_message("see <#456>", author=make_user(2, "ann"))

        assert parse_text(msg, channels.get) == "see #general"

    def test_unknown_channel_left_alone(self):
        msg = make_message("see <#999>", author=make_user(2, "ann"))

        assert parse_text(msg, _no_channels) == "see <#999>"

    def test_custom_emote_keeps_shortcode(self):
        msg = make_message("nice <:pogchamp:1234567890> one", author=make_user(2, "ann"))

        assert parse_text(msg, _no_channels) == "nice :pogchamp: one"

    def test_animated_emote(self):
        msg = make_message("<a:party:42>", author=make_user(2, "ann"))

        assert parse_text(msg, _no_channels) == ":party:"

    def test_empty_content(self):
        msg = make_message("", author=make_user(2, "ann"))

        assert parse_text(msg, _no_channels) == ""


class TestCommandMessage:
    """First character decides command messages."""

    def test_command_character(self):
        assert is_command_message("!help", ["!", "."])
        assert is_command_message(".seen bob", ["!", "."])

    def test_not_a_command(self):
        assert not is_command_message("hello !help", ["!"])
        assert not is_command_message("!help", [])

    def test_empty_text(self):
        assert not is_command_message("", ["!"])


class TestNickColors:
    """Deterministic username colors."""

    def test_color_index_example(self):
        # 'A' = 65, len 3 -> 68 % 12 = 8
        assert nick_color_index("Ann") == 8
        assert NICK_COLORS[8] == "orange"

    def test_colorize_wraps_with_code_and_reset(self):
        assert colorize_nick("Ann") == "\x0307Ann\x0f"

    def test_same_name_same_color(self):
        assert colorize_nick("someone") == colorize_nick("someone")

    def test_twelve_colors(self):
        assert len(NICK_COLORS) == 12

    def test_wrap_unknown_color(self):
        assert wrap("not_a_color", "text") == "text"

    def test_wrap_known_color(self):
        assert wrap("light_blue", "x") == "\x0312x\x0f"


class TestResolveMentions:
    """IRC @names -> Discord mentions."""

    def _directory(self, users):
        return DiscordDirectory(SimpleNamespace(users=users))

    def test_member_nickname(self):
        # Arrange
        guild = FakeGuild([make_member(10, "robert", nick="Bob")])

        # Act
        text = resolve_mentions("hey @Bob, look", guild, self._directory([]))

        # Assert
        assert text == "hey <@10>, look"

    def test_username_without_nickname(self):
        guild = FakeGuild([make_member(11, "alice")])
        directory = self._directory([make_user(11, "alice")])

        assert resolve_mentions("@alice hi", guild, directory) == "<@11> hi"

    def test_username_with_different_nickname_left_alone(self):
        guild = FakeGuild([make_member(12, "carol", nick="Caz")])
        directory = self._directory([make_user(12, "carol")])

        assert resolve_mentions("@carol hi", guild, directory) == "@carol hi"

    def test_user_not_in_guild_left_alone(self):
        directory = self._directory([make_user(13, "dave")])

        assert resolve_mentions("@dave hi", FakeGuild(), directory) == "@dave hi"

    def test_unknown_name_left_alone(self):
        assert resolve_mentions("@nobody there", FakeGuild(), self._directory([])) == "@nobody there"

    def test_no_guild(self):
        assert resolve_mentions("@Bob", None, self._directory([])) == "@Bob"

    def test_with_author(self):
        assert with_author("alice", "hello") == "**<alice>** hello"
