"""IRC color control codes and deterministic nick colors."""

from __future__ import annotations

COLOR = "\x03"
RESET = "\x0F"

# mIRC color numbers
CODES: dict[str, str] = {
    "white": f"{COLOR}00",
    "black": f"{COLOR}01",
    "dark_blue": f"{COLOR}02",
    "dark_green": f"{COLOR}03",
    "light_red": f"{COLOR}04",
    "dark_red": f"{COLOR}05",
    "magenta": f"{COLOR}06",
    "orange": f"{COLOR}07",
    "yellow": f"{COLOR}08",
    "light_green": f"{COLOR}09",
    "cyan": f"{COLOR}10",
    "light_cyan": f"{COLOR}11",
    "light_blue": f"{COLOR}12",
    "light_magenta": f"{COLOR}13",
    "gray": f"{COLOR}14",
    "light_gray": f"{COLOR}15",
    "reset": RESET,
}

NICK_COLORS: tuple[str, ...] = (
    "light_blue",
    "dark_blue",
    "light_red",
    "dark_red",
    "light_green",
    "dark_green",
    "magenta",
    "light_magenta",
    "orange",
    "yellow",
    "cyan",
    "light_cyan",
)


def wrap(color: str, text: str, reset_color: str = "reset") -> str:
    """Wrap text in an IRC color code. Unknown colors leave text unchanged."""
    code = CODES.get(color)
    if code is None:
        return text
    return f"{code}{text}{CODES.get(reset_color, RESET)}"


def nick_color_index(nickname: str) -> int:
    """(code point of first char + length) mod table size. Same name, same color."""
    return (ord(nickname[0]) + len(nickname)) % len(NICK_COLORS)


def colorize_nick(nickname: str) -> str:
    if not nickname:
        return nickname
    return wrap(NICK_COLORS[nick_color_index(nickname)], nickname)
