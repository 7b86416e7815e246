"""Input events delivered to the TUI models."""

from dataclasses import dataclass


class Key:
    """Names of the non-printable keys."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "pgup"
    PAGE_DOWN = "pgdown"
    ENTER = "enter"
    ESC = "esc"
    TAB = "tab"
    SHIFT_TAB = "shift+tab"
    BACKSPACE = "backspace"
    DELETE = "delete"
    SPACE = "space"
    CTRL_C = "ctrl+c"
    RUNE = "rune"


@dataclass(frozen=True)
class KeyMsg:
    """A single key press; printable characters arrive as RUNE with text."""

    key: str
    text: str = ""

    @classmethod
    def rune(cls, ch: str) -> "KeyMsg":
        if ch == " ":
            return cls(Key.SPACE, " ")
        return cls(Key.RUNE, ch)

    @property
    def char(self) -> str:
        """The typed character, or "" for named keys other than space."""
        return self.text

    def __str__(self) -> str:
        return self.text if self.key == Key.RUNE else self.key


@dataclass(frozen=True)
class WindowSizeMsg:
    """Terminal size in cells."""

    width: int
    height: int


_CSI_FINALS = {
    "A": Key.UP,
    "B": Key.DOWN,
    "C": Key.RIGHT,
    "D": Key.LEFT,
    "H": Key.HOME,
    "F": Key.END,
    "Z": Key.SHIFT_TAB,
}

_CSI_TILDES = {
    "1": Key.HOME,
    "7": Key.HOME,
    "3": Key.DELETE,
    "4": Key.END,
    "8": Key.END,
    "5": Key.PAGE_UP,
    "6": Key.PAGE_DOWN,
}


def _parse_escape(data: str, i: int) -> tuple[KeyMsg | None, int]:
    """Decode an escape sequence starting at data[i] == ESC."""
    if i + 1 >= len(data):
        return KeyMsg(Key.ESC), i + 1

    lead = data[i + 1]
    if lead not in "[O":
        # ESC followed by an ordinary key: report the ESC alone
        return KeyMsg(Key.ESC), i + 1

    j = i + 2
    params = ""
    while j < len(data) and not ("@" <= data[j] <= "~"):
        params += data[j]
        j += 1
    if j >= len(data):
        return None, len(data)

    final = data[j]
    if final == "~":
        name = _CSI_TILDES.get(params.split(";")[0])
    else:
        name = _CSI_FINALS.get(final)
    return (KeyMsg(name) if name else None), j + 1


def parse_keys(data: str) -> list[KeyMsg]:
    """Split a chunk read from the terminal into key events."""
    keys = []
    i = 0
    while i < len(data):
        ch = data[i]
        if ch == "\x1b":
            msg, i = _parse_escape(data, i)
            if msg is not None:
                keys.append(msg)
            continue

        if ch == "\r":
            keys.append(KeyMsg(Key.ENTER))
            if i + 1 < len(data) and data[i + 1] == "\n":
                i += 1
        elif ch == "\n":
            keys.append(KeyMsg(Key.ENTER))
        elif ch == "\t":
            keys.append(KeyMsg(Key.TAB))
        elif ch in ("\x7f", "\x08"):
            keys.append(KeyMsg(Key.BACKSPACE))
        elif ch == "\x03":
            keys.append(KeyMsg(Key.CTRL_C))
        elif ch == " ":
            keys.append(KeyMsg(Key.SPACE, " "))
        elif ord(ch) < 0x20:
            keys.append(KeyMsg("ctrl+" + chr(ord(ch) + 0x60)))
        else:
            keys.append(KeyMsg(Key.RUNE, ch))
        i += 1
    return keys


# Same physical keys on the Russian ЙЦУКЕН layout
_LAYOUT_MAP = dict(zip(
    "йцукенгшщзхъфывапролджэячсмитьбюЙЦУКЕНГШЩЗХЪФЫВАПРОЛДЖЭЯЧСМИТЬБЮ",
    "qwertyuiop[]asdfghjkl;'zxcvbnm,.QWERTYUIOP{}ASDFGHJKL:\"ZXCVBNM<>",
))


def translate_rune(ch: str) -> str:
    """Map a letter typed on a non-Latin layout to its QWERTY key."""
    return _LAYOUT_MAP.get(ch, ch)


def shortcut(msg: KeyMsg) -> str:
    """The shortcut letter of a key press, or "" for named keys."""
    if msg.key != Key.RUNE:
        return ""
    return translate_rune(msg.text)
