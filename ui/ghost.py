"""The ghost mascot drawn next to the main menu."""

from .render import pad_right, styled
from .theme import Theme, ansi_color

GHOST_WIDTH = 28
GHOST_HEIGHT = 15

_EYES_OPEN = "( o ) ( o )"
_EYES_SHUT = "( - ) ( - )"

_GHOST = [
    "      .-\"\"\"\"\"\"\"-.",
    "    .'           '.",
    "   /   .-.   .-.   \\",
    "  |   {eyes}   |",
    "  |    '-'   '-'    |",
    "  |                 |",
    "  |       .-.       |",
    "  |      (   )      |",
    "  |       '-'       |",
    "  |                 |",
    "  |                 |",
    "  |                 |",
    "  |                 |",
    "  |                 |",
    "  '" + ".,/\\" * 4 + ".'",
]

_ZZZ_FRAMES = [
    ["   ", "   ", "z  "],
    ["   ", " z ", "z  "],
    ["  Z", " z ", "z  "],
    ["  Z", " z ", "   "],
    ["  Z", "   ", "   "],
    ["   ", "   ", "   "],
]


def ghost_lines(sleeping: bool = False) -> list[str]:
    """Unstyled ghost art."""
    eyes = _EYES_SHUT if sleeping else _EYES_OPEN
    return [line.replace("{eyes}", eyes) for line in _GHOST]


class ZzzAnimation:
    """Drifting z's shown above a sleeping ghost."""

    def __init__(self):
        self.frame = 0

    @property
    def total_frames(self) -> int:
        return len(_ZZZ_FRAMES)

    def tick(self):
        self.frame = (self.frame + 1) % len(_ZZZ_FRAMES)

    def reset(self):
        self.frame = 0

    def lines(self) -> list[str]:
        return list(_ZZZ_FRAMES[self.frame])

    def view(self) -> str:
        return "\n".join(self.lines())

    def view_colored(self, color: int) -> str:
        return "\n".join(ansi_color(color) + line + "\033[0m" for line in self.lines())


def render_ghost(theme: Theme, sleeping: bool = False, bob: int = 0,
                 zzz: ZzzAnimation | None = None) -> list[str]:
    """Styled ghost, GHOST_WIDTH cells wide, shifted down by bob lines."""
    art = [styled(line, theme.primary) for line in ghost_lines(sleeping)]
    if sleeping and zzz is not None:
        # The z's float just right of the head
        for i, z in enumerate(zzz.lines()):
            art[i] = pad_right(art[i], 22) + styled(z, theme.dim)
    block = [""] * bob + art
    return [pad_right(line, GHOST_WIDTH) for line in block]
