"""Box-drawing and text layout primitives shared by the TUI models.

Views are plain strings carrying 256-color SGR sequences; rich does the
styling and the display-width measurement.
"""

from rich.cells import cell_len
from rich.color import Color, ColorSystem
from rich.style import Style
from rich.text import Text

ELLIPSIS = "…"

CORNERS = {
    "rounded": ("╭", "╮", "╰", "╯"),
    "square": ("┌", "┐", "└", "┘"),
}
HORIZONTAL = "─"
VERTICAL = "│"


def styled(text: str, color: int | None = None, bold: bool = False, reverse: bool = False) -> str:
    """Wrap text in the escapes for a 256-color foreground and optional attributes."""
    if not text:
        return text
    style = Style(
        color=Color.from_ansi(color) if color is not None else None,
        bold=bold or None,
        reverse=reverse or None,
    )
    return style.render(text, color_system=ColorSystem.EIGHT_BIT)


def strip_ansi(text: str) -> str:
    """Drop all styling from a rendered line."""
    if "\x1b" not in text:
        return text
    return Text.from_ansi(text).plain


def visible_width(text: str) -> int:
    """Display width of a rendered line, in terminal cells."""
    return cell_len(strip_ansi(text))


def block_width(lines: list[str]) -> int:
    return max((visible_width(line) for line in lines), default=0)


def truncate(text: str, width: int) -> str:
    """Cut plain text to width cells, marking the cut with an ellipsis."""
    if width <= 0:
        return ""
    if cell_len(text) <= width:
        return text
    out = ""
    for ch in text:
        if cell_len(out + ch) > width - 1:
            break
        out += ch
    return out + ELLIPSIS


def pad_right(text: str, width: int) -> str:
    """Pad a rendered line with spaces up to width cells."""
    gap = width - visible_width(text)
    return text + " " * gap if gap > 0 else text


def fit(text: str, width: int) -> str:
    """Make a rendered line exactly width cells wide."""
    if visible_width(text) > width:
        text = truncate(strip_ansi(text), width)
    return pad_right(text, width)


def spread(left: str, right: str, width: int, min_gap: int = 2) -> str:
    """Place right flush against the end of a width-cell line."""
    gap = width - visible_width(left) - visible_width(right)
    return left + " " * max(gap, min_gap) + right


def border_top(width: int, color: int, kind: str = "rounded", title: str | None = None,
               title_color: int | None = None) -> str:
    """Top border line; an optional title overwrites the border after the corner."""
    left, right = CORNERS[kind][0], CORNERS[kind][1]
    inner = width - 2
    if not title or cell_len(title) + 1 >= inner:
        return styled(left + HORIZONTAL * inner + right, color)
    rest = inner - 1 - cell_len(title)
    return (
        styled(left + HORIZONTAL, color)
        + styled(title, title_color if title_color is not None else color, bold=True)
        + styled(HORIZONTAL * rest + right, color)
    )


def border_bottom(width: int, color: int, kind: str = "rounded") -> str:
    left, right = CORNERS[kind][2], CORNERS[kind][3]
    return styled(left + HORIZONTAL * (width - 2) + right, color)


def border_separator(width: int, color: int) -> str:
    return styled("├" + HORIZONTAL * (width - 2) + "┤", color)


def border_row(content: str, width: int, color: int, padding: int = 1) -> str:
    """One framed content line, padded and clipped to the box."""
    inner = width - 2 - 2 * padding
    bar = styled(VERTICAL, color)
    return bar + " " * padding + fit(content, inner) + " " * padding + bar


def framed_box(lines: list[str], width: int, color: int, kind: str = "rounded",
               title: str | None = None, padding: int = 1, vertical_padding: int = 1) -> list[str]:
    """Frame content lines in a box of the given total width."""
    out = [border_top(width, color, kind, title)]
    blank = border_row("", width, color, padding)
    out.extend([blank] * vertical_padding)
    out.extend(border_row(line, width, color, padding) for line in lines)
    out.extend([blank] * vertical_padding)
    out.append(border_bottom(width, color, kind))
    return out


def join_horizontal(left: list[str], right: list[str], gap: int = 3) -> list[str]:
    """Place two blocks side by side, centering the shorter one vertically."""
    height = max(len(left), len(right))
    left_w = block_width(left)

    def centered(block: list[str]) -> list[str]:
        top = (height - len(block)) // 2
        return [""] * top + block + [""] * (height - len(block) - top)

    rows = []
    for lhs, rhs in zip(centered(left), centered(right)):
        rows.append(pad_right(lhs, left_w) + " " * gap + rhs)
    return rows


def center_lines(lines: list[str], width: int) -> list[str]:
    """Center each line of a block as a unit within width cells."""
    w = block_width(lines)
    left = max((width - w) // 2, 0)
    return [" " * left + line for line in lines]


def place_center(view: str, width: int, height: int) -> str:
    """Center a rendered block in a width x height area."""
    if not view or width <= 0 or height <= 0:
        return view
    lines = view.split("\n")
    lines = center_lines(lines, width)
    top = max((height - len(lines)) // 2, 0)
    return "\n" * top + "\n".join(lines)
