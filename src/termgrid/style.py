"""Cell styles.

A :class:`Style` is an opaque token as far as the grid, partitions and layout
code are concerned: they only ever copy and compare it.  Only the terminal
driver looks inside, through :meth:`Style.sgr`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

# int  ->  256-colour palette index
# str  ->  "#rrggbb" true colour
Color = int | str

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")

# Basic palette indices
BLACK = 0
RED = 1
GREEN = 2
YELLOW = 3
BLUE = 4
MAGENTA = 5
CYAN = 6
WHITE = 7

# Named colours used by the default styles
GHOST_WHITE = "#f8f8ff"
DARK_GRAY = "#a9a9a9"
WHITE_SMOKE = "#f5f5f5"
SPRING_GREEN = "#00ff7f"


def _color_params(color: Color, *, background: bool) -> str:
    if isinstance(color, int):
        if not 0 <= color <= 255:
            raise ValueError(f"palette index out of range: {color}")
        return f"{48 if background else 38};5;{color}"
    m = _HEX_RE.match(color)
    if m is None:
        raise ValueError(f"invalid colour: {color!r}")
    r, g, b = (int(part, 16) for part in m.groups())
    return f"{48 if background else 38};2;{r};{g};{b}"


@dataclass(frozen=True)
class Style:
    """Foreground/background colour plus text attributes."""

    fg: Color | None = None
    bg: Color | None = None
    bold: bool = False
    dim: bool = False
    italic: bool = False
    underline: bool = False
    reverse: bool = False

    def foreground(self, color: Color | None) -> Style:
        return replace(self, fg=color)

    def background(self, color: Color | None) -> Style:
        return replace(self, bg=color)

    def with_attributes(self, **attrs: bool) -> Style:
        return replace(self, **attrs)

    def sgr(self) -> str:
        """Return the SGR escape sequence selecting this style from a reset state."""
        params = ["0"]
        if self.bold:
            params.append("1")
        if self.dim:
            params.append("2")
        if self.italic:
            params.append("3")
        if self.underline:
            params.append("4")
        if self.reverse:
            params.append("7")
        if self.fg is not None:
            params.append(_color_params(self.fg, background=False))
        if self.bg is not None:
            params.append(_color_params(self.bg, background=True))
        return f"\x1b[{';'.join(params)}m"


DEFAULT_STYLE = Style()

LIGHT_MODE_STYLE = Style(fg=BLACK, bg=GHOST_WHITE)

DARK_MODE_STYLE = Style(fg=WHITE_SMOKE, bg=DARK_GRAY)

GREEN_STYLE = Style(fg=DARK_GRAY, bg=SPRING_GREEN)
