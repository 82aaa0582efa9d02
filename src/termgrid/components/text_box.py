"""Free-form text drawn character by character."""

from __future__ import annotations

from termgrid.canvas import Canvas, bg_style_of
from termgrid.cell import Cell
from termgrid.style import DEFAULT_STYLE, Style

TAB_WIDTH = 3


class TextBox:
    """Raw text with no wrapping.

    ``\\n`` moves to the starting column of the next row; ``\\t`` writes
    :data:`TAB_WIDTH` spaces in the canvas background style.  ``draw``
    returns the column after the last character and the row below the last
    line.
    """

    def __init__(self, text: str = "", style: Style = DEFAULT_STYLE) -> None:
        self.text = text
        self.style = style

    def change_text(self, text: str) -> None:
        self.text = text

    def change_style(self, style: Style) -> None:
        self.style = style

    def draw(self, canvas: Canvas, x: int, y: int) -> tuple[int, int]:
        bg_style = bg_style_of(canvas, DEFAULT_STYLE)
        start_x = x

        for ch in self.text:
            match ch:
                case "\n":
                    x = start_x
                    y += 1
                case "\t":
                    for _ in range(TAB_WIDTH):
                        canvas.write_at(x, y, Cell(" ", bg_style))
                        x += 1
                case _:
                    canvas.write_at(x, y, Cell(ch, self.style))
                    x += 1

        if not self.text:
            return x, y
        return x, y + 1
