"""Drawable that paints one page of a section in a single style."""

from __future__ import annotations

from termgrid.canvas import Canvas
from termgrid.cell import line_to_cells
from termgrid.components.sections import Sectioner
from termgrid.style import DEFAULT_STYLE, Style


class ColoredElement:
    """Render *section* into the space left on the canvas and draw page *page*.

    Rows are written with horizontal runs, so anything outside the canvas is
    clipped.  ``y`` advances by the number of rows drawn; ``x`` ends one past
    the last row's final column.
    """

    def __init__(
        self, section: Sectioner, style: Style = DEFAULT_STYLE, page: int = 0
    ) -> None:
        self.section = section
        self.style = style
        self.page = page

    def draw(self, canvas: Canvas, x: int, y: int) -> tuple[int, int]:
        width = canvas.width - max(x, 0)
        height = canvas.height - max(y, 0)
        if width <= 0 or height <= 0:
            return x, y

        pages = self.section.apply_render(width, height)
        if not 0 <= self.page < len(pages):
            return x, y

        end_x = x
        rows = pages[self.page].rows
        for offset, row in enumerate(rows):
            end_x = canvas.write_horizontal_run(
                x, y + offset, line_to_cells(row, self.style)
            )
        return end_x, y + len(rows)

    def page_count(self, width: int, height: int) -> int:
        return len(self.section.apply_render(width, height))
