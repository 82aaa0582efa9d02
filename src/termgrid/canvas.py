"""Protocols shared by everything that draws.

``Canvas`` is the write surface (a :class:`~termgrid.grid.Grid` or a
:class:`~termgrid.partition.VirtualTable`); ``Drawable`` is anything that can
paint itself onto one.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from termgrid.cell import Cell
from termgrid.style import Style


class Canvas(Protocol):
    """A rectangular, bounds-safe cell surface with local coordinates."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def cell_at(self, x: int, y: int) -> Cell | None: ...

    def write_at(self, x: int, y: int, cell: Cell | None) -> None: ...

    def write_horizontal_run(
        self, x: int, y: int, cells: Sequence[Cell | None]
    ) -> int: ...

    def write_vertical_run(
        self, x: int, y: int, cells: Sequence[Cell | None]
    ) -> int: ...

    def write_line_at(
        self,
        x: int,
        y: int,
        line: str,
        style: Style = ...,
        horizontal: bool = True,
    ) -> tuple[int, int]: ...


@runtime_checkable
class Drawable(Protocol):
    """A unit that paints itself onto a canvas.

    ``draw`` starts at ``(x, y)`` and returns the coordinates advanced past
    the space it consumed.  Positions outside the canvas are clipped, never
    reported; exceptions are reserved for structural problems.
    """

    def draw(self, canvas: Canvas, x: int, y: int) -> tuple[int, int]: ...


def bg_style_of(canvas: Canvas, default: Style) -> Style:
    """Return the canvas background style, or *default* if it has none."""
    return getattr(canvas, "bg_style", default)
