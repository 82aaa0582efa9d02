"""A single styled character."""

from __future__ import annotations

from dataclasses import dataclass

from termgrid.style import DEFAULT_STYLE, Style


@dataclass(frozen=True, slots=True)
class Cell:
    """One character and the style it is painted with.

    A grid location holds either a ``Cell`` or ``None`` (background).
    """

    char: str
    style: Style = DEFAULT_STYLE


def line_to_cells(line: str, style: Style = DEFAULT_STYLE) -> list[Cell]:
    """Convert *line* into one cell per character, all sharing *style*."""
    return [Cell(ch, style) for ch in line]
