"""The canonical 2D buffer of optional styled characters.

Every coordinate-taking operation is bounds-safe: reads outside the grid
return ``None`` and writes outside the grid are dropped.  Only construction
and resizing reject their arguments (negative dimensions).

A ``Grid`` owns one re-entrant lock.  Each public method takes it, so a grid
can be shared between tasks and threads as-is; callers that need several
operations to appear atomic (e.g. copying the whole grid to a terminal) hold
:attr:`Grid.lock` around the sequence.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator, Sequence

from termgrid.cell import Cell, line_to_cells
from termgrid.errors import check_non_negative
from termgrid.style import DEFAULT_STYLE, Style


class Grid:
    """A ``width x height`` table of ``Cell | None``."""

    def __init__(self, width: int, height: int) -> None:
        check_non_negative("width", width)
        check_non_negative("height", height)

        self._width = width
        self._height = height
        self._table: list[list[Cell | None]] = [
            [None] * width for _ in range(height)
        ]
        self._lock = threading.RLock()

    @classmethod
    def from_text(cls, text: str, style: Style = DEFAULT_STYLE) -> Grid:
        """Build a grid holding *text*, one row per line.

        The grid is as wide as the longest line; shorter rows are padded with
        empty cells.
        """
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()

        width = max((len(line) for line in lines), default=0)
        grid = cls(width, len(lines))
        for y, line in enumerate(lines):
            grid._table[y][: len(line)] = line_to_cells(line, style)
        return grid

    # -- properties ---------------------------------------------------------

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def width(self) -> int:
        with self._lock:
            return self._width

    @property
    def height(self) -> int:
        with self._lock:
            return self._height

    def in_x_bounds(self, x: int) -> bool:
        with self._lock:
            return 0 <= x < self._width

    def in_y_bounds(self, y: int) -> bool:
        with self._lock:
            return 0 <= y < self._height

    # -- single cells -------------------------------------------------------

    def cell_at(self, x: int, y: int) -> Cell | None:
        with self._lock:
            if x < 0 or x >= self._width or y < 0 or y >= self._height:
                return None
            return self._table[y][x]

    def write_at(self, x: int, y: int, cell: Cell | None) -> None:
        with self._lock:
            if x < 0 or x >= self._width or y < 0 or y >= self._height:
                return
            self._table[y][x] = cell

    # -- runs ---------------------------------------------------------------

    def write_horizontal_run(
        self, x: int, y: int, cells: Sequence[Cell | None]
    ) -> int:
        """Write *cells* left to right starting at ``(x, y)``.

        If *y* is outside the grid, or *x* is at or past the right edge,
        nothing is written and *x* is returned unchanged.  Otherwise leading
        cells left of column 0 and trailing cells past the right edge are
        dropped, and the returned column is one past the last cell of the
        run, capped at the grid width.
        """
        with self._lock:
            if not cells or y < 0 or y >= self._height or x >= self._width:
                return x

            start = max(x, 0)
            visible = cells[start - x : self._width - x]
            self._table[y][start : start + len(visible)] = visible

            return min(x + len(cells), self._width)

    def write_vertical_run(
        self, x: int, y: int, cells: Sequence[Cell | None]
    ) -> int:
        """Write *cells* top to bottom starting at ``(x, y)``.

        Mirror of :meth:`write_horizontal_run` with the axes swapped; the
        returned value is the updated row.
        """
        with self._lock:
            if not cells or x < 0 or x >= self._width or y >= self._height:
                return y

            start = max(y, 0)
            visible = cells[start - y : self._height - y]
            for offset, cell in enumerate(visible):
                self._table[start + offset][x] = cell

            return min(y + len(cells), self._height)

    def write_line_at(
        self,
        x: int,
        y: int,
        line: str,
        style: Style = DEFAULT_STYLE,
        horizontal: bool = True,
    ) -> tuple[int, int]:
        """Write *line* as a run of cells; return the advanced ``(x, y)``."""
        cells = line_to_cells(line, style)
        if horizontal:
            return self.write_horizontal_run(x, y, cells), y
        return x, self.write_vertical_run(x, y, cells)

    def write_table_at(self, other: Grid, x: int, y: int) -> tuple[int, int]:
        """Copy *other* into this grid with its top-left corner at ``(x, y)``.

        Parts of *other* falling outside this grid are dropped.  Returns the
        coordinates one past the last copied column and row.
        """
        source = other.full_table()

        with self._lock:
            copied_rows = 0
            copied_cols = 0
            for offset_y, row in enumerate(source):
                target_y = y + offset_y
                if target_y >= self._height:
                    break
                copied_rows = offset_y + 1
                if target_y < 0:
                    continue

                copied_cols = 0
                for offset_x, cell in enumerate(row):
                    target_x = x + offset_x
                    if target_x >= self._width:
                        break
                    copied_cols = offset_x + 1
                    if target_x >= 0:
                        self._table[target_y][target_x] = cell

            return x + copied_cols, y + copied_rows

    # -- whole grid ---------------------------------------------------------

    def clear(self) -> None:
        """Reset every cell to empty."""
        with self._lock:
            for row in self._table:
                row[:] = [None] * self._width

    def resize_width(self, new_width: int) -> None:
        check_non_negative("new_width", new_width)

        with self._lock:
            if new_width < self._width:
                for row in self._table:
                    del row[new_width:]
            elif new_width > self._width:
                extra = new_width - self._width
                for row in self._table:
                    row.extend([None] * extra)
            self._width = new_width

    def resize_height(self, new_height: int) -> None:
        check_non_negative("new_height", new_height)

        with self._lock:
            if new_height < self._height:
                del self._table[new_height:]
            elif new_height > self._height:
                self._table.extend(
                    [None] * self._width
                    for _ in range(new_height - self._height)
                )
            self._height = new_height

    def resize(self, new_width: int, new_height: int) -> None:
        """Resize both axes as one atomic step."""
        check_non_negative("new_width", new_width)
        check_non_negative("new_height", new_height)

        with self._lock:
            self.resize_width(new_width)
            self.resize_height(new_height)

    # -- traversal ----------------------------------------------------------

    def rows(self) -> Iterator[tuple[Cell | None, ...]]:
        """Yield a snapshot of each row, top to bottom."""
        with self._lock:
            snapshot = [tuple(row) for row in self._table]
        yield from snapshot

    def cells(self) -> Iterator[Cell | None]:
        """Yield every cell in row-major order."""
        for row in self.rows():
            yield from row

    def full_table(self) -> list[list[Cell | None]]:
        with self._lock:
            return [list(row) for row in self._table]

    def lines(self) -> list[str]:
        """Render each row as a string; empty cells become a space."""
        return [
            "".join(" " if cell is None else cell.char for cell in row)
            for row in self.rows()
        ]

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"
