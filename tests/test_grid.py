"""Tests for termgrid.grid.Grid."""

from __future__ import annotations

import pytest

from termgrid.cell import Cell, line_to_cells
from termgrid.errors import InvalidParameterError
from termgrid.grid import Grid
from termgrid.style import GREEN_STYLE


def cells(text: str) -> list[Cell]:
    return line_to_cells(text)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_dimensions(self) -> None:
        grid = Grid(4, 2)
        assert (grid.width, grid.height) == (4, 2)

    def test_starts_empty(self) -> None:
        grid = Grid(3, 2)
        assert list(grid.cells()) == [None] * 6

    def test_zero_size_is_allowed(self) -> None:
        grid = Grid(0, 0)
        assert grid.lines() == []

    @pytest.mark.parametrize("width,height", [(-1, 2), (2, -1)])
    def test_negative_size_rejected(self, width: int, height: int) -> None:
        with pytest.raises(InvalidParameterError):
            Grid(width, height)

    def test_invalid_parameter_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            Grid(-1, 0)

    def test_from_text_pads_short_rows(self) -> None:
        grid = Grid.from_text("ab\nabcd\n")
        assert (grid.width, grid.height) == (4, 2)
        assert grid.cell_at(3, 0) is None
        assert grid.lines() == ["ab  ", "abcd"]


# ---------------------------------------------------------------------------
# Single cells
# ---------------------------------------------------------------------------


class TestCells:
    def test_write_then_read(self) -> None:
        grid = Grid(3, 3)
        grid.write_at(1, 2, Cell("x", GREEN_STYLE))
        assert grid.cell_at(1, 2) == Cell("x", GREEN_STYLE)

    def test_out_of_bounds_read_is_none(self) -> None:
        grid = Grid(3, 3)
        assert grid.cell_at(-1, 0) is None
        assert grid.cell_at(0, 3) is None

    def test_out_of_bounds_write_is_dropped(self) -> None:
        grid = Grid(2, 2)
        grid.write_at(2, 0, Cell("x"))
        grid.write_at(0, -1, Cell("x"))
        assert list(grid.cells()) == [None] * 4

    def test_bounds_helpers(self) -> None:
        grid = Grid(2, 3)
        assert grid.in_x_bounds(1) and not grid.in_x_bounds(2)
        assert grid.in_y_bounds(2) and not grid.in_y_bounds(-1)


# ---------------------------------------------------------------------------
# Runs
# ---------------------------------------------------------------------------


class TestHorizontalRun:
    def test_fits(self) -> None:
        grid = Grid(5, 1)
        end = grid.write_horizontal_run(1, 0, cells("abc"))
        assert end == 4
        assert grid.lines() == [" abc "]

    def test_clips_right_edge(self) -> None:
        grid = Grid(4, 1)
        end = grid.write_horizontal_run(2, 0, cells("abcdef"))
        assert end == 4
        assert grid.lines() == ["  ab"]

    def test_clips_left_edge(self) -> None:
        grid = Grid(4, 1)
        end = grid.write_horizontal_run(-2, 0, cells("abcd"))
        assert end == 2
        assert grid.lines() == ["cd  "]

    def test_row_out_of_bounds_is_noop(self) -> None:
        grid = Grid(4, 1)
        assert grid.write_horizontal_run(1, 1, cells("ab")) == 1
        assert grid.lines() == ["    "]

    def test_start_past_right_edge_is_noop(self) -> None:
        grid = Grid(4, 1)
        assert grid.write_horizontal_run(4, 0, cells("ab")) == 4
        assert grid.lines() == ["    "]

    def test_empty_run_is_noop(self) -> None:
        grid = Grid(4, 1)
        assert grid.write_horizontal_run(2, 0, []) == 2

    def test_none_cells_erase(self) -> None:
        grid = Grid.from_text("abcd")
        grid.write_horizontal_run(1, 0, [None, None])
        assert grid.lines() == ["a  d"]


class TestVerticalRun:
    def test_fits(self) -> None:
        grid = Grid(1, 4)
        end = grid.write_vertical_run(0, 1, cells("ab"))
        assert end == 3
        assert grid.lines() == [" ", "a", "b", " "]

    def test_clips_both_edges(self) -> None:
        grid = Grid(1, 3)
        end = grid.write_vertical_run(0, -1, cells("abcde"))
        assert end == 3
        assert grid.lines() == ["b", "c", "d"]

    def test_column_out_of_bounds_is_noop(self) -> None:
        grid = Grid(1, 3)
        assert grid.write_vertical_run(-1, 0, cells("ab")) == 0
        assert list(grid.cells()) == [None] * 3


class TestWriteLine:
    def test_horizontal(self) -> None:
        grid = Grid(6, 2)
        assert grid.write_line_at(1, 1, "hey", GREEN_STYLE) == (4, 1)
        assert grid.cell_at(1, 1) == Cell("h", GREEN_STYLE)

    def test_vertical(self) -> None:
        grid = Grid(2, 4)
        assert grid.write_line_at(1, 0, "hey", horizontal=False) == (1, 3)
        assert grid.lines() == [" h", " e", " y", "  "]


class TestWriteTable:
    def test_copies_with_clipping(self) -> None:
        grid = Grid(4, 3)
        other = Grid.from_text("ab\ncd")
        grid.write_table_at(other, 3, 2)
        assert grid.lines() == ["    ", "    ", "   a"]

    def test_copy_inside(self) -> None:
        grid = Grid(4, 3)
        end = grid.write_table_at(Grid.from_text("ab\ncd"), 1, 0)
        assert end == (3, 2)
        assert grid.lines() == [" ab ", " cd ", "    "]


# ---------------------------------------------------------------------------
# Resizing
# ---------------------------------------------------------------------------


class TestResize:
    def test_grow_width_keeps_content(self) -> None:
        grid = Grid.from_text("ab")
        grid.resize_width(4)
        assert grid.width == 4
        assert grid.full_table()[0] == [Cell("a"), Cell("b"), None, None]

    def test_shrink_width_drops_columns(self) -> None:
        grid = Grid.from_text("abcd")
        grid.resize_width(2)
        assert grid.lines() == ["ab"]

    def test_grow_height_rows_are_full_width(self) -> None:
        grid = Grid(3, 1)
        grid.resize_height(3)
        table = grid.full_table()
        assert len(table) == 3
        assert all(len(row) == 3 for row in table)

    def test_new_rows_are_writable(self) -> None:
        grid = Grid(3, 1)
        grid.resize_height(2)
        grid.write_at(2, 1, Cell("z"))
        assert grid.lines() == ["   ", "  z"]

    def test_resize_both(self) -> None:
        grid = Grid(2, 2)
        grid.resize(5, 1)
        assert (grid.width, grid.height) == (5, 1)

    @pytest.mark.parametrize(
        "text,width,height",
        [
            ("abc\ndef\nghi", 5, 4),
            ("abc\ndef\nghi", 2, 1),
            ("abc\ndef\nghi", 6, 2),
            ("abc\ndef\nghi", 1, 5),
            ("ab", 0, 3),
            ("ab", 3, 0),
        ],
    )
    def test_resize_width_then_height_is_rectangular(
        self, text: str, width: int, height: int
    ) -> None:
        before = Grid.from_text(text).lines()
        grid = Grid.from_text(text)
        grid.resize_width(width)
        grid.resize_height(height)

        expected = [
            (before[row][:width] if row < len(before) else "").ljust(width)
            for row in range(height)
        ]
        assert grid.lines() == expected

    def test_negative_resize_rejected(self) -> None:
        grid = Grid(2, 2)
        with pytest.raises(InvalidParameterError):
            grid.resize_height(-1)

    def test_clear(self) -> None:
        grid = Grid.from_text("ab\ncd")
        grid.clear()
        assert list(grid.cells()) == [None] * 4


class TestSnapshots:
    def test_rows_are_snapshots(self) -> None:
        grid = Grid.from_text("ab")
        rows = list(grid.rows())
        grid.write_at(0, 0, Cell("z"))
        assert rows[0][0] == Cell("a")

    def test_full_table_is_a_copy(self) -> None:
        grid = Grid.from_text("ab")
        table = grid.full_table()
        table[0][0] = None
        assert grid.cell_at(0, 0) == Cell("a")
