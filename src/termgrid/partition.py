"""Hierarchical partitions over one shared grid.

A :class:`VirtualTable` is a non-owning rectangular view of a
:class:`~termgrid.grid.Grid`.  It has its own local coordinate system and
forwards every write to the backing grid after translating it by its origin
and clipping it to its clip rectangle: its own rectangle intersected with
its parent's clip.  A shifted child never reaches outside its parent.

:class:`MainFrame` is the layout registry built on top: partitions are
registered and bound to drawables once, then resolved against a grid every
time the frame is drawn.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Sequence
from dataclasses import dataclass

from termgrid.canvas import Canvas, Drawable
from termgrid.cell import Cell, line_to_cells
from termgrid.errors import (
    AlreadyAssociatedError,
    AlreadyRegisteredError,
    NotAssociatedError,
    NotRegisteredError,
    check_not_none,
)
from termgrid.grid import Grid
from termgrid.style import DEFAULT_STYLE, Style

logger = logging.getLogger(__name__)

# Size sentinel: fill whatever space is left after the offset.
REMAINING = -1


@dataclass(frozen=True)
class PartitionSpec:
    """Where a child partition sits inside its parent.

    Offsets are measured from the parent's top/left edge, or from the
    bottom/right edge when the ``*_from_*`` flag is set.  Sizes are absolute,
    or "everything except this many cells before the far edge" when the flag
    is set, or :data:`REMAINING`.
    """

    x: int = 0
    x_from_right: bool = False
    y: int = 0
    y_from_bottom: bool = False
    width: int = REMAINING
    width_from_right: bool = False
    height: int = REMAINING
    height_from_bottom: bool = False

    @classmethod
    def build(
        cls,
        *,
        x: int = 0,
        x_from_right: bool = False,
        y: int = 0,
        y_from_bottom: bool = False,
        width: int | None = None,
        width_from_right: bool = False,
        height: int | None = None,
        height_from_bottom: bool = False,
    ) -> PartitionSpec:
        """Create a spec, taking the absolute value of every given quantity.

        Leaving *width* or *height* out means :data:`REMAINING`.
        """
        return cls(
            x=abs(x),
            x_from_right=x_from_right,
            y=abs(y),
            y_from_bottom=y_from_bottom,
            width=REMAINING if width is None else abs(width),
            width_from_right=width_from_right,
            height=REMAINING if height is None else abs(height),
            height_from_bottom=height_from_bottom,
        )

    def resolve(self, parent_width: int, parent_height: int) -> tuple[int, int, int, int]:
        """Return ``(x, y, width, height)`` local to a parent of the given size.

        The origin is computed first, then the size; the result is clamped so
        the rectangle always lies inside the parent.
        """
        x = _resolve_offset(self.x, self.x_from_right, parent_width)
        y = _resolve_offset(self.y, self.y_from_bottom, parent_height)
        width = _resolve_size(self.width, self.width_from_right, parent_width, x)
        height = _resolve_size(self.height, self.height_from_bottom, parent_height, y)
        return x, y, width, height


def _resolve_offset(offset: int, from_far_edge: bool, parent_size: int) -> int:
    value = parent_size - offset if from_far_edge else offset
    return min(max(value, 0), parent_size)


def _resolve_size(size: int, from_far_edge: bool, parent_size: int, origin: int) -> int:
    available = parent_size - origin
    if size < 0:
        value = available
    elif from_far_edge:
        value = available - size
    else:
        value = size
    return min(max(value, 0), available)


class VirtualTable:
    """A rectangular view into a grid, possibly nested in another view.

    ``x``/``y`` are the absolute origin on the backing grid; all drawing
    methods take coordinates local to the partition.
    """

    def __init__(
        self,
        grid: Grid,
        x: int,
        y: int,
        width: int,
        height: int,
        bg_style: Style = DEFAULT_STYLE,
        name: Hashable | None = None,
        parent: VirtualTable | None = None,
    ) -> None:
        check_not_none("grid", grid)

        self._grid = grid
        self._parent = parent
        self.x = x
        self.y = y
        self._width = width
        self._height = height
        self.bg_style = bg_style
        self.name = name

        self.children: list[VirtualTable] = []
        self.drawable: Drawable | None = None

    @classmethod
    def root(cls, grid: Grid, bg_style: Style = DEFAULT_STYLE) -> VirtualTable:
        """Return a partition covering the whole of *grid*."""
        check_not_none("grid", grid)
        return cls(grid, 0, 0, grid.width, grid.height, bg_style, name="root")

    # -- geometry -----------------------------------------------------------

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def allocate(
        self, spec: PartitionSpec, name: Hashable | None = None
    ) -> VirtualTable:
        """Carve a child partition out of this one and register it as a child.

        No overlap check is made against existing children.
        """
        check_not_none("spec", spec)

        local_x, local_y, width, height = spec.resolve(self._width, self._height)
        child = VirtualTable(
            self._grid,
            self.x + local_x,
            self.y + local_y,
            width,
            height,
            self.bg_style,
            name,
            parent=self,
        )
        self.children.append(child)

        logger.debug(
            "allocated partition %r at (%d, %d) size %dx%d",
            name, child.x, child.y, width, height,
        )
        return child

    def shift_horizontal(self, dx: int) -> None:
        """Move this partition and all its descendants *dx* columns."""
        self.x += dx
        for child in self.children:
            child.shift_horizontal(dx)

    def shift_vertical(self, dy: int) -> None:
        """Move this partition and all its descendants *dy* rows."""
        self.y += dy
        for child in self.children:
            child.shift_vertical(dy)

    def change_bg_style(self, style: Style) -> None:
        self.bg_style = style
        for child in self.children:
            child.change_bg_style(style)

    # -- drawable binding ---------------------------------------------------

    def associate(self, drawable: Drawable) -> None:
        check_not_none("drawable", drawable)
        if self.drawable is not None:
            raise AlreadyAssociatedError(self.name)
        self.drawable = drawable

    def refresh(self) -> None:
        """Draw the bound drawable, then refresh children in order."""
        if self.drawable is None:
            raise NotAssociatedError(self.name)

        self.drawable.draw(self, 0, 0)
        for child in self.children:
            child.refresh()

    # -- canvas -------------------------------------------------------------

    def clip(self) -> tuple[int, int, int, int]:
        """Return the absolute ``(left, top, right, bottom)`` writable area.

        ``right`` and ``bottom`` are exclusive; the area may be empty.
        """
        left, top = self.x, self.y
        right, bottom = self.x + self._width, self.y + self._height
        if self._parent is not None:
            p_left, p_top, p_right, p_bottom = self._parent.clip()
            left, top = max(left, p_left), max(top, p_top)
            right, bottom = min(right, p_right), min(bottom, p_bottom)
        return left, top, right, bottom

    def _visible(self, x: int, y: int) -> bool:
        if not (0 <= x < self._width and 0 <= y < self._height):
            return False
        left, top, right, bottom = self.clip()
        return left <= self.x + x < right and top <= self.y + y < bottom

    def cell_at(self, x: int, y: int) -> Cell | None:
        if not self._visible(x, y):
            return None
        return self._grid.cell_at(self.x + x, self.y + y)

    def write_at(self, x: int, y: int, cell: Cell | None) -> None:
        if not self._visible(x, y):
            return
        self._grid.write_at(self.x + x, self.y + y, cell)

    draw_cell_at = write_at

    def write_horizontal_run(
        self, x: int, y: int, cells: Sequence[Cell | None]
    ) -> int:
        """Clip *cells* to this partition, then write them on the grid.

        Same contract as :meth:`Grid.write_horizontal_run` in local
        coordinates.  Cells outside :meth:`clip` are dropped.
        """
        if not cells or y < 0 or y >= self._height or x >= self._width:
            return x

        end = min(x + len(cells), self._width)
        left, top, right, bottom = self.clip()
        row = self.y + y
        if top <= row < bottom:
            origin = self.x + x
            first = max(origin, left)
            last = min(self.x + end, right)
            if first < last:
                self._grid.write_horizontal_run(
                    first, row, cells[first - origin : last - origin]
                )
        return end

    def write_vertical_run(
        self, x: int, y: int, cells: Sequence[Cell | None]
    ) -> int:
        if not cells or x < 0 or x >= self._width or y >= self._height:
            return y

        end = min(y + len(cells), self._height)
        left, top, right, bottom = self.clip()
        col = self.x + x
        if left <= col < right:
            origin = self.y + y
            first = max(origin, top)
            last = min(self.y + end, bottom)
            if first < last:
                self._grid.write_vertical_run(
                    col, first, cells[first - origin : last - origin]
                )
        return end

    def write_line_at(
        self,
        x: int,
        y: int,
        line: str,
        style: Style = DEFAULT_STYLE,
        horizontal: bool = True,
    ) -> tuple[int, int]:
        cells = line_to_cells(line, style)
        if horizontal:
            return self.write_horizontal_run(x, y, cells), y
        return x, self.write_vertical_run(x, y, cells)

    def clear(self) -> None:
        """Empty every cell inside this partition's rectangle."""
        blank: list[Cell | None] = [None] * self._width
        for row in range(self._height):
            self.write_horizontal_run(0, row, blank)

    def lines(self) -> list[str]:
        """Render the partition's rectangle as strings, like :meth:`Grid.lines`."""
        return [
            "".join(
                " " if (cell := self.cell_at(col, row)) is None else cell.char
                for col in range(self._width)
            )
            for row in range(self._height)
        ]

    def __repr__(self) -> str:
        return (
            f"VirtualTable(name={self.name!r}, x={self.x}, y={self.y}, "
            f"width={self._width}, height={self._height})"
        )


# ---------------------------------------------------------------------------
# MainFrame
# ---------------------------------------------------------------------------


@dataclass
class _Registration:
    spec: PartitionSpec
    parent: Hashable | None
    drawable: Drawable | None = None


class MainFrame:
    """Named partition layout, resolved against a canvas on every draw.

    Partitions are registered with a :class:`PartitionSpec` (optionally
    nested under a previously registered parent) and bound to exactly one
    drawable each.
    """

    def __init__(self, bg_style: Style = DEFAULT_STYLE) -> None:
        self.bg_style = bg_style
        self._registry: dict[Hashable, _Registration] = {}

    def register(
        self,
        partition_id: Hashable,
        spec: PartitionSpec,
        parent: Hashable | None = None,
    ) -> None:
        check_not_none("spec", spec)
        if partition_id in self._registry:
            raise AlreadyRegisteredError(partition_id)
        if parent is not None and parent not in self._registry:
            raise NotRegisteredError(parent)
        self._registry[partition_id] = _Registration(spec, parent)

    def associate(self, partition_id: Hashable, drawable: Drawable) -> None:
        check_not_none("drawable", drawable)
        registration = self._registry.get(partition_id)
        if registration is None:
            raise NotRegisteredError(partition_id)
        if registration.drawable is not None:
            raise AlreadyAssociatedError(partition_id)
        registration.drawable = drawable

    def partition_ids(self) -> list[Hashable]:
        return list(self._registry)

    def apply(self, target: Grid | VirtualTable) -> dict[Hashable, VirtualTable]:
        """Resolve every registered partition against *target*.

        Fails before allocating anything if a partition has no drawable.
        """
        _, partitions = self._resolve(target)
        return partitions

    def _resolve(
        self, target: Grid | VirtualTable
    ) -> tuple[VirtualTable, dict[Hashable, VirtualTable]]:
        check_not_none("target", target)
        for partition_id, registration in self._registry.items():
            if registration.drawable is None:
                raise NotAssociatedError(partition_id)

        root = _detached_root(target, self.bg_style)
        partitions: dict[Hashable, VirtualTable] = {}
        for partition_id, registration in self._registry.items():
            parent = root if registration.parent is None else partitions[registration.parent]
            child = parent.allocate(registration.spec, partition_id)
            child.associate(registration.drawable)
            partitions[partition_id] = child
        return root, partitions

    def draw(self, canvas: Canvas, x: int, y: int) -> tuple[int, int]:
        """Lay the partitions out over *canvas* and refresh each top-level one."""
        if not isinstance(canvas, (Grid, VirtualTable)):
            raise TypeError(f"cannot partition a {type(canvas).__name__}")

        root, _ = self._resolve(canvas)
        for child in root.children:
            child.refresh()
        return x, y + canvas.height


def _detached_root(target: Grid | VirtualTable, bg_style: Style) -> VirtualTable:
    if isinstance(target, Grid):
        return VirtualTable.root(target, bg_style)
    return VirtualTable(
        target.grid, target.x, target.y, target.width, target.height,
        target.bg_style, name=target.name, parent=target,
    )
