"""termgrid: terminal rendering engine with partitioned grids and text layout."""

# Cells and styles
from termgrid.canvas import Canvas, Drawable
from termgrid.cell import Cell, line_to_cells

# Components (re-exported from components package)
from termgrid.components import (
    ColoredElement,
    Format,
    MultilineText,
    Sectioner,
    TextBox,
    Title,
    ZeroElement,
)
from termgrid.config import ScreenConfig

# Errors
from termgrid.errors import (
    AlreadyAssociatedError,
    AlreadyRegisteredError,
    DrawError,
    InvalidParameterError,
    LayoutError,
    LineCountError,
    NotAssociatedError,
    NotRegisteredError,
    PartitionError,
    SplitError,
    SuffixTooLongError,
    TermgridError,
)

# Input events
from termgrid.events import Event, Key, KeyEvent, OtherEvent, ResizeEvent, decode_sequence
from termgrid.grid import Grid
from termgrid.input import InputSplitter

# Text layout
from termgrid.layout import (
    HELLIP,
    INDENT_LEVEL,
    Page,
    TextSplit,
    calculate_number_of_lines,
    layout_paragraph,
    layout_paragraphs,
    split_in_equal_sized_lines,
)

# Partitions
from termgrid.partition import REMAINING, MainFrame, PartitionSpec, VirtualTable

# Screen loop
from termgrid.screen import Screen, ScreenState
from termgrid.style import (
    DARK_MODE_STYLE,
    DEFAULT_STYLE,
    GREEN_STYLE,
    LIGHT_MODE_STYLE,
    Style,
)
from termgrid.terminal import AnsiTerminal, Terminal

__all__ = [
    # Cells and styles
    "Canvas",
    "Cell",
    "DARK_MODE_STYLE",
    "DEFAULT_STYLE",
    "Drawable",
    "GREEN_STYLE",
    "Grid",
    "LIGHT_MODE_STYLE",
    "Style",
    "line_to_cells",
    # Components
    "ColoredElement",
    "Format",
    "MultilineText",
    "Sectioner",
    "TextBox",
    "Title",
    "ZeroElement",
    # Errors
    "AlreadyAssociatedError",
    "AlreadyRegisteredError",
    "DrawError",
    "InvalidParameterError",
    "LayoutError",
    "LineCountError",
    "NotAssociatedError",
    "NotRegisteredError",
    "PartitionError",
    "SplitError",
    "SuffixTooLongError",
    "TermgridError",
    # Events and input
    "Event",
    "InputSplitter",
    "Key",
    "KeyEvent",
    "OtherEvent",
    "ResizeEvent",
    "decode_sequence",
    # Text layout
    "HELLIP",
    "INDENT_LEVEL",
    "Page",
    "TextSplit",
    "calculate_number_of_lines",
    "layout_paragraph",
    "layout_paragraphs",
    "split_in_equal_sized_lines",
    # Partitions
    "MainFrame",
    "PartitionSpec",
    "REMAINING",
    "VirtualTable",
    # Screen
    "AnsiTerminal",
    "Screen",
    "ScreenConfig",
    "ScreenState",
    "Terminal",
]
