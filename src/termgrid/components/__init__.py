"""Drawable components and text sections."""

from termgrid.components.colored_element import ColoredElement
from termgrid.components.format import Format
from termgrid.components.sections import (
    TITLE_MIN_WIDTH,
    MultilineText,
    Sectioner,
    Title,
)
from termgrid.components.spacer import ZeroElement
from termgrid.components.text_box import TAB_WIDTH, TextBox

__all__ = [
    "ColoredElement",
    "Format",
    "MultilineText",
    "Sectioner",
    "TAB_WIDTH",
    "TITLE_MIN_WIDTH",
    "TextBox",
    "Title",
    "ZeroElement",
]
