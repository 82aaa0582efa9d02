"""Text sections: content that renders itself into pages of a given size."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from termgrid.errors import LayoutError, check_positive
from termgrid.layout import (
    HELLIP,
    SPACE,
    Page,
    calculate_number_of_lines,
    fit_string,
    layout_paragraphs,
    replace_suffix,
    split_in_equal_sized_lines,
)


class Sectioner(Protocol):
    """A block of text that can be laid out at any size."""

    def apply_render(self, width: int, height: int) -> list[Page]:
        """Lay the content out into pages of at most ``width x height``."""
        ...

    def get_raw_content(self) -> list[list[str]]:
        """Return the content as paragraphs of fields, unmodified."""
        ...


class MultilineText:
    """Paragraphs of words, wrapped and truncated to fit."""

    def __init__(self, lines: Sequence[Sequence[str]] | None = None) -> None:
        self._lines: list[list[str]] = [[]]
        if lines is not None:
            self.from_text_block(lines)

    @classmethod
    def from_text(cls, text: str) -> MultilineText:
        """One paragraph per line of *text*, split into fields on whitespace."""
        return cls([line.split() for line in text.split("\n")])

    def from_text_block(self, lines: Sequence[Sequence[str]]) -> None:
        if not lines:
            self._lines = [[]]
            return
        self._lines = [list(line) for line in lines]

    def get_raw_content(self) -> list[list[str]]:
        return self._lines

    def apply_render(self, width: int, height: int) -> list[Page]:
        return layout_paragraphs(self._lines, width, height)


# Decoration around every title line
ASTERISKS = "***"
ASTERISKS_LEN = len(ASTERISKS)
TITLE_MIN_WIDTH = 2 * (ASTERISKS_LEN + 1)


def _decorate(line: str) -> str:
    return f"{ASTERISKS}{SPACE}{line}{SPACE}{ASTERISKS}"


class Title:
    """Header of an application: a title and optional subtitle, centred.

    Long titles are spread over several balanced lines, each framed by
    ``***``; a title containing a word too long for the width is cut and
    ends with an ellipsis.
    """

    def __init__(self, title: str, subtitle: str = "") -> None:
        self.title = title
        self.subtitle = subtitle

    def set_subtitle(self, subtitle: str) -> None:
        """Replace the subtitle; an empty string removes it."""
        self.subtitle = subtitle

    @property
    def full_title(self) -> str:
        if not self.subtitle:
            return self.title
        return f"{self.title} - {self.subtitle}"

    def get_raw_content(self) -> list[list[str]]:
        return [[self.full_title]]

    def apply_render(self, width: int, height: int) -> list[Page]:
        check_positive("width", width)
        check_positive("height", height)

        lines = self._fit_lines(self.full_title, width)

        pages: list[Page] = []
        for top in range(0, len(lines), height):
            rows = []
            for line in lines[top : top + height]:
                start = max((width - len(line)) // 2, 0)
                rows.append((SPACE * start + line)[:width])
            pages.append(Page.from_rows(rows, width))
        return pages or [Page.from_rows([], width)]

    def _fit_lines(self, full_title: str, width: int) -> list[str]:
        usable = width - TITLE_MIN_WIDTH
        try:
            return _generate_lines(full_title, usable)
        except LayoutError:
            pass

        cut = replace_suffix(fit_string(full_title, usable), HELLIP)
        return [_decorate(cut)]


def _generate_lines(full_title: str, width: int) -> list[str]:
    if width < 1:
        raise LayoutError(f"no room for a title in width {width}")

    fields = full_title.split()
    line_count = calculate_number_of_lines(fields, width)
    split = split_in_equal_sized_lines(fields, width, line_count)
    return [_decorate(line) for line in split.lines()]
