"""Text layout: word wrap, ellipsis truncation, line balancing, pagination.

Input text is pre-tokenised into *fields* (words that never contain
whitespace), grouped into *paragraphs*.  Widths are counted in characters.

The pipeline for one paragraph is:

1. Work out how many lines a greedy wrap needs (:func:`calculate_number_of_lines`).
   A field wider than the line forces a hard truncation of the paragraph.
2. Fill lines greedily.  Lines after the first are laid out against the width
   minus :data:`INDENT_LEVEL` and indented by that much.  Whatever does not
   fit on one line is carried to the next one, until the line budget runs
   out; the last budgeted line then keeps room for :data:`HELLIP` and ends
   with it.
3. If nothing was truncated, re-distribute the fields over the same number
   of lines so their lengths are as equal as possible
   (:func:`split_in_equal_sized_lines`).  If that is impossible the greedy
   lines are kept.

Paragraphs are then packed onto pages (:func:`layout_paragraphs`); a
paragraph is never split across two pages.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from termgrid.errors import (
    LayoutError,
    LineCountError,
    SplitError,
    SuffixTooLongError,
    check_positive,
)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

HELLIP = "..."
HELLIP_LEN = len(HELLIP)

SPACE = " "

# Spaces between two fields on the same line.
FIELD_SPACING = 1

# Hanging indent of every line after the first in a paragraph.
INDENT_LEVEL = 3


# ---------------------------------------------------------------------------
# String helpers
# ---------------------------------------------------------------------------


def line_length(fields: Sequence[str]) -> int:
    """Length of *fields* joined with :data:`FIELD_SPACING` spaces."""
    if not fields:
        return 0
    return sum(len(field) for field in fields) + FIELD_SPACING * (len(fields) - 1)


def join_fields(fields: Iterable[str]) -> str:
    return (SPACE * FIELD_SPACING).join(fields)


def replace_suffix(text: str, suffix: str) -> str:
    """Overwrite the last ``len(suffix)`` characters of *text* with *suffix*."""
    if len(suffix) > len(text):
        raise SuffixTooLongError(text, suffix)
    return text[: len(text) - len(suffix)] + suffix


def fit_string(text: str, width: int) -> str:
    """Cut or right-pad *text* to exactly *width* characters."""
    if width <= 0:
        return ""
    return text[:width].ljust(width)


def truncate_with_ellipsis(text: str, width: int) -> str:
    """Return *text* if it fits in *width*, else its head ending in ``...``.

    Widths too small for the ellipsis get a plain cut.
    """
    if len(text) <= width:
        return text
    if width < HELLIP_LEN:
        return text[: max(width, 0)]
    return replace_suffix(text[:width], HELLIP)


# ---------------------------------------------------------------------------
# Line counting and balancing
# ---------------------------------------------------------------------------


def calculate_number_of_lines(fields: Sequence[str], width: int) -> int:
    """Return how many lines a greedy word wrap of *fields* at *width* needs.

    Raises :class:`LineCountError` if a single field is wider than *width*,
    since no wrap can then honour the width.
    """
    for field in fields:
        if len(field) > width:
            raise LineCountError(field, width)

    count = 0
    current = 0
    for field in fields:
        if count and current + FIELD_SPACING + len(field) <= width:
            current += FIELD_SPACING + len(field)
        else:
            count += 1
            current = len(field)
    return count


class TextSplit:
    """Fields arranged in lines no wider than ``width``.

    *max_lines* bounds the number of lines (``None`` means unbounded).
    """

    def __init__(self, width: int, max_lines: int | None = None) -> None:
        check_positive("width", width)
        if max_lines is not None:
            check_positive("max_lines", max_lines)

        self.width = width
        self.max_lines = max_lines
        self._lines: list[list[str]] = []

    @classmethod
    def from_lines(
        cls, lines: Sequence[Sequence[str]], width: int, max_lines: int | None = None
    ) -> TextSplit:
        ts = cls(width, max_lines)
        ts._lines = [list(line) for line in lines]
        return ts

    @property
    def height(self) -> int:
        return len(self._lines)

    def insert_word(self, word: str) -> bool:
        """Append *word* to the last line, or start a new line if needed.

        Returns ``False`` (and changes nothing) when the word is wider than
        the split or the line budget is used up.
        """
        if len(word) > self.width:
            return False

        if self._lines:
            last = self._lines[-1]
            if line_length(last) + FIELD_SPACING + len(word) <= self.width:
                last.append(word)
                return True

        if self.max_lines is not None and len(self._lines) >= self.max_lines:
            return False

        self._lines.append([word])
        return True

    def insert_words(self, words: Iterable[str]) -> int:
        """Insert words in order; return how many were inserted before the first failure."""
        inserted = 0
        for word in words:
            if not self.insert_word(word):
                break
            inserted += 1
        return inserted

    def first_line(self) -> list[str]:
        return list(self._lines[0]) if self._lines else []

    def fields(self) -> list[list[str]]:
        return [list(line) for line in self._lines]

    def lines(self) -> list[str]:
        return [join_fields(line) for line in self._lines]

    def __repr__(self) -> str:
        return f"TextSplit(width={self.width}, lines={self.lines()!r})"


def split_in_equal_sized_lines(
    fields: Sequence[str], width: int, line_count: int | None = None
) -> TextSplit:
    """Distribute *fields* over *line_count* lines of nearly equal length.

    Unlike a greedy fill this spreads the text evenly: among all ways of
    cutting the field list into *line_count* lines no wider than *width*, the
    one with the smallest sum of squared line lengths wins (for a fixed
    total this is the most even split).  Ties go to the split with longer
    leading lines.  When *line_count* is ``None`` the greedy line count is
    used.

    Raises :class:`LineCountError` if a field is wider than *width*, and
    :class:`SplitError` if the fields cannot fill exactly *line_count* lines.
    """
    check_positive("width", width)
    fields = list(fields)

    if line_count is None:
        line_count = calculate_number_of_lines(fields, width)
    else:
        for field in fields:
            if len(field) > width:
                raise LineCountError(field, width)

    if not fields and line_count == 0:
        return TextSplit(width)
    if line_count < 1:
        raise SplitError(f"line count must be positive, got {line_count}")
    if line_count > len(fields):
        raise SplitError(
            f"cannot split {len(fields)} fields into {line_count} lines"
        )

    n = len(fields)
    prefix = [0]
    for field in fields:
        prefix.append(prefix[-1] + len(field))

    def span(i: int, j: int) -> int:
        return prefix[j] - prefix[i] + FIELD_SPACING * (j - i - 1)

    # cost[k][j]: best cost of laying out fields[:j] on k lines
    cost = [[math.inf] * (n + 1) for _ in range(line_count + 1)]
    start = [[0] * (n + 1) for _ in range(line_count + 1)]
    cost[0][0] = 0

    for k in range(1, line_count + 1):
        for j in range(k, n - (line_count - k) + 1):
            for i in range(j - 1, k - 2, -1):
                length = span(i, j)
                if length > width:
                    break
                candidate = cost[k - 1][i] + length * length
                if candidate < cost[k][j]:
                    cost[k][j] = candidate
                    start[k][j] = i

    if cost[line_count][n] == math.inf:
        raise SplitError(
            f"fields do not fit in {line_count} lines of width {width}"
        )

    lines: list[list[str]] = []
    j = n
    for k in range(line_count, 0, -1):
        i = start[k][j]
        lines.append(fields[i:j])
        j = i
    lines.reverse()

    return TextSplit.from_lines(lines, width, line_count)


# ---------------------------------------------------------------------------
# Paragraphs and pages
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParagraphLayout:
    """The lines of one paragraph, indentation included."""

    lines: list[str]
    truncated: bool

    @property
    def height(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class Page:
    """A rectangular block of characters: every row has the same length."""

    rows: tuple[str, ...]
    width: int

    @classmethod
    def from_rows(cls, rows: Iterable[str], width: int) -> Page:
        return cls(tuple(row.ljust(width) for row in rows), width)

    @property
    def height(self) -> int:
        return len(self.rows)

    def runes(self) -> list[list[str]]:
        return [list(row) for row in self.rows]


def _take_greedy(fields: Sequence[str], width: int, reserve: int = 0) -> list[str]:
    taken: list[str] = []
    for field in fields:
        if line_length([*taken, field]) + reserve > width:
            break
        taken.append(field)
    return taken


def layout_paragraph(
    fields: Sequence[str], width: int, max_lines: int
) -> ParagraphLayout:
    """Lay one paragraph out in at most *max_lines* lines of *width* characters."""
    check_positive("width", width)
    check_positive("max_lines", max_lines)

    fields = list(fields)
    if not fields:
        return ParagraphLayout([""], truncated=False)

    # Continuation lines need room for the indent plus an ellipsis.
    budget = max_lines if width - INDENT_LEVEL >= HELLIP_LEN else 1

    lines: list[str] = []
    remaining = fields
    truncated = False

    while remaining:
        usable = width if not lines else width - INDENT_LEVEL
        is_last = len(lines) + 1 == budget

        try:
            needed = calculate_number_of_lines(remaining, usable)
        except LineCountError:
            lines.append(truncate_with_ellipsis("".join(remaining), usable))
            truncated = True
            break

        if needed == 1:
            halves = split_in_equal_sized_lines(remaining, usable, 1)
            lines.append(join_fields(halves.first_line()))
            break

        if is_last:
            taken = _take_greedy(remaining, usable, reserve=HELLIP_LEN)
            if taken:
                lines.append(join_fields(taken) + HELLIP)
            else:
                lines.append(truncate_with_ellipsis("".join(remaining), usable))
            truncated = True
            break

        taken = _take_greedy(remaining, usable)
        lines.append(join_fields(taken))
        remaining = remaining[len(taken):]

    if not truncated and len(lines) > 1:
        try:
            balanced = split_in_equal_sized_lines(
                fields, width - INDENT_LEVEL, len(lines)
            )
        except LayoutError:
            pass
        else:
            lines = balanced.lines()

    indent = SPACE * INDENT_LEVEL
    lines = lines[:1] + [indent + line for line in lines[1:]]
    return ParagraphLayout(lines, truncated)


def layout_paragraphs(
    paragraphs: Iterable[Sequence[str]], width: int, height: int
) -> list[Page]:
    """Lay out *paragraphs* and pack them onto pages of ``width x height``.

    Each paragraph gets at most *height* lines, so it always fits on a single
    page; a paragraph that does not fit on the current page starts a new one.
    At least one page is always returned.
    """
    check_positive("width", width)
    check_positive("height", height)

    pages: list[Page] = []
    rows: list[str] = []

    for fields in paragraphs:
        block = layout_paragraph(fields, width, height)
        if rows and len(rows) + block.height > height:
            pages.append(Page.from_rows(rows, width))
            rows = []
        rows.extend(block.lines)

    if rows or not pages:
        pages.append(Page.from_rows(rows, width))
    return pages
