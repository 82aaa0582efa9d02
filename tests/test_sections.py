"""Tests for termgrid.components.sections: MultilineText and Title."""

from __future__ import annotations

import pytest

from termgrid.components import ColoredElement, MultilineText, Title
from termgrid.errors import InvalidParameterError, SuffixTooLongError
from termgrid.grid import Grid

LONG_LINE = (
    "This is really a very long line that should be truncated and end with an ellipsis"
)


def title_rows(title: Title, width: int, height: int) -> list[str]:
    return [row for page in title.apply_render(width, height) for row in page.rows]


# ---------------------------------------------------------------------------
# MultilineText
# ---------------------------------------------------------------------------


class TestMultilineText:
    def test_empty_block_is_one_empty_paragraph(self) -> None:
        text = MultilineText()
        text.from_text_block([])
        assert text.get_raw_content() == [[]]

    def test_raw_content_is_unmodified(self) -> None:
        text = MultilineText([["Hello", "World"], ["again"]])
        assert text.get_raw_content() == [["Hello", "World"], ["again"]]

    def test_from_text_splits_paragraphs_and_fields(self) -> None:
        text = MultilineText.from_text("one two\n  three ")
        assert text.get_raw_content() == [["one", "two"], ["three"]]

    def test_short_line_is_padded(self) -> None:
        grid = Grid(18, 2)
        ColoredElement(MultilineText([["Hello", "World"]])).draw(grid, 0, 0)
        assert grid.lines()[0] == "Hello World       "

    def test_long_line_ends_with_ellipsis(self) -> None:
        grid = Grid(18, 1)
        ColoredElement(MultilineText.from_text(LONG_LINE)).draw(grid, 0, 0)
        assert grid.lines()[0] == "This is really... "

    def test_render_pages(self) -> None:
        text = MultilineText([["a"], ["b"], ["c"]])
        pages = text.apply_render(3, 2)
        assert [page.rows for page in pages] == [("a  ", "b  "), ("c  ",)]

    def test_render_rejects_zero_width(self) -> None:
        with pytest.raises(InvalidParameterError):
            MultilineText([["a"]]).apply_render(0, 1)


# ---------------------------------------------------------------------------
# Title
# ---------------------------------------------------------------------------


class TestTitle:
    def test_centred_single_line(self) -> None:
        assert title_rows(Title("Test Title"), 20, 1) == [" *** Test Title *** "]

    def test_full_title_with_subtitle(self) -> None:
        title = Title("App", "Settings")
        assert title.full_title == "App - Settings"
        assert title.get_raw_content() == [["App - Settings"]]

    def test_subtitle_can_be_removed(self) -> None:
        title = Title("App", "Settings")
        title.set_subtitle("")
        assert title.full_title == "App"

    @pytest.mark.parametrize(
        "text,width,height,expected",
        [
            (
                "This is a very long title",
                13,
                5,
                [
                    "*** This *** ",
                    "*** is a *** ",
                    "*** very *** ",
                    "*** long *** ",
                    "*** title ***",
                ],
            ),
            (
                "Hello world, this is a test",
                19,
                3,
                [
                    "   *** Hello ***   ",
                    "*** world, this ***",
                    " *** is a test *** ",
                ],
            ),
            (
                "Hi You They",
                14,
                2,
                [
                    "*** Hi You ***",
                    " *** They *** ",
                ],
            ),
        ],
    )
    def test_balanced_lines(
        self, text: str, width: int, height: int, expected: list[str]
    ) -> None:
        assert title_rows(Title(text), width, height) == expected

    def test_unsplittable_title_is_cut(self) -> None:
        assert title_rows(Title("Thisisaverylongtitle"), 13, 1) == ["*** Th... ***"]

    def test_too_narrow_for_ellipsis(self) -> None:
        with pytest.raises(SuffixTooLongError):
            Title("Thisisaverylongtitle").apply_render(9, 1)

    def test_paginates_by_height(self) -> None:
        pages = Title("This is a very long title").apply_render(13, 2)
        assert [page.height for page in pages] == [2, 2, 1]

    def test_empty_title_renders_one_empty_page(self) -> None:
        pages = Title("").apply_render(10, 1)
        assert len(pages) == 1
        assert pages[0].height == 0

    def test_drawn_through_colored_element(self) -> None:
        grid = Grid(20, 1)
        end = ColoredElement(Title("Test Title")).draw(grid, 0, 0)
        assert grid.lines() == [" *** Test Title *** "]
        assert end == (20, 1)
