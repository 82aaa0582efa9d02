"""Tests for termgrid.input.InputSplitter."""

from __future__ import annotations

from termgrid.events import BRACKETED_PASTE_END, BRACKETED_PASTE_START
from termgrid.input import InputSplitter


class TestPlainInput:
    def test_characters_are_split(self) -> None:
        assert InputSplitter().feed("abc") == ["a", "b", "c"]

    def test_empty_feed(self) -> None:
        assert InputSplitter().feed("") == []


class TestEscapeSequences:
    def test_complete_csi(self) -> None:
        assert InputSplitter().feed("\x1b[Ax") == ["\x1b[A", "x"]

    def test_partial_csi_is_held(self) -> None:
        splitter = InputSplitter()
        assert splitter.feed("a\x1b[") == ["a"]
        assert splitter.pending == "\x1b["
        assert splitter.feed("B") == ["\x1b[B"]
        assert splitter.pending == ""

    def test_tilde_sequence_across_chunks(self) -> None:
        splitter = InputSplitter()
        assert splitter.feed("\x1b[1") == []
        assert splitter.feed("5~") == ["\x1b[15~"]

    def test_ss3(self) -> None:
        splitter = InputSplitter()
        assert splitter.feed("\x1bO") == []
        assert splitter.feed("P") == ["\x1bOP"]

    def test_alt_key(self) -> None:
        assert InputSplitter().feed("\x1bx") == ["\x1bx"]

    def test_sgr_mouse(self) -> None:
        splitter = InputSplitter()
        assert splitter.feed("\x1b[<0;1") == []
        assert splitter.feed("0;5M") == ["\x1b[<0;10;5M"]

    def test_x10_mouse(self) -> None:
        assert InputSplitter().feed("\x1b[M !!") == ["\x1b[M !!"]

    def test_osc_needs_terminator(self) -> None:
        splitter = InputSplitter()
        assert splitter.feed("\x1b]0;title") == []
        assert splitter.feed("\x07") == ["\x1b]0;title\x07"]

    def test_flush_gives_up_on_lone_escape(self) -> None:
        splitter = InputSplitter()
        assert splitter.feed("\x1b") == []
        assert splitter.flush() == ["\x1b"]
        assert splitter.pending == ""

    def test_flush_when_empty(self) -> None:
        assert InputSplitter().flush() == []


class TestBracketedPaste:
    def test_paste_is_one_chunk(self) -> None:
        data = BRACKETED_PASTE_START + "hi\x1b[A" + BRACKETED_PASTE_END
        assert InputSplitter().feed(data) == [data]

    def test_paste_across_chunks(self) -> None:
        splitter = InputSplitter()
        assert splitter.feed("x" + BRACKETED_PASTE_START + "hel") == ["x"]
        assert splitter.in_paste
        assert splitter.feed("lo" + BRACKETED_PASTE_END + "y") == [
            BRACKETED_PASTE_START + "hello" + BRACKETED_PASTE_END,
            "y",
        ]
        assert not splitter.in_paste

    def test_paste_start_split_across_chunks(self) -> None:
        splitter = InputSplitter()
        assert splitter.feed("\x1b[20") == []
        assert splitter.feed("0~ab" + BRACKETED_PASTE_END) == [
            BRACKETED_PASTE_START + "ab" + BRACKETED_PASTE_END
        ]

    def test_empty_paste(self) -> None:
        data = BRACKETED_PASTE_START + BRACKETED_PASTE_END
        assert InputSplitter().feed(data) == [data]

    def test_flush_unterminated_paste(self) -> None:
        splitter = InputSplitter()
        splitter.feed(BRACKETED_PASTE_START + "abc")
        assert splitter.flush() == [BRACKETED_PASTE_START + "abc"]
        assert not splitter.in_paste

    def test_clear(self) -> None:
        splitter = InputSplitter()
        splitter.feed(BRACKETED_PASTE_START + "abc")
        splitter.clear()
        assert splitter.pending == ""
        assert splitter.feed("z") == ["z"]
