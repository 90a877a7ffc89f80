"""Tests for leftysay.bubble."""

from __future__ import annotations

from leftysay.bubble import (
    BUBBLE_MAX_WIDTH,
    BUBBLE_PADDING,
    pad_line,
    render_bubble,
    visible_width,
    wrap_words,
)


class TestRenderBubble:
    def test_single_line_message(self) -> None:
        lines = render_bubble("hello world from leftysay", 40)
        assert len(lines) >= 3
        assert lines[0] == " " + "_" * 27
        assert lines[1] == "< hello world from leftysay >"
        assert lines[-1] == " " + "-" * 27

    def test_borders_are_only_underscores_and_dashes(self) -> None:
        lines = render_bubble("hello world from leftysay", 40)
        assert lines[0].startswith(" ")
        assert set(lines[0][1:]) == {"_"}
        assert set(lines[-1][1:]) == {"-"}

    def test_two_lines_use_slashes(self) -> None:
        lines = render_bubble("hello world from leftysay", 20)
        assert lines[1:-1] == [
            "/ hello world from \\",
            "\\ leftysay         /",
        ]

    def test_interior_lines_use_pipes(self) -> None:
        lines = render_bubble("one two three four five six seven", 20)
        assert lines[1:-1] == [
            "/ one two three \\",
            "| four five six |",
            "\\ seven         /",
        ]

    def test_lines_share_width(self) -> None:
        lines = render_bubble("the quick brown fox jumps over the lazy dog " * 4, 50)
        content = lines[1:-1]
        assert len(content) > 1
        assert len({len(line) for line in content}) == 1
        assert len(lines[0]) == len(lines[-1]) == len(content[0]) - 1

    def test_width_is_capped(self) -> None:
        lines = render_bubble("word " * 100, 200)
        assert len(lines[0]) <= BUBBLE_MAX_WIDTH + 3

    def test_long_words_are_broken(self) -> None:
        lines = render_bubble("x" * 30, 20)
        content = lines[1:-1]
        assert len(content) == 2
        assert content[0] == "/ " + "x" * 16 + " \\"

    def test_narrow_terminal_returns_message(self) -> None:
        message = "hello world from leftysay"
        assert render_bubble(message, BUBBLE_PADDING + 10) == [message]
        assert render_bubble(message, 5) == [message]

    def test_just_wide_enough_terminal_wraps(self) -> None:
        lines = render_bubble("hello world from leftysay", BUBBLE_PADDING + 11)
        assert len(lines) > 3

    def test_empty_message(self) -> None:
        assert render_bubble("", 80) == []
        assert render_bubble("   ", 80) == []

    def test_wide_characters_are_measured_in_columns(self) -> None:
        lines = render_bubble("日本語", 40)
        assert lines[0] == " " + "_" * 8
        assert lines[1] == "< 日本語 >"


def test_visible_width() -> None:
    assert visible_width("abc") == 3
    assert visible_width("日本") == 4


def test_pad_line() -> None:
    assert pad_line("ab", 4) == "ab  "
    assert pad_line("abcd", 2) == "abcd"


class TestWideCharacters:
    def test_cjk_fits_terminal(self) -> None:
        lines = render_bubble("日" * 80, 40)
        assert len(lines) > 3
        assert max(visible_width(line) for line in lines) <= 40

    def test_cjk_words_fit_terminal(self) -> None:
        lines = render_bubble("日本語の文章 " * 20, 30)
        assert max(visible_width(line) for line in lines) <= 30
        content = lines[1:-1]
        assert len({visible_width(line) for line in content}) == 1


def test_wrap_words() -> None:
    assert wrap_words("aa bb  cc", 5) == ["aa bb", "cc"]
    assert wrap_words("日本語", 4) == ["日本", "語"]
    assert wrap_words("ab 日本語", 4) == ["ab", "日本", "語"]
    assert wrap_words("   ", 10) == []
