"""Tests for pi.edit.editor -- caret movement, edits and scrolling."""

from __future__ import annotations

import pytest

from pi.edit.buffer import Buffer
from pi.edit.commands import (
    Command,
    Direction,
    FunctionKey,
    MoveCaret,
    OrdinaryChar,
    Quit,
    Resize,
    SpecialKey,
    SpecialKeyCommand,
    Unknown,
)
from pi.edit.editor import Editor
from pi.edit.geometry import Location, Position, Size

from .virtual_terminal import VirtualTerminal


def make_editor(
    text: str, width: int = 80, height: int = 24, at: Location | None = None
) -> Editor:
    editor = Editor(Buffer(text), Size(width, height))
    if at is not None:
        editor.location = at
    return editor


def lines(editor: Editor) -> list[str]:
    return [str(line) for line in editor.buffer.lines]


def press(editor: Editor, *commands: Command) -> None:
    for command in commands:
        editor.handle_command(command)


UP = MoveCaret(Direction.UP)
DOWN = MoveCaret(Direction.DOWN)
LEFT = MoveCaret(Direction.LEFT)
RIGHT = MoveCaret(Direction.RIGHT)
HOME = MoveCaret(Direction.HOME)
END = MoveCaret(Direction.END)
PAGE_UP = MoveCaret(Direction.PAGE_UP)
PAGE_DOWN = MoveCaret(Direction.PAGE_DOWN)
ENTER = SpecialKeyCommand(SpecialKey.ENTER)
BACKSPACE = SpecialKeyCommand(SpecialKey.BACKSPACE)
DELETE = SpecialKeyCommand(SpecialKey.DELETE)


# ---------------------------------------------------------------------------
# Caret movement
# ---------------------------------------------------------------------------


class TestMoveCaret:
    def test_up_at_top_is_noop(self) -> None:
        editor = make_editor("ab\ncd")
        press(editor, UP)
        assert editor.location == Location(0, 0)

    def test_down_at_bottom_is_noop(self) -> None:
        editor = make_editor("ab\ncd", at=Location(1, 1))
        press(editor, DOWN)
        assert editor.location == Location(1, 1)

    def test_left_at_origin_is_noop(self) -> None:
        editor = make_editor("ab")
        press(editor, LEFT)
        assert editor.location == Location(0, 0)

    def test_right_at_end_of_last_line_is_noop(self) -> None:
        editor = make_editor("ab", at=Location(0, 2))
        press(editor, RIGHT)
        assert editor.location == Location(0, 2)

    def test_right_reaches_append_position(self) -> None:
        editor = make_editor("ab")
        press(editor, RIGHT, RIGHT)
        assert editor.location == Location(0, 2)

    def test_right_wraps_to_next_line(self) -> None:
        editor = make_editor("ab\ncd", at=Location(0, 2))
        press(editor, RIGHT)
        assert editor.location == Location(1, 0)

    def test_left_wraps_to_previous_line_end(self) -> None:
        editor = make_editor("abc\nd", at=Location(1, 0))
        press(editor, LEFT)
        assert editor.location == Location(0, 3)

    def test_vertical_move_clamps_column(self) -> None:
        editor = make_editor("abcdef\nxy\nabcdef", at=Location(0, 5))
        press(editor, DOWN)
        assert editor.location == Location(1, 2)
        # No remembered column: the caret stays at the clamped column.
        press(editor, DOWN)
        assert editor.location == Location(2, 2)

    def test_vertical_move_clamps_to_graphemes_not_cells(self) -> None:
        editor = make_editor("abcdef\n世界", at=Location(0, 4))
        press(editor, DOWN)
        assert editor.location == Location(1, 2)

    def test_home(self) -> None:
        editor = make_editor("hello", at=Location(0, 3))
        press(editor, HOME)
        assert editor.location == Location(0, 0)

    def test_end_stops_on_last_grapheme(self) -> None:
        editor = make_editor("hello")
        press(editor, END)
        assert editor.location == Location(0, 4)

    def test_end_on_empty_line(self) -> None:
        editor = make_editor("abc\n\nxyz", at=Location(1, 0))
        press(editor, END)
        assert editor.location == Location(1, 0)

    def test_page_down_and_up(self) -> None:
        text = "\n".join(f"line {i}" for i in range(30))
        editor = make_editor(text, height=10, at=Location(2, 3))
        press(editor, PAGE_DOWN)
        assert editor.location == Location(12, 3)
        press(editor, PAGE_DOWN, PAGE_DOWN)
        assert editor.location == Location(29, 3)
        press(editor, PAGE_UP)
        assert editor.location == Location(19, 3)
        press(editor, PAGE_UP, PAGE_UP)
        assert editor.location == Location(0, 3)

    def test_page_down_clamps_column(self) -> None:
        editor = make_editor("long line\n\n\nx", height=2, at=Location(0, 8))
        press(editor, PAGE_DOWN)
        assert editor.location == Location(2, 0)

    def test_down_scrolls_viewport(self) -> None:
        text = "\n".join(str(i) for i in range(50))
        editor = make_editor(text, height=10)
        editor.viewport.mark_clean()
        press(editor, *[DOWN] * 12)
        assert editor.location == Location(12, 0)
        assert editor.scroll_offset == Location(3, 0)
        assert editor.caret_position() == Position(0, 9)
        assert editor.needs_render

    def test_move_within_view_does_not_dirty(self) -> None:
        editor = make_editor("ab\ncd")
        editor.viewport.mark_clean()
        press(editor, DOWN, RIGHT)
        assert not editor.needs_render

    def test_right_scrolls_horizontally(self) -> None:
        editor = make_editor("abcdefghij", width=4)
        press(editor, *[RIGHT] * 6)
        assert editor.scroll_offset == Location(0, 3)
        assert editor.caret_position() == Position(3, 0)


# ---------------------------------------------------------------------------
# Editing
# ---------------------------------------------------------------------------


class TestEdits:
    def test_typing_advances_caret(self) -> None:
        editor = make_editor("")
        press(editor, OrdinaryChar("h"), OrdinaryChar("i"))
        assert lines(editor) == ["hi"]
        assert editor.location == Location(0, 2)

    def test_typing_marks_dirty(self) -> None:
        editor = make_editor("")
        editor.viewport.mark_clean()
        press(editor, OrdinaryChar("x"))
        assert editor.needs_render

    def test_combining_mark_does_not_advance_caret(self) -> None:
        editor = make_editor("e", at=Location(0, 1))
        press(editor, OrdinaryChar("\u0301"))
        assert lines(editor) == ["e\u0301"]
        assert editor.location == Location(0, 1)

    def test_tab_inserts_tab_character(self) -> None:
        editor = make_editor("ab", at=Location(0, 1))
        press(editor, SpecialKeyCommand(SpecialKey.TAB))
        assert lines(editor) == ["a\tb"]
        assert editor.location == Location(0, 2)

    def test_enter_splits_line(self) -> None:
        editor = make_editor("abcd", at=Location(0, 2))
        press(editor, ENTER)
        assert lines(editor) == ["ab", "cd"]
        assert editor.location == Location(1, 0)

    def test_enter_at_end_of_last_line(self) -> None:
        editor = make_editor("ab", at=Location(0, 2))
        press(editor, ENTER)
        assert lines(editor) == ["ab", ""]
        assert editor.location == Location(1, 0)

    def test_enter_then_backspace_restores(self) -> None:
        editor = make_editor("ab", at=Location(0, 2))
        steps = [
            (ENTER, ["ab", ""], Location(1, 0)),
            (OrdinaryChar("x"), ["ab", "x"], Location(1, 1)),
            (BACKSPACE, ["ab", ""], Location(1, 0)),
            (BACKSPACE, ["ab"], Location(0, 2)),
        ]
        for command, expected_lines, expected_location in steps:
            press(editor, command)
            assert lines(editor) == expected_lines
            assert editor.location == expected_location

    def test_backspace_merge_joins_combining_mark(self) -> None:
        editor = make_editor("e\n\u0301x", at=Location(1, 0))
        press(editor, BACKSPACE)
        assert lines(editor) == ["e\u0301x"]
        assert editor.buffer.grapheme_count(0) == 2
        assert editor.location == Location(0, 1)
        press(editor, OrdinaryChar("y"))
        assert lines(editor) == ["e\u0301yx"]

    def test_backspace_in_line(self) -> None:
        editor = make_editor("abc", at=Location(0, 2))
        press(editor, BACKSPACE)
        assert lines(editor) == ["ac"]
        assert editor.location == Location(0, 1)

    def test_backspace_at_line_start_merges(self) -> None:
        editor = make_editor("ab\ncd", at=Location(1, 0))
        press(editor, BACKSPACE)
        assert lines(editor) == ["abcd"]
        assert editor.location == Location(0, 2)

    def test_backspace_at_origin_is_noop(self) -> None:
        editor = make_editor("ab")
        editor.viewport.mark_clean()
        press(editor, BACKSPACE)
        assert lines(editor) == ["ab"]
        assert editor.location == Location(0, 0)
        assert not editor.needs_render

    def test_delete_in_line_keeps_caret(self) -> None:
        editor = make_editor("abc", at=Location(0, 1))
        press(editor, DELETE)
        assert lines(editor) == ["ac"]
        assert editor.location == Location(0, 1)

    def test_delete_at_line_end_merges(self) -> None:
        editor = make_editor("ab\ncd", at=Location(0, 2))
        press(editor, DELETE)
        assert lines(editor) == ["abcd"]

    def test_delete_at_document_end_is_noop(self) -> None:
        editor = make_editor("ab", at=Location(0, 2))
        press(editor, DELETE)
        assert lines(editor) == ["ab"]

    @pytest.mark.parametrize(
        "key", [SpecialKey.BACK_TAB, SpecialKey.INSERT, SpecialKey.CAPS_LOCK]
    )
    def test_unimplemented_special_keys_change_nothing(self, key: SpecialKey) -> None:
        editor = make_editor("ab", at=Location(0, 1))
        press(editor, SpecialKeyCommand(key))
        assert lines(editor) == ["ab"]
        assert editor.location == Location(0, 1)

    @pytest.mark.parametrize("command", [FunctionKey(5), Unknown("ctrl+z"), Unknown()])
    def test_ignored_commands(self, command: Command) -> None:
        editor = make_editor("ab")
        press(editor, command)
        assert lines(editor) == ["ab"]
        assert not editor.should_quit

    def test_quit_sets_flag(self) -> None:
        editor = make_editor("")
        press(editor, Quit())
        assert editor.should_quit


# ---------------------------------------------------------------------------
# Resize and drawing
# ---------------------------------------------------------------------------


class TestResizeAndRefresh:
    def test_resize_keeps_caret_visible(self) -> None:
        editor = make_editor("\n".join("x" * 5 for _ in range(20)), at=Location(15, 4))
        editor.viewport.mark_clean()
        press(editor, Resize(3, 5))
        assert editor.size == Size(3, 5)
        assert editor.scroll_offset == Location(11, 2)
        assert editor.needs_render

    def test_refresh_draws_and_places_caret(self) -> None:
        term = VirtualTerminal(10, 3)
        editor = make_editor("ab\ncd", width=10, height=3, at=Location(1, 1))
        editor.refresh_screen(term)
        assert term.calls[0] == ("hide_cursor",)
        assert term.calls[-3:] == [("move_to", 1, 1), ("show_cursor",), ("flush",)]
        assert term.grid == ["ab", "cd", "~"]
        assert not editor.needs_render

    def test_clean_refresh_only_moves_caret(self) -> None:
        term = VirtualTerminal(10, 3)
        editor = make_editor("ab", width=10, height=3)
        editor.refresh_screen(term)
        term.clear_calls()
        editor.refresh_screen(term)
        assert term.calls == [
            ("hide_cursor",),
            ("move_to", 0, 0),
            ("show_cursor",),
            ("flush",),
        ]
