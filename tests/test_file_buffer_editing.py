from __future__ import annotations

from typing import Tuple

import pytest

from reflex_engine.buffer import FileBuffer, Selection, Transaction


def make_buffer(text: str, *cursors: Tuple[int, int]) -> FileBuffer:
    buffer = FileBuffer.from_text(text)
    if cursors:
        buffer.selections = [Selection.at(y, x) for y, x in cursors]
    return buffer


def cursors(buffer: FileBuffer) -> list[tuple[int, int]]:
    return [selection.cursor.coords for selection in buffer.selections]


def test_newline_splits_line() -> None:
    buffer = make_buffer("abc\ndef\n", (0, 3))

    buffer.insert("\n")

    assert buffer.text() == "abc\n\ndef\n"
    assert cursors(buffer) == [(1, 0)]
    assert buffer.line_count() == 3
    assert buffer.is_dirty()


def test_insert_into_empty_buffer() -> None:
    buffer = FileBuffer()
    assert buffer.buffer_is_empty

    buffer.insert("x")

    assert buffer.buffer_is_empty is False
    assert buffer.line_count() == 1
    assert cursors(buffer) == [(0, 1)]


def test_backspace_at_origin_is_noop() -> None:
    buffer = make_buffer("abc", (0, 0))

    buffer.delete(backspace=True)

    assert buffer.text() == "abc"
    assert cursors(buffer) == [(0, 0)]
    assert buffer.is_dirty() is False


def test_forward_delete_at_end_is_noop() -> None:
    buffer = make_buffer("abc", (0, 3))

    buffer.delete(backspace=False)

    assert buffer.text() == "abc"
    assert buffer.is_dirty() is False


def test_forward_delete_removes_char_under_cursor() -> None:
    buffer = make_buffer("abc\ndef", (0, 1))

    buffer.delete(backspace=False)

    assert buffer.text() == "ac\ndef"
    assert cursors(buffer) == [(0, 1)]


def test_forward_delete_at_line_end_joins_next_line() -> None:
    buffer = make_buffer("abc\ndef", (0, 3))

    buffer.delete(backspace=False)

    assert buffer.text() == "abcdef"
    assert cursors(buffer) == [(0, 3)]


@pytest.mark.parametrize(
    "text,cursor",
    [("abc", (0, 0)), ("abc", (0, 2)), ("abc\ndef\n", (1, 3)), ("ab\n\ncd", (1, 0))],
)
@pytest.mark.parametrize("char", ["z", "\n", " "])
def test_insert_then_backspace_restores_state(
    text: str, cursor: Tuple[int, int], char: str
) -> None:
    buffer = make_buffer(text, cursor)

    buffer.insert(char)
    buffer.delete(backspace=True)

    assert buffer.text() == text
    assert cursors(buffer) == [cursor]


def test_insert_on_virtual_line_adds_terminator() -> None:
    buffer = make_buffer("abc\n", (1, 0))

    buffer.insert("x")

    assert buffer.text() == "abc\nx\n"
    assert cursors(buffer) == [(1, 1)]


def test_backspace_joins_lines() -> None:
    buffer = make_buffer("abc\ndef\n", (1, 0))

    buffer.delete(backspace=True)

    assert buffer.text() == "abcdef\n"
    assert buffer.line_count() == 1
    assert cursors(buffer) == [(0, 3)]


def test_second_selection_shifts_after_insert() -> None:
    buffer = make_buffer("abcdef", (0, 1), (0, 4))

    buffer.insert("x")

    assert buffer.text() == "axbcdxef"
    assert cursors(buffer) == [(0, 2), (0, 6)]


def test_second_selection_shifts_after_backspace() -> None:
    buffer = make_buffer("abcdef", (0, 2), (0, 5))

    buffer.delete(backspace=True)

    assert buffer.text() == "acdf"
    assert cursors(buffer) == [(0, 1), (0, 3)]


def test_selection_listed_first_still_shifts() -> None:
    buffer = make_buffer("abcdef", (0, 4), (0, 1))

    buffer.insert("x")

    assert buffer.text() == "axbcdxef"
    assert cursors(buffer) == [(0, 6), (0, 2)]


def test_newline_carries_following_selection_to_new_line() -> None:
    buffer = make_buffer("abcdef", (0, 1), (0, 4))

    buffer.insert("\n")

    assert buffer.text() == "a\nbcd\nef"
    assert cursors(buffer) == [(1, 0), (2, 0)]


def test_newline_pushes_lower_selections_down() -> None:
    buffer = make_buffer("ab\ncd\nef", (0, 1), (2, 1))

    buffer.insert("\n")

    assert buffer.text() == "a\nb\ncd\ne\nf"
    assert cursors(buffer) == [(1, 0), (4, 0)]


def test_line_join_pulls_lower_selections_up() -> None:
    buffer = make_buffer("ab\ncd\nef", (1, 0), (2, 1))

    buffer.delete(backspace=True)

    assert buffer.text() == "abcd\nf"
    assert cursors(buffer) == [(0, 2), (1, 0)]


def test_line_join_merges_selection_on_joined_line() -> None:
    buffer = make_buffer("ab\ncd", (0, 2), (1, 1))

    buffer.delete(backspace=False)

    assert buffer.text() == "abc"
    assert cursors(buffer) == [(0, 2), (0, 3)]


def test_delete_skips_blocked_selections() -> None:
    buffer = make_buffer("abc\ndef", (0, 0), (1, 2))

    buffer.delete(backspace=True)

    assert buffer.text() == "abc\ndf"
    assert cursors(buffer) == [(0, 0), (1, 1)]
    assert buffer.is_dirty()


def test_insert_clamps_stray_selection_before_editing() -> None:
    buffer = make_buffer("abc", (0, 1), (4, 0))

    buffer.insert("x")

    assert buffer.text() == "xaxbc"
    assert cursors(buffer) == [(0, 3), (0, 1)]


def test_delete_clamps_stray_selection_before_editing() -> None:
    buffer = make_buffer("abc", (0, 2), (4, 0))

    buffer.delete(backspace=True)

    assert buffer.text() == "ac"
    assert cursors(buffer) == [(0, 1), (0, 0)]


def test_insert_requires_single_character() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(ValueError):
        buffer.insert("xy")

    assert buffer.text() == "abc"


def test_insert_text_types_each_character() -> None:
    buffer = make_buffer("", (0, 0))

    buffer.insert_text("hi\nyo")

    assert buffer.text() == "hi\nyo\n"
    assert cursors(buffer) == [(1, 2)]


def test_add_selection_is_clamped() -> None:
    buffer = make_buffer("abc\nde")

    selection = buffer.add_selection(9, 9)

    assert selection.cursor.coords == (1, 2)
    assert selection.anchor.coords == (1, 2)
    assert len(buffer.selections) == 2


def test_set_primary_validates_index() -> None:
    buffer = make_buffer("abc", (0, 0), (0, 2))

    buffer.set_primary(1)
    assert buffer.primary_selection.cursor.coords == (0, 2)

    with pytest.raises(IndexError):
        buffer.set_primary(2)


def test_transaction_restores_selections_on_failure() -> None:
    buffer = make_buffer("abc", (0, 1))

    with pytest.raises(RuntimeError):
        with Transaction(buffer, "explode"):
            buffer.selections[0].cursor.move_to(0, 3)
            raise RuntimeError("boom")

    assert cursors(buffer) == [(0, 1)]
    assert buffer.is_dirty() is False


def test_snapshot_reports_state() -> None:
    buffer = make_buffer("abc", (0, 1))
    buffer.insert("x")

    view = buffer.snapshot()

    assert view.text == "axbc"
    assert view.cursors == ((0, 2),)
    assert view.dirty is True
    assert view.version == buffer.storage.version
