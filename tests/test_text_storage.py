import pytest

from reflex_engine.buffer import OutOfRangeError, TextStorage


@pytest.mark.parametrize(
    "data",
    [b"", b"abc", b"abc\n", b"a\nb\nc", b"\n\n", b"one\r\ntwo\r\n", "café\n".encode()],
)
def test_load_serialize_round_trip(data: bytes) -> None:
    assert TextStorage.load(data).serialize() == data


def test_lines_keep_terminators() -> None:
    storage = TextStorage.from_text("abc\ndef\n")

    assert storage.line_count() == 2
    assert list(storage) == ["abc\n", "def\n"]
    assert storage.line(1) == "def\n"
    assert storage.line(2) is None
    assert storage.visible_length(0) == 3


def test_unterminated_last_line_counts() -> None:
    storage = TextStorage.from_text("abc\ndef")

    assert storage.line_count() == 2
    assert storage.visible_length(1) == 3
    assert storage.ends_with_newline() is False


def test_empty_storage() -> None:
    storage = TextStorage()

    assert storage.line_count() == 0
    assert len(storage) == 0
    assert storage.ends_with_newline() is True
    assert storage.char_offset_of_line(0) == 0


def test_char_offset_of_line() -> None:
    storage = TextStorage.from_text("ab\ncde\nf")

    assert [storage.char_offset_of_line(i) for i in range(4)] == [0, 3, 7, 8]
    with pytest.raises(OutOfRangeError):
        storage.char_offset_of_line(5)


def test_char_at() -> None:
    storage = TextStorage.from_text("ab\ncd")

    assert storage.char_at(2) == "\n"
    assert storage.char_at(4) == "d"
    with pytest.raises(OutOfRangeError):
        storage.char_at(5)


def test_insert_splits_lines() -> None:
    storage = TextStorage.from_text("abcdef")

    storage.insert(3, "\n")

    assert list(storage) == ["abc\n", "def"]
    assert len(storage) == 7


def test_insert_at_end() -> None:
    terminated = TextStorage.from_text("ab\n")
    terminated.insert(3, "x")
    assert list(terminated) == ["ab\n", "x"]

    open_ended = TextStorage.from_text("ab")
    open_ended.insert(2, "x")
    assert list(open_ended) == ["abx"]

    empty = TextStorage()
    empty.insert(0, "q")
    assert empty.text() == "q"


def test_insert_out_of_range_leaves_text_untouched() -> None:
    storage = TextStorage.from_text("abc")

    with pytest.raises(OutOfRangeError):
        storage.insert(4, "x")

    assert storage.text() == "abc"
    assert storage.version == 0


def test_delete_is_inclusive_and_joins_lines() -> None:
    storage = TextStorage.from_text("ab\ncd\nef")

    storage.delete(1, 4)

    assert list(storage) == ["a\n", "ef"]


def test_delete_terminator_joins_with_next_line() -> None:
    storage = TextStorage.from_text("ab\ncd")

    storage.delete(2, 2)

    assert list(storage) == ["abcd"]
    assert storage.char_offset_of_line(1) == 4


@pytest.mark.parametrize("start,end", [(2, 1), (-1, 0), (0, 3)])
def test_delete_rejects_bad_ranges(start: int, end: int) -> None:
    storage = TextStorage.from_text("abc")

    with pytest.raises(OutOfRangeError):
        storage.delete(start, end)

    assert storage.text() == "abc"


def test_version_counts_mutations() -> None:
    storage = TextStorage.from_text("abc")

    storage.insert(0, "x")
    storage.delete(0, 0)
    storage.insert(1, "")

    assert storage.version == 2
