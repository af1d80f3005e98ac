"""Cursor movement at buffer boundaries and the sticky column."""

from minivim.buffer import CursorPosition, TextBuffer
from minivim.cursor import CursorModel


def test_left_at_buffer_start_stays():
    buffer = TextBuffer("abc")
    cursor = CursorModel()
    cursor.move_left(buffer)
    assert cursor.position == CursorPosition(0, 0)


def test_right_at_buffer_end_stays():
    buffer = TextBuffer("abc\nde")
    cursor = CursorModel(CursorPosition(1, 2))
    cursor.move_right(buffer)
    assert cursor.position == CursorPosition(1, 2)


def test_right_wraps_to_next_line():
    buffer = TextBuffer("abc\nde")
    cursor = CursorModel(CursorPosition(0, 3))
    cursor.move_right(buffer)
    assert cursor.position == CursorPosition(1, 0)


def test_left_wraps_to_previous_line_end():
    buffer = TextBuffer("abc\nde")
    cursor = CursorModel(CursorPosition(1, 0))
    cursor.move_left(buffer)
    assert cursor.position == CursorPosition(0, 3)


def test_up_at_first_line_and_down_at_last_line_stay():
    buffer = TextBuffer("abc\nde")
    cursor = CursorModel(CursorPosition(0, 1))
    cursor.move_up(buffer)
    assert cursor.position == CursorPosition(0, 1)
    cursor.move_down(buffer)
    cursor.move_down(buffer)
    assert cursor.position == CursorPosition(1, 1)


def test_vertical_moves_keep_desired_column():
    buffer = TextBuffer("abcdef\nab\nabcdef")
    cursor = CursorModel(CursorPosition(0, 5))
    cursor.move_down(buffer)
    assert cursor.position == CursorPosition(1, 2)
    cursor.move_down(buffer)
    assert cursor.position == CursorPosition(2, 5)


def test_horizontal_move_resets_desired_column():
    buffer = TextBuffer("abcdef\nab\nabcdef")
    cursor = CursorModel(CursorPosition(0, 5))
    cursor.move_down(buffer)
    cursor.move_left(buffer)
    cursor.move_down(buffer)
    assert cursor.position == CursorPosition(2, 1)


def test_move_to_line_clamps():
    buffer = TextBuffer("a\nb\nc")
    cursor = CursorModel()
    cursor.move_to_line(buffer, 99)
    assert cursor.line == 2
    cursor.move_to_line(buffer, -3)
    assert cursor.line == 0


def test_buffer_start_and_end_keep_desired_column():
    buffer = TextBuffer("abcd\nx\nabcd")
    cursor = CursorModel(CursorPosition(1, 1))
    cursor.move_to_line_end(buffer)
    cursor.move_to_buffer_end(buffer)
    assert cursor.position == CursorPosition(2, 1)
    cursor.move_to_buffer_start(buffer)
    assert cursor.position == CursorPosition(0, 1)


def test_line_start_and_end():
    buffer = TextBuffer("hello")
    cursor = CursorModel(CursorPosition(0, 2))
    cursor.move_to_line_end(buffer)
    assert cursor.column == 5
    cursor.move_to_line_start(buffer)
    assert cursor.column == 0


def test_word_right_and_left():
    buffer = TextBuffer("foo bar baz")
    cursor = CursorModel()
    cursor.move_word_right(buffer)
    assert cursor.column == 4
    cursor.move_word_right(buffer)
    assert cursor.column == 8
    cursor.move_word_left(buffer)
    assert cursor.column == 4
    cursor.move_word_left(buffer)
    assert cursor.column == 0


def test_word_right_spills_to_next_line():
    buffer = TextBuffer("foo\n  bar")
    cursor = CursorModel(CursorPosition(0, 3))
    cursor.move_word_right(buffer)
    assert cursor.position == CursorPosition(1, 2)


def test_word_left_spills_to_previous_line():
    buffer = TextBuffer("foo\nbar")
    cursor = CursorModel(CursorPosition(1, 0))
    cursor.move_word_left(buffer)
    assert cursor.position == CursorPosition(0, 3)


def test_clamp_after_buffer_shrinks():
    buffer = TextBuffer("abcdef\nxyz")
    cursor = CursorModel(CursorPosition(1, 3))
    buffer.remove_line(1)
    cursor.clamp(buffer)
    assert cursor.position == CursorPosition(0, 3)
