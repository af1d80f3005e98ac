"""Tests for Vim mode motions, sequences and colon commands."""

import pytest

from minivim.buffer import CursorPosition
from minivim.modes import ModeKind
from minivim.vim import PendingVimSequence

from helpers import key, make_editor, press, special, type_text


@pytest.fixture
def vim_editor():
    editor = make_editor("one\ntwo\nthree")
    press(editor, special('escape'))
    assert editor.mode.kind == ModeKind.VIM
    return editor


def command(editor, text):
    type_text(editor, ":" + text)
    press(editor, special('enter'))


def test_motions(vim_editor):
    type_text(vim_editor, "jll")
    assert vim_editor.cursor.position == CursorPosition(1, 2)
    type_text(vim_editor, "$")
    assert vim_editor.cursor.position == CursorPosition(1, 3)
    type_text(vim_editor, "0k")
    assert vim_editor.cursor.position == CursorPosition(0, 0)
    press(vim_editor, special('down'))
    assert vim_editor.cursor.line == 1


def test_dd_deletes_current_line(vim_editor):
    type_text(vim_editor, "dd")
    assert vim_editor.buffer.serialize() == "two\nthree"
    assert vim_editor.buffer.dirty
    assert vim_editor.cursor.position == CursorPosition(0, 0)
    assert vim_editor.mode.kind == ModeKind.VIM


def test_late_second_key_starts_over(vim_editor):
    type_text(vim_editor, "d")
    vim_editor.clock.advance(1.5)
    type_text(vim_editor, "d")
    assert vim_editor.buffer.serialize() == "one\ntwo\nthree"
    assert vim_editor.mode.pending.keys == "d"
    vim_editor.clock.advance(0.5)
    type_text(vim_editor, "d")
    assert vim_editor.buffer.serialize() == "two\nthree"


def test_mismatched_second_key_is_handled_alone(vim_editor):
    type_text(vim_editor, "gj")
    assert vim_editor.mode.pending.keys == ""
    assert vim_editor.cursor.position == CursorPosition(1, 0)


def test_gg_and_GG(vim_editor):
    type_text(vim_editor, "lGG")
    assert vim_editor.cursor.position == CursorPosition(2, 1)
    type_text(vim_editor, "gg")
    assert vim_editor.cursor.position == CursorPosition(0, 1)


def test_yy_yanks_line_with_newline(vim_editor):
    type_text(vim_editor, "jyy")
    assert vim_editor.clipboard.content == "two\n"
    assert vim_editor.status_message == "1 line yanked"
    assert not vim_editor.buffer.dirty


def test_dj_deletes_two_lines(vim_editor):
    type_text(vim_editor, "dj")
    assert vim_editor.buffer.serialize() == "three"


def test_yk_on_first_line_does_nothing(vim_editor):
    type_text(vim_editor, "yk")
    assert vim_editor.clipboard.content == ""
    assert vim_editor.mode.pending.keys == ""


def test_d_dollar_deletes_to_line_end(vim_editor):
    type_text(vim_editor, "ld$")
    assert vim_editor.buffer.line_text(0) == "o"


def test_y0_yanks_to_line_start(vim_editor):
    type_text(vim_editor, "lly0")
    assert vim_editor.clipboard.content == "on"
    assert vim_editor.cursor.position == CursorPosition(0, 0)


def test_dl_deletes_character_under_cursor(vim_editor):
    type_text(vim_editor, "dl")
    assert vim_editor.buffer.line_text(0) == "ne"


def test_o_opens_line_below_and_returns_to_normal(vim_editor):
    type_text(vim_editor, "lo")
    assert vim_editor.buffer.serialize() == "one\n\ntwo\nthree"
    assert vim_editor.cursor.position == CursorPosition(1, 0)
    assert vim_editor.mode.kind == ModeKind.NORMAL


@pytest.mark.parametrize("exit_key", [key('i'), special('escape')])
def test_i_and_escape_return_to_normal(vim_editor, exit_key):
    type_text(vim_editor, "jl")
    press(vim_editor, exit_key)
    assert vim_editor.mode.kind == ModeKind.NORMAL
    assert vim_editor.cursor.position == CursorPosition(1, 1)


def test_colon_number_jumps_with_clamp(vim_editor):
    command(vim_editor, "2")
    assert vim_editor.cursor.line == 1
    command(vim_editor, "99")
    assert vim_editor.cursor.line == 2
    assert vim_editor.mode.kind == ModeKind.VIM


def test_unknown_command_is_reported(vim_editor):
    command(vim_editor, "foo")
    assert vim_editor.status_message == "Not an editor command: foo"
    assert vim_editor.mode.kind == ModeKind.VIM
    assert vim_editor.mode.command is None


def test_colon_w_saves_named_buffer(tmp_path):
    path = tmp_path / "out.txt"
    editor = make_editor("one", filename=str(path))
    type_text(editor, "x")
    press(editor, special('escape'))
    command(editor, "w")
    assert path.read_text(encoding="utf-8") == "xone"
    assert not editor.buffer.dirty
    assert editor.mode.kind == ModeKind.VIM


def test_colon_w_unnamed_prompts_for_filename(vim_editor):
    command(vim_editor, "w")
    assert vim_editor.mode.kind == ModeKind.SAVE_AS
    assert not vim_editor.mode.quit_after


def test_colon_wq_unnamed_prompts_then_quits(vim_editor, tmp_path):
    vim_editor.running = True
    command(vim_editor, "wq")
    assert vim_editor.mode.kind == ModeKind.SAVE_AS
    assert vim_editor.mode.quit_after
    type_text(vim_editor, str(tmp_path / "saved.txt"))
    press(vim_editor, special('enter'))
    assert (tmp_path / "saved.txt").read_text(encoding="utf-8") == "one\ntwo\nthree"
    assert not vim_editor.running


def test_colon_q_on_clean_buffer_quits(vim_editor):
    vim_editor.running = True
    command(vim_editor, "q")
    assert not vim_editor.running


def test_colon_q_on_dirty_buffer_asks(vim_editor):
    vim_editor.running = True
    type_text(vim_editor, "dd")
    command(vim_editor, "q")
    assert vim_editor.running
    assert vim_editor.mode.kind == ModeKind.CONFIRM_EXIT


def test_colon_q_bang_discards_changes(vim_editor):
    vim_editor.running = True
    type_text(vim_editor, "dd")
    command(vim_editor, "q!")
    assert not vim_editor.running


def test_escape_leaves_command_line_only(vim_editor):
    type_text(vim_editor, ":wq")
    press(vim_editor, special('escape'))
    assert vim_editor.mode.kind == ModeKind.VIM
    assert vim_editor.mode.command is None


def test_backspace_on_empty_command_line_closes_it(vim_editor):
    type_text(vim_editor, ":")
    press(vim_editor, special('backspace'))
    assert vim_editor.mode.command is None


def test_prompt_shows_pending_keys_and_command(vim_editor):
    type_text(vim_editor, "d")
    assert vim_editor.render_model().message == "-- VIM -- d"
    press(vim_editor, special('escape'), special('escape'))
    type_text(vim_editor, ":wq")
    assert vim_editor.render_model().message == ":wq"


def test_pending_sequence_expiry():
    pending = PendingVimSequence()
    assert not pending.expired(10.0)
    pending.push("g", 10.0)
    assert not pending.expired(10.9)
    assert pending.expired(11.1)
