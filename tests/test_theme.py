"""Tests for Theme mode."""

from minivim.modes import ModeKind
from minivim.theme import COLOR_CATALOG, ThemeColors, catalog_index

from helpers import ctrl, key, make_editor, press, special


def test_catalog_has_sixteen_colors():
    labels = [label for label, _ in COLOR_CATALOG]
    assert len(labels) == 16
    assert labels[0] == "DarkGrey"
    assert labels[-1] == "Grey"


def test_catalog_index_of_unknown_color_is_zero():
    assert catalog_index("no_such_color") == 0


def test_pick_foreground_then_background():
    editor = make_editor("abc")
    press(editor, ctrl('t'))
    assert editor.mode.kind == ModeKind.THEME
    assert editor.mode.index == catalog_index("white")
    press(editor, special('up'))
    assert editor.theme.foreground == "cyan"
    press(editor, special('enter'))
    assert editor.mode.index == catalog_index("black")
    press(editor, special('down'), special('enter'))
    assert editor.mode.kind == ModeKind.NORMAL
    assert editor.theme == ThemeColors(foreground="cyan", background="red")


def test_escape_restores_previous_theme():
    editor = make_editor("abc")
    press(editor, ctrl('t'), special('up'), special('enter'), special('down'))
    assert editor.theme != ThemeColors()
    press(editor, special('escape'))
    assert editor.mode.kind == ModeKind.NORMAL
    assert editor.theme == ThemeColors()


def test_selection_stops_at_catalog_ends():
    editor = make_editor("abc")
    press(editor, ctrl('t'))
    for _ in range(3):
        press(editor, special('down'))
    assert editor.mode.index == len(COLOR_CATALOG) - 1


def test_typed_keys_are_ignored():
    editor = make_editor("abc")
    press(editor, ctrl('t'), key('x'))
    assert editor.mode.kind == ModeKind.THEME
    assert editor.buffer.serialize() == "abc"


def test_color_list_is_drawn_with_marker():
    editor = make_editor("abc")
    press(editor, ctrl('t'), special('up'))
    model = editor.render_model()
    assert "> DarkCyan" in model.lines
    assert model.foreground == "cyan"
    assert model.message.startswith("Select text color")
