"""Command line entry point."""

from unittest.mock import patch

from minivim.__main__ import build_parser, main
from minivim.errors import FatalStartup, IOFailure


def test_version_flag_prints_version(capsys):
    with patch('minivim.__main__.get_version_string', return_value="0.1.0 (abc1234)"):
        assert main(['--version']) == 0
    assert capsys.readouterr().out.strip() == "0.1.0 (abc1234)"


def test_parser_accepts_optional_filename():
    assert build_parser().parse_args([]).filename is None
    assert build_parser().parse_args(['notes.txt']).filename == 'notes.txt'


def test_fatal_startup_exits_with_status_one(capsys):
    with patch('minivim.editor.Editor.__init__', return_value=None), \
         patch('minivim.editor.Editor.run', side_effect=FatalStartup("Not a terminal")):
        assert main([]) == 1
    assert "minivim: Not a terminal" in capsys.readouterr().err


def test_unreadable_file_exits_with_status_one(capsys):
    with patch('minivim.editor.Editor.__init__', return_value=None), \
         patch('minivim.editor.Editor.load_file',
               side_effect=IOFailure("Error: Permission denied reading secret.txt")), \
         patch('minivim.editor.Editor.run') as run:
        assert main(['secret.txt']) == 1
    run.assert_not_called()
    assert "Permission denied reading secret.txt" in capsys.readouterr().err


def test_clean_exit_returns_zero():
    with patch('minivim.editor.Editor.__init__', return_value=None), \
         patch('minivim.editor.Editor.load_file') as load_file, \
         patch('minivim.editor.Editor.run'):
        assert main(['notes.txt']) == 0
    load_file.assert_called_once_with('notes.txt')
