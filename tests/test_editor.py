"""Tests for editing operations, saving and quit confirmation."""

import os

from pound.highlight import HighlightType, Keyword

from helpers import char, ctrl, key, type_text


def raw_rows(editor):
    return [row.raw for row in editor.document.rows]


def test_typing_into_empty_document_appends_row(make_editor):
    editor = make_editor()
    type_text(editor, "hi")
    assert raw_rows(editor) == ["hi"]
    assert editor.cursor.cursor_x == 2
    assert editor.document.is_dirty


def test_tab_key_inserts_tab_character(make_editor):
    editor = make_editor(["ab"])
    editor.cursor.cursor_x = 1
    editor.process_keypress(char('\t'))
    assert raw_rows(editor) == ["a\tb"]
    assert editor.document.row(0).render == "a       b"


def test_control_characters_are_not_inserted(make_editor):
    editor = make_editor(["ab"])
    editor.process_keypress(char('\x07'))
    assert raw_rows(editor) == ["ab"]
    assert not editor.document.is_dirty


def test_split_then_backspace_restores_row(make_editor):
    editor = make_editor(["hello world", "next"])
    editor.cursor.cursor_x = 5

    editor.process_keypress(key('enter'))
    assert raw_rows(editor) == ["hello", " world", "next"]
    assert (editor.cursor.cursor_y, editor.cursor.cursor_x) == (1, 0)

    editor.process_keypress(key('backspace'))
    assert raw_rows(editor) == ["hello world", "next"]
    assert (editor.cursor.cursor_y, editor.cursor.cursor_x) == (0, 5)


def test_newline_at_column_zero_inserts_blank_row_above(make_editor):
    editor = make_editor(["abc"])
    editor.process_keypress(key('enter'))
    assert raw_rows(editor) == ["", "abc"]
    assert (editor.cursor.cursor_y, editor.cursor.cursor_x) == (1, 0)


def test_backspace_at_document_start_is_noop(make_editor):
    editor = make_editor(["abc"])
    editor.process_keypress(key('backspace'))
    assert raw_rows(editor) == ["abc"]
    assert editor.document.dirty == 0


def test_delete_removes_character_under_cursor(make_editor):
    editor = make_editor(["abc", "de"])
    editor.cursor.cursor_x = 1
    editor.process_keypress(key('delete'))
    assert raw_rows(editor) == ["ac", "de"]
    assert editor.cursor.cursor_x == 1

    # At end of row Delete joins the next row onto this one
    editor.cursor.cursor_x = 2
    editor.process_keypress(key('delete'))
    assert raw_rows(editor) == ["acde"]


def test_dirty_counter_counts_mutations(make_editor):
    editor = make_editor(["x"])
    type_text(editor, "ab")
    editor.process_keypress(key('enter'))
    editor.process_keypress(key('backspace'))
    assert editor.document.dirty == 4
    editor.process_keypress(key('left'))
    assert editor.document.dirty == 4


def test_edits_rehighlight_changed_rows(make_editor):
    editor = make_editor(["letx"], path="main.rs")
    red = Keyword('bright_red')
    assert editor.document.row(0).highlight[:3] == [HighlightType.NORMAL] * 3

    editor.cursor.cursor_x = 3
    editor.process_keypress(key('enter'))
    assert editor.document.row(0).highlight == [red] * 3
    assert editor.document.row(1).highlight == [HighlightType.NORMAL]

    editor.process_keypress(key('backspace'))
    assert editor.document.row(0).highlight == [HighlightType.NORMAL] * 4


def test_save_with_path_writes_file(make_editor, tmp_path):
    path = tmp_path / "doc.txt"
    editor = make_editor(["one"], path=str(path))
    type_text(editor, "A")
    editor.process_keypress(ctrl('s'))
    assert path.read_text(encoding='utf-8') == "Aone"
    assert editor.document.dirty == 0
    assert editor.status.message() == "4 bytes written to disk"


def test_save_without_path_then_cancel_aborts(make_editor, tmp_path):
    editor = make_editor()
    type_text(editor, "text")
    before = set(os.listdir(tmp_path))

    editor.process_keypress(ctrl('s'))
    assert editor.prompt is not None
    assert editor.status.message() == "Save as : "
    type_text(editor, "name.txt")
    editor.process_keypress(key('escape'))

    assert editor.prompt is None
    assert editor.status.message() == "Save Aborted"
    assert editor.document.is_dirty
    assert editor.document.path is None
    assert set(os.listdir(tmp_path)) == before


def test_save_without_path_then_commit_writes_and_selects_syntax(make_editor, tmp_path):
    editor = make_editor(["fn main() {}"])
    assert editor.syntax is None
    path = tmp_path / "main.rs"

    editor.process_keypress(ctrl('s'))
    type_text(editor, str(path))
    editor.process_keypress(key('backspace'))
    editor.process_keypress(char('s'))
    editor.process_keypress(key('enter'))

    assert editor.document.path == str(path)
    assert path.read_text(encoding='utf-8') == "fn main() {}"
    assert editor.document.dirty == 0
    assert editor.syntax.file_type() == "rust"
    # Highlighting applied to rows that existed before the save
    assert editor.document.row(0).highlight[:2] == [Keyword('bright_red')] * 2


def test_save_failure_is_reported_and_keeps_dirty(make_editor, tmp_path):
    editor = make_editor(["x"], path=str(tmp_path / "missing" / "f.txt"))
    type_text(editor, "y")
    editor.process_keypress(ctrl('s'))
    assert editor.status.message().startswith("Can't save! I/O error:")
    assert editor.document.is_dirty


def test_quit_clean_document_exits_immediately(make_editor):
    editor = make_editor(["x"])
    assert editor.process_keypress(ctrl('q')) is False
    assert editor.running is False


def test_quit_dirty_document_needs_consecutive_presses(make_editor):
    editor = make_editor(["x"])
    editor.running = True
    type_text(editor, "y")
    quit_times = editor.dispatcher.initial_quit_times

    for remaining in range(quit_times - 1, 0, -1):
        assert editor.process_keypress(ctrl('q')) is True
        assert str(remaining) in editor.status.message()
        assert editor.dispatcher.confirming_quit
    assert editor.process_keypress(ctrl('q')) is False
    assert editor.running is False


def test_any_key_between_quit_presses_resets_counter(make_editor):
    editor = make_editor(["x"])
    type_text(editor, "y")
    quit_times = editor.dispatcher.initial_quit_times

    for _ in range(quit_times - 1):
        editor.process_keypress(ctrl('q'))
    editor.process_keypress(char('z'))
    assert not editor.dispatcher.confirming_quit

    for _ in range(quit_times - 1):
        assert editor.process_keypress(ctrl('q')) is True
    assert editor.process_keypress(ctrl('q')) is False


def test_unrecognized_key_also_resets_counter(make_editor):
    editor = make_editor(["x"])
    type_text(editor, "y")
    editor.process_keypress(ctrl('q'))
    assert editor.dispatcher.confirming_quit
    editor.process_keypress(ctrl('x'))
    assert not editor.dispatcher.confirming_quit
    assert raw_rows(editor) == ["yx"]


def test_page_keys_move_by_window(make_editor):
    editor = make_editor(["line %d" % i for i in range(50)], window_size=(80, 10))
    editor.process_keypress(key('page_down'))
    assert editor.cursor.cursor_y == 19
    editor.refresh_screen()
    editor.process_keypress(key('page_up'))
    assert editor.cursor.cursor_y == 0
