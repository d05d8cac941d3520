from writecore import modes
from writecore.buffer import TextBuffer
from writecore.modes import KeyEvent, key


def type_text(buf, text):
    for ch in text:
        buf.input(KeyEvent(modes.ENTER) if ch == "\n" else KeyEvent(ch))


def test_typing_builds_lines_and_tracks_cursor():
    buf = TextBuffer()
    type_text(buf, "hello\nworld")
    assert buf.lines == ["hello", "world"]
    assert buf.cursor == (1, 5)


def test_backspace_at_line_start_joins_lines():
    buf = TextBuffer()
    type_text(buf, "ab\ncd")
    buf.move_cursor(1, 0)
    assert buf.input(KeyEvent(modes.BACKSPACE)) is True
    assert buf.lines == ["abcd"]
    assert buf.cursor == (0, 2)


def test_backspace_at_start_of_buffer_is_noop():
    buf = TextBuffer("abc")
    assert buf.input(KeyEvent(modes.BACKSPACE)) is False
    assert buf.text == "abc"


def test_move_cursor_clamps_to_valid_positions():
    buf = TextBuffer("one\nthree")
    buf.move_cursor(10, 10)
    assert buf.cursor == (1, 5)
    buf.move_cursor(0, 99)
    assert buf.cursor == (0, 3)
    buf.move_cursor(-3, -3)
    assert buf.cursor == (0, 0)


def test_selection_text_and_anchor():
    buf = TextBuffer("hello world")
    buf.start_selection()
    for _ in range(5):
        buf.cursor_right()
    assert buf.selection_anchor == (0, 0)
    assert buf.selected_text() == "hello"

    buf.cancel_selection()
    assert buf.selection_anchor is None
    assert buf.selected_text() == ""


def test_selection_backwards_from_anchor():
    buf = TextBuffer("hello world")
    buf.move_to_end()
    buf.start_selection()
    buf.word_back()
    assert buf.selected_text() == "world"


def test_delete_char_under_cursor_does_not_join_lines():
    buf = TextBuffer("ab\ncd")
    buf.move_cursor(0, 2)
    assert buf.delete_char_under_cursor() is False
    assert buf.text == "ab\ncd"
    buf.move_cursor(0, 0)
    assert buf.delete_char_under_cursor() is True
    assert buf.text == "b\ncd"


def test_undo_restores_previous_text():
    buf = TextBuffer()
    type_text(buf, "ab")
    buf.undo()
    assert buf.text == "a"
    buf.undo()
    assert buf.text == ""


def test_ctrl_u_undoes_and_reports_change():
    buf = TextBuffer()
    type_text(buf, "x")
    assert buf.input(key('u', ctrl=True)) is True
    assert buf.text == ""


def test_word_motions():
    buf = TextBuffer("hello big world")
    buf.word_forward()
    assert buf.cursor == (0, 6)
    buf.word_forward()
    assert buf.cursor == (0, 10)
    buf.word_back()
    assert buf.cursor == (0, 6)


def test_tab_inserts_spaces_and_arrows_do_not_edit():
    buf = TextBuffer()
    assert buf.input(KeyEvent(modes.TAB)) is True
    assert buf.text == "    "
    assert buf.input(KeyEvent(modes.LEFT)) is False
    assert buf.cursor == (0, 3)


def test_single_line_buffer_ignores_enter():
    buf = TextBuffer(multiline=False)
    type_text(buf, "name")
    assert buf.input(KeyEvent(modes.ENTER)) is False
    assert buf.text == "name"


def test_control_chords_are_not_inserted():
    buf = TextBuffer()
    assert buf.input(key('s', ctrl=True)) is False
    assert buf.text == ""


def test_break_line_at_keeps_cursor_offset():
    buf = TextBuffer("aaa bbb")
    buf.move_to_end()
    buf.break_line_at(0, 3)
    assert buf.lines == ["aaa", "bbb"]
    assert buf.cursor == (1, 3)
