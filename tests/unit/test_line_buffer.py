"""Tests for the command-line text buffer."""

from vimsearch.engine.line_buffer import LineBuffer


class TestLineBuffer:
    """Tests for LineBuffer editing and cursor motion."""

    def test_cursor_starts_at_end(self):
        assert LineBuffer("abc").cursor_index == 3

    def test_insert_at_cursor(self):
        buffer = LineBuffer("ac", cursor_index=1)
        buffer.insert("b")
        assert buffer.text == "abc"
        assert buffer.cursor_index == 2

    def test_backspace(self):
        buffer = LineBuffer("abc")
        assert buffer.backspace() is True
        assert buffer.text == "ab"
        buffer.home()
        assert buffer.backspace() is False

    def test_delete_under_cursor(self):
        buffer = LineBuffer("abc", cursor_index=0)
        assert buffer.delete() is True
        assert buffer.text == "bc"
        buffer.end()
        assert buffer.delete() is False

    def test_delete_word(self):
        buffer = LineBuffer("edit foo.bar")
        buffer.delete_word()
        assert buffer.text == "edit foo."
        buffer.delete_word()
        assert buffer.text == "edit foo"

    def test_delete_word_skips_trailing_spaces(self):
        buffer = LineBuffer("edit foo  ")
        buffer.delete_word()
        assert buffer.text == "edit "

    def test_delete_to_start(self):
        buffer = LineBuffer("abc def", cursor_index=4)
        buffer.delete_to_start()
        assert buffer.text == "def"
        assert buffer.cursor_index == 0

    def test_cursor_is_clamped(self):
        buffer = LineBuffer("ab")
        buffer.right()
        assert buffer.cursor_index == 2
        buffer.cursor_index = -5
        assert buffer.cursor_index == 0
        buffer.left()
        assert buffer.cursor_index == 0

    def test_word_motion(self):
        buffer = LineBuffer("edit some/file.txt now", cursor_index=0)
        buffer.word_right()
        assert buffer.cursor_index == 5
        buffer.word_right()
        assert buffer.cursor_index == 19
        buffer.word_left()
        assert buffer.cursor_index == 5

    def test_text_setter_clamps_cursor(self):
        buffer = LineBuffer("abcdef")
        buffer.text = "ab"
        assert buffer.cursor_index == 2
        assert buffer.text_before_cursor == "ab"
        assert buffer.text_after_cursor == ""
