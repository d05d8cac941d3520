# WriteApp
# Copyright (C) 2026 WriteApp contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.

from prompt_toolkit.buffer import Buffer
from prompt_toolkit.document import Document
from prompt_toolkit.selection import SelectionType

from writecore import modes

TAB_WIDTH = 4


class TextBuffer:
    """Lines + cursor + optional selection anchor, on top of a prompt_toolkit Buffer.

    Every text mutation goes through the prompt_toolkit document, which keeps the
    cursor inside the text and drops the selection, so positions never dangle.
    """

    def __init__(self, text="", multiline=True):
        self.multiline = multiline
        self.buffer = Buffer(multiline=multiline)
        self.reset(text)

    # --- Inspection ---
    @property
    def document(self): return self.buffer.document

    @property
    def text(self): return self.buffer.text

    @property
    def lines(self): return self.buffer.document.lines

    @property
    def cursor(self):
        doc = self.buffer.document
        return doc.cursor_position_row, doc.cursor_position_col

    @property
    def has_selection(self): return self.buffer.selection_state is not None

    @property
    def selection_anchor(self):
        if self.buffer.selection_state is None:
            return None
        index = self.buffer.selection_state.original_cursor_position
        return self.buffer.document.translate_index_to_position(index)

    def selected_text(self):
        if self.buffer.selection_state is None:
            return ""
        start, end = self.buffer.document.selection_range()
        return self.text[start:end]

    def is_blank(self): return not self.text.strip()

    def word_count(self): return len(self.text.split())

    # --- Whole-buffer operations ---
    def reset(self, text=""):
        """Replace the contents, cursor at the top, with a fresh undo history."""
        self.buffer.reset(Document(text, 0))

    def move_cursor(self, row, col):
        lines = self.lines
        row = max(0, min(row, len(lines) - 1))
        col = max(0, min(col, len(lines[row])))
        self.buffer.cursor_position = self.buffer.document.translate_row_col_to_index(row, col)

    def move_to_end(self): self.buffer.cursor_position = len(self.text)

    def break_line_at(self, row, col):
        """Turn the character at (row, col) into a line break, keeping the cursor offset."""
        doc = self.buffer.document
        index = doc.translate_row_col_to_index(row, col)
        text = doc.text[:index] + "\n" + doc.text[index + 1:]
        self.buffer.document = Document(text, min(doc.cursor_position, len(text)))

    # --- Selection ---
    def start_selection(self):
        self.buffer.start_selection(selection_type=SelectionType.CHARACTERS)

    def cancel_selection(self): self.buffer.exit_selection()

    # --- Editing ---
    def insert(self, text):
        self.buffer.save_to_undo_stack()
        self.buffer.insert_text(text)

    def delete_char_under_cursor(self):
        """Delete the character under the cursor without joining lines. Returns True on change."""
        doc = self.buffer.document
        if doc.cursor_position_col >= len(doc.current_line):
            return False
        self.buffer.save_to_undo_stack()
        return bool(self.buffer.delete(1))

    def backspace(self):
        if self.buffer.cursor_position == 0:
            return False
        self.buffer.save_to_undo_stack()
        return bool(self.buffer.delete_before_cursor(1))

    def delete_forward(self):
        if self.buffer.cursor_position >= len(self.text):
            return False
        self.buffer.save_to_undo_stack()
        return bool(self.buffer.delete(1))

    def undo(self): self.buffer.undo()

    # --- Cursor motions ---
    def cursor_left(self): self.buffer.cursor_left()

    def cursor_right(self): self.buffer.cursor_right()

    def cursor_up(self): self.buffer.cursor_up()

    def cursor_down(self): self.buffer.cursor_down()

    def cursor_home(self):
        self.buffer.cursor_position += self.buffer.document.get_start_of_line_position()

    def cursor_end(self):
        self.buffer.cursor_position += self.buffer.document.get_end_of_line_position()

    def word_forward(self):
        offset = self.buffer.document.find_next_word_beginning()
        if offset:
            self.buffer.cursor_position += offset
        else:
            self.move_to_end()

    def word_back(self):
        offset = self.buffer.document.find_previous_word_beginning()
        if offset:
            self.buffer.cursor_position += offset

    def input(self, event):
        """Ordinary text-area input. Returns True when the text changed."""
        if event.is_char():
            self.insert(event.code)
            return True
        if event.is_ctrl('u'):
            before = self.text
            self.undo()
            return self.text != before
        if event.modifiers & (modes.Modifiers.CONTROL | modes.Modifiers.ALT):
            return False

        code = event.code
        if code == modes.ENTER:
            if not self.multiline:
                return False
            self.insert("\n")
            return True
        if code == modes.TAB:
            self.insert(" " * TAB_WIDTH)
            return True
        if code == modes.BACKSPACE: return self.backspace()
        if code == modes.DELETE: return self.delete_forward()

        motions = {
            modes.LEFT: self.cursor_left,
            modes.RIGHT: self.cursor_right,
            modes.UP: self.cursor_up,
            modes.DOWN: self.cursor_down,
            modes.HOME: self.cursor_home,
            modes.END: self.cursor_end,
        }
        if code in motions:
            motions[code]()
        return False
