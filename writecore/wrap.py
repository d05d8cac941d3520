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

"""Soft wrap: break the cursor line at the last space inside the column limit."""

WRAP_LIMIT = 90


def split_column(line, limit=WRAP_LIMIT):
    """Column of the space to break `line` at, or None when it fits or cannot be broken."""
    if len(line) <= limit:
        return None
    index = line.rfind(" ", 0, limit)
    return index if index >= 0 else None


def soft_wrap(text_buffer, limit=WRAP_LIMIT):
    """Wrap the line under the cursor of `text_buffer`. Returns True if it was split.

    Lines without a space in the first `limit` columns (long URLs and the like)
    are left alone. A pending selection is never disturbed.
    """
    if text_buffer.has_selection:
        return False

    row, col = text_buffer.cursor
    split = split_column(text_buffer.lines[row], limit)
    if split is None:
        return False

    text_buffer.break_line_at(row, split)
    if col > split:
        text_buffer.move_cursor(row + 1, col - split - 1)
    else:
        text_buffer.move_cursor(row, col)
    return True
