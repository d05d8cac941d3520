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

"""Modes, popup actions and key events shared by the core and the front end."""

from dataclasses import dataclass
from enum import Enum, Flag


class Mode(Enum):
    SPLASH = "splash"
    MENU = "menu"
    WRITING = "writing"
    FLOW = "flow"
    FLOW_HISTORY = "flow_history"
    SETTINGS = "settings"
    DRAFTS = "drafts"
    POPUP_INPUT = "popup_input"
    SPELL_CHECK = "spell_check"


class EditorMode(Enum):
    NORMAL = "NORMAL"
    INSERT = "INSERT"
    VISUAL = "VISUAL"


# --- Popup actions ---
# Why the input popup (or the drafts picker) is open. The payload lives here
# until the popup is confirmed or cancelled.

@dataclass(frozen=True)
class NoAction:
    pass


@dataclass(frozen=True)
class RenameDraft:
    identity: str


@dataclass(frozen=True)
class NewDraftFromSelection:
    text: str


@dataclass(frozen=True)
class AppendToDraftFromSelection:
    pass


NO_ACTION = NoAction()


# --- Key events ---

class Modifiers(Flag):
    NONE = 0
    CONTROL = 1
    ALT = 2
    SHIFT = 4


ESCAPE = "escape"
ENTER = "enter"
BACKSPACE = "backspace"
DELETE = "delete"
TAB = "tab"
UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"
HOME = "home"
END = "end"


@dataclass(frozen=True)
class KeyEvent:
    """A logical key plus modifiers: a single character or one of the named keys above."""
    code: str
    modifiers: Modifiers = Modifiers.NONE

    @property
    def ctrl(self):
        return bool(self.modifiers & Modifiers.CONTROL)

    def is_char(self, char=None):
        if len(self.code) != 1 or self.modifiers & (Modifiers.CONTROL | Modifiers.ALT):
            return False
        return char is None or self.code == char

    def is_ctrl(self, char):
        return self.ctrl and self.code == char


def key(code, ctrl=False):
    return KeyEvent(code, Modifiers.CONTROL if ctrl else Modifiers.NONE)
