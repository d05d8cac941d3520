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

import os, time
from datetime import datetime, timezone

from writecore import modes
from writecore.assets import VERSION, STRINGS
from writecore.buffer import TextBuffer
from writecore.logger import get_logger
from writecore.modes import (
    Mode, EditorMode, NO_ACTION, RenameDraft, NewDraftFromSelection, AppendToDraftFromSelection,
)
from writecore.spelling import SpellCheck
from writecore.storage import Storage, FlowEntry, StorageError
from writecore.wrap import soft_wrap

logger = get_logger(__name__)

TICK_INTERVAL = 0.25      # seconds between ticks of the event loop
MESSAGE_TIMEOUT = 3.0     # seconds a status message stays up
SPLASH_TIMEOUT = 30.0
DEFAULT_FLOW_MINUTES = 10

# Menu key -> flow session length in minutes
FLOW_KEYS = {'f': 10, '5': 5, '1': 15}

# Settings key -> boolean field it flips ('e' cycles the extension instead)
SETTING_TOGGLES = {
    'v': 'modal_editing_enabled',
    's': 'show_splash_screen',
    'c': 'spellcheck_enabled',
}


def next_index(index, length):
    if length == 0:
        return None
    if index is None or index >= length - 1:
        return 0
    return index + 1


def previous_index(index, length):
    if length == 0:
        return None
    if index is None or index == 0:
        return length - 1
    return index - 1


# --- Application State ---
class WriteApp:
    """The whole interactive state of the editor plus its key and tick handlers.

    Collaborators (storage, spell checker, clock) are injected so the state
    machine can run without a terminal.
    """

    def __init__(self, storage=None, spell=None, clock=time.monotonic, version=VERSION):
        self.storage = storage or Storage()
        self.spell = spell or SpellCheck()
        self.clock = clock
        self.version = version
        self.settings = self.storage.load_settings()

        # Modes
        self.mode = Mode.SPLASH if self.should_show_splash() else Mode.MENU
        self.editor_mode = EditorMode.INSERT
        self.popup_action = NO_ACTION
        self.should_quit = False
        self.splash_start = self.clock() if self.mode is Mode.SPLASH else None

        # Buffers
        self.buffer = TextBuffer()
        self.popup_buffer = TextBuffer(multiline=False)
        self.register = ""
        self.current_draft_name = None
        self.focus_mode_active = False
        self.preview_mode_active = False
        self.misspelled_words = []

        # Lists
        self.drafts = []
        self.drafts_index = None
        self.history = []
        self.history_index = None

        # Flow timer
        self.flow_duration = DEFAULT_FLOW_MINUTES * 60
        self.flow_start = None
        self.flow_remaining = self.flow_duration

        # Message overlay
        self.message = None
        self.message_time = None

        self._handlers = {
            Mode.SPLASH: self._handle_splash,
            Mode.MENU: self._handle_menu,
            Mode.WRITING: self._handle_writing,
            Mode.FLOW: self._handle_flow,
            Mode.FLOW_HISTORY: self._handle_history,
            Mode.SETTINGS: self._handle_settings,
            Mode.DRAFTS: self._handle_drafts,
            Mode.POPUP_INPUT: self._handle_popup,
            Mode.SPELL_CHECK: self._handle_spellcheck,
        }
        self._editor_handlers = {
            EditorMode.NORMAL: self._handle_normal,
            EditorMode.INSERT: self._handle_insert,
            EditorMode.VISUAL: self._handle_visual,
        }

    def _t(self, msg_id, **kwargs):
        text = STRINGS["messages"][msg_id]
        return text.format(**kwargs) if kwargs else text

    def set_message(self, msg):
        self.message = msg
        self.message_time = self.clock()

    def should_show_splash(self):
        return self.settings.show_splash_screen or self.settings.last_seen_version != self.version

    # --- Event entry points ---
    def handle_key_event(self, event):
        self._handlers[self.mode](event)

    def feed(self, events):
        for event in events:
            self.handle_key_event(event)

    def tick(self):
        now = self.clock()

        if self.mode is Mode.FLOW and self.flow_start is not None:
            elapsed = now - self.flow_start
            if elapsed >= self.flow_duration:
                self.flow_remaining = 0
                self.end_flow(save=True)
            else:
                self.flow_remaining = self.flow_duration - elapsed

        if self.mode is Mode.SPLASH and self.splash_start is not None:
            if now - self.splash_start >= SPLASH_TIMEOUT:
                self.leave_splash()

        if self.message_time is not None and now - self.message_time > MESSAGE_TIMEOUT:
            self.message = None
            self.message_time = None

    # --- Splash & Menu ---
    def leave_splash(self):
        self.mode = Mode.MENU
        self.splash_start = None
        self.settings.last_seen_version = self.version
        self._persist_settings()

    def _handle_splash(self, event):
        self.leave_splash()

    def _handle_menu(self, event):
        if not event.is_char():
            return
        c = event.code
        if c == 'q':
            self.should_quit = True
        elif c in FLOW_KEYS:
            self.start_flow(FLOW_KEYS[c])
        elif c == 'n':
            self._enter_writing("")
            self.set_message(self._t("writing_mode"))
        elif c == 'h':
            self.mode = Mode.FLOW_HISTORY
            self.load_history()
        elif c == 'd':
            self.mode = Mode.DRAFTS
            self.load_drafts()
        elif c == 's':
            self.mode = Mode.SETTINGS

    # --- Writing ---
    def _enter_writing(self, text, draft_name=None):
        """Fresh entry into Writing: new buffer contents and a clean sub-mode."""
        self.buffer.reset(text)
        self.current_draft_name = draft_name
        self.preview_mode_active = False
        self.editor_mode = EditorMode.NORMAL if self.settings.modal_editing_enabled else EditorMode.INSERT
        self.mode = Mode.WRITING

    def _leave_writing(self):
        self.buffer.cancel_selection()
        self.mode = Mode.MENU
        self.current_draft_name = None  # next New starts unnamed

    def _edit(self, event):
        if event.is_ctrl('y'):
            changed = self.paste_register()
        else:
            changed = self.buffer.input(event)
        if changed:
            soft_wrap(self.buffer)

    def _handle_writing(self, event):
        if self._handle_global_shortcut(event):
            return
        # Preview is read-only: only Escape gets through.
        if self.preview_mode_active and event.code != modes.ESCAPE:
            return
        if not self.settings.modal_editing_enabled:
            if event.code == modes.ESCAPE:
                self._leave_writing()
            else:
                self._edit(event)
            return
        self._editor_handlers[self.editor_mode](event)

    def _handle_global_shortcut(self, event):
        if not event.ctrl:
            return False
        action = {
            's': self.save_draft,
            'f': self.toggle_focus,
            'p': self.toggle_preview,
            'l': self.run_spellcheck,
            'r': self.open_rename_popup,
        }.get(event.code)
        if action is None:
            return False
        action()
        return True

    def save_draft(self):
        name = self.current_draft_name
        if not name:
            name = datetime.now().strftime("draft_%Y-%m-%d-%H%M%S") + "." + self.settings.default_extension
        try:
            self.storage.save_draft(name, self.buffer.text)
        except StorageError as e:
            self.set_message(self._t("draft_save_error", error=e))
            return
        self.current_draft_name = name
        self.set_message(self._t("draft_saved", name=name))

    def toggle_focus(self):
        self.focus_mode_active = not self.focus_mode_active
        self.set_message(self._t("focus_on" if self.focus_mode_active else "focus_off"))

    def toggle_preview(self):
        self.preview_mode_active = not self.preview_mode_active
        self.set_message(self._t("preview_on" if self.preview_mode_active else "preview_off"))

    def run_spellcheck(self):
        if not self.settings.spellcheck_enabled:
            self.set_message(self._t("spellcheck_disabled"))
            return
        self.misspelled_words = sorted(self.spell.check_text(self.buffer.text))
        self.mode = Mode.SPELL_CHECK

    def open_rename_popup(self):
        if not self.current_draft_name:
            self.set_message(self._t("not_saved_yet"))
            return
        self._open_popup(RenameDraft(self.current_draft_name), self.current_draft_name)

    def paste_register(self):
        if not self.register:
            self.set_message(self._t("register_empty"))
            return False
        self.buffer.insert(self.register)
        return True

    # --- Modal sub-editor ---
    def _move_cursor(self, event):
        if event.modifiers & (modes.Modifiers.CONTROL | modes.Modifiers.ALT):
            return False
        motion = {
            'h': self.buffer.cursor_left, modes.LEFT: self.buffer.cursor_left,
            'j': self.buffer.cursor_down, modes.DOWN: self.buffer.cursor_down,
            'k': self.buffer.cursor_up, modes.UP: self.buffer.cursor_up,
            'l': self.buffer.cursor_right, modes.RIGHT: self.buffer.cursor_right,
            'w': self.buffer.word_forward,
            'b': self.buffer.word_back,
        }.get(event.code)
        if motion is None:
            return False
        motion()
        return True

    def _handle_insert(self, event):
        if event.code == modes.ESCAPE:
            self.editor_mode = EditorMode.NORMAL
        else:
            self._edit(event)

    def _handle_normal(self, event):
        if event.code == modes.ESCAPE:
            self._leave_writing()
            return
        if self._move_cursor(event) or not event.is_char():
            return
        c = event.code
        if c == 'i':
            self.editor_mode = EditorMode.INSERT
        elif c == 'v':
            self.buffer.start_selection()
            self.editor_mode = EditorMode.VISUAL
        elif c == 'x':
            self.buffer.delete_char_under_cursor()
        elif c == 'u':
            self.buffer.undo()
        elif c == 'p':
            if self.paste_register():
                soft_wrap(self.buffer)

    def _exit_visual(self):
        self.buffer.cancel_selection()
        self.editor_mode = EditorMode.NORMAL

    def _handle_visual(self, event):
        if event.code == modes.ESCAPE:
            self._exit_visual()
            return
        if self._move_cursor(event) or not event.is_char():
            return
        c = event.code
        if c == 'y':
            self.yank_selection()
        elif c == 'n':
            self.new_draft_from_selection()
        elif c == 'a':
            self.append_selection_to_draft()

    # --- Selection workflow ---
    def yank_selection(self):
        text = self.buffer.selected_text()
        if text:
            self.register = text
        self.set_message(self._t("yanked", count=len(text)))
        self._exit_visual()

    def _selection_or_abort(self):
        text = self.buffer.selected_text()
        if not text:
            self.set_message(self._t("empty_selection"))
            self._exit_visual()
        return text

    def new_draft_from_selection(self):
        text = self._selection_or_abort()
        if text:
            # Visual mode and its anchor stay put until the popup is confirmed.
            self._open_popup(NewDraftFromSelection(text))

    def append_selection_to_draft(self):
        text = self._selection_or_abort()
        if not text:
            return
        self.register = text
        self._exit_visual()
        self.popup_action = AppendToDraftFromSelection()
        self.mode = Mode.DRAFTS
        self.set_message(self._t("append_pick"))
        self.load_drafts()

    def _open_popup(self, action, text=""):
        self.popup_action = action
        self.popup_buffer.reset(text)
        self.popup_buffer.move_to_end()
        self.mode = Mode.POPUP_INPUT

    def _handle_popup(self, event):
        if event.code == modes.ESCAPE:
            action, self.popup_action = self.popup_action, NO_ACTION
            self.popup_buffer.reset()
            if isinstance(action, RenameDraft):
                self._show_drafts(action.identity)
            else:
                self.mode = Mode.WRITING
        elif event.code == modes.ENTER:
            self._commit_popup()
        else:
            self.popup_buffer.input(event)

    def _commit_popup(self):
        action, self.popup_action = self.popup_action, NO_ACTION
        name = self.popup_buffer.text.strip()
        if isinstance(action, NewDraftFromSelection):
            self.popup_buffer.reset()
            self._commit_new_draft(action.text, name)
        elif isinstance(action, RenameDraft):
            self.popup_buffer.reset()
            self._commit_rename(action.identity, name)

    def _commit_new_draft(self, content, name):
        self.mode = Mode.WRITING
        if not name:
            self.set_message(self._t("empty_name"))
            return
        if not os.path.splitext(name)[1]:
            name = f"{name}.{self.settings.default_extension}"
        try:
            self.storage.save_draft(name, content)
        except StorageError as e:
            self.set_message(self._t("draft_save_error", error=e))
            return
        self._exit_visual()
        self.set_message(self._t("draft_created", name=name))

    def _commit_rename(self, old_name, new_name):
        if not new_name:
            self.set_message(self._t("empty_name"))
            self._show_drafts(old_name)
            return
        if new_name == old_name:
            self._show_drafts(old_name)
            return
        try:
            self.storage.rename_draft(old_name, new_name)
        except StorageError as e:
            self.set_message(self._t("draft_rename_error", error=e))
            self._show_drafts(old_name)
            return
        if self.current_draft_name == old_name:
            self.current_draft_name = new_name
        self._show_drafts(new_name)
        self.set_message(self._t("draft_renamed", name=new_name))

    # --- Drafts ---
    def load_drafts(self):
        try:
            self.drafts = self.storage.list_drafts()
        except StorageError as e:
            self.set_message(self._t("drafts_load_error", error=e))
            return
        self.drafts_index = 0 if self.drafts else None

    def _show_drafts(self, selected=None):
        """Switch to Drafts with a fresh list, keeping `selected` highlighted when it is there."""
        self.mode = Mode.DRAFTS
        self.load_drafts()
        if selected in self.drafts:
            self.drafts_index = self.drafts.index(selected)

    def selected_draft(self):
        if self.drafts_index is None or self.drafts_index >= len(self.drafts):
            return None
        return self.drafts[self.drafts_index]

    def _handle_drafts(self, event):
        code = event.code
        appending = isinstance(self.popup_action, AppendToDraftFromSelection)
        if code == modes.ESCAPE:
            self.popup_action = NO_ACTION
            self.current_draft_name = None
            self.mode = Mode.MENU
        elif code == modes.DOWN:
            self.drafts_index = next_index(self.drafts_index, len(self.drafts))
        elif code == modes.UP:
            self.drafts_index = previous_index(self.drafts_index, len(self.drafts))
        elif code == modes.ENTER:
            self.open_selected_draft()
        # Rename and delete are off while picking an append target.
        elif appending:
            return
        elif event.is_char('r'):
            name = self.selected_draft()
            if name:
                self._open_popup(RenameDraft(name), name)
        elif event.is_char('d') or code == modes.DELETE:
            self.delete_selected_draft()

    def open_selected_draft(self):
        name = self.selected_draft()
        if name is None:
            return
        try:
            content = self.storage.load_draft(name)
        except StorageError as e:
            self.set_message(self._t("draft_load_error", error=e))
            return

        if isinstance(self.popup_action, AppendToDraftFromSelection):
            self.popup_action = NO_ACTION
            if content.strip():
                content = content.rstrip("\n") + "\n\n"
            self._enter_writing(content, name)
            self.buffer.move_to_end()
            paste_key = "p" if self.settings.modal_editing_enabled else "Ctrl+Y"
            self.set_message(self._t("append_ready", name=name, key=paste_key))
        else:
            self._enter_writing(content, name)
            self.set_message(self._t("draft_loaded", name=name))
        logger.info("Opened draft %s", name)

    def delete_selected_draft(self):
        name = self.selected_draft()
        if name is None:
            return
        try:
            self.storage.delete_draft(name)
        except StorageError as e:
            self.set_message(self._t("draft_delete_error", error=e))
            return
        if self.current_draft_name == name:
            self.current_draft_name = None
        self.set_message(self._t("draft_deleted"))
        self.load_drafts()

    # --- Flow history ---
    def load_history(self):
        try:
            self.history = self.storage.load_flow_history()
        except StorageError as e:
            self.set_message(self._t("history_load_error", error=e))
            return
        self.history_index = 0 if self.history else None

    def _handle_history(self, event):
        code = event.code
        if code == modes.ESCAPE:
            self.mode = Mode.MENU
        elif code == modes.DOWN:
            self.history_index = next_index(self.history_index, len(self.history))
        elif code == modes.UP:
            self.history_index = previous_index(self.history_index, len(self.history))
        elif code == modes.ENTER and self.history_index is not None and self.history_index < len(self.history):
            self._enter_writing(self.history[self.history_index].text)
            self.set_message(self._t("history_loaded"))

    # --- Settings ---
    def _persist_settings(self):
        try:
            self.storage.save_settings(self.settings)
        except StorageError as e:
            self.set_message(self._t("settings_error", error=e))

    def _handle_settings(self, event):
        if event.code == modes.ESCAPE or event.is_char('q'):
            self.mode = Mode.MENU
            return
        if not event.is_char():
            return
        if event.code == 'e':
            self.settings.default_extension = "md" if self.settings.default_extension == "txt" else "txt"
        elif event.code in SETTING_TOGGLES:
            field = SETTING_TOGGLES[event.code]
            setattr(self.settings, field, not getattr(self.settings, field))
        else:
            return
        self._persist_settings()

    # --- Spell check ---
    def _handle_spellcheck(self, event):
        if event.code == modes.ESCAPE:
            self.misspelled_words = []
            self.mode = Mode.WRITING

    # --- Flow sessions ---
    def start_flow(self, minutes):
        self.mode = Mode.FLOW
        self.preview_mode_active = False
        self.flow_duration = int(minutes) * 60
        self.flow_remaining = self.flow_duration
        self.flow_start = self.clock()
        self.buffer.reset()
        logger.info("Flow session started (%s min)", minutes)

    def end_flow(self, save):
        saved_message = self._save_flow_entry() if save else None
        self.buffer.reset()
        self.mode = Mode.MENU
        self.flow_start = None
        self.set_message(saved_message or self._t("flow_ended"))
        logger.info("Flow session ended")

    def _save_flow_entry(self):
        """Persist the session text. Returns the message to show, or None for an empty buffer."""
        if self.buffer.is_blank():
            return None
        text = self.buffer.text
        entry = FlowEntry(
            timestamp=datetime.now(timezone.utc),
            duration_minutes=int(self.flow_duration // 60),
            text=text,
        )
        try:
            self.storage.save_flow_entry(entry)
        except StorageError as e:
            return self._t("flow_save_error", error=e)
        return self._t("flow_saved")

    def _handle_flow(self, event):
        if event.code == modes.ESCAPE:
            self.end_flow(save=True)
        else:
            self._edit(event)
