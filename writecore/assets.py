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

# assets.py

# Version info

VERSION = "0.3.0"

BANNER = r"""
 __        __    _ _          _
 \ \      / / __(_) |_ ___   / \   _ __  _ __
  \ \ /\ / / '__| | __/ _ \ / _ \ | '_ \| '_ \
   \ V  V /| |  | | ||  __// ___ \| |_) | |_) |
    \_/\_/ |_|  |_|\__\___/_/   \_\ .__/| .__/
                                  |_|   |_|
"""

def get_banner():
    return BANNER.strip("\n") + f"\n\n{'v' + VERSION:^48}"

MENU_TEXT = """
 writeapp

 [n] New Draft
 [f] Flow Mode (10 min)
 [5] Flow Mode (5 min)
 [1] Flow Mode (15 min)
 [h] History
 [d] Drafts
 [s] Settings
 [q] Quit
"""

# Hints shown in the Writing status line, per sub-mode
HINTS = {
    "direct": "Ctrl+R: Rename | Ctrl+F: Focus | Ctrl+P: Preview | Ctrl+L: Spell Check",
    "normal": "i: Insert | v: Visual | p: Paste | Ctrl+R: Rename",
    "insert": "Esc: Normal | Ctrl+S: Save",
    "visual": "n: New Draft | a: Append | y: Yank",
}

# Dictionary for UI labels and messages
STRINGS = {
    "ui": {
        "splash_hint": "Press any key to continue...",
        "history_title": " Flow History ",
        "drafts_title": " Drafts (Enter to open, r to rename, d to delete) ",
        "drafts_append_title": " Append to which draft? (Enter to pick, Esc to cancel) ",
        "settings_title": " Settings ",
        "spell_title": " Spell Check Results ",
        "preview_title": " Preview (Markdown Read Only) ",
        "popup_rename": "Rename Draft (Enter new name)",
        "popup_new_draft": "New Draft Name",
        "popup_input": "Input",
        "empty_list": "   (nothing here yet)",
        "no_spelling_errors": "No spelling errors found!",
        "spelling_errors": "Found {count} potentially misspelled word(s):",
        "back_to_menu": " [Esc] Back to Menu",
        "back_to_writing": " [Esc] Back to Writing",
        "storage_hint": "(Edit storage path in settings.json)",
        "splash_upgrade_hint": "(Splash always shows on version upgrades)",
    },
    "messages": {
        "writing_mode": "Writing mode",
        "flow_saved": "Saved flow session.",
        "flow_ended": "Flow session ended.",
        "flow_save_error": "Error saving: {error}",
        "history_load_error": "Failed to load history: {error}",
        "history_loaded": "Loaded history entry",
        "drafts_load_error": "Failed to load drafts: {error}",
        "draft_loaded": "Loaded {name}",
        "draft_load_error": "Error loading draft: {error}",
        "draft_deleted": "Deleted draft",
        "draft_delete_error": "Error deleting: {error}",
        "draft_saved": "Saved {name}",
        "draft_save_error": "Error saving: {error}",
        "draft_created": "Created {name}",
        "draft_renamed": "Renamed to {name}",
        "draft_rename_error": "Error renaming: {error}",
        "append_ready": "Appending to {name}: press {key} to paste",
        "append_pick": "Pick a draft to append to",
        "settings_error": "Error saving settings: {error}",
        "focus_on": "Focus Mode ON",
        "focus_off": "Focus Mode OFF",
        "preview_on": "Preview ON",
        "preview_off": "Preview OFF",
        "spellcheck_disabled": "Spell check is disabled in Settings",
        "not_saved_yet": "Save the draft first (Ctrl+S)",
        "empty_selection": "Nothing selected",
        "empty_name": "Name cannot be empty",
        "yanked": "Yanked {count} characters",
        "register_empty": "Nothing to paste",
    },
    "status": {
        "words": "Words",
        "menu_hint": "Esc: Menu | Ctrl+S: Save",
        "enabled": "Enabled",
        "disabled": "Disabled",
    },
}
