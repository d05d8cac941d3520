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

"""Settings, flow history and drafts on disk.

settings.json lives in the config directory; flow_history.json and the
drafts/ folder live under the configurable storage path.
"""

import os, json
from dataclasses import dataclass, asdict, fields
from datetime import datetime, timezone

from writecore.logger import get_logger

logger = get_logger(__name__)

SETTINGS_FILE = "settings.json"
HISTORY_FILE = "flow_history.json"
DRAFTS_DIR = "drafts"


class StorageError(Exception):
    """A read/write/rename/delete that did not take effect."""


def default_config_dir():
    return os.environ.get("WRITEAPP_CONFIG_DIR") or os.path.join(os.path.expanduser("~"), ".config", "writeapp")


def default_storage_path():
    home = os.path.expanduser("~")
    docs = os.path.join(home, "Documents")
    return os.path.join(docs if os.path.isdir(docs) else home, "WriteApp")


@dataclass
class Settings:
    default_extension: str = "txt"
    storage_path: str = ""
    modal_editing_enabled: bool = False
    show_splash_screen: bool = True
    spellcheck_enabled: bool = True
    last_seen_version: str = ""

    def __post_init__(self):
        if not self.storage_path:
            self.storage_path = default_storage_path()

    @classmethod
    def from_dict(cls, data):
        """Build from parsed JSON, keeping defaults for missing or mistyped keys."""
        settings = cls()
        if not isinstance(data, dict):
            return settings
        for f in fields(cls):
            value = data.get(f.name)
            if isinstance(value, type(getattr(settings, f.name))):
                setattr(settings, f.name, value)
        if not settings.storage_path:
            settings.storage_path = default_storage_path()
        return settings

    def to_dict(self): return asdict(self)


@dataclass(frozen=True)
class FlowEntry:
    timestamp: datetime
    duration_minutes: int
    text: str

    def to_dict(self):
        return {
            "timestamp": self.timestamp.isoformat(),
            "duration_minutes": self.duration_minutes,
            "text": self.text,
        }

    @classmethod
    def from_dict(cls, data):
        stamp = str(data["timestamp"])
        if stamp.endswith("Z"):
            stamp = stamp[:-1] + "+00:00"
        timestamp = datetime.fromisoformat(stamp)
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return cls(timestamp, int(data["duration_minutes"]), str(data["text"]))


class Storage:
    def __init__(self, config_dir=None):
        self.config_dir = config_dir or default_config_dir()
        self.settings_path = os.path.join(self.config_dir, SETTINGS_FILE)
        self.storage_path = None

    # --- Paths ---
    def _content_dir(self):
        if self.storage_path is None:
            self.load_settings()
        path = os.path.expanduser(self.storage_path)
        os.makedirs(path, exist_ok=True)
        return path

    def _drafts_dir(self, create=True):
        path = os.path.join(self._content_dir(), DRAFTS_DIR)
        if create:
            os.makedirs(path, exist_ok=True)
        return path

    def _draft_path(self, name):
        if not name or name in (".", "..") or os.sep in name or (os.altsep and os.altsep in name):
            raise StorageError(f"Invalid draft name: {name!r}")
        return os.path.join(self._drafts_dir(), name)

    @staticmethod
    def _write(path, content):
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)

    # --- Settings ---
    def load_settings(self):
        settings = Settings()
        if os.path.exists(self.settings_path):
            try:
                with open(self.settings_path, "r", encoding="utf-8") as f:
                    settings = Settings.from_dict(json.load(f))
            except (OSError, ValueError) as e:
                logger.warning("Unreadable settings at %s, using defaults: %s", self.settings_path, e)
        self.storage_path = settings.storage_path
        return settings

    def save_settings(self, settings):
        try:
            os.makedirs(self.config_dir, exist_ok=True)
            self._write(self.settings_path, json.dumps(settings.to_dict(), indent=2))
        except OSError as e:
            logger.error("Could not save settings: %s", e)
            raise StorageError(str(e)) from e
        self.storage_path = settings.storage_path

    # --- Flow history ---
    def _history_path(self): return os.path.join(self._content_dir(), HISTORY_FILE)

    def load_flow_history(self):
        try:
            path = self._history_path()
            if not os.path.exists(path):
                return []
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except OSError as e:
            raise StorageError(str(e)) from e
        except ValueError as e:
            logger.warning("Malformed flow history, starting empty: %s", e)
            return []

        if not isinstance(raw, list):
            logger.warning("Flow history is not a list, starting empty")
            return []
        history = []
        for item in raw:
            try:
                history.append(FlowEntry.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed flow entry: %s", e)
        return history

    def save_flow_entry(self, entry):
        history = self.load_flow_history()
        history.append(entry)
        history.sort(key=lambda e: e.timestamp, reverse=True)
        try:
            self._write(self._history_path(), json.dumps([e.to_dict() for e in history], indent=2))
        except OSError as e:
            logger.error("Could not save flow entry: %s", e)
            raise StorageError(str(e)) from e
        logger.info("Saved flow entry (%d min, %d chars)", entry.duration_minutes, len(entry.text))

    # --- Drafts ---
    def list_drafts(self):
        try:
            path = self._drafts_dir(create=False)
            if not os.path.isdir(path):
                return []
            return sorted(n for n in os.listdir(path) if os.path.isfile(os.path.join(path, n)))
        except OSError as e:
            raise StorageError(str(e)) from e

    def load_draft(self, name):
        try:
            with open(self._draft_path(name), "r", encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            raise StorageError(str(e)) from e

    def save_draft(self, name, content):
        try:
            self._write(self._draft_path(name), content)
        except OSError as e:
            logger.error("Could not save draft %s: %s", name, e)
            raise StorageError(str(e)) from e
        logger.info("Saved draft %s", name)

    def rename_draft(self, old_name, new_name):
        try:
            old_path, new_path = self._draft_path(old_name), self._draft_path(new_name)
            if os.path.exists(new_path):
                raise StorageError(f"{new_name} already exists")
            os.rename(old_path, new_path)
        except OSError as e:
            logger.error("Could not rename draft %s: %s", old_name, e)
            raise StorageError(str(e)) from e
        logger.info("Renamed draft %s -> %s", old_name, new_name)

    def delete_draft(self, name):
        try:
            path = self._draft_path(name)
            if os.path.exists(path):
                os.remove(path)
        except OSError as e:
            raise StorageError(str(e)) from e
        logger.info("Deleted draft %s", name)
