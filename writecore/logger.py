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

"""Centralized logger configuration.

Usage:
    from writecore.logger import get_logger
    logger = get_logger(__name__)

The terminal belongs to the full-screen UI, so records go to a log file
(`writeapp.log` in the config directory) instead of stderr.
"""
import logging
import os

DEFAULT_LEVEL = os.getenv("WRITEAPP_LOG_LEVEL", "INFO").upper()
LOG_FILE_NAME = "writeapp.log"


def setup_logging(level=DEFAULT_LEVEL, log_dir=None):
    handlers = [logging.NullHandler()]
    if log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
            handlers = [logging.FileHandler(os.path.join(log_dir, LOG_FILE_NAME), encoding="utf-8")]
        except OSError:
            # No log file then; records go nowhere.
            pass
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


def get_logger(name):
    return logging.getLogger(name)
