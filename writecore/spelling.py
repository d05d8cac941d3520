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

import re

from spellchecker import SpellChecker


class SpellCheck:
    """Advisory spell check over a whole text. The dictionary loads on first use."""

    def __init__(self, lang="en"):
        self.lang = lang
        self._spell = None

    @property
    def spell(self):
        if self._spell is None:
            self._spell = SpellChecker(language=self.lang)
        return self._spell

    def check_text(self, text):
        words = [w for w in re.findall(r"\w+", text.lower()) if not w.isdigit()]
        if not words:
            return set()
        return set(self.spell.unknown(words))
