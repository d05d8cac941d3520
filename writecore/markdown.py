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

"""Read-only markdown preview as prompt_toolkit formatted text fragments."""

import re

HEADER = re.compile(r'^(#{1,6})\s+(.*?)\s*#*$')
LIST_ITEM = re.compile(r'^(?:[*+-]|\d+[.)])\s+(.*)$')
INLINE = re.compile(r'`[^`]+`|\*\*.+?\*\*|__.+?__|(?<!\*)\*[^*\s][^*]*?\*(?!\*)|(?<!\w)_[^_\s][^_]*?_(?!\w)')


def inline_fragments(text, style=''):
    fragments = []
    last_pos = 0
    for m in INLINE.finditer(text):
        if m.start() > last_pos:
            fragments.append((style, text[last_pos:m.start()]))
        token = m.group()
        if token.startswith('`'):
            fragments.append(('class:md.code', token[1:-1]))
        elif token.startswith('**') or token.startswith('__'):
            fragments.append((f'{style} class:md.bold'.strip(), token[2:-2]))
        else:
            fragments.append((f'{style} class:md.italic'.strip(), token[1:-1]))
        last_pos = m.end()
    if last_pos < len(text):
        fragments.append((style, text[last_pos:]))
    return fragments


def render_markdown(text):
    fragments = []
    paragraph = []

    def flush():
        # Soft line breaks inside a paragraph collapse to spaces.
        if paragraph:
            fragments.extend(inline_fragments(' '.join(paragraph)))
            fragments.append(('', '\n\n'))
            paragraph.clear()

    for line in text.splitlines():
        stripped = line.strip()
        header = HEADER.match(stripped)
        item = LIST_ITEM.match(stripped)
        if not stripped:
            flush()
        elif header:
            flush()
            fragments.append(('class:md.header', header.group(2)))
            fragments.append(('', '\n\n'))
        elif item:
            flush()
            fragments.append(('', '• '))
            fragments.extend(inline_fragments(item.group(1)))
            fragments.append(('', '\n'))
        elif stripped.startswith('>'):
            flush()
            fragments.extend(inline_fragments(stripped.lstrip('> '), 'class:md.quote'))
            fragments.append(('', '\n'))
        else:
            paragraph.append(stripped)
    flush()
    return fragments
