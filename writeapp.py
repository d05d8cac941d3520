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

import string, argparse, asyncio
from prompt_toolkit import Application
from prompt_toolkit.enums import EditingMode
from prompt_toolkit.layout import Layout, HSplit, VSplit, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import D
from prompt_toolkit.filters import Condition
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.styles import Style

from writecore import modes
from writecore.app import WriteApp, TICK_INTERVAL
from writecore.assets import VERSION, MENU_TEXT, HINTS, STRINGS, get_banner
from writecore.logger import DEFAULT_LEVEL, setup_logging, get_logger
from writecore.markdown import render_markdown
from writecore.modes import Mode, KeyEvent, Modifiers, RenameDraft, NewDraftFromSelection, AppendToDraftFromSelection
from writecore.storage import Storage, default_config_dir

logger = get_logger("writeapp")

# --- Style Definition ---
writeapp_style = Style.from_dict({
    # Markdown Styles
    'md.header': 'bold #ffd700',
    'md.bold': 'bold',
    'md.italic': 'italic',
    'md.code': 'bg:#333333 #ffffff',
    'md.quote': 'magenta',

    # UI elements
    'banner': 'bold cyan',
    'title': 'reverse bold',
    'hint': '#888888',
    'list-selected': 'bg:#444444 bold',
    'selection': 'reverse',
    'focus-dim': '#666666',
    'focus-line': '#ffffff bold',
    'status-bar': '#888888',
    'message': 'bg:#ffd700 #000000 bold',
    'timer': '#00ff00',
    'timer-low': '#ff0000 bold',
    'enabled': '#00ff00 bold',
    'disabled': '#ff0000 bold',
    'value': '#ffd700 bold',
    'path': 'italic #00ffff',
    'misspelled': '#ff0000 bold',
    'ok': '#00ff00 bold',
})

# --- Key translation ---
SPECIAL_KEYS = {
    Keys.Escape: modes.ESCAPE,
    Keys.ControlM: modes.ENTER,
    Keys.ControlJ: modes.ENTER,
    Keys.ControlH: modes.BACKSPACE,
    Keys.ControlI: modes.TAB,
    Keys.Delete: modes.DELETE,
    Keys.Up: modes.UP,
    Keys.Down: modes.DOWN,
    Keys.Left: modes.LEFT,
    Keys.Right: modes.RIGHT,
    Keys.Home: modes.HOME,
    Keys.End: modes.END,
}

PASTE_KEYS = {'\n': modes.ENTER, '\r': modes.ENTER, '\t': modes.TAB}


def translate_key(key_press):
    """Turn a prompt_toolkit KeyPress into zero or more KeyEvents."""
    key = key_press.key
    if key == Keys.BracketedPaste:
        events = []
        for ch in key_press.data.replace('\r\n', '\n'):
            if ch in PASTE_KEYS:
                events.append(KeyEvent(PASTE_KEYS[ch]))
            elif ch.isprintable():
                events.append(KeyEvent(ch))
        return events
    if isinstance(key, Keys):
        if key in SPECIAL_KEYS:
            return [KeyEvent(SPECIAL_KEYS[key])]
        if key.value.startswith('c-') and len(key.value) == 3:
            return [KeyEvent(key.value[2], Modifiers.CONTROL)]
        return []
    if len(key) == 1 and key.isprintable():
        return [KeyEvent(key)]
    return []


def format_remaining(seconds):
    total = max(0, int(seconds))
    return f"{total // 60:02d}:{total % 60:02d}"


# --- Main UI Class ---
class WriteAppUI:
    def __init__(self, core, input=None, output=None):
        self.core = core

        self.body_window = Window(
            FormattedTextControl(self.get_body_fragments, focusable=True, show_cursor=True),
            wrap_lines=True,
            always_hide_cursor=Condition(lambda: not self.shows_cursor()),
        )
        status_bar = Window(FormattedTextControl(self.get_status_fragments), height=1, style='class:status-bar')

        self.container = HSplit([
            Window(height=1),
            # Centered writing column
            VSplit([
                Window(),
                HSplit([self.body_window], width=D(preferred=100, max=100)),
                Window(),
            ]),
            status_bar,
        ])

        self.kb = KeyBindings()
        self.setup_bindings()

        self.application = Application(
            layout=Layout(self.container, focused_element=self.body_window),
            key_bindings=self.kb,
            full_screen=True,
            style=writeapp_style,
            editing_mode=EditingMode.EMACS,
            input=input,
            output=output,
        )

    def setup_bindings(self):
        # Specific keys are bound next to Keys.Any so they outrank the
        # default emacs bindings; eager avoids waiting on escape prefixes.
        keys = [Keys.Any, Keys.BracketedPaste] + list(SPECIAL_KEYS) + [f'c-{c}' for c in string.ascii_lowercase]
        for k in keys:
            self.kb.add(k, eager=True)(self.dispatch)

    def dispatch(self, event):
        for key_press in event.key_sequence:
            self.core.feed(translate_key(key_press))
        if self.core.should_quit:
            event.app.exit()

    def shows_cursor(self):
        core = self.core
        if core.mode is Mode.WRITING:
            return not core.preview_mode_active
        return core.mode in (Mode.FLOW, Mode.POPUP_INPUT)

    # --- Rendering ---
    def get_body_fragments(self):
        renderers = {
            Mode.SPLASH: self.render_splash,
            Mode.MENU: self.render_menu,
            Mode.WRITING: self.render_writing,
            Mode.FLOW: self.render_flow,
            Mode.FLOW_HISTORY: self.render_history,
            Mode.SETTINGS: self.render_settings,
            Mode.DRAFTS: self.render_drafts,
            Mode.POPUP_INPUT: self.render_popup,
            Mode.SPELL_CHECK: self.render_spellcheck,
        }
        return renderers[self.core.mode]()

    def buffer_fragments(self, text_buffer, focus=False):
        doc = text_buffer.document
        sel_start, sel_end = doc.selection_range() if text_buffer.has_selection else (-1, -1)
        fragments = []
        index = 0
        for row, line in enumerate(doc.lines):
            base = ''
            if focus:
                base = 'class:focus-line' if row == doc.cursor_position_row else 'class:focus-dim'
            for ch in line:
                if index == doc.cursor_position:
                    fragments.append(('[SetCursorPosition]', ''))
                fragments.append((f'{base} class:selection' if sel_start <= index < sel_end else base, ch))
                index += 1
            if index == doc.cursor_position:
                fragments.append(('[SetCursorPosition]', ''))
            fragments.append(('', '\n'))
            index += 1
        return fragments

    def render_splash(self):
        hint = STRINGS["ui"]["splash_hint"]
        return [('', '\n\n'), ('class:banner', get_banner()), ('', '\n\n\n'), ('class:hint', f"{hint:^48}")]

    def render_menu(self):
        title, _, rest = MENU_TEXT.strip('\n').partition('\n')
        return [('class:title', title), ('', '\n' + rest)]

    def render_writing(self):
        if self.core.preview_mode_active:
            return [('class:title', STRINGS["ui"]["preview_title"]), ('', '\n\n')] + render_markdown(self.core.buffer.text)
        return self.buffer_fragments(self.core.buffer, focus=self.core.focus_mode_active)

    def render_flow(self):
        # Flow is always in focus styling: only the current line is bright.
        return self.buffer_fragments(self.core.buffer, focus=True)

    def _list_fragments(self, title, items, selected):
        fragments = [('class:title', title), ('', '\n\n')]
        if not items:
            fragments.append(('class:hint', STRINGS["ui"]["empty_list"] + '\n'))
        for i, item in enumerate(items):
            style = 'class:list-selected' if i == selected else ''
            fragments.append((style, f" {'›' if i == selected else ' '} {item}"))
            fragments.append(('', '\n'))
        return fragments

    def render_history(self):
        items = []
        for entry in self.core.history:
            lines = entry.text.splitlines()
            preview = lines[0][:50] if lines else "Empty"
            stamp = entry.timestamp.astimezone().strftime("%Y-%m-%d %H:%M")
            items.append(f"{stamp} | {entry.duration_minutes}m | {preview}")
        return self._list_fragments(STRINGS["ui"]["history_title"], items, self.core.history_index)

    def render_drafts(self):
        appending = isinstance(self.core.popup_action, AppendToDraftFromSelection)
        title = STRINGS["ui"]["drafts_append_title" if appending else "drafts_title"]
        return self._list_fragments(title, self.core.drafts, self.core.drafts_index)

    def render_settings(self):
        settings = self.core.settings
        ui, status = STRINGS["ui"], STRINGS["status"]

        def flag(label, value):
            return [('', label), ('class:enabled' if value else 'class:disabled', status["enabled"] if value else status["disabled"]), ('', '\n')]

        return (
            [('class:title', ui["settings_title"]), ('', '\n\n'),
             ('', ' [e] Default Extension: '), ('class:value', settings.default_extension), ('', '\n')]
            + flag(' [v] Vim Mode: ', settings.modal_editing_enabled)
            + flag(' [s] Splash Screen: ', settings.show_splash_screen)
            + [('class:hint', ' ' + ui["splash_upgrade_hint"] + '\n')]
            + flag(' [c] Spell Check: ', settings.spellcheck_enabled)
            + [('', ' Storage Path: '), ('class:path', settings.storage_path), ('', '\n'),
               ('class:hint', ' ' + ui["storage_hint"] + '\n\n'), ('', ui["back_to_menu"])]
        )

    def render_spellcheck(self):
        ui = STRINGS["ui"]
        words = self.core.misspelled_words
        fragments = [('class:title', ui["spell_title"]), ('', '\n\n')]
        if not words:
            fragments.append(('class:ok', '✓ ' + ui["no_spelling_errors"] + '\n'))
        else:
            fragments.append(('class:value', ui["spelling_errors"].format(count=len(words)) + '\n\n'))
            for word in words:
                fragments += [('', '  • '), ('class:misspelled', word), ('', '\n')]
        fragments.append(('', '\n' + ui["back_to_writing"]))
        return fragments

    def render_popup(self):
        action = self.core.popup_action
        if isinstance(action, RenameDraft):
            title = STRINGS["ui"]["popup_rename"]
        elif isinstance(action, NewDraftFromSelection):
            title = STRINGS["ui"]["popup_new_draft"]
        else:
            title = STRINGS["ui"]["popup_input"]
        return [('', '\n\n'), ('class:title', f" {title} "), ('', '\n\n > ')] + self.buffer_fragments(self.core.popup_buffer)

    def get_status_fragments(self):
        core = self.core
        t = STRINGS["status"]
        result = []

        if core.mode in (Mode.WRITING, Mode.FLOW):
            result.append(('', f" {t['words']}: {core.buffer.word_count()} "))
        if core.mode is Mode.WRITING:
            if core.settings.modal_editing_enabled:
                result.append(('', f"| [{core.editor_mode.value}] "))
                hint = HINTS[core.editor_mode.name.lower()]
            else:
                hint = HINTS["direct"]
            result.append(('', f"| {t['menu_hint']} | {hint} "))
        if core.mode is Mode.FLOW:
            low = core.flow_remaining < 60
            result.append(('', '| '))
            result.append(('class:timer-low' if low else 'class:timer', f" {format_remaining(core.flow_remaining)} "))

        if core.message:
            result.append(('', '  '))
            result.append(('class:message', f"  {core.message}  "))
        return result

    async def run(self):
        async def refresh():
            while True:
                await asyncio.sleep(TICK_INTERVAL)
                self.core.tick()
                self.application.invalidate()

        # Background tasks are cleared when the app resets, so start the loop in pre_run.
        await self.application.run_async(pre_run=lambda: self.application.create_background_task(refresh()))


# --- Entry point ---
def positive_int(value):
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("must be a positive number of minutes")
    return number


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="writeapp", description="Distraction-free terminal writing.")
    parser.add_argument("--config-dir", help="Directory holding settings.json and the log file")
    parser.add_argument("--log-level", default=DEFAULT_LEVEL, help="Logging level (default: %(default)s)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    sub = parser.add_subparsers(dest="command")
    flow = sub.add_parser("flow", help="Start a distraction-free flow session")
    flow.add_argument("--time", type=positive_int, default=10, help="Duration in minutes")
    sub.add_parser("flow-history", help="View flow history")
    return parser.parse_args(argv)


def build_app(args, storage=None, spell=None):
    """Create the core and pre-seed it with the keys a user would press."""
    core = WriteApp(storage=storage or Storage(args.config_dir), spell=spell)
    if args.command and core.mode is Mode.SPLASH:
        core.handle_key_event(KeyEvent(' '))
    if args.command == "flow":
        core.start_flow(args.time)
    elif args.command == "flow-history":
        core.handle_key_event(KeyEvent('h'))
    return core


async def main(args):
    config_dir = args.config_dir or default_config_dir()
    setup_logging(args.log_level, config_dir)
    logger.info("Starting writeapp %s", VERSION)
    core = build_app(args, Storage(config_dir))
    await WriteAppUI(core).run()


def run(argv=None):
    args = parse_args(argv)
    try: asyncio.run(main(args))
    except (KeyboardInterrupt, EOFError): pass


if __name__ == "__main__":
    run()
