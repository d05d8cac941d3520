import pytest
from unittest.mock import patch

from writecore import modes
from writecore.app import WriteApp, MESSAGE_TIMEOUT, SPLASH_TIMEOUT
from writecore.assets import VERSION
from writecore.modes import Mode, EditorMode, KeyEvent, NO_ACTION, key
from writecore.storage import Storage, Settings, StorageError


def press(app, *codes):
    for code in codes:
        app.handle_key_event(KeyEvent(code))


def make_app(tmp_path, clock, fake_spell, **settings):
    store = Storage(config_dir=str(tmp_path / "cfg"))
    store.save_settings(Settings(storage_path=str(tmp_path / "content"), **settings))
    return WriteApp(storage=store, spell=fake_spell, clock=clock), store


# --- Splash ---
def test_first_run_starts_on_splash(tmp_path, clock, fake_spell):
    app, _ = make_app(tmp_path, clock, fake_spell, show_splash_screen=False, last_seen_version="")
    assert app.mode is Mode.SPLASH


def test_upgrade_shows_splash_with_exact_version_match(tmp_path, clock, fake_spell):
    app, _ = make_app(tmp_path, clock, fake_spell, show_splash_screen=False, last_seen_version=VERSION + ".0")
    assert app.mode is Mode.SPLASH


def test_seen_version_with_splash_off_starts_on_menu(robot):
    assert robot.mode is Mode.MENU


def test_any_key_leaves_splash_and_records_version(tmp_path, clock, fake_spell):
    app, store = make_app(tmp_path, clock, fake_spell, show_splash_screen=False, last_seen_version="0.0.1")
    press(app, 'z')
    assert app.mode is Mode.MENU
    assert store.load_settings().last_seen_version == VERSION


def test_splash_times_out(tmp_path, clock, fake_spell):
    app, _ = make_app(tmp_path, clock, fake_spell, show_splash_screen=True)
    clock.advance(SPLASH_TIMEOUT - 1)
    app.tick()
    assert app.mode is Mode.SPLASH
    clock.advance(1)
    app.tick()
    assert app.mode is Mode.MENU


# --- Menu ---
def test_every_mode_has_a_handler(robot):
    assert set(robot._handlers) == set(Mode)
    assert set(robot._editor_handlers) == set(EditorMode)


@pytest.mark.parametrize("code, mode", [
    ('n', Mode.WRITING),
    ('f', Mode.FLOW),
    ('5', Mode.FLOW),
    ('h', Mode.FLOW_HISTORY),
    ('d', Mode.DRAFTS),
    ('s', Mode.SETTINGS),
])
def test_menu_transitions(robot, code, mode):
    press(robot, code)
    assert robot.mode is mode


def test_menu_flow_keys_pick_duration(robot):
    press(robot, '5')
    assert robot.flow_duration == 5 * 60
    press(robot, modes.ESCAPE, 'f')
    assert robot.flow_duration == 10 * 60


def test_menu_quit_sets_flag(robot):
    press(robot, 'q')
    assert robot.should_quit


def test_unmatched_keys_are_noops(robot):
    press(robot, 'z', modes.ENTER, modes.UP)
    robot.handle_key_event(key('s', ctrl=True))
    assert robot.mode is Mode.MENU
    assert not robot.should_quit


# --- Writing ---
def test_writing_escape_returns_to_menu_and_forgets_draft(robot, storage):
    storage.save_draft("story.txt", "once upon a time")
    press(robot, 'd', modes.ENTER)
    assert robot.mode is Mode.WRITING
    assert robot.current_draft_name == "story.txt"

    press(robot, modes.ESCAPE)
    assert robot.mode is Mode.MENU
    assert robot.current_draft_name is None


def test_direct_writing_forwards_every_key(robot):
    press(robot, 'n', 'h', 'i', 'v')
    assert robot.buffer.text == "hiv"
    assert robot.editor_mode is EditorMode.INSERT


# --- Drafts ---
@pytest.fixture
def two_drafts(storage):
    storage.save_draft("b.txt", "beta")
    storage.save_draft("a.txt", "alpha")
    return storage


def test_drafts_list_is_sorted_and_selection_cycles(robot, two_drafts):
    press(robot, 'd')
    assert robot.drafts == ["a.txt", "b.txt"]
    assert robot.drafts_index == 0
    press(robot, modes.DOWN)
    assert robot.drafts_index == 1
    press(robot, modes.DOWN)
    assert robot.drafts_index == 0
    press(robot, modes.UP)
    assert robot.drafts_index == 1


def test_drafts_enter_opens_selected_draft(robot, two_drafts):
    press(robot, 'd', modes.DOWN, modes.ENTER)
    assert robot.mode is Mode.WRITING
    assert robot.buffer.text == "beta"
    assert robot.current_draft_name == "b.txt"
    assert robot.message == "Loaded b.txt"


def test_drafts_delete_removes_and_reloads(robot, two_drafts):
    press(robot, 'd', 'd')
    assert robot.drafts == ["b.txt"]
    assert two_drafts.list_drafts() == ["b.txt"]


def test_drafts_escape_cancels_pending_action(robot, two_drafts):
    robot.popup_action = modes.AppendToDraftFromSelection()
    press(robot, 'd', modes.ESCAPE)
    assert robot.mode is Mode.MENU
    assert robot.popup_action == NO_ACTION


def test_empty_drafts_list_ignores_navigation(robot):
    press(robot, 'd', modes.DOWN, modes.ENTER)
    assert robot.drafts == []
    assert robot.drafts_index is None
    assert robot.mode is Mode.DRAFTS


def test_drafts_load_error_is_reported(robot, two_drafts):
    with patch.object(two_drafts, "load_draft", side_effect=StorageError("gone")):
        press(robot, 'd', modes.ENTER)
    assert robot.mode is Mode.DRAFTS
    assert robot.message == "Error loading draft: gone"


# --- Flow history ---
def test_history_enter_loads_entry_into_writing(robot, storage):
    press(robot, 'f')
    for ch in "first session":
        press(robot, ch)
    press(robot, modes.ESCAPE, 'h')
    assert robot.mode is Mode.FLOW_HISTORY
    assert robot.history_index == 0

    press(robot, modes.UP)
    assert robot.history_index == 0
    press(robot, modes.ENTER)
    assert robot.mode is Mode.WRITING
    assert robot.buffer.text == "first session"
    assert robot.current_draft_name is None


def test_history_escape_returns_to_menu(robot):
    press(robot, 'h', modes.ESCAPE)
    assert robot.mode is Mode.MENU


# --- Settings ---
def test_settings_toggles_persist_immediately(robot, storage):
    press(robot, 's', 'e', 'v', 's', 'c')
    saved = storage.load_settings()
    assert saved.default_extension == "md"
    assert saved.modal_editing_enabled is True
    assert saved.show_splash_screen is True
    assert saved.spellcheck_enabled is False

    press(robot, 'e')
    assert storage.load_settings().default_extension == "txt"
    press(robot, 'q')
    assert robot.mode is Mode.MENU


def test_settings_save_failure_is_reported_not_raised(robot, storage):
    with patch.object(storage, "save_settings", side_effect=StorageError("disk full")):
        press(robot, 's', 'v')
    assert robot.settings.modal_editing_enabled is True
    assert robot.message == "Error saving settings: disk full"
    assert robot.mode is Mode.SETTINGS


# --- Message overlay ---
def test_message_clears_after_timeout(robot, clock):
    robot.set_message("hello")
    clock.advance(MESSAGE_TIMEOUT - 0.5)
    robot.tick()
    assert robot.message == "hello"
    clock.advance(1)
    robot.tick()
    assert robot.message is None
    assert robot.message_time is None


def test_leaving_append_picker_forgets_open_draft(vim_robot, storage):
    storage.save_draft("t.txt", "text")
    press(vim_robot, 'd', modes.ENTER)
    assert vim_robot.current_draft_name == "t.txt"
    press(vim_robot, 'v', 'l', 'a')
    assert vim_robot.mode is Mode.DRAFTS
    press(vim_robot, modes.ESCAPE)
    assert vim_robot.mode is Mode.MENU
    assert vim_robot.current_draft_name is None
