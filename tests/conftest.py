import pytest
from unittest.mock import MagicMock

from writecore.app import WriteApp
from writecore.assets import VERSION
from writecore.storage import Storage, Settings


class FakeClock:
    """Monotonic clock the tests can push forward by hand."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage(tmp_path):
    """Storage in a temp dir, splash already seen for this version."""
    store = Storage(config_dir=str(tmp_path / "config"))
    store.save_settings(Settings(
        storage_path=str(tmp_path / "content"),
        show_splash_screen=False,
        last_seen_version=VERSION,
    ))
    return store


@pytest.fixture
def fake_spell():
    spell = MagicMock()
    spell.check_text.return_value = {"wrld", "helo"}
    return spell


@pytest.fixture
def robot(storage, clock, fake_spell):
    """Builds a fresh Robot User with modal editing off."""
    return WriteApp(storage=storage, spell=fake_spell, clock=clock)


@pytest.fixture
def vim_robot(storage, clock, fake_spell):
    """Builds a fresh Robot User with modal (vim) editing on."""
    settings = storage.load_settings()
    settings.modal_editing_enabled = True
    storage.save_settings(settings)
    return WriteApp(storage=storage, spell=fake_spell, clock=clock)
