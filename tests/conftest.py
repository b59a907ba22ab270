from pathlib import Path

import pytest

from ntc.config.model import Settings
from ntc.plugin import TransclusionPlugin
from tests.infrastructure import MemorySettingsStore, MemoryStore, StubRenderer


@pytest.fixture(autouse=True)
def _no_settings_override(monkeypatch):
    # tests must not pick up a developer's settings file
    monkeypatch.delenv("NTC_SETTINGS", raising=False)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def make_plugin(store: MemoryStore):
    """
    Builds a loaded plugin wired to the in-memory store and a stub renderer
    that re-enters the plugin's post-processor.
    """
    def _make(*, render_all: bool = False, shift_headings: bool = False, fail_on=None):
        settings_store = MemorySettingsStore(
            stored=Settings(render_all_transclusions=render_all, shift_headings=shift_headings)
        )
        renderer = StubRenderer(fail_on=fail_on)
        plugin = TransclusionPlugin(store, renderer, settings_store)
        renderer.post_process = plugin.post_process
        plugin.load()
        return plugin, renderer

    return _make


@pytest.fixture
def tmpvault(tmp_path: Path) -> Path:
    return tmp_path / "vault"
