import asyncio

import pytest

from ntc.config.model import Settings
from ntc.plugin import TransclusionPlugin
from ntc.transclusion.guard import ResolutionContext
from ntc.tree.element import Element
from tests.infrastructure import (
    MemorySettingsStore,
    MemoryStore,
    StubRenderer,
    build_blocks,
    render_document,
)


def _plugin(stored=None):
    settings_store = MemorySettingsStore(stored=stored)
    store = MemoryStore(docs={"b.md": "B"})
    renderer = StubRenderer()
    plugin = TransclusionPlugin(store, renderer, settings_store)
    renderer.post_process = plugin.post_process
    return plugin, settings_store


def test_load_merges_defaults(caplog):
    plugin, _ = _plugin()
    with caplog.at_level("INFO", logger="ntc"):
        settings = plugin.load()
    assert settings == Settings()
    assert any("Loading" in r.getMessage() for r in caplog.records)


def test_toggles_are_persisted_immediately():
    plugin, settings_store = _plugin()
    plugin.load()

    plugin.set_render_all(True)
    assert settings_store.stored == Settings(render_all_transclusions=True)
    plugin.set_shift_headings(True)
    assert settings_store.stored == Settings(render_all_transclusions=True, shift_headings=True)
    plugin.set_render_all(False)
    assert settings_store.saves == 3
    assert plugin.settings == Settings(shift_headings=True)


@pytest.mark.asyncio
async def test_setting_change_applies_to_next_pass():
    plugin, _ = _plugin()
    plugin.load()

    frag = Element("div")
    frag.extend(build_blocks("![[b.md]]"))
    report = await plugin.post_process(frag)
    assert report.resolved == 0

    plugin.set_render_all(True)
    report = await plugin.post_process(frag)
    assert report.resolved == 1


@pytest.mark.asyncio
async def test_foreign_context_starts_fresh_pass():
    plugin, _ = _plugin(stored=Settings(render_all_transclusions=True))
    plugin.load()
    frag = Element("div")
    frag.extend(build_blocks("!![[b.md]]"))

    # a host context object that is not ours must not be mistaken for one
    report = await plugin.post_process(frag, {"sourcePath": "x.md"})

    assert report.resolved == 1


@pytest.mark.asyncio
async def test_resolution_context_is_reused():
    plugin, _ = _plugin()
    plugin.load()
    ctx = ResolutionContext()
    ctx.guard.try_enter("b.md")
    frag = Element("div")
    frag.extend(build_blocks("!![[b.md]]"))

    report = await plugin.post_process(frag, ctx)

    assert report.cycles == 1


class _GatedStore(MemoryStore):
    """Reads block until the gate opens; counts readers waiting at the gate."""

    def __init__(self, docs):
        super().__init__(docs=docs)
        self.gate = asyncio.Event()
        self.waiting = 0

    async def read_text(self, handle):
        self.waiting += 1
        await self.gate.wait()
        return await super().read_text(handle)


@pytest.mark.asyncio
async def test_overlapping_passes_do_not_see_each_other_as_cycles():
    store = _GatedStore({"A.md": "!![[B.md]]", "B.md": "B body"})
    renderer = StubRenderer()
    plugin = TransclusionPlugin(store, renderer, MemorySettingsStore())
    renderer.post_process = plugin.post_process
    plugin.load()

    first = asyncio.create_task(render_document(renderer, store.docs["A.md"], "A.md"))
    second = asyncio.create_task(render_document(renderer, store.docs["A.md"], "A.md"))
    # both passes hold A.md and B.md in flight at the same time
    while store.waiting < 2:
        await asyncio.sleep(0)
    store.gate.set()

    for root in await asyncio.gather(first, second):
        containers = root.select("div.native-transclusion")
        assert len(containers) == 1
        assert containers[0].text_content() == "B body"
        assert root.select("div.embed-warning") == []
