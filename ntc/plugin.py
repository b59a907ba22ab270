from __future__ import annotations

import logging
from typing import Any, Optional

from .config.model import Settings
from .host.protocols import DocumentStore, Renderer, SettingsStore, TreeNode
from .transclusion.guard import ResolutionContext
from .transclusion.resolver import PassReport, TransclusionResolver

logger = logging.getLogger(__name__)


class TransclusionPlugin:
    """
    Host-facing entry point.

    Owns the settings and exposes post_process() as the markdown
    post-processor the host registers. Settings changes are persisted
    immediately.
    """

    def __init__(self, store: DocumentStore, renderer: Renderer, settings_store: SettingsStore):
        self.store = store
        self.renderer = renderer
        self.settings_store = settings_store
        self.settings = Settings()

    def load(self) -> Settings:
        logger.info("Loading native transclusion plugin")
        self.settings = self.settings_store.load()
        return self.settings

    def resolver(self) -> TransclusionResolver:
        return TransclusionResolver(self.store, self.renderer, self.settings)

    async def post_process(
            self,
            fragment: TreeNode,
            context: Any = None,
            *,
            source_path: Optional[str] = None,
    ) -> PassReport:
        """
        Resolves the embeds of a rendered fragment.

        A ResolutionContext is what the resolver hands to the renderer for
        nested documents: reusing it keeps the in-flight set of the enclosing
        pass. Any other context starts an independent top-level pass.
        """
        resolver = self.resolver()
        if isinstance(context, ResolutionContext):
            return await resolver.resolve_pass(fragment, context)
        return await resolver.resolve_document(fragment, source_path)

    # --- settings toggles ---------------------------------------------------

    def set_render_all(self, value: bool) -> Settings:
        return self._update("render_all_transclusions", value)

    def set_shift_headings(self, value: bool) -> Settings:
        return self._update("shift_headings", value)

    def _update(self, key: str, value: bool) -> Settings:
        self.settings = self.settings.with_toggle(key, value)
        self.settings_store.save(self.settings)
        return self.settings


__all__ = ["TransclusionPlugin"]
