"""Cached image rendering."""

from __future__ import annotations

import logging

from leftysay.cache import CacheStore, cache_key
from leftysay.renderer import Renderer, invoke
from leftysay.types import RenderRequest

logger = logging.getLogger(__name__)


class RenderPipeline:
    """Serve renders from the cache when possible, otherwise run the renderer and cache the result.

    Only renderer failures and unreadable image metadata propagate; cache
    problems degrade to an uncached render.
    """

    def __init__(
        self,
        renderer: Renderer,
        store: CacheStore,
        *,
        cache_enabled: bool = True,
        max_cache_bytes: int,
    ) -> None:
        self.renderer = renderer
        self.store = store
        self.cache_enabled = cache_enabled
        self.max_cache_bytes = max_cache_bytes

    def render(self, request: RenderRequest) -> str:
        key = cache_key(request)

        if self.cache_enabled:
            cached = self.store.lookup(key)
            if cached is not None:
                logger.debug("Cache hit for %s (%s)", request.image, key)
                self.store.touch(key)
                return cached
            logger.debug("Cache miss for %s (%s)", request.image, key)

        payload = invoke(self.renderer, request)

        if self.cache_enabled:
            self.store.store(key, payload)
            self.store.enforce_limit(self.max_cache_bytes)

        return payload
