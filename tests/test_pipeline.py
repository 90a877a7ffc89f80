"""Tests for leftysay.pipeline."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from helpers import ScriptedRenderer, fail, ok
from leftysay.cache import CacheStore, cache_key
from leftysay.errors import ImageMetadataError, RendererError
from leftysay.pipeline import RenderPipeline
from leftysay.types import RenderRequest


@pytest.fixture
def request_(tmp_path: Path) -> RenderRequest:
    image = tmp_path / "image.png"
    image.write_bytes(b"fake")
    return RenderRequest(image=image, cols=80, rows=13)


@pytest.fixture
def store(tmp_path: Path) -> CacheStore:
    return CacheStore(tmp_path / "cache")


def test_miss_renders_and_stores(request_: RenderRequest, store: CacheStore) -> None:
    renderer = ScriptedRenderer(ok("pixels"))
    pipeline = RenderPipeline(renderer, store, max_cache_bytes=1024)

    assert pipeline.render(request_) == "pixels"
    assert store.lookup(cache_key(request_)) == "pixels"


def test_hit_skips_renderer_and_touches(request_: RenderRequest, store: CacheStore) -> None:
    key = cache_key(request_)
    store.store(key, "cached")
    os.utime(store.path_for(key), (1_000, 1_000))
    renderer = ScriptedRenderer()
    pipeline = RenderPipeline(renderer, store, max_cache_bytes=1024)

    assert pipeline.render(request_) == "cached"
    assert renderer.requests == []
    assert store.path_for(key).stat().st_mtime > 1_000


def test_second_render_is_served_from_cache(request_: RenderRequest, store: CacheStore) -> None:
    renderer = ScriptedRenderer(ok("pixels"))
    pipeline = RenderPipeline(renderer, store, max_cache_bytes=1024)
    pipeline.render(request_)
    assert pipeline.render(request_) == "pixels"
    assert len(renderer.requests) == 1


def test_cache_disabled(request_: RenderRequest, store: CacheStore) -> None:
    store.store(cache_key(request_), "stale")
    renderer = ScriptedRenderer(ok("fresh"), ok("fresh"))
    pipeline = RenderPipeline(renderer, store, cache_enabled=False, max_cache_bytes=1024)

    assert pipeline.render(request_) == "fresh"
    assert pipeline.render(request_) == "fresh"
    assert len(renderer.requests) == 2
    assert store.lookup(cache_key(request_)) == "stale"


def test_store_enforces_limit(request_: RenderRequest, store: CacheStore) -> None:
    store.store("old", "x" * 100)
    os.utime(store.path_for("old"), (1_000, 1_000))
    pipeline = RenderPipeline(ScriptedRenderer(ok("y" * 50)), store, max_cache_bytes=120)

    pipeline.render(request_)

    assert store.lookup("old") is None
    assert store.lookup(cache_key(request_)) == "y" * 50


def test_cache_write_failure_still_returns_payload(request_: RenderRequest, tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    store = CacheStore(blocker / "cache")
    pipeline = RenderPipeline(ScriptedRenderer(ok("pixels")), store, max_cache_bytes=1024)

    assert pipeline.render(request_) == "pixels"


def test_renderer_failure_propagates(request_: RenderRequest, store: CacheStore) -> None:
    renderer = ScriptedRenderer(fail("one"), fail("two"))
    pipeline = RenderPipeline(renderer, store, max_cache_bytes=1024)

    with pytest.raises(RendererError, match="two"):
        pipeline.render(request_)
    assert store.entries() == []


def test_missing_image_is_fatal(tmp_path: Path, store: CacheStore) -> None:
    renderer = ScriptedRenderer()
    pipeline = RenderPipeline(renderer, store, max_cache_bytes=1024)

    with pytest.raises(ImageMetadataError):
        pipeline.render(RenderRequest(image=tmp_path / "gone.png", cols=80, rows=10))
    assert renderer.requests == []


def test_hit_preserves_carriage_returns(request_: RenderRequest, store: CacheStore) -> None:
    payload = "\x1b[0m row1\r\n row2\r\x1b[?25h"
    renderer = ScriptedRenderer(ok(payload))
    pipeline = RenderPipeline(renderer, store, max_cache_bytes=1024)

    miss = pipeline.render(request_)
    hit = pipeline.render(request_)

    assert miss == payload
    assert hit == miss
    assert store.path_for(cache_key(request_)).read_bytes() == payload.encode("utf-8")
    assert len(renderer.requests) == 1


def test_unreadable_cache_falls_back_to_render(
    request_: RenderRequest, store: CacheStore, monkeypatch: pytest.MonkeyPatch
) -> None:
    store.store(cache_key(request_), "cached")

    def denied(self: Path) -> bytes:
        raise PermissionError("denied")

    monkeypatch.setattr(Path, "read_bytes", denied)
    pipeline = RenderPipeline(ScriptedRenderer(ok("fresh")), store, max_cache_bytes=1024)

    assert pipeline.render(request_) == "fresh"
