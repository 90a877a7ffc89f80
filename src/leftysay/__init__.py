"""leftysay: terminal greeter rendering a speech bubble and an image via chafa."""

from leftysay.bubble import render_bubble
from leftysay.cache import CacheEntry, CacheStore, cache_key
from leftysay.config import Config, Paths, load_config, pack_search_paths, resolve_paths
from leftysay.errors import (
    ChafaNotFoundError,
    ConfigError,
    ImageMetadataError,
    LeftysayError,
    PackError,
    RendererError,
)
from leftysay.layout import image_rows
from leftysay.packs import Pack, PackMeta, scan_packs
from leftysay.pipeline import RenderPipeline
from leftysay.renderer import ChafaRenderer, Renderer, find_chafa, invoke
from leftysay.types import RenderOutput, RenderRequest

__all__ = [
    # Types
    "RenderRequest",
    "RenderOutput",
    "Config",
    "Paths",
    "Pack",
    "PackMeta",
    "CacheEntry",
    # Errors
    "LeftysayError",
    "ConfigError",
    "PackError",
    "ChafaNotFoundError",
    "ImageMetadataError",
    "RendererError",
    # Layout
    "render_bubble",
    "image_rows",
    # Rendering
    "Renderer",
    "ChafaRenderer",
    "find_chafa",
    "invoke",
    "CacheStore",
    "cache_key",
    "RenderPipeline",
    # Config & packs
    "load_config",
    "resolve_paths",
    "pack_search_paths",
    "scan_packs",
]
