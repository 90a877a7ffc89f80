"""Exception types surfaced to the CLI."""

from __future__ import annotations


class LeftysayError(Exception):
    """Base class for errors that abort a leftysay run."""


class ConfigError(LeftysayError):
    pass


class PackError(LeftysayError):
    pass


class ChafaNotFoundError(LeftysayError):
    pass


class ImageMetadataError(LeftysayError):
    """The image could not be stat'ed, so no cache key can be derived."""


class RendererError(LeftysayError):
    """chafa exited non-zero, after any fallback retry."""

    def __init__(self, diagnostic: str) -> None:
        self.diagnostic = diagnostic
        super().__init__(f"chafa failed: {diagnostic.strip()}")
