"""Core type definitions for leftysay."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Literal

# Values are the literal arguments chafa accepts for --format / --colors.
ChafaFormat = Literal["auto", "symbols", "kitty", "iterm", "sixels"]
ChafaColors = Literal["auto", "full", "256", "16"]

FORMATS: tuple[str, ...] = ("auto", "symbols", "kitty", "iterm", "sixels")
COLORS: tuple[str, ...] = ("auto", "full", "256", "16")

_FORMAT_ALIASES = {
    "unicode": "symbols",
    "iterm2": "iterm",
    "sixel": "sixels",
}

_COLOR_ALIASES = {
    "truecolor": "full",
    "c256": "256",
    "c16": "16",
}


def parse_format(value: str) -> ChafaFormat:
    """Normalize a user-supplied format name (aliases allowed)."""
    name = value.strip().lower()
    name = _FORMAT_ALIASES.get(name, name)
    if name not in FORMATS:
        raise ValueError(f"unknown format: {value!r} (expected one of {', '.join(FORMATS)})")
    return name  # type: ignore[return-value]


def parse_colors(value: str) -> ChafaColors:
    """Normalize a user-supplied color mode (aliases allowed)."""
    name = str(value).strip().lower()
    name = _COLOR_ALIASES.get(name, name)
    if name not in COLORS:
        raise ValueError(f"unknown colors: {value!r} (expected one of {', '.join(COLORS)})")
    return name  # type: ignore[return-value]


@dataclass(frozen=True)
class RenderRequest:
    image: Path
    cols: int
    rows: int
    format: ChafaFormat = "auto"
    colors: ChafaColors = "auto"
    animate: bool = False

    def with_fallbacks(self) -> RenderRequest:
        """Return a copy with auto-detected format/colors replaced by safe defaults."""
        return replace(
            self,
            format="symbols" if self.format == "auto" else self.format,
            colors="full" if self.colors == "auto" else self.colors,
        )


@dataclass
class RenderOutput:
    stdout: str
    stderr: str
    code: int
