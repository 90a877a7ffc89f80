"""Configuration and filesystem locations.

Settings live in ``<config dir>/config.toml``. Environment overrides are
read once by :func:`resolve_paths` and passed around as a :class:`Paths`
value, so nothing below the CLI consults ``os.environ`` directly.
"""

from __future__ import annotations

import os
import sys
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from leftysay.errors import ConfigError
from leftysay.types import ChafaColors, ChafaFormat, parse_colors, parse_format

APP_NAME = "leftysay"
CONFIG_FILE_NAME = "config.toml"

DEFAULT_MAX_HEIGHT_RATIO = 0.55
DEFAULT_CACHE_MAX_MB = 64


@dataclass
class Config:
    enabled: bool = True
    default_pack: str = "default"
    format: ChafaFormat = "auto"
    colors: ChafaColors = "auto"
    max_height_ratio: float = DEFAULT_MAX_HEIGHT_RATIO
    bubble_style: str = "classic"
    cache: bool = True
    animate: bool = False
    cache_max_mb: int = DEFAULT_CACHE_MAX_MB

    @property
    def cache_max_bytes(self) -> int:
        return self.cache_max_mb * 1024 * 1024


@dataclass
class Paths:
    config_dir: Path
    data_dir: Path
    cache_dir: Path
    chafa_override: Path | None = None
    extra_packs_dir: Path | None = None
    search_path: str = ""
    homebrew_prefix: str | None = None

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME


def _xdg_dir(environ: Mapping[str, str], var: str, fallback: str) -> Path:
    base = environ.get(var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / fallback / APP_NAME


def resolve_paths(environ: Mapping[str, str] | None = None) -> Paths:
    """Build a :class:`Paths` from environment variables (defaults to ``os.environ``)."""
    env = os.environ if environ is None else environ

    config_dir = env.get("LEFTYSAY_CONFIG_DIR")
    cache_dir = env.get("LEFTYSAY_CACHE_DIR")
    chafa = env.get("LEFTYSAY_CHAFA")
    packs = env.get("LEFTYSAY_PACKS_DIR")

    return Paths(
        config_dir=Path(config_dir) if config_dir else _xdg_dir(env, "XDG_CONFIG_HOME", ".config"),
        data_dir=_xdg_dir(env, "XDG_DATA_HOME", ".local/share"),
        cache_dir=Path(cache_dir) if cache_dir else _xdg_dir(env, "XDG_CACHE_HOME", ".cache"),
        chafa_override=Path(chafa) if chafa else None,
        extra_packs_dir=Path(packs) if packs else None,
        search_path=env.get("PATH", ""),
        homebrew_prefix=env.get("HOMEBREW_PREFIX"),
    )


def pack_search_paths(paths: Paths) -> list[Path]:
    """Directories scanned for packs, highest priority first."""
    result: list[Path] = []
    if paths.extra_packs_dir is not None:
        result.append(paths.extra_packs_dir)
    result.append(paths.data_dir / "packs")

    if sys.platform == "darwin":
        prefixes = [paths.homebrew_prefix, "/opt/homebrew", "/usr/local"]
        for prefix in prefixes:
            if not prefix:
                continue
            candidate = Path(prefix) / "share" / APP_NAME / "packs"
            if candidate.exists():
                result.append(candidate)
    elif sys.platform.startswith("linux"):
        result.append(Path("/usr/share") / APP_NAME / "packs")

    local = Path("packs")
    if local.exists():
        result.append(local)
    return result


_FIELD_TYPES: dict[str, tuple[type, ...]] = {
    "enabled": (bool,),
    "default_pack": (str,),
    "max_height_ratio": (int, float),
    "bubble_style": (str,),
    "cache": (bool,),
    "animate": (bool,),
    "cache_max_mb": (int,),
}


def _check_types(values: dict[str, Any]) -> None:
    for name, expected in _FIELD_TYPES.items():
        if name not in values:
            continue
        value = values[name]
        # bool is an int subclass; only accept it where a bool is expected.
        if isinstance(value, bool) and bool not in expected:
            ok = False
        else:
            ok = isinstance(value, expected)
        if not ok:
            names = " or ".join(t.__name__ for t in expected)
            raise ConfigError(f"invalid {name}: {value!r} (expected {names})")


def config_from_dict(data: dict[str, Any]) -> Config:
    """Build a Config from parsed TOML, ignoring unknown keys and repairing bad ranges."""
    known = {f.name for f in fields(Config)}
    values = {k: v for k, v in data.items() if k in known}

    try:
        if "format" in values:
            values["format"] = parse_format(str(values["format"]))
        if "colors" in values:
            values["colors"] = parse_colors(str(values["colors"]))
    except ValueError as e:
        raise ConfigError(str(e)) from e

    _check_types(values)
    if "max_height_ratio" in values:
        values["max_height_ratio"] = float(values["max_height_ratio"])

    config = Config(**values)
    if not 0.0 < config.max_height_ratio <= 1.0:
        config.max_height_ratio = DEFAULT_MAX_HEIGHT_RATIO
    if config.cache_max_mb <= 0:
        config.cache_max_mb = DEFAULT_CACHE_MAX_MB
    return config


def load_config(path: Path) -> Config:
    if not path.exists():
        return Config()
    try:
        contents = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"reading config {path}: {e}") from e
    try:
        data = tomllib.loads(contents)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"parsing config {path}: {e}") from e
    try:
        return config_from_dict(data)
    except ConfigError as e:
        raise ConfigError(f"parsing config {path}: {e}") from e
