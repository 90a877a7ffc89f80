"""Pack discovery: directories holding a ``pack.toml``, images, and optional messages."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from leftysay.errors import PackError

logger = logging.getLogger(__name__)

PACK_META_FILE = "pack.toml"
MESSAGES_FILE = "messages.txt"
MAX_SCAN_DEPTH = 3
IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif"}


@dataclass
class PackMeta:
    name: str
    version: str
    license: str
    description: str
    images_dir: str


@dataclass
class Pack:
    meta: PackMeta
    root: Path
    images: list[Path] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)


def read_pack_meta(path: Path) -> PackMeta:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise PackError(f"reading pack meta {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise PackError(f"parsing pack meta {path}: {e}") from e

    missing = [k for k in ("name", "version", "license", "description", "images_dir") if k not in data]
    if missing:
        raise PackError(f"parsing pack meta {path}: missing {', '.join(missing)}")
    return PackMeta(
        name=str(data["name"]),
        version=str(data["version"]),
        license=str(data["license"]),
        description=str(data["description"]),
        images_dir=str(data["images_dir"]),
    )


def is_supported_image(path: Path) -> bool:
    return path.suffix.lower() in IMAGE_EXTENSIONS


def collect_images(pack_root: Path, images_dir: str) -> list[Path]:
    directory = pack_root / images_dir
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.rglob("*") if p.is_file() and is_supported_image(p))


def read_messages(pack_root: Path) -> list[str]:
    path = pack_root / MESSAGES_FILE
    try:
        contents = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Ignoring unreadable messages file %s: %s", path, e)
        return []
    return [line.strip() for line in contents.splitlines() if line.strip()]


def _find_meta_files(base: Path) -> list[Path]:
    """``pack.toml`` files at most MAX_SCAN_DEPTH levels below *base*, in walk order."""
    found: list[Path] = []
    base_depth = len(base.parts)
    for dirpath, dirnames, filenames in os.walk(base):
        depth = len(Path(dirpath).parts) - base_depth
        dirnames.sort()
        if depth >= MAX_SCAN_DEPTH - 1:
            dirnames.clear()
        if PACK_META_FILE in filenames:
            found.append(Path(dirpath) / PACK_META_FILE)
    return found


def scan_packs(search_paths: list[Path]) -> list[Pack]:
    """Load every pack under *search_paths*; the first pack seen with a given name wins."""
    packs: list[Pack] = []
    seen: set[str] = set()

    for base in search_paths:
        if not base.exists():
            continue
        for meta_path in _find_meta_files(base):
            pack_root = meta_path.parent
            meta = read_pack_meta(meta_path)
            if meta.name in seen:
                continue
            images = collect_images(pack_root, meta.images_dir)
            if not images:
                logger.debug("Skipping pack %s at %s: no images", meta.name, pack_root)
                continue
            packs.append(
                Pack(meta=meta, root=pack_root, images=images, messages=read_messages(pack_root))
            )
            seen.add(meta.name)

    return packs


def find_pack(packs: list[Pack], name: str) -> Pack | None:
    for pack in packs:
        if pack.meta.name == name:
            return pack
    return None
