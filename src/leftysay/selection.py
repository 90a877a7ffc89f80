"""Choose which message and image to show."""

from __future__ import annotations

import random
from pathlib import Path

from leftysay.errors import PackError
from leftysay.packs import Pack, find_pack

DEFAULT_MESSAGE = "Hello from leftysay!"


def pick_index(length: int, seed: int | None = None) -> int:
    if length == 0:
        raise PackError("no images available")
    return random.Random(seed).randrange(length)


def resolve_message(
    text: str | None,
    packs: list[Pack],
    pack_name: str,
    seed: int | None = None,
) -> str:
    if text is not None:
        return text
    pack = find_pack(packs, pack_name)
    if pack is not None and pack.messages:
        return pack.messages[pick_index(len(pack.messages), seed)]
    return DEFAULT_MESSAGE


def resolve_image(
    image: Path | None,
    packs: list[Pack],
    pack_name: str,
    seed: int | None = None,
) -> Path:
    if image is not None:
        return image
    pack = find_pack(packs, pack_name)
    if pack is None:
        raise PackError(f"pack not found: {pack_name}")
    return pack.images[pick_index(len(pack.images), seed)]
