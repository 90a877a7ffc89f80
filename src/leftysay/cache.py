"""Content-addressed disk cache of rendered chafa output.

Entries are ``<key>.txt`` files. A file's mtime is its recency: hits are
touched (rewritten) and eviction removes the oldest files first. Every
filesystem failure in here is logged and swallowed; a broken cache only
costs a re-render.
"""

from __future__ import annotations

import hashlib
import logging
import os
import stat
import struct
from dataclasses import dataclass
from pathlib import Path

from leftysay.errors import ImageMetadataError
from leftysay.types import RenderRequest

logger = logging.getLogger(__name__)

CACHE_FILE_EXT = "txt"


def cache_key(request: RenderRequest) -> str:
    """Derive the 64-char hex key for *request* from its fields and the image mtime."""
    try:
        st = os.stat(request.image)
    except OSError as e:
        raise ImageMetadataError(f"reading image metadata for {request.image}: {e}") from e
    mtime = max(0, int(st.st_mtime))

    hasher = hashlib.blake2b(digest_size=32)
    hasher.update(str(request.image).encode("utf-8", errors="surrogateescape"))
    hasher.update(struct.pack("<Q", mtime))
    hasher.update(struct.pack("<Q", request.cols))
    hasher.update(struct.pack("<Q", request.rows))
    hasher.update(request.format.encode())
    hasher.update(b"\0")
    hasher.update(request.colors.encode())
    hasher.update(bytes([1 if request.animate else 0]))
    return hasher.hexdigest()


@dataclass
class CacheEntry:
    path: Path
    size: int
    mtime: float


class CacheStore:
    def __init__(self, cache_dir: Path) -> None:
        self.cache_dir = Path(cache_dir)

    def path_for(self, key: str) -> Path:
        return self.cache_dir / f"{key}.{CACHE_FILE_EXT}"

    def lookup(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Ignoring unreadable cache entry %s: %s", path.name, e)
            return None
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning("Ignoring undecodable cache entry %s: %s", path.name, e)
            return None

    def touch(self, key: str) -> None:
        """Rewrite an entry unchanged so its mtime marks it as recently used."""
        path = self.path_for(key)
        try:
            path.write_bytes(path.read_bytes())
        except OSError as e:
            logger.warning("Failed to touch cache entry %s: %s", path.name, e)

    def store(self, key: str, payload: str) -> None:
        path = self.path_for(key)
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(payload.encode("utf-8"))
        except OSError as e:
            logger.warning("Failed to write cache entry %s: %s", path.name, e)

    def entries(self) -> list[CacheEntry]:
        """All cache files, oldest first; ties on mtime are ordered by file name."""
        result: list[CacheEntry] = []
        try:
            children = list(self.cache_dir.iterdir())
        except FileNotFoundError:
            return result
        except OSError as e:
            logger.warning("Failed to list cache dir %s: %s", self.cache_dir, e)
            return result

        for child in children:
            try:
                st = child.stat()
            except OSError:
                continue
            if not stat.S_ISREG(st.st_mode):
                continue
            result.append(CacheEntry(path=child, size=st.st_size, mtime=st.st_mtime))

        result.sort(key=lambda e: (e.mtime, e.path.name))
        return result

    def total_size(self) -> int:
        return sum(e.size for e in self.entries())

    def enforce_limit(self, max_bytes: int) -> None:
        """Delete least recently used entries until the cache fits in *max_bytes*."""
        entries = self.entries()
        total = sum(e.size for e in entries)
        if total <= max_bytes:
            return

        logger.debug("Cache holds %d bytes, limit %d; evicting", total, max_bytes)
        for entry in entries:
            if total <= max_bytes:
                break
            try:
                entry.path.unlink()
            except OSError as e:
                logger.warning("Failed to evict cache entry %s: %s", entry.path.name, e)
                continue
            total -= entry.size
            logger.debug("Evicted %s (%d bytes)", entry.path.name, entry.size)
