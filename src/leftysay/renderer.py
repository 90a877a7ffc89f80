"""chafa discovery and invocation."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import Protocol

from leftysay.config import Paths
from leftysay.errors import ChafaNotFoundError, RendererError
from leftysay.types import RenderOutput, RenderRequest

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def run(self, request: RenderRequest) -> RenderOutput: ...


def _install_hint() -> str:
    if sys.platform.startswith("linux"):
        return "Install: sudo apt install chafa (Debian/Ubuntu) or sudo pacman -S chafa (Arch)"
    if sys.platform == "darwin":
        return "Install: brew install chafa"
    return "Install chafa from your package manager"


def find_chafa(paths: Paths) -> Path:
    """Locate the chafa binary: explicit override first, then each PATH entry."""
    if paths.chafa_override is not None:
        return paths.chafa_override

    candidate = "chafa.exe" if sys.platform == "win32" else "chafa"
    for directory in paths.search_path.split(os.pathsep):
        if not directory:
            continue
        full = Path(directory) / candidate
        if full.is_file():
            return full

    raise ChafaNotFoundError(f"leftysay requires chafa. {_install_hint()}")


def build_args(chafa: Path, request: RenderRequest) -> list[str]:
    args = [
        str(chafa),
        str(request.image),
        "--format",
        request.format,
        "--colors",
        request.colors,
        "--size",
        f"{request.cols}x{request.rows}",
    ]
    if request.animate:
        args.append("--animate")
    return args


class ChafaRenderer:
    """Runs chafa as a subprocess. There is no timeout; a hung chafa hangs the caller."""

    def __init__(self, chafa: Path) -> None:
        self.chafa = chafa

    def run(self, request: RenderRequest) -> RenderOutput:
        args = build_args(self.chafa, request)
        logger.debug("Running %s", " ".join(args))
        try:
            proc = subprocess.run(args, capture_output=True, stdin=subprocess.DEVNULL)
        except OSError as e:
            raise RendererError(f"running chafa: {e}") from e
        return RenderOutput(
            stdout=proc.stdout.decode("utf-8", errors="replace"),
            stderr=proc.stderr.decode("utf-8", errors="replace"),
            code=proc.returncode,
        )


def invoke(renderer: Renderer, request: RenderRequest) -> str:
    """Render *request*, retrying once with concrete format/colors if auto-detection failed."""
    output = renderer.run(request)
    if output.code == 0:
        return output.stdout

    fallback = request.with_fallbacks()
    if fallback == request:
        raise RendererError(output.stderr)

    logger.info(
        "chafa failed with format=%s colors=%s; retrying with format=%s colors=%s",
        request.format,
        request.colors,
        fallback.format,
        fallback.colors,
    )
    retry = renderer.run(fallback)
    if retry.code == 0:
        return retry.stdout
    raise RendererError(retry.stderr)
