"""CLI entry point for leftysay. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import shutil
import sys
from pathlib import Path

import click

from leftysay.bubble import render_bubble
from leftysay.cache import CacheStore
from leftysay.config import Config, Paths, load_config, pack_search_paths, resolve_paths
from leftysay.errors import LeftysayError
from leftysay.layout import image_rows
from leftysay.packs import Pack, scan_packs
from leftysay.pipeline import RenderPipeline
from leftysay.renderer import ChafaRenderer, find_chafa
from leftysay.selection import resolve_image, resolve_message
from leftysay.types import RenderRequest, parse_colors, parse_format

logger = logging.getLogger(__name__)

DEFAULT_TERMINAL_SIZE = (80, 24)


def _format_option(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if value is None:
        return None
    try:
        return parse_format(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _colors_option(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if value is None:
        return None
    try:
        return parse_colors(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def terminal_dimensions() -> tuple[int, int]:
    size = shutil.get_terminal_size(DEFAULT_TERMINAL_SIZE)
    return size.columns, size.lines


def print_doctor(chafa: Path, cols: int, rows: int, config: Config, paths: Paths) -> None:
    store = CacheStore(paths.cache_dir)
    entries = store.entries()

    click.echo("leftysay doctor")
    click.echo(f"chafa: {chafa}")
    click.echo(f"terminal: {cols} cols x {rows} rows")
    click.echo(f"config.format: {config.format}")
    click.echo(f"config.colors: {config.colors}")
    click.echo(f"config.max_height_ratio: {config.max_height_ratio}")
    click.echo(f"config.cache: {str(config.cache).lower()}")
    click.echo(f"config.cache_max_mb: {config.cache_max_mb}")
    click.echo(f"config dir: {paths.config_dir}")
    click.echo(f"data dir: {paths.data_dir}")
    click.echo(f"cache dir: {paths.cache_dir}")
    click.echo(f"cache entries: {len(entries)} ({sum(e.size for e in entries)} bytes)")
    click.echo("pack search paths:")
    for path in pack_search_paths(paths):
        click.echo(f"  - {path}")


def print_pack_list(packs: list[Pack]) -> None:
    if not packs:
        click.echo("No packs found.")
        return
    for pack in packs:
        meta = pack.meta
        click.echo(f"{meta.name} (v{meta.version}, {meta.license}): {meta.description}")
        for image in pack.images:
            click.echo(f"  - {image.name}")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


@click.command()
@click.version_option(package_name="leftysay")
@click.option("--text", default=None, help="Override message")
@click.option("--image", type=click.Path(path_type=Path), default=None, help="Render a specific image")
@click.option("--pack", "pack_name", default=None, help="Choose a pack")
@click.option("--list", "list_packs", is_flag=True, help="List packs and images")
@click.option("--doctor", is_flag=True, help="Diagnostics")
@click.option("--no-bubble", is_flag=True, help="Render image only")
@click.option("--seed", type=int, default=None, help="Deterministic selection")
@click.option(
    "--format",
    "fmt",
    default=None,
    callback=_format_option,
    help="Force chafa format (auto, symbols, kitty, iterm, sixels)",
)
@click.option(
    "--colors",
    default=None,
    callback=_colors_option,
    help="Force chafa colors (auto, full, 256, 16)",
)
@click.option(
    "--max-height-ratio",
    type=click.FloatRange(0.0, 1.0, min_open=True),
    default=None,
    help="Maximum image height ratio (0.0-1.0)",
)
@click.option("--animate", is_flag=True, help="Enable animation")
@click.option(
    "--log-level",
    default="warning",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log verbosity (default: warning)",
)
def main(
    text,
    image,
    pack_name,
    list_packs,
    doctor,
    no_bubble,
    seed,
    fmt,
    colors,
    max_height_ratio,
    animate,
    log_level,
):
    """A terminal greeter that renders a speech bubble and image via chafa."""
    _configure_logging(log_level)
    paths = resolve_paths()
    try:
        _run(
            paths,
            text=text,
            image=image,
            pack_name=pack_name,
            list_packs=list_packs,
            doctor=doctor,
            no_bubble=no_bubble,
            seed=seed,
            fmt=fmt,
            colors=colors,
            max_height_ratio=max_height_ratio,
            animate=animate,
        )
    except LeftysayError as e:
        click.echo(f"leftysay: {e}", err=True)
        sys.exit(1)


def _run(
    paths: Paths,
    *,
    text: str | None,
    image: Path | None,
    pack_name: str | None,
    list_packs: bool,
    doctor: bool,
    no_bubble: bool,
    seed: int | None,
    fmt: str | None,
    colors: str | None,
    max_height_ratio: float | None,
    animate: bool,
) -> None:
    config = load_config(paths.config_file)
    if not config.enabled:
        logger.debug("leftysay disabled in %s", paths.config_file)
        return

    chafa = find_chafa(paths)
    term_cols, term_rows = terminal_dimensions()

    if doctor:
        print_doctor(chafa, term_cols, term_rows, config, paths)
        return

    packs = scan_packs(pack_search_paths(paths))
    if list_packs:
        print_pack_list(packs)
        return

    pack = pack_name or config.default_pack
    message = resolve_message(text, packs, pack, seed)
    image_path = resolve_image(image, packs, pack, seed)

    bubble = [] if no_bubble else render_bubble(message, term_cols)
    if not bubble and message and not no_bubble:
        bubble = [message]

    request = RenderRequest(
        image=image_path,
        cols=term_cols,
        rows=image_rows(term_rows, len(bubble), max_height_ratio or config.max_height_ratio),
        format=fmt or config.format,
        colors=colors or config.colors,
        animate=animate or config.animate,
    )
    pipeline = RenderPipeline(
        ChafaRenderer(chafa),
        CacheStore(paths.cache_dir),
        cache_enabled=config.cache,
        max_cache_bytes=config.cache_max_bytes,
    )
    output = pipeline.render(request)

    for line in bubble:
        click.echo(line)
    click.echo(output, nl=False)


if __name__ == "__main__":
    main()
