"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mycoconv.config import Settings, load_config
from mycoconv.core.context import context_from_settings
from mycoconv.core.convert.convert import ConversionError, convert
from mycoconv.core.formats import (
    detect_text_format,
    discover_files,
    format_extension,
    format_name,
    parse_format,
)
from mycoconv.core.md.parse import make_parser
from mycoconv.core.utils.names import hypha_name_from_path


logger = logging.getLogger(__name__)


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _setup_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")


def _out_path(src: Path, root: Path, output_dir: Path, ext: str) -> Path:
    """Mirror src under output_dir, relative to root when root is a directory."""
    rel = src.relative_to(root) if root.is_dir() else Path(src.name)
    return output_dir / rel.with_suffix(ext)


def convert_cmd(
    path: Annotated[str, typer.Argument(help="Hypha text file or directory to convert")],
    to: Annotated[str, typer.Option("--to", help="Target format: markdown (md) or mycomarkup (myco)")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    stdout: Annotated[bool, typer.Option("--stdout", help="Print converted text instead of writing files")] = False,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    ):
    """Convert hyphae to the target format. Source files are left untouched."""
    settings = _settings(overrides={"output_dir": out, "parser_config": parser})
    _setup_logging(settings)
    try:
        target = parse_format(to)
        make_parser(settings.parser_config, settings.linkify)
    except ValueError as e:
        _fail(str(e))

    root = Path(path)
    if not root.exists():
        _fail(f"Path not found: {path}")
    output_dir = Path(settings.output_dir)
    counts = {"converted": 0, "skipped": 0, "failed": 0}

    for src in discover_files(root):
        source = detect_text_format(src)
        if source == target:
            counts["skipped"] += 1
            continue

        hypha = hypha_name_from_path(src, root if root.is_dir() else None)
        try:
            text, warnings = convert(
                src.read_bytes(), source, target, context_from_settings(settings, hypha),
            )
        except (OSError, ConversionError) as e:
            logger.error("Failed to convert %s: %s", src, e)
            typer.echo(f"  failed: {src} ({e})", err=True)
            counts["failed"] += 1
            continue

        for warning in warnings:
            logger.warning("Conversion warning for %s: %s", hypha, warning)
            typer.echo(f"  warning: {src}: {warning}", err=True)

        if stdout:
            typer.echo(text, nl=False)
        else:
            dest = _out_path(src, root, output_dir, format_extension(target))
            try:
                dest.parent.mkdir(parents=True, exist_ok=True)
                dest.write_text(text, encoding='utf-8')
            except OSError as e:
                logger.error("Failed to write %s: %s", dest, e)
                typer.echo(f"  failed: {src} ({e})", err=True)
                counts["failed"] += 1
                continue
            typer.echo(f"  {src} -> {dest}")
        counts["converted"] += 1

    logger.info("Conversion complete: %s", counts)
    typer.echo(
        f"Conversion to {format_name(target)} complete - "
        f"{counts['converted']} converted, "
        f"{counts['skipped']} skipped, "
        f"{counts['failed']} failed",
        err=stdout,
    )
    if counts["failed"]:
        raise typer.Exit(1)


def detect_cmd(
    path: Annotated[str, typer.Argument(help="Hypha text file or directory")],
    ):
    """Print the detected text format of each hypha file."""
    files = discover_files(Path(path))
    if not files:
        typer.echo("No .myco/.md files found.")
        raise typer.Exit(1)
    for f in files:
        typer.echo(f"{f}: {format_name(detect_text_format(f))}")
