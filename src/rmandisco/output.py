"""Output formatting for rmandisco commands."""

import json
from collections.abc import Sequence
from pathlib import Path

import typer

from rmandisco.models import DiscoveryRecord
from rmandisco.settings import Settings


def print_catalog(records: Sequence[DiscoveryRecord], as_json: bool = False) -> None:
    """Print discovered records to stdout.

    Args:
        records: Final discovery results
        as_json: If True, print a JSON array instead of the listing
    """
    if as_json:
        typer.echo(json.dumps([r.to_dict() for r in records], indent=2))
        return

    for record in records:
        line = f"{record.identifier} ({record.extension})"
        if record.version is not None:
            major, minor = record.version
            line += f" v{major}.{minor}"
        typer.echo(line)
        typer.secho(f"  {_display_path(Path(record.uri))}", fg=typer.colors.BRIGHT_BLACK)
        if record.aliases:
            typer.secho(
                f"  aliases: {', '.join(record.aliases)}", fg=typer.colors.BRIGHT_BLACK
            )

    num = len(records)
    num_aliased = sum(1 for r in records if r.aliases)
    summary = f"{num} node{'s' if num != 1 else ''}"
    if num_aliased:
        summary += f", {num_aliased} with aliases"
    typer.secho(f"✓ Discovered {summary}", fg=typer.colors.GREEN, bold=True)


def print_search_paths(search_paths: Sequence[str]) -> None:
    """Print search paths in scan order, flagging ones that don't exist."""
    if not search_paths:
        typer.secho("No search paths configured", fg=typer.colors.YELLOW)
        return

    for search_path in search_paths:
        path = Path(search_path)
        if path.is_dir():
            typer.echo(_display_path(path))
        else:
            typer.secho(
                f"{_display_path(path)} (missing)", fg=typer.colors.BRIGHT_BLACK
            )


def print_settings(settings: Settings, path: Path) -> None:
    """Print the settings file contents."""
    typer.secho(f"Settings: {_display_path(path)}", fg=typer.colors.BRIGHT_BLACK)
    if settings.search_paths is None:
        typer.echo("search_paths: (from environment)")
    else:
        typer.echo("search_paths:")
        for search_path in settings.search_paths:
            typer.echo(f"  {search_path}")
    if settings.follow_symlinks is None:
        typer.echo("follow_symlinks: (default)")
    else:
        typer.echo(f"follow_symlinks: {str(settings.follow_symlinks).lower()}")


def _display_path(path: Path) -> str:
    """Format path for display, using ~ for home directory.

    Args:
        path: Path to format

    Returns:
        String representation with ~ substitution if applicable
    """
    try:
        rel_path = path.relative_to(Path.home())
        return f"~/{rel_path}"
    except ValueError:
        return str(path)
