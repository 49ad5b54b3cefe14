"""Command-line interface for rmandisco."""

import logging
from pathlib import Path
from typing import Annotated
from typing import NoReturn

import typer

from rmandisco import __version__
from rmandisco.engine import DiscoveryEngine
from rmandisco.exceptions import DiscoveryError
from rmandisco.exceptions import RmanDiscoError
from rmandisco.exceptions import SettingsValidationError
from rmandisco.exceptions import SettingsVersionError
from rmandisco.models import DiscoveryRecord
from rmandisco.models import InclusionPredicate
from rmandisco.models import SearchConfiguration
from rmandisco.output import print_catalog
from rmandisco.output import print_search_paths
from rmandisco.output import print_settings
from rmandisco.paths import default_configuration
from rmandisco.settings import Settings

app = typer.Typer(help="RenderMan shader node discovery")

SearchPathOption = Annotated[
    list[Path] | None,
    typer.Option(
        "--search-path",
        "-p",
        help="Directory to scan (repeatable, overrides settings and environment)",
    ),
]
FollowSymlinksOption = Annotated[
    bool | None,
    typer.Option(
        "--follow-symlinks/--no-follow-symlinks",
        help="Descend into symlinked directories (default: follow)",
    ),
]
SettingsOption = Annotated[
    Path | None,
    typer.Option("--settings", help="Settings file (default: user config dir)"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"rmandisco {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version"
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
) -> None:
    """RenderMan shader node discovery."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_configuration(
    search_paths: list[Path] | None,
    follow_symlinks: bool | None,
    settings_path: Path | None,
) -> SearchConfiguration:
    """Combine command-line options, settings file and environment defaults."""
    settings = Settings.load(settings_path)
    chosen: list[Path] | list[str] | None = search_paths or settings.search_paths
    if follow_symlinks is None:
        follow_symlinks = settings.follow_symlinks
    return default_configuration(chosen, follow_symlinks)


def _extension_filter(types: list[str]) -> InclusionPredicate:
    wanted = {t.lstrip(".").lower() for t in types}

    def include(record: DiscoveryRecord) -> bool:
        return record.extension in wanted

    return include


def _fail(message: str) -> NoReturn:
    typer.secho(f"✗ {message}", fg=typer.colors.RED, bold=True, err=True)
    raise typer.Exit(1)


@app.command()
def scan(
    search_path: SearchPathOption = None,
    types: Annotated[
        list[str] | None,
        typer.Option("--type", "-t", help="Only keep nodes with this extension"),
    ] = None,
    follow_symlinks: FollowSymlinksOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print JSON")] = False,
    settings: SettingsOption = None,
) -> None:
    """Discover shader nodes and print them with their aliases."""
    try:
        configuration = _build_configuration(search_path, follow_symlinks, settings)
        include = _extension_filter(types) if types else None
        engine = DiscoveryEngine(configuration, include=include)
        records = engine.discover_nodes()
        print_catalog(records, as_json=as_json)
    except DiscoveryError as e:
        _fail(str(e))
    except (SettingsValidationError, SettingsVersionError) as e:
        _fail(f"Settings error: {e}")
    except RmanDiscoError as e:
        _fail(f"Error: {e}")
    except OSError as e:
        _fail(f"Filesystem error: {e}")


@app.command()
def paths(
    search_path: SearchPathOption = None,
    settings: SettingsOption = None,
) -> None:
    """Show the effective search paths in scan order."""
    try:
        configuration = _build_configuration(search_path, None, settings)
    except (SettingsValidationError, SettingsVersionError) as e:
        _fail(f"Settings error: {e}")
    except OSError as e:
        _fail(f"Filesystem error: {e}")
    else:
        print_search_paths(DiscoveryEngine(configuration).search_uris)


@app.command()
def config(
    search_path: SearchPathOption = None,
    follow_symlinks: FollowSymlinksOption = None,
    clear: Annotated[
        bool, typer.Option("--clear", help="Remove all overrides")
    ] = False,
    settings: SettingsOption = None,
) -> None:
    """Show or change the saved search path overrides."""
    settings_path = settings if settings is not None else Settings.default_path()
    try:
        current = Settings.load(settings_path)
        if clear:
            current = Settings(extra=current.extra)
        if search_path:
            current.search_paths = [str(p.expanduser().resolve()) for p in search_path]
        if follow_symlinks is not None:
            current.follow_symlinks = follow_symlinks
        if clear or search_path or follow_symlinks is not None:
            current.save(settings_path)
    except (SettingsValidationError, SettingsVersionError) as e:
        _fail(f"Settings error: {e}")
    except OSError as e:
        _fail(f"Filesystem error: {e}")
    else:
        print_settings(current, settings_path)


def main() -> None:
    """Main entry point for the rmandisco CLI."""
    app()


if __name__ == "__main__":
    main()
