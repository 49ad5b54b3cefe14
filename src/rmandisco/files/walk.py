"""Filesystem walk turning matching files into discovery records."""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rmandisco.exceptions import DiscoveryError
from rmandisco.files.identifiers import split_identifier
from rmandisco.models import DiscoveryRecord
from rmandisco.paths import ALIAS_EXTENSION
from rmandisco.paths import SOURCE_TYPES

logger = logging.getLogger(__name__)


def _raise_discovery_error(error: OSError) -> None:
    raise DiscoveryError(error.filename or "", error.strerror or str(error)) from error


def _walk_root(root: Path, follow_symlinks: bool) -> list[Path]:
    """List files under root in a deterministic order.

    Args:
        root: Existing directory to scan
        follow_symlinks: If True, descend into symlinked directories (each
            real directory is visited once, so cycles terminate)

    Raises:
        DiscoveryError: If any directory cannot be read
    """
    files = []
    visited = {root.resolve()}
    for dirpath, dirnames, filenames in root.walk(
        follow_symlinks=follow_symlinks, on_error=_raise_discovery_error
    ):
        if follow_symlinks:
            # Prune in place so walk() never re-enters a directory
            kept = []
            for dirname in sorted(dirnames):
                real = (dirpath / dirname).resolve()
                if real in visited:
                    logger.debug("Skipping already visited %s", dirpath / dirname)
                    continue
                visited.add(real)
                kept.append(dirname)
            dirnames[:] = kept
        else:
            dirnames.sort()

        for filename in sorted(filenames):
            full_path = dirpath / filename
            # Without follow_symlinks, walk() reports directory links as files
            if full_path.is_file():
                files.append(full_path)

    return files


def _make_record(path: Path, extension: str) -> DiscoveryRecord | None:
    identifier = path.stem
    if extension == ALIAS_EXTENSION:
        # Aliases files are never catalogued, so their stem needs no split
        return DiscoveryRecord(uri=str(path), identifier=identifier, extension=extension)

    try:
        family, name, version = split_identifier(identifier)
    except ValueError as e:
        logger.warning("Skipping %s: %s", path, e)
        return None

    return DiscoveryRecord(
        uri=str(path),
        identifier=identifier,
        extension=extension,
        name=name,
        family=family,
        version=version,
        source_type=SOURCE_TYPES.get(extension, ""),
    )


def walk_search_paths(
    search_paths: Sequence[str],
    extensions: Sequence[str],
    follow_symlinks: bool,
    context: Any = None,
) -> list[DiscoveryRecord]:
    """Discover files with an allowed extension under the search paths.

    Args:
        search_paths: Directories to scan, in precedence order
        extensions: Allowed extensions, lowercase without the dot
        follow_symlinks: Whether to descend into symlinked directories
        context: Opaque discovery context, unused by the filesystem walk

    Returns:
        One record per matching file with empty aliases. When the same
        identifier and extension occur more than once, the first one found
        wins, so earlier search paths shadow later ones.

    Raises:
        DiscoveryError: If a search path or one of its directories cannot be
            read
    """
    allowed = {ext.lower() for ext in extensions}
    seen: set[tuple[str, str]] = set()
    records = []

    for search_path in search_paths:
        root = Path(search_path)
        if not root.is_dir():
            logger.debug("Search path %s is not a directory, skipping", root)
            continue

        for path in _walk_root(root, follow_symlinks):
            extension = path.suffix[1:].lower()
            if extension not in allowed:
                continue

            key = (path.stem, extension)
            if key in seen:
                logger.debug("Skipping %s, shadowed by an earlier match", path)
                continue

            record = _make_record(path, extension)
            if record is None:
                continue
            seen.add(key)
            records.append(record)

    logger.debug(
        "Found %d record(s) in %d search path(s)", len(records), len(search_paths)
    )
    return records
