"""Filesystem operations for rmandisco."""

from rmandisco.files.identifiers import split_identifier
from rmandisco.files.walk import walk_search_paths

__all__ = [
    "split_identifier",
    "walk_search_paths",
]
