"""Data models for rmandisco."""

import logging
import threading
from collections.abc import Callable
from collections.abc import Iterator
from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from enum import auto
from typing import Self

logger = logging.getLogger(__name__)


@dataclass
class DiscoveryRecord:
    """A discoverable shader node found on disk."""

    uri: str  # Path of the source file as found during the walk
    identifier: str  # File stem, unique per extension within one run
    extension: str  # Discovery type, lowercase without the dot
    name: str = ""  # Identifier without its version suffix
    family: str = ""  # First "_" separated token of the identifier
    version: tuple[int, int] | None = None  # (major, minor) if versioned
    source_type: str = ""  # "OSL" for .oso, "RmanCpp" for .args
    aliases: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "uri": self.uri,
            "identifier": self.identifier,
            "extension": self.extension,
            "name": self.name,
            "family": self.family,
            "version": list(self.version) if self.version is not None else None,
            "source_type": self.source_type,
            "aliases": list(self.aliases),
        }


InclusionPredicate = Callable[[DiscoveryRecord], bool]


@dataclass(frozen=True)
class SearchConfiguration:
    """Where to look and what to accept. Immutable once built."""

    search_paths: tuple[str, ...] = ()
    extensions: tuple[str, ...] = ()
    follow_symlinks: bool = True

    @classmethod
    def create(
        cls,
        search_paths: Sequence[str],
        extensions: Sequence[str],
        follow_symlinks: bool = True,
    ) -> Self:
        """Build a configuration, normalizing extensions to lowercase without dots."""
        return cls(
            search_paths=tuple(str(p) for p in search_paths),
            extensions=tuple(ext.lstrip(".").lower() for ext in extensions),
            follow_symlinks=follow_symlinks,
        )


class AliasMap:
    """Identifier to alias names, collected from aliases files during one run.

    Merges are serialized so extraction may run from several threads.
    """

    def __init__(self) -> None:
        self._aliases: dict[str, list[str]] = {}
        self._sources: dict[str, str] = {}
        self._lock = threading.Lock()

    def merge(self, entries: Mapping[str, Sequence[str]], source: str) -> None:
        """Merge entries parsed from one aliases file.

        Args:
            entries: Identifier to alias names, as parsed from source
            source: URI of the aliases file, reported on collisions

        An identifier already present is overwritten (last write wins).
        """
        with self._lock:
            for identifier, aliases in entries.items():
                previous = self._sources.get(identifier)
                if previous is not None:
                    logger.warning(
                        "Aliases for %s in %s replace those from %s",
                        identifier,
                        source,
                        previous,
                    )
                self._aliases[identifier] = list(aliases)
                self._sources[identifier] = source

    def get(self, identifier: str) -> list[str] | None:
        with self._lock:
            aliases = self._aliases.get(identifier)
            return list(aliases) if aliases is not None else None

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._aliases

    def __len__(self) -> int:
        with self._lock:
            return len(self._aliases)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._aliases))

    def as_dict(self) -> dict[str, list[str]]:
        """Snapshot of the collected aliases."""
        with self._lock:
            return {k: list(v) for k, v in self._aliases.items()}


class DiscoveryState(Enum):
    """Stage of a single discovery run."""

    CONFIGURED = auto()
    SCANNING = auto()
    FILTERING = auto()
    RESOLVING = auto()
    DONE = auto()


@dataclass
class DiscoveryRun:
    """State of one discovery call. Nothing here outlives the call's result."""

    state: DiscoveryState = DiscoveryState.CONFIGURED
    alias_map: AliasMap = field(default_factory=AliasMap)
    scanned: int = 0  # Records returned by the walker
    records: list[DiscoveryRecord] = field(default_factory=list)
