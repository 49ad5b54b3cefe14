"""Discovery engine tying together the walk, filtering and alias resolution."""

import logging
from collections.abc import Callable
from collections.abc import Sequence
from typing import Any

from rmandisco.aliases import AliasParser
from rmandisco.aliases import parse_aliases_file
from rmandisco.files import walk_search_paths
from rmandisco.filtering import apply_aliases
from rmandisco.filtering import filter_results
from rmandisco.models import DiscoveryRecord
from rmandisco.models import DiscoveryRun
from rmandisco.models import DiscoveryState
from rmandisco.models import InclusionPredicate
from rmandisco.models import SearchConfiguration
from rmandisco.paths import default_configuration

logger = logging.getLogger(__name__)

Walker = Callable[
    [Sequence[str], Sequence[str], bool, Any], list[DiscoveryRecord]
]


class DiscoveryEngine:
    """Discover RenderMan shader nodes and resolve their aliases.

    Every call to run() or discover_nodes() starts from scratch: the
    filesystem is walked again and a fresh alias map is built. The
    configuration is read-only, so one engine may serve concurrent calls.

    Args:
        configuration: Search paths, extensions and symlink policy. If None,
            built from the process-wide defaults at construction time.
        include: Optional predicate deciding which non-alias records to keep
        walker: Turns search paths into raw discovery records
        alias_parser: Reads the aliases declared by one aliases file
    """

    def __init__(
        self,
        configuration: SearchConfiguration | None = None,
        include: InclusionPredicate | None = None,
        walker: Walker = walk_search_paths,
        alias_parser: AliasParser = parse_aliases_file,
    ) -> None:
        if configuration is None:
            configuration = default_configuration()
        self._configuration = configuration
        self._include = include
        self._walker = walker
        self._alias_parser = alias_parser

    @property
    def configuration(self) -> SearchConfiguration:
        return self._configuration

    @property
    def search_uris(self) -> list[str]:
        """Effective search paths, in scan order."""
        return list(self._configuration.search_paths)

    def run(self, context: Any = None) -> DiscoveryRun:
        """Run one discovery, keeping its intermediate state.

        Args:
            context: Opaque value handed to the walker unchanged

        Returns:
            DiscoveryRun in state DONE holding the final records and the
            alias map they were resolved against.

        Raises:
            DiscoveryError: If the filesystem walk fails. No partial results
                are returned.
        """
        run = DiscoveryRun()
        config = self._configuration

        self._advance(run, DiscoveryState.SCANNING)
        raw = self._walker(
            config.search_paths, config.extensions, config.follow_symlinks, context
        )
        run.scanned = len(raw)

        # Every aliases file is merged before any alias is applied
        self._advance(run, DiscoveryState.FILTERING)
        records = filter_results(
            raw, run.alias_map, include=self._include, parser=self._alias_parser
        )

        self._advance(run, DiscoveryState.RESOLVING)
        apply_aliases(records, run.alias_map)

        run.records = records
        self._advance(run, DiscoveryState.DONE)
        logger.debug(
            "Discovered %d of %d record(s), aliases for %d identifier(s)",
            len(records),
            run.scanned,
            len(run.alias_map),
        )
        return run

    def discover_nodes(self, context: Any = None) -> list[DiscoveryRecord]:
        """Discover shader nodes with aliases files removed and aliases applied."""
        return self.run(context).records

    @staticmethod
    def _advance(run: DiscoveryRun, state: DiscoveryState) -> None:
        logger.debug("Discovery %s -> %s", run.state.name, state.name)
        run.state = state
