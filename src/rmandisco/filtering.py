"""Filtering discovery results and applying collected aliases."""

from collections.abc import Iterable

from rmandisco.aliases import AliasParser
from rmandisco.aliases import parse_aliases_file
from rmandisco.aliases import try_extract_aliases
from rmandisco.models import AliasMap
from rmandisco.models import DiscoveryRecord
from rmandisco.models import InclusionPredicate


def filter_results(
    records: Iterable[DiscoveryRecord],
    alias_map: AliasMap,
    include: InclusionPredicate | None = None,
    parser: AliasParser = parse_aliases_file,
) -> list[DiscoveryRecord]:
    """Drop aliases files and records rejected by include.

    Each record goes through two steps in order:

    1. Alias extraction. Runs for every record, so aliases files are merged
       into alias_map no matter what include decides about other records.
       Aliases files are always dropped.
    2. The include predicate, consulted only for records that are not
       aliases files.

    Args:
        records: Raw records from the filesystem walk
        alias_map: Collects aliases for the current run
        include: Optional predicate; records it rejects are dropped
        parser: Reads the aliases declared by one aliases file

    Returns:
        New list of kept records in their original relative order.
    """
    kept = []
    for record in records:
        if try_extract_aliases(record, alias_map, parser):
            continue
        if include is not None and not include(record):
            continue
        kept.append(record)
    return kept


def apply_aliases(records: Iterable[DiscoveryRecord], alias_map: AliasMap) -> None:
    """Attach collected aliases to records with a matching identifier.

    Aliases for identifiers without a record are dropped silently. Applying
    the same map twice leaves records unchanged.
    """
    if not alias_map:
        return

    for record in records:
        aliases = alias_map.get(record.identifier)
        if aliases is not None:
            record.aliases = aliases
