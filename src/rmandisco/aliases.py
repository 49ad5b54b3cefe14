"""Alias extraction from ``.sdraliases`` files.

An aliases file declares alternate names for shaders found elsewhere in the
search paths::

    <aliases>
      <shader name="PxrSurface">
        <alias name="PxrSurfaceLegacy"/>
      </shader>
    </aliases>

Aliases files are consumed during discovery and never appear in its results.
"""

import logging
import xml.etree.ElementTree as ET
from collections.abc import Callable
from pathlib import Path

from rmandisco.exceptions import AliasParseError
from rmandisco.models import AliasMap
from rmandisco.models import DiscoveryRecord
from rmandisco.paths import ALIAS_EXTENSION

logger = logging.getLogger(__name__)

ALIAS_SUFFIX = f".{ALIAS_EXTENSION}"

AliasParser = Callable[[DiscoveryRecord], dict[str, list[str]]]


def parse_aliases_file(record: DiscoveryRecord) -> dict[str, list[str]]:
    """Read the aliases declared in an aliases file.

    Args:
        record: Discovery record of the aliases file

    Returns:
        Shader identifier to alias names, in file order. Complete or not at
        all: nothing is returned for a file that fails part way.

    Raises:
        AliasParseError: If the file cannot be read or is not a valid
            aliases document
    """
    try:
        root = ET.fromstring(Path(record.uri).read_bytes())
    except OSError as e:
        raise AliasParseError(record.uri, e.strerror or str(e)) from e
    except ET.ParseError as e:
        raise AliasParseError(record.uri, f"invalid XML: {e}") from e

    if root.tag != "aliases":
        raise AliasParseError(
            record.uri, f"expected <aliases> root element, found <{root.tag}>"
        )

    entries: dict[str, list[str]] = {}
    for shader in root.iter("shader"):
        identifier = shader.get("name", "").strip()
        if not identifier:
            raise AliasParseError(record.uri, "<shader> element without a name")
        names = [
            alias.get("name", "").strip() for alias in shader.iter("alias")
        ]
        entries.setdefault(identifier, []).extend(name for name in names if name)

    return entries


def is_alias_record(record: DiscoveryRecord) -> bool:
    """Whether record is an aliases file, by URI suffix regardless of case."""
    return record.uri.lower().endswith(ALIAS_SUFFIX)


def try_extract_aliases(
    record: DiscoveryRecord,
    alias_map: AliasMap,
    parser: AliasParser = parse_aliases_file,
) -> bool:
    """Merge the aliases of an aliases file into alias_map.

    Args:
        record: Any discovery record
        alias_map: Map collecting aliases for the current run
        parser: Reads the aliases declared by one aliases file

    Returns:
        True if record is an aliases file and must be dropped from the
        results, even when parsing it failed. False otherwise, in which case
        alias_map is not touched.
    """
    if not is_alias_record(record):
        return False

    try:
        entries = parser(record)
    except (AliasParseError, OSError) as e:
        logger.warning("Ignoring aliases in %s: %s", record.uri, e)
        return True

    alias_map.merge(entries, source=record.uri)
    logger.debug("Read aliases for %d shader(s) from %s", len(entries), record.uri)
    return True
