"""Search path and extension resolution.

Default search paths come from the RenderMan environment:

- ``RMAN_SHADERPATH`` lists directories of compiled OSL shaders (``.oso``).
  When unset, ``$RMANTREE/lib/shaders`` and the hdPrman loader plugin's
  ``resources/shaders`` directory are used instead.
- ``RMAN_RIXPLUGINPATH`` lists plugin directories whose ``Args``
  subdirectories hold ``.args`` metadata. When unset,
  ``$RMANTREE/lib/plugins/Args`` is used instead.

The computed paths act as process-wide defaults that every engine built
without an explicit configuration picks up. Override them once at start-up
with set_default_search_paths() and set_default_follow_symlinks().
"""

import logging
import os
from collections.abc import Mapping
from collections.abc import Sequence
from pathlib import Path

from rmandisco.models import SearchConfiguration

logger = logging.getLogger(__name__)

SHADER_PATH_VAR = "RMAN_SHADERPATH"
RMANTREE_VAR = "RMANTREE"
RIXPLUGIN_PATH_VAR = "RMAN_RIXPLUGINPATH"
LOADER_PLUGIN_VAR = "HDPRMAN_LOADER_PATH"

ARGS_EXTENSION = "args"
OSO_EXTENSION = "oso"
# Only used for aliases files, which never reach the final results.
ALIAS_EXTENSION = "sdraliases"

ALLOWED_EXTENSIONS = (ARGS_EXTENSION, OSO_EXTENSION, ALIAS_EXTENSION)

SOURCE_TYPES = {
    ARGS_EXTENSION: "RmanCpp",
    OSO_EXTENSION: "OSL",
}

_default_search_paths: list[str] | None = None
_default_follow_symlinks = True


def _split_path_list(value: str) -> list[str]:
    return [entry for entry in value.split(os.pathsep) if entry]


def _loader_plugin_dir(environ: Mapping[str, str]) -> Path | None:
    """Directory holding the hdPrman loader plugin, if it is known."""
    value = environ.get(LOADER_PLUGIN_VAR, "")
    if not value:
        return None
    path = Path(value)
    # The variable may name the plugin library itself
    if path.suffix:
        return path.parent
    return path


def compute_default_search_paths(
    environ: Mapping[str, str] | None = None,
    plugin_dir: Path | None = None,
) -> list[str]:
    """Compute search paths from the environment.

    Args:
        environ: Environment to read. If None, uses os.environ.
        plugin_dir: Directory of the hdPrman loader plugin. If None, taken
            from HDPRMAN_LOADER_PATH when set.

    Returns:
        Ordered list of directories. Missing variables simply contribute
        nothing, so the list may be empty.
    """
    if environ is None:
        environ = os.environ
    if plugin_dir is None:
        plugin_dir = _loader_plugin_dir(environ)

    search_paths: list[str] = []
    rmantree = environ.get(RMANTREE_VAR, "")

    shader_path = environ.get(SHADER_PATH_VAR, "")
    if shader_path:
        search_paths.extend(_split_path_list(shader_path))
    else:
        if rmantree:
            search_paths.append(str(Path(rmantree) / "lib" / "shaders"))
        if plugin_dir is not None:
            search_paths.append(str(plugin_dir / "resources" / "shaders"))

    rixplugin_path = environ.get(RIXPLUGIN_PATH_VAR, "")
    if rixplugin_path:
        # Args files live in an "Args" directory under each plugin path
        search_paths.extend(
            str(Path(entry) / "Args") for entry in _split_path_list(rixplugin_path)
        )
    elif rmantree:
        search_paths.append(str(Path(rmantree) / "lib" / "plugins" / "Args"))

    return search_paths


def default_search_paths() -> list[str]:
    """Process-wide default search paths, computed on first use."""
    global _default_search_paths
    if _default_search_paths is None:
        _default_search_paths = compute_default_search_paths()
        logger.debug("Default search paths: %s", _default_search_paths)
    return list(_default_search_paths)


def set_default_search_paths(paths: Sequence[str | Path]) -> None:
    """Replace the process-wide default search paths.

    Meant for start-up only. Engines already constructed keep their paths.
    """
    global _default_search_paths
    _default_search_paths = [str(p) for p in paths]


def default_follow_symlinks() -> bool:
    return _default_follow_symlinks


def set_default_follow_symlinks(follow_symlinks: bool) -> None:
    """Replace the process-wide default symlink policy (start-up only)."""
    global _default_follow_symlinks
    _default_follow_symlinks = follow_symlinks


def reset_defaults() -> None:
    """Forget overrides so defaults are recomputed from the environment."""
    global _default_search_paths, _default_follow_symlinks
    _default_search_paths = None
    _default_follow_symlinks = True


def default_configuration(
    search_paths: Sequence[str | Path] | None = None,
    follow_symlinks: bool | None = None,
) -> SearchConfiguration:
    """Build a configuration, filling anything not given from the defaults.

    Args:
        search_paths: Explicit search paths. If None, uses the defaults.
        follow_symlinks: Explicit symlink policy. If None, uses the default.
    """
    if search_paths is None:
        search_paths = default_search_paths()
    if follow_symlinks is None:
        follow_symlinks = default_follow_symlinks()
    return SearchConfiguration.create(
        search_paths=[str(p) for p in search_paths],
        extensions=ALLOWED_EXTENSIONS,
        follow_symlinks=follow_symlinks,
    )
