"""User settings overriding the environment-derived search configuration."""

import json
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Self

from platformdirs import user_config_path

from rmandisco.exceptions import SettingsValidationError
from rmandisco.exceptions import SettingsVersionError

SETTINGS_VERSION = 1


@dataclass
class Settings:
    """Optional overrides read from the user's settings file."""

    version: int = SETTINGS_VERSION
    search_paths: list[str] | None = None  # None means use the environment
    follow_symlinks: bool | None = None
    extra: dict = field(default_factory=dict)  # Unknown keys, kept on save

    @classmethod
    def default_path(cls) -> Path:
        """Get default settings location using platformdirs."""
        return user_config_path("rmandisco") / "settings.json"

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        data = dict(self.extra)
        data["version"] = self.version
        if self.search_paths is not None:
            data["search_paths"] = list(self.search_paths)
        if self.follow_symlinks is not None:
            data["follow_symlinks"] = self.follow_symlinks
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create from dict loaded from JSON."""
        if not isinstance(data, dict):
            raise SettingsValidationError("Settings must be a JSON object")
        if "version" not in data:
            raise SettingsValidationError("Settings missing 'version' key")

        version = data["version"]
        if not isinstance(version, int):
            raise SettingsValidationError(f"Invalid settings version: {version!r}")
        if version > SETTINGS_VERSION:
            raise SettingsVersionError(
                f"Settings version {version} is newer than supported version {SETTINGS_VERSION}"
            )

        search_paths = data.get("search_paths")
        if search_paths is not None and (
            not isinstance(search_paths, list)
            or not all(isinstance(p, str) for p in search_paths)
        ):
            raise SettingsValidationError("'search_paths' must be a list of strings")

        follow_symlinks = data.get("follow_symlinks")
        if follow_symlinks is not None and not isinstance(follow_symlinks, bool):
            raise SettingsValidationError("'follow_symlinks' must be true or false")

        extra = {
            key: value
            for key, value in data.items()
            if key not in ("version", "search_paths", "follow_symlinks")
        }
        return cls(
            version=version,
            search_paths=search_paths,
            follow_symlinks=follow_symlinks,
            extra=extra,
        )

    @classmethod
    def load(cls, path: Path | None = None) -> Self:
        """Load settings from JSON file. Returns empty settings if it doesn't exist.

        Args:
            path: Path to settings file. If None, uses default location.
        """
        if path is None:
            path = cls.default_path()

        if not path.exists():
            return cls()

        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError as e:
            raise SettingsValidationError(f"Invalid JSON in settings: {e}")
        return cls.from_dict(data)

    def save(self, path: Path | None = None) -> None:
        """Save settings to JSON file atomically.

        Args:
            path: Path to save settings. If None, uses default location.
        """
        if path is None:
            path = self.default_path()

        path.parent.mkdir(parents=True, exist_ok=True)

        # Write to temp file, then rename
        temp_path = path.with_suffix(".tmp")
        temp_path.write_text(json.dumps(self.to_dict(), indent=2))
        temp_path.replace(path)
