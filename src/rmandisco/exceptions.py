"""Custom exceptions for rmandisco."""

from pathlib import Path


class RmanDiscoError(Exception):
    """Base exception for rmandisco."""


class DiscoveryError(RmanDiscoError):
    """Filesystem walk failed (unreadable search path, permission denied)."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        super().__init__(f"Cannot scan {self.path}: {reason}")


class AliasParseError(RmanDiscoError):
    """An aliases file could not be read or is malformed."""

    def __init__(self, uri: str, reason: str):
        self.uri = uri
        super().__init__(f"Invalid aliases file {uri}: {reason}")


class SettingsValidationError(RmanDiscoError):
    """Settings file is invalid or malformed."""


class SettingsVersionError(RmanDiscoError):
    """Settings version is unsupported."""
