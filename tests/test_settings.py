"""Tests for user settings."""

import json

import pytest

from rmandisco.exceptions import SettingsValidationError
from rmandisco.exceptions import SettingsVersionError
from rmandisco.settings import SETTINGS_VERSION
from rmandisco.settings import Settings


class TestSettingsLoad:
    """Tests for Settings.load()."""

    def test_missing_file_gives_empty_settings(self, tmp_path):
        """Test that a missing file means no overrides."""
        settings = Settings.load(tmp_path / "settings.json")

        assert settings.search_paths is None
        assert settings.follow_symlinks is None

    def test_loads_overrides(self, tmp_path):
        """Test that search paths and symlink policy are read."""
        path = tmp_path / "settings.json"
        path.write_text(
            json.dumps(
                {"version": 1, "search_paths": ["/a", "/b"], "follow_symlinks": False}
            )
        )

        settings = Settings.load(path)

        assert settings.search_paths == ["/a", "/b"]
        assert settings.follow_symlinks is False

    def test_invalid_json(self, tmp_path):
        """Test that malformed JSON raises SettingsValidationError."""
        path = tmp_path / "settings.json"
        path.write_text("{not json")

        with pytest.raises(SettingsValidationError, match="Invalid JSON"):
            Settings.load(path)

    def test_missing_version(self, tmp_path):
        """Test that settings without a version are rejected."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"search_paths": []}))

        with pytest.raises(SettingsValidationError, match="version"):
            Settings.load(path)

    def test_newer_version(self, tmp_path):
        """Test that settings from a newer release are rejected."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"version": SETTINGS_VERSION + 1}))

        with pytest.raises(SettingsVersionError):
            Settings.load(path)

    def test_non_object(self, tmp_path):
        """Test that a JSON array is not valid settings."""
        path = tmp_path / "settings.json"
        path.write_text("[]")

        with pytest.raises(SettingsValidationError):
            Settings.load(path)

    def test_bad_search_paths(self, tmp_path):
        """Test that search_paths must be a list of strings."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"version": 1, "search_paths": "/a"}))

        with pytest.raises(SettingsValidationError, match="search_paths"):
            Settings.load(path)

    def test_bad_follow_symlinks(self, tmp_path):
        """Test that follow_symlinks must be a boolean."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"version": 1, "follow_symlinks": "yes"}))

        with pytest.raises(SettingsValidationError, match="follow_symlinks"):
            Settings.load(path)


class TestSettingsSave:
    """Tests for Settings.save()."""

    def test_save_and_load(self, tmp_path):
        """Test that saved settings load back unchanged."""
        path = tmp_path / "nested" / "settings.json"
        Settings(search_paths=["/a"], follow_symlinks=True).save(path)

        settings = Settings.load(path)

        assert settings.search_paths == ["/a"]
        assert settings.follow_symlinks is True

    def test_save_omits_unset_overrides(self, tmp_path):
        """Test that unset fields are left out of the file."""
        path = tmp_path / "settings.json"
        Settings().save(path)

        assert json.loads(path.read_text()) == {"version": SETTINGS_VERSION}

    def test_unknown_keys_preserved(self, tmp_path):
        """Test that keys this version doesn't know survive a save."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"version": 1, "theme": "dark"}))

        Settings.load(path).save(path)

        assert json.loads(path.read_text())["theme"] == "dark"

    def test_no_temp_file_left(self, tmp_path):
        """Test that the temporary file is renamed into place."""
        path = tmp_path / "settings.json"
        Settings().save(path)

        assert not path.with_suffix(".tmp").exists()


class TestSettingsDefaultPath:
    """Tests for Settings.default_path()."""

    def test_in_user_config_dir(self):
        """Test that the default file lives under an rmandisco directory."""
        path = Settings.default_path()

        assert path.name == "settings.json"
        assert path.parent.name == "rmandisco"
