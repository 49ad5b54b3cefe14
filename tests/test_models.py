"""Tests for data models."""

from rmandisco.models import DiscoveryRecord
from rmandisco.models import DiscoveryRun
from rmandisco.models import DiscoveryState
from rmandisco.models import SearchConfiguration


class TestDiscoveryRecord:
    """Tests for DiscoveryRecord."""

    def test_aliases_start_empty(self):
        """Test that a fresh record has no aliases."""
        record = DiscoveryRecord(uri="/s/a.oso", identifier="a", extension="oso")

        assert record.aliases == []

    def test_to_dict(self):
        """Test the JSON-serializable form."""
        record = DiscoveryRecord(
            uri="/s/PxrLayer_2_1.oso",
            identifier="PxrLayer_2_1",
            extension="oso",
            name="PxrLayer",
            family="PxrLayer",
            version=(2, 1),
            source_type="OSL",
            aliases=["Layer"],
        )

        assert record.to_dict() == {
            "uri": "/s/PxrLayer_2_1.oso",
            "identifier": "PxrLayer_2_1",
            "extension": "oso",
            "name": "PxrLayer",
            "family": "PxrLayer",
            "version": [2, 1],
            "source_type": "OSL",
            "aliases": ["Layer"],
        }

    def test_to_dict_without_version(self):
        """Test that an unversioned record serializes version as None."""
        record = DiscoveryRecord(uri="/s/a.args", identifier="a", extension="args")

        assert record.to_dict()["version"] is None


class TestSearchConfiguration:
    """Tests for SearchConfiguration."""

    def test_create_normalizes_extensions(self):
        """Test that extensions lose their dot and case."""
        config = SearchConfiguration.create(["/s"], [".OSO", "args"])

        assert config.extensions == ("oso", "args")
        assert config.follow_symlinks is True

    def test_create_copies_search_paths(self):
        """Test that later changes to the input list don't leak in."""
        search_paths = ["/s"]
        config = SearchConfiguration.create(search_paths, ["oso"])

        search_paths.append("/t")

        assert config.search_paths == ("/s",)


class TestDiscoveryRun:
    """Tests for DiscoveryRun."""

    def test_starts_configured(self):
        """Test that a new run starts in CONFIGURED with nothing collected."""
        run = DiscoveryRun()

        assert run.state == DiscoveryState.CONFIGURED
        assert run.records == []
        assert len(run.alias_map) == 0
