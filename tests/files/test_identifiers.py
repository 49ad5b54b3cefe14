"""Tests for identifier splitting."""

import pytest

from rmandisco.files import split_identifier


class TestSplitIdentifier:
    """Tests for split_identifier()."""

    def test_unversioned_identifier(self):
        """Test that an identifier without version tokens is its own name."""
        assert split_identifier("PxrSurface") == ("PxrSurface", "PxrSurface", None)

    def test_family_is_first_token(self):
        """Test that the family is the first underscore separated token."""
        family, name, version = split_identifier("Pxr_Surface_Legacy")

        assert family == "Pxr"
        assert name == "Pxr_Surface_Legacy"
        assert version is None

    def test_major_and_minor_version(self):
        """Test that two trailing integers form major and minor version."""
        assert split_identifier("PxrLayer_2_1") == ("PxrLayer", "PxrLayer", (2, 1))

    def test_major_version_only(self):
        """Test that one trailing integer is a major version with minor 0."""
        assert split_identifier("PxrLayer_3") == ("PxrLayer", "PxrLayer", (3, 0))

    def test_inner_digits_are_not_a_version(self):
        """Test that digits before a non-digit token stay in the name."""
        assert split_identifier("Pxr_2_Noise") == ("Pxr", "Pxr_2_Noise", None)

    def test_empty_identifier_raises(self):
        """Test that an empty identifier is rejected."""
        with pytest.raises(ValueError):
            split_identifier("")

    def test_version_without_name_raises(self):
        """Test that an identifier made only of version tokens is rejected."""
        with pytest.raises(ValueError):
            split_identifier("_1_2")
