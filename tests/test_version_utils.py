"""Tests for version comparison and artifact filename parsing"""

import pytest

from component_deploy.utils.version_utils import (
    canonical_version,
    compare_versions,
    get_latest_version,
    natural_key,
    sort_versions,
    version_part,
)


class TestCompareVersions:

    @pytest.mark.parametrize("newer, older", [
        ("10.0", "9.2"),
        ("1.10.0", "1.9.0"),
        ("2.0.0", "2.0.0rc1"),
        ("1.4.0-build12", "1.4.0-build9"),
        ("25.1.3-hotfix", "25.1.2-hotfix"),
    ])
    def test_newer_wins(self, newer, older):
        assert compare_versions(newer, older) == 1
        assert compare_versions(older, newer) == -1

    def test_equal(self):
        assert compare_versions("1.2.3", "1.2.3") == 0

    def test_not_lexicographic(self):
        assert "10.0" < "9.2"
        assert compare_versions("10.0", "9.2") > 0


class TestSortVersions:

    def test_ascending_by_default(self):
        assert sort_versions(["1.10.0", "1.2.0", "1.9.0"]) == ["1.2.0", "1.9.0", "1.10.0"]

    def test_reverse(self):
        assert sort_versions(["9.2", "10.0"], reverse=True) == ["10.0", "9.2"]

    def test_mixed_set_uses_natural_order(self):
        # "1.4.0-SNAPSHOT" is not PEP 440, so the whole set is ordered naturally
        versions = ["1.10.0", "1.4.0-SNAPSHOT", "1.9.1"]
        assert sort_versions(versions) == ["1.4.0-SNAPSHOT", "1.9.1", "1.10.0"]

    def test_latest(self):
        assert get_latest_version(["3.1", "3.10", "3.9"]) == "3.10"

    def test_latest_of_nothing(self):
        assert get_latest_version([]) is None


class TestNaturalKey:

    def test_digit_runs_compare_numerically(self):
        assert natural_key("build-10") > natural_key("build-9")

    def test_prefix_sorts_first(self):
        assert natural_key("1.0") < natural_key("1.0.1")


class TestFilenameParsing:

    def test_canonical_version_strips_snapshot(self):
        assert canonical_version("lobbyapi-1.4.0-SNAPSHOT.war", "war") == "lobbyapi-1.4.0"

    def test_canonical_version_release(self):
        assert canonical_version("lobbyapi-1.4.0.war", "war") == "lobbyapi-1.4.0"

    def test_canonical_version_only_first_snapshot(self):
        assert canonical_version("a-SNAPSHOT-SNAPSHOT.war", "war") == "a-SNAPSHOT"

    def test_version_part_strips_name(self):
        assert version_part("lobbyapi-1.4.0.war", "lobbyapi", "war") == "1.4.0"

    def test_version_part_without_name(self):
        assert version_part("myplugin-2.1.jar", None, "jar") == "myplugin-2.1"
