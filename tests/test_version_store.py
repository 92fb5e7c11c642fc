"""Tests for live/previous pointers and the current-version marker"""

import os

import pytest

from component_deploy.api.exceptions import NoPreviousVersionError, VersionStoreError
from component_deploy.core.version_store import VersionStore


@pytest.fixture
def store(war_base):
    return VersionStore(war_base, "war")


def stage(store, name, version):
    """Create <base>/<name>/<version>/<name>.war as the engine would"""
    version_dir = store.version_dir(name, version)
    version_dir.mkdir(parents=True)
    staged = version_dir / f"{name}.war"
    staged.write_text(version)
    return staged


class TestPromote:

    def test_first_promotion(self, store, war_base):
        staged = stage(store, "lobbyapi", "lobbyapi-1.0.0")

        assert store.promote("lobbyapi", "lobbyapi-1.0.0", staged, "lobbyapi-1.0.0-SNAPSHOT.war")

        live = war_base / "lobbyapi" / "lobbyapi"
        assert live.is_symlink()
        assert os.readlink(live) == "lobbyapi-1.0.0"
        assert (live / "lobbyapi.war").read_text() == "lobbyapi-1.0.0"
        assert store.previous_version("lobbyapi") is None
        assert (war_base / "lobbyapi.current_version").read_text() == "lobbyapi-1.0.0-SNAPSHOT.war\n"
        assert store.marker("lobbyapi") == "lobbyapi-1.0.0-SNAPSHOT.war"

    def test_second_promotion_keeps_previous(self, store):
        store.promote("lobbyapi", "lobbyapi-1.0.0", stage(store, "lobbyapi", "lobbyapi-1.0.0"),
                      "lobbyapi-1.0.0.war")
        store.promote("lobbyapi", "lobbyapi-1.1.0", stage(store, "lobbyapi", "lobbyapi-1.1.0"),
                      "lobbyapi-1.1.0.war")

        assert store.current_version("lobbyapi") == "lobbyapi-1.1.0"
        assert store.previous_version("lobbyapi") == "lobbyapi-1.0.0"
        assert store.marker("lobbyapi") == "lobbyapi-1.1.0.war"

    def test_already_current_is_a_noop(self, store):
        staged = stage(store, "lobbyapi", "lobbyapi-1.0.0")
        store.promote("lobbyapi", "lobbyapi-1.0.0", staged, "lobbyapi-1.0.0.war")
        store.marker_file("lobbyapi").write_text("untouched\n")

        assert store.promote("lobbyapi", "lobbyapi-1.0.0", staged, "lobbyapi-1.0.0.war") is False
        assert store.marker("lobbyapi") == "untouched"
        assert store.previous_version("lobbyapi") is None

    def test_missing_staged_artifact(self, store, war_base):
        (war_base / "lobbyapi").mkdir()
        missing = store.version_dir("lobbyapi", "lobbyapi-2.0.0") / "lobbyapi.war"

        with pytest.raises(VersionStoreError):
            store.promote("lobbyapi", "lobbyapi-2.0.0", missing, "lobbyapi-2.0.0.war")

        assert store.current_version("lobbyapi") is None

    def test_no_temporary_links_left(self, store, war_base):
        store.promote("lobbyapi", "lobbyapi-1.0.0", stage(store, "lobbyapi", "lobbyapi-1.0.0"),
                      "lobbyapi-1.0.0.war")
        store.promote("lobbyapi", "lobbyapi-1.1.0", stage(store, "lobbyapi", "lobbyapi-1.1.0"),
                      "lobbyapi-1.1.0.war")

        entries = sorted(p.name for p in (war_base / "lobbyapi").iterdir())
        assert entries == ["lobbyapi", "lobbyapi-1.0.0", "lobbyapi-1.1.0", "lobbyapi-previous"]
        assert not list(war_base.glob("*.tmp"))


class TestRollback:

    def test_swaps_live_and_previous(self, store):
        store.promote("lobbyapi", "lobbyapi-1.0.0", stage(store, "lobbyapi", "lobbyapi-1.0.0"),
                      "lobbyapi-1.0.0.war")
        store.promote("lobbyapi", "lobbyapi-1.1.0", stage(store, "lobbyapi", "lobbyapi-1.1.0"),
                      "lobbyapi-1.1.0-SNAPSHOT.war")

        old, new = store.rollback("lobbyapi")

        assert (old, new) == ("lobbyapi-1.1.0", "lobbyapi-1.0.0")
        assert store.current_version("lobbyapi") == "lobbyapi-1.0.0"
        assert store.previous_version("lobbyapi") == "lobbyapi-1.1.0"
        assert store.marker("lobbyapi") == "lobbyapi-1.0.0.war"

    def test_rollback_twice_returns(self, store):
        store.promote("lobbyapi", "lobbyapi-1.0.0", stage(store, "lobbyapi", "lobbyapi-1.0.0"),
                      "lobbyapi-1.0.0.war")
        store.promote("lobbyapi", "lobbyapi-1.1.0", stage(store, "lobbyapi", "lobbyapi-1.1.0"),
                      "lobbyapi-1.1.0.war")

        store.rollback("lobbyapi")
        store.rollback("lobbyapi")

        assert store.current_version("lobbyapi") == "lobbyapi-1.1.0"

    def test_without_previous(self, store):
        store.promote("lobbyapi", "lobbyapi-1.0.0", stage(store, "lobbyapi", "lobbyapi-1.0.0"),
                      "lobbyapi-1.0.0.war")

        with pytest.raises(NoPreviousVersionError):
            store.rollback("lobbyapi")

        assert store.current_version("lobbyapi") == "lobbyapi-1.0.0"
