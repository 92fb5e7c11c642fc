"""Tests for list-file parsing, subset filtering and component resolution"""

import pytest

from component_deploy.api.exceptions import ConfigError
from component_deploy.core.component_list import (
    ComponentResolver,
    filter_components,
    load_component_list,
    parse_component_list,
    parse_requested,
)


LIST_LINES = [
    "# components deployed on this host",
    "lobbyapi",
    "",
    "AdminEdgeV2",
    "   depositengine   ",
    "[myplugin]",
    "[otherplugin]",
    "lobbyapi",
]


class TestParseComponentList:

    def test_components_and_patterns(self):
        parsed = parse_component_list(LIST_LINES)
        assert parsed.components == ["lobbyapi", "AdminEdgeV2", "depositengine"]
        assert parsed.plugin_patterns == ["myplugin", "otherplugin"]

    def test_empty(self):
        parsed = parse_component_list(["", "# nothing"])
        assert parsed.components == []
        assert parsed.plugin_patterns == []

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="List file not found"):
            load_component_list(tmp_path / "missing")

    def test_load(self, write_list, config):
        write_list(LIST_LINES)
        parsed = load_component_list(config.paths.list_file)
        assert "AdminEdgeV2" in parsed
        assert parsed.source == config.paths.list_file


class TestFilterComponents:

    def test_all_keeps_list_order(self):
        parsed = parse_component_list(LIST_LINES)
        selected, unknown = filter_components(parsed, "ALL")
        assert selected == ["lobbyapi", "AdminEdgeV2", "depositengine"]
        assert unknown == []

    def test_subset_in_request_order(self):
        parsed = parse_component_list(LIST_LINES)
        selected, unknown = filter_components(parsed, "depositengine, lobbyapi")
        assert selected == ["depositengine", "lobbyapi"]
        assert unknown == []

    def test_unknown_names_are_dropped(self, caplog):
        parsed = parse_component_list(LIST_LINES)
        selected, unknown = filter_components(parsed, "lobbyapi,bogus")
        assert selected == ["lobbyapi"]
        assert unknown == ["bogus"]
        assert "bogus" in caplog.text

    def test_duplicates_requested_once(self):
        assert parse_requested("a,b,a,,b") == ["a", "b"]

    def test_all_sentinel(self):
        assert parse_requested(" ALL ") is None


class TestComponentResolver:

    def test_plain_component(self, config, archive, war_base):
        component = ComponentResolver(config).resolve("lobbyapi")
        assert component.destination_name == "lobbyapi"
        assert component.artifact_base_dir == war_base / "lobbyapi"
        assert component.health_check_dir == war_base / "lobbyapi"
        assert component.resolve_build_path("pala") == f"{archive}/pala/lobbyapi/target"
        assert component.artifact_glob == "lobbyapi-*.war"
        assert not component.is_aliased

    def test_destination_override(self, config, archive, war_base):
        component = ComponentResolver(config).resolve("AdminEdgeV2")
        assert component.destination_name == "AdminEdge"
        assert component.artifact_base_dir == war_base / "AdminEdge"
        assert component.health_check_dir == war_base / "AdminEdge"
        assert component.resolve_build_path("pala-25.1") == \
            f"{archive}/pala-25.1/AdminEdgeRoot/AdminEdgeV2/build/libs"
        # Remote files are still named after the component
        assert component.artifact_glob == "AdminEdgeV2-*.war"
        assert component.creates_destination

    def test_health_path_override(self, config, war_base):
        component = ComponentResolver(config).resolve("DepositEngineV3")
        assert component.destination_name == "DepositEngineV3"
        assert component.health_check_dir == war_base / "depositengine"
        assert not component.creates_destination

    def test_nested_health_path(self, config, war_base):
        component = ComponentResolver(config).resolve("birt-viewer")
        assert component.health_check_dir == war_base / "webapps" / "birt-viewer"

    def test_source_override_with_on_demand_destination(self, config, archive):
        component = ComponentResolver(config).resolve("depositengine")
        assert component.resolve_build_path("pala") == f"{archive}/pala/DepositEngine/target"
        assert component.creates_destination
