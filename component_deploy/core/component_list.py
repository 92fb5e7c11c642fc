"""Component list loading, subset filtering and component resolution"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from ..api.exceptions import ConfigError
from ..constants import (
    ALL_COMPONENTS,
    COMPONENT_SEPARATOR,
    COMMENT_PREFIX,
    PLUGIN_PATTERN_RE,
)
from ..models.component import Component, ComponentList
from ..models.config import DeployConfig
from ..utils.template_utils import render_template

logger = logging.getLogger(__name__)


def parse_component_list(lines: Iterable[str], source: Optional[Path] = None) -> ComponentList:
    """
    Parse the line-oriented component list

    Blank lines and lines starting with "#" are ignored; "[pattern]" lines
    are plugin name patterns; every other line is a component name.
    """
    result = ComponentList(source=source)
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue

        match = PLUGIN_PATTERN_RE.match(line)
        if match:
            result.plugin_patterns.append(match.group(1))
        elif line not in result.components:
            result.components.append(line)

    return result


def load_component_list(path: Path) -> ComponentList:
    """
    Load the component list file

    Raises:
        ConfigError: If the file is missing or unreadable
    """
    if not path.is_file():
        raise ConfigError(f"List file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read list file {path}: {e}")

    component_list = parse_component_list(content.splitlines(), source=path)
    logger.info(f"Components from file: {' '.join(component_list.components) or 'None'}")
    logger.info(f"Plugin patterns: {' '.join(component_list.plugin_patterns) or 'None'}")
    return component_list


def is_all(component_input: str) -> bool:
    return component_input.strip() == ALL_COMPONENTS


def parse_requested(component_input: str) -> Optional[List[str]]:
    """
    Split the requested subset

    Returns:
        None for the "all" sentinel, otherwise the de-duplicated names in
        request order
    """
    if is_all(component_input):
        return None

    requested = []
    for name in component_input.split(COMPONENT_SEPARATOR):
        name = name.strip()
        if name and name not in requested:
            requested.append(name)
    return requested


def filter_components(component_list: ComponentList,
                      component_input: str) -> Tuple[List[str], List[str]]:
    """
    Apply the requested subset to the master list

    Returns:
        (selected names, requested names missing from the master list)
    """
    requested = parse_requested(component_input)
    if requested is None:
        return list(component_list.components), []

    selected, unknown = [], []
    for name in requested:
        if name in component_list:
            selected.append(name)
        else:
            logger.warning(
                f"Component '{name}' not found in components allowed list file "
                f"{component_list.source or ''}".rstrip()
            )
            unknown.append(name)

    return selected, unknown


class ComponentResolver:
    """Resolves component names into Components using the alias table"""

    def __init__(self, config: DeployConfig):
        self.config = config

    def resolve(self, name: str) -> Component:
        alias = self.config.alias_for(name)
        remote = self.config.remote
        war_base = self.config.paths.war_base

        destination = alias.destination if alias and alias.destination else name

        if alias and alias.artifact_source:
            source = alias.artifact_source
        else:
            source = render_template(remote.source_template, {"name": name})

        # ${branch} is left in place and rendered per run
        build_source_path = f"{remote.archive_root.rstrip('/')}/{source.strip('/')}"

        if alias and alias.health_check_path:
            health_check_dir = war_base / alias.health_check_path
        else:
            health_check_dir = war_base / destination

        return Component(
            name=name,
            artifact_base_dir=war_base / destination,
            build_source_path=build_source_path,
            destination_name=destination,
            health_check_dir=health_check_dir,
            special_handling=alias,
            extension=remote.extension,
        )

    def resolve_all(self, names: Iterable[str]) -> List[Component]:
        return [self.resolve(name) for name in names]
