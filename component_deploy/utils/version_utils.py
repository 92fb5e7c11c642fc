"""Version management utilities

Artifact versions are compared version-aware, never lexicographically.
When every version in a comparison is a valid PEP 440 version the
``packaging`` ordering is used; otherwise all of them fall back to a
natural key, where digit runs compare numerically and text runs compare
as strings. The rule is chosen once per comparison set, never per item.
"""

import re
from typing import Any, Callable, Iterable, List, Optional, Tuple

from packaging.version import parse, Version, InvalidVersion

from ..constants import DEFAULT_ARTIFACT_EXTENSION, SNAPSHOT_SUFFIX

_TOKEN_RE = re.compile(r"\d+|\D+")


def parse_version(version_str: str) -> Optional[Version]:
    """
    Parse version string

    Args:
        version_str: Version string

    Returns:
        Version object or None if invalid
    """
    try:
        return parse(version_str)
    except InvalidVersion:
        return None


def natural_key(version: str) -> Tuple[Tuple[int, int, str], ...]:
    """
    Build a natural sort key for a version string

    "9.2" -> ((1, 9, '9'), (0, 0, '.'), (1, 2, '2'))

    Numeric runs sort after text runs at the same position, and a
    version that is a prefix of another sorts first ("1.0" < "1.0.1").
    """
    key = []
    for token in _TOKEN_RE.findall(version):
        if token.isdigit():
            key.append((1, int(token), token))
        else:
            key.append((0, 0, token))
    return tuple(key)


def _all_pep440(versions: Iterable[str]) -> bool:
    return all(parse_version(v) is not None for v in versions)


def version_sort_key(versions: Iterable[str]) -> Callable[[str], Any]:
    """
    Pick the sort key that is valid for a whole set of versions

    Returns packaging.version.parse when every version is PEP 440,
    natural_key otherwise.
    """
    return parse if _all_pep440(versions) else natural_key


def compare_versions(version1: str, version2: str) -> int:
    """
    Compare two versions

    Args:
        version1: First version
        version2: Second version

    Returns:
        -1 if version1 < version2
        0 if version1 == version2
        1 if version1 > version2
    """
    if _all_pep440([version1, version2]):
        v1, v2 = parse(version1), parse(version2)
    else:
        v1, v2 = natural_key(version1), natural_key(version2)

    if v1 < v2:
        return -1
    elif v1 > v2:
        return 1
    return 0


def sort_versions(versions: List[str], reverse: bool = False) -> List[str]:
    """
    Sort version strings (ascending by default)

    Args:
        versions: List of version strings
        reverse: Sort in descending order

    Returns:
        Sorted list
    """
    versions = list(versions)
    return sorted(versions, key=version_sort_key(versions), reverse=reverse)


def get_latest_version(versions: List[str]) -> Optional[str]:
    """Get latest version from list, or None for an empty list"""
    if not versions:
        return None
    return sort_versions(versions)[-1]


def canonical_version(filename: str, extension: str = DEFAULT_ARTIFACT_EXTENSION) -> str:
    """
    Derive the canonical version id from an artifact filename

    The extension is dropped and the first "-SNAPSHOT" is removed:
    "lobbyapi-1.4.0-SNAPSHOT.war" -> "lobbyapi-1.4.0".
    """
    suffix = f".{extension}"
    if filename.endswith(suffix):
        filename = filename[:-len(suffix)]
    return filename.replace(SNAPSHOT_SUFFIX, "", 1)


def version_part(filename: str, name: Optional[str], extension: str = DEFAULT_ARTIFACT_EXTENSION) -> str:
    """
    Extract the comparable part of "<name>-<version>.<ext>"

    Falls back to the extension-less stem when the name prefix is absent.
    """
    stem = filename
    suffix = f".{extension}"
    if stem.endswith(suffix):
        stem = stem[:-len(suffix)]
    prefix = f"{name}-"
    if name and stem.startswith(prefix):
        return stem[len(prefix):]
    return stem
