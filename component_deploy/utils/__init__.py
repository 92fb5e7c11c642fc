"""Utility functions for component-deploy"""

from .file_utils import (
    atomic_write_text,
    safe_remove,
    is_empty_dir,
    chown_recursive,
    create_unique_directory,
    move_contents,
)

from .template_utils import (
    render_template,
    render_command,
    render_tokens,
)

from .version_utils import (
    parse_version,
    natural_key,
    version_sort_key,
    compare_versions,
    sort_versions,
    get_latest_version,
    canonical_version,
    version_part,
)

__all__ = [
    "atomic_write_text",
    "safe_remove",
    "is_empty_dir",
    "chown_recursive",
    "create_unique_directory",
    "move_contents",
    "render_template",
    "render_command",
    "render_tokens",
    "parse_version",
    "natural_key",
    "version_sort_key",
    "compare_versions",
    "sort_versions",
    "get_latest_version",
    "canonical_version",
    "version_part",
]
