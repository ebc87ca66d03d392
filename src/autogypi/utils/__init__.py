# src/autogypi/utils/__init__.py

from .utils_json import format_json, write_json
from .utils_paths import relativize_path, resolve_path, shorten_path_for_display


__all__ = [  # noqa: RUF022
    # utils_json
    "format_json",
    "write_json",
    # utils_paths
    "relativize_path",
    "resolve_path",
    "shorten_path_for_display",
]
