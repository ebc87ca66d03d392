# src/autogypi/config/config_types.py

from dataclasses import dataclass
from pathlib import Path
from typing import TypedDict

from autogypi.utils import resolve_path


# Raw autogypi.json contents, as published inside packages
class AutogypiConfig(TypedDict, total=False):
    dependencies: list[str]  # package names or relative paths
    includes: list[str]  # gypi files to include inside targets
    topIncludes: list[str]  # gypi files to include at top level
    includeDirs: list[str]  # header directories to add to targets
    output: str  # path to auto.gypi to generate
    outputTop: str  # path to auto-top.gypi to generate


# Keys holding lists of strings, mapped to Configuration field names
LIST_FIELDS: dict[str, str] = {
    "dependencies": "dependencies",
    "includes": "includes",
    "topIncludes": "top_includes",
    "includeDirs": "include_dirs",
}

# Keys holding a single string, mapped to Configuration field names
STRING_FIELDS: dict[str, str] = {
    "output": "output",
    "outputTop": "output_top",
}


@dataclass(frozen=True)
class Configuration:
    """A parsed and validated autogypi.json.

    All relative paths inside are relative to the directory holding `path`.
    """

    path: Path  # absolute path of the file this was read from
    dependencies: tuple[str, ...] = ()
    includes: tuple[str, ...] = ()
    top_includes: tuple[str, ...] = ()
    include_dirs: tuple[str, ...] = ()
    output: str | None = None
    output_top: str | None = None

    @property
    def base_dir(self) -> Path:
        return self.path.parent

    def resolve_file(self, relative_path: str) -> Path:
        """Return `relative_path` as an absolute, normalized path."""
        return resolve_path(self.base_dir, relative_path)
