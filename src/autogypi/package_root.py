# src/autogypi/package_root.py
"""Locate the root directory of an installed package."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .constants import (
    CONFIG_FILE_NAME,
    DEPENDENCY_STORE_NAME,
    MAX_PACKAGE_ROOT_DEPTH,
    PACKAGE_FILE_NAME,
)
from .logs import getAppLogger


class MarkerKind(Enum):
    CONFIG = "config"  # autogypi.json
    PACKAGE = "package"  # package.json only


# Checked in this order inside every directory
MARKER_FILES: tuple[tuple[MarkerKind, str], ...] = (
    (MarkerKind.CONFIG, CONFIG_FILE_NAME),
    (MarkerKind.PACKAGE, PACKAGE_FILE_NAME),
)


@dataclass(frozen=True)
class PackageRoot:
    path: Path
    marker: MarkerKind

    @property
    def config_path(self) -> Path | None:
        """Path of the package's autogypi.json, if it has one."""
        if self.marker is MarkerKind.CONFIG:
            return self.path / CONFIG_FILE_NAME
        return None


def find_marker(directory: Path) -> MarkerKind | None:
    for kind, name in MARKER_FILES:
        if (directory / name).is_file():
            return kind
    return None


def find_package_root(
    start: Path,
    *,
    max_depth: int = MAX_PACKAGE_ROOT_DEPTH,
) -> PackageRoot | None:
    """Walk up from `start` to the first directory holding a marker file.

    The start directory itself is checked first. The walk gives up when
    the filesystem root is reached, when the next directory up is a
    node_modules directory (the package would then resolve outside its own
    install tree), or after `max_depth` steps.

    Returns:
        The package root and the marker found there, or None.
    """
    logger = getAppLogger()
    current = start
    depth = 0

    while True:
        marker = find_marker(current)
        if marker is not None:
            logger.trace(f"[find_package_root] {marker.value} marker in {current}")
            return PackageRoot(current, marker)

        parent = current.parent
        depth += 1
        if (
            parent == current
            or parent.name.lower() == DEPENDENCY_STORE_NAME
            or depth > max_depth
        ):
            logger.trace(f"[find_package_root] gave up at {current} (depth {depth})")
            return None

        current = parent
