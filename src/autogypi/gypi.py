# src/autogypi/gypi.py
"""Output trees: the contents of generated .gypi files."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .constants import PATH_KEYS
from .utils import relativize_path


# Directive key -> ordered values, e.g. {"include_dirs": [...], "includes": [...]}
Gypi = dict[str, list[str]]


def merge_gypi(target: Gypi, source: Gypi) -> None:
    """Append every list in `source` onto the same key in `target`."""
    for key, values in source.items():
        target.setdefault(key, []).extend(values)


def relativize_gypi(gypi: Gypi, base_dir: Path) -> Gypi:
    """Return a copy of `gypi` with its path lists relative to `base_dir`.

    Only keys known to hold paths are rewritten; other keys are copied.
    """
    result: Gypi = {}
    for key, values in gypi.items():
        if key in PATH_KEYS:
            result[key] = [relativize_path(value, base_dir) for value in values]
        else:
            result[key] = list(values)
    return result


@dataclass
class GypiPair:
    """Per-target and top-level output trees built together."""

    gypi: Gypi = field(default_factory=dict)
    gypi_top: Gypi = field(default_factory=dict)

    def extend(self, other: "GypiPair") -> None:
        merge_gypi(self.gypi, other.gypi)
        merge_gypi(self.gypi_top, other.gypi_top)

    def add(self, key: str, values: Iterable[Path | str], *, top: bool = False) -> None:
        """Append values under `key`; an empty iterable adds nothing."""
        items = [str(value) for value in values]
        if not items:
            return
        tree = self.gypi_top if top else self.gypi
        tree.setdefault(key, []).extend(items)
