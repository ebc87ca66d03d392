# src/autogypi/meta.py
"""Program identity and version metadata."""

import re
import subprocess
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path


# --- program identity ---------------------------------------------------------

PROGRAM_PACKAGE = "autogypi"
PROGRAM_SCRIPT = "autogypi"
PROGRAM_DISPLAY = "AutoGypi"
PROGRAM_ENV = "AUTOGYPI"


@dataclass(frozen=True)
class Metadata:
    version: str
    commit: str

    def __str__(self) -> str:
        return f"{self.version} ({self.commit})"


def get_metadata() -> Metadata:
    """Return version and commit for this tool.

    The version comes from pyproject.toml when running from a source
    checkout, otherwise from the installed distribution. The commit is
    read from git when available.
    """
    version = "unknown"
    commit = "unknown"

    root = Path(__file__).resolve().parents[2]
    pyproject = root / "pyproject.toml"
    if pyproject.exists():
        text = pyproject.read_text(encoding="utf-8")
        match = re.search(r'(?m)^\s*version\s*=\s*["\']([^"\']+)["\']', text)
        if match:
            version = match.group(1)
    else:
        from importlib.metadata import PackageNotFoundError  # noqa: PLC0415
        from importlib.metadata import version as dist_version  # noqa: PLC0415

        with suppress(PackageNotFoundError):
            version = dist_version(PROGRAM_PACKAGE)

    with suppress(Exception):
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],  # noqa: S607
            cwd=root,
            capture_output=True,
            text=True,
            check=True,
        )
        commit = result.stdout.strip() or commit

    return Metadata(version, commit)
