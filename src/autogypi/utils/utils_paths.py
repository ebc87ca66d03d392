# src/autogypi/utils/utils_paths.py

import os
from pathlib import Path


def resolve_path(base_dir: Path | str, path: Path | str) -> Path:
    """Join `path` onto `base_dir` and normalize, without following symlinks.

    Absolute paths are returned normalized and otherwise untouched.
    """
    return Path(os.path.normpath(Path(base_dir) / path))


def relativize_path(path: Path | str, base_dir: Path | str) -> str:
    """Express `path` relative to `base_dir`.

    Inverse of resolve_path(): resolve_path(base, relativize_path(p, base))
    gives back p for any absolute, normalized p. Returns the absolute path
    when no relative form exists (different drives on Windows).
    """
    try:
        return os.path.relpath(path, base_dir)
    except ValueError:
        return str(path)


def shorten_path_for_display(path: Path | str, *, cwd: Path | None = None) -> str:
    """Shorten an absolute path for display purposes.

    Returns the path relative to cwd when it lies below it, otherwise the
    absolute path as a string.
    """
    path_obj = Path(path).resolve()

    if cwd:
        try:
            return str(path_obj.relative_to(Path(cwd).resolve()))
        except ValueError:
            pass

    return str(path_obj)
