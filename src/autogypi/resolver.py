# src/autogypi/resolver.py
"""Mapping package names to installed locations.

A resolver is any callable taking a batch of package names and the
directory to resolve them from, returning one absolute entry path per name
in the same order. A batch either resolves completely or raises
ResolutionError; partial results are never returned.

Which resolver handles a configuration's dependencies is decided by
select_resolver(), in this order:

  1. the package's own ``gypiresolver.py`` override, if it ships one
  2. the resolver inherited from the configuration that depends on it
  3. the process default, NodeModulesResolver
"""

import os
import sys
import traceback
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, cast

from .constants import DEPENDENCY_STORE_NAME, PACKAGE_FILE_NAME, RESOLVER_FILE_NAME
from .errors import ResolutionError
from .logs import getAppLogger


Resolver = Callable[[Sequence[str], Path], list[Path]]


class NodeModulesResolver:
    """Resolve package names the way Node looks up bare module names.

    Starting at the base directory and moving up, each ancestor's
    node_modules directory is searched for the package. The entry point
    returned is the package's package.json, so callers land in the package
    directory regardless of its "main" field.
    """

    def __call__(self, names: Sequence[str], basedir: Path) -> list[Path]:
        return [self.resolve_one(name, basedir) for name in names]

    def resolve_one(self, name: str, basedir: Path) -> Path:
        logger = getAppLogger()
        for directory in (basedir, *basedir.parents):
            # node_modules/node_modules is never searched
            if directory.name.lower() == DEPENDENCY_STORE_NAME:
                continue
            entry = directory / DEPENDENCY_STORE_NAME / name / PACKAGE_FILE_NAME
            if entry.is_file():
                logger.trace(f"[resolve] {name} -> {entry}")
                return entry

        xmsg = f"not installed in any node_modules above {basedir}"
        raise ResolutionError(name, reason=xmsg)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


DEFAULT_RESOLVER: Resolver = NodeModulesResolver()


def load_resolver_override(package_dir: Path) -> Resolver | None:
    """Load the ``gypiresolver.py`` shipped in `package_dir`, if any.

    The file is trusted code, executed like a Python config file, and must
    define a callable ``resolve(names, basedir)`` following the resolver
    contract.

    Raises:
        RuntimeError: if executing the file fails.
        TypeError: if it does not define a callable ``resolve``.
    """
    logger = getAppLogger()
    resolver_path = package_dir / RESOLVER_FILE_NAME
    if not resolver_path.is_file():
        return None

    logger.debug("Using resolver override %s", resolver_path)
    resolver_globals: dict[str, Any] = {"__file__": str(resolver_path)}

    # Allow local imports next to the resolver file
    parent_dir = str(package_dir)
    added_to_sys_path = parent_dir not in sys.path
    if added_to_sys_path:
        sys.path.insert(0, parent_dir)

    try:
        source = resolver_path.read_text(encoding="utf-8")
        exec(compile(source, str(resolver_path), "exec"), resolver_globals)  # noqa: S102
    except Exception as e:
        tb = traceback.format_exc()
        xmsg = (
            f"Error while executing resolver override: {resolver_path}\n"
            f"{type(e).__name__}: {e}\n{tb}"
        )
        raise RuntimeError(xmsg) from e
    finally:
        if added_to_sys_path and sys.path[0] == parent_dir:
            sys.path.pop(0)

    resolve = resolver_globals.get("resolve")
    if not callable(resolve):
        xmsg = f"{resolver_path} must define a callable `resolve(names, basedir)`"
        raise TypeError(xmsg)

    return cast("Resolver", resolve)


def select_resolver(package_dir: Path, inherited: Resolver | None = None) -> Resolver:
    """Pick the resolver for dependencies declared in `package_dir`."""
    override = load_resolver_override(package_dir)
    if override is not None:
        return override
    if inherited is not None:
        return inherited
    return DEFAULT_RESOLVER


def resolve_names(
    resolver: Resolver,
    names: Sequence[str],
    basedir: Path,
) -> list[Path]:
    """Resolve a batch of names, enforcing the all-or-nothing contract.

    Returned entries are made absolute against `basedir`.
    """
    if not names:
        return []

    try:
        entries = list(resolver(list(names), basedir))
    except ResolutionError:
        raise
    except Exception as e:
        xmsg = f"resolver failed: {type(e).__name__}: {e}"
        raise ResolutionError(", ".join(names), reason=xmsg) from e

    if len(entries) != len(names):
        xmsg = f"resolver returned {len(entries)} entries for {len(names)} names"
        raise ResolutionError(", ".join(names), reason=xmsg)

    for name, entry in zip(names, entries, strict=True):
        if not isinstance(entry, (str, os.PathLike)):
            xmsg = f"resolver returned {type(entry).__name__}, not a path"
            raise ResolutionError(name, reason=xmsg)

    return [(basedir / entry).resolve() for entry in entries]
