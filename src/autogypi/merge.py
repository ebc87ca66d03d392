# src/autogypi/merge.py
"""Recursive dependency resolution and configuration merging.

merge_configuration() walks the dependency tree rooted at one autogypi.json:

  - name-like references are resolved in one batch per configuration,
    path-like references are joined onto the configuration's directory
  - every dependency is traced up to its package root
  - packages shipping their own autogypi.json are merged recursively,
    plain packages contribute their root directory to include_dirs
  - each package is included at most once per run, whether it is reached
    again by the same name or by a different reference to the same root
  - dependency contributions come first, in declared order, followed by
    the configuration's own includes

All paths in the returned trees are absolute; relativizing them is up to
the caller writing the output files.
"""

from dataclasses import dataclass, field
from pathlib import Path

from .config import Configuration, read_config
from .errors import PackageRootNotFoundError, ResolutionError
from .gypi import GypiPair
from .logs import getAppLogger
from .package_root import find_package_root
from .references import ReferenceKind, classify_reference, is_name_reference
from .resolver import Resolver, resolve_names, select_resolver
from .utils import shorten_path_for_display


@dataclass
class VisitedSet:
    """Write-once set of keys seen during one generation run."""

    _seen: set[str] = field(default_factory=set)

    def claim(self, key: str) -> bool:
        """Mark `key` as visited. Returns False if it already was."""
        if key in self._seen:
            return False
        self._seen.add(key)
        return True

    def __contains__(self, key: object) -> bool:
        return key in self._seen

    def __len__(self) -> int:
        return len(self._seen)


@dataclass
class MergeContext:
    """State shared by every recursive call of a single generation run."""

    names: VisitedSet = field(default_factory=VisitedSet)
    roots: VisitedSet = field(default_factory=VisitedSet)


@dataclass(frozen=True)
class ResolvedDependency:
    reference: str
    kind: ReferenceKind
    entry: Path  # absolute


def resolve_dependencies(
    configuration: Configuration,
    resolver: Resolver,
) -> list[ResolvedDependency]:
    """Resolve every dependency of `configuration`, keeping declared order.

    Raises:
        ResolutionError: if any name cannot be resolved or a path-like
            reference points at nothing.
    """
    names = [ref for ref in configuration.dependencies if is_name_reference(ref)]
    try:
        name_entries = iter(resolve_names(resolver, names, configuration.base_dir))
    except ResolutionError as e:
        raise ResolutionError(e.dependency, configuration.path, e.reason) from e

    resolved: list[ResolvedDependency] = []
    for reference in configuration.dependencies:
        kind = classify_reference(reference)
        if kind is ReferenceKind.NAME:
            entry = next(name_entries)
        else:
            entry = configuration.resolve_file(reference)
            if not entry.exists():
                raise ResolutionError(reference, configuration.path, "path does not exist")
            entry = entry.resolve()
        resolved.append(ResolvedDependency(reference, kind, entry))

    return resolved


def _merge_dependency(
    dependency: ResolvedDependency,
    configuration: Configuration,
    resolver: Resolver,
    context: MergeContext,
) -> GypiPair | None:
    logger = getAppLogger()

    if dependency.kind is ReferenceKind.NAME and not context.names.claim(
        dependency.reference
    ):
        logger.debug("Skipping %s: already included", dependency.reference)
        return None

    entry = dependency.entry
    start = entry if entry.is_dir() else entry.parent
    package_root = find_package_root(start)
    if package_root is None:
        raise PackageRootNotFoundError(dependency.reference, configuration.path)

    # Climbing out of a marker-less directory into the declaring package
    # means the dependency itself has no root
    if package_root.path == configuration.base_dir and start != package_root.path:
        raise PackageRootNotFoundError(dependency.reference, configuration.path)

    if not context.roots.claim(str(package_root.path)):
        logger.debug(
            "Skipping %s: %s already included",
            dependency.reference,
            package_root.path,
        )
        return None

    logger.info(
        "Found module %s in %s",
        dependency.reference,
        shorten_path_for_display(package_root.path, cwd=Path.cwd()),
    )

    if package_root.config_path is not None:
        # Dependencies without their own resolver borrow ours
        return merge_configuration(package_root.config_path, resolver, context=context)

    # No autogypi.json, so expose the package headers at least
    return GypiPair(gypi={"include_dirs": [str(package_root.path)]})


def merge_configuration(
    config_path: Path,
    inherited_resolver: Resolver | None = None,
    *,
    context: MergeContext | None = None,
    configuration: Configuration | None = None,
) -> GypiPair:
    """Merge the configuration at `config_path` with all its dependencies.

    Args:
        config_path: autogypi.json to process.
        inherited_resolver: Resolver of the configuration depending on this
            one, used when the package has no resolver override.
        context: Visited sets of the current run. A fresh run starts when
            omitted.
        configuration: Already parsed contents of `config_path`, skipping
            the read from disk.

    Returns:
        Per-target and top-level trees with absolute paths.
    """
    logger = getAppLogger()
    if configuration is None:
        configuration = read_config(config_path)
    if context is None:
        context = MergeContext()

    logger.trace(f"[merge] {configuration.path}")

    # A dependency resolving back to this package must not re-include it
    context.roots.claim(str(configuration.base_dir))

    resolver = select_resolver(configuration.base_dir, inherited_resolver)
    pair = GypiPair()

    for dependency in resolve_dependencies(configuration, resolver):
        sub = _merge_dependency(dependency, configuration, resolver, context)
        if sub is not None:
            pair.extend(sub)

    pair.add("includes", map(configuration.resolve_file, configuration.includes))
    pair.add(
        "include_dirs", map(configuration.resolve_file, configuration.include_dirs)
    )
    pair.add(
        "includes",
        map(configuration.resolve_file, configuration.top_includes),
        top=True,
    )
    return pair
