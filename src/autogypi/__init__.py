# src/autogypi/__init__.py

"""AutoGypi: generate node-gyp dependency files.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use, custom integrations, or plugins.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - main()                  → CLI entrypoint
    - generate()              → Write auto.gypi / auto-top.gypi for a config
    - merge_configuration()   → Merge a config with its dependency tree
    - find_package_root()     → Locate the root of an installed package
"""

from .cli import main
from .config import (
    AutogypiConfig,
    Configuration,
    load_config,
    parse_config,
    read_config,
    save_config,
)
from .errors import (
    AutogypiError,
    ConfigReadError,
    MissingOutputError,
    PackageRootNotFoundError,
    ResolutionError,
)
from .generator import (
    GenerateOptions,
    GenerateResult,
    generate,
    init_gyp,
    make_header,
    write_gypi,
)
from .gypi import Gypi, GypiPair, merge_gypi, relativize_gypi
from .logs import getAppLogger
from .merge import MergeContext, VisitedSet, merge_configuration
from .meta import PROGRAM_DISPLAY, PROGRAM_PACKAGE, PROGRAM_SCRIPT, Metadata
from .package_root import MarkerKind, PackageRoot, find_package_root
from .references import ReferenceKind, classify_reference
from .resolver import (
    DEFAULT_RESOLVER,
    NodeModulesResolver,
    Resolver,
    load_resolver_override,
    select_resolver,
)


__all__ = [  # noqa: RUF022
    # cli
    "main",
    # config
    "AutogypiConfig",
    "Configuration",
    "load_config",
    "parse_config",
    "read_config",
    "save_config",
    # errors
    "AutogypiError",
    "ConfigReadError",
    "MissingOutputError",
    "PackageRootNotFoundError",
    "ResolutionError",
    # generator
    "GenerateOptions",
    "GenerateResult",
    "generate",
    "init_gyp",
    "make_header",
    "write_gypi",
    # gypi
    "Gypi",
    "GypiPair",
    "merge_gypi",
    "relativize_gypi",
    # logs
    "getAppLogger",
    # merge
    "MergeContext",
    "VisitedSet",
    "merge_configuration",
    # meta
    "Metadata",
    "PROGRAM_DISPLAY",
    "PROGRAM_PACKAGE",
    "PROGRAM_SCRIPT",
    # package_root
    "MarkerKind",
    "PackageRoot",
    "find_package_root",
    # references
    "ReferenceKind",
    "classify_reference",
    # resolver
    "DEFAULT_RESOLVER",
    "NodeModulesResolver",
    "Resolver",
    "load_resolver_override",
    "select_resolver",
]
