# src/autogypi/constants.py
"""Central constants used across the project."""

# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"

# --- program defaults ---
DEFAULT_LOG_LEVEL: str = "info"

# --- file names ---
CONFIG_FILE_NAME: str = "autogypi.json"  # also the tool's package marker
PACKAGE_FILE_NAME: str = "package.json"  # generic package-identity marker
RESOLVER_FILE_NAME: str = "gypiresolver.py"  # per-package resolver override
DEPENDENCY_STORE_NAME: str = "node_modules"

# --- cli defaults (relative to --root) ---
DEFAULT_CONFIG: str = CONFIG_FILE_NAME
DEFAULT_OUTPUT: str = "auto.gypi"
DEFAULT_OUTPUT_TOP: str = "auto-top.gypi"
DEFAULT_GYP: str = "binding.gyp"

# --- traversal ---
# Upward steps allowed when looking for a package root.
MAX_PACKAGE_ROOT_DEPTH: int = 20

# --- output ---
GENERATED_HEADER_LINE: str = "# Automatically generated file. Edits will be lost."
BASED_ON_PREFIX: str = "# Based on: "

# Output tree keys holding paths that get relativized on write.
PATH_KEYS: tuple[str, ...] = ("include_dirs", "includes")
