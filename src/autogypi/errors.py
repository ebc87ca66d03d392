# src/autogypi/errors.py
"""Exception types for fatal generation failures.

Every error here aborts the whole generation run; the CLI reports a single
summary line and exits non-zero. Nothing is retried.
"""

from pathlib import Path


class AutogypiError(RuntimeError):
    """Base class for all fatal generation errors."""


class ConfigReadError(AutogypiError, ValueError):
    """A configuration file is missing, unreadable, or malformed."""

    def __init__(self, config_path: Path | str, reason: str) -> None:
        self.config_path = Path(config_path)
        self.reason = reason
        super().__init__(f"Error reading {self.config_path}: {reason}")


class ResolutionError(AutogypiError):
    """A named dependency could not be located."""

    def __init__(
        self,
        dependency: str,
        config_path: Path | str | None = None,
        reason: str | None = None,
    ) -> None:
        self.dependency = dependency
        self.config_path = Path(config_path) if config_path is not None else None
        self.reason = reason
        msg = f"Unable to find required module {dependency}"
        if self.config_path is not None:
            msg += f" referenced in {self.config_path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class PackageRootNotFoundError(AutogypiError):
    """Walking up from a dependency's entry point found no package marker."""

    def __init__(self, dependency: str, config_path: Path | str) -> None:
        self.dependency = dependency
        self.config_path = Path(config_path)
        super().__init__(
            f"Cannot find package.json in module {dependency}"
            f" referenced in {self.config_path}"
        )


class MissingOutputError(AutogypiError, ValueError):
    """The root configuration does not say where to write results."""

    def __init__(self, config_path: Path | str) -> None:
        self.config_path = Path(config_path)
        super().__init__(
            '"output" property with output file path is missing from'
            f" configuration file {self.config_path}"
        )
