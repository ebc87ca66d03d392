# src/autogypi/generator.py
"""Writing auto.gypi and auto-top.gypi for a root configuration."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .config import Configuration, read_config
from .constants import BASED_ON_PREFIX, GENERATED_HEADER_LINE
from .errors import MissingOutputError
from .gypi import Gypi, GypiPair, relativize_gypi
from .logs import getAppLogger
from .merge import MergeContext, merge_configuration
from .resolver import Resolver
from .utils import relativize_path, write_json


@dataclass(frozen=True)
class GenerateOptions:
    """Where to read the root configuration and write the results.

    Output paths left as None fall back to the configuration's own
    `output` / `outputTop` entries. With no top-level destination at all
    the top-level file is not written.
    """

    config_path: Path
    output_path: Path | None = None
    output_top_path: Path | None = None


@dataclass
class GenerateResult:
    pair: GypiPair  # trees as written, paths relative to their output files
    written: list[Path] = field(default_factory=list)
    failed: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def make_header(config_path: Path, output_path: Path) -> str:
    """Provenance comment placed at the top of every generated file."""
    based_on = relativize_path(config_path, output_path.parent)
    return "\n".join([GENERATED_HEADER_LINE, BASED_ON_PREFIX + based_on, "", ""])


def write_gypi(output_path: Path, gypi: Gypi, header: str = "") -> bool:
    """Write one output tree, reporting instead of raising on failure."""
    logger = getAppLogger()
    try:
        write_json(output_path, gypi, header)
    except OSError as e:
        logger.error("Could not write %s: %s", output_path, e.strerror or e)
        return False

    logger.debug("Wrote %s", output_path)
    return True


def resolve_outputs(
    opts: GenerateOptions,
    configuration: Configuration,
) -> tuple[Path, Path | None]:
    """Return absolute (output, output_top) destinations.

    Raises:
        MissingOutputError: if no per-target destination is known.
    """
    output_path = opts.output_path
    if output_path is None and configuration.output:
        output_path = configuration.resolve_file(configuration.output)
    if output_path is None:
        raise MissingOutputError(configuration.path)

    output_top_path = opts.output_top_path
    if output_top_path is None and configuration.output_top:
        output_top_path = configuration.resolve_file(configuration.output_top)

    return output_path.resolve(), output_top_path.resolve() if output_top_path else None


def generate(
    opts: GenerateOptions,
    configuration: Configuration | None = None,
    resolver: Resolver | None = None,
) -> GenerateResult:
    """Merge the root configuration and write the generated gypi files.

    Args:
        opts: Configuration path and output destinations.
        configuration: Root configuration contents; read from
            `opts.config_path` when omitted.
        resolver: Resolver for the root's dependencies. Defaults to the
            package's override or the process default.

    Returns:
        The written trees and which files failed to write.
    """
    logger = getAppLogger()
    config_path = Path(opts.config_path).resolve()
    if configuration is None:
        configuration = read_config(config_path)

    output_path, output_top_path = resolve_outputs(opts, configuration)

    merged = merge_configuration(
        config_path,
        resolver,
        context=MergeContext(),
        configuration=configuration,
    )

    result = GenerateResult(
        pair=GypiPair(gypi=relativize_gypi(merged.gypi, output_path.parent))
    )
    targets: list[tuple[Path, Gypi]] = [(output_path, result.pair.gypi)]

    if output_top_path is not None:
        result.pair.gypi_top = relativize_gypi(merged.gypi_top, output_top_path.parent)
        targets.append((output_top_path, result.pair.gypi_top))

    for path, gypi in targets:
        if write_gypi(path, gypi, make_header(config_path, path)):
            result.written.append(path)
        else:
            result.failed.append(path)

    if result.ok:
        logger.info(
            "Generated %s", ", ".join(path.name for path in result.written)
        )
    return result


def init_gyp(
    base_path: Path,
    output_path: Path,
    output_top_path: Path | None,
    sources: Sequence[Path],
) -> dict[str, Any]:
    """Return contents for an initial binding.gyp.

    The single target includes the per-target output and compiles
    `sources`; the top-level output is included globally when present.
    All paths are made relative to `base_path`, the gyp file's directory.
    """
    gyp: dict[str, Any] = {
        "targets": [
            {
                "includes": [relativize_path(output_path, base_path)],
                "sources": [relativize_path(src, base_path) for src in sources],
            }
        ]
    }

    if output_top_path is not None:
        gyp["includes"] = [relativize_path(output_top_path, base_path)]

    return gyp
