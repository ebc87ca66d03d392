# src/autogypi/cli.py

import argparse
import platform
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from difflib import get_close_matches
from pathlib import Path

from apathetic_logging import safeLog

from .config import AutogypiConfig, load_config, parse_config, save_config
from .constants import (
    DEFAULT_CONFIG,
    DEFAULT_GYP,
    DEFAULT_OUTPUT,
    DEFAULT_OUTPUT_TOP,
)
from .generator import GenerateOptions, generate, init_gyp
from .logs import getAppLogger
from .meta import PROGRAM_DISPLAY, PROGRAM_SCRIPT, get_metadata
from .utils import relativize_path, resolve_path, write_json


LOG_LEVELS = ["trace", "debug", "info", "warning", "error", "critical", "silent"]


# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


class HintingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        known_opts: list[str] = []
        for action in self._actions:
            known_opts.extend([s for s in action.option_strings if s])

        hint_lines: list[str] = []
        # argparse reports bad flags as "unrecognized arguments: --outptu ..."
        if "unrecognized arguments:" in message:
            bad = message.split("unrecognized arguments:", 1)[1].strip()
            bad_args = [tok for tok in bad.split() if tok.startswith("-")]
            for arg in bad_args:
                close = get_close_matches(arg, known_opts, n=1, cutoff=0.6)
                if close:
                    hint_lines.append(f"Hint: did you mean {close[0]}?")

        self.print_usage(sys.stderr)
        full = f"{self.prog}: error: {message}"
        if hint_lines:
            full += "\n" + "\n".join(hint_lines)
        self.exit(2, full + "\n")


def _setup_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    parser = HintingArgumentParser(
        prog=PROGRAM_SCRIPT,
        description="Generate node-gyp dependency files.",
    )

    # --- Locations ---
    parser.add_argument(
        "-r",
        "--root",
        help="Root path for config files (default: shell working directory).",
    )
    parser.add_argument(
        "-c", "--config", help=f"Config file (default: {DEFAULT_CONFIG})."
    )
    parser.add_argument(
        "-o",
        "--output",
        help=f"Per-target gypi file to create (default: {DEFAULT_OUTPUT}).",
    )

    output_top = parser.add_mutually_exclusive_group()
    output_top.add_argument(
        "-t",
        "--output-top",
        help=f"Top-level gypi file to create (default: {DEFAULT_OUTPUT_TOP}).",
    )
    output_top.add_argument(
        "-T",
        "--no-output-top",
        action="store_true",
        help="Omit top-level gypi file.",
    )

    # --- Ad-hoc additions ---
    parser.add_argument(
        "-p",
        "--package",
        action="append",
        default=[],
        metavar="NAME",
        help="Add dependency on another npm package (repeatable).",
    )
    parser.add_argument(
        "-I",
        "--include-dir",
        action="append",
        default=[],
        metavar="PATH",
        help="Add include directory for header files (repeatable).",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Save changes to config file.",
    )

    # --- binding.gyp template ---
    parser.add_argument(
        "--init-gyp",
        nargs="?",
        const=True,
        default=None,
        metavar="PATH",
        help=f"Create gyp file (default: {DEFAULT_GYP}, implies --save).",
    )
    parser.add_argument(
        "-s",
        "--source",
        action="append",
        default=[],
        metavar="PATH",
        help="Add C or C++ source file to the gyp file (repeatable).",
    )

    # --- Version and verbosity ---
    parser.add_argument("--version", action="store_true", help="Show version info.")

    log_level = parser.add_mutually_exclusive_group()
    log_level.add_argument(
        "-q",
        "--quiet",
        action="store_const",
        const="warning",
        dest="log_level",
        help="Suppress non-critical output (same as --log-level warning).",
    )
    log_level.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const="debug",
        dest="log_level",
        help="Verbose output (same as --log-level debug).",
    )
    log_level.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        dest="log_level",
        help="Set log verbosity level.",
    )
    return parser


def _concat_unique(*lists: Iterable[str] | None) -> list[str]:
    """Concatenate lists, dropping repeats but keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for items in lists:
        for item in items or []:
            if item not in seen:
                seen.add(item)
                result.append(item)
    return result


# --------------------------------------------------------------------------- #
# Main entry helpers
# --------------------------------------------------------------------------- #


@dataclass
class _Paths:
    """Absolute locations derived from CLI args and defaults."""

    config: Path
    output: Path
    output_top: Path
    gyp: Path | None


def _initialize_logger(args: argparse.Namespace) -> None:
    """Apply the CLI log level on top of env vars and defaults."""
    logger = getAppLogger()
    if getattr(args, "log_level", None):
        logger.setLevel(args.log_level)
    logger.trace("[BOOT] log-level initialized: %s", logger.levelName)

    logger.debug(
        "Runtime: Python %s (%s)",
        platform.python_version(),
        platform.python_implementation(),
    )


def _resolve_paths(args: argparse.Namespace, cwd: Path) -> _Paths:
    """Explicit paths are relative to cwd, defaults relative to the root."""
    root = resolve_path(cwd, args.root) if args.root else cwd

    def pick(value: str | None, default: str) -> Path:
        if value is not None:
            return resolve_path(cwd, value)
        return resolve_path(root, default)

    config_path = pick(args.config, DEFAULT_CONFIG)
    gyp_path: Path | None = None
    if args.init_gyp:
        gyp_value = args.init_gyp if isinstance(args.init_gyp, str) else None
        gyp_path = pick(gyp_value, DEFAULT_GYP)

    # Without an explicit root, outputs default to the config's directory
    if not args.root:
        root = config_path.parent

    return _Paths(
        config=config_path,
        output=pick(args.output, DEFAULT_OUTPUT),
        output_top=pick(args.output_top, DEFAULT_OUTPUT_TOP),
        gyp=gyp_path,
    )


def _load_root_config(config_path: Path) -> AutogypiConfig:
    logger = getAppLogger()
    if not config_path.exists():
        logger.warning("No config file found at %s; starting empty.", config_path)
        return AutogypiConfig()

    raw = load_config(config_path)
    # Fail on a malformed config before changing anything
    parse_config(raw, config_path)
    return raw


def _apply_args(
    raw: AutogypiConfig,
    args: argparse.Namespace,
    paths: _Paths,
    cwd: Path,
) -> None:
    """Fold CLI overrides into the config and settle output paths."""
    config_dir = paths.config.parent

    if args.output:
        raw["output"] = relativize_path(paths.output, config_dir)
    else:
        paths.output = resolve_path(config_dir, raw.get("output") or paths.output)

    if args.output_top:
        raw["outputTop"] = relativize_path(paths.output_top, config_dir)
    else:
        paths.output_top = resolve_path(
            config_dir, raw.get("outputTop") or paths.output_top
        )

    if args.package:
        raw["dependencies"] = _concat_unique(raw.get("dependencies"), args.package)
    if args.include_dir:
        include_dirs = [
            relativize_path(resolve_path(cwd, d), config_dir)
            for d in args.include_dir
        ]
        raw["includeDirs"] = _concat_unique(raw.get("includeDirs"), include_dirs)


def _write_gyp_template(
    paths: _Paths,
    args: argparse.Namespace,
    cwd: Path,
) -> bool:
    logger = getAppLogger()
    if paths.gyp is None:
        return True

    gyp = init_gyp(
        paths.gyp.parent,
        paths.output,
        None if args.no_output_top else paths.output_top,
        [resolve_path(cwd, src) for src in args.source],
    )
    try:
        write_json(paths.gyp, gyp)
    except OSError as e:
        logger.error("Could not write gyp template %s: %s", paths.gyp, e.strerror or e)
        return False

    logger.info("Created %s", paths.gyp.name)
    return True


# --------------------------------------------------------------------------- #
# Main entry
# --------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> int:
    logger = getAppLogger()  # init (use env + defaults)

    try:
        parser = _setup_parser()
        args = parser.parse_args(argv)

        _initialize_logger(args)

        # --- Version flag ---
        if args.version:
            logger.info("%s %s", PROGRAM_DISPLAY, get_metadata())
            return 0

        # --- Locate and load configuration ---
        cwd = Path.cwd().resolve()
        paths = _resolve_paths(args, cwd)
        raw = _load_root_config(paths.config)
        _apply_args(raw, args, paths, cwd)

        if args.save or args.init_gyp:
            save_config(paths.config, raw)
            logger.info("Saved config to %s", paths.config.name)

        template_ok = _write_gyp_template(paths, args, cwd)

        # --- Generate ---
        logger.debug("Using config: %s", paths.config)
        result = generate(
            GenerateOptions(
                config_path=paths.config,
                output_path=paths.output,
                output_top_path=None if args.no_output_top else paths.output_top,
            ),
            parse_config(raw, paths.config),
        )

    except (FileNotFoundError, ValueError, TypeError, RuntimeError) as e:
        # controlled termination
        try:
            logger.errorIfNotDebug("Could not generate gypi files: %s", e)
        except Exception:  # noqa: BLE001
            safeLog(f"[FATAL] Logging failed while reporting: {e}")
        return 1

    except Exception as e:  # noqa: BLE001
        # unexpected internal error
        try:
            logger.criticalIfNotDebug("Unexpected internal error: %s", e)
        except Exception:  # noqa: BLE001
            safeLog(f"[FATAL] Logging failed while reporting: {e}")
        return 1

    else:
        return 0 if result.ok and template_ok else 1
