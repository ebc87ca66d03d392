# src/autogypi/config/config_loader.py

from pathlib import Path
from typing import Any, cast

from apathetic_utils import load_jsonc, plural

from autogypi.errors import ConfigReadError
from autogypi.logs import getAppLogger
from autogypi.utils import write_json

from .config_types import LIST_FIELDS, STRING_FIELDS, AutogypiConfig, Configuration


def load_config(config_path: Path) -> AutogypiConfig:
    """Read an autogypi.json file without interpreting its fields.

    Comments and trailing commas are tolerated. An empty file counts as an
    empty configuration.

    Raises:
        ConfigReadError: if the file is missing, unreadable, not valid JSON,
            or its top-level value is not an object.
    """
    logger = getAppLogger()
    logger.trace(f"[load_config] Loading from {config_path}")

    if not config_path.is_file():
        raise ConfigReadError(config_path, "file not found")

    try:
        raw = load_jsonc(config_path)
    except ValueError as e:
        raise ConfigReadError(config_path, f"invalid JSON: {e}") from e
    except OSError as e:
        raise ConfigReadError(config_path, e.strerror or str(e)) from e

    if raw is None:
        return AutogypiConfig()
    if not isinstance(raw, dict):
        xmsg = f"expected a JSON object, not {type(raw).__name__}"
        raise ConfigReadError(config_path, xmsg)

    return cast("AutogypiConfig", raw)


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)  # pyright: ignore[reportUnknownVariableType]


def parse_config(raw_config: AutogypiConfig, config_path: Path) -> Configuration:
    """Validate raw config contents and build a Configuration record.

    Unknown keys are ignored. Known keys must have the right shape:
    lists of strings for dependencies and include lists, strings for
    output paths.
    """
    logger = getAppLogger()
    config_path = Path(config_path).resolve()
    raw: dict[str, Any] = dict(raw_config)

    errors: list[str] = []
    fields: dict[str, Any] = {}

    for key, field_name in LIST_FIELDS.items():
        if key not in raw or raw[key] is None:
            continue
        value = raw[key]
        if not _is_string_list(value):
            errors.append(f"`{key}` must be a list of strings")
            continue
        fields[field_name] = tuple(value)

    for key, field_name in STRING_FIELDS.items():
        if key not in raw or raw[key] is None:
            continue
        value = raw[key]
        if not isinstance(value, str) or not value:
            errors.append(f"`{key}` must be a non-empty string")
            continue
        fields[field_name] = value

    unknown = sorted(set(raw) - set(LIST_FIELDS) - set(STRING_FIELDS))
    if unknown:
        logger.debug(
            "Ignored unknown config key%s in %s: %s",
            plural(unknown),
            config_path.name,
            ", ".join(unknown),
        )

    if errors:
        raise ConfigReadError(config_path, "; ".join(errors))

    return Configuration(path=config_path, **fields)


def read_config(config_path: Path) -> Configuration:
    """Load and parse the autogypi.json at `config_path`."""
    return parse_config(load_config(config_path), config_path)


def save_config(config_path: Path, raw_config: AutogypiConfig) -> None:
    """Write configuration contents back to disk."""
    logger = getAppLogger()
    write_json(config_path, raw_config)
    logger.debug("Saved config to %s", config_path)
