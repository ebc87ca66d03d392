# src/autogypi/utils/utils_json.py

import json
from pathlib import Path
from typing import Any


def format_json(data: Any, header: str = "") -> str:
    """Pretty-print `data` as JSON indented with tabs, one item per line."""
    return header + json.dumps(data, indent="\t", ensure_ascii=False) + "\n"


def write_json(output_path: Path, data: Any, header: str = "") -> None:
    """Write pretty-printed JSON to `output_path`.

    Raises:
        OSError: if the file cannot be written.
    """
    output_path.write_text(format_json(data, header), encoding="utf-8")
