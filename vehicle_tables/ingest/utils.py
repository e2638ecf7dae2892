"""Shared utility functions for reading and writing converter files."""

import glob
import json
from pathlib import Path
from typing import Any


def expand_inputs(pattern: str) -> list[Path]:
    """Expand a glob pattern (``**`` allowed) into sorted, unique file paths.

    A pattern with no glob characters is returned as-is when it exists.
    """
    matches = glob.glob(pattern, recursive=True)
    paths = {Path(m) for m in matches if Path(m).is_file()}
    return sorted(paths)


def debug_output_path(path: Path) -> Path:
    """Path of the indented debug copy written beside ``path``.

    >>> debug_output_path(Path("out/components.json"))
    PosixPath('out/components.debug.json')
    """
    suffix = path.suffix or ".json"
    return path.with_name(f"{path.stem}.debug{suffix}")


def write_json(path: Path, data: Any, indent: int | None = None) -> None:
    """Write a JSON file, compact unless ``indent`` is given."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if indent is None:
        text = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    else:
        text = json.dumps(data, indent=indent, ensure_ascii=False)
    path.write_text(text, encoding="utf-8")


def read_json(path: Path) -> Any:
    """Read a JSON file."""
    return json.loads(path.read_text(encoding="utf-8"))
