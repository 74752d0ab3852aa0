"""Extractor defaults read from ``config/extract.json``."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from collision.encoding import BoundsPolicy

_DEFAULT_PATH = Path(__file__).resolve().parent.parent / "config" / "extract.json"
_CONFIG_PATH = _DEFAULT_PATH
_CONFIG_DATA: Optional[Dict[str, Any]] = None


def _load(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        print(f"[config] failed to load {path}: {exc}")
        return {}
    return data if isinstance(data, dict) else {}


def use_file(path: Optional[Path]) -> None:
    """Point lookups at another file (``None`` restores the bundled one)."""
    global _CONFIG_PATH, _CONFIG_DATA
    _CONFIG_PATH = Path(path) if path is not None else _DEFAULT_PATH
    _CONFIG_DATA = None


def get(path: str, default: Any = None) -> Any:
    """Return a config value using dotted paths, or default when missing."""
    global _CONFIG_DATA
    if _CONFIG_DATA is None:
        _CONFIG_DATA = _load(_CONFIG_PATH)
    if not path:
        return _CONFIG_DATA

    current: Any = _CONFIG_DATA
    for segment in path.split("."):
        if isinstance(current, dict) and segment in current:
            current = current[segment]
        else:
            return default
    return current


def output_dir() -> str:
    value = get("output.dir", ".")
    return str(value) if value else "."


def per_state_form() -> str:
    value = str(get("extract.per_state", "dense")).strip().lower()
    return value if value in ("dense", "sparse") else "dense"


def bounds_policy() -> BoundsPolicy:
    try:
        return BoundsPolicy.parse(get("lookup.bounds"))
    except ValueError as exc:
        print(f"[config] {exc}; using lenient")
        return BoundsPolicy.LENIENT
