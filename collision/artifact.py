"""Serialization of extraction results into the shape table document."""
from __future__ import annotations

import json
import os
import re
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from collision.encoding import BoundsPolicy, encode_encoding
from collision.extraction import ExtractionResult

# Break lines after each block/shape entry so version diffs stay readable.
_ENTRY_BREAK = re.compile(r'\},|null,|"[_a-zA-Z]+":[0-9]+,')
_ARRAY_BREAK = re.compile(r'\],"')


def build_document(
    result: ExtractionResult,
    *,
    version: Optional[str] = None,
    bounds: Union[BoundsPolicy, str, None] = None,
) -> Dict[str, Any]:
    """Return the JSON-ready document::

        {"blocks": {block: id | [id|null, ...] | {state: id}},
         "shapes": {id: [[x1, y1, z1, x2, y2, z2], ...]}}
    """
    document: Dict[str, Any] = {
        "blocks": {key: encode_encoding(enc) for key, enc in result.blocks.items()},
        "shapes": result.table.to_compact(),
    }
    if version is not None:
        document["version"] = str(version)
    if bounds is not None:
        document["bounds"] = BoundsPolicy.parse(bounds).value
    return document


def format_document(document: Dict[str, Any]) -> str:
    text = json.dumps(document, separators=(",", ":"))
    text = _ENTRY_BREAK.sub(lambda m: m.group(0) + "\n", text)
    return _ARRAY_BREAK.sub('],\n"', text)


def artifact_filename(version: Optional[str], now: Optional[datetime] = None) -> str:
    stamp = (now or datetime.now()).isoformat()
    return f"block_collision_shapes_{version or 'unknown'}_{stamp}.json"


def write_artifact(
    document: Dict[str, Any],
    out_dir: Union[str, os.PathLike] = ".",
    *,
    version: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Optional[Path]:
    """Write the document into ``out_dir``; returns ``None`` if writing failed."""
    path = Path(out_dir) / artifact_filename(version, now)
    print(f"[artifact] Writing {path} ...", file=sys.stderr)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            handle.write(format_document(document))
    except OSError as exc:
        print(f"[artifact] write failed: {exc}", file=sys.stderr)
        return None
    print("[artifact] Done.", file=sys.stderr)
    return path


def load_document(path: Union[str, os.PathLike]) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise TypeError("Shape document must be a JSON object/dict")
    return data
