#!/usr/bin/env python3
"""Extract block collision shapes from a registry dump and write the shape table.

Usage:
  python extract.py --registry dumps/1.14.4.json --out out/
"""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from collision import config
from collision.artifact import build_document, write_artifact
from collision.extraction import extract_block_shapes
from collision.sources import GeometrySource, load_registry_dump
from collision.storage import BlockShapeStorage
from collision.verify import run_sanity_checks


def _log(message: str) -> None:
    print(message, file=sys.stderr)


def _parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extract block collision shapes")
    parser.add_argument("--registry", required=True, help="Registry dump json exported from the game")
    parser.add_argument("--out", default=None, help="Output directory (default: config output.dir or '.')")
    parser.add_argument("--sparse", action="store_true", help="Store per-state blocks as sparse maps")
    return parser.parse_args(argv)


def run(source: GeometrySource, out_dir: str, per_state: str = "dense") -> List[str]:
    """Extract, write and verify; returns the verification mismatches."""
    _log("Extracting Block data ...")
    result = extract_block_shapes(source, per_state=per_state)
    _log(f"Extracted data for {len(result.blocks)} blocks and {len(result.table)} distinct shapes.")
    if result.failures:
        _log(f"{len(result.failures)} block states could not be sampled.")

    bounds = config.bounds_policy() if per_state == "dense" else "lenient"
    document = build_document(result, version=source.version, bounds=bounds)
    write_artifact(document, out_dir, version=source.version)

    _log("Running sanity checks ...")
    failures = run_sanity_checks(source, BlockShapeStorage.from_document(document))
    _log(f"{len(failures)} failures.")
    return failures


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    _log(f"Loading registry dump {args.registry} ...")
    try:
        source = load_registry_dump(args.registry)
    except (OSError, ValueError, TypeError) as exc:
        _log(f"[extract] cannot enumerate block types: {exc}")
        return 1
    _log(f"Done. Game version: {source.version or 'unknown'}")

    out_dir = args.out if args.out is not None else config.output_dir()
    per_state = "sparse" if args.sparse else config.per_state_form()
    run(source, out_dir, per_state)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
