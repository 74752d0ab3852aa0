"""Round-trip check of a shape table against the geometry source."""
from __future__ import annotations

import sys
from typing import List

from collision.sources import GeometrySource, sample_shape, strip_namespace
from collision.storage import BlockShapeStorage


def run_sanity_checks(source: GeometrySource, storage: BlockShapeStorage) -> List[str]:
    """Re-sample every (block, state) and compare it with ``storage``.

    Returns every mismatch as ``"block:state"``; the whole registry is checked
    even after the first mismatch. States the source cannot sample are skipped.
    """
    failures: List[str] = []
    for block in source.block_types():
        block_id = strip_namespace(block.name)
        for state_id in block.state_ids():
            try:
                expected = sample_shape(source, block.name, state_id)
            except Exception as exc:
                print(f"[verify] skipping block={block_id} state={state_id}: {exc}", file=sys.stderr)
                continue

            try:
                stored = storage.lookup(block_id, state_id)
            except ValueError as exc:
                print(f"[verify] lookup failed: block={block_id} state={state_id}: {exc}", file=sys.stderr)
                stored = None

            if stored != expected:
                print(f"[verify] ERROR: shapes differ: block={block_id} state={state_id}", file=sys.stderr)
                failures.append(f"{block_id}:{state_id}")
    return failures
