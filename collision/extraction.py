"""Walk the block registry and encode every state's collision shape."""
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from collision.encoding import BlockEncoding, DenseArray, SparseMap, Uniform
from collision.shape import Shape
from collision.shape_table import ShapeTable
from collision.sources import GeometrySource, sample_shape, strip_namespace

PER_STATE_FORMS = ("dense", "sparse")


@dataclass
class ExtractionResult:
    """Output of one extraction run."""

    table: ShapeTable
    blocks: Dict[str, BlockEncoding] = field(default_factory=dict)
    # Non-uniform block -> number of states without collision geometry.
    empty_counts: Dict[str, int] = field(default_factory=dict)
    failures: List[Tuple[str, int]] = field(default_factory=list)


def _log(message: str) -> None:
    print(f"[extract] {message}", file=sys.stderr)


def _intern_state(
    source: GeometrySource,
    table: ShapeTable,
    name: str,
    state_id: int,
    result: Optional[ExtractionResult],
) -> Tuple[Optional[int], Optional[Shape]]:
    try:
        shape = sample_shape(source, name, state_id)
    except Exception as exc:
        if result is not None:
            _log(f"skipping block={name} state={state_id}: {exc}")
            result.failures.append((name, state_id))
        return None, None
    return table.intern(shape), shape


def extract_block_shapes(source: GeometrySource, *, per_state: str = "dense") -> ExtractionResult:
    """Intern every (block, state) shape and pick an encoding per block.

    Blocks are visited in registry order; within a block the default state
    is interned first, then states ``0..N-1``. A block whose states all share
    the default state's shape id is stored as :class:`Uniform`; any other
    block gets a per-state encoding (``per_state`` selects dense or sparse).
    A state whose query fails is skipped and logged.
    """
    if per_state not in PER_STATE_FORMS:
        raise ValueError(f"per_state must be one of {PER_STATE_FORMS}, got '{per_state}'")

    table = ShapeTable()
    result = ExtractionResult(table=table)

    for block in source.block_types():
        key = strip_namespace(block.name)
        if key in result.blocks:
            _log(f"duplicate block key '{key}' from {block.name}; keeping the first entry")
            continue

        # The default state is probed again in the loop, which reports failures.
        first_id, _ = _intern_state(source, table, block.name, block.default_state, None)

        ids: List[Optional[int]] = []
        shapes: List[Optional[Shape]] = []
        for state_id in block.state_ids():
            shape_id, shape = _intern_state(source, table, block.name, state_id, result)
            ids.append(shape_id)
            shapes.append(shape)

        if first_id is not None and all(shape_id == first_id for shape_id in ids):
            result.blocks[key] = Uniform(first_id)
            continue

        if per_state == "sparse":
            result.blocks[key] = SparseMap({
                state_id: shape_id
                for state_id, (shape_id, shape) in enumerate(zip(ids, shapes))
                if shape_id is not None and not shape.is_empty()
            })
        else:
            result.blocks[key] = DenseArray(tuple(ids))

        empty = sum(1 for shape in shapes if shape is not None and shape.is_empty())
        result.empty_counts[key] = empty
        _log(f"{key}: {len(ids)} states, {empty} empty")

    return result
