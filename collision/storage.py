"""Read-only lookup of collision shapes by (block, state)."""
from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Optional, Union

from collision.encoding import (
    BlockEncoding,
    BoundsPolicy,
    DenseArray,
    SparseMap,
    Uniform,
    decode_encoding,
    referenced_ids,
)
from collision.shape import EMPTY, Shape
from collision.shape_table import ShapeTable


class BlockShapeStorage:
    """Answer ``lookup(block, state)`` from a loaded shape table.

    ``lookup`` returns ``None`` for a block that is not in the table, which
    callers can tell apart from a known block without geometry (``EMPTY``).
    For per-state encodings a negative state id always raises
    :class:`~collision.errors.InvalidStateIndex`; a state id beyond the
    encoded range returns ``EMPTY`` under ``BoundsPolicy.LENIENT`` and raises
    under ``BoundsPolicy.STRICT``.
    """

    def __init__(
        self,
        shapes: Union[ShapeTable, Mapping[str, Any]],
        blocks: Mapping[str, Any],
        *,
        bounds: Union[BoundsPolicy, str, None] = None,
    ) -> None:
        self.bounds = BoundsPolicy.parse(bounds)
        self._table = shapes if isinstance(shapes, ShapeTable) else ShapeTable.from_compact(shapes)
        if not isinstance(blocks, Mapping):
            raise ValueError("Field 'blocks' must be an object")

        self._blocks: Dict[str, BlockEncoding] = {}
        for block_id, value in blocks.items():
            if isinstance(value, (Uniform, DenseArray, SparseMap)):
                encoding = value
            else:
                encoding = decode_encoding(value, self.bounds, f"blocks[{block_id}]")
            for shape_id in referenced_ids(encoding):
                if shape_id not in self._table:
                    raise ValueError(f"blocks[{block_id}] references unknown shape id {shape_id}")
            self._blocks[block_id] = encoding

    @classmethod
    def from_document(
        cls,
        document: Mapping[str, Any],
        *,
        bounds: Union[BoundsPolicy, str, None] = None,
    ) -> "BlockShapeStorage":
        """Load a whole artifact; ``bounds`` overrides the document's own tag."""
        if not isinstance(document, Mapping):
            raise TypeError("Shape document must be a JSON object/dict")
        if "shapes" not in document or "blocks" not in document:
            raise ValueError("Shape document needs 'shapes' and 'blocks' sections")
        policy = bounds if bounds is not None else document.get("bounds")
        return cls(document["shapes"], document["blocks"], bounds=policy)

    def lookup(self, block_id: str, state_id: int) -> Optional[Shape]:
        encoding = self._blocks.get(block_id)
        if encoding is None:
            return None
        shape_id = encoding.shape_id_for(state_id)
        if shape_id is None:
            return EMPTY
        return self._table.get(shape_id)

    def encoding(self, block_id: str) -> Optional[BlockEncoding]:
        return self._blocks.get(block_id)

    def block_ids(self) -> Iterator[str]:
        return iter(self._blocks)

    @property
    def table(self) -> ShapeTable:
        return self._table

    def __contains__(self, block_id: object) -> bool:
        return block_id in self._blocks

    def __len__(self) -> int:
        return len(self._blocks)
