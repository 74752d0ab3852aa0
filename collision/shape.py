"""Immutable collision shapes built from axis-aligned boxes."""
from __future__ import annotations

import struct
from typing import Any, Iterable, Iterator, List, NamedTuple, Sequence, Tuple


class Box(NamedTuple):
    """Axis-aligned box in a block's local frame (min corner, max corner)."""

    min_x: float
    min_y: float
    min_z: float
    max_x: float
    max_y: float
    max_z: float

    @classmethod
    def from_row(cls, row: Sequence[Any], path: str = "box") -> "Box":
        if not isinstance(row, (list, tuple)) or len(row) != 6:
            raise ValueError(f"{path} must be a sequence of 6 numbers")
        values = []
        for value in row:
            if isinstance(value, bool):
                raise ValueError(f"{path} must contain numeric values")
            try:
                values.append(float(value))
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{path} must contain numeric values") from exc
        return cls(*values)

    def translated(self, dx: float, dy: float, dz: float) -> "Box":
        return Box(
            self.min_x + dx,
            self.min_y + dy,
            self.min_z + dz,
            self.max_x + dx,
            self.max_y + dy,
            self.max_z + dz,
        )


class Shape:
    """Collision geometry of one block state.

    Equality is structural and order-sensitive: two shapes are equal only when
    they hold the same boxes in the same order, compared bit for bit (``-0.0``
    differs from ``0.0`` and ``nan`` equals itself). Shapes built from the
    same boxes in a different order are distinct and get distinct table ids.
    """

    __slots__ = ("_boxes", "_key", "_hash")

    def __init__(self, boxes: Iterable[Box] = ()) -> None:
        items = tuple(Box(*(float(v) for v in box)) for box in boxes)
        flat = [v for box in items for v in box]
        self._boxes: Tuple[Box, ...] = items
        self._key = struct.pack(f"<{len(flat)}d", *flat)
        self._hash = hash(self._key)

    @property
    def boxes(self) -> Tuple[Box, ...]:
        return self._boxes

    def is_empty(self) -> bool:
        return not self._boxes

    def translated(self, dx: float, dy: float, dz: float) -> "Shape":
        if not self._boxes or (dx == 0.0 and dy == 0.0 and dz == 0.0):
            return self
        return Shape(box.translated(dx, dy, dz) for box in self._boxes)

    # Compact form ---------------------------------------------------------
    def to_compact(self) -> List[List[float]]:
        """Return one ``[minX, minY, minZ, maxX, maxY, maxZ]`` row per box."""
        return [list(box) for box in self._boxes]

    @classmethod
    def from_compact(cls, rows: Any, path: str = "shape") -> "Shape":
        """Inverse of :meth:`to_compact`."""
        if not isinstance(rows, (list, tuple)):
            raise ValueError(f"{path} must be a list of boxes")
        if not rows:
            return EMPTY
        return cls(Box.from_row(row, f"{path}[{idx}]") for idx, row in enumerate(rows))

    # Value semantics ------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Shape):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return self._hash

    def __len__(self) -> int:
        return len(self._boxes)

    def __iter__(self) -> Iterator[Box]:
        return iter(self._boxes)

    def __repr__(self) -> str:
        if not self._boxes:
            return "Shape.EMPTY"
        return f"Shape({list(self._boxes)!r})"


EMPTY = Shape(())
Shape.EMPTY = EMPTY  # type: ignore[attr-defined]
