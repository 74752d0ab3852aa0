"""Interning table assigning dense ids to distinct shapes."""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Tuple

from collision.shape import Shape


class ShapeTable:
    """Insertion-ordered map from :class:`Shape` to a dense, 0-based id.

    Ids are handed out in first-seen order. ``intern`` is a lookup-or-insert
    and is not safe to call from several threads at once.
    """

    def __init__(self) -> None:
        self._ids: Dict[Shape, int] = {}
        self._shapes: List[Shape] = []

    def intern(self, shape: Shape) -> int:
        shape_id = self._ids.get(shape)
        if shape_id is None:
            shape_id = len(self._shapes)
            self._ids[shape] = shape_id
            self._shapes.append(shape)
        return shape_id

    def get(self, shape_id: int) -> Shape:
        if shape_id < 0 or shape_id >= len(self._shapes):
            raise KeyError(shape_id)
        return self._shapes[shape_id]

    def __contains__(self, shape_id: object) -> bool:
        return isinstance(shape_id, int) and 0 <= shape_id < len(self._shapes)

    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator[Tuple[int, Shape]]:
        return iter(enumerate(self._shapes))

    # Serialization --------------------------------------------------------
    def to_compact(self) -> Dict[str, List[List[float]]]:
        """Return the ``shapes`` section: string id -> list of box rows."""
        return {str(shape_id): shape.to_compact() for shape_id, shape in self}

    @classmethod
    def from_compact(cls, data: Any) -> "ShapeTable":
        """Load a ``shapes`` section; ids must be contiguous from 0."""
        if not isinstance(data, dict):
            raise ValueError("Field 'shapes' must be an object")
        parsed: Dict[int, Shape] = {}
        for key, rows in data.items():
            try:
                shape_id = int(key)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"shapes key '{key}' is not an integer id") from exc
            parsed[shape_id] = Shape.from_compact(rows, f"shapes[{key}]")

        table = cls()
        for expected in range(len(parsed)):
            if expected not in parsed:
                raise ValueError(f"shapes ids must be contiguous from 0; missing {expected}")
            # Stored numbering wins even if two ids hold equal shapes.
            table._shapes.append(parsed[expected])
            table._ids.setdefault(parsed[expected], expected)
        return table
