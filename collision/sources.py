"""Access to the game's block registry and per-state collision geometry."""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from collision.errors import GeometryQueryError
from collision.shape import Box, Shape

Offset = Tuple[float, float, float]
NO_OFFSET: Offset = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class BlockType:
    """One registry entry: namespaced id plus its state id range."""

    name: str
    state_count: int
    default_state: int = 0

    def state_ids(self) -> range:
        return range(self.state_count)


@dataclass(frozen=True)
class StateGeometry:
    """Collision boxes reported for one state, before the state offset is undone."""

    boxes: Tuple[Box, ...]
    offset: Offset = NO_OFFSET


def strip_namespace(name: str) -> str:
    """Drop a leading ``namespace:`` prefix from a block id."""
    _, sep, path = name.partition(":")
    return path if sep else name


class GeometrySource:
    """Registry enumeration and per-state collision queries from the game."""

    version: Optional[str] = None

    def block_types(self) -> Iterable[BlockType]:
        raise NotImplementedError

    def query_collision_geometry(self, name: str, state_id: int) -> StateGeometry:
        raise NotImplementedError


class StaticGeometrySource(GeometrySource):
    """Geometry source backed by data captured ahead of time."""

    def __init__(
        self,
        blocks: Sequence[BlockType],
        geometry: Mapping[Tuple[str, int], StateGeometry],
        *,
        errors: Optional[Mapping[Tuple[str, int], str]] = None,
        version: Optional[str] = None,
    ) -> None:
        self._blocks = list(blocks)
        self._geometry = dict(geometry)
        self._errors = dict(errors or {})
        self.version = version

    def block_types(self) -> List[BlockType]:
        return list(self._blocks)

    def query_collision_geometry(self, name: str, state_id: int) -> StateGeometry:
        key = (name, state_id)
        if key in self._errors:
            raise GeometryQueryError(name, state_id, self._errors[key])
        try:
            return self._geometry[key]
        except KeyError:
            raise GeometryQueryError(name, state_id, "no geometry recorded") from None


def sample_shape(source: GeometrySource, name: str, state_id: int) -> Shape:
    """Query one state and return its shape in the state's own local frame."""
    geometry = source.query_collision_geometry(name, state_id)
    dx, dy, dz = geometry.offset
    return Shape(geometry.boxes).translated(-dx, -dy, -dz)


# ---------- Registry dump files ----------

def _to_offset(value: Any, path: str) -> Offset:
    if value is None:
        return NO_OFFSET
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ValueError(f"{path} must be a sequence of length 3")
    try:
        return (float(value[0]), float(value[1]), float(value[2]))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{path} must contain numeric values") from exc


def source_from_dict(data: Dict[str, Any]) -> StaticGeometrySource:
    """Build a source from a registry dump exported by the game.

    Layout::

        {"version": "1.14.4",
         "blocks": [{"name": "minecraft:stone", "default_state": 0,
                     "states": [{"boxes": [[0,0,0,1,1,1]], "offset": [0,0,0]},
                                {"error": "needs a world"}]}]}
    """
    if not isinstance(data, dict):
        raise TypeError("Registry dump must be a JSON object/dict")
    blocks_data = data.get("blocks")
    if not isinstance(blocks_data, list):
        raise ValueError("Field 'blocks' must be a list")

    blocks: List[BlockType] = []
    geometry: Dict[Tuple[str, int], StateGeometry] = {}
    errors: Dict[Tuple[str, int], str] = {}
    for idx, entry in enumerate(blocks_data):
        path = f"blocks[{idx}]"
        if not isinstance(entry, dict):
            raise ValueError(f"{path} must be an object")
        name = entry.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError(f"{path}.name must be a non-empty string")
        states = entry.get("states")
        if not isinstance(states, list) or not states:
            raise ValueError(f"{path}.states must be a non-empty list")
        default_state = int(entry.get("default_state", 0))
        if not 0 <= default_state < len(states):
            raise ValueError(f"{path}.default_state {default_state} out of range")

        for state_id, state in enumerate(states):
            state_path = f"{path}.states[{state_id}]"
            if not isinstance(state, dict):
                raise ValueError(f"{state_path} must be an object")
            if "error" in state:
                errors[(name, state_id)] = str(state["error"])
                continue
            shape = Shape.from_compact(state.get("boxes", []), f"{state_path}.boxes")
            geometry[(name, state_id)] = StateGeometry(
                boxes=shape.boxes,
                offset=_to_offset(state.get("offset"), f"{state_path}.offset"),
            )
        blocks.append(BlockType(name=name, state_count=len(states), default_state=default_state))

    version = data.get("version")
    return StaticGeometrySource(
        blocks,
        geometry,
        errors=errors,
        version=None if version is None else str(version),
    )


def load_registry_dump(path: str) -> StaticGeometrySource:
    """Load a registry dump JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return source_from_dict(data)
