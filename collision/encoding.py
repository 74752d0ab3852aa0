"""Per-block shape encodings and their JSON forms.

A block's entry in the ``blocks`` section takes one of three forms:

* an integer (or ``null``): every state shares one shape id (:class:`Uniform`),
* a list indexed by state id, ``null`` meaning no geometry (:class:`DenseArray`),
* an object keyed by state id string, absent meaning no geometry (:class:`SparseMap`).

The per-state forms carry a :class:`BoundsPolicy` that decides what happens
when a state id falls outside the encoded range.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from collision.errors import InvalidStateIndex


class BoundsPolicy(Enum):
    """How per-state encodings treat state ids beyond their range."""

    LENIENT = "lenient"  # unknown state -> no geometry
    STRICT = "strict"  # unknown state -> InvalidStateIndex

    @classmethod
    def parse(cls, value: Union["BoundsPolicy", str, None]) -> "BoundsPolicy":
        if value is None:
            return cls.LENIENT
        if isinstance(value, BoundsPolicy):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown bounds policy '{value}'; expected lenient/strict") from exc


def _check_non_negative(state_id: int) -> None:
    if state_id < 0:
        raise InvalidStateIndex(state_id, f"block state id {state_id} < 0")


@dataclass(frozen=True)
class Uniform:
    """All states share ``shape_id``; ``None`` stands for no geometry."""

    shape_id: Optional[int]

    def shape_id_for(self, state_id: int) -> Optional[int]:
        return self.shape_id


@dataclass(frozen=True)
class DenseArray:
    """One slot per state id; ``None`` slots have no geometry."""

    shape_ids: Tuple[Optional[int], ...]
    bounds: BoundsPolicy = BoundsPolicy.LENIENT

    def shape_id_for(self, state_id: int) -> Optional[int]:
        _check_non_negative(state_id)
        if state_id >= len(self.shape_ids):
            if self.bounds is BoundsPolicy.STRICT:
                raise InvalidStateIndex(
                    state_id,
                    f"block state id {state_id} out of bounds for length {len(self.shape_ids)}",
                )
            return None
        return self.shape_ids[state_id]

    def __len__(self) -> int:
        return len(self.shape_ids)


@dataclass(frozen=True)
class SparseMap:
    """Only states with geometry are listed."""

    shape_ids: Dict[int, int] = field(default_factory=dict)
    bounds: BoundsPolicy = BoundsPolicy.LENIENT

    def shape_id_for(self, state_id: int) -> Optional[int]:
        _check_non_negative(state_id)
        shape_id = self.shape_ids.get(state_id)
        if shape_id is None and self.bounds is BoundsPolicy.STRICT:
            raise InvalidStateIndex(state_id, f"block state id {state_id} not present in sparse encoding")
        return shape_id

    def __len__(self) -> int:
        return len(self.shape_ids)


BlockEncoding = Union[Uniform, DenseArray, SparseMap]


def _shape_id(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{path} must be an integer shape id")
    return value


def decode_encoding(value: Any, bounds: BoundsPolicy = BoundsPolicy.LENIENT, path: str = "block") -> BlockEncoding:
    """Build the encoding variant matching a JSON ``blocks`` value."""
    if value is None:
        return Uniform(None)
    if isinstance(value, list):
        slots = tuple(
            None if slot is None else _shape_id(slot, f"{path}[{idx}]")
            for idx, slot in enumerate(value)
        )
        return DenseArray(slots, bounds)
    if isinstance(value, dict):
        mapping: Dict[int, int] = {}
        for key, slot in value.items():
            try:
                state_id = int(key)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{path} key '{key}' is not an integer state id") from exc
            if state_id < 0:
                raise ValueError(f"{path} key '{key}' is negative")
            mapping[state_id] = _shape_id(slot, f"{path}[{key}]")
        return SparseMap(mapping, bounds)
    return Uniform(_shape_id(value, path))


def encode_encoding(encoding: BlockEncoding) -> Any:
    """Inverse of :func:`decode_encoding` (the bounds policy is not stored per block)."""
    if isinstance(encoding, Uniform):
        return encoding.shape_id
    if isinstance(encoding, DenseArray):
        return list(encoding.shape_ids)
    if isinstance(encoding, SparseMap):
        return {str(state_id): shape_id for state_id, shape_id in sorted(encoding.shape_ids.items())}
    raise TypeError(f"Unsupported block encoding {encoding!r}")


def referenced_ids(encoding: BlockEncoding) -> Tuple[int, ...]:
    """Shape ids an encoding points at, in slot order, without ``None``."""
    if isinstance(encoding, Uniform):
        return () if encoding.shape_id is None else (encoding.shape_id,)
    if isinstance(encoding, DenseArray):
        return tuple(slot for slot in encoding.shape_ids if slot is not None)
    return tuple(encoding.shape_ids.values())
