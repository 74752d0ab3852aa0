"""Exceptions raised by the collision shape pipeline."""
from __future__ import annotations


class InvalidStateIndex(ValueError):
    """A block state id that cannot be resolved for a per-state encoding."""

    def __init__(self, state_id: int, message: str) -> None:
        super().__init__(message)
        self.state_id = state_id


class GeometryQueryError(RuntimeError):
    """The geometry source could not sample one (block, state) pair."""

    def __init__(self, block: str, state_id: int, reason: str = "") -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(f"collision query failed for block={block} state={state_id}{detail}")
        self.block = block
        self.state_id = state_id
