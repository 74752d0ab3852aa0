#!/usr/bin/env python3
"""
Minimal viewer for an extracted collision shape table.

Usage examples:
  python -m tools.view_shapes --table out/block_collision_shapes_1.14.4_*.json \
                                --block oak_stairs --state 3

Controls:
  - left/right arrows step through the block's states
  - up/down arrows step through blocks
  - [space] toggles the turntable spin
"""

import argparse
import math
import sys
from typing import List, Optional

from panda3d.core import loadPrcFileData

loadPrcFileData("view-shapes", "window-title Collision Shape Viewer")

from direct.showbase.ShowBase import ShowBase
from direct.gui.OnscreenText import OnscreenText
from panda3d.core import AmbientLight, DirectionalLight, LColor, LineSegs

from collision import config
from collision.artifact import load_document
from collision.encoding import DenseArray, SparseMap, Uniform
from collision.errors import InvalidStateIndex
from collision.storage import BlockShapeStorage
from render.shape_mesher import ShapeMesher


def state_count_hint(storage: BlockShapeStorage, block_id: str) -> int:
    """Number of states worth stepping through for ``block_id``."""
    encoding = storage.encoding(block_id)
    if isinstance(encoding, DenseArray):
        return max(1, len(encoding))
    if isinstance(encoding, SparseMap) and encoding.shape_ids:
        return max(encoding.shape_ids) + 1
    return 1


class Viewer(ShowBase):
    def __init__(self, storage: BlockShapeStorage, block_id: str, state_id: int):
        super().__init__()
        self.disableMouse()
        self.set_background_color(0.05, 0.05, 0.07, 1)
        self.storage = storage
        self.mesher = ShapeMesher()
        self._blocks: List[str] = sorted(storage.block_ids())
        self._block_idx = self._blocks.index(block_id) if block_id in self._blocks else 0
        self._state_id = max(0, int(state_id))
        self._spin = True

        d = DirectionalLight("key"); d.setColor(LColor(0.95, 0.95, 0.95, 1))
        dn = self.render.attachNewNode(d); dn.setHpr(45, -50, 0); self.render.setLight(dn)
        a = AmbientLight("amb"); a.setColor(LColor(0.3, 0.3, 0.35, 1))
        an = self.render.attachNewNode(a); self.render.setLight(an)

        # Block shapes are Y-up; pitch the pivot so they stand upright in Panda's Z-up world.
        self.pivot = self.render.attachNewNode("pivot")
        self.frame = self.pivot.attachNewNode("block-frame")
        self.frame.setP(90)
        self.frame.setPos(-0.5, -0.5, -0.5)
        self._attach_cell_outline()
        self.shape_np = None

        dist = 3.5
        elev = math.radians(35.0)
        self.camera.setPos(0, -dist * math.cos(elev), dist * math.sin(elev))
        self.camera.lookAt(0, 0, 0)

        self._help = OnscreenText(text="[left/right]=state  [up/down]=block  [space]=spin",
                                  pos=(-1.3, 0.92), scale=0.05, fg=(1, 1, 1, 0.85), align=0, mayChange=False)
        self._info = OnscreenText(text="", pos=(-1.3, 0.85), scale=0.05,
                                  fg=(0.85, 1, 0.95, 0.9), align=0, mayChange=True)
        self.accept("arrow_left", self._step_state, [-1])
        self.accept("arrow_right", self._step_state, [1])
        self.accept("arrow_up", self._step_block, [-1])
        self.accept("arrow_down", self._step_block, [1])
        self.accept("space", self._toggle_spin)
        self.taskMgr.add(self._update_task, "viewer-update")
        self._show()

    def _attach_cell_outline(self) -> None:
        segs = LineSegs("cell")
        segs.setColor(0.6, 0.6, 0.6, 1)
        corners = [(x, y, z) for x in (0, 1) for y in (0, 1) for z in (0, 1)]
        for a in corners:
            for b in corners:
                if a < b and sum(1 for i in range(3) if a[i] != b[i]) == 1:
                    segs.moveTo(*a)
                    segs.drawTo(*b)
        self.frame.attachNewNode(segs.create())

    # --- controls ---
    def _step_state(self, delta: int):
        count = state_count_hint(self.storage, self._blocks[self._block_idx])
        self._state_id = (self._state_id + delta) % count
        self._show()

    def _step_block(self, delta: int):
        self._block_idx = (self._block_idx + delta) % len(self._blocks)
        self._state_id = 0
        self._show()

    def _toggle_spin(self):
        self._spin = not self._spin

    def _show(self) -> None:
        if self.shape_np is not None:
            self.shape_np.removeNode()
            self.shape_np = None
        block_id = self._blocks[self._block_idx]
        try:
            shape = self.storage.lookup(block_id, self._state_id)
        except InvalidStateIndex as exc:
            print(f"[viewer] {exc}")
            return
        if shape is None:
            self._info.setText(f"{block_id}: unknown block")
            return
        self.shape_np = self.mesher.build_geomnode(shape, name=block_id)
        self.shape_np.reparentTo(self.frame)
        encoding = self.storage.encoding(block_id)
        kind = "uniform" if isinstance(encoding, Uniform) else type(encoding).__name__
        self._info.setText(f"{block_id} state={self._state_id} boxes={len(shape)} ({kind})")
        print(f"[viewer] {block_id} state={self._state_id} boxes={len(shape)}")

    def _update_task(self, task):
        if self._spin:
            dt = globalClock.getDt()
            self.pivot.setH(self.pivot.getH() + 25.0 * dt)
        return task.cont


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="View extracted block collision shapes")
    ap.add_argument("--table", required=True, help="Shape table json written by extract.py")
    ap.add_argument("--block", default="stone", help="Block id without namespace")
    ap.add_argument("--state", type=int, default=0)
    ap.add_argument("--strict", action="store_true", help="Reject state ids beyond the encoded range")
    args = ap.parse_args(argv)

    bounds = "strict" if args.strict else config.bounds_policy()
    storage = BlockShapeStorage.from_document(load_document(args.table), bounds=bounds)
    if not len(storage):
        print("[viewer] shape table has no blocks", file=sys.stderr)
        return 1
    Viewer(storage, args.block, args.state).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
