"""Build Panda3D geometry for collision shapes."""
from __future__ import annotations

from typing import List, Optional, Tuple

from panda3d.core import (
    CullFaceAttrib,
    Geom,
    GeomNode,
    GeomTriangles,
    GeomVertexData,
    GeomVertexFormat,
    GeomVertexWriter,
    NodePath,
    RenderState,
    TransparencyAttrib,
    ColorAttrib,
)

from collision.shape import Box, Shape

Vec3 = Tuple[float, float, float]


class ShapeMesher:
    """Emit one closed cuboid (6 quads) per collision box."""

    # normal, corner selectors (0 = min, 1 = max) for each face vertex
    _face_defs = (
        ((1, 0, 0), ((1, 0, 0), (1, 1, 0), (1, 1, 1), (1, 0, 1))),
        ((-1, 0, 0), ((0, 0, 0), (0, 0, 1), (0, 1, 1), (0, 1, 0))),
        ((0, 1, 0), ((0, 1, 0), (0, 1, 1), (1, 1, 1), (1, 1, 0))),
        ((0, -1, 0), ((0, 0, 0), (1, 0, 0), (1, 0, 1), (0, 0, 1))),
        ((0, 0, 1), ((0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1))),
        ((0, 0, -1), ((0, 0, 0), (0, 1, 0), (1, 1, 0), (1, 0, 0))),
    )

    def __init__(
        self,
        color: Tuple[float, float, float, float] = (0.35, 0.75, 0.95, 0.6),
        *,
        translucent: bool = True,
    ) -> None:
        self.color = tuple(float(c) for c in color)
        self.translucent = bool(translucent)
        self._format = GeomVertexFormat.getV3n3()
        self._render_state = self._build_render_state()

    def build_geomnode(
        self,
        shape: Shape,
        *,
        name: str = "shape",
        triangles_out: Optional[List[Tuple[Vec3, Vec3, Vec3]]] = None,
    ) -> NodePath:
        """Return a NodePath holding every box of ``shape``; empty shapes yield no geoms."""
        geom_node = GeomNode(name)
        if shape.is_empty():
            return NodePath(geom_node)

        vdata = GeomVertexData(name, self._format, Geom.UHStatic)
        vwriter = GeomVertexWriter(vdata, "vertex")
        nwriter = GeomVertexWriter(vdata, "normal")
        prim = GeomTriangles(Geom.UHStatic)

        vertex_index = 0
        for box in shape:
            vertex_index = self._emit_box(box, vwriter, nwriter, prim, vertex_index, triangles_out)

        geom = Geom(vdata)
        geom.addPrimitive(prim)
        geom_node.addGeom(geom)
        node = NodePath(geom_node)
        node.setState(self._render_state)
        return node

    def _emit_box(
        self,
        box: Box,
        vwriter: GeomVertexWriter,
        nwriter: GeomVertexWriter,
        prim: GeomTriangles,
        vertex_index: int,
        triangles_out: Optional[List[Tuple[Vec3, Vec3, Vec3]]],
    ) -> int:
        lo = (box.min_x, box.min_y, box.min_z)
        hi = (box.max_x, box.max_y, box.max_z)
        for normal, corners in self._face_defs:
            verts: List[Vec3] = []
            for corner in corners:
                vert = tuple(hi[axis] if corner[axis] else lo[axis] for axis in range(3))
                verts.append(vert)  # type: ignore[arg-type]
                vwriter.addData3(*vert)
                nwriter.addData3(*normal)
            prim.addVertices(vertex_index, vertex_index + 1, vertex_index + 2)
            prim.closePrimitive()
            prim.addVertices(vertex_index, vertex_index + 2, vertex_index + 3)
            prim.closePrimitive()
            if triangles_out is not None:
                triangles_out.append((verts[0], verts[1], verts[2]))
                triangles_out.append((verts[0], verts[2], verts[3]))
            vertex_index += 4
        return vertex_index

    def _build_render_state(self) -> RenderState:
        attribs = [
            CullFaceAttrib.make(CullFaceAttrib.MCullClockwise),
            ColorAttrib.makeFlat(self.color),
        ]
        if self.translucent and self.color[3] < 1.0:
            attribs.append(TransparencyAttrib.make(TransparencyAttrib.M_alpha))
        else:
            attribs.append(TransparencyAttrib.make(TransparencyAttrib.M_none))
        return RenderState.make(*attribs)
