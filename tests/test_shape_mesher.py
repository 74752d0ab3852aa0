from collision.shape import EMPTY, Box, Shape
from render.shape_mesher import ShapeMesher


def _collect_triangles(node):
    geom_node = node.node()
    tri_count = 0
    for i in range(geom_node.getNumGeoms()):
        geom = geom_node.getGeom(i)
        for p in range(geom.getNumPrimitives()):
            prim = geom.getPrimitive(p)
            tri_count += prim.getNumPrimitives()
    return tri_count


def test_single_box_produces_six_quads():
    node = ShapeMesher().build_geomnode(Shape([Box(0, 0, 0, 1, 1, 1)]))
    assert _collect_triangles(node) == 12
    assert node.node().getGeom(0).getVertexData().getNumRows() == 24


def test_each_box_is_meshed_separately():
    stairs = Shape([Box(0, 0, 0, 1, 0.5, 1), Box(0, 0.5, 0.5, 1, 1, 1)])
    node = ShapeMesher().build_geomnode(stairs, name="oak_stairs")
    assert node.getName() == "oak_stairs"
    assert _collect_triangles(node) == 24
    assert node.node().getGeom(0).getVertexData().getNumRows() == 48


def test_empty_shape_has_no_geoms():
    node = ShapeMesher().build_geomnode(EMPTY)
    assert node.node().getNumGeoms() == 0


def test_triangles_span_box_extent():
    triangles = []
    ShapeMesher().build_geomnode(Shape([Box(0.25, 0, 0.125, 0.75, 0.5, 1)]), triangles_out=triangles)
    assert len(triangles) == 12
    xs = {v[0] for tri in triangles for v in tri}
    ys = {v[1] for tri in triangles for v in tri}
    zs = {v[2] for tri in triangles for v in tri}
    assert xs == {0.25, 0.75}
    assert ys == {0.0, 0.5}
    assert zs == {0.125, 1.0}
