"""Collision shape extraction, encoding and lookup for block states."""
from .encoding import BlockEncoding, BoundsPolicy, DenseArray, SparseMap, Uniform, decode_encoding, encode_encoding
from .errors import GeometryQueryError, InvalidStateIndex
from .extraction import ExtractionResult, extract_block_shapes
from .shape import EMPTY, Box, Shape
from .shape_table import ShapeTable
from .sources import BlockType, GeometrySource, StateGeometry, StaticGeometrySource, load_registry_dump
from .storage import BlockShapeStorage
from .verify import run_sanity_checks

__all__ = [
    "Box",
    "Shape",
    "EMPTY",
    "ShapeTable",
    "BlockEncoding",
    "BoundsPolicy",
    "Uniform",
    "DenseArray",
    "SparseMap",
    "decode_encoding",
    "encode_encoding",
    "InvalidStateIndex",
    "GeometryQueryError",
    "BlockType",
    "StateGeometry",
    "GeometrySource",
    "StaticGeometrySource",
    "load_registry_dump",
    "ExtractionResult",
    "extract_block_shapes",
    "BlockShapeStorage",
    "run_sanity_checks",
]
