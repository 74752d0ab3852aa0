from collision.extraction import extract_block_shapes
from collision.shape import Box
from collision.sources import BlockType, StateGeometry, StaticGeometrySource
from collision.storage import BlockShapeStorage
from collision.verify import run_sanity_checks


def test_clean_round_trip_has_no_failures(registry_source):
    source = registry_source
    result = extract_block_shapes(source)
    assert run_sanity_checks(source, BlockShapeStorage(result.table, result.blocks)) == []


def test_collects_every_mismatch():
    source = StaticGeometrySource(
        [BlockType("minecraft:door", 3), BlockType("minecraft:glass", 1)],
        {
            ("minecraft:door", 0): StateGeometry((Box(0, 0, 0, 1, 1, 0.1875),)),
            ("minecraft:door", 1): StateGeometry(()),
            ("minecraft:door", 2): StateGeometry((Box(0, 0, 0, 1, 1, 0.1875),)),
            ("minecraft:glass", 0): StateGeometry((Box(0, 0, 0, 1, 1, 1),)),
        },
    )
    # Stale table: every door state swapped, glass missing entirely.
    storage = BlockShapeStorage(
        {"0": [], "1": [[0, 0, 0, 1, 1, 0.1875]]},
        {"door": [0, 1, 0]},
    )
    assert run_sanity_checks(source, storage) == ["door:0", "door:1", "door:2", "glass:0"]


def test_strict_lookup_errors_count_as_mismatches():
    source = StaticGeometrySource(
        [BlockType("fence", 2)],
        {("fence", 0): StateGeometry(()), ("fence", 1): StateGeometry(())},
    )
    storage = BlockShapeStorage({"0": []}, {"fence": [0]}, bounds="strict")
    assert run_sanity_checks(source, storage) == ["fence:1"]


def test_unsampleable_states_are_skipped():
    source = StaticGeometrySource(
        [BlockType("chest", 2)],
        {("chest", 0): StateGeometry(())},
        errors={("chest", 1): "needs a block entity"},
    )
    storage = BlockShapeStorage({"0": []}, {"chest": 0})
    assert run_sanity_checks(source, storage) == []
