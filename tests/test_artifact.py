import json
from datetime import datetime
from pathlib import Path

from collision.artifact import artifact_filename, build_document, format_document, load_document, write_artifact
from collision.extraction import extract_block_shapes
from collision.sources import load_registry_dump
from collision.storage import BlockShapeStorage
from collision.verify import run_sanity_checks

DATA = Path(__file__).resolve().parent / "data" / "registry_small.json"


def _document(**kwargs):
    return build_document(extract_block_shapes(load_registry_dump(str(DATA))), **kwargs)


def test_document_sections():
    doc = _document()
    assert set(doc) == {"blocks", "shapes"}
    assert doc["blocks"]["stone"] == 1
    assert doc["blocks"]["oak_slab"] == [3, 3, 2, 2, 1, 1]
    assert doc["blocks"]["scaffolding"] == [5, None, 0]
    assert doc["shapes"]["0"] == []
    assert doc["shapes"]["1"] == [[0.0, 0.0, 0.0, 1.0, 1.0, 1.0]]
    assert list(doc["shapes"]) == [str(i) for i in range(6)]


def test_document_tags():
    doc = _document(version="1.14.4", bounds="STRICT")
    assert doc["version"] == "1.14.4"
    assert doc["bounds"] == "strict"


def test_formatted_text_is_valid_json_with_one_entry_per_line():
    doc = _document()
    text = format_document(doc)
    assert json.loads(text) == doc
    lines = text.splitlines()
    assert '"stone":1,' in lines
    assert any(line.startswith('"oak_slab":[3,3,2,2,1,1],') for line in lines)
    assert len(lines) > len(doc["blocks"])


def test_artifact_filename():
    when = datetime(2019, 7, 19, 12, 30, 5)
    assert artifact_filename("1.14.4", when) == "block_collision_shapes_1.14.4_2019-07-19T12:30:05.json"
    assert artifact_filename(None, when).startswith("block_collision_shapes_unknown_")


def test_write_and_reload(tmp_path):
    source = load_registry_dump(str(DATA))
    doc = build_document(extract_block_shapes(source), version=source.version)
    path = write_artifact(doc, tmp_path / "out", version=source.version, now=datetime(2020, 1, 1))
    assert path is not None and path.exists()
    assert path.parent == tmp_path / "out"
    reloaded = load_document(path)
    assert reloaded == doc
    assert run_sanity_checks(source, BlockShapeStorage.from_document(reloaded)) == []


def test_write_failure_is_reported_not_raised(tmp_path, capsys):
    blocker = tmp_path / "taken"
    blocker.write_text("not a directory", encoding="utf-8")
    assert write_artifact({"blocks": {}, "shapes": {}}, blocker) is None
    assert "[artifact] write failed" in capsys.readouterr().err


def test_sparse_document_round_trip(tmp_path):
    source = load_registry_dump(str(DATA))
    doc = build_document(extract_block_shapes(source, per_state="sparse"), bounds="lenient")
    assert doc["blocks"]["scaffolding"] == {"0": 5}
    path = write_artifact(doc, tmp_path, version="x")
    storage = BlockShapeStorage.from_document(load_document(path))
    assert run_sanity_checks(source, storage) == []
