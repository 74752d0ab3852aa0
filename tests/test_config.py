import json

from collision import config
from collision.encoding import BoundsPolicy

import pytest


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "extract.json"
    yield path
    config.use_file(None)


def _write(path, data):
    with path.open("w", encoding="utf-8") as handle:
        json.dump(data, handle)
    config.use_file(path)


def test_bundled_defaults():
    config.use_file(None)
    assert config.output_dir() == "."
    assert config.per_state_form() == "dense"
    assert config.bounds_policy() is BoundsPolicy.LENIENT


def test_dotted_lookup(config_file):
    _write(config_file, {"output": {"dir": "build/shapes"}, "lookup": {"bounds": "strict"}})
    assert config.get("output.dir") == "build/shapes"
    assert config.get("output.missing", 7) == 7
    assert config.get("output.dir.deeper", "x") == "x"
    assert config.output_dir() == "build/shapes"
    assert config.bounds_policy() is BoundsPolicy.STRICT


def test_invalid_values_fall_back(config_file):
    _write(config_file, {"extract": {"per_state": "packed"}, "lookup": {"bounds": "clamp"}})
    assert config.per_state_form() == "dense"
    assert config.bounds_policy() is BoundsPolicy.LENIENT


def test_missing_or_broken_file(config_file):
    config.use_file(config_file)
    assert config.get("") == {}
    config_file.write_text("{not json", encoding="utf-8")
    config.use_file(config_file)
    assert config.output_dir() == "."
