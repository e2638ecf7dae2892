"""Tests for file utility functions."""

import json
from pathlib import Path

from vehicle_tables.ingest.utils import (
    debug_output_path,
    expand_inputs,
    read_json,
    write_json,
)


class TestExpandInputs:
    def test_glob(self, table_dir):
        paths = expand_inputs(str(table_dir / "*.lua"))
        assert [p.name for p in paths] == ["guns.lua", "hulls.lua", "turrets.lua"]

    def test_recursive_glob(self, table_dir):
        nested = table_dir / "more"
        nested.mkdir()
        (nested / "extra.lua").write_text("{}")
        paths = expand_inputs(str(table_dir / "**" / "*.lua"))
        assert nested / "extra.lua" in paths
        assert len(paths) == 4

    def test_plain_path(self, table_dir):
        path = table_dir / "guns.lua"
        assert expand_inputs(str(path)) == [path]

    def test_no_match(self, tmp_path):
        assert expand_inputs(str(tmp_path / "*.lua")) == []

    def test_directories_skipped(self, tmp_path):
        (tmp_path / "dir.lua").mkdir()
        assert expand_inputs(str(tmp_path / "*.lua")) == []


class TestDebugOutputPath:
    def test_json(self):
        assert debug_output_path(Path("out/c.json")) == Path("out/c.debug.json")

    def test_no_suffix(self):
        assert debug_output_path(Path("out/c")) == Path("out/c.debug.json")


class TestWriteJson:
    def test_compact(self, tmp_path):
        path = tmp_path / "nested" / "a.json"
        write_json(path, {"a": [1, 2]})
        assert path.read_text() == '{"a":[1,2]}'

    def test_indented(self, tmp_path):
        path = tmp_path / "a.json"
        write_json(path, {"a": 1}, indent=2)
        assert path.read_text() == json.dumps({"a": 1}, indent=2)
        assert read_json(path) == {"a": 1}
