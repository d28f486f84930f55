"""Tests for the block definition loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from blockblog.core.errors import BlockParseError, InvalidBlockError
from blockblog.core.loader import load_block_definitions, load_block_file
from blockblog.core.models import Block, Include, Text, Title


def _write(root: Path, rel: str, content: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------

class TestNaming:
    def test_top_level_file_uses_stem(self, tmp_path):
        _write(tmp_path, "index.yml", "title: Home\n")
        blocks = load_block_definitions(tmp_path)
        assert blocks == {"index": Title(text="Home")}

    def test_nested_files_are_path_prefixed(self, tmp_path):
        _write(tmp_path, "partials/nav.yml", "include: index\n")
        _write(tmp_path, "a/b/c.yml", "text: deep\n")
        blocks = load_block_definitions(tmp_path)
        assert blocks["partials/nav"] == Include(name="index")
        assert blocks["a/b/c"] == Text(raw="deep")

    def test_dotted_stem(self, tmp_path):
        _write(tmp_path, "post.v2.yml", "text: x\n")
        assert list(load_block_definitions(tmp_path)) == ["post.v2"]

    def test_yaml_suffix_accepted(self, tmp_path):
        _write(tmp_path, "page.yaml", "title: P\n")
        assert load_block_definitions(tmp_path) == {"page": Title(text="P")}

    def test_collision_last_sorted_file_wins(self, tmp_path):
        _write(tmp_path, "a.yaml", "title: from yaml\n")
        _write(tmp_path, "a.yml", "title: from yml\n")
        blocks = load_block_definitions(tmp_path)
        assert blocks == {"a": Title(text="from yml")}


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------

class TestFiltering:
    def test_non_definition_files_ignored(self, tmp_path):
        _write(tmp_path, "about.md", "# About\n")
        _write(tmp_path, "css/site.css", "body {}\n")
        _write(tmp_path, "index.yml", "title: Home\n")
        assert list(load_block_definitions(tmp_path)) == ["index"]

    def test_file_without_extension_fails(self, tmp_path):
        _write(tmp_path, "index.yml", "title: Home\n")
        _write(tmp_path, "LICENSE", "MIT\n")
        with pytest.raises(InvalidBlockError, match="no extension"):
            load_block_definitions(tmp_path)

    def test_excluded_directory_skipped(self, tmp_path):
        _write(tmp_path, "index.yml", "title: Home\n")
        _write(tmp_path, "output/stale.yml", "title: Stale\n")
        blocks = load_block_definitions(tmp_path, exclude=(tmp_path / "output",))
        assert list(blocks) == ["index"]

    def test_missing_root_is_empty(self, tmp_path):
        assert load_block_definitions(tmp_path / "nope") == {}


# ---------------------------------------------------------------------------
# Parse errors
# ---------------------------------------------------------------------------

class TestParseErrors:
    def test_invalid_yaml(self, tmp_path):
        path = _write(tmp_path, "bad.yml", "title: [unclosed\n")
        with pytest.raises(BlockParseError) as info:
            load_block_definitions(tmp_path)
        assert info.value.file == str(path)
        assert str(info.value).startswith(f"Error parsing {path}:")

    def test_invalid_schema(self, tmp_path):
        _write(tmp_path, "bad.yml", "paragraph: nope\n")
        with pytest.raises(BlockParseError, match="unknown block item"):
            load_block_definitions(tmp_path)

    def test_empty_file(self, tmp_path):
        _write(tmp_path, "empty.yml", "")
        with pytest.raises(BlockParseError, match="empty"):
            load_block_definitions(tmp_path)

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin.yml"
        path.write_bytes(b"title: \xff\n")
        with pytest.raises(BlockParseError, match="not valid UTF-8") as info:
            load_block_definitions(tmp_path)
        assert info.value.file == str(path)

    def test_parse_error_is_invalid_input(self, tmp_path):
        path = _write(tmp_path, "bad.yml", "block: {}\n")
        with pytest.raises(InvalidBlockError):
            load_block_file(path)

    def test_load_single_file(self, tmp_path):
        path = _write(
            tmp_path,
            "card.yml",
            "block:\n  style: card\n  items:\n    - text: hi\n",
        )
        assert load_block_file(path) == Block(style="card", items=[Text(raw="hi")])
