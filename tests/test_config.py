"""Tests for generator configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from blockblog.config import GeneratorConfig, load_generator_config


class TestLoadGeneratorConfig:
    def test_defaults(self):
        cfg = load_generator_config()
        assert cfg == GeneratorConfig()
        assert cfg.indent == "    "
        assert cfg.output_dir == Path("./output")
        assert cfg.safe is False

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "blockblog.yaml"
        path.write_text("input_dir: site\nindent: '  '\nsafe: true\n")
        cfg = load_generator_config(path)
        assert cfg.input_dir == tmp_path.resolve() / "site"
        assert cfg.indent == "  "
        assert cfg.safe is True

    def test_json_file(self, tmp_path):
        path = tmp_path / "blockblog.json"
        path.write_text(json.dumps({"debug": True, "output_dir": "/srv/www"}))
        cfg = load_generator_config(path)
        assert cfg.debug is True
        assert cfg.output_dir == Path("/srv/www")

    def test_overrides_win(self, tmp_path):
        path = tmp_path / "blockblog.yml"
        path.write_text("indent: '  '\ndebug: false\n")
        cfg = load_generator_config(path, indent="\t", debug=True, output_dir="dist")
        assert cfg.indent == "\t"
        assert cfg.debug is True
        assert cfg.output_dir == Path("dist")

    def test_none_overrides_ignored(self, tmp_path):
        path = tmp_path / "blockblog.yml"
        path.write_text("safe: true\n")
        assert load_generator_config(path, safe=None).safe is True

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_generator_config(tmp_path / "nope.yml")

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_generator_config(path)
