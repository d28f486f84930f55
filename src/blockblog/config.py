"""Generator configuration — file-based settings with CLI overrides.

Config file format (YAML or JSON)::

    # blockblog.yaml
    input_dir: "./site"
    output_dir: "./public"
    indent: "  "
    safe: true
    debug: false

Keep the config file outside ``input_dir``: every ``.yml``/``.yaml`` file
in the input tree is read as a block definition.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from .core.interpreter import DEFAULT_INDENT


class GeneratorConfig(BaseModel):
    """Settings for one generation run."""

    input_dir: Path = Path(".")
    output_dir: Path = Path("./output")
    indent: str = DEFAULT_INDENT
    safe: bool = False
    debug: bool = False


def load_generator_config(
    config_path: str | Path | None = None,
    *,
    input_dir: str | Path | None = None,
    output_dir: str | Path | None = None,
    indent: str | None = None,
    safe: bool | None = None,
    debug: bool | None = None,
) -> GeneratorConfig:
    """Load a ``GeneratorConfig`` from an optional file plus overrides.

    Keyword arguments that are not ``None`` take precedence over values
    from the file. Relative paths in the file are resolved against the
    file's directory.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path).expanduser().resolve()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        raw = path.read_text(encoding="utf-8")
        if path.suffix == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

        for key in ("input_dir", "output_dir"):
            if key in data:
                data[key] = path.parent / Path(data[key])

    overrides = {
        "input_dir": input_dir,
        "output_dir": output_dir,
        "indent": indent,
        "safe": safe,
        "debug": debug,
    }
    for key, value in overrides.items():
        if value is not None:
            data[key] = value

    return GeneratorConfig(**data)
