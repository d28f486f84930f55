"""Orchestration pipeline — ties loader, interpreter, and staging together."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from rich.console import Console

from .config import GeneratorConfig
from .core.interpreter import BlockInterpreter
from .core.loader import load_block_definitions
from .staging import stage_assets

log = logging.getLogger(__name__)
console = Console()

GENERATED_STYLE_FILE = "generated_style.css"


class GenerationResult(BaseModel):
    """One rendered block page."""
    name: str
    output_path: Path
    written: bool = True


class PipelineResult(BaseModel):
    """Aggregate result of a full generation run."""
    pages: list[GenerationResult] = Field(default_factory=list)
    stylesheet_path: Optional[Path] = None
    assets: list[Path] = Field(default_factory=list)

    @property
    def written_pages(self) -> list[GenerationResult]:
        return [p for p in self.pages if p.written]


class Pipeline:
    """Block definitions → static HTML site.

    Usage::

        pipeline = Pipeline(GeneratorConfig(input_dir=Path("site")))
        result = pipeline.run()
        print(result.stylesheet_path)
    """

    def __init__(self, config: GeneratorConfig | None = None) -> None:
        self.config = config or GeneratorConfig()

    def run(self) -> PipelineResult:
        """Run one generation pass.

        Every page is rendered before anything is written, so a missing
        include or an invalid block leaves no page files behind.
        """
        cfg = self.config
        input_dir = Path(cfg.input_dir)
        output_dir = Path(cfg.output_dir)
        result = PipelineResult()

        # -- Step 1: Load definitions -----------------------------------
        console.print(f"[bold blue]Loading block definitions from:[/] {input_dir}")
        blocks = load_block_definitions(input_dir, exclude=(output_dir,))
        console.print(f"[green]✓[/] Loaded {len(blocks)} block(s)")

        # -- Step 2: Render ---------------------------------------------
        interpreter = BlockInterpreter(
            blocks,
            input_dir=input_dir,
            indent=cfg.indent,
            debug=cfg.debug,
        )
        rendered = {name: interpreter.render_by_name(name) for name in sorted(blocks)}

        # -- Step 3: Assets ---------------------------------------------
        result.assets = stage_assets(input_dir, output_dir, safe=cfg.safe, skip=(output_dir,))

        # -- Step 4: Pages ----------------------------------------------
        for name, html in rendered.items():
            page_path = output_dir / f"{name}.html"
            written = self._write(page_path, html, label=f"Block file {name}")
            result.pages.append(GenerationResult(name=name, output_path=page_path, written=written))

        # -- Step 5: Generated styles -----------------------------------
        style_path = output_dir / GENERATED_STYLE_FILE
        if self._write(style_path, interpreter.generated_styles(), label="Generated style file"):
            result.stylesheet_path = style_path

        console.print("[green]Generation complete![/]")
        return result

    def _write(self, path: Path, content: str, *, label: str) -> bool:
        """Write *content* to *path* unless safe mode protects an existing file."""
        if path.exists():
            if self.config.safe:
                console.print(f"[red]{label} already exists! Ignoring it because safe mode is on.[/]")
                return False
            console.print(f"[yellow]{label} already exists! File will be overwritten...[/]")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        log.debug("Wrote %s", path)
        return True
