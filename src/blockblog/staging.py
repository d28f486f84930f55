"""Asset staging — mirror the input tree into the output directory.

Markdown files become standalone HTML pages with the same stem, block
definition files are skipped (the interpreter handles them), and
everything else is copied verbatim. Directories are mirrored recursively.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from rich.console import Console

from .core.errors import OutputExistsError
from .core.loader import is_definition_file
from .core.markdown import MarkdownRenderer, render_markdown

log = logging.getLogger(__name__)
console = Console()


def stage_assets(
    input_dir: Path,
    output_dir: Path,
    *,
    safe: bool = False,
    markdown: MarkdownRenderer = render_markdown,
    skip: tuple[Path, ...] = (),
) -> list[Path]:
    """Copy and convert the files under *input_dir* into *output_dir*.

    Returns the paths written. In *safe* mode a non-empty output directory
    or an existing markdown target raises ``OutputExistsError``.
    """
    skipped = {p.resolve() for p in skip}
    written: list[Path] = []
    _stage_dir(Path(input_dir), Path(output_dir), safe, markdown, skipped, written)
    return written


def _stage_dir(
    input_dir: Path,
    output_dir: Path,
    safe: bool,
    markdown: MarkdownRenderer,
    skipped: set[Path],
    written: list[Path],
) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)

    if any(output_dir.iterdir()):
        if safe:
            raise OutputExistsError(
                f"Output directory {output_dir} is not empty! Aborting because safe mode is on."
            )
        console.print(
            f"[yellow]Output directory {output_dir} is not empty! Files will be overwritten...[/]"
        )

    for entry in sorted(input_dir.iterdir()):
        if entry.resolve() in skipped:
            continue

        if entry.is_dir():
            _stage_dir(entry, output_dir / entry.name, safe, markdown, skipped, written)
        elif entry.suffix == ".md":
            written.append(_convert_markdown(entry, output_dir, safe, markdown))
        elif is_definition_file(entry):
            continue
        else:
            target = output_dir / entry.name
            log.info("Copying file %s", entry.name)
            shutil.copy(entry, target)
            written.append(target)


def _convert_markdown(
    source: Path,
    output_dir: Path,
    safe: bool,
    markdown: MarkdownRenderer,
) -> Path:
    target = output_dir / f"{source.stem}.html"

    if target.exists():
        if safe:
            raise OutputExistsError(
                f"Output file {target} already exists! Aborting because safe mode is on."
            )
        console.print(f"Output file {target.name} already exists! File will be overwritten...")

    target.write_text(markdown(source.read_text(encoding="utf-8")), encoding="utf-8")
    log.info("Converted %s -> %s", source.name, target.name)
    return target
