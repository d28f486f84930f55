"""Load block definitions from a directory tree.

Every ``.yml``/``.yaml`` file below the root holds a single block item and
is registered under its path relative to the root, extension stripped,
with ``/`` between directory levels::

    input/index.yml            -> "index"
    input/partials/nav.yml     -> "partials/nav"

Files without an extension abort the load, as does any definition file
that does not parse. Other files (markdown, images, stylesheets) are left
for asset staging.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .errors import BlockParseError, InvalidBlockError
from .models import BlockItem, parse_block_item

log = logging.getLogger(__name__)

DEFINITION_SUFFIXES = (".yml", ".yaml")


def is_definition_file(path: Path) -> bool:
    return path.suffix in DEFINITION_SUFFIXES


def load_block_file(path: Path) -> BlockItem:
    """Read and parse a single definition file."""
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise BlockParseError(str(path), f"not valid UTF-8: {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise BlockParseError(str(path), str(exc)) from exc

    if data is None:
        raise BlockParseError(str(path), "file is empty")

    try:
        return parse_block_item(data)
    except ValueError as exc:
        raise BlockParseError(str(path), str(exc)) from exc


def load_block_definitions(
    root: str | Path,
    *,
    exclude: tuple[Path, ...] = (),
) -> dict[str, BlockItem]:
    """Build the block namespace for *root*.

    Entries are visited in sorted order, so when two files map to the same
    name (``a.yaml`` and ``a.yml``) the one sorting last wins. Directories
    listed in *exclude* are not descended into. A missing root yields an
    empty namespace.
    """
    root = Path(root)
    definitions: dict[str, BlockItem] = {}
    skipped = {p.resolve() for p in exclude}

    if root.is_dir():
        _collect(root, root, definitions, skipped)

    log.info("Loaded %d block definition(s) from %s", len(definitions), root)
    return definitions


def _collect(
    directory: Path,
    root: Path,
    definitions: dict[str, BlockItem],
    skipped: set[Path],
) -> None:
    for path in sorted(directory.iterdir()):
        if path.is_dir():
            if path.resolve() not in skipped:
                _collect(path, root, definitions, skipped)
            continue

        if not path.is_file():
            continue

        if not path.suffix:
            raise InvalidBlockError(f"File has no extension: {path}")

        if not is_definition_file(path):
            continue

        name = path.relative_to(root).with_suffix("").as_posix()
        if name in definitions:
            log.warning("Block %s redefined by %s", name, path)

        definitions[name] = load_block_file(path)
        log.debug("Loaded block %s from %s", name, path)
