"""blockblog CLI — YAML and Markdown based static HTML generator."""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import load_generator_config
from .core.errors import BlockblogError
from .core.loader import load_block_definitions
from .core.models import Block, ExplicitLinkStyle, ForEach, Html, Link

console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.version_option(version=__version__, prog_name="blockblog")
def main():
    """blockblog — YAML and Markdown based static HTML generator."""
    pass


@main.command()
@click.option(
    "-i", "--input",
    "input_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Input directory (default: current directory).",
)
@click.option(
    "-o", "--output",
    "output_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Output directory (default: ./output).",
)
@click.option(
    "-s", "--safe",
    is_flag=True,
    default=False,
    help="Do not overwrite output files already present.",
)
@click.option(
    "-d", "--debug",
    is_flag=True,
    default=False,
    help="Insert debug comments marking included blocks in the generated HTML.",
)
@click.option(
    "--indent",
    default=None,
    help="String repeated once per nesting level (default: four spaces).",
)
@click.option(
    "-c", "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML or JSON config file. Command-line options take precedence.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def generate(
    input_dir: str | None,
    output_dir: str | None,
    safe: bool,
    debug: bool,
    indent: str | None,
    config_path: str | None,
    verbose: bool,
):
    """Generate all static HTML pages."""
    from .pipeline import Pipeline

    _setup_logging(verbose)

    try:
        config = load_generator_config(
            config_path,
            input_dir=input_dir,
            output_dir=output_dir,
            indent=indent,
            safe=safe or None,
            debug=debug or None,
        )
        Pipeline(config).run()
    except (BlockblogError, OSError) as exc:
        console.print(f"[bold red]❌ Generation failed:[/] {escape(str(exc))}")
        raise SystemExit(1)


@main.command()
@click.argument("name")
@click.option(
    "-i", "--input",
    "input_dir",
    type=click.Path(file_okay=False),
    default=".",
    help="Input directory (default: current directory).",
)
def inspect(name: str, input_dir: str):
    """Load the block definitions and display block NAME as a tree."""
    from rich.tree import Tree

    try:
        blocks = load_block_definitions(input_dir)
    except (BlockblogError, OSError) as exc:
        console.print(f"[bold red]❌ Load failed:[/] {escape(str(exc))}")
        raise SystemExit(1)

    if name not in blocks:
        console.print(f"[bold red]❌ Block {name} not found[/]")
        raise SystemExit(1)

    tree = Tree(f"[bold]{name}[/bold]")
    _add_item_tree(tree, blocks[name])
    console.print(tree)


def _add_item_tree(parent, item):
    """Recursively add block items to a Rich tree."""
    if isinstance(item, Block):
        label = item.html_type or "div"
        if item.style:
            label += f".{item.style}"
        node = parent.add(f"[blue]block[/blue] {label}")
        for child in item.items:
            _add_item_tree(node, child)
    elif isinstance(item, ForEach):
        source = item.pattern if item.pattern is not None else ", ".join(item.values or [])
        node = parent.add(f"[blue]$for_each[/blue] [dim]({source})[/dim]")
        for child in item.items:
            _add_item_tree(node, child)
    elif isinstance(item, Html):
        node = parent.add("[blue]html[/blue]")
        for child in item.body or []:
            _add_item_tree(node, child)
    elif isinstance(item, Link):
        style = "explicit" if isinstance(item.link_style, ExplicitLinkStyle) else item.link_style.name
        parent.add(f"[blue]link[/blue] {item.url} [dim]({style})[/dim]")
    else:
        fields = item.model_dump(exclude={"kind"}, exclude_none=True)
        detail = ", ".join(f"{k}={v!r}" for k, v in fields.items())
        parent.add(f"[blue]{item.kind}[/blue] [dim]{escape(detail)}[/dim]")


if __name__ == "__main__":
    main()
