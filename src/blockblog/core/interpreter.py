"""Block interpreter — lowers a block graph into indented HTML.

The interpreter owns the block namespace and the mutable state of a single
generation run:

- ``indent_level``: nesting depth, each level adds one ``indent`` string
  in front of emitted lines.
- ``current_file``: the block being resolved, used in error messages.
- ``current_loop_value``: the value bound by the innermost ``$for_each``.
  It is *not* reset when a loop ends.
- generated link styles, collected while rendering and read back once
  through :meth:`BlockInterpreter.generated_styles`.

Usage::

    blocks = load_block_definitions("site/")
    interp = BlockInterpreter(blocks, input_dir=Path("site/"))
    html = interp.render_by_name("index")
    css = interp.generated_styles()
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Mapping, Optional

from .errors import BlockNotFoundError, InvalidBlockError
from .markdown import MarkdownRenderer, render_markdown
from .models import (
    Block,
    BlockItem,
    Br,
    Code,
    ExplicitLinkStyle,
    ForEach,
    Head,
    Html,
    Image,
    Include,
    IncludeVerbose,
    Link,
    LinkStyle,
    LoopValue,
    LoopValueFileName,
    Markdown,
    NamedLinkStyle,
    Text,
    Title,
)
from .substitution import file_stem, substitute_special_values

log = logging.getLogger(__name__)

DEFAULT_INDENT = "    "


class BlockInterpreter:
    """Render named blocks from a namespace into HTML strings."""

    def __init__(
        self,
        blocks: Mapping[str, BlockItem],
        *,
        input_dir: Path | str = ".",
        indent: str = DEFAULT_INDENT,
        debug: bool = False,
        markdown: MarkdownRenderer = render_markdown,
    ) -> None:
        self.blocks = blocks
        self.input_dir = Path(input_dir)
        self.indent = indent
        self.debug = debug
        self._markdown = markdown

        self.indent_level = 0
        self.current_file = ""
        self.current_loop_value = ""
        self._generated_styles: dict[str, dict[str, str]] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render_by_name(self, name: str) -> str:
        """Render the block registered as *name*.

        Raises ``BlockNotFoundError`` if the namespace has no such block.
        """
        block = self._lookup(name)
        with self._bound_file(name):
            return self.render(block)

    def render(self, item: BlockItem) -> str:
        """Render a single block item, newline-terminated.

        Empty output (a loop with no iterations) stays empty.
        """
        output = self._dispatch(item)
        if output and not output.endswith("\n"):
            output += "\n"
        return output

    @property
    def styles(self) -> dict[str, dict[str, str]]:
        """Generated declarations keyed by ``"{class}:{pseudo-class}"``."""
        return self._generated_styles

    def generated_styles(self) -> str:
        """Serialise the generated link styles as a stylesheet."""
        parts: list[str] = []
        for selector, declarations in self._generated_styles.items():
            parts.append(f".{selector} {{\n")
            for prop, value in declarations.items():
                parts.append(f"\t{prop}: {value};\n")
            parts.append("}\n\n")
        return "".join(parts)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _dispatch(self, item: BlockItem) -> str:
        if isinstance(item, Include):
            return self._include(self._sub(item.name))
        if isinstance(item, IncludeVerbose):
            return self._include(self._sub(item.path), item.params)
        if isinstance(item, Title):
            return self._line(f"<h1>{self._sub(item.text)}</h1>")
        if isinstance(item, Block):
            return self._block(item)
        if isinstance(item, Markdown):
            return self._line(self._markdown(self._sub(item.source)))
        if isinstance(item, Code):
            return self._line(f"<pre><code>\n{self._sub(item.source)}\n</code></pre>")
        if isinstance(item, Image):
            alt = item.alt if item.alt is not None else ""
            return self._line(f'<img src="{self._sub(item.path)}" alt="{alt}" />')
        if isinstance(item, Text):
            return self._line(self._sub(item.raw))
        if isinstance(item, Link):
            return self._line(self._link(self._sub(item.text), item.url, item.link_style))
        if isinstance(item, Br):
            return self._line("<br />")
        if isinstance(item, ForEach):
            return self._for_each(item)
        if isinstance(item, LoopValue):
            return self._line(self.current_loop_value)
        if isinstance(item, LoopValueFileName):
            return self._line(file_stem(self.current_loop_value))
        if isinstance(item, Html):
            return self._html(item.head, item.body)
        raise TypeError(f"Unsupported block item: {type(item).__name__}")

    # ------------------------------------------------------------------
    # Variants
    # ------------------------------------------------------------------

    def _include(self, name: str, params: Optional[list[str]] = None) -> str:
        # TODO: bind IncludeVerbose params into the substitution scope once
        # parameter placeholders have a defined syntax.
        block = self._lookup(name)
        output = ""
        if self.debug:
            output += self._line(f"<!-- Including block {name} -->\n")

        log.debug("Including block %s from %s", name, self.current_file or "<root>")
        with self._bound_file(name):
            output += self.render(block)
        return output

    def _block(self, block: Block) -> str:
        tag = block.html_type or "div"
        if block.style is not None:
            output = self._line(f'<{tag} class="{block.style}">\n')
        else:
            output = self._line(f"<{tag}>\n")

        with self._indented():
            for child in block.items:
                output += self.render(child)

        return output + self._line(f"</{tag}>")

    def _link(self, text: str, url: str, style: LinkStyle) -> str:
        if isinstance(style, NamedLinkStyle):
            return f'<a href="{url}" class="{style.name}">{text}</a>'

        css_class = self._register_link_style(style)
        return f'<a href="{url}" class="{css_class}">{text}</a>'

    def _register_link_style(self, style: ExplicitLinkStyle) -> str:
        """Record the four pseudo-class rules for *style*, return the class."""
        normal = style.color.normal
        css_class = f"link-{normal.hex.lstrip('#')}-{'underline' if style.underline else 'none'}"

        link_rules = {"color": normal.hex}
        if style.underline:
            link_rules["text-decoration"] = "underline"

        visited_rules = dict(link_rules)
        if style.visited_color is not None:
            visited_rules["color"] = style.visited_color.normal.hex

        hover_rules = {
            "color": style.color.hover_or_normal.hex,
            "text-decoration": "underline",
        }

        self._generated_styles[f"{css_class}:link"] = link_rules
        self._generated_styles[f"{css_class}:visited"] = visited_rules
        self._generated_styles[f"{css_class}:hover"] = hover_rules
        self._generated_styles[f"{css_class}:active"] = dict(hover_rules)
        return css_class

    def _for_each(self, loop: ForEach) -> str:
        if loop.values is not None and loop.pattern is not None:
            raise InvalidBlockError(
                f"ForEach in {self.current_file or '<root>'}: values and pattern are both set"
            )

        output = ""
        if loop.values is not None:
            for value in loop.values:
                self.current_loop_value = value
                for child in loop.items:
                    output += self.render(child)

        elif loop.pattern is not None:
            try:
                matches = sorted(self.input_dir.glob(loop.pattern, case_sensitive=False))
            except (ValueError, NotImplementedError) as exc:
                raise InvalidBlockError(
                    f"ForEach in {self.current_file or '<root>'}: "
                    f"invalid pattern {loop.pattern!r}: {exc}"
                ) from exc
            log.debug("Pattern %s matched %d file(s)", loop.pattern, len(matches))
            with self._bound_file(self.current_file):
                for match in matches:
                    self.current_file = match.name
                    self.current_loop_value = match.name
                    for child in loop.items:
                        output += self.render(child)

        return output

    def _html(self, head: Optional[Head], body: Optional[list[BlockItem]]) -> str:
        start_level = self.indent_level
        output = "<!DOCTYPE html>\n<html>\n"

        with self._indented():
            output += self._line("<head>\n")
            with self._indented():
                output += self._line('<meta charset="utf-8">\n')
                if head is not None:
                    output += self._head(head)
            output += self._line("</head>\n")

            output += self._line("<body>\n")
            with self._indented():
                for item in body or []:
                    output += self.render(item)
            output += self._line("</body>\n")

        output += "</html>\n"
        assert self.indent_level == start_level, "unbalanced indentation in html block"
        return output

    def _head(self, head: Head) -> str:
        output = ""
        if head.title is not None:
            output += self._line(f"<title>{head.title}</title>\n")
        if head.icon is not None:
            output += self._line(f'<link rel="icon" href="{head.icon}" type="image/x-icon" />\n')
        for style in head.styles or []:
            output += self._line(f'<link rel="stylesheet" href="{style}" />\n')
        for script in head.scripts or []:
            output += self._line(f'<script src="{script}"></script>\n')
        return output

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _lookup(self, name: str) -> BlockItem:
        try:
            return self.blocks[name]
        except KeyError:
            raise BlockNotFoundError(name, self.current_file) from None

    def _sub(self, text: str) -> str:
        return substitute_special_values(text, self.current_loop_value)

    def _line(self, text: str) -> str:
        return self.indent * self.indent_level + text

    @contextmanager
    def _indented(self) -> Iterator[None]:
        self.indent_level += 1
        try:
            yield
        finally:
            self.indent_level -= 1

    @contextmanager
    def _bound_file(self, name: str) -> Iterator[None]:
        previous = self.current_file
        self.current_file = name
        try:
            yield
        finally:
            self.current_file = previous
