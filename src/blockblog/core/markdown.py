"""Markdown → HTML conversion shared by the interpreter and asset staging.

Uses *mistune 3.x* with its HTML renderer. Raw HTML inside the markdown
source is escaped.
"""

from __future__ import annotations

from typing import Callable

import mistune

MarkdownRenderer = Callable[[str], str]

_md = mistune.create_markdown(escape=True, plugins=["table", "strikethrough"])


def render_markdown(source: str) -> str:
    """Convert markdown *source* into an HTML fragment."""
    return _md(source)  # type: ignore[return-value]
