"""Pydantic models for parsed block definitions.

Every definition file holds one ``BlockItem``. In YAML the variants are
externally tagged: a single-key mapping naming the variant (``title: Hi``,
``block: {items: [...]}``) or a bare string for variants without fields
(``br``, ``$loop_value``). The tag is folded into a ``kind`` discriminator
before validation so the union below can be dispatched on exactly.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from .colors import LinkColor


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# Link styles
# ---------------------------------------------------------------------------

class ExplicitLinkStyle(_Node):
    """Inline link colors; rendering synthesises a CSS class for them."""
    kind: Literal["explicit"] = "explicit"
    underline: bool
    color: LinkColor
    visited_color: Optional[LinkColor] = None


class NamedLinkStyle(_Node):
    """Reference to an existing CSS class."""
    kind: Literal["style"] = "style"
    name: str


LinkStyle = Annotated[
    Union[ExplicitLinkStyle, NamedLinkStyle],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Block items
# ---------------------------------------------------------------------------

class Include(_Node):
    """Inline another named block."""
    kind: Literal["include"] = "include"
    name: str


class IncludeVerbose(_Node):
    """Include with a parameter list. ``params`` is accepted but unused."""
    kind: Literal["include_verbose"] = "include_verbose"
    path: str
    params: Optional[list[str]] = None


class Title(_Node):
    kind: Literal["title"] = "title"
    text: str


class Block(_Node):
    """Generic container element, ``<div>`` unless ``html_type`` says otherwise."""
    kind: Literal["block"] = "block"
    style: Optional[str] = None
    html_type: Optional[str] = None
    items: list[BlockItem]

    @field_validator("items", mode="before")
    @classmethod
    def _decode_items(cls, value: Any) -> Any:
        return _untag_many(value)


class Markdown(_Node):
    kind: Literal["markdown"] = "markdown"
    source: str


class Code(_Node):
    kind: Literal["code"] = "code"
    source: str


class Image(_Node):
    kind: Literal["image"] = "image"
    path: str
    alt: Optional[str] = None


class Text(_Node):
    """Raw text emitted without escaping."""
    kind: Literal["text"] = "text"
    raw: str


class Link(_Node):
    kind: Literal["link"] = "link"
    text: str
    url: str
    link_style: LinkStyle

    @field_validator("link_style", mode="before")
    @classmethod
    def _decode_link_style(cls, value: Any) -> Any:
        return _untag_link_style(value)


class Br(_Node):
    kind: Literal["br"] = "br"


class ForEach(_Node):
    """Repeat ``items`` once per literal value or per file matching ``pattern``."""
    kind: Literal["for_each"] = "for_each"
    values: Optional[list[str]] = None
    pattern: Optional[str] = None
    items: list[BlockItem]

    @field_validator("items", mode="before")
    @classmethod
    def _decode_items(cls, value: Any) -> Any:
        return _untag_many(value)


class LoopValue(_Node):
    kind: Literal["loop_value"] = "loop_value"


class LoopValueFileName(_Node):
    kind: Literal["loop_value_filename"] = "loop_value_filename"


class Head(_Node):
    """Document metadata emitted inside ``<head>``."""
    title: Optional[str] = None
    icon: Optional[str] = None
    styles: Optional[list[str]] = None
    scripts: Optional[list[str]] = None


class Html(_Node):
    """Full document skeleton."""
    kind: Literal["html"] = "html"
    head: Optional[Head] = None
    body: Optional[list[BlockItem]] = None

    @field_validator("body", mode="before")
    @classmethod
    def _decode_body(cls, value: Any) -> Any:
        if value is None:
            return None
        return _untag_many(value)


BlockItem = Annotated[
    Union[
        Include,
        IncludeVerbose,
        Title,
        Block,
        Markdown,
        Code,
        Image,
        Text,
        Link,
        Br,
        ForEach,
        LoopValue,
        LoopValueFileName,
        Html,
    ],
    Field(discriminator="kind"),
]

Block.model_rebuild()
ForEach.model_rebuild()
Html.model_rebuild()


# ---------------------------------------------------------------------------
# External tag decoding
# ---------------------------------------------------------------------------

# tag -> (kind, field receiving the scalar payload)
_SCALAR_TAGS: dict[str, tuple[str, str]] = {
    "include": ("include", "name"),
    "title": ("title", "text"),
    "markdown": ("markdown", "source"),
    "code": ("code", "source"),
    "text": ("text", "raw"),
}

_MAPPING_TAGS: dict[str, str] = {
    "include": "include_verbose",
    "block": "block",
    "image": "image",
    "link": "link",
    "$for_each": "for_each",
    "html": "html",
}

_BARE_TAGS: dict[str, str] = {
    "br": "br",
    "$loop_value": "loop_value",
    "$loop_value_filename": "loop_value_filename",
}


def _untag_block(value: Any) -> Any:
    """Convert an externally tagged YAML value into a ``kind``-tagged dict."""
    if isinstance(value, BaseModel):
        return value

    if isinstance(value, str):
        if value in _BARE_TAGS:
            return {"kind": _BARE_TAGS[value]}
        raise ValueError(f"unknown block item '{value}'")

    if not isinstance(value, dict):
        raise ValueError(f"expected a block item, got {type(value).__name__}")

    if "kind" in value:
        return value

    if len(value) != 1:
        keys = ", ".join(str(k) for k in value)
        raise ValueError(f"a block item must have exactly one tag, got: {keys}")

    ((tag, payload),) = value.items()

    if tag in _BARE_TAGS and payload is None:
        return {"kind": _BARE_TAGS[tag]}

    if isinstance(payload, dict):
        if tag not in _MAPPING_TAGS:
            raise ValueError(f"block item '{tag}' does not take a mapping")
        return {"kind": _MAPPING_TAGS[tag], **payload}

    if tag in _SCALAR_TAGS:
        kind, field = _SCALAR_TAGS[tag]
        return {"kind": kind, field: payload}

    raise ValueError(f"unknown block item '{tag}'")


def _untag_many(value: Any) -> Any:
    if not isinstance(value, list):
        return value
    return [_untag_block(v) for v in value]


def _untag_link_style(value: Any) -> Any:
    if isinstance(value, BaseModel) or not isinstance(value, dict) or "kind" in value:
        return value
    if len(value) != 1:
        raise ValueError("link_style must be either 'explicit' or 'style'")

    ((tag, payload),) = value.items()
    if tag == "style":
        return {"kind": "style", "name": payload}
    if tag == "explicit" and isinstance(payload, dict):
        return {"kind": "explicit", **payload}
    raise ValueError(f"unknown link style '{tag}'")


_BLOCK_ITEM_ADAPTER: TypeAdapter[Any] = TypeAdapter(BlockItem)


def parse_block_item(value: Any) -> BlockItem:
    """Validate a decoded YAML value as a ``BlockItem``.

    Raises ``ValueError`` (``pydantic.ValidationError`` included) when the
    value does not describe a block.
    """
    return _BLOCK_ITEM_ADAPTER.validate_python(_untag_block(value))
