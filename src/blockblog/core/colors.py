"""Color value types used by explicitly styled links.

A ``Color`` serialises to lowercase ``#rrggbb``. When read from a
definition file it accepts either hex notation (``#ff00ff`` or
``0xff00ff``) or a ``{r, g, b}`` mapping.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

_HEX_DIGITS_RE = re.compile(r"[0-9a-fA-F]{6}")


class Color(BaseModel):
    """An RGB color with three 8-bit channels."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#rrggbb`` or ``0xrrggbb``.

        Raises ``ValueError`` for anything else.
        """
        if value.startswith("0x") and len(value) == 8:
            digits = value[2:]
        elif value.startswith("#") and len(value) == 7:
            digits = value[1:]
        else:
            digits = ""

        if not _HEX_DIGITS_RE.fullmatch(digits):
            raise ValueError(
                f"failed to parse rgb color {value}; expected hex color like #ff00ff"
            )

        packed = int(digits, 16)

        return cls(r=(packed >> 16) & 0xFF, g=(packed >> 8) & 0xFF, b=packed & 0xFF)

    @model_validator(mode="before")
    @classmethod
    def _accept_hex(cls, data: Any) -> Any:
        if isinstance(data, str):
            parsed = cls.from_hex(data)
            return {"r": parsed.r, "g": parsed.g, "b": parsed.b}
        return data

    @model_serializer
    def _as_hex(self) -> str:
        return self.hex

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def __str__(self) -> str:
        return self.hex


class LinkColor(BaseModel):
    """Normal/hover color pair for a link. Hover falls back to normal."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    normal: Color
    hover: Optional[Color] = None

    @property
    def hover_or_normal(self) -> Color:
        return self.hover if self.hover is not None else self.normal

    def __str__(self) -> str:
        return f"{{ normal: {self.normal}, hover: {self.hover_or_normal} }}"
