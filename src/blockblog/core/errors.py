"""Exceptions raised while loading and rendering block definitions."""

from __future__ import annotations


class BlockblogError(Exception):
    """Base class for every error raised by blockblog."""


class BlockNotFoundError(BlockblogError, KeyError):
    """A referenced block name is absent from the namespace."""

    def __init__(self, name: str, current_file: str = "") -> None:
        self.name = name
        self.current_file = current_file
        super().__init__(name)

    def __str__(self) -> str:
        if self.current_file:
            return f"Block {self.name} not found (while rendering {self.current_file})"
        return f"Block {self.name} not found"


class InvalidBlockError(BlockblogError, ValueError):
    """A block definition is structurally invalid."""


class BlockParseError(InvalidBlockError):
    """A definition file could not be turned into a block."""

    def __init__(self, file: str, message: str) -> None:
        self.file = file
        self.message = message
        super().__init__(f"Error parsing {file}: {message}")


class OutputExistsError(BlockblogError):
    """Safe mode refused to overwrite existing output."""
