"""Block schema, loader and interpreter."""

from .errors import (  # noqa: F401
    BlockblogError,
    BlockNotFoundError,
    BlockParseError,
    InvalidBlockError,
    OutputExistsError,
)
from .interpreter import BlockInterpreter  # noqa: F401
from .loader import load_block_definitions  # noqa: F401
from .models import BlockItem, parse_block_item  # noqa: F401
