"""Loop placeholder expansion for text-bearing block fields.

Two placeholders are recognised::

    $loop_value            the current loop value, verbatim
    $loop_value_filename   the file stem of the current loop value

A placeholder only matches when it is not preceded by a backslash and is
not followed by a word character, so ``$loop_value!`` expands while
``$loop_valuefoo`` does not. ``\\$loop_value`` is emitted as the literal
``$loop_value``.
"""

from __future__ import annotations

import re
from pathlib import PurePath

LOOP_VALUE = "$loop_value"
LOOP_VALUE_FILENAME = "$loop_value_filename"

_LOOP_VALUE_RE = re.compile(r"(?<!\\)\$loop_value(?!\w)", re.ASCII)
_LOOP_VALUE_FILENAME_RE = re.compile(r"(?<!\\)\$loop_value_filename(?!\w)", re.ASCII)


def file_stem(value: str) -> str:
    """Return *value*'s base name up to its last extension separator.

    ``"photo.final.jpg"`` gives ``"photo.final"``; an empty value gives ``""``.
    """
    return PurePath(value).stem


def substitute_special_values(text: str, loop_value: str) -> str:
    """Expand loop placeholders in *text* using *loop_value*."""
    if "$loop_value" not in text:
        return text

    stem = file_stem(loop_value)
    if stem:
        text = _LOOP_VALUE_FILENAME_RE.sub(lambda _: stem, text)
        text = text.replace("\\" + LOOP_VALUE_FILENAME, LOOP_VALUE_FILENAME)

    text = _LOOP_VALUE_RE.sub(lambda _: loop_value, text)
    return text.replace("\\" + LOOP_VALUE, LOOP_VALUE)
