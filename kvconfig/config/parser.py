"""Line parsing for ``KEY = VALUE`` configuration files.

Rules applied to every line:
- surrounding whitespace is trimmed
- the line is split on runs of ``=``; the first segment is the key, the second
  the value, anything after a second ``=`` is dropped
- the key is trimmed and upper-cased and must begin with ``A``-``Z``
- the value is cut at the first ``#`` and trimmed
"""

import re

from dataclasses import dataclass
from typing import Optional

from kvconfig.utils.constants import (
    COMMENT_MARKER,
    KEY_FIRST_CHARS,
    KEY_VALUE_SEPARATOR,
    SKIP_EMPTY_KEY,
    SKIP_INVALID_KEY,
    SKIP_NO_SEPARATOR,
)


# Adjacent separators collapse into one
_SEPARATOR_RUN = re.compile(re.escape(KEY_VALUE_SEPARATOR) + "+")


@dataclass(frozen=True)
class ParsedLine:
    """Outcome of parsing a single line."""

    key: str = ""
    value: str = ""
    reason: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.reason is None


def strip_comment(value: str, legacy_comment_boundary: bool = False) -> str:
    """Remove a trailing ``#`` comment from ``value``.

    In legacy mode the character right before ``#`` goes too, and a value that
    starts with ``#`` is returned untouched. Files written for older readers
    rely on both.
    """
    pos = value.find(COMMENT_MARKER)
    if pos == -1:
        return value
    if not legacy_comment_boundary:
        return value[:pos]
    if pos == 0:
        return value
    return value[: pos - 1]


def parse_line(line: str, legacy_comment_boundary: bool = False) -> ParsedLine:
    """Parse one line into a key/value pair or a skip reason."""
    segments = _SEPARATOR_RUN.split(line.strip())
    if len(segments) < 2:
        return ParsedLine(reason=SKIP_NO_SEPARATOR)

    key = segments[0].strip().upper()
    value = strip_comment(segments[1], legacy_comment_boundary).strip()

    if not key:
        return ParsedLine(reason=SKIP_EMPTY_KEY)
    if key[0] not in KEY_FIRST_CHARS:
        return ParsedLine(key=key, reason=SKIP_INVALID_KEY)

    return ParsedLine(key=key, value=value)


def can_round_trip(value: str) -> bool:
    """Whether ``value`` reads back unchanged after being written.

    Values holding a separator, a comment marker, a line break or surrounding
    whitespace are cut or trimmed when the file is read again.
    """
    if any(c in value for c in (KEY_VALUE_SEPARATOR, COMMENT_MARKER, "\n", "\r")):
        return False
    return value == value.strip()
