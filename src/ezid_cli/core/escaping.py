"""Percent-style escaping for the characters ANVL reserves.

Only ``%``, ``:``, LF and CR are escaped.  This is deliberately much
narrower than URL quoting: everything else, including spaces and
non-ASCII text, passes through untouched.

Known quirk: :func:`decode` turns ``+`` into a space before expanding
``%XX`` escapes, while :func:`encode` never produces ``+``.  A literal
``+`` therefore does not survive a decode.  Registry data relies on
this convention, so it is kept as-is.

``%XX`` runs are decoded as UTF-8.  A run that is not valid UTF-8, such
as a lone ``%E9``, becomes U+FFFD rather than the raw byte, so decoded
values are always printable text.
"""

from __future__ import annotations

import re
from urllib.parse import unquote_plus

_RESERVED = re.compile(r"[%:\n\r]")


def _escape_char(match: re.Match[str]) -> str:
    return f"%{ord(match.group()):02X}"


def encode(text: str) -> str:
    """Escape ANVL delimiters in *text* as uppercase ``%XX`` sequences."""
    return _RESERVED.sub(_escape_char, text)


def decode(text: str) -> str:
    """Expand ``+`` to a space, then replace every ``%XX`` escape."""
    return unquote_plus(text, encoding="utf-8", errors="replace")
