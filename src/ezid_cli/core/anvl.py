"""ANVL (A Name-Value Language) codec.

Wire format
-----------
* One ``key: value`` element per line.
* Lines starting with spaces or tabs continue the previous value; the
  leading whitespace collapses to a single space.
* Lines starting with ``#`` are comments.  Empty lines are ignored.
  A line holding only spaces or tabs is a continuation with no text:
  it adds a single space to the open value, and with no open value
  it is a bad continuation.
* ``%``, ``:``, CR and LF inside values are ``%XX`` escaped
  (see :mod:`ezid_cli.core.escaping`).

Decoding is all-or-nothing: a malformed line raises
:class:`~ezid_cli.exceptions.ParseError` and no partial record escapes.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from ezid_cli.core import escaping
from ezid_cli.core.models import ARK_KEY, AnvlRecord
from ezid_cli.exceptions import ParseError

logger = logging.getLogger(__name__)

_COMMENT = re.compile(r"^#")
_CONTINUATION = re.compile(r"^[ \t]+(.*)$")
_ELEMENT = re.compile(r"^([^:]+):[ \t]*(.*)$")


def decode(text: str | bytes, *, ark: str | None = None) -> AnvlRecord:
    """Parse ANVL *text* into an :class:`AnvlRecord`.

    Parameters
    ----------
    text:
        ANVL text.  ``bytes`` are decoded as UTF-8; invalid UTF-8 is
        a :class:`~ezid_cli.exceptions.ParseError`.
    ark:
        Optional fallback identifier stored under the reserved ``ark``
        element.  An ``ark`` element present in *text* always wins.

    Raises
    ------
    ParseError
        On invalid UTF-8 input, on a continuation line with no open
        element, or on any non-empty line that is neither a comment, a
        continuation nor a ``key: value`` element.
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(
                f"invalid UTF-8 at byte {exc.start}: {exc.reason}",
                hint="ANVL text must be UTF-8 encoded.",
            ) from exc

    elements: dict[str, str] = {}
    key: str | None = None
    parts: list[str] = []

    for number, raw_line in enumerate(text.split("\n"), start=1):
        line = raw_line.rstrip("\r")

        if not line or _COMMENT.match(line):
            continue

        continuation = _CONTINUATION.match(line)
        if continuation is not None:
            if key is None:
                raise ParseError(
                    "bad continuation: no element is open",
                    line_number=number,
                    line=line,
                )
            parts.append(" " + continuation.group(1))
            continue

        element = _ELEMENT.match(line)
        if element is None:
            raise ParseError(
                f"unknown line: {line!r}",
                line_number=number,
                line=line,
                hint="Every element must look like 'name: value'.",
            )

        if key is not None:
            elements[key] = escaping.decode("".join(parts))
        key = element.group(1).strip()
        parts = [element.group(2)]

    if key is not None:
        elements[key] = escaping.decode("".join(parts))

    record = AnvlRecord(elements)
    if ark is not None:
        record = record.with_fallback(ARK_KEY, ark)
    logger.debug("Decoded ANVL record with %d element(s)", len(record))
    return record


def encode(record: Mapping[str, str]) -> str:
    """Serialise *record* as ANVL, one ``key: value`` line per element.

    Values are never folded onto continuation lines; embedded newlines
    are escaped instead.
    """
    lines = [
        f"{escaping.encode(key)}: {escaping.encode(value)}"
        for key, value in record.items()
    ]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
