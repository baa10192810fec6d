"""Project ANVL records onto comma-separated rows.

Quoting follows RFC 4180 only as far as needed: a field is wrapped in
double quotes (with inner quotes doubled) when it contains a comma, a
double quote or a newline, and is emitted raw otherwise.  Rows carry
no trailing newline.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

_NEEDS_QUOTING: tuple[str, ...] = (",", '"', "\n")


def escape_field(value: str) -> str:
    """Quote *value* for CSV output when it contains a delimiter."""
    if any(char in value for char in _NEEDS_QUOTING):
        return '"' + value.replace('"', '""') + '"'
    return value


def parse_columns(spec: str) -> list[str]:
    """Split a ``col:col:col`` column specification into field names."""
    return [name for name in spec.split(":") if name]


def header(columns: Sequence[str]) -> str:
    """Return the header row: raw column names joined by commas."""
    return ",".join(columns)


def project(record: Mapping[str, str], columns: Sequence[str]) -> str:
    """Return one CSV row of *record*'s values for *columns*.

    Missing elements become empty fields.
    """
    return ",".join(escape_field(record.get(name, "")) for name in columns)
