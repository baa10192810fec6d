"""Record rendering for command output.

Every record-producing command funnels through :class:`RecordWriter`,
which picks one of three formats:

* ANVL (default): records separated by a blank line.
* CSV (``--csv=col:col``): one row per record, optional header row.
* JSON (``--array``): one object per line.

Output goes to stdout only; diagnostics never mix in.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TextIO

from ezid_cli.core import anvl, csv_row
from ezid_cli.core.models import ARK_KEY, AnvlRecord


@dataclass(frozen=True, slots=True)
class OutputOptions:
    """Format flags shared by record-producing commands."""

    columns: tuple[str, ...] = ()
    """CSV columns; empty means CSV output is off."""

    header: bool = False
    array: bool = False
    ark: str | None = None
    """Fallback value for the ``ark`` element."""

    @classmethod
    def from_flags(
        cls,
        *,
        csv: str | None = None,
        header: bool = False,
        array: bool = False,
        ark: str | None = None,
    ) -> OutputOptions:
        columns = tuple(csv_row.parse_columns(csv)) if csv else ()
        return cls(columns=columns, header=header, array=array, ark=ark)


@dataclass(slots=True)
class RecordWriter:
    """Write records to *stream* according to *options*."""

    options: OutputOptions
    stream: TextIO = field(default_factory=lambda: sys.stdout)
    _count: int = 0

    def write(self, record: Mapping[str, str]) -> None:
        if not isinstance(record, AnvlRecord):
            record = AnvlRecord(record)
        if self.options.ark is not None:
            record = record.with_fallback(ARK_KEY, self.options.ark)

        if self.options.columns:
            if self.options.header and self._count == 0:
                self.stream.write(csv_row.header(self.options.columns) + "\n")
            self.stream.write(csv_row.project(record, self.options.columns) + "\n")
        elif self.options.array:
            self.stream.write(json.dumps(dict(record), ensure_ascii=False) + "\n")
        else:
            if self._count:
                self.stream.write("\n")
            self.stream.write(anvl.encode(record))
        self._count += 1

    def write_line(self, text: str) -> None:
        """Write a bare line, e.g. a qualified identifier."""
        self.stream.write(text + "\n")
