"""Tests for record rendering (cli/output.py)."""

from __future__ import annotations

import io
import json

from ezid_cli.cli.output import OutputOptions, RecordWriter
from ezid_cli.core.models import AnvlRecord


def _render(options: OutputOptions, *records: dict[str, str]) -> str:
    stream = io.StringIO()
    writer = RecordWriter(options, stream)
    for record in records:
        writer.write(record)
    return stream.getvalue()


class TestOutputOptions:
    def test_from_flags_parses_columns(self) -> None:
        options = OutputOptions.from_flags(csv="who:what", header=True)
        assert options.columns == ("who", "what")
        assert options.header is True

    def test_no_csv_means_no_columns(self) -> None:
        assert OutputOptions.from_flags().columns == ()


class TestAnvlOutput:
    def test_records_separated_by_blank_line(self) -> None:
        text = _render(OutputOptions(), {"who": "Quinn"}, {"who": "Mighty"})
        assert text == "who: Quinn\n\nwho: Mighty\n"

    def test_ark_fallback_added(self) -> None:
        text = _render(OutputOptions(ark="ark:/99999/fk4x"), {"who": "Quinn"})
        assert text == "who: Quinn\nark: ark%3A/99999/fk4x\n"


class TestCsvOutput:
    def test_header_written_once(self) -> None:
        options = OutputOptions(columns=("who", "what"), header=True)
        text = _render(
            options,
            {"who": "Quinn", "what": "The Eskimo, really"},
            {"who": "Mighty"},
        )
        assert text == 'who,what\nQuinn,"The Eskimo, really"\nMighty,\n'

    def test_without_header(self) -> None:
        text = _render(OutputOptions(columns=("who",)), {"who": "Quinn"})
        assert text == "Quinn\n"

    def test_ark_column_uses_fallback(self) -> None:
        options = OutputOptions(columns=("ark", "who"), ark="ark:/99999/fk4x")
        assert _render(options, {"who": "Quinn"}) == "ark:/99999/fk4x,Quinn\n"

    def test_csv_wins_over_array(self) -> None:
        options = OutputOptions(columns=("who",), array=True)
        assert _render(options, {"who": "Quinn"}) == "Quinn\n"


class TestArrayOutput:
    def test_one_json_object_per_record(self) -> None:
        text = _render(OutputOptions(array=True), {"who": "Quinn"}, {"who": "Café"})
        lines = text.splitlines()
        assert [json.loads(line) for line in lines] == [{"who": "Quinn"}, {"who": "Café"}]


class TestWriteLine:
    def test_bare_line(self) -> None:
        stream = io.StringIO()
        RecordWriter(OutputOptions(), stream).write_line("ark:/99999/fk4x")
        assert stream.getvalue() == "ark:/99999/fk4x\n"

    def test_anvl_record_accepted(self) -> None:
        assert _render(OutputOptions(), AnvlRecord({"a": "1"})) == "a: 1\n"
