"""Tests for the ANVL escaping codec (core/escaping.py)."""

from __future__ import annotations

import pytest

from ezid_cli.core import escaping


class TestEncode:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("a:b", "a%3Ab"),
            ("100%", "100%25"),
            ("line\nbreak", "line%0Abreak"),
            ("carriage\rreturn", "carriage%0Dreturn"),
            ("%:\n\r", "%25%3A%0A%0D"),
        ],
    )
    def test_reserved_characters_are_escaped(self, raw: str, expected: str) -> None:
        assert escaping.encode(raw) == expected

    def test_other_characters_pass_through(self) -> None:
        text = "hello world/?&=#+ é ü"
        assert escaping.encode(text) == text

    def test_hex_is_uppercase(self) -> None:
        assert escaping.encode("\n") == "%0A"

    def test_empty_string(self) -> None:
        assert escaping.encode("") == ""


class TestDecode:
    def test_escapes_expand(self) -> None:
        assert escaping.decode("a%3Ab%0Ac%25") == "a:b\nc%"

    def test_lowercase_hex_accepted(self) -> None:
        assert escaping.decode("a%3ab") == "a:b"

    def test_plus_becomes_space(self) -> None:
        assert escaping.decode("The+Eskimo") == "The Eskimo"

    def test_escaped_plus_survives(self) -> None:
        assert escaping.decode("1%2B1") == "1+1"

    def test_utf8_sequence(self) -> None:
        assert escaping.decode("caf%C3%A9") == "café"

    def test_invalid_utf8_escape_becomes_replacement_char(self) -> None:
        assert escaping.decode("caf%E9") == "caf\ufffd"

    def test_malformed_escape_left_alone(self) -> None:
        assert escaping.decode("100%zz") == "100%zz"


class TestRoundTrip:
    @pytest.mark.parametrize(
        "text",
        [
            "plain",
            "ark:/99999/fk4qc17z06",
            "50% off: today\nonly\r",
            "already %3A escaped",
            "",
        ],
    )
    def test_decode_inverts_encode(self, text: str) -> None:
        assert escaping.decode(escaping.encode(text)) == text

    def test_literal_plus_does_not_survive(self) -> None:
        """Known quirk: ``+`` is a space substitute on decode."""
        assert escaping.encode("1+1") == "1+1"
        assert escaping.decode(escaping.encode("1+1")) == "1 1"
