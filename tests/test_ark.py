"""Tests for ARK resolution (core/ark.py).

The shoulder/blade cascade is tested branch by branch through
:func:`split_shoulder`, then end to end through :func:`resolve`.
"""

from __future__ import annotations

import pytest

from ezid_cli.core import ark
from ezid_cli.core.ark import ShoulderRule
from ezid_cli.core.models import Ark, ArkBase
from ezid_cli.exceptions import IdentifierError


# ---------------------------------------------------------------------------
# split_shoulder — one branch at a time
# ---------------------------------------------------------------------------

class TestSplitShoulder:
    def test_explicit_shoulder_when_naan_given(self, base: ArkBase) -> None:
        assert ark.split_shoulder("c8abc", base, naan_given=True) == (
            ShoulderRule.EXPLICIT,
            "c8",
            "abc",
        )

    def test_explicit_without_shoulder_pattern(self, base: ArkBase) -> None:
        assert ark.split_shoulder("12345", base, naan_given=True) == (
            ShoulderRule.EXPLICIT,
            "",
            "12345",
        )

    def test_base_shoulder_prefix(self, base: ArkBase) -> None:
        assert ark.split_shoulder("fk4qc17z06", base, naan_given=False) == (
            ShoulderRule.BASE,
            "fk4",
            "qc17z06",
        )

    def test_bare_blade(self, base: ArkBase) -> None:
        assert ark.split_shoulder("qc17z06", base, naan_given=False) == (
            ShoulderRule.BARE,
            "fk4",
            "qc17z06",
        )

    def test_bare_blade_that_looks_like_another_shoulder(self, base: ArkBase) -> None:
        rule, shoulder, blade = ark.split_shoulder("b5072", base, naan_given=False)
        assert rule is ShoulderRule.BARE
        assert (shoulder, blade) == ("fk4", "b5072")

    def test_shoulder_alone_is_a_bare_blade(self, base: ArkBase) -> None:
        rule, shoulder, blade = ark.split_shoulder("fk4", base, naan_given=False)
        assert rule is ShoulderRule.BARE
        assert (shoulder, blade) == ("fk4", "fk4")


# ---------------------------------------------------------------------------
# resolve
# ---------------------------------------------------------------------------

class TestResolve:
    def test_shoulder_relative(self, base: ArkBase) -> None:
        assert ark.resolve(base, "fk4qc17z06") == "ark:/99999/fk4qc17z06"

    def test_fully_qualified_unchanged(self, base: ArkBase) -> None:
        assert ark.resolve(base, "ark:/99999/fk4qc17z06") == "ark:/99999/fk4qc17z06"

    def test_bare_blade_gets_base_shoulder(self, base: ArkBase) -> None:
        assert ark.resolve(base, "qc17z06") == "ark:/99999/fk4qc17z06"

    def test_other_naan_and_shoulder_untouched(self, base: ArkBase) -> None:
        assert ark.resolve(base, "ark:/13030/c8abc") == "ark:/13030/c8abc"

    def test_naan_without_scheme(self, base: ArkBase) -> None:
        assert ark.resolve(base, "13030/c8abc") == "ark:/13030/c8abc"

    def test_scheme_without_slash(self, base: ArkBase) -> None:
        assert ark.resolve(base, "ark:99999/fk4qc17z06") == "ark:/99999/fk4qc17z06"

    def test_resolver_url_prefix_dropped(self, base: ArkBase) -> None:
        assert (
            ark.resolve(base, "https://n2t.net/ark:/99999/fk4qc17z06")
            == "ark:/99999/fk4qc17z06"
        )

    def test_extension_kept(self, base: ArkBase) -> None:
        assert ark.resolve(base, "qc17z06/page/1.jpg") == "ark:/99999/fk4qc17z06/page/1.jpg"

    def test_surrounding_whitespace_ignored(self, base: ArkBase) -> None:
        assert ark.resolve(base, "  qc17z06 \n") == "ark:/99999/fk4qc17z06"

    def test_different_base(self) -> None:
        other = ArkBase(naan="87287", shoulder="d7")
        assert ark.resolve(other, "q6bg") == "ark:/87287/d7q6bg"
        assert ark.resolve(other, "d7q6bg") == "ark:/87287/d7q6bg"

    def test_no_check_character_validation(self, base: ArkBase) -> None:
        assert ark.resolve(base, "qc17z0x") == "ark:/99999/fk4qc17z0x"


class TestResolveErrors:
    @pytest.mark.parametrize(
        "text",
        [
            "not-an-ark!!",
            "",
            "ark:/",
            "ark:/99999/",
            "qc17 z06",
            "qc17z06/",
        ],
    )
    def test_rejected(self, base: ArkBase, text: str) -> None:
        with pytest.raises(IdentifierError):
            ark.resolve(base, text)

    def test_error_carries_input(self, base: ArkBase) -> None:
        with pytest.raises(IdentifierError) as exc_info:
            ark.resolve(base, "not-an-ark!!")
        assert exc_info.value.identifier == "not-an-ark!!"
        assert exc_info.value.hint is not None


# ---------------------------------------------------------------------------
# parse — structural parts
# ---------------------------------------------------------------------------

class TestParse:
    def test_parts_of_bare_blade(self, base: ArkBase) -> None:
        parsed = ark.parse(base, "qc17z06/x")
        assert parsed == Ark(
            naan="99999",
            shoulder="fk4",
            blade="qc17z06",
            extension="/x",
        )
        assert parsed.tip == "6"
        assert parsed.identifier == "ark:/99999/fk4qc17z06"

    def test_parts_of_foreign_identifier(self, base: ArkBase) -> None:
        parsed = ark.parse(base, "ark:/13030/c8abc")
        assert (parsed.naan, parsed.shoulder, parsed.blade) == ("13030", "c8", "abc")
        assert parsed.extension == ""
