"""Domain models for ezid-cli.

Identifier models are **frozen** dataclasses: immutable value objects
with no behaviour beyond data access and string assembly.
:class:`AnvlRecord` is a read-only mapping built fresh for every decode
and never mutated afterwards; "changes" produce a new record.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from ezid_cli.exceptions import ConfigError

ARK_SCHEME: str = "ark:/"
"""Literal scheme prefix of every fully-qualified identifier."""

ARK_KEY: str = "ark"
"""Reserved record element holding the associated identifier."""

SUCCESS_KEY: str = "success"
"""Registry element signalling a successful operation."""

ERROR_KEY: str = "error"
"""Registry element carrying a failure message."""


# ---------------------------------------------------------------------------
# Base configuration
# ---------------------------------------------------------------------------

_BASE_PATTERN = re.compile(r"^(?:ark:/)?(?P<naan>\d{5})/(?P<shoulder>[A-Za-z0-9]+)$")


@dataclass(frozen=True, slots=True)
class ArkBase:
    """The configured NAAN + shoulder that shorthand identifiers expand against."""

    naan: str
    """Five-digit naming authority number (e.g. ``99999``)."""

    shoulder: str
    """Minting shoulder within the NAAN (e.g. ``fk4``)."""

    scheme: str = ARK_SCHEME

    @property
    def base(self) -> str:
        """The full base string, e.g. ``ark:/99999/fk4``."""
        return f"{self.scheme}{self.naan}/{self.shoulder}"

    @classmethod
    def parse(cls, text: str) -> ArkBase:
        """Build an :class:`ArkBase` from ``[ark:/]NNNNN/shoulder``.

        Raises
        ------
        ConfigError
            If *text* is not a 5-digit NAAN followed by an alphanumeric
            shoulder.
        """
        match = _BASE_PATTERN.match(text.strip())
        if match is None:
            raise ConfigError(
                f"Invalid base: {text!r}",
                hint="Use the form ark:/NNNNN/shoulder, e.g. ark:/99999/fk4",
            )
        return cls(naan=match.group("naan"), shoulder=match.group("shoulder"))

    def __str__(self) -> str:
        return self.base


# ---------------------------------------------------------------------------
# Identifier
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Ark:
    """A fully-resolved ARK, split into its structural parts."""

    naan: str
    shoulder: str
    blade: str
    extension: str = ""
    """Trailing path after the identifier (``/...``) or empty."""

    scheme: str = ARK_SCHEME

    @property
    def tip(self) -> str:
        """Last character of the blade.  Never validated as a check character."""
        return self.blade[-1:]

    @property
    def identifier(self) -> str:
        """``scheme + naan + shoulder + blade`` without the extension."""
        return f"{self.scheme}{self.naan}/{self.shoulder}{self.blade}"

    def __str__(self) -> str:
        return self.identifier + self.extension


# ---------------------------------------------------------------------------
# ANVL record
# ---------------------------------------------------------------------------

class AnvlRecord(Mapping[str, str]):
    """Read-only mapping of decoded element names to decoded values.

    Insertion order is preserved so output is deterministic, but it
    carries no meaning.  Equality follows :class:`~collections.abc.Mapping`,
    so a record compares equal to a plain ``dict`` with the same items.
    """

    __slots__ = ("_elements",)

    def __init__(
        self,
        elements: Mapping[str, str] | Iterable[tuple[str, str]] = (),
    ) -> None:
        self._elements: Mapping[str, str] = MappingProxyType(dict(elements))

    def __getitem__(self, key: str) -> str:
        return self._elements[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return f"AnvlRecord({dict(self._elements)!r})"

    @property
    def ark(self) -> str | None:
        """The associated identifier, if the record carries one."""
        return self._elements.get(ARK_KEY)

    def with_fallback(self, key: str, value: str) -> AnvlRecord:
        """Return a record where *key* is set only if it was absent."""
        if key in self._elements:
            return self
        return AnvlRecord({**self._elements, key: value})

    def merged(self, other: Mapping[str, str]) -> AnvlRecord:
        """Return a new record with *other*'s elements layered on top."""
        return AnvlRecord({**self._elements, **other})


# ---------------------------------------------------------------------------
# Transport result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Status and body returned by an :class:`HttpClient`."""

    status: int
    body: str
