"""Custom exception hierarchy for ezid-cli.

All exceptions that cross layer boundaries must inherit from
:class:`EzidError`.  Raw third-party exceptions (e.g. from requests)
must NEVER propagate beyond the infrastructure layer; they are
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
EzidError
├── ConfigError
├── ParseError
├── IdentifierError
├── UsageError
├── RegistryError
├── TransportError
└── EnvironmentError
"""

from __future__ import annotations


class EzidError(Exception):
    """Base exception for all ezid-cli errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Configuration ---------------------------------------------------------

class ConfigError(EzidError):
    """Raised when the base configuration (NAAN + shoulder) is invalid."""


# --- ANVL ------------------------------------------------------------------

class ParseError(EzidError):
    """Raised when ANVL text contains a malformed line.

    No partial record is ever returned alongside this error.
    """

    def __init__(
        self,
        message: str,
        *,
        line_number: int | None = None,
        line: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.line_number: int | None = line_number
        self.line: str | None = line


# --- Identifiers -----------------------------------------------------------

class IdentifierError(EzidError):
    """Raised when a string does not match the ARK identifier grammar."""

    def __init__(self, identifier: str, *, hint: str | None = None) -> None:
        super().__init__(f"Invalid identifier: {identifier!r}", hint=hint)
        self.identifier: str = identifier


# --- Command input ---------------------------------------------------------

class UsageError(EzidError):
    """Raised when command input (``key:value`` args, stdin JSON) is malformed."""


# --- Registry --------------------------------------------------------------

class RegistryError(EzidError):
    """Raised when the registry response lacks a success indicator.

    The raw response body is kept for diagnostics.
    """

    def __init__(
        self,
        message: str,
        *,
        body: str = "",
        status: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.body: str = body
        self.status: int | None = status


class TransportError(EzidError):
    """Raised when the registry cannot be reached at all."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(EzidError):
    """Raised when an optional runtime dependency is not available."""
