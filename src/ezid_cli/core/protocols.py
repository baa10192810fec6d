"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
The identifier service only sees :class:`HttpClient`; the requests
adapter lives in :mod:`ezid_cli.infra`.
"""

from __future__ import annotations

from typing import Protocol

from ezid_cli.core.models import HttpResponse


class HttpClient(Protocol):
    """Contract for the registry transport.

    Any object that implements :meth:`request` with the correct
    signature satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def request(
        self,
        method: str,
        url: str,
        body: str | None = None,
        *,
        auth: tuple[str, str] | None = None,
    ) -> HttpResponse:
        """Perform one HTTP exchange and return its status and body.

        Parameters
        ----------
        method:
            HTTP verb (``GET``, ``POST``, ``PUT``, ``DELETE``).
        url:
            Absolute request URL.
        body:
            ANVL request body, sent as ``text/plain; charset=UTF-8``.
        auth:
            Optional ``(username, password)`` for HTTP basic auth.

        Non-2xx statuses are returned, not raised; the caller inspects
        the body.

        Raises
        ------
        TransportError
            When the registry cannot be reached.
        """
        ...  # pragma: no cover

    def clear_session(self) -> None:
        """Forget any stored session credentials."""
        ...  # pragma: no cover
