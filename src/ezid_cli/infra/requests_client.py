"""requests-backed implementation of :class:`~ezid_cli.core.protocols.HttpClient`.

This module is the **only** place in the codebase that imports
``requests``.  All requests exceptions are caught here and re-raised as
:class:`~ezid_cli.exceptions.TransportError`, so nothing raw escapes the
infrastructure boundary.
"""

from __future__ import annotations

import logging

import requests

from ezid_cli.core.models import HttpResponse
from ezid_cli.exceptions import TransportError
from ezid_cli.infra.session_store import SessionStore

logger = logging.getLogger(__name__)

CONTENT_TYPE: str = "text/plain; charset=UTF-8"


class RequestsHttpClient:
    """Concrete :class:`HttpClient` backed by a :class:`requests.Session`.

    Usage::

        client = RequestsHttpClient(SessionStore(Path("~/.ezid/session.json")))
        response = client.request("GET", "https://ezid.cdlib.org/id/ark:/99999/fk4x")

    Cookies set by the registry are written back to the session store
    after every exchange, so a ``login`` carries over to later runs.
    """

    def __init__(
        self,
        store: SessionStore | None = None,
        *,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._store: SessionStore | None = store
        self._timeout: float = timeout
        self._session: requests.Session = session if session is not None else self._new_session()
        if store is not None:
            self._session.cookies.update(store.load())

    @staticmethod
    def _new_session() -> requests.Session:
        session = requests.Session()
        session.headers.update({"Content-Type": CONTENT_TYPE, "Accept": "text/plain"})
        return session

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def request(
        self,
        method: str,
        url: str,
        body: str | None = None,
        *,
        auth: tuple[str, str] | None = None,
    ) -> HttpResponse:
        """Send one request and return the status and decoded body.

        Raises
        ------
        TransportError
            On connection failures, timeouts and other requests errors.
        """
        data = body.encode("utf-8") if body is not None else None
        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                data=data,
                auth=auth,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(
                f"{method} {url} failed: {exc}",
                hint="Check the registry URL and your network connection.",
            ) from exc

        logger.debug("%s %s -> HTTP %s", method, url, response.status_code)
        response.encoding = response.encoding or "utf-8"
        self._persist()
        return HttpResponse(status=response.status_code, body=response.text)

    def clear_session(self) -> None:
        """Drop in-memory cookies and delete the stored session."""
        self._session.cookies.clear()
        if self._store is not None:
            self._store.clear()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _persist(self) -> None:
        if self._store is None:
            return
        cookies = self._session.cookies.get_dict()
        if cookies:
            self._store.save(cookies)
