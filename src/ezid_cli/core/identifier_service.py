"""Core identifier service — registry operations over an injected transport.

This is the central service class consumed by the CLI layer.  It
depends on an :class:`~ezid_cli.core.protocols.HttpClient` injected at
construction time (dependency inversion), keeping the core free of
any network imports.

Guarantees
----------
* Identifiers are resolved against the configured base before any
  request is made.
* Every response body is decoded as ANVL and must carry ``success``.
* Only :class:`~ezid_cli.exceptions.EzidError` subclasses escape.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from urllib.parse import quote

from ezid_cli.core import anvl, ark
from ezid_cli.core.models import (
    ARK_KEY,
    ERROR_KEY,
    SUCCESS_KEY,
    AnvlRecord,
    ArkBase,
    HttpResponse,
)
from ezid_cli.core.protocols import HttpClient
from ezid_cli.exceptions import EzidError, ParseError, RegistryError, TransportError

logger = logging.getLogger(__name__)

TARGET_KEY: str = "_target"


class IdentifierService:
    """Stateless service that mints, fetches, updates and deletes identifiers.

    Parameters
    ----------
    client:
        Any object satisfying the :class:`HttpClient` protocol.
    base:
        The configured base identifier used for defaulting and minting.
    url:
        Registry root URL, e.g. ``https://ezid.cdlib.org``.
    """

    def __init__(self, client: HttpClient, base: ArkBase, url: str) -> None:
        self._client: HttpClient = client
        self._base: ArkBase = base
        self._url: str = url.rstrip("/")

    @property
    def base(self) -> ArkBase:
        return self._base

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def qualify(self, identifier: str) -> str:
        """Return the fully-qualified form of *identifier*."""
        return ark.resolve(self._base, identifier)

    def get(self, identifier: str) -> AnvlRecord:
        """Fetch the metadata of *identifier*.

        Raises
        ------
        IdentifierError
            If *identifier* is not a valid ARK.
        RegistryError
            If the registry does not report success.
        """
        qualified = self.qualify(identifier)
        response = self._send("GET", self._id_url(qualified))
        return self._checked(response, qualified=qualified)

    def mint(
        self,
        record: Mapping[str, str],
        *,
        proxy: str | None = None,
    ) -> AnvlRecord:
        """Mint a new identifier on the configured shoulder.

        The returned record holds the submitted metadata, the registry's
        response elements and the new identifier under ``ark``.  With
        *proxy*, a ``_target`` of ``proxy + ark`` is set on the new
        identifier unless the caller supplied one.
        """
        url = f"{self._url}/shoulder/{quote(self._base.base, safe=':/')}"
        response = self._send("POST", url, anvl.encode(record))
        result = self._checked(response)
        minted = self._minted_identifier(result, response)
        logger.info("Minted %s", minted)

        merged = AnvlRecord(record).merged(result).with_fallback(ARK_KEY, minted)
        if proxy and TARGET_KEY not in record:
            target = {TARGET_KEY: proxy + minted}
            try:
                self.update(minted, target)
            except EzidError as exc:
                logger.warning("Minted %s but could not set %s", minted, TARGET_KEY)
                raise RegistryError(
                    f"Minted {minted} but setting {TARGET_KEY} failed: {exc}",
                    body=getattr(exc, "body", ""),
                    status=getattr(exc, "status", None),
                    hint=f"Set it with: ezid update {minted} {TARGET_KEY}:{target[TARGET_KEY]}",
                ) from exc
            merged = merged.merged(target)
        return merged

    def create(self, identifier: str, record: Mapping[str, str]) -> AnvlRecord:
        """Create *identifier* with an explicit blade (HTTP ``PUT``)."""
        qualified = self.qualify(identifier)
        response = self._send("PUT", self._id_url(qualified), anvl.encode(record))
        result = self._checked(response, qualified=qualified)
        return AnvlRecord(record).merged(result)

    def update(self, identifier: str, record: Mapping[str, str]) -> AnvlRecord:
        """Replace the given metadata elements of *identifier*."""
        qualified = self.qualify(identifier)
        response = self._send("POST", self._id_url(qualified), anvl.encode(record))
        result = self._checked(response, qualified=qualified)
        return AnvlRecord(record).merged(result)

    def delete(self, identifier: str) -> AnvlRecord:
        """Delete *identifier*.  Only reserved identifiers can be deleted."""
        qualified = self.qualify(identifier)
        response = self._send("DELETE", self._id_url(qualified))
        return self._checked(response, qualified=qualified)

    def login(self, username: str, password: str) -> AnvlRecord:
        """Open a registry session; the transport keeps the cookie."""
        response = self._send("GET", f"{self._url}/login", auth=(username, password))
        return self._checked(response)

    def logout(self) -> AnvlRecord:
        """Close the registry session and forget the stored cookie."""
        try:
            response = self._send("GET", f"{self._url}/logout")
            return self._checked(response)
        finally:
            self._client.clear_session()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _id_url(self, qualified: str) -> str:
        return f"{self._url}/id/{quote(qualified, safe=':/')}"

    def _send(
        self,
        method: str,
        url: str,
        body: str | None = None,
        *,
        auth: tuple[str, str] | None = None,
    ) -> HttpResponse:
        """Call the transport and ensure only our exceptions escape."""
        try:
            return self._client.request(method, url, body, auth=auth)
        except EzidError:
            raise
        except Exception as exc:
            raise TransportError(f"Unexpected transport error: {exc}") from exc

    @staticmethod
    def _checked(response: HttpResponse, *, qualified: str | None = None) -> AnvlRecord:
        """Decode *response* and require a ``success`` element."""
        try:
            record = anvl.decode(response.body, ark=qualified)
        except ParseError as exc:
            raise RegistryError(
                f"Unreadable registry response (HTTP {response.status}): {exc}",
                body=response.body,
                status=response.status,
            ) from exc

        if SUCCESS_KEY not in record:
            message = record.get(ERROR_KEY) or f"no success status (HTTP {response.status})"
            logger.warning("Registry failure: %s", message)
            raise RegistryError(
                f"Registry error: {message}",
                body=response.body,
                status=response.status,
            )
        return record

    @staticmethod
    def _minted_identifier(result: AnvlRecord, response: HttpResponse) -> str:
        """Extract the new identifier from ``success: ark:/... | ...``."""
        minted = result[SUCCESS_KEY].split("|")[0].strip()
        if not minted:
            raise RegistryError(
                "Registry reported success without an identifier.",
                body=response.body,
                status=response.status,
            )
        return minted
