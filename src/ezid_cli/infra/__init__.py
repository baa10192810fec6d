"""Infrastructure layer — external system integration.

This layer wraps all interaction with the registry over HTTP and with
the local session file.  Every raw third-party exception must be caught
here and re-raised as an :class:`~ezid_cli.exceptions.EzidError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from ezid_cli.infra.requests_client import RequestsHttpClient
from ezid_cli.infra.session_store import SessionStore

__all__: list[str] = [
    "RequestsHttpClient",
    "SessionStore",
]
