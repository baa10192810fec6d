"""Core / service layer — pure codecs and registry orchestration.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
"""

from ezid_cli.core.identifier_service import IdentifierService
from ezid_cli.core.models import AnvlRecord, Ark, ArkBase, HttpResponse
from ezid_cli.core.protocols import HttpClient

__all__: list[str] = [
    "AnvlRecord",
    "Ark",
    "ArkBase",
    "HttpClient",
    "HttpResponse",
    "IdentifierService",
]
