"""Infrastructure: on-disk persistence of registry session cookies.

The registry hands out a session cookie on ``/login``; keeping it in a
small JSON file lets later invocations reuse the session without
re-sending credentials.

Rules
-----
* Only cookie name/value pairs are stored, never passwords.
* The file is created with owner-only permissions.
* No ``print()``; callers handle user-facing output.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from ezid_cli.exceptions import EzidError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionStore:
    """Load, save and clear the cookie jar kept at *path*."""

    path: Path

    def load(self) -> dict[str, str]:
        """Return stored cookies, or an empty dict when none are saved."""
        if not self.path.is_file():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(key): str(value) for key, value in data.items()}

    def save(self, cookies: dict[str, str]) -> None:
        """Write *cookies* to disk, replacing any previous session."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(cookies, indent=2), encoding="utf-8")
            os.chmod(self.path, 0o600)
        except OSError as exc:
            raise EzidError(
                f"Cannot write session file {self.path}: {exc}",
                hint="Set EZID_SESSION_FILE or --session-file to a writable path.",
            ) from exc
        logger.debug("Saved %d session cookie(s) to %s", len(cookies), self.path)

    def clear(self) -> None:
        """Remove the session file if it exists."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            raise EzidError(f"Cannot remove session file {self.path}: {exc}") from exc
