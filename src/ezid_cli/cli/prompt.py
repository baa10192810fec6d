"""Interactive credential prompt for ``ezid login``.

Only used when no password is configured.  questionary is imported
lazily so the rest of the CLI works without it.
"""

from __future__ import annotations

from typing import Any

from ezid_cli.exceptions import EnvironmentError, UsageError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
            hint="Or set EZID_PASSWORD to skip the prompt.",
        ) from exc
    return questionary


def prompt_credentials(username: str | None) -> tuple[str, str]:
    """Ask for whichever of username and password is missing.

    Raises
    ------
    KeyboardInterrupt
        If the user presses Ctrl+C during the prompt.
    UsageError
        If the user cancels a prompt or enters an empty value.
    """
    questionary = _import_questionary()

    if not username:
        username = questionary.text("Registry username:").ask()
        if not username:
            raise UsageError("No username given.")

    password: str | None = questionary.password(f"Password for {username}:").ask()
    if not password:
        raise UsageError("No password given.")
    return username, password
