"""ARK identifier resolution against a configured base.

Users may type a fully-qualified identifier (``ark:/99999/fk4qc17z06``),
a shoulder-relative one (``fk4qc17z06``) or a bare blade
(``qc17z06``).  :func:`resolve` expands all three against an
:class:`~ezid_cli.core.models.ArkBase`.

The shoulder/blade split follows a fixed precedence, exposed as
:class:`ShoulderRule` so each branch can be tested on its own:

1. ``EXPLICIT``: the input carried its own NAAN, so its shoulder is
   taken from the input as-is (letters followed by one digit, possibly
   empty).
2. ``BASE``: the input starts with the configured shoulder.
3. ``BARE``: the whole input is a blade under the configured shoulder.

No check-character validation is performed on the tip.
"""

from __future__ import annotations

import enum
import re

from ezid_cli.core.models import Ark, ArkBase
from ezid_cli.exceptions import IdentifierError

_IDENTIFIER = re.compile(
    r"^(?:https?://[^/]+/)?"
    r"(?P<scheme>ark:/?)?"
    r"(?:(?P<naan>\d{5})/)?"
    r"(?P<body>[A-Za-z0-9]+)"
    r"(?P<extension>/.+)?$"
)
_SHOULDER = re.compile(r"^[A-Za-z]+[0-9]")


class ShoulderRule(enum.Enum):
    """Which branch of the defaulting cascade produced a split."""

    EXPLICIT = "explicit"
    BASE = "base"
    BARE = "bare"


def split_shoulder(
    body: str,
    base: ArkBase,
    *,
    naan_given: bool,
) -> tuple[ShoulderRule, str, str]:
    """Split *body* into ``(rule, shoulder, blade)``.

    *body* is the alphanumeric run after any scheme and NAAN.
    """
    if naan_given:
        match = _SHOULDER.match(body)
        if match is not None and match.end() < len(body):
            return ShoulderRule.EXPLICIT, match.group(), body[match.end():]
        return ShoulderRule.EXPLICIT, "", body

    if body.startswith(base.shoulder) and len(body) > len(base.shoulder):
        return ShoulderRule.BASE, base.shoulder, body[len(base.shoulder):]

    return ShoulderRule.BARE, base.shoulder, body


def parse(base: ArkBase, text: str) -> Ark:
    """Resolve *text* into an :class:`~ezid_cli.core.models.Ark`.

    Raises
    ------
    IdentifierError
        If *text* does not match the identifier grammar.
    """
    match = _IDENTIFIER.match(text.strip())
    if match is None:
        raise IdentifierError(
            text,
            hint=f"Expected a blade like qc17z06 or an identifier like {base.base}qc17z06",
        )

    naan = match.group("naan")
    _rule, shoulder, blade = split_shoulder(
        match.group("body"),
        base,
        naan_given=naan is not None,
    )
    return Ark(
        naan=naan if naan is not None else base.naan,
        shoulder=shoulder,
        blade=blade,
        extension=match.group("extension") or "",
        scheme=base.scheme,
    )


def resolve(base: ArkBase, text: str) -> str:
    """Return the fully-qualified identifier for *text*, extension included."""
    return str(parse(base, text))
