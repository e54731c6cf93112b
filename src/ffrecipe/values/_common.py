"""Shared helpers for value parsers."""

from __future__ import annotations

import re
from enum import Enum
from typing import TypeVar

from ffrecipe.exceptions import ParseError

E = TypeVar("E", bound=Enum)

HEX_COLOR_RE = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)


def normalize(raw: str) -> str:
    """Trim and lowercase a raw parameter string."""
    return raw.strip().lower()


def lookup_alias(
    raw: str,
    aliases: dict[str, E],
    what: str,
    hint: str,
) -> E:
    """Resolve a keyword to an enum member through an alias table.

    Args:
        raw: User supplied text.
        aliases: Mapping of lowercase keyword to enum member.
        what: Noun used in the error message (e.g. "quality preset").
        hint: Accepted shapes shown to the user on failure.

    Returns:
        The matching enum member.

    Raises:
        ParseError: If the keyword is unknown.
    """
    try:
        return aliases[normalize(raw)]
    except KeyError:
        raise ParseError(f"Invalid {what}: {raw}", raw=raw, hint=hint) from None


def parse_hex_color(raw: str) -> tuple[int, int, int] | None:
    """Parse ``#RRGGBB`` or ``RRGGBB`` into an RGB triple, or None."""
    match = HEX_COLOR_RE.match(raw.strip())
    if match is None:
        return None
    r, g, b = (int(part, 16) for part in match.groups())
    return r, g, b


def format_number(value: float) -> str:
    """Render a float without a trailing ``.0`` when it is integral."""
    if value == int(value):
        return str(int(value))
    return str(value)
