"""Query normalization helpers for country resolution.

All textual matching in the resolver goes through fold(), which is a
locale-independent case fold. Accents are preserved: "México" and
"MÉXICO" fold to the same string, "Mexico" does not.
"""

import re
from typing import Optional

_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")


def clean_query(s: Optional[str]) -> str:
    """Trim surrounding whitespace; None becomes an empty string.

    Examples:
        >>> clean_query("  GB  ")
        'GB'
        >>> clean_query(None)
        ''
    """
    if s is None:
        return ""
    return str(s).strip()


def fold(s: str) -> str:
    """Case-fold text for ordinal, case-insensitive comparison.

    Examples:
        >>> fold("MÉXICO") == fold("méxico")
        True
    """
    return s.casefold()


def is_blank(s: Optional[str]) -> bool:
    """True for None, empty or whitespace-only values."""
    return s is None or not str(s).strip()


def parse_integer(s: Optional[str]) -> Optional[int]:
    """Parse an ASCII integer literal, or return None.

    Leading zeros are allowed, so "004" and "4" both parse to 4.
    Underscore separators and non-ASCII digits are rejected.

    Examples:
        >>> parse_integer("004")
        4
        >>> parse_integer("4_0") is None
        True
    """
    if s is None:
        return None
    s = s.strip()
    if not _INTEGER_RE.match(s):
        return None
    return int(s)


def strip_plus(s: str) -> str:
    """Remove all leading '+' characters."""
    return s.lstrip("+")


__all__ = [
    "clean_query",
    "fold",
    "is_blank",
    "parse_integer",
    "strip_plus",
]
