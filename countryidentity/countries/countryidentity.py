"""Country Entity Resolution
--------------------------

Layered matching over an ordered country table:
  1. Exact match on any identifying field (name, official name, alpha-2,
     alpha-3, numeric, calling code, alternative names, localized names)
  2. Numeric match with integer normalization ("4" matches "004")
  3. Phone-code match ("+1", "+44 20 7946 0958", bare "44")
  4. Substring match on name-like fields

The first stage that yields a record wins, and within a stage the first
record in table order wins. There is no fuzzy matching.

API:
  resolve_country(query, records) -> CountryRecord | None
  resolve_country_by_format(query, records, fmt) -> CountryRecord | None
"""

from __future__ import annotations
import logging
import re
from typing import Callable, Iterable, Optional, Sequence

from countryidentity.countries.countryformat import CountryFormat, parse_format
from countryidentity.countries.countrynormalize import (
    clean_query,
    fold,
    parse_integer,
    strip_plus,
)
from countryidentity.countries.countryrecord import CountryRecord

logger = logging.getLogger(__name__)

_PHONE_PREFIX_RE = re.compile(r"^\+(\d{1,3})")


# ---- Helpers: field comparison ----
def _equals(value: Optional[str], query_folded: str) -> bool:
    """Case-insensitive equality; empty fields never match."""
    if not value:
        return False
    return fold(value) == query_folded


def _contains(value: Optional[str], query_folded: str) -> bool:
    """Case-insensitive containment; empty fields never match."""
    if not value:
        return False
    return query_folded in fold(value)


def _any_equals(values: Iterable[str], query_folded: str) -> bool:
    return any(_equals(v, query_folded) for v in values)


def _any_contains(values: Iterable[str], query_folded: str) -> bool:
    return any(_contains(v, query_folded) for v in values)


def _first(records: Sequence[CountryRecord], predicate: Callable[[CountryRecord], bool]) -> Optional[CountryRecord]:
    return next((r for r in records if predicate(r)), None)


# ---- Stage 1: exact multi-field match ----
def _exact_match(query: str, records: Sequence[CountryRecord]) -> Optional[CountryRecord]:
    q = fold(query)
    q_code = fold(strip_plus(query))

    def matches(r: CountryRecord) -> bool:
        return (
            _equals(r.name, q)
            or _equals(r.official_name, q)
            or _equals(r.alpha2, q)
            or _equals(r.alpha3, q)
            or _equals(r.numeric, q)
            or _equals(r.calling_code, q_code)
            or _any_equals(r.alternative_names, q)
            or _any_equals(r.localized_names.values(), q)
        )

    return _first(records, matches)


# ---- Stage 2: numeric match ----
def _numeric_match(query: str, records: Sequence[CountryRecord]) -> Optional[CountryRecord]:
    number = parse_integer(query)
    if number is None:
        return None
    # Records whose numeric code is not an integer are skipped
    return _first(records, lambda r: parse_integer(r.numeric) == number)


# ---- Stage 3: phone-code match ----
def _calling_code_match(code: str, records: Sequence[CountryRecord]) -> Optional[CountryRecord]:
    q = fold(code)
    return _first(records, lambda r: _equals(r.calling_code, q))


def _phone_match(query: str, records: Sequence[CountryRecord]) -> Optional[CountryRecord]:
    if not query.startswith("+"):
        return _calling_code_match(query, records)

    stripped = query[1:]
    country = _calling_code_match(stripped, records)
    if country is not None:
        return country

    # "+81 3 1234 5678" -> "81"; greedy, so "+81312..." extracts "813"
    if len(stripped) > 1:
        match = _PHONE_PREFIX_RE.match(query)
        if match:
            return _calling_code_match(match.group(1), records)

    return None


# ---- Stage 4: partial match ----
def _partial_match(query: str, records: Sequence[CountryRecord]) -> Optional[CountryRecord]:
    q = fold(query)

    def matches(r: CountryRecord) -> bool:
        return (
            _contains(r.name, q)
            or _contains(r.official_name, q)
            or _any_contains(r.alternative_names, q)
            or _any_contains(r.localized_names.values(), q)
        )

    return _first(records, matches)


_STAGES = (
    ("exact", _exact_match),
    ("numeric", _numeric_match),
    ("phone", _phone_match),
    ("partial", _partial_match),
)


# ---- Main resolution ----
def resolve_country(query: Optional[str], records: Sequence[CountryRecord]) -> Optional[CountryRecord]:
    """
    Resolve a free-form country string to a record.

    Args:
        query: Code, name, alternative spelling, localized name or
               phone-prefixed number, e.g. "us", "USA", "840", "4",
               "United Kingdom", "Holland", "+44 20 7946 0958"
        records: Ordered country table

    Returns:
        First matching record, or None. Blank input returns None
        without searching.

    Examples:
        >>> resolve_country("CAN", records).name
        'Canada'
        >>> resolve_country("+1", records).calling_code
        '1'
    """
    query = clean_query(query)
    if not query:
        return None

    for stage, match_fn in _STAGES:
        country = match_fn(query, records)
        if country is not None:
            logger.debug(f"Resolved {query!r} to {country.name!r} by {stage} match")
            return country

    logger.debug(f"No country matches {query!r}")
    return None


def resolve_country_by_format(
    query: Optional[str],
    records: Sequence[CountryRecord],
    fmt,
) -> Optional[CountryRecord]:
    """
    Resolve a string whose format is already known.

    Compares only the field named by `fmt` (case-insensitive equality,
    no layering, no substring matching). CALLING_CODE_WITH_PLUS drops one
    leading '+', LOCALIZED_NAME searches every locale. An unrecognised
    format falls back to resolve_country().

    Examples:
        >>> resolve_country_by_format("GBR", records, CountryFormat.ALPHA3).alpha2
        'GB'
        >>> resolve_country_by_format("+44", records, "calling_code_with_plus").name
        'United Kingdom'
    """
    query = clean_query(query)
    if not query:
        return None

    fmt = parse_format(fmt)
    if fmt is None:
        return resolve_country(query, records)

    if fmt is CountryFormat.CALLING_CODE_WITH_PLUS and query.startswith("+"):
        query = query[1:]

    q = fold(query)
    if fmt is CountryFormat.LOCALIZED_NAME:
        return _first(records, lambda r: _any_equals(r.localized_names.values(), q))

    attr = _FIELD_BY_FORMAT[fmt]
    return _first(records, lambda r: _equals(getattr(r, attr), q))


_FIELD_BY_FORMAT = {
    CountryFormat.NAME: "name",
    CountryFormat.OFFICIAL_NAME: "official_name",
    CountryFormat.ALPHA2: "alpha2",
    CountryFormat.ALPHA3: "alpha3",
    CountryFormat.NUMERIC: "numeric",
    CountryFormat.CALLING_CODE: "calling_code",
    CountryFormat.CALLING_CODE_WITH_PLUS: "calling_code",
    CountryFormat.REGION: "region",
    CountryFormat.SUBREGION: "subregion",
}


__all__ = [
    "resolve_country",
    "resolve_country_by_format",
]
