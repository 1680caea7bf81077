"""Country entity resolution API.

Public API for country identification and conversion. CountryMapper
composes the resolver and the projector over an injectable CountryStore;
the module-level functions use a process-wide default store that loads
the bundled table on first use.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

import pandas as pd

from countryidentity.countries.countryformat import CountryFormat
from countryidentity.countries.countryidentity import (
    resolve_country as _resolve_country,
    resolve_country_by_format as _resolve_country_by_format,
)
from countryidentity.countries.countryloader import load_countries_json
from countryidentity.countries.countryprojection import project_country
from countryidentity.countries.countryrecord import CountryRecord
from countryidentity.countries.countrystore import CountryStore
from countryidentity.countries.countrynormalize import fold, is_blank

FormatLike = Union[CountryFormat, str]

_FRAME_COLUMNS = [
    "name",
    "official_name",
    "alpha2",
    "alpha3",
    "numeric",
    "calling_code",
    "region",
    "subregion",
    "alternative_names",
    "localized_names",
]


class CountryMapper:
    """Convert between country representations over one country table.

    Args:
        store: Table to search. Defaults to a new lazily loaded CountryStore.

    Examples:
        >>> mapper = CountryMapper(CountryStore(records))
        >>> mapper.convert("CAN", CountryFormat.ALPHA2)
        'CA'
        >>> mapper.convert("840", "alpha3")
        'USA'
    """

    def __init__(self, store: Optional[CountryStore] = None):
        self.store = store if store is not None else CountryStore()

    def find(self, query: Optional[str]) -> Optional[CountryRecord]:
        """Resolve any country identifier to its record, or None."""
        return _resolve_country(query, self.store.records)

    def convert(
        self,
        query: Optional[str],
        to: FormatLike,
        *,
        from_format: Optional[FormatLike] = None,
        locale: Optional[str] = None,
    ) -> Optional[str]:
        """Convert a country identifier to another representation.

        Args:
            query: Country name, code, alternative spelling or phone prefix
            to: Output format
            from_format: Known input format. Skips the layered search and
                         compares only that field.
            locale: Locale tag for LOCALIZED_NAME output

        Returns:
            Converted value, or None if no country matches
        """
        if is_blank(query):
            return None
        records = self.store.records
        if from_format is None:
            country = _resolve_country(query, records)
        else:
            country = _resolve_country_by_format(query, records, from_format)
        return project_country(country, to, locale)

    def is_valid(self, query: Optional[str]) -> bool:
        """True if the query resolves to a country."""
        return self.find(query) is not None

    def batch_convert(
        self,
        queries: Iterable[Optional[str]],
        to: FormatLike,
        *,
        from_format: Optional[FormatLike] = None,
        locale: Optional[str] = None,
    ) -> Dict[Optional[str], Optional[str]]:
        """Convert many identifiers.

        Keys are the inputs exactly as given (untrimmed), so repeated
        inputs collapse to one entry.
        """
        result: Dict[Optional[str], Optional[str]] = {}
        for query in queries:
            result[query] = self.convert(query, to, from_format=from_format, locale=locale)
        return result

    def countries_by_region(self, region: Optional[str]) -> List[CountryRecord]:
        """All countries whose region equals `region` (case-insensitive), in table order."""
        return _filter_records(self.store.records, "region", region)

    def countries_by_subregion(self, subregion: Optional[str]) -> List[CountryRecord]:
        """All countries whose subregion equals `subregion` (case-insensitive), in table order."""
        return _filter_records(self.store.records, "subregion", subregion)

    def all_regions(self) -> List[str]:
        """Distinct region names, sorted. Distinctness is case-sensitive."""
        return sorted({r.region for r in self.store.records if r.region})

    def all_subregions(self) -> List[str]:
        """Distinct subregion names, sorted. Distinctness is case-sensitive."""
        return sorted({r.subregion for r in self.store.records if r.subregion})

    def to_frame(
        self,
        region: Optional[str] = None,
        subregion: Optional[str] = None,
    ) -> pd.DataFrame:
        """Table view of the countries, optionally filtered."""
        records = self.store.records
        if region is not None:
            records = _filter_records(records, "region", region)
        if subregion is not None:
            records = _filter_records(records, "subregion", subregion)
        return pd.DataFrame([r.to_row() for r in records], columns=_FRAME_COLUMNS)


def _filter_records(
    records: Iterable[CountryRecord],
    attr: str,
    value: Optional[str],
) -> List[CountryRecord]:
    if is_blank(value):
        return []
    q = fold(value)
    return [r for r in records if getattr(r, attr) and fold(getattr(r, attr)) == q]


# ---- Process-wide default table ----
_default_store = CountryStore()
_default_mapper = CountryMapper(_default_store)


def get_default_mapper() -> CountryMapper:
    """The mapper behind the module-level functions."""
    return _default_mapper


def load_countries(path: Optional[Union[str, Path]] = None) -> Tuple[CountryRecord, ...]:
    """Return a country table.

    Args:
        path: Optional JSON file. If given, it is read and returned without
              touching the default table. If None, returns the default
              table, loading it on first use.

    Returns:
        Tuple of CountryRecord in table order

    Examples:
        >>> countries = load_countries()
        >>> countries[0].name
        'Afghanistan'
    """
    if path is not None:
        return tuple(load_countries_json(path))
    return _default_store.records


def update_country_database(countries: Iterable[CountryRecord]) -> None:
    """Replace the default table with custom records.

    Raises:
        ValueError: If countries is None or empty

    Examples:
        >>> update_country_database([CountryRecord(name="Custom Country", alpha2="CC")])
        >>> find_country("CC").name
        'Custom Country'
    """
    _default_store.replace(countries)


def reset_country_database() -> None:
    """Drop the default table; the next lookup reloads it from its source."""
    _default_store.reset()


def find_country(query: Optional[str]) -> Optional[CountryRecord]:
    """Find a country by any of its identifiers.

    Matches, in priority order: exact field values (names, codes, calling
    code, alternative and localized names), integer-normalized numeric
    codes, phone prefixes, then substrings of names.

    Args:
        query: e.g. "US", "usa", "840", "United Kingdom", "UK", "+44 20 7946 0958"

    Returns:
        CountryRecord or None

    Examples:
        >>> find_country("CAN").name
        'Canada'
        >>> find_country("4").name
        'Afghanistan'
        >>> find_country("Holland").alpha2
        'NL'
    """
    return _default_mapper.find(query)


def convert_country(
    query: Optional[str],
    to: FormatLike,
    *,
    from_format: Optional[FormatLike] = None,
    locale: Optional[str] = None,
) -> Optional[str]:
    """Convert a country identifier to the requested format.

    Args:
        query: Any country identifier
        to: Output CountryFormat (or its name, e.g. "alpha3", "ISO2")
        from_format: Optional known input format (single-field lookup)
        locale: Locale tag for LOCALIZED_NAME output

    Returns:
        Converted value, or None if not recognised

    Examples:
        >>> convert_country("US", CountryFormat.NAME)
        'United States'
        >>> convert_country("GBR", CountryFormat.ALPHA2, from_format=CountryFormat.ALPHA3)
        'GB'
        >>> convert_country("BR", "calling_code_with_plus")
        '+55'
        >>> convert_country("US", CountryFormat.LOCALIZED_NAME, locale="fr")
        'États-Unis'
    """
    return _default_mapper.convert(query, to, from_format=from_format, locale=locale)


def is_valid_country(query: Optional[str]) -> bool:
    """True if the query identifies a country.

    Examples:
        >>> is_valid_country("America")
        True
        >>> is_valid_country("XX")
        False
    """
    return _default_mapper.is_valid(query)


def batch_convert(
    queries: Iterable[Optional[str]],
    to: FormatLike,
    *,
    from_format: Optional[FormatLike] = None,
    locale: Optional[str] = None,
) -> Dict[Optional[str], Optional[str]]:
    """Convert many identifiers, keyed by the original inputs.

    Examples:
        >>> batch_convert(["US", "GB", "CA"], CountryFormat.ALPHA3)
        {'US': 'USA', 'GB': 'GBR', 'CA': 'CAN'}
    """
    return _default_mapper.batch_convert(queries, to, from_format=from_format, locale=locale)


def countries_by_region(region: Optional[str]) -> List[CountryRecord]:
    """Countries in a region, e.g. "Europe"."""
    return _default_mapper.countries_by_region(region)


def countries_by_subregion(subregion: Optional[str]) -> List[CountryRecord]:
    """Countries in a subregion, e.g. "Northern Europe"."""
    return _default_mapper.countries_by_subregion(subregion)


def all_regions() -> List[str]:
    """Sorted distinct regions of the default table."""
    return _default_mapper.all_regions()


def all_subregions() -> List[str]:
    """Sorted distinct subregions of the default table."""
    return _default_mapper.all_subregions()


def list_countries(
    region: Optional[str] = None,
    subregion: Optional[str] = None,
) -> pd.DataFrame:
    """List countries as a DataFrame, optionally filtered.

    Args:
        region: Optional region filter (case-insensitive), e.g. "Europe"
        subregion: Optional subregion filter (case-insensitive)

    Returns:
        DataFrame with columns name, official_name, alpha2, alpha3, numeric,
        calling_code, region, subregion, alternative_names, localized_names

    Examples:
        >>> europe = list_countries(region="Europe")
        >>> europe[["name", "alpha2"]].head()
    """
    return _default_mapper.to_frame(region=region, subregion=subregion)


def country_identifier(name: Optional[str], to: FormatLike = CountryFormat.ALPHA2) -> Optional[str]:
    """Get the ISO identifier for a country.

    Args:
        name: Country name or code in any format (e.g., "USA", "United States", "US")
        to: Output format, ISO alpha-2 by default ("ISO3", "numeric", ...)

    Returns:
        Code in the requested system, or None if not recognised

    Examples:
        >>> country_identifier("United States")
        'US'
        >>> country_identifier("Holland", to="ISO3")
        'NLD'
    """
    return convert_country(name, to)


def country_identifiers(
    names: Iterable[Optional[str]],
    to: FormatLike = CountryFormat.ALPHA2,
) -> List[Optional[str]]:
    """Batch resolve country names to ISO codes, preserving input order.

    Examples:
        >>> country_identifiers(["USA", "Holland", "England"])
        ['US', 'NL', 'GB']
    """
    return [country_identifier(n, to=to) for n in names]


__all__ = [
    "CountryMapper",
    "get_default_mapper",
    "load_countries",
    "update_country_database",
    "reset_country_database",
    "find_country",
    "convert_country",
    "is_valid_country",
    "batch_convert",
    "countries_by_region",
    "countries_by_subregion",
    "all_regions",
    "all_subregions",
    "list_countries",
    "country_identifier",
    "country_identifiers",
]
