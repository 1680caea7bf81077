"""Country Identity - Country identifier resolution and conversion

Public API for resolving country names, ISO 3166-1 codes, calling codes and
localized names, and converting between them.

Usage:
    from countryidentity import find_country, convert_country, CountryFormat

    # Resolve any identifier to a record
    country = find_country("+44 20 7946 0958")  # CountryRecord(name='United Kingdom', ...)

    # Convert between representations
    convert_country("USA", CountryFormat.ALPHA2)                  # 'US'
    convert_country("Japan", "calling_code_with_plus")            # '+81'
    convert_country("DE", CountryFormat.LOCALIZED_NAME, locale="fr")  # 'Allemagne'

    # Canonical ISO code
    country_identifier("Holland")  # 'NL'

    # Regions
    countries_by_region("Europe")
    list_countries(subregion="Northern Europe")  # DataFrame
"""

__version__ = "0.0.1"

# ============================================================================
# Country Resolution API
# ============================================================================
# Primary interface: countryidentity.countries.countryapi
# Implementation: countryidentity.countries.countryidentity (matching)
#                 countryidentity.countries.countryprojection (output)

from .countries.countryapi import (
    country_identifier,       # Primary API - resolve country to ISO code
    country_identifiers,      # Batch resolution of multiple countries
    find_country,             # Get full country record
    convert_country,          # Convert between formats
    is_valid_country,         # Check whether a string identifies a country
    batch_convert,            # Convert many identifiers at once
    countries_by_region,      # Filter by region
    countries_by_subregion,   # Filter by subregion
    all_regions,              # Distinct regions
    all_subregions,           # Distinct subregions
    list_countries,           # List/filter countries as a DataFrame
    load_countries,           # Load countries table
    update_country_database,  # Replace the default table
    reset_country_database,   # Reload the default table on next use
    CountryMapper,            # Converter over an injectable store
)

from .countries.countryformat import CountryFormat
from .countries.countryrecord import CountryRecord
from .countries.countrystore import CountryStore

# ============================================================================
# Errors
# ============================================================================

from .errors import (
    CountryDataFormatError,
    CountryDataUnavailableError,
)

__all__ = [
    # Version
    "__version__",

    # ========================================================================
    # PRIMARY APIS - Start here!
    # ========================================================================
    "country_identifier",   # Resolve country -> ISO code
    "find_country",         # Resolve country -> CountryRecord
    "convert_country",      # Convert between formats

    # ========================================================================
    # Country Resolution
    # ========================================================================
    "country_identifiers",
    "is_valid_country",
    "batch_convert",
    "countries_by_region",
    "countries_by_subregion",
    "all_regions",
    "all_subregions",
    "list_countries",
    "load_countries",
    "update_country_database",
    "reset_country_database",

    # ========================================================================
    # Types
    # ========================================================================
    "CountryFormat",
    "CountryRecord",
    "CountryStore",
    "CountryMapper",

    # ========================================================================
    # Errors
    # ========================================================================
    "CountryDataFormatError",
    "CountryDataUnavailableError",
]
