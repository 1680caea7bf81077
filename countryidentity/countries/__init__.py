"""Country entity resolution and identification."""

from countryidentity.countries.countryapi import (
    CountryMapper,
    get_default_mapper,
    load_countries,
    update_country_database,
    reset_country_database,
    find_country,
    convert_country,
    is_valid_country,
    batch_convert,
    countries_by_region,
    countries_by_subregion,
    all_regions,
    all_subregions,
    list_countries,
    country_identifier,
    country_identifiers,
)
from countryidentity.countries.countryformat import CountryFormat, parse_format
from countryidentity.countries.countryrecord import CountryRecord
from countryidentity.countries.countrystore import CountryStore
from countryidentity.countries.countryidentity import (
    resolve_country,
    resolve_country_by_format,
)
from countryidentity.countries.countryprojection import project_country, territory_name
from countryidentity.countries.countryloader import (
    load_countries_json,
    load_countries_resource,
    save_countries_json,
)

__all__ = [
    "CountryFormat",
    "CountryRecord",
    "CountryStore",
    "CountryMapper",
    "get_default_mapper",
    "parse_format",
    "resolve_country",
    "resolve_country_by_format",
    "project_country",
    "territory_name",
    "load_countries",
    "load_countries_json",
    "load_countries_resource",
    "save_countries_json",
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
