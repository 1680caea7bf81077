"""Country data loader.

Reads and writes country tables as JSON arrays of objects:

    [
      {
        "name": "United States",
        "officialName": "United States of America",
        "alpha2Code": "US",
        "alpha3Code": "USA",
        "numericCode": "840",
        "callingCode": "1",
        "region": "Americas",
        "subregion": "Northern America",
        "alternativeNames": ["America"],
        "localizedNames": {"es": "Estados Unidos"}
      }
    ]

Keys are case-insensitive on read. The default table is discovered from
an explicit path, the COUNTRYIDENTITY_DATA_PATH environment variable,
the bundled package resource, or development tables, in that order.
"""

import json
import logging
import os
from importlib import resources
from pathlib import Path
from typing import Iterable, List, Optional, Union

from countryidentity.countries.countryrecord import CountryRecord
from countryidentity.errors import CountryDataFormatError, CountryDataUnavailableError
from countryidentity.utils.dataloader import (
    find_data_file,
    format_not_found_error,
    read_json_file,
)

logger = logging.getLogger(__name__)

DATA_PATH_ENV = "COUNTRYIDENTITY_DATA_PATH"
DEFAULT_RESOURCE = "countries.json"
_RESOURCE_PACKAGE = "countryidentity.countries.data"


def parse_countries(data) -> List[CountryRecord]:
    """Convert decoded JSON into records.

    Args:
        data: Decoded JSON (a list of objects, or None)

    Returns:
        List of CountryRecord in source order. None yields an empty list.

    Raises:
        CountryDataFormatError: If data is not an array of objects
    """
    if data is None:
        return []
    if not isinstance(data, list):
        raise CountryDataFormatError(
            f"Error parsing country data JSON: expected an array, got {type(data).__name__}"
        )
    return [CountryRecord.from_dict(item) for item in data]


def loads_countries(text: str) -> List[CountryRecord]:
    """Parse a JSON document into records.

    Raises:
        CountryDataFormatError: If the text is not valid country JSON
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CountryDataFormatError(f"Error parsing country data JSON: {e}") from e
    return parse_countries(data)


def load_countries_json(json_file_path: Union[str, Path]) -> List[CountryRecord]:
    """Load country records from a JSON file.

    Args:
        json_file_path: Path to a JSON array of country objects

    Returns:
        List of CountryRecord (empty for "[]")

    Raises:
        ValueError: If json_file_path is None or empty
        FileNotFoundError: If the file does not exist
        CountryDataFormatError: If the file is not valid country JSON

    Examples:
        >>> countries = load_countries_json("countries.json")
        >>> countries[0].alpha2
        'AF'
    """
    if json_file_path is None or not str(json_file_path):
        raise ValueError("json_file_path is required")

    path = Path(json_file_path)
    if not path.is_file():
        raise FileNotFoundError(f"Country data file not found: {path}")

    try:
        data = read_json_file(path)
    except json.JSONDecodeError as e:
        raise CountryDataFormatError(f"Error parsing country data JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise CountryDataFormatError(f"Error parsing country data JSON: {e}") from e

    return parse_countries(data)


def load_countries_resource(resource_name: str = DEFAULT_RESOURCE) -> List[CountryRecord]:
    """Load country records bundled inside the package.

    Args:
        resource_name: File name under countryidentity/countries/data/

    Raises:
        ValueError: If resource_name is None or empty
        FileNotFoundError: If the resource is not part of the package
        CountryDataFormatError: If the resource is not valid country JSON
    """
    if not resource_name:
        raise ValueError("resource_name is required")

    resource = resources.files(_RESOURCE_PACKAGE).joinpath(resource_name)
    if not resource.is_file():
        raise FileNotFoundError(f"Embedded resource not found: {resource_name}")

    return loads_countries(resource.read_text(encoding="utf-8-sig"))


def save_countries_json(
    countries: Iterable[CountryRecord],
    json_file_path: Union[str, Path],
) -> None:
    """Write country records to a pretty-printed JSON file.

    Overwrites any existing file. Non-ASCII names are written as-is (UTF-8).

    Raises:
        ValueError: If countries or json_file_path is None/empty
    """
    if countries is None:
        raise ValueError("countries is required")
    if json_file_path is None or not str(json_file_path):
        raise ValueError("json_file_path is required")

    payload = []
    for country in countries:
        if not isinstance(country, CountryRecord):
            raise ValueError(f"Expected CountryRecord, got {type(country).__name__}")
        payload.append(country.to_dict())

    path = Path(json_file_path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
        f.write("\n")

    logger.info(f"Saved {len(payload)} countries to {path}")


def load_default_countries(path: Optional[Union[str, Path]] = None) -> List[CountryRecord]:
    """Load the default country table.

    Loading priority:
    1. Explicit path if provided
    2. COUNTRYIDENTITY_DATA_PATH environment variable
    3. Bundled resource countryidentity/countries/data/countries.json
    4. Development tables (../tables/countries/countries.json)

    Configured paths that do not exist are skipped with a warning. A source
    that exists but cannot be parsed raises CountryDataFormatError.

    Raises:
        CountryDataUnavailableError: If no data source is available
    """
    # 1. Explicit path
    if path is not None:
        p = Path(path)
        if p.is_file():
            countries = load_countries_json(p)
            logger.info(f"Loaded {len(countries)} countries from explicit path: {p}")
            return _check_loaded(countries)
        logger.warning(f"Country data path {p} not found, trying other sources")

    # 2. Environment variable
    env_path = os.environ.get(DATA_PATH_ENV)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            countries = load_countries_json(p)
            logger.info(f"Loaded {len(countries)} countries from {DATA_PATH_ENV}: {p}")
            return _check_loaded(countries)
        logger.warning(f"{DATA_PATH_ENV}={env_path} not found, trying other sources")

    # 3. Bundled resource
    try:
        countries = load_countries_resource(DEFAULT_RESOURCE)
    except FileNotFoundError:
        logger.debug(f"Bundled resource {DEFAULT_RESOURCE} not present")
    else:
        logger.info(f"Loaded {len(countries)} countries from bundled resource")
        return _check_loaded(countries)

    # 4. Development tables
    found_path = find_data_file(
        module_file=__file__,
        subdirectory="countries",
        filenames=[DEFAULT_RESOURCE],
        search_dev_tables=True,
        module_local_data=False,
    )
    if found_path:
        countries = load_countries_json(found_path)
        logger.info(f"Loaded {len(countries)} countries from local: {found_path}")
        return _check_loaded(countries)

    error_msg = format_not_found_error(
        subdirectory="countries",
        searched_locations=[
            ("Explicit path", path if path else "Not provided"),
            ("Environment variable", os.environ.get(DATA_PATH_ENV, "Not set")),
            ("Bundled resource", Path(__file__).parent / "data" / DEFAULT_RESOURCE),
            ("Development tables", Path(__file__).parent.parent.parent / "tables" / "countries"),
        ],
        fix_instructions=[
            f"Set {DATA_PATH_ENV} to point to a countries JSON file",
            "Or run countryidentity/countries/data/build_countries.py to rebuild the bundled table",
            "Or call update_country_database() with your own records",
        ],
    )
    raise CountryDataUnavailableError(error_msg)


def _check_loaded(countries: List[CountryRecord]) -> List[CountryRecord]:
    if not countries:
        logger.warning("Country data source is empty; every lookup will return None")
    return countries


__all__ = [
    "DATA_PATH_ENV",
    "parse_countries",
    "loads_countries",
    "load_countries_json",
    "load_countries_resource",
    "save_countries_json",
    "load_default_countries",
]
