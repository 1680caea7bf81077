"""Shared test fixtures and utilities for countryidentity tests."""

import pytest

from countryidentity.countries import countryapi
from countryidentity.countries.countryapi import CountryMapper
from countryidentity.countries.countryrecord import CountryRecord
from countryidentity.countries.countrystore import CountryStore


@pytest.fixture
def us_record():
    """United States record with alternative and localized names."""
    return CountryRecord(
        name="United States",
        official_name="United States of America",
        alpha2="US",
        alpha3="USA",
        numeric="840",
        calling_code="1",
        region="Americas",
        subregion="Northern America",
        alternative_names=("America", "U.S.", "U.S.A."),
        localized_names={"es": "Estados Unidos", "fr": "États-Unis"},
    )


@pytest.fixture
def ca_record():
    """Canada record sharing calling code 1 with the United States."""
    return CountryRecord(
        name="Canada",
        official_name="Canada",
        alpha2="CA",
        alpha3="CAN",
        numeric="124",
        calling_code="1",
        region="Americas",
        subregion="Northern America",
    )


@pytest.fixture
def sample_records(us_record, ca_record):
    """Small table covering several regions and edge cases.

    Order matters: the United States precedes Canada, so a shared
    calling code resolves to the United States.
    """
    return [
        us_record,
        ca_record,
        CountryRecord(
            name="Afghanistan",
            official_name="Islamic Republic of Afghanistan",
            alpha2="AF",
            alpha3="AFG",
            numeric="004",
            calling_code="93",
            region="Asia",
            subregion="Southern Asia",
        ),
        CountryRecord(
            name="United Kingdom",
            official_name="United Kingdom of Great Britain and Northern Ireland",
            alpha2="GB",
            alpha3="GBR",
            numeric="826",
            calling_code="44",
            region="Europe",
            subregion="Northern Europe",
            alternative_names=("UK", "Great Britain", "England"),
            localized_names={"es": "Reino Unido", "fr": "Royaume-Uni"},
        ),
        CountryRecord(
            name="Japan",
            official_name="Japan",
            alpha2="JP",
            alpha3="JPN",
            numeric="392",
            calling_code="81",
            region="Asia",
            subregion="Eastern Asia",
            localized_names={"es": "Japón"},
        ),
        CountryRecord(
            name="Germany",
            official_name="Federal Republic of Germany",
            alpha2="DE",
            alpha3="DEU",
            numeric="276",
            calling_code="49",
            region="Europe",
            subregion="Western Europe",
            localized_names={"de": "Deutschland"},
        ),
        CountryRecord(
            name="Bouvet Island",
            official_name="Bouvet Island",
            alpha2="BV",
            alpha3="BVT",
            numeric="074",
            calling_code="",
            region="Antarctic",
            subregion=None,
        ),
    ]


@pytest.fixture
def sample_store(sample_records):
    """CountryStore preloaded with sample_records."""
    return CountryStore(sample_records)


@pytest.fixture
def mapper(sample_store):
    """CountryMapper over the sample table."""
    return CountryMapper(sample_store)


@pytest.fixture
def north_america_mapper(us_record, ca_record):
    """Mapper over exactly [United States, Canada]."""
    return CountryMapper(CountryStore([us_record, ca_record]))


@pytest.fixture
def restore_default_table():
    """Reset the process-wide default table after the test.

    Use in tests that call update_country_database() or change the data
    path, so later tests see the bundled table again.
    """
    yield
    countryapi.reset_country_database()


@pytest.fixture
def sample_countries():
    """Fixture providing sample country names and codes for testing.

    Returns a dict of country names/codes and their ISO2 codes.
    """
    return {
        "USA": "US",
        "United States": "US",
        "United Kingdom": "GB",
        "England": "GB",
        "Australia": "AU",
        "Canada": "CA",
        "Germany": "DE",
        "France": "FR",
    }
