"""Tests for reading, writing and discovering country data files."""

import json
import logging

import pytest

from countryidentity.countries import countryloader
from countryidentity.countries.countryloader import (
    DATA_PATH_ENV,
    load_countries_json,
    load_countries_resource,
    load_default_countries,
    loads_countries,
    parse_countries,
    save_countries_json,
)
from countryidentity.countries.countryrecord import CountryRecord
from countryidentity.errors import CountryDataFormatError, CountryDataUnavailableError


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON payload (or raw text) to a temp file and return its path."""
    def _write(payload, name="countries.json"):
        path = tmp_path / name
        text = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False)
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture(autouse=True)
def clear_data_path_env(monkeypatch):
    """Keep the host environment's data path out of these tests"""
    monkeypatch.delenv(DATA_PATH_ENV, raising=False)


US_JSON = {
    "name": "United States",
    "officialName": "United States of America",
    "alpha2Code": "US",
    "alpha3Code": "USA",
    "numericCode": "840",
    "callingCode": "1",
    "region": "Americas",
    "subregion": "Northern America",
    "alternativeNames": ["America"],
    "localizedNames": {"es": "Estados Unidos"},
}


class TestLoadCountriesJson:
    """load_countries_json"""

    def test_load(self, write_json):
        """Test a well-formed file"""
        countries = load_countries_json(write_json([US_JSON]))

        assert len(countries) == 1
        us = countries[0]
        assert us.alpha2 == "US"
        assert us.official_name == "United States of America"
        assert us.alternative_names == ("America",)
        assert us.localized_names == {"es": "Estados Unidos"}

    def test_keys_case_insensitive(self, write_json):
        """Test PascalCase and snake_case keys are accepted"""
        path = write_json([
            {"Name": "Canada", "Alpha2Code": "CA", "alpha3_code": "CAN", "NumericCode": "124"},
        ])
        ca = load_countries_json(path)[0]
        assert (ca.name, ca.alpha2, ca.alpha3, ca.numeric) == ("Canada", "CA", "CAN", "124")

    def test_missing_fields_and_unknown_keys(self, write_json):
        """Test absent fields are None and unknown keys are ignored"""
        record = load_countries_json(write_json([{"name": "Sparse", "population": 10}]))[0]
        assert record.alpha2 is None
        assert record.alternative_names == ()
        assert record.localized_names == {}

    def test_numeric_as_number(self, write_json):
        """Test JSON numbers in code fields are read as text"""
        record = load_countries_json(write_json([{"name": "X", "numericCode": 840}]))[0]
        assert record.numeric == "840"

    def test_empty_array(self, write_json):
        """Test "[]" yields an empty list"""
        assert load_countries_json(write_json("[]")) == []

    def test_null(self, write_json):
        """Test JSON null yields an empty list"""
        assert load_countries_json(write_json("null")) == []

    def test_utf8_with_bom(self, tmp_path):
        """Test a leading byte-order mark is tolerated"""
        path = tmp_path / "bom.json"
        path.write_bytes(b"\xef\xbb\xbf" + json.dumps([{"name": "México"}], ensure_ascii=False).encode("utf-8"))
        assert load_countries_json(path)[0].name == "México"

    def test_malformed(self, write_json):
        """Test malformed JSON raises a format error"""
        with pytest.raises(CountryDataFormatError, match="Error parsing country data JSON"):
            load_countries_json(write_json("[{ not json"))

    def test_not_an_array(self, write_json):
        """Test a top-level object raises a format error"""
        with pytest.raises(CountryDataFormatError, match="expected an array"):
            load_countries_json(write_json({"name": "X"}))

    @pytest.mark.parametrize("item", [
        "Canada",
        {"name": ["Canada"]},
        {"alternativeNames": "UK"},
        {"localizedNames": ["es"]},
    ])
    def test_wrong_shapes(self, write_json, item):
        """Test wrongly shaped records raise a format error"""
        with pytest.raises(CountryDataFormatError):
            load_countries_json(write_json([item]))

    def test_format_error_is_value_error(self, write_json):
        """Test format errors can be caught as ValueError"""
        with pytest.raises(ValueError):
            load_countries_json(write_json("{"))

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError"""
        with pytest.raises(FileNotFoundError, match="Country data file not found"):
            load_countries_json(tmp_path / "missing.json")

    @pytest.mark.parametrize("path", [None, ""])
    def test_missing_path(self, path):
        """Test a missing path argument raises ValueError"""
        with pytest.raises(ValueError):
            load_countries_json(path)


class TestParse:
    """parse_countries and loads_countries"""

    def test_parse_preserves_order(self):
        """Test records keep source order"""
        records = parse_countries([{"name": "B"}, {"name": "A"}])
        assert [r.name for r in records] == ["B", "A"]

    def test_loads(self):
        """Test parsing from a string"""
        assert loads_countries('[{"alpha2Code": "FR"}]')[0].alpha2 == "FR"
        assert loads_countries("null") == []

    def test_loads_malformed(self):
        """Test malformed text raises a format error"""
        with pytest.raises(CountryDataFormatError):
            loads_countries("[")


class TestSaveCountriesJson:
    """save_countries_json"""

    def test_save_and_reload(self, tmp_path):
        """Test saved files load back to equal records"""
        records = [
            CountryRecord(
                name="México",
                alpha2="MX",
                alpha3="MEX",
                numeric="484",
                alternative_names=("Mexico",),
                localized_names={"fr": "Mexique"},
            )
        ]
        path = tmp_path / "out.json"
        save_countries_json(records, path)

        text = path.read_text(encoding="utf-8")
        assert '"alpha2Code": "MX"' in text
        assert "México" in text
        assert text.endswith("\n")
        assert load_countries_json(path) == records

    def test_overwrites(self, tmp_path):
        """Test an existing file is replaced"""
        path = tmp_path / "out.json"
        save_countries_json([CountryRecord(name="A")], path)
        save_countries_json([CountryRecord(name="B")], path)
        assert [r.name for r in load_countries_json(path)] == ["B"]

    def test_save_none(self, tmp_path):
        """Test None records raise ValueError"""
        with pytest.raises(ValueError):
            save_countries_json(None, tmp_path / "out.json")

    def test_save_non_records(self, tmp_path):
        """Test non-record items raise ValueError"""
        with pytest.raises(ValueError, match="Expected CountryRecord"):
            save_countries_json([{"name": "X"}], tmp_path / "out.json")


class TestBundledResource:
    """load_countries_resource"""

    def test_bundled(self):
        """Test the bundled table loads"""
        countries = load_countries_resource()
        assert len(countries) >= 249
        assert countries[0].alpha2 == "AF"

    def test_missing_resource(self):
        """Test an unknown resource raises FileNotFoundError"""
        with pytest.raises(FileNotFoundError, match="Embedded resource not found"):
            load_countries_resource("nope.json")


class TestLoadDefaultCountries:
    """Discovery order of the default table"""

    def test_explicit_path(self, write_json):
        """Test an explicit path wins"""
        countries = load_default_countries(write_json([US_JSON]))
        assert [c.alpha2 for c in countries] == ["US"]

    def test_env_path(self, write_json, monkeypatch):
        """Test COUNTRYIDENTITY_DATA_PATH is used when no path is given"""
        monkeypatch.setenv(DATA_PATH_ENV, str(write_json([US_JSON])))
        countries = load_default_countries()
        assert [c.alpha2 for c in countries] == ["US"]

    def test_explicit_beats_env(self, write_json, monkeypatch):
        """Test explicit path takes priority over the environment"""
        monkeypatch.setenv(DATA_PATH_ENV, str(write_json([US_JSON], name="env.json")))
        explicit = write_json([{"name": "Explicit"}], name="explicit.json")
        assert load_default_countries(explicit)[0].name == "Explicit"

    def test_bundled_fallback(self):
        """Test the bundled table is used by default"""
        countries = load_default_countries()
        assert len(countries) >= 249

    def test_missing_path_falls_back(self, tmp_path, caplog):
        """Test a missing explicit path logs a warning and falls back"""
        caplog.set_level(logging.WARNING, logger="countryidentity.countries.countryloader")
        countries = load_default_countries(tmp_path / "missing.json")

        assert len(countries) >= 249
        assert "not found" in caplog.text

    def test_missing_env_falls_back(self, tmp_path, monkeypatch, caplog):
        """Test a missing environment path logs a warning and falls back"""
        caplog.set_level(logging.WARNING, logger="countryidentity.countries.countryloader")
        monkeypatch.setenv(DATA_PATH_ENV, str(tmp_path / "missing.json"))
        countries = load_default_countries()

        assert len(countries) >= 249
        assert DATA_PATH_ENV in caplog.text

    def test_malformed_source_raises(self, write_json):
        """Test a source that exists but is malformed is not skipped"""
        with pytest.raises(CountryDataFormatError):
            load_default_countries(write_json("{{"))

    def test_empty_source_warns(self, write_json, caplog):
        """Test an empty table loads with a warning"""
        caplog.set_level(logging.WARNING, logger="countryidentity.countries.countryloader")
        assert load_default_countries(write_json("[]")) == []
        assert "empty" in caplog.text

    def test_dev_tables_fallback(self, write_json, monkeypatch):
        """Test development tables are used when the bundled resource is absent"""
        path = write_json([US_JSON])

        def no_resource(name=countryloader.DEFAULT_RESOURCE):
            raise FileNotFoundError(f"Embedded resource not found: {name}")

        monkeypatch.setattr(countryloader, "load_countries_resource", no_resource)
        monkeypatch.setattr(countryloader, "find_data_file", lambda **kwargs: path)

        assert [c.alpha2 for c in load_default_countries()] == ["US"]

    def test_no_source(self, monkeypatch):
        """Test a configuration error when nothing is available"""
        def no_resource(name=countryloader.DEFAULT_RESOURCE):
            raise FileNotFoundError(f"Embedded resource not found: {name}")

        monkeypatch.setattr(countryloader, "load_countries_resource", no_resource)
        monkeypatch.setattr(countryloader, "find_data_file", lambda **kwargs: None)

        with pytest.raises(CountryDataUnavailableError, match="No countries data found"):
            load_default_countries()
