#!/usr/bin/env python3
"""
Build countries.json from ISO 3166-1 reference libraries.

This script:
1. Enumerates ISO 3166-1 countries from pycountry (names, alpha-2/3, numeric)
2. Adds region, subregion and official names from country_converter
   (continent / UNregion / name_official)
3. Adds international calling codes from phonenumbers metadata
4. Adds localized names for common locales from Babel (CLDR)
5. Keeps hand-curated alternative names and more specific calling codes
   (NANP area codes, Crown dependencies) from the existing countries.json
6. Writes countries.json and prints a validation report

Requires the build extra: pip install -e ".[build]"
"""

import sys
import unicodedata
from pathlib import Path
from typing import Dict, List, Optional

import country_converter as coco
import phonenumbers
import pycountry
from babel import Locale

from countryidentity.countries.countryloader import load_countries_json, save_countries_json
from countryidentity.countries.countryrecord import CountryRecord

LOCALES = ["es", "fr", "de"]

# country_converter names the combined continent "America"
_REGION_FIXES = {
    "America": "Americas",
    "Antarctica": "Antarctic",
}

# Codes pycountry does not carry but the table should
_EXTRA_COUNTRIES = [
    {"name": "Kosovo", "official_name": "Republic of Kosovo", "alpha2": "XK", "alpha3": "XKX", "numeric": None},
]


def load_regions() -> Dict[str, Dict[str, Optional[str]]]:
    """Map alpha-2 code to region, subregion and official name using country_converter."""
    data = coco.CountryConverter().data
    regions = {}
    for _, row in data.iterrows():
        iso2 = row.get("ISO2")
        if not isinstance(iso2, str) or not iso2:
            continue
        continent = row.get("continent")
        subregion = row.get("UNregion")
        region = _REGION_FIXES.get(continent, continent) if isinstance(continent, str) else None
        regions[iso2] = {
            "region": region,
            "subregion": subregion if isinstance(subregion, str) and subregion else None,
            "official_name": row.get("name_official") if isinstance(row.get("name_official"), str) else None,
        }
    return regions


def calling_code_for(alpha2: str) -> str:
    """Country calling code from phonenumbers metadata ("" if none)."""
    code = phonenumbers.country_code_for_region(alpha2)
    return str(code) if code else ""


def localized_names_for(alpha2: str) -> Dict[str, str]:
    """CLDR territory names for LOCALES."""
    names = {}
    for tag in LOCALES:
        name = Locale.parse(tag).territories.get(alpha2)
        if name:
            names[tag] = name
    return names


def load_curated(path: Path) -> Dict[str, CountryRecord]:
    """Existing table keyed by alpha-2, used to carry hand-edited fields forward."""
    if not path.is_file():
        return {}
    return {c.alpha2: c for c in load_countries_json(path) if c.alpha2}


def process_country(
    entry: dict,
    regions: Dict[str, Dict[str, Optional[str]]],
    curated: Dict[str, CountryRecord],
) -> CountryRecord:
    """Assemble one record from the reference sources."""
    alpha2 = entry["alpha2"]
    region = regions.get(alpha2, {})
    previous = curated.get(alpha2)

    calling_code = calling_code_for(alpha2)
    alternative_names: List[str] = []
    if previous is not None:
        # Keep a more specific prefix such as "1242" over the shared "1"
        if previous.calling_code and previous.calling_code.startswith(calling_code):
            calling_code = previous.calling_code
        alternative_names = list(previous.alternative_names)

    localized = localized_names_for(alpha2)
    if previous is not None:
        localized.update(previous.localized_names)

    return CountryRecord(
        name=entry["name"],
        official_name=entry.get("official_name") or region.get("official_name") or entry["name"],
        alpha2=alpha2,
        alpha3=entry["alpha3"],
        numeric=entry.get("numeric"),
        calling_code=calling_code,
        region=region.get("region"),
        subregion=region.get("subregion"),
        alternative_names=tuple(alternative_names),
        localized_names=localized,
    )


def iter_reference_countries() -> List[dict]:
    """ISO 3166-1 entries from pycountry plus the extra codes."""
    entries = []
    for c in pycountry.countries:
        entries.append({
            "name": getattr(c, "common_name", None) or c.name,
            "official_name": getattr(c, "official_name", None),
            "alpha2": c.alpha_2,
            "alpha3": c.alpha_3,
            "numeric": getattr(c, "numeric", None),
        })
    known = {e["alpha2"] for e in entries}
    entries.extend(e for e in _EXTRA_COUNTRIES if e["alpha2"] not in known)
    return entries


def name_sort_key(name: str) -> str:
    """Table order key: the name with accents stripped ("Åland" sorts as "Aland")."""
    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def validate_countries(countries: List[CountryRecord]) -> List[str]:
    """Validate the table and return a list of issues."""
    issues = []

    for field in ("alpha2", "alpha3", "numeric"):
        seen: Dict[str, str] = {}
        for c in countries:
            value = getattr(c, field)
            if not value:
                continue
            if value in seen:
                issues.append(f"Duplicate {field} {value!r}: {seen[value]} and {c.name}")
            seen[value] = c.name

    for c in countries:
        if not c.name:
            issues.append(f"Missing name for {c.alpha2}")
        if not c.region:
            issues.append(f"Missing region for {c.name}")

    return issues


def main():
    """Main build process."""
    data_dir = Path(__file__).parent
    output_path = data_dir / "countries.json"

    print("Loading reference data...")
    regions = load_regions()
    curated = load_curated(output_path)
    print(f"  {len(regions)} region mappings, {len(curated)} curated records")

    countries = [process_country(e, regions, curated) for e in iter_reference_countries()]
    countries.sort(key=lambda c: name_sort_key(c.name))

    issues = validate_countries(countries)
    if issues:
        print(f"\nValidation issues ({len(issues)}):")
        for issue in issues:
            print(f"  - {issue}")

    save_countries_json(countries, output_path)
    print(f"\nWrote {len(countries)} countries to {output_path}")

    print("\nRegion distribution:")
    counts: Dict[str, int] = {}
    for c in countries:
        counts[c.region or "(none)"] = counts.get(c.region or "(none)", 0) + 1
    for region, count in sorted(counts.items()):
        print(f"  {region}: {count}")

    return 1 if issues else 0


if __name__ == "__main__":
    sys.exit(main())
