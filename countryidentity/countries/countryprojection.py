"""Project a country record to a single display value.

LocalizedName fallback chain:
  1. record.localized_names[locale] when the locale is a key
  2. CLDR territory name for record.alpha2 via Babel, in the requested
     locale (or COUNTRYIDENTITY_LOCALE / the process default locale)
  3. record.name
"""

import logging
import os
from typing import Optional

from babel import Locale, UnknownLocaleError, default_locale

from countryidentity.countries.countryformat import CountryFormat, parse_format
from countryidentity.countries.countryrecord import CountryRecord

logger = logging.getLogger(__name__)

LOCALE_ENV = "COUNTRYIDENTITY_LOCALE"


def _fallback_locale() -> str:
    return os.environ.get(LOCALE_ENV) or default_locale() or "en"


def territory_name(alpha2: Optional[str], locale: Optional[str] = None) -> Optional[str]:
    """Look up a CLDR territory display name.

    Args:
        alpha2: ISO 3166-1 alpha-2 code (e.g., "DE")
        locale: Locale tag such as "fr", "pt_BR" or "pt-BR". Defaults to
                COUNTRYIDENTITY_LOCALE, then the process locale, then "en".

    Returns:
        Display name, or None if the code or locale is unknown.

    Examples:
        >>> territory_name("DE", "fr")
        'Allemagne'
        >>> territory_name("DE", "no-such-locale") is None
        True
    """
    if not alpha2:
        return None
    tag = locale or _fallback_locale()
    try:
        babel_locale = Locale.parse(tag.replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError) as e:
        logger.debug(f"Unknown locale {tag!r}: {e}")
        return None
    return babel_locale.territories.get(alpha2.upper())


def _localized_name(country: CountryRecord, locale: Optional[str]) -> Optional[str]:
    if locale and locale in country.localized_names:
        return country.localized_names[locale]

    name = territory_name(country.alpha2, locale)
    if name:
        return name
    return country.name


def project_country(
    country: Optional[CountryRecord],
    fmt,
    locale: Optional[str] = None,
) -> Optional[str]:
    """Extract the value for `fmt` from a record.

    Args:
        country: Resolved record (None yields None)
        fmt: CountryFormat member or format name ("alpha3", "ISO2", ...)
        locale: Locale tag used by LOCALIZED_NAME (e.g., "es")

    Returns:
        Field value. CALLING_CODE_WITH_PLUS always prefixes "+", so an
        empty calling code yields "+". An unrecognised format yields the
        English name.

    Examples:
        >>> project_country(us, CountryFormat.CALLING_CODE_WITH_PLUS)
        '+1'
        >>> project_country(us, "localized_name", "es")
        'Estados Unidos'
    """
    if country is None:
        return None

    fmt = parse_format(fmt)
    if fmt is CountryFormat.NAME:
        return country.name
    if fmt is CountryFormat.OFFICIAL_NAME:
        return country.official_name
    if fmt is CountryFormat.ALPHA2:
        return country.alpha2
    if fmt is CountryFormat.ALPHA3:
        return country.alpha3
    if fmt is CountryFormat.NUMERIC:
        return country.numeric
    if fmt is CountryFormat.CALLING_CODE:
        return country.calling_code
    if fmt is CountryFormat.CALLING_CODE_WITH_PLUS:
        return "+" + (country.calling_code or "")
    if fmt is CountryFormat.LOCALIZED_NAME:
        return _localized_name(country, locale)
    if fmt is CountryFormat.REGION:
        return country.region
    if fmt is CountryFormat.SUBREGION:
        return country.subregion

    return country.name


__all__ = [
    "LOCALE_ENV",
    "territory_name",
    "project_country",
]
