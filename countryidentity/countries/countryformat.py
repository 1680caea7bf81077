"""Output/input formats for country conversion.

CountryFormat is the closed set of fields a country record can be
converted from or projected to.
"""

from enum import Enum
from typing import Optional, Union


class CountryFormat(str, Enum):
    """Country representation formats.

    Examples (United States):
        NAME                    -> 'United States'
        OFFICIAL_NAME           -> 'United States of America'
        ALPHA2                  -> 'US'
        ALPHA3                  -> 'USA'
        NUMERIC                 -> '840'
        CALLING_CODE            -> '1'
        CALLING_CODE_WITH_PLUS  -> '+1'
        LOCALIZED_NAME          -> 'Estados Unidos' (locale 'es')
        REGION                  -> 'Americas'
        SUBREGION               -> 'Northern America'
    """

    NAME = "name"
    OFFICIAL_NAME = "official_name"
    ALPHA2 = "alpha2"
    ALPHA3 = "alpha3"
    NUMERIC = "numeric"
    CALLING_CODE = "calling_code"
    CALLING_CODE_WITH_PLUS = "calling_code_with_plus"
    LOCALIZED_NAME = "localized_name"
    REGION = "region"
    SUBREGION = "subregion"


# Legacy code-system names accepted by country_identifier(to=...)
_ALIASES = {
    "iso2": CountryFormat.ALPHA2,
    "iso3": CountryFormat.ALPHA3,
    "num": CountryFormat.NUMERIC,
    "isonumeric": CountryFormat.NUMERIC,
    "phone": CountryFormat.CALLING_CODE_WITH_PLUS,
}


def _key(s: str) -> str:
    return s.strip().lower().replace("_", "").replace("-", "").replace(" ", "")


_LOOKUP = {_key(f.value): f for f in CountryFormat}
_LOOKUP.update({_key(f.name): f for f in CountryFormat})
_LOOKUP.update(_ALIASES)


def parse_format(fmt: Union[CountryFormat, str, None]) -> Optional[CountryFormat]:
    """Coerce a format given as enum member or string.

    Matching ignores case, underscores, hyphens and spaces, so "Alpha2",
    "alpha_2", "CALLING_CODE_WITH_PLUS" and "CallingCodeWithPlus" all work.
    The aliases ISO2, ISO3 and NUM/NUMERIC are accepted too.

    Returns:
        The CountryFormat, or None if the value is not recognised.

    Examples:
        >>> parse_format("ISO3")
        <CountryFormat.ALPHA3: 'alpha3'>
        >>> parse_format("OfficialName")
        <CountryFormat.OFFICIAL_NAME: 'official_name'>
        >>> parse_format("colour") is None
        True
    """
    if isinstance(fmt, CountryFormat):
        return fmt
    if not isinstance(fmt, str) or not fmt.strip():
        return None
    return _LOOKUP.get(_key(fmt))


__all__ = [
    "CountryFormat",
    "parse_format",
]
