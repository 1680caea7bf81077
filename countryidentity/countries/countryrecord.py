"""Country record model.

A CountryRecord is one country's identifying fields. Records are frozen
value objects: two records with the same field values compare equal and
there is no separate id. Uniqueness of codes is not enforced; resolution
always returns the first match in table order.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from countryidentity.errors import CountryDataFormatError


# JSON key (lowercased, underscores removed) -> record attribute
_JSON_KEYS = {
    "name": "name",
    "officialname": "official_name",
    "alpha2code": "alpha2",
    "alpha2": "alpha2",
    "alpha3code": "alpha3",
    "alpha3": "alpha3",
    "numericcode": "numeric",
    "numeric": "numeric",
    "callingcode": "calling_code",
    "region": "region",
    "subregion": "subregion",
    "alternativenames": "alternative_names",
    "localizednames": "localized_names",
}

_TEXT_FIELDS = (
    "name",
    "official_name",
    "alpha2",
    "alpha3",
    "numeric",
    "calling_code",
    "region",
    "subregion",
)


@dataclass(frozen=True)
class CountryRecord:
    """One country.

    Attributes:
        name: English short name (e.g., "United States")
        official_name: Official name (e.g., "United States of America")
        alpha2: ISO 3166-1 alpha-2 code (e.g., "US")
        alpha3: ISO 3166-1 alpha-3 code (e.g., "USA")
        numeric: ISO 3166-1 numeric code as text (e.g., "840", "004")
        calling_code: International calling code without '+' (e.g., "1")
        region: Region/continent (e.g., "Americas")
        subregion: Subregion (e.g., "Northern America")
        alternative_names: Other spellings, order preserved
        localized_names: Locale tag -> localized name (e.g., {"es": "Estados Unidos"})

    Any text field may be None or empty; empty fields never match a query.
    """

    name: Optional[str] = None
    official_name: Optional[str] = None
    alpha2: Optional[str] = None
    alpha3: Optional[str] = None
    numeric: Optional[str] = None
    calling_code: Optional[str] = None
    region: Optional[str] = None
    subregion: Optional[str] = None
    alternative_names: Tuple[str, ...] = ()
    localized_names: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        # Copy container fields into read-only types
        object.__setattr__(self, "alternative_names", tuple(self.alternative_names or ()))
        object.__setattr__(self, "localized_names", MappingProxyType(dict(self.localized_names or {})))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CountryRecord":
        """Build a record from a JSON object.

        Keys are matched case-insensitively and may be camelCase or
        snake_case ("alpha2Code", "Alpha2Code", "alpha2_code").
        Unknown keys are ignored.

        Raises:
            CountryDataFormatError: if data is not an object or a field has the wrong shape
        """
        if not isinstance(data, Mapping):
            raise CountryDataFormatError(
                f"Error parsing country data JSON: expected an object, got {type(data).__name__}"
            )

        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            attr = _JSON_KEYS.get(str(key).lower().replace("_", ""))
            if attr is None:
                continue
            kwargs[attr] = value

        for attr in _TEXT_FIELDS:
            value = kwargs.get(attr)
            if value is not None and not isinstance(value, str):
                # Numeric codes occasionally arrive as JSON numbers
                if isinstance(value, int) and not isinstance(value, bool):
                    kwargs[attr] = str(value)
                else:
                    raise CountryDataFormatError(
                        f"Error parsing country data JSON: field '{attr}' must be a string"
                    )

        alternative_names = kwargs.get("alternative_names")
        if alternative_names is not None:
            if isinstance(alternative_names, str) or not isinstance(alternative_names, Sequence):
                raise CountryDataFormatError(
                    "Error parsing country data JSON: 'alternativeNames' must be an array of strings"
                )
            kwargs["alternative_names"] = tuple(str(n) for n in alternative_names if n is not None)

        localized_names = kwargs.get("localized_names")
        if localized_names is not None:
            if not isinstance(localized_names, Mapping):
                raise CountryDataFormatError(
                    "Error parsing country data JSON: 'localizedNames' must be an object"
                )
            kwargs["localized_names"] = {
                str(k): str(v) for k, v in localized_names.items() if v is not None
            }

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase JSON shape read by from_dict()."""
        return {
            "name": self.name,
            "officialName": self.official_name,
            "alpha2Code": self.alpha2,
            "alpha3Code": self.alpha3,
            "numericCode": self.numeric,
            "callingCode": self.calling_code,
            "region": self.region,
            "subregion": self.subregion,
            "alternativeNames": list(self.alternative_names),
            "localizedNames": dict(self.localized_names),
        }

    def to_row(self) -> Dict[str, Any]:
        """Flat snake_case mapping used for DataFrame rows."""
        return {
            "name": self.name,
            "official_name": self.official_name,
            "alpha2": self.alpha2,
            "alpha3": self.alpha3,
            "numeric": self.numeric,
            "calling_code": self.calling_code,
            "region": self.region,
            "subregion": self.subregion,
            "alternative_names": list(self.alternative_names),
            "localized_names": dict(self.localized_names),
        }


__all__ = [
    "CountryRecord",
]
