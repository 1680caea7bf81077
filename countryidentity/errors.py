"""Exceptions raised by country data loading and table replacement.

Lookups never raise for "no match"; they return None. Only I/O and
mutation operations raise, using these classes or the built-in
ValueError / FileNotFoundError.
"""


class CountryDataFormatError(ValueError):
    """Country data exists but cannot be parsed into records."""


class CountryDataUnavailableError(RuntimeError):
    """No country data source could be found for the default table."""


__all__ = [
    "CountryDataFormatError",
    "CountryDataUnavailableError",
]
