"""Shared utilities for CountryIdentity package."""

from countryidentity.utils.dataloader import (
    find_data_file,
    read_json_file,
    format_not_found_error,
)

__all__ = [
    # Data loading
    "find_data_file",
    "read_json_file",
    "format_not_found_error",
]
