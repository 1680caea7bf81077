"""Shared data loading utilities.

This module provides data file discovery across package data and
development directories, JSON file reading, and the formatted
"not found" message used when no data source is available.
"""

import json
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union


def find_data_file(
    module_file: str,
    subdirectory: str,
    filenames: List[str],
    search_dev_tables: bool = True,
    module_local_data: bool = False,
) -> Optional[Path]:
    """Find data file by searching standard locations.

    Search priority:
    1. Module-local data: {module_dir}/data/ (if module_local_data=True)
    2. Package data: countryidentity/data/{subdirectory}/
    3. Development data: tables/{subdirectory}/ (if search_dev_tables=True)

    Args:
        module_file: __file__ from the calling module
        subdirectory: Subdirectory name (e.g., 'countries')
        filenames: Candidate filenames in priority order (e.g., ['countries.json'])
        search_dev_tables: Whether to search the tables/ directory for dev data
        module_local_data: If True, search module_dir/data/ first

    Returns:
        Path to found file, or None if not found

    Examples:
        >>> # From countries/countryloader.py (data is in countries/data/)
        >>> path = find_data_file(__file__, 'countries', ['countries.json'],
        ...                       module_local_data=True)
    """
    module_dir = Path(module_file).parent
    pkg_dir = module_dir.parent

    candidates = []
    if module_local_data:
        candidates.append(module_dir / "data")
    candidates.append(pkg_dir / "data" / subdirectory)
    if search_dev_tables:
        candidates.append(pkg_dir.parent / "tables" / subdirectory)

    for data_dir in candidates:
        for filename in filenames:
            p = data_dir / filename
            if p.is_file():
                return p

    return None


def read_json_file(file_path: Union[str, Path]) -> Any:
    """Read and decode a UTF-8 JSON file.

    A leading byte-order mark is tolerated.

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the content is not valid JSON
    """
    with open(file_path, "r", encoding="utf-8-sig") as f:
        return json.load(f)


def format_not_found_error(
    subdirectory: str,
    searched_locations: List[Tuple[str, Any]],
    fix_instructions: List[str],
) -> str:
    """Format a helpful error message for a missing data source.

    Args:
        subdirectory: Data subdirectory name (e.g., 'countries')
        searched_locations: List of (description, path) tuples for locations searched
        fix_instructions: List of commands/instructions to fix the issue

    Returns:
        Formatted error message string
    """
    lines = [f"No {subdirectory} data found in standard locations.\n"]

    lines.append("Searched:")
    for i, (desc, path) in enumerate(searched_locations, 1):
        lines.append(f"  {i}. {desc}: {path}")

    lines.append("\nTo fix:")
    for instruction in fix_instructions:
        lines.append(f"  • {instruction}")

    return "\n".join(lines)


__all__ = [
    "find_data_file",
    "read_json_file",
    "format_not_found_error",
]
