"""In-memory country table.

CountryStore owns the active table as an immutable tuple. The table is
loaded lazily on first access and memoised; replace() swaps in a new
tuple with a single reference assignment, so a reader that grabbed
`store.records` keeps a consistent snapshot for the whole operation.
"""

import logging
import threading
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, Tuple, Union

from countryidentity.countries.countryloader import load_default_countries
from countryidentity.countries.countryrecord import CountryRecord

logger = logging.getLogger(__name__)


class CountryStore:
    """Ordered, replaceable collection of CountryRecord.

    Args:
        records: Initial table. If None, the table is loaded on first
                 access from `path` or the default sources.
        path: Optional JSON file used for the lazy load
        loader: Optional zero-argument callable returning records; overrides
                the default loader (useful for tests and embedding)

    Examples:
        >>> store = CountryStore([CountryRecord(name="Canada", alpha2="CA")])
        >>> len(store)
        1
    """

    def __init__(
        self,
        records: Optional[Iterable[CountryRecord]] = None,
        *,
        path: Optional[Union[str, Path]] = None,
        loader: Optional[Callable[[], Iterable[CountryRecord]]] = None,
    ):
        self._path = path
        self._loader = loader
        self._lock = threading.Lock()
        self._records: Optional[Tuple[CountryRecord, ...]] = None
        if records is not None:
            self._records = _validate(records)

    @property
    def records(self) -> Tuple[CountryRecord, ...]:
        """The active table, loading it on first access."""
        records = self._records
        if records is None:
            with self._lock:
                if self._records is None:
                    self._records = self._load()
                records = self._records
        return records

    @property
    def is_loaded(self) -> bool:
        return self._records is not None

    def _load(self) -> Tuple[CountryRecord, ...]:
        if self._loader is not None:
            loaded = tuple(self._loader())
            logger.info(f"Loaded {len(loaded)} countries from custom loader")
            return loaded
        return tuple(load_default_countries(self._path))

    def replace(self, records: Iterable[CountryRecord]) -> None:
        """Replace the whole table.

        Readers see either the previous table or the new one, never a mix.
        A lazy load already in progress finishes first and is then
        superseded by the new table.

        Raises:
            ValueError: If records is None, empty, or contains non-records
        """
        new_records = _validate(records)
        with self._lock:
            self._records = new_records
        logger.info(f"Replaced country table with {len(new_records)} records")

    def reset(self) -> None:
        """Forget the current table so the next access reloads it."""
        with self._lock:
            self._records = None
        logger.info("Cleared country table cache")

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[CountryRecord]:
        return iter(self.records)


def _validate(records: Optional[Iterable[CountryRecord]]) -> Tuple[CountryRecord, ...]:
    if records is None:
        raise ValueError("Country list cannot be None or empty")
    records = tuple(records)
    if not records:
        raise ValueError("Country list cannot be None or empty")
    for record in records:
        if not isinstance(record, CountryRecord):
            raise ValueError(f"Expected CountryRecord, got {type(record).__name__}")
    return records


__all__ = [
    "CountryStore",
]
