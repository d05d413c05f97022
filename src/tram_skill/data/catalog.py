"""Static stop catalog loaded from the bundled network CSV.

Each non-empty line is ``name[,alias...],stop_id,section_id``. Stops keep the
file order, which is the canonical ordering used for direction inference.
"""

import csv
import logging
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from tram_skill.models.network import Stop

logger = logging.getLogger(__name__)

# Sample data: stop names of the Rouen line with placeholder stop ids. Real
# deployments point TRAM_NETWORK_PATH at the operator's stop export.
DEFAULT_NETWORK_PATH = Path(__file__).with_name("network.csv")


class CatalogError(ValueError):
    """Raised when the network data cannot be parsed."""


class StopCatalog:
    """Immutable, ordered collection of stops.

    Built once at startup and shared read-only by the resolvers.
    """

    def __init__(self, stops: list[Stop]) -> None:
        self._stops: tuple[Stop, ...] = tuple(stops)
        self._by_id: dict[int, Stop] = {}
        self._positions: dict[int, int] = {}
        for position, stop in enumerate(self._stops):
            if stop.stop_id in self._by_id:
                raise CatalogError(f"Duplicate stop_id {stop.stop_id}")
            self._by_id[stop.stop_id] = stop
            self._positions[stop.stop_id] = position

    def __iter__(self) -> Iterator[Stop]:
        return iter(self._stops)

    def __len__(self) -> int:
        return len(self._stops)

    def __contains__(self, stop_id: object) -> bool:
        return stop_id in self._by_id

    @property
    def stops(self) -> tuple[Stop, ...]:
        return self._stops

    def get(self, stop_id: int) -> Stop | None:
        return self._by_id.get(stop_id)

    def primary_name(self, stop_id: int) -> str | None:
        """First display name of the stop."""
        stop = self._by_id.get(stop_id)
        return stop.name if stop else None

    def position(self, stop_id: int) -> int | None:
        """Index of the stop in canonical (file) order."""
        return self._positions.get(stop_id)


def parse_network_line(line: list[str], line_number: int) -> Stop:
    """Build a Stop from one CSV row.

    Raises:
        CatalogError: If the ids are missing or not integers, or no name is given.
    """
    fields = [field.strip() for field in line]
    if len(fields) < 3:
        raise CatalogError(f"Line {line_number}: expected name(s), stop_id and section_id")

    try:
        section_id = int(fields[-1])
        stop_id = int(fields[-2])
    except ValueError as e:
        raise CatalogError(f"Line {line_number}: invalid identifier ({e})") from e

    names = tuple(name for name in fields[:-2] if name)
    try:
        return Stop(stop_id=stop_id, section_id=section_id, display_names=names)
    except ValidationError as e:
        raise CatalogError(f"Line {line_number}: {e.errors()[0]['msg']}") from e


def load_catalog(path: Path | None = None) -> StopCatalog:
    """Load the stop catalog from a network CSV file.

    Args:
        path: CSV path. Defaults to the bundled network.csv.

    Returns:
        StopCatalog with stops in file order.

    Raises:
        CatalogError: On malformed rows or duplicate stop ids.
        FileNotFoundError: If the file doesn't exist.
    """
    if path is None:
        path = DEFAULT_NETWORK_PATH

    stops: list[Stop] = []
    with open(path, encoding="utf-8-sig", newline="") as f:
        for line_number, row in enumerate(csv.reader(f), start=1):
            if not row or not any(field.strip() for field in row):
                continue
            stops.append(parse_network_line(row, line_number))

    catalog = StopCatalog(stops)
    logger.info(f"Loaded {len(catalog)} stops from {path}")
    return catalog
