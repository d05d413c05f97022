"""Shared fixtures: a small network, a fake schedule gateway and an engine."""

from pathlib import Path

import pytest

from tram_skill.data.catalog import StopCatalog, load_catalog
from tram_skill.matching.models import Direction
from tram_skill.services.itinerary_service import ItineraryEngine
from tram_skill.services.preference_store import InMemoryPreferenceStore
from tram_skill.services.schedule_service import ScheduleResult

LINE_ID = 90

NETWORK_CSV = (
    "CentralStation,Central,1,1\n"
    "Museum,2,1\n"
    "\n"
    "Airport,Aéroport,3,2\n"
    "Harbour,4,3\n"
    "Stadium,5,1\n"
)


class FakeScheduleGateway:
    """Returns a canned result and records every lookup."""

    def __init__(self, result: ScheduleResult | None = None):
        self.result = result or ScheduleResult.departure(12)
        self.calls: list[tuple[int, int, Direction]] = []

    async def next_departure(
        self, stop_id: int, line_id: int, direction: Direction
    ) -> ScheduleResult:
        self.calls.append((stop_id, line_id, direction))
        return self.result


@pytest.fixture
def network_csv(tmp_path: Path) -> Path:
    path = tmp_path / "network.csv"
    path.write_text(NETWORK_CSV, encoding="utf-8")
    return path


@pytest.fixture
def catalog(network_csv: Path) -> StopCatalog:
    return load_catalog(network_csv)


@pytest.fixture
def store() -> InMemoryPreferenceStore:
    return InMemoryPreferenceStore()


@pytest.fixture
def gateway() -> FakeScheduleGateway:
    return FakeScheduleGateway()


@pytest.fixture
def engine(
    catalog: StopCatalog, store: InMemoryPreferenceStore, gateway: FakeScheduleGateway
) -> ItineraryEngine:
    return ItineraryEngine(catalog, store, gateway, line_id=LINE_ID)
