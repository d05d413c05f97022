"""Per-caller default departure and destination stops."""

import threading
from typing import Protocol

from tram_skill.models.preferences import DefaultDeparture, PreferenceSnapshot


class PreferenceStore(Protocol):
    """Caller preferences, keyed by the voice platform's user id."""

    def get_departure(self, caller_id: str) -> DefaultDeparture | None: ...

    def set_departure(self, caller_id: str, stop_id: int, lead_minutes: int = 0) -> None: ...

    def get_destination(self, caller_id: str) -> int | None: ...

    def set_destination(self, caller_id: str, stop_id: int) -> None: ...

    def clear_all(self, caller_id: str) -> None: ...


class InMemoryPreferenceStore:
    """Thread-safe in-memory preference store.

    A single lock guards both mappings and is held only for the duration of
    one operation, so readers never see a half-written preference. Departure
    and destination are independent: concurrent updates of one never touch
    the other.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._departures: dict[str, DefaultDeparture] = {}
        self._destinations: dict[str, int] = {}

    def get_departure(self, caller_id: str) -> DefaultDeparture | None:
        with self._lock:
            return self._departures.get(caller_id)

    def set_departure(self, caller_id: str, stop_id: int, lead_minutes: int = 0) -> None:
        """Set (or replace) the caller's default departure.

        Raises:
            ValueError: If lead_minutes is negative.
        """
        if lead_minutes < 0:
            raise ValueError(f"lead_minutes must be >= 0, got {lead_minutes}")
        departure = DefaultDeparture(stop_id=stop_id, lead_minutes=lead_minutes)
        with self._lock:
            self._departures[caller_id] = departure

    def get_destination(self, caller_id: str) -> int | None:
        with self._lock:
            return self._destinations.get(caller_id)

    def set_destination(self, caller_id: str, stop_id: int) -> None:
        with self._lock:
            self._destinations[caller_id] = stop_id

    def clear_all(self, caller_id: str) -> None:
        """Forget everything stored for the caller. No-op if nothing is stored."""
        with self._lock:
            self._departures.pop(caller_id, None)
            self._destinations.pop(caller_id, None)

    def __len__(self) -> int:
        """Number of callers with at least one stored preference."""
        with self._lock:
            return len(self._departures.keys() | self._destinations.keys())

    def snapshot(self) -> PreferenceSnapshot:
        """Copy the whole store."""
        with self._lock:
            departures = {
                caller_id: (departure.stop_id, departure.lead_minutes)
                for caller_id, departure in self._departures.items()
            }
            destinations = dict(self._destinations)
        return PreferenceSnapshot(
            default_departures=departures,
            default_destinations=destinations,
        )

    def restore(self, snapshot: PreferenceSnapshot) -> None:
        """Replace the store content with a snapshot."""
        departures = {
            caller_id: DefaultDeparture(stop_id=stop_id, lead_minutes=lead_minutes)
            for caller_id, (stop_id, lead_minutes) in snapshot.default_departures.items()
        }
        with self._lock:
            self._departures = departures
            self._destinations = dict(snapshot.default_destinations)
