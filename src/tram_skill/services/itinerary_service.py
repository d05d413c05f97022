"""Itinerary engine: how long before the caller has to leave for the tram.

Each request runs sequentially:
1. Resolve the departure stop (spoken name, else stored default)
2. Resolve the destination stop (spoken name, else stored default)
3. Infer the direction from the line topology
4. Ask the schedule gateway for the next departure (the only I/O step)
5. Subtract the caller's lead time

Lead time policy: when the tram leaves in as many minutes as the lead time or
fewer, the wait is reported as 0 ("leave now") rather than as a missed tram.
"""

import logging

from tram_skill.data.catalog import StopCatalog
from tram_skill.matching.direction_matcher import resolve_direction
from tram_skill.matching.stop_matcher import resolve_stop
from tram_skill.models.errors import (
    MissingDeparture,
    MissingDestination,
    NetworkFailure,
    ScheduleUnavailable,
    UnknownStop,
)
from tram_skill.models.network import Stop
from tram_skill.models.responses import ItineraryAnswer, StopInfo
from tram_skill.services.preference_store import PreferenceStore
from tram_skill.services.schedule_service import (
    ScheduleGateway,
    ScheduleResult,
    ScheduleStatus,
)

logger = logging.getLogger(__name__)


def compute_wait_minutes(minutes_until_departure: int, lead_minutes: int) -> int:
    """Minutes left before the caller must leave.

    Never negative: a tram leaving within the lead time gives 0.
    """
    return max(0, minutes_until_departure - lead_minutes)


class ItineraryEngine:
    """Answers next-tram questions for one deployment line."""

    def __init__(
        self,
        catalog: StopCatalog,
        store: PreferenceStore,
        gateway: ScheduleGateway,
        line_id: int,
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.gateway = gateway
        self.line_id = line_id

    def find_stop(self, name: str) -> Stop:
        """Resolve a spoken place name to a catalog stop.

        Raises:
            UnknownStop: If the catalog is empty.
        """
        match = resolve_stop(name, self.catalog)
        if match is None:
            raise UnknownStop(name)
        if not match.exact:
            logger.debug(
                f"Resolved {name!r} to {match.matched_name!r} (distance {match.distance})"
            )
        return self.catalog.get(match.stop_id)

    def _resolve_departure(
        self, caller_id: str, departure_name: str | None
    ) -> tuple[Stop, int, bool]:
        if departure_name:
            return self.find_stop(departure_name), 0, False

        default = self.store.get_departure(caller_id)
        if default is None:
            raise MissingDeparture("No departure given and no default departure stored")
        return self._stored_stop(default.stop_id), default.lead_minutes, True

    def _resolve_destination(self, caller_id: str, destination_name: str | None) -> Stop:
        if destination_name:
            return self.find_stop(destination_name)

        stop_id = self.store.get_destination(caller_id)
        if stop_id is None:
            raise MissingDestination("No destination given and no default destination stored")
        return self._stored_stop(stop_id)

    def _stored_stop(self, stop_id: int) -> Stop:
        stop = self.catalog.get(stop_id)
        if stop is None:
            # network data changed since the preference was saved
            raise UnknownStop(str(stop_id))
        return stop

    async def leave_time(
        self,
        caller_id: str,
        departure_name: str | None = None,
        destination_name: str | None = None,
    ) -> ItineraryAnswer:
        """Compute how long the caller can wait before leaving for the next tram.

        Args:
            caller_id: Opaque caller identifier.
            departure_name: Spoken departure name; stored default when omitted.
            destination_name: Spoken destination name; stored default when omitted.

        Returns:
            ItineraryAnswer with stop names, raw minutes, lead time and wait.
            has_departure is False when the source announces no upcoming tram.

        Raises:
            UnknownStop: A name could not be resolved.
            MissingDeparture / MissingDestination: Nothing spoken, nothing stored.
            NetworkFailure: The schedule source could not be reached.
            ScheduleUnavailable: The schedule response could not be interpreted.
        """
        departure, lead_minutes, from_default = self._resolve_departure(
            caller_id, departure_name
        )
        destination = self._resolve_destination(caller_id, destination_name)
        direction = resolve_direction(departure.stop_id, destination.stop_id, self.catalog)

        result: ScheduleResult = await self.gateway.next_departure(
            departure.stop_id, self.line_id, direction
        )
        if result.status == ScheduleStatus.NETWORK_FAILURE:
            raise NetworkFailure(result.reason or "Schedule source unreachable")
        if result.status == ScheduleStatus.UNAVAILABLE:
            raise ScheduleUnavailable(result.reason or "Schedule unavailable")

        wait_minutes = None
        if result.status == ScheduleStatus.DEPARTURE:
            wait_minutes = compute_wait_minutes(result.minutes, lead_minutes)

        return ItineraryAnswer(
            departure=StopInfo(stop_id=departure.stop_id, stop_name=departure.name),
            destination=StopInfo(stop_id=destination.stop_id, stop_name=destination.name),
            direction=direction,
            departure_is_default=from_default,
            has_departure=result.status == ScheduleStatus.DEPARTURE,
            minutes_until_departure=result.minutes,
            lead_minutes=lead_minutes,
            wait_minutes=wait_minutes,
        )

    def set_default_departure(self, caller_id: str, name: str, lead_minutes: int = 0) -> Stop:
        """Store the caller's default departure stop and lead time."""
        stop = self.find_stop(name)
        self.store.set_departure(caller_id, stop.stop_id, lead_minutes)
        logger.info(f"Default departure set to {stop.stop_id} (lead {lead_minutes} min)")
        return stop

    def set_default_destination(self, caller_id: str, name: str) -> Stop:
        """Store the caller's default destination stop."""
        stop = self.find_stop(name)
        self.store.set_destination(caller_id, stop.stop_id)
        logger.info(f"Default destination set to {stop.stop_id}")
        return stop

    def clear_defaults(self, caller_id: str) -> None:
        """Forget the caller's stored departure and destination."""
        self.store.clear_all(caller_id)
