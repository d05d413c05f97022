"""Schedule gateway: next departure lookups against the live source.

The gateway never raises for source failures. Every outcome, including
transport errors and unparsable pages, comes back as a ScheduleResult so the
itinerary engine can phrase it.
"""

import logging
from enum import Enum
from typing import Protocol

from pydantic import BaseModel, Field

from tram_skill.data.config import SkillConfig
from tram_skill.data.schedule_client import ScheduleClient
from tram_skill.matching.models import Direction
from tram_skill.models.errors import NetworkFailure, ScheduleUnavailable

logger = logging.getLogger(__name__)


class ScheduleStatus(str, Enum):
    DEPARTURE = "departure"
    NO_DEPARTURE = "no_departure"
    NETWORK_FAILURE = "network_failure"
    UNAVAILABLE = "unavailable"


class ScheduleResult(BaseModel):
    """Outcome of one next-departure lookup."""

    status: ScheduleStatus
    minutes: int | None = Field(
        default=None, ge=0, description="Minutes until departure (status=departure only)"
    )
    reason: str | None = Field(default=None, description="Failure description")

    @classmethod
    def departure(cls, minutes: int) -> "ScheduleResult":
        return cls(status=ScheduleStatus.DEPARTURE, minutes=minutes)

    @classmethod
    def no_departure(cls) -> "ScheduleResult":
        return cls(status=ScheduleStatus.NO_DEPARTURE)

    @classmethod
    def network_failure(cls, reason: str) -> "ScheduleResult":
        return cls(status=ScheduleStatus.NETWORK_FAILURE, reason=reason)

    @classmethod
    def unavailable(cls, reason: str) -> "ScheduleResult":
        return cls(status=ScheduleStatus.UNAVAILABLE, reason=reason)


class ScheduleGateway(Protocol):
    """Source of next-departure times."""

    async def next_departure(
        self, stop_id: int, line_id: int, direction: Direction
    ) -> ScheduleResult: ...


class HttpScheduleGateway:
    """Gateway backed by the schedule source's web page.

    Performs exactly one request per lookup, without retries.
    """

    def __init__(self, config: SkillConfig):
        self._config = config

    async def next_departure(
        self, stop_id: int, line_id: int, direction: Direction
    ) -> ScheduleResult:
        try:
            async with ScheduleClient(self._config) as client:
                minutes = await client.fetch_next_departure(stop_id, line_id, int(direction))
        except NetworkFailure as e:
            logger.warning(f"Schedule source unreachable for stop {stop_id}: {e}")
            return ScheduleResult.network_failure(str(e))
        except ScheduleUnavailable as e:
            logger.warning(f"Unexpected schedule response for stop {stop_id}: {e}")
            return ScheduleResult.unavailable(str(e))

        if minutes is None:
            logger.debug(f"No upcoming departure at stop {stop_id} (sens={int(direction)})")
            return ScheduleResult.no_departure()

        logger.debug(f"Next departure at stop {stop_id} in {minutes} min")
        return ScheduleResult.departure(minutes)
