"""Dispatch of voice intents to the itinerary engine.

Every failure is turned into a spoken message here; handle() never raises
for request-level problems.
"""

import logging
import math
import re

from pydantic import BaseModel, Field

from tram_skill.models.errors import (
    InvalidLeadTime,
    ItineraryError,
    MissingDeparture,
    MissingDestination,
    UnsupportedIntent,
)
from tram_skill.services import speech
from tram_skill.services.itinerary_service import ItineraryEngine

logger = logging.getLogger(__name__)

LEAVE_TIME_INTENT = "LeaveTimeIntent"
SET_DEFAULT_DEPARTURE_INTENT = "SetDefaultDeparture"
SET_DEFAULT_DESTINATION_INTENT = "SetDefaultDestination"
CLEAR_DEFAULTS_INTENT = "ClearDefaults"
HELP_INTENT = "AMAZON.HelpIntent"
STOP_INTENTS = ("AMAZON.StopIntent", "AMAZON.CancelIntent")

DEPARTURE_SLOT = "depart"
DESTINATION_SLOT = "destination"
LEAD_TIME_SLOT = "temps"

# ISO-8601 duration as produced by AMAZON.DURATION, e.g. PT10M, PT1H5M
ISO_DURATION_PATTERN = re.compile(
    r"^P(?:(?P<days>\d{1,3})D)?"
    r"(?:T(?:(?P<hours>\d{1,4})H)?(?:(?P<minutes>\d{1,5})M)?(?:(?P<seconds>\d{1,6})S)?)?$",
    re.ASCII,
)
CLOCK_PATTERN = re.compile(r"^(?P<hours>\d{1,2}):(?P<minutes>\d{2})$", re.ASCII)
MINUTES_PATTERN = re.compile(r"^\d{1,5}$", re.ASCII)


def parse_lead_time(value: str) -> int:
    """Parse a lead time slot value into whole minutes.

    Accepts ISO-8601 durations ("PT10M", "PT1H5M", seconds rounded up),
    clock literals read as a duration ("00:10") and bare integers ("10").
    Only ASCII digits are accepted.

    Raises:
        InvalidLeadTime: If the value is not understood.
    """
    text = value.strip().upper()

    if MINUTES_PATTERN.match(text):
        return int(text)

    match = CLOCK_PATTERN.match(text)
    if match:
        return int(match["hours"]) * 60 + int(match["minutes"])

    match = ISO_DURATION_PATTERN.match(text)
    if match and text not in ("P", "PT"):
        parts = {key: int(group or 0) for key, group in match.groupdict().items()}
        total_seconds = (
            parts["days"] * 86400 + parts["hours"] * 3600 + parts["minutes"] * 60 + parts["seconds"]
        )
        return math.ceil(total_seconds / 60)

    raise InvalidLeadTime(value)


class IntentRequestData(BaseModel):
    """An intent already extracted from the voice platform envelope."""

    name: str
    caller_id: str
    slots: dict[str, str | None] = Field(default_factory=dict)

    def slot(self, name: str) -> str | None:
        """Slot value, or None if absent or blank."""
        value = self.slots.get(name)
        if value is None or not value.strip():
            return None
        return value.strip()


class IntentOutcome(BaseModel):
    """Text to speak back, and whether the request succeeded."""

    success: bool
    text: str
    end_session: bool = False


class IntentDispatcher:
    """Routes intents to the itinerary engine and phrases the outcome."""

    def __init__(self, engine: ItineraryEngine):
        self.engine = engine

    async def handle(self, intent: IntentRequestData) -> IntentOutcome:
        try:
            text, end_session = await self._dispatch(intent)
        except ItineraryError as e:
            logger.info(f"{intent.name} failed: {type(e).__name__}: {e}")
            return IntentOutcome(success=False, text=speech.error_text(e))
        return IntentOutcome(success=True, text=text, end_session=end_session)

    async def _dispatch(self, intent: IntentRequestData) -> tuple[str, bool]:
        if intent.name == LEAVE_TIME_INTENT:
            answer = await self.engine.leave_time(
                intent.caller_id,
                departure_name=intent.slot(DEPARTURE_SLOT),
                destination_name=intent.slot(DESTINATION_SLOT),
            )
            return speech.answer_text(answer), False

        if intent.name == SET_DEFAULT_DEPARTURE_INTENT:
            name = intent.slot(DEPARTURE_SLOT)
            if name is None:
                raise MissingDeparture("Departure slot is empty")
            lead_value = intent.slot(LEAD_TIME_SLOT)
            lead_minutes = parse_lead_time(lead_value) if lead_value else 0
            stop = self.engine.set_default_departure(intent.caller_id, name, lead_minutes)
            return speech.departure_saved_text(stop, lead_minutes), False

        if intent.name == SET_DEFAULT_DESTINATION_INTENT:
            name = intent.slot(DESTINATION_SLOT)
            if name is None:
                raise MissingDestination("Destination slot is empty")
            stop = self.engine.set_default_destination(intent.caller_id, name)
            return speech.destination_saved_text(stop), False

        if intent.name == CLEAR_DEFAULTS_INTENT:
            self.engine.clear_defaults(intent.caller_id)
            return speech.defaults_cleared_text(), False

        if intent.name == HELP_INTENT:
            return speech.HELP_TEXT, False

        if intent.name in STOP_INTENTS:
            return speech.GOODBYE_TEXT, True

        raise UnsupportedIntent(intent.name)
