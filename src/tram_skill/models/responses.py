from pydantic import BaseModel, Field

from tram_skill.matching.models import Direction


class StopInfo(BaseModel):
    stop_id: int
    stop_name: str


class ItineraryAnswer(BaseModel):
    """Next departure between two stops, adjusted by the caller's lead time."""

    departure: StopInfo
    destination: StopInfo
    direction: Direction
    departure_is_default: bool = Field(description="Departure came from stored preferences")
    has_departure: bool = Field(description="False if the source announces no upcoming tram")
    minutes_until_departure: int | None = Field(
        default=None, description="Raw minutes until the tram leaves the departure stop"
    )
    lead_minutes: int = Field(default=0, description="Caller's lead time (0=none)")
    wait_minutes: int | None = Field(
        default=None,
        description="Minutes left before the caller must leave (0=leave now)",
    )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    stops: int = Field(description="Number of stops in the network data")
