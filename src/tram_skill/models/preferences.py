from pydantic import BaseModel, ConfigDict, Field


class DefaultDeparture(BaseModel):
    """A caller's default departure stop and lead time."""

    model_config = ConfigDict(frozen=True)

    stop_id: int
    lead_minutes: int = Field(
        default=0, ge=0, description="Minutes needed to reach the stop (0=no lead time)"
    )


class PreferenceSnapshot(BaseModel):
    """Full copy of the preference store, as persisted.

    Departures are stored as ``[stop_id, lead_minutes]`` pairs.
    """

    default_departures: dict[str, tuple[int, int]] = Field(default_factory=dict)
    default_destinations: dict[str, int] = Field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.default_departures and not self.default_destinations
