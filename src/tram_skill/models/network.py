from pydantic import BaseModel, ConfigDict, Field


class Stop(BaseModel):
    """A tram stop from the static network data."""

    model_config = ConfigDict(frozen=True)

    stop_id: int = Field(description="Stop identifier used by the schedule source")
    section_id: int = Field(description="Topological section of the line (1=trunk)")
    display_names: tuple[str, ...] = Field(
        min_length=1, description="Known spellings, primary name first"
    )

    @property
    def name(self) -> str:
        """Primary display name."""
        return self.display_names[0]
