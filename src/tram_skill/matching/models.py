from enum import IntEnum

from pydantic import BaseModel, Field


class Direction(IntEnum):
    """Schedule query direction (the source's ``sens`` parameter)."""

    A = 1
    B = 2


class StopMatch(BaseModel):
    """The closest catalog stop for a spoken place name."""

    stop_id: int
    stop_name: str = Field(description="Primary display name of the stop")
    matched_name: str = Field(description="Display name or alias that matched")
    distance: int = Field(description="Levenshtein edit distance (0=exact)")

    @property
    def exact(self) -> bool:
        return self.distance == 0
