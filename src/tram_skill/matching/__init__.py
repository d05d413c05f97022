"""Stop and direction resolution."""

from tram_skill.matching.direction_matcher import (
    SECTION_DIRECTIONS,
    UnknownStopError,
    resolve_direction,
)
from tram_skill.matching.models import Direction, StopMatch
from tram_skill.matching.stop_matcher import resolve_stop

__all__ = [
    # Resolvers
    "resolve_stop",
    "resolve_direction",
    # Models
    "Direction",
    "StopMatch",
    # Topology
    "SECTION_DIRECTIONS",
    "UnknownStopError",
]
