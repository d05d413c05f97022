"""Travel direction inference from line topology."""

from tram_skill.data.catalog import StopCatalog
from tram_skill.matching.models import Direction

# Section ids of the Rouen line: 1=city trunk, 2=Georges Braque branch,
# 3=Technopôle branch. Pairs not listed fall back to catalog order.
SECTION_DIRECTIONS: dict[tuple[int, int], Direction] = {
    (1, 2): Direction.A,  # trunk -> Georges Braque
    (1, 3): Direction.A,  # trunk -> Technopôle
    (2, 1): Direction.B,  # Georges Braque -> trunk
    (3, 1): Direction.B,  # Technopôle -> trunk
    (2, 3): Direction.A,  # between branches
    (3, 2): Direction.A,
}


class UnknownStopError(LookupError):
    """Raised when a stop id is not in the catalog."""


def resolve_direction(
    from_stop_id: int,
    to_stop_id: int,
    catalog: StopCatalog,
    overrides: dict[tuple[int, int], Direction] | None = None,
) -> Direction:
    """Infer which schedule direction to query between two stops.

    Resolution order:
    1. Section-pair override table
    2. Catalog order: travelling towards an earlier stop is direction B,
       anything else is direction A

    Args:
        from_stop_id: Departure stop id.
        to_stop_id: Destination stop id.
        catalog: Stop catalog providing sections and canonical order.
        overrides: Section-pair table (defaults to SECTION_DIRECTIONS).

    Returns:
        Direction token for the schedule query.

    Raises:
        UnknownStopError: If either stop id is not in the catalog.
    """
    if overrides is None:
        overrides = SECTION_DIRECTIONS

    from_stop = catalog.get(from_stop_id)
    to_stop = catalog.get(to_stop_id)
    if from_stop is None or to_stop is None:
        missing = from_stop_id if from_stop is None else to_stop_id
        raise UnknownStopError(f"Stop {missing} is not in the network data")

    section_pair = (from_stop.section_id, to_stop.section_id)
    if section_pair in overrides:
        return overrides[section_pair]

    if catalog.position(from_stop_id) > catalog.position(to_stop_id):
        return Direction.B
    return Direction.A
