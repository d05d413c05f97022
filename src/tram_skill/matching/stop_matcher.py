"""Edit-distance matching of spoken place names to catalog stops."""

from rapidfuzz.distance import Levenshtein

from tram_skill.data.catalog import StopCatalog
from tram_skill.matching.models import StopMatch


def resolve_stop(name: str, catalog: StopCatalog) -> StopMatch | None:
    """Resolve a place name to the closest stop of the catalog.

    Compares ``name`` against every display name of every stop using a
    case-sensitive Levenshtein distance. The smallest distance wins; on ties
    the first stop in catalog order is kept.

    There is no similarity threshold: any non-empty catalog yields a match,
    even for unrelated input. The distance is returned so callers can inspect
    how close the match was.

    Args:
        name: Place name as transcribed by the voice platform.
        catalog: Stop catalog to search.

    Returns:
        StopMatch for the closest stop, or None if the catalog is empty.
    """
    best: StopMatch | None = None

    for stop in catalog:
        for display_name in stop.display_names:
            distance = Levenshtein.distance(display_name, name)
            if best is None or distance < best.distance:
                best = StopMatch(
                    stop_id=stop.stop_id,
                    stop_name=stop.name,
                    matched_name=display_name,
                    distance=distance,
                )
                if distance == 0:
                    return best

    return best
