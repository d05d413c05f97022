from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from tram_skill.matching.models import StopMatch
from tram_skill.matching.stop_matcher import resolve_stop as _resolve_stop
from tram_skill.models.errors import ItineraryError
from tram_skill.models.responses import ItineraryAnswer
from tram_skill.services import speech
from tram_skill.services.itinerary_service import ItineraryEngine


def register_itinerary_tools(mcp: FastMCP, engine: ItineraryEngine) -> None:
    """Register the itinerary tools on the MCP server."""

    @mcp.tool()
    def resolve_stop(name: str) -> StopMatch:
        """Resolve a spoken place name to the closest tram stop.

        Uses edit distance over every known stop name and alias. There is no
        threshold: the closest stop is always returned, check `distance`
        (0 = exact) to judge the match.

        Args:
            name: Place name, e.g. "Theatre des Arts".

        Returns:
            StopMatch with stop_id, primary stop_name, matched alias and distance.
        """
        match = _resolve_stop(name, engine.catalog)
        if match is None:
            raise ToolError("The network data has no stops")
        return match

    @mcp.tool()
    async def get_leave_time(
        caller_id: str,
        departure: str | None = None,
        destination: str | None = None,
    ) -> ItineraryAnswer:
        """Get how many minutes are left before leaving for the next tram.

        Omitted stops fall back to the caller's stored defaults; a stored
        departure also brings the caller's lead time, which is subtracted
        from the minutes until departure (never below 0).

        Args:
            caller_id: Caller identifier used for stored defaults.
            departure: Departure place name (default: stored departure).
            destination: Destination place name (default: stored destination).

        Returns:
            ItineraryAnswer with raw minutes, lead time and wait_minutes.
            has_departure is False when no tram is announced.
        """
        try:
            return await engine.leave_time(caller_id, departure, destination)
        except ItineraryError as e:
            raise ToolError(speech.error_text(e)) from e
