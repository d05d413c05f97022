import json
import re

import httpx

from tram_skill.data.config import SkillConfig
from tram_skill.models.errors import NetworkFailure, ScheduleUnavailable

NO_DEPARTURE_MARKER = "Pas de prochain"

# Minutes are rendered as "<number> <abbr title="minutes">min</abbr>"; longer
# digit runs are not a departure time
MINUTES_PATTERN = re.compile(r"(?<!\d)(\d{1,4})\s*(?:&nbsp;)?\s*<abbr title=\"minutes\">")
MINUTES_MARKER = '<abbr title="minutes">'


def parse_next_departure(markup: str) -> int | None:
    """Extract the minutes until the next departure from the schedule page.

    Args:
        markup: HTML fragment returned by the schedule source.

    Returns:
        Minutes until the next departure, or None if the page states that
        there is no upcoming departure.

    Raises:
        ScheduleUnavailable: If the page has neither a departure time nor the
            no-departure notice, or the time is not an integer.
    """
    if NO_DEPARTURE_MARKER in markup:
        return None

    marker_index = markup.find(MINUTES_MARKER)
    if marker_index == -1:
        raise ScheduleUnavailable("No departure time in schedule response")

    match = MINUTES_PATTERN.search(markup)
    # the number must belong to the first minutes marker
    if match is None or match.end() != marker_index + len(MINUTES_MARKER):
        raise ScheduleUnavailable("Invalid departure time in schedule response")

    return int(match.group(1))


class ScheduleClient:
    """Async HTTP client for the next-departure page of the schedule source.

    Usage:
        async with ScheduleClient(config) as client:
            minutes = await client.fetch_next_departure(stop_id, line_id, direction)
    """

    def __init__(self, config: SkillConfig):
        """Initialize the client.

        Args:
            config: Configuration with schedule URL and timeout.
        """
        self._config = config
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "ScheduleClient":
        """Enter async context - create HTTP client."""
        headers = {"User-Agent": self._config.user_agent}
        self._client = httpx.AsyncClient(
            headers=headers, timeout=self._config.http_timeout_seconds
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context - close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch_markup(self, stop_id: int, line_id: int, direction: int) -> str:
        """Fetch the raw next-departure markup.

        Raises:
            RuntimeError: If client not initialized.
            NetworkFailure: On transport errors, timeouts or error statuses.
        """
        if not self._client:
            raise RuntimeError("Client not initialized - use 'async with'")

        form = {
            "destinations": json.dumps({"1": ""}, separators=(",", ":")),
            "stopId": str(stop_id),
            "lineId": str(line_id),
            "sens": str(direction),
        }
        try:
            response = await self._client.post(self._config.schedule_url, data=form)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise NetworkFailure(f"Schedule request failed: {e}") from e

        return response.text

    async def fetch_next_departure(
        self, stop_id: int, line_id: int, direction: int
    ) -> int | None:
        """Fetch and parse the minutes until the next departure.

        Returns:
            Minutes until departure, or None if no departure is announced.

        Raises:
            NetworkFailure: If the source could not be reached.
            ScheduleUnavailable: If the response could not be interpreted.
        """
        markup = await self.fetch_markup(stop_id, line_id, direction)
        return parse_next_departure(markup)
