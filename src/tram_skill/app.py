"""Application wiring.

The catalog, preference store and schedule gateway are built once here and
passed explicitly to the engine, the tools and the webhook.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from mcp.server.fastmcp import FastMCP

from tram_skill.data.catalog import StopCatalog, load_catalog
from tram_skill.data.config import SkillConfig
from tram_skill.data.database import SnapshotRepository
from tram_skill.models.responses import HealthResponse
from tram_skill.services.intent_service import IntentDispatcher
from tram_skill.services.itinerary_service import ItineraryEngine
from tram_skill.services.persistence_service import PersistenceSync
from tram_skill.services.preference_store import InMemoryPreferenceStore
from tram_skill.services.schedule_service import HttpScheduleGateway, ScheduleGateway
from tram_skill.tools.alexa_webhook import register_alexa_webhook
from tram_skill.tools.itinerary_tools import register_itinerary_tools


@dataclass
class SkillRuntime:
    config: SkillConfig
    catalog: StopCatalog
    store: InMemoryPreferenceStore
    engine: ItineraryEngine
    dispatcher: IntentDispatcher
    sync: PersistenceSync


def build_runtime(
    config: SkillConfig,
    catalog: StopCatalog | None = None,
    gateway: ScheduleGateway | None = None,
) -> SkillRuntime:
    """Build the skill components from configuration.

    Args:
        config: Skill configuration.
        catalog: Stop catalog (default: loaded from config.network_path).
        gateway: Schedule gateway (default: the HTTP schedule source).
    """
    if catalog is None:
        catalog = load_catalog(config.network_path)
    if gateway is None:
        gateway = HttpScheduleGateway(config)

    store = InMemoryPreferenceStore()
    engine = ItineraryEngine(catalog, store, gateway, line_id=config.line_id)
    sync = PersistenceSync(
        store,
        SnapshotRepository(config.db_path),
        interval=config.sync_interval_seconds,
        max_bytes=config.max_snapshot_bytes,
    )
    return SkillRuntime(
        config=config,
        catalog=catalog,
        store=store,
        engine=engine,
        dispatcher=IntentDispatcher(engine),
        sync=sync,
    )


def health_response(stop_count: int) -> HealthResponse:
    """Build the health check response."""
    from tram_skill import __version__

    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
        stops=stop_count,
    )


def create_app(runtime: SkillRuntime) -> FastMCP:
    """Create the MCP server with the itinerary tools and the voice webhook."""
    mcp = FastMCP(
        "Tram Skill",
        instructions="Next tram departures on the Rouen network, with per-caller default stops",
        host=runtime.config.host,
        port=runtime.config.port,
    )

    @mcp.tool()
    def health() -> HealthResponse:
        """Check if the tram skill server is running and healthy.

        Returns the server status, version, current timestamp and stop count.
        """
        return health_response(len(runtime.catalog))

    register_itinerary_tools(mcp, runtime.engine)
    register_alexa_webhook(mcp, runtime.dispatcher)
    return mcp
