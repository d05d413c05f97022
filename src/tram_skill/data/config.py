from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SkillConfig(BaseSettings):
    """Configuration for the tram skill webhook.

    Automatically loads from environment variables and .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8080, alias="PORT")

    # Schedule source (next departure page of the Astuce network)
    schedule_url: str = Field(
        default="https://www.reseau-astuce.fr/fr/horaires-a-larret/28/StopTimeTable/NextDeparture",
        alias="TRAM_SCHEDULE_URL",
    )
    # placeholder line id, set TRAM_LINE_ID for a real deployment
    line_id: int = Field(default=90, alias="TRAM_LINE_ID")
    http_timeout_seconds: float = Field(default=10.0, alias="TRAM_HTTP_TIMEOUT")
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/58.0.3029.110 Safari/537.3"
    )

    # Static network data (defaults to the bundled network.csv)
    network_path: Path | None = Field(default=None, alias="TRAM_NETWORK_PATH")

    # Preference persistence
    db_path: Path = Field(default=Path("data/preferences.db"), alias="TRAM_DB_PATH")
    sync_interval_seconds: float = Field(default=180.0, alias="TRAM_SYNC_INTERVAL")
    max_snapshot_bytes: int = Field(default=50_000_000, alias="TRAM_MAX_SNAPSHOT_BYTES")


@lru_cache
def get_skill_config() -> SkillConfig:
    """Get skill configuration (cached singleton).

    Returns:
        SkillConfig with values from .env file or environment variables.
    """
    return SkillConfig()
