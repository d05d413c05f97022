import argparse
import asyncio
import contextlib
import logging
from pathlib import Path

from tram_skill.app import build_runtime, create_app
from tram_skill.data.catalog import CatalogError, load_catalog
from tram_skill.data.config import get_skill_config

logger = logging.getLogger(__name__)


async def serve() -> None:
    """Run the HTTP server with background preference sync."""
    config = get_skill_config()
    if config.network_path is None:
        logger.warning(
            "TRAM_NETWORK_PATH is not set, using the bundled sample network "
            "(placeholder stop ids)"
        )
    runtime = build_runtime(config)
    await runtime.sync.load()

    mcp = create_app(runtime)
    sync_task = asyncio.create_task(runtime.sync.run())
    try:
        logger.info(f"Listening on {config.host}:{config.port}")
        await mcp.run_streamable_http_async()
    finally:
        sync_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sync_task
        # last chance to persist changes made since the previous cycle
        await runtime.sync.sync_once()


def check_network(path: Path | None) -> int:
    """Validate a network CSV file and print its stops."""
    try:
        catalog = load_catalog(path)
    except (CatalogError, FileNotFoundError) as e:
        print(f"Invalid network data: {e}")
        return 1

    print(f"{len(catalog)} stops:")
    for stop in catalog:
        aliases = ", ".join(stop.display_names[1:])
        suffix = f" ({aliases})" if aliases else ""
        print(f"  [{stop.section_id}] {stop.stop_id:>6}  {stop.name}{suffix}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="tram-skill",
        description="Next tram voice skill webhook",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    subparsers = parser.add_subparsers(dest="command")

    # serve command (default)
    subparsers.add_parser("serve", help="Run the webhook and MCP server")

    # check-network command
    check_parser = subparsers.add_parser(
        "check-network",
        help="Validate a network CSV file",
    )
    check_parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=None,
        help="Path to the network CSV (default: bundled network.csv)",
    )

    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "check-network":
        raise SystemExit(check_network(args.path))

    asyncio.run(serve())


if __name__ == "__main__":
    main()
