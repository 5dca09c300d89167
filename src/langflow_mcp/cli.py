"""Command line entry point: ``langflow-mcp``."""

import argparse
import asyncio
import sys
from typing import List, Optional

from .config import Settings
from .core.logger import get_logger, setup_logging
from .flows import VARIANTS
from .server import build_server

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="langflow-mcp", description="MCP server for Langflow workflows")
    parser.add_argument(
        "--variant",
        choices=sorted(VARIANTS),
        default=None,
        help="Tool set to serve (default: $MCP_VARIANT or 'flows')",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: $LOG_LEVEL or INFO)")
    return parser.parse_args(argv)


async def serve(settings: Settings) -> None:
    async with build_server(settings) as server:
        await server.run_stdio()


def main(argv: Optional[List[str]] = None) -> int:
    """Run the server until the client disconnects.

    Returns:
        The process exit status.
    """
    args = parse_args(argv)
    settings = Settings.from_env()
    overrides = {}
    if args.variant:
        overrides["variant"] = args.variant
    if args.log_level:
        overrides["log_level"] = args.log_level
    if overrides:
        settings = settings.model_copy(update=overrides)

    setup_logging(settings.log_level)
    logger.info("Starting langflow-mcp with variant '%s'.", settings.variant)

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        logger.error(f"Error starting server: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
