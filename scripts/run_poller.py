"""
Script to run the sales feed poller
"""

import argparse
import asyncio
import sys
import os
import logging

# Add current directory to path to allow imports from core, salesfeed, etc.
sys.path.append(os.getcwd())

from core.config import settings
from core.logging import setup_logging
from salesfeed.scheduler import build_poller

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Sales feed poller")
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single tick, wait for enrichment, print the items and exit",
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=None,
        help=f"Polling interval in seconds (default: {settings.POLL_INTERVAL_SECONDS})",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the HTTP API (which polls in the background) instead of the bare poller",
    )
    return parser.parse_args()


async def run_once(interval: int = None) -> None:
    """Poll once and log what was admitted"""
    poller = build_poller(interval_seconds=interval)
    try:
        result = await poller.poll_once()
        await poller.runner.wait_for_enrichment()
        logger.info(f"Tick result: {result.get('status')}")
        for item in poller.store.all():
            tags = ", ".join(tag.tag_name for tag in item.tags or [])
            logger.info(
                f"{item.utc_date} | {item.artist} - {item.title} | "
                f"{item.background_color}/{item.text_color} | {tags}"
            )
    finally:
        await poller.aclose()


async def run_forever(interval: int = None) -> None:
    """Poll until interrupted"""
    poller = build_poller(interval_seconds=interval)
    poller.start()
    try:
        await asyncio.Event().wait()
    finally:
        await poller.aclose()


def main() -> None:
    setup_logging()
    args = parse_args()

    if args.serve:
        import uvicorn

        uvicorn.run("api.main:app", host=settings.API_HOST, port=settings.API_PORT)
        return

    try:
        if args.once:
            asyncio.run(run_once(args.interval))
        else:
            asyncio.run(run_forever(args.interval))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")


if __name__ == "__main__":
    main()
