# cli.py – Point d'entrée ligne de commande
# -----------------------------------------------------------------------------
#  riftrewind lookup "Summoner Name" --region euw1
#  riftrewind leaderboard --region all
#  riftrewind check-key --region na1
# -----------------------------------------------------------------------------

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from riftrewind.config import settings
from riftrewind.display import format_leaderboard, format_lookup, format_status
from riftrewind.logging_config import setup_logging
from riftrewind.riot.client import RiotClient
from riftrewind.riot.errors import AuthError, RiotAPIError
from riftrewind.services.leaderboard import ALL_REGIONS, LeaderboardStore
from riftrewind.storage import make_store

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="riftrewind", description="League of Legends stats & local leaderboard")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("lookup", help="fetch a summoner and add them to the leaderboard")
    p.add_argument("name")
    p.add_argument("--region", default=settings.DEFAULT_REGION)

    p = sub.add_parser("leaderboard", help="show the local leaderboard")
    p.add_argument("--region", default=ALL_REGIONS)

    p = sub.add_parser("check-key", help="verify RIOT_API_KEY against the status endpoint")
    p.add_argument("--region", default=settings.DEFAULT_REGION)
    return parser


def make_client() -> RiotClient:
    if not settings.RIOT_API_KEY:
        raise AuthError("RIOT_API_KEY is not set")
    return RiotClient(settings.RIOT_API_KEY, base_url=settings.RIOT_BASE_URL)


def make_leaderboard() -> LeaderboardStore:
    return LeaderboardStore(make_store(settings.STORAGE_BACKEND, settings.DB_URL, settings.REDIS_URL or ""))


async def run(args: argparse.Namespace) -> str:
    if args.command == "leaderboard":
        async with make_leaderboard() as board:
            return format_leaderboard(await board.filtered_view(args.region.lower()))

    async with make_client() as riot:
        if args.command == "check-key":
            return format_status(await riot.platform_status(args.region.lower()))

        region = args.region.lower()
        lookup = await riot.lookup_player(args.name.strip(), region)
        async with make_leaderboard() as board:
            await board.record_lookup(lookup, region)
            view = await board.filtered_view(region)
        return format_lookup(lookup, region) + "\n\n" + format_leaderboard(view)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level)
    try:
        print(asyncio.run(run(args)))
    except RiotAPIError as e:
        log.debug("Command %s failed", args.command, exc_info=True)
        print(f"Search failed: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        # config invalide (backend de stockage, RIOT_BASE_URL...)
        log.debug("Command %s failed", args.command, exc_info=True)
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
