from __future__ import annotations

import argparse
import asyncio
import datetime as dt
import logging
import sys
from typing import Awaitable, Callable, Optional, Sequence

from dotenv import load_dotenv

from . import formatter
from .client import RailwayApiClient, create_railway_client
from .config import RailwaySettings
from .endpoints import WindowHour
from .errors import RailError

logger = logging.getLogger(__name__)

Command = Callable[[RailwayApiClient, argparse.Namespace], Awaitable[str]]


async def _pnr(client: RailwayApiClient, args: argparse.Namespace) -> str:
    return formatter.format_pnr_status(await client.pnr_status(args.pnr))


async def _live(client: RailwayApiClient, args: argparse.Namespace) -> str:
    return formatter.format_live_status(await client.live_train_status(args.train, args.date))


async def _route(client: RailwayApiClient, args: argparse.Namespace) -> str:
    return formatter.format_route(await client.train_route(args.train))


async def _between(client: RailwayApiClient, args: argparse.Namespace) -> str:
    resp = await client.trains_between_stations(args.source, args.dest, args.date)
    return formatter.format_trains_between(resp)


async def _arrivals(client: RailwayApiClient, args: argparse.Namespace) -> str:
    resp = await client.train_arrivals(args.station, WindowHour(args.hours))
    return formatter.format_arrivals(resp)


async def _station(client: RailwayApiClient, args: argparse.Namespace) -> str:
    if args.code:
        resp = await client.station_code_to_name(args.query)
    else:
        resp = await client.station_name_to_code(args.query)
    return formatter.format_stations(resp)


async def _train(client: RailwayApiClient, args: argparse.Namespace) -> str:
    query: str = args.query
    if query.isdigit():
        resp = await client.train_by_number(int(query))
    else:
        resp = await client.train_by_name(query)
    return formatter.format_train(resp)


async def _cancelled(client: RailwayApiClient, args: argparse.Namespace) -> str:
    return formatter.format_cancelled(await client.cancelled_trains(args.date))


async def _rescheduled(client: RailwayApiClient, args: argparse.Namespace) -> str:
    return formatter.format_rescheduled(await client.rescheduled_trains(args.date))


def _date(value: str) -> dt.date:
    try:
        return dt.datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="india-rail", description="Query railwayapi.com")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    today = dt.date.today()

    p = sub.add_parser("pnr", help="PNR status")
    p.add_argument("pnr", type=int)
    p.set_defaults(handler=_pnr)

    p = sub.add_parser("live", help="live running status of a train")
    p.add_argument("train", type=int)
    p.add_argument("--date", type=_date, default=today)
    p.set_defaults(handler=_live)

    p = sub.add_parser("route", help="stations on a train's route")
    p.add_argument("train", type=int)
    p.set_defaults(handler=_route)

    p = sub.add_parser("between", help="trains between two stations")
    p.add_argument("source")
    p.add_argument("dest")
    p.add_argument("--date", type=_date, default=today)
    p.set_defaults(handler=_between)

    p = sub.add_parser("arrivals", help="trains arriving at a station")
    p.add_argument("station")
    p.add_argument("--hours", type=int, choices=[int(h) for h in WindowHour], default=2)
    p.set_defaults(handler=_arrivals)

    p = sub.add_parser("station", help="look up a station by name or code")
    p.add_argument("query")
    p.add_argument("--code", action="store_true", help="treat the query as a station code")
    p.set_defaults(handler=_station)

    p = sub.add_parser("train", help="look up a train by number or name")
    p.add_argument("query")
    p.set_defaults(handler=_train)

    p = sub.add_parser("cancelled", help="trains cancelled on a date")
    p.add_argument("--date", type=_date, default=today)
    p.set_defaults(handler=_cancelled)

    p = sub.add_parser("rescheduled", help="trains rescheduled on a date")
    p.add_argument("--date", type=_date, default=today)
    p.set_defaults(handler=_rescheduled)

    return parser


async def _run(settings: RailwaySettings, handler: Command, args: argparse.Namespace) -> str:
    async with create_railway_client(settings) as client:
        return await handler(client, args)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the ``india-rail`` command."""

    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    load_dotenv()
    try:
        settings = RailwaySettings.from_env()
    except RuntimeError as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        output = asyncio.run(_run(settings, args.handler, args))
    except RailError as exc:
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(output)
    return 0


def run() -> None:  # pragma: no cover - console script
    sys.exit(main())
