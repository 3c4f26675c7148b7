#!/usr/bin/env python3
"""
Command line entry point - Main Layer

``status`` runs one aggregation and prints the snapshot as JSON; the exit
code reflects the overall severity (0 healthy, 1 warning, 2 error).
``serve`` starts the HTTP API with uvicorn.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional

import uvicorn

from src.application.dtos.status_dto import StatusSnapshotDTO
from src.domain.entities.status import HealthSeverity
from src.main.config import AppSettings, get_settings
from src.main.container import init_container
from src.shared import configure_logging, get_logger, update_logging_from_settings

logger = get_logger(__name__)

EXIT_CODES = {
    HealthSeverity.HEALTHY: 0,
    HealthSeverity.WARNING: 1,
    HealthSeverity.ERROR: 2,
}


def build_parser(settings: AppSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fleet-status", description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True)

    status = commands.add_parser("status", help="Print the unified status as JSON")
    status.add_argument(
        "--deadline",
        type=float,
        default=None,
        help=f"Global deadline in seconds (default {settings.timeouts.global_deadline:g})",
    )
    status.add_argument("--pretty", action="store_true", help="Indent the JSON output")

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=settings.service.host)
    serve.add_argument("--port", type=int, default=settings.service.port)
    serve.add_argument("--reload", action="store_true", default=settings.service.reload)
    return parser


async def collect_status(settings: AppSettings, deadline: Optional[float]) -> StatusSnapshotDTO:
    """Run a single aggregation using the same wiring as the API."""
    container = init_container(settings)
    aggregator = container.status_aggregator()
    try:
        snapshot = await aggregator.get_unified_status(deadline)
    finally:
        await aggregator.aclose()
    return StatusSnapshotDTO.from_domain(snapshot)


def run_status(settings: AppSettings, deadline: Optional[float], pretty: bool) -> int:
    dto = asyncio.run(collect_status(settings, deadline))
    sys.stdout.write(dto.model_dump_json(by_alias=True, indent=2 if pretty else None))
    sys.stdout.write("\n")
    return EXIT_CODES[dto.overall.severity]


def run_server(host: str, port: int, reload: bool) -> int:
    logger.info("server.starting", host=host, port=port, reload=reload)
    uvicorn.run("src.main.app:app", host=host, port=port, reload=reload)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    configure_logging(stream=sys.stderr)
    update_logging_from_settings(settings, stream=sys.stderr)

    args = build_parser(settings).parse_args(argv)
    if args.command == "status":
        return run_status(settings, args.deadline, args.pretty)
    return run_server(args.host, args.port, args.reload)
