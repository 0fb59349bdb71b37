#!/usr/bin/env python3
"""
Replay a file of dispatch events.

Each non-blank line of the input is one JSON event envelope. Events are
either posted to a running service or applied to a local engine, which then
prints the resulting board.

Usage:
    python -m cad_dispatch.replay events.jsonl
    python -m cad_dispatch.replay events.jsonl --url http://localhost:8080
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import httpx

from cad_dispatch.config import get_settings
from cad_dispatch.services.dispatcher import APPLIED, DROPPED, REJECTED
from cad_dispatch.services.engine import DispatchEngine

logger = logging.getLogger(__name__)
settings = get_settings()

REPORT_INTERVAL = 1000


def log(msg):
    """Print with flush for immediate output."""
    print(msg, flush=True)


def read_events(path: Path) -> Iterator[str]:
    """Yield raw event lines, skipping blanks and # comments."""
    with path.open(encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                yield line


def replay_local(lines: Iterator[str], engine: DispatchEngine | None = None) -> tuple[DispatchEngine, dict[str, int]]:
    """Apply events to an engine in order and count outcomes."""
    engine = engine or DispatchEngine()
    counts = {APPLIED: 0, DROPPED: 0, REJECTED: 0}

    for n, line in enumerate(lines, start=1):
        outcome = engine.handle(line)
        counts[outcome.status] += 1
        if n % REPORT_INTERVAL == 0:
            log(f"Progress: {n:,} events")

    return engine, counts


async def replay_remote(
    lines: Iterator[str],
    base_url: str,
    timeout: float = 10.0,
) -> int:
    """Post events to a running service. Returns the number accepted."""
    url = f"{base_url.rstrip('/')}{settings.api_v1_prefix}/events"
    accepted = 0

    async with httpx.AsyncClient(timeout=timeout) as client:
        for line in lines:
            response = await client.post(
                url,
                content=line.encode("utf-8"),
                headers={"Content-Type": "application/json"},
            )
            if response.status_code == 202:
                accepted += 1
            else:
                logger.warning(f"Event rejected ({response.status_code}): {response.text}")

    return accepted


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Replay dispatch events from a JSONL file")
    parser.add_argument("path", type=Path, help="File with one JSON event per line")
    parser.add_argument("--url", help="Base URL of a running service; local replay if omitted")
    args = parser.parse_args(argv)

    if not args.path.exists():
        log(f"Error: events file not found: {args.path}")
        return 1

    if args.url:
        accepted = asyncio.run(replay_remote(read_events(args.path), args.url))
        log(f"Posted {accepted:,} events to {args.url}")
        return 0

    engine, counts = replay_local(read_events(args.path))
    log(
        f"Replay complete: {counts[APPLIED]:,} applied, "
        f"{counts[REJECTED]:,} rejected, {counts[DROPPED]:,} dropped"
    )
    log(engine.snapshot().model_dump_json(by_alias=True, indent=2))
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    sys.exit(main())
