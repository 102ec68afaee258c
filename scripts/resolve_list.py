"""Resolve a list of locations (one per line) to WGS84 coordinates.

Usage:
    python scripts/resolve_list.py locations.txt
    cat locations.txt | python scripts/resolve_list.py
    python scripts/resolve_list.py locations.txt --w3w-key ABCD1234

Output is tab-separated: input, detected format, latitude, longitude.
Unresolved lines keep their input and format with blank coordinates.
Exits with status 1 if nothing could be resolved.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pinpoint.config import LOG_LEVEL, W3W_API_KEY
from pinpoint.resolve import resolve_many

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)
log = logging.getLogger("resolve_list")


def read_lines(source):
    if source == "-":
        return sys.stdin.read().splitlines()
    return Path(source).read_text(encoding="utf-8").splitlines()


def run(args):
    lines = read_lines(args.source)
    log.info("Resolving %d lines from %s", len(lines), "stdin" if args.source == "-" else args.source)

    results = asyncio.run(resolve_many(lines, args.w3w_key or W3W_API_KEY))

    for r in results:
        lat = f"{r.point.lat:.6f}" if r.point else ""
        lng = f"{r.point.lng:.6f}" if r.point else ""
        print(f"{r.input}\t{r.format.value}\t{lat}\t{lng}")

    resolved = sum(1 for r in results if r.resolved)
    log.info("Resolved %d / %d  |  failed: %d", resolved, len(results), len(results) - resolved)
    return 0 if resolved else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Resolve locations to WGS84 lat/lng")
    parser.add_argument(
        "source", nargs="?", default="-",
        help="File with one location per line (default: stdin)",
    )
    parser.add_argument(
        "--w3w-key", default="",
        help="what3words API key (default: W3W_API_KEY / secrets/w3w_api_key)",
    )
    args = parser.parse_args()
    sys.exit(run(args))
