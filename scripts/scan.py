#!/usr/bin/env python3
"""
Run one market scan from the command line.

Fetches the most traded BingX perpetual contracts, analyzes their prices and
prints the resulting signals.

Usage:
    python scripts/scan.py                # table of top 100 contracts
    python scripts/scan.py --top 20       # top 20 only
    python scripts/scan.py --json         # JSON with camelCase keys
    python scripts/scan.py --concurrent   # fetch catalog and prices together
"""

import argparse
import asyncio
import logging
import sys

import orjson

from bingx_scanner.config import get_settings
from bingx_scanner.core import SignalEngine
from bingx_scanner.errors import ScannerError
from bingx_scanner.models import SignalRecord
from bingx_scanner.services import MarketDataService, scan_market

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

COLUMNS = [
    ("symbol", 10),
    ("trend", 9),
    ("current_price", 14),
    ("wave_pattern", 5),
    ("entry_point", 14),
    ("take_profit", 14),
    ("stop_loss", 14),
    ("probability", 5),
]


def print_table(signals: list[SignalRecord]) -> None:
    header = "  ".join(name.upper()[:width].ljust(width) for name, width in COLUMNS)
    print(header)
    print("-" * len(header))
    for signal in signals:
        row = signal.model_dump(mode="json")
        print("  ".join(str(row[name]).ljust(width) for name, width in COLUMNS))


async def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    service = MarketDataService.from_settings(settings)
    if args.top is not None:
        service.top_n = args.top
    engine = SignalEngine(quote_suffixes=settings.quote_suffixes)

    try:
        signals = await scan_market(service, engine, concurrent=args.concurrent or None)
    except ScannerError as e:
        logger.error(f"Scan failed: {e}")
        return 1
    finally:
        await service.close()

    if args.json:
        payload = [s.model_dump(mode="json", by_alias=True) for s in signals]
        sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode() + "\n")
    else:
        print_table(signals)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Scan BingX perpetual contracts")
    parser.add_argument("--top", type=int, default=None, help="Number of contracts by volume")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    parser.add_argument(
        "--concurrent", action="store_true", help="Fetch catalog and prices concurrently"
    )
    args = parser.parse_args()
    if args.top is not None and args.top < 1:
        parser.error("--top must be at least 1")
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
