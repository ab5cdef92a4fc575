#!/usr/bin/env python3
"""
Replay a CSV of trades into the trade topic

Each CSV row becomes one JSON object (all values as strings, as read), keyed
by token_address when the column exists. Rows are sent in batches.

Usage:
    python scripts/ingest_trades.py [path/to/trades.csv]

Env:
    CSV_FILE   (default: data/trades_data.csv)
    BROKER / TRADE_TOPIC as for the service
"""

import asyncio
import csv
import json
import logging
import os
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.settings import get_settings
from factory.client_factory import create_stream_producer

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

BATCH_SIZE = 100


def read_csv_rows(csv_path: Path) -> list[dict[str, str]]:
    """Load all CSV rows as dicts (header row gives the keys)"""
    with open(csv_path, newline="") as f:
        return list(csv.DictReader(f))


def to_records(rows: list[dict[str, str]]) -> list[tuple[str | None, bytes]]:
    """Encode rows as (partition_key, JSON bytes) pairs"""
    return [
        (row.get("token_address") or None, json.dumps(row).encode("utf-8"))
        for row in rows
    ]


def iter_batches(records: list, batch_size: int = BATCH_SIZE):
    """Yield consecutive slices of at most batch_size records"""
    for i in range(0, len(records), batch_size):
        yield records[i : i + batch_size]


async def main(csv_path: Path) -> int:
    """Main entry point"""
    settings = get_settings()
    producer = create_stream_producer(settings)

    try:
        logger.info(f"Connecting to broker {settings.BROKER}...")
        await producer.connect()

        rows = read_csv_rows(csv_path)
        logger.info(f"Read {len(rows)} rows. Sending to topic '{settings.TRADE_TOPIC}' in batches...")

        failed = 0
        for n, batch in enumerate(iter_batches(to_records(rows)), start=1):
            result = await producer.send_batch(settings.TRADE_TOPIC, batch)
            failed += result["failed"]
            logger.info(f"Sent batch {n} ({result['success']}/{result['total']} messages)")

        logger.info(f"✓ Done ({len(rows) - failed} sent, {failed} failed)")
        return 0 if failed == 0 else 1

    except Exception as e:
        logger.error(f"✗ Fatal error in ingestion: {e}", exc_info=True)
        return 1

    finally:
        await producer.close()


if __name__ == "__main__":
    path = Path(sys.argv[1] if len(sys.argv) > 1 else os.getenv("CSV_FILE", "data/trades_data.csv"))
    sys.exit(asyncio.run(main(path)))
