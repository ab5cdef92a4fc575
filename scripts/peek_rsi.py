#!/usr/bin/env python3
"""
Tail the RSI topic from the beginning

Uses a throw-away consumer group so every run replays the whole topic and
never moves the service's offsets.

Usage:
    python scripts/peek_rsi.py
"""

import asyncio
import logging
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.settings import get_settings
from factory.client_factory import create_stream_consumer

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


async def main():
    """Main entry point"""
    settings = get_settings()
    consumer = create_stream_consumer(
        settings,
        group_id=f"peek-rsi-{int(time.time() * 1000)}",
        auto_offset_reset="earliest",
    )

    await consumer.connect()
    await consumer.subscribe([settings.RSI_TOPIC])
    logger.info(f"Connected. Waiting for messages on {settings.RSI_TOPIC}")

    try:
        async for message in consumer.consume():
            value = message.value.decode("utf-8", errors="replace") if message.value else ""
            logger.info(f"RSI: {value}")
    finally:
        await consumer.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Goodbye!")
