"""
Indicator Emitter - fire-and-forget publication of RSI results

Architecture:
    RsiService loop → dispatch() → asyncio.create_task(_publish) → producer.send()
                          ↓ (returns immediately)
                      next message

Lifecycle of publish tasks:
- One task per result, no cap on how many are in flight
- Tasks are referenced in self._pending only until they finish
- They are NOT joined at shutdown: whatever is still in flight when the
  service stops is abandoned (its inbound offset is already committed)
- No ordering between tasks: two results for the same token can reach the
  topic in either order
"""

import asyncio
import json
import logging

from core.exceptions import SerializationError
from core.interfaces.streaming_producer import BaseStreamProducer
from core.models.market_data import IndicatorResult

logger = logging.getLogger(__name__)

DEFAULT_SEND_TIMEOUT = 5.0


def serialize_indicator(result: IndicatorResult) -> bytes:
    """
    Encode result to outbound JSON

    Raises:
        SerializationError: If the result cannot be represented as strict JSON
    """
    try:
        return json.dumps(result.to_dict(), allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Cannot serialize RSI for {result.token_address}: {e}") from e


class IndicatorEmitter:
    """Publish IndicatorResults to the RSI topic as detached tasks"""

    def __init__(
        self,
        producer: BaseStreamProducer,
        topic: str,
        send_timeout: float = DEFAULT_SEND_TIMEOUT,
    ):
        self.producer = producer
        self.topic = topic
        self.send_timeout = send_timeout

        self._pending: set[asyncio.Task] = set()
        self.published_count = 0
        self.failed_count = 0

    def dispatch(self, result: IndicatorResult) -> asyncio.Task | None:
        """
        Serialize result and spawn its publish task (SYNC, NON-BLOCKING)

        Must be called from inside a running event loop.

        Returns:
            The spawned task, or None if serialization failed
        """
        try:
            payload = serialize_indicator(result)
        except SerializationError as e:
            self.failed_count += 1
            logger.error(f"Failed to serialize RSI message: {e}")
            return None

        task = asyncio.create_task(
            self._publish(result.token_address, payload),
            name=f"rsi-emit-{result.token_address}",
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _publish(self, token_address: str, payload: bytes) -> None:
        """Send one record; outcome is only logged"""
        try:
            partition, offset = await self.producer.send(
                self.topic, payload, key=token_address, timeout=self.send_timeout
            )
        except asyncio.TimeoutError:
            self.failed_count += 1
            logger.error(
                f"✗ RSI delivery for {token_address} timed out after {self.send_timeout}s"
            )
            return
        except Exception as e:
            self.failed_count += 1
            logger.error(f"✗ Failed to deliver RSI message for {token_address}: {e}")
            return

        self.published_count += 1
        logger.info(f"RSI message delivered to partition {partition} offset {offset}")

    def pending_tasks(self) -> list[asyncio.Task]:
        """Snapshot of publish tasks not finished yet"""
        return list(self._pending)

    @property
    def in_flight(self) -> int:
        """Publish tasks spawned but not finished"""
        return len(self._pending)

    def abandon(self) -> int:
        """
        Report (not await) publish tasks still running at shutdown

        Returns:
            Number of abandoned tasks
        """
        count = self.in_flight
        if count:
            logger.warning(f"Abandoning {count} in-flight RSI publication(s) at shutdown")
        return count
