"""
Kafka implementation of stream producer

Works with Kafka (KRaft mode) - no ZooKeeper needed
"""

import asyncio
import logging

from aiokafka import AIOKafkaProducer

from config.settings import Settings, get_settings
from core.interfaces.streaming_producer import BaseStreamProducer

logger = logging.getLogger(__name__)


class KafkaStreamProducer(BaseStreamProducer):
    """
    Kafka stream producer

    Features:
    - send() waits for the broker ack, bounded by a per-call timeout
    - Keyed records (same token → same partition)
    - Transport retries/backoff are aiokafka's own (tuned in streaming.yaml)
    - close() bounds the final flush (close_timeout_s in streaming.yaml)
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.producer = None

    async def connect(self) -> None:
        """Connect to Kafka"""
        try:
            self.producer = AIOKafkaProducer(
                bootstrap_servers=self.settings.BROKER,
                key_serializer=lambda k: k.encode("utf-8") if k else None,
                acks=self.settings.KAFKA_PRODUCER_ACKS,
                compression_type=self.settings.KAFKA_PRODUCER_COMPRESSION,
                linger_ms=self.settings.KAFKA_PRODUCER_LINGER_MS,
                request_timeout_ms=self.settings.KAFKA_PRODUCER_REQUEST_TIMEOUT_MS,
                retry_backoff_ms=self.settings.KAFKA_PRODUCER_RETRY_BACKOFF_MS,
            )

            await self.producer.start()

            logger.info(f"✓ Connected to Kafka: {self.settings.BROKER}")
        except Exception as e:
            logger.error(f"✗ Failed to connect to Kafka: {e}")
            raise

    async def send(
        self,
        stream_name: str,
        value: bytes,
        key: str | None,
        timeout: float | None = None,
    ) -> tuple[int, int]:
        """
        Publish one record and wait for its metadata

        Returns:
            (partition, offset)
        """
        if not self.producer:
            raise RuntimeError("Kafka producer not connected")

        metadata = await asyncio.wait_for(
            self.producer.send_and_wait(stream_name, value=value, key=key),
            timeout=timeout,
        )
        return metadata.partition, metadata.offset

    async def send_batch(
        self, stream_name: str, records: list[tuple[str | None, bytes]]
    ) -> dict[str, int]:
        """
        Send batch of records (Kafka batches internally via linger_ms)

        Args:
            stream_name: Topic name
            records: List of (partition_key, value) pairs

        Returns:
            Response with success count
        """
        if not self.producer:
            raise RuntimeError("Kafka producer not connected")

        tasks = [
            self.producer.send_and_wait(stream_name, value=value, key=key)
            for key, value in records
        ]

        # Wait for all sends
        results = await asyncio.gather(*tasks, return_exceptions=True)

        # Count successes/failures
        success_count = sum(1 for r in results if not isinstance(r, Exception))
        failure_count = len(results) - success_count

        if failure_count > 0:
            logger.warning(
                f"⚠ Kafka batch: {failure_count} records failed out of {len(records)}"
            )
        else:
            logger.debug(f"Sent {len(records)} records to {stream_name}")

        return {"total": len(records), "success": success_count, "failed": failure_count}

    async def close(self) -> None:
        """
        Close Kafka producer, flushing for at most KAFKA_PRODUCER_CLOSE_TIMEOUT_S

        aiokafka's stop() flushes every buffered record. With an unreachable
        broker that lasts until the batches expire, so the flush is cut off
        and whatever is still buffered is dropped.
        """
        if self.producer:
            grace = self.settings.KAFKA_PRODUCER_CLOSE_TIMEOUT_S
            try:
                await asyncio.wait_for(self.producer.stop(), timeout=grace)
                logger.info("✓ Kafka producer closed")
            except asyncio.TimeoutError:
                logger.warning(
                    f"⚠ Kafka producer flush exceeded {grace}s, buffered records dropped"
                )
            except Exception as e:
                logger.error(f"Error closing Kafka producer: {e}")
