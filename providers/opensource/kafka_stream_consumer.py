"""
Kafka consumer implementation

Event-driven consumer for Kafka topics with manual, non-blocking offset commits
"""

import asyncio
import logging
from collections.abc import AsyncIterator

from aiokafka import AIOKafkaConsumer, TopicPartition
from aiokafka.errors import ConsumerStoppedError, KafkaError

from config.settings import Settings, get_settings
from core.interfaces.streaming_consumer import BaseStreamConsumer
from core.models.streaming import StreamMessage

logger = logging.getLogger(__name__)


class KafkaStreamConsumer(BaseStreamConsumer):
    """
    Kafka stream consumer implementation

    Features:
    - Async message consumption (raw bytes, decoding left to the caller)
    - Manual commit per processed message (auto-commit disabled)
    - Consumer groups for load balancing
    - Transient consume errors logged and skipped

    Commit model:
        commit_message() only records offset + 1 for the record's partition.
        A single background task drains those offsets with consumer.commit(),
        one request at a time, so the committed offset per partition never
        moves backwards even though callers never wait for it.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        group_id: str | None = None,
        auto_offset_reset: str | None = None,
    ):
        self.settings = settings or get_settings()
        self.group_id = group_id or self.settings.GROUP_ID
        self.auto_offset_reset = auto_offset_reset or self.settings.AUTO_OFFSET_RESET
        self.consumer = None
        self._topics = []

        self._pending_offsets: dict[TopicPartition, int] = {}
        self._commit_task: asyncio.Task | None = None
        self.commit_failures = 0

    async def connect(self) -> None:
        """Initialize Kafka consumer"""
        try:
            self.consumer = AIOKafkaConsumer(
                bootstrap_servers=self.settings.BROKER,
                group_id=self.group_id,
                auto_offset_reset=self.auto_offset_reset,
                enable_auto_commit=False,  # Committed per message by the service
                session_timeout_ms=self.settings.KAFKA_SESSION_TIMEOUT_MS,
                heartbeat_interval_ms=self.settings.KAFKA_HEARTBEAT_INTERVAL_MS,
                request_timeout_ms=self.settings.KAFKA_CONSUMER_REQUEST_TIMEOUT_MS,
                retry_backoff_ms=self.settings.KAFKA_CONSUMER_RETRY_BACKOFF_MS,
            )

            await self.consumer.start()

            logger.info(
                f"✓ Connected to Kafka consumer: {self.settings.BROKER} "
                f"(group={self.group_id}, offset_reset={self.auto_offset_reset})"
            )
        except Exception as e:
            logger.error(f"✗ Failed to connect Kafka consumer: {e}")
            raise

    async def subscribe(self, topics: list[str]) -> None:
        """
        Subscribe to topics

        Args:
            topics: List of topic names to subscribe to
        """
        if not self.consumer:
            raise RuntimeError("Kafka consumer not connected")

        self._topics = topics
        self.consumer.subscribe(topics=topics)

        logger.info(f"✓ Subscribed to topics: {', '.join(topics)}")

    async def consume(self) -> AsyncIterator[StreamMessage]:
        """
        Consume messages from subscribed topics

        Ends when the consumer is stopped. Other Kafka errors are logged and
        consumption continues with the next record.

        Yields:
            StreamMessage per record
        """
        if not self.consumer:
            raise RuntimeError("Kafka consumer not connected")

        if not self._topics:
            raise RuntimeError("No topics subscribed")

        while True:
            try:
                record = await self.consumer.getone()
            except ConsumerStoppedError:
                logger.info("Kafka consumer stopped, ending stream")
                return
            except KafkaError as e:
                logger.error(f"✗ Kafka error while consuming: {e}")
                continue

            logger.debug(
                f"Consumed message from {record.topic}: "
                f"Partition={record.partition}, Offset={record.offset}"
            )

            yield StreamMessage(
                topic=record.topic,
                partition=record.partition,
                offset=record.offset,
                key=record.key,
                value=record.value,
                timestamp=record.timestamp,
            )

    def commit_message(self, message: StreamMessage) -> None:
        """
        Schedule commit of message.offset + 1 (non-blocking)

        Args:
            message: Record that has been processed
        """
        if not self.consumer:
            raise RuntimeError("Kafka consumer not connected")

        tp = TopicPartition(message.topic, message.partition)
        self._pending_offsets[tp] = message.offset + 1

        if self._commit_task is None or self._commit_task.done():
            self._commit_task = asyncio.create_task(
                self._commit_pending(), name="kafka-offset-commit"
            )

    async def _commit_pending(self) -> None:
        """Drain recorded offsets until nothing new arrives"""
        while self._pending_offsets:
            offsets, self._pending_offsets = self._pending_offsets, {}
            try:
                await self.consumer.commit(offsets)
                logger.debug(f"Committed offsets: {self._format_offsets(offsets)}")
            except Exception as e:
                self.commit_failures += 1
                logger.error(f"✗ Failed to commit {self._format_offsets(offsets)}: {e}")

    @staticmethod
    def _format_offsets(offsets: dict[TopicPartition, int]) -> str:
        return ", ".join(f"{tp.topic}[{tp.partition}]@{offset}" for tp, offset in offsets.items())

    async def close(self) -> None:
        """Flush pending commits, then stop the client"""
        if self._commit_task and not self._commit_task.done():
            await self._commit_task

        if self.consumer:
            await self.consumer.stop()
            logger.info("✓ Kafka consumer closed")
