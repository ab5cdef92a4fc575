"""
Abstract interface for stream producers (publishing messages)
"""

from abc import ABC, abstractmethod


class BaseStreamProducer(ABC):
    """
    Abstract interface for stream producers

    Implementations:
    - KafkaStreamProducer (Open-source)

    Unlike a queued producer, send() is awaited by the caller. The RSI service
    gets its non-blocking behaviour from spawning one task per send (see
    services/rsi_service/emitter.py), so there is no internal queue here and
    nothing throttles the caller.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Connect to streaming service"""

    @abstractmethod
    async def send(
        self,
        stream_name: str,
        value: bytes,
        key: str | None,
        timeout: float | None = None,
    ) -> tuple[int, int]:
        """
        Publish one record and wait for the broker acknowledgement

        Args:
            stream_name: Topic name
            value: Encoded payload
            key: Partition key (same key → same partition)
            timeout: Seconds to wait before giving up (None = transport default)

        Returns:
            (partition, offset) of the written record

        Raises:
            asyncio.TimeoutError: If timeout elapsed
            Exception: Provider-specific transport error
        """

    @abstractmethod
    async def send_batch(
        self, stream_name: str, records: list[tuple[str | None, bytes]]
    ) -> dict[str, int]:
        """
        Send multiple records in batch (more efficient)

        Args:
            stream_name: Name of the stream/topic
            records: List of (partition_key, value) pairs

        Returns:
            {"total": n, "success": n_ok, "failed": n_failed}
        """

    @abstractmethod
    async def close(self) -> None:
        """Flush and close connection"""
