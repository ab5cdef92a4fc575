"""
Abstract interface for stream consumers (consuming messages)
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from core.models.streaming import StreamMessage


class BaseStreamConsumer(ABC):
    """
    Abstract interface for stream consumers

    Implementations:
    - KafkaStreamConsumer (Open-source)

    Contract used by the RSI service:
    - consume() yields records in delivery order and ends when the stream ends
    - transient transport errors are handled inside consume(); anything it
      raises is fatal for the caller
    - commit_message() never suspends the caller
    """

    @abstractmethod
    async def connect(self) -> None:
        """Establish connection to stream service"""

    @abstractmethod
    async def subscribe(self, topics: list[str]) -> None:
        """
        Subscribe to topics

        Args:
            topics: List of topic names to subscribe to
        """

    @abstractmethod
    def consume(self) -> AsyncIterator[StreamMessage]:
        """
        Consume messages from subscribed topics

        Yields:
            StreamMessage per record

        Example:
            async for message in consumer.consume():
                print(message.offset, message.value)
        """

    @abstractmethod
    def commit_message(self, message: StreamMessage) -> None:
        """
        Acknowledge a processed message (asynchronous, non-blocking)

        Schedules a commit of message.offset + 1 for its partition and returns
        immediately. Failures are reported through logging only.
        """

    @abstractmethod
    async def close(self) -> None:
        """Cleanup connections"""
