"""
In-memory stand-ins for the stream consumer/producer

Let the RSI service be driven end-to-end without Kafka.
"""

import asyncio
import json
from collections.abc import AsyncIterator, Iterable

from core.interfaces.streaming_consumer import BaseStreamConsumer
from core.interfaces.streaming_producer import BaseStreamProducer
from core.models.streaming import StreamMessage


def make_message(offset: int, payload, topic: str = "trade-data", partition: int = 0) -> StreamMessage:
    """Build a StreamMessage; dict payloads are JSON-encoded"""
    if isinstance(payload, dict):
        payload = json.dumps(payload).encode("utf-8")
    elif isinstance(payload, str):
        payload = payload.encode("utf-8")
    return StreamMessage(topic=topic, partition=partition, offset=offset, value=payload)


def trade_messages(token: str, prices: Iterable[float], start_offset: int = 0) -> list[StreamMessage]:
    """One trade message per price for a single token"""
    return [
        make_message(start_offset + i, {"token_address": token, "price_in_sol": p})
        for i, p in enumerate(prices)
    ]


class ListStreamConsumer(BaseStreamConsumer):
    """Replays a fixed list of messages, then ends the stream"""

    def __init__(self, messages: list[StreamMessage]):
        self.messages = messages
        self.topics: list[str] = []
        self.committed: list[int] = []
        self.connected = False
        self.closed = False

    async def connect(self) -> None:
        self.connected = True

    async def subscribe(self, topics: list[str]) -> None:
        self.topics = topics

    async def consume(self) -> AsyncIterator[StreamMessage]:
        for message in self.messages:
            yield message

    def commit_message(self, message: StreamMessage) -> None:
        self.committed.append(message.offset)

    async def close(self) -> None:
        self.closed = True


class QueueStreamConsumer(ListStreamConsumer):
    """Delivers whatever the test puts on .queue; None ends the stream"""

    def __init__(self):
        super().__init__([])
        self.queue: asyncio.Queue[StreamMessage | None] = asyncio.Queue()

    async def consume(self) -> AsyncIterator[StreamMessage]:
        while True:
            message = await self.queue.get()
            if message is None:
                return
            yield message


class RecordingStreamProducer(BaseStreamProducer):
    """Records sends; optionally blocks every send until .release is set"""

    def __init__(self, block: bool = False):
        self.sent: list[tuple[str, str | None, dict]] = []
        self.release = asyncio.Event()
        if not block:
            self.release.set()
        self.connected = False
        self.closed = False

    async def connect(self) -> None:
        self.connected = True

    async def send(self, stream_name, value, key, timeout=None):
        await self.release.wait()
        self.sent.append((stream_name, key, json.loads(value)))
        return 0, len(self.sent) - 1

    async def send_batch(self, stream_name, records):
        for key, value in records:
            await self.send(stream_name, value, key)
        return {"total": len(records), "success": len(records), "failed": 0}

    async def close(self) -> None:
        self.closed = True


async def wait_until(predicate, attempts: int = 100) -> None:
    """Yield to the event loop until predicate() holds"""
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")
