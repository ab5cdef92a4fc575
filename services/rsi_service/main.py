"""
RSI Service - Event-driven RSI calculation (entry point)

Flow per inbound message:
1. Parse token_address + price from the trade event
2. Append price to the token's bounded history
3. Calculate RSI once period + 1 prices are known
4. Spawn a detached publish task for the result (not awaited)
5. Commit the inbound offset (non-blocking, regardless of publish outcome)

Delivery guarantees:
- Inbound: at-least-once (offset committed after local processing)
- Outbound: best effort. A crash after step 5 but before the publish task
  finishes loses that RSI event while the trade is already marked consumed.
  This is accepted; do not gate commits on publication without revisiting
  throughput.

Usage:
    python services/rsi_service/main.py
"""

import asyncio
import logging
import os
import signal
import sys
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from config.settings import Settings, get_settings
from core.interfaces.streaming_consumer import BaseStreamConsumer
from core.interfaces.streaming_producer import BaseStreamProducer
from core.models.streaming import StreamMessage
from factory.client_factory import create_stream_consumer, create_stream_producer
from services.rsi_service.emitter import IndicatorEmitter
from services.rsi_service.processor import PriceEventProcessor

logger = logging.getLogger(__name__)

LOG_DIR = "data/logs"
_fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Console at the configured level + rotating error log file"""
    os.makedirs(LOG_DIR, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_fmt))

    error_file = RotatingFileHandler(
        f"{LOG_DIR}/rsi_service_errors.log",
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=3,
    )
    error_file.setLevel(logging.ERROR)
    error_file.setFormatter(logging.Formatter(_fmt))

    logging.basicConfig(level=level, handlers=[console, error_file], force=True)


class ServiceState(str, Enum):
    """Lifecycle of the ingestion loop"""

    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"
    TERMINATED = "terminated"


class RsiService:
    """
    RSI Service - single ingestion loop over the trade topic.

    The loop races the next inbound message against the shutdown event. It
    only suspends there: message handling, RSI calculation, task spawning and
    commit scheduling all run synchronously between two awaits.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        consumer: BaseStreamConsumer | None = None,
        producer: BaseStreamProducer | None = None,
    ):
        self.settings = settings or get_settings()
        self.state = ServiceState.RUNNING
        self._shutdown_event = asyncio.Event()
        self.processed_count = 0

        # Initialize clients
        self.consumer = consumer or create_stream_consumer(self.settings)
        self.producer = producer or create_stream_producer(self.settings)

        # Initialize components
        self.processor = PriceEventProcessor(
            period=self.settings.RSI_PERIOD,
            max_history=self.settings.RSI_MAX_HISTORY,
        )
        self.emitter = IndicatorEmitter(
            producer=self.producer,
            topic=self.settings.RSI_TOPIC,
            send_timeout=self.settings.PUBLISH_TIMEOUT_SECONDS,
        )

    def request_shutdown(self) -> None:
        """Ask the loop to stop after its current iteration"""
        if not self._shutdown_event.is_set():
            logger.info("Shutdown requested")
        self._shutdown_event.set()

    def handle_message(self, message: StreamMessage) -> None:
        """
        Process one inbound record, then schedule its offset commit

        Never raises: processing failures are logged and the offset is still
        committed (no re-delivery of poison messages).
        """
        try:
            result = self.processor.process(message.value)
            if result is not None:
                self.emitter.dispatch(result)
        except Exception as e:
            logger.error(
                f"❌ Error processing {message.topic}[{message.partition}]@{message.offset}: {e}",
                exc_info=True,
            )

        # commit offset (at least once)
        try:
            self.consumer.commit_message(message)
        except Exception as e:
            logger.error(f"Failed to commit message: {e}")

        self.processed_count += 1

    @staticmethod
    async def _next_message(messages) -> StreamMessage | None:
        return await anext(messages, None)

    async def run(self) -> None:
        """Consume until shutdown is requested or the inbound stream ends"""
        messages = aiter(self.consumer.consume())
        shutdown_wait = asyncio.create_task(self._shutdown_event.wait(), name="rsi-shutdown-wait")
        next_message: asyncio.Task | None = None

        try:
            while True:
                next_message = asyncio.create_task(
                    self._next_message(messages), name="rsi-next-message"
                )
                done, _ = await asyncio.wait(
                    {next_message, shutdown_wait}, return_when=asyncio.FIRST_COMPLETED
                )

                if shutdown_wait in done:
                    logger.info("Shutdown signal received, exiting.")
                    break

                try:
                    message = next_message.result()
                except Exception as e:
                    logger.error(f"❌ Fatal consumer error: {e}", exc_info=True)
                    break

                if message is None:
                    logger.info("Consumer stream ended.")
                    break

                self.handle_message(message)

        finally:
            self.state = ServiceState.SHUTTING_DOWN
            shutdown_wait.cancel()

            # Stop waiting on the consumer; the record it may have been about
            # to return is not committed and will be re-delivered
            if next_message is not None and not next_message.done():
                next_message.cancel()
                await asyncio.wait({next_message})

            aclose = getattr(messages, "aclose", None)
            if aclose is not None:
                await aclose()

    async def start(self) -> None:
        """Connect clients, run the ingestion loop, then shut down"""
        logger.info("=" * 60)
        logger.info("RSI Service started (event-driven mode)")
        logger.info("=" * 60)
        logger.info(f"  Broker:       {self.settings.BROKER}")
        logger.info(f"  Trade topic:  {self.settings.TRADE_TOPIC}")
        logger.info(f"  RSI topic:    {self.settings.RSI_TOPIC}")
        logger.info(f"  Group id:     {self.settings.GROUP_ID} ({self.settings.AUTO_OFFSET_RESET})")
        logger.info(f"  RSI period:   {self.settings.RSI_PERIOD}")
        logger.info(f"  Max history:  {self.settings.RSI_MAX_HISTORY} prices/token")
        logger.info("=" * 60)

        try:
            await self.consumer.connect()
            await self.consumer.subscribe([self.settings.TRADE_TOPIC])
            logger.info("✅ Connected consumer")

            await self.producer.connect()
            logger.info("✅ Connected producer")

            await self.run()
        finally:
            await self.stop()

    async def stop(self) -> None:
        """
        Graceful shutdown (does not wait for in-flight RSI publications)

        The producer close flushes for at most KAFKA_PRODUCER_CLOSE_TIMEOUT_S.
        """
        if self.state is ServiceState.TERMINATED:
            return

        logger.info("🛑 Stopping RSI Service...")
        self.state = ServiceState.SHUTTING_DOWN
        self._shutdown_event.set()

        self.emitter.abandon()

        await self.consumer.close()
        await self.producer.close()

        self.state = ServiceState.TERMINATED

        stats = self.processor.get_stats()
        logger.info(
            f"✅ RSI Service stopped: {self.processed_count} messages, "
            f"{stats['rejected_count']} unparsable, {stats['tokens_tracked']} tokens, "
            f"{self.emitter.published_count} RSI published, {self.emitter.failed_count} failed"
        )


def install_signal_handlers(service: RsiService) -> None:
    """Route SIGINT/SIGTERM to service.request_shutdown()"""
    loop = asyncio.get_running_loop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, service.request_shutdown)
        except NotImplementedError:
            # Windows event loops: fall back to a plain handler
            signal.signal(
                sig, lambda signum, frame: loop.call_soon_threadsafe(service.request_shutdown)
            )


async def main():
    """Main entry point"""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    service = RsiService(settings)
    install_signal_handlers(service)

    await service.start()


def cli() -> None:
    """Console script entry point"""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Goodbye!")


if __name__ == "__main__":
    cli()
