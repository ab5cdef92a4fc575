"""
Client factory - Auto-create clients based on configuration

Dependency injection pattern: the service depends on the Base* interfaces only
"""

import logging

from config.settings import Settings, get_settings
from core.interfaces.streaming_consumer import BaseStreamConsumer
from core.interfaces.streaming_producer import BaseStreamProducer

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("opensource",)


def _provider(settings: Settings) -> str:
    provider = settings.CLOUD_PROVIDER.lower()
    if provider not in SUPPORTED_PROVIDERS:
        raise ValueError(
            f"Unsupported cloud provider: {provider}. "
            f"Supported: {', '.join(SUPPORTED_PROVIDERS)} (Kafka)"
        )
    return provider


def create_stream_producer(settings: Settings | None = None) -> BaseStreamProducer:
    """
    Create stream producer based on CLOUD_PROVIDER config

    Returns:
        BaseStreamProducer: Kafka (opensource)

    Examples:
        >>> # .env: CLOUD_PROVIDER=opensource
        >>> producer = create_stream_producer()  # Returns KafkaStreamProducer
    """
    settings = settings or get_settings()
    _provider(settings)

    from providers.opensource.kafka_stream_producer import KafkaStreamProducer

    logger.info("✓ Creating KafkaStreamProducer (opensource)")
    return KafkaStreamProducer(settings)


def create_stream_consumer(settings: Settings | None = None, **overrides) -> BaseStreamConsumer:
    """
    Create stream consumer based on CLOUD_PROVIDER config

    Args:
        settings: Resolved settings (defaults to the singleton)
        **overrides: group_id / auto_offset_reset overrides (e.g. for tooling)

    Returns:
        BaseStreamConsumer: Kafka (opensource)
    """
    settings = settings or get_settings()
    _provider(settings)

    from providers.opensource.kafka_stream_consumer import KafkaStreamConsumer

    logger.info("✓ Creating KafkaStreamConsumer (opensource)")
    return KafkaStreamConsumer(settings, **overrides)
