"""
Unit tests for factory pattern

Tests that correct client implementations are created based on config
"""

from unittest.mock import patch

import pytest

from factory.client_factory import create_stream_consumer, create_stream_producer
from providers.opensource.kafka_stream_consumer import KafkaStreamConsumer
from providers.opensource.kafka_stream_producer import KafkaStreamProducer


class TestStreamProducerFactory:
    """Test stream producer factory"""

    def test_create_kafka_producer_for_opensource(self, settings):
        """Test that opensource config creates KafkaStreamProducer"""
        producer = create_stream_producer(settings)

        assert isinstance(producer, KafkaStreamProducer)
        assert producer.settings is settings
        assert producer.producer is None  # Not connected yet

    def test_provider_name_is_case_insensitive(self, settings):
        settings.CLOUD_PROVIDER = "OpenSource"

        assert isinstance(create_stream_producer(settings), KafkaStreamProducer)

    @patch("factory.client_factory.get_settings")
    def test_falls_back_to_singleton(self, mock_settings, settings):
        mock_settings.return_value = settings

        producer = create_stream_producer()

        mock_settings.assert_called_once()
        assert producer.settings is settings

    def test_unsupported_provider_raises_error(self, settings):
        """Test that unsupported provider raises ValueError"""
        settings.CLOUD_PROVIDER = "invalid"

        with pytest.raises(ValueError, match="Unsupported cloud provider"):
            create_stream_producer(settings)


class TestStreamConsumerFactory:
    """Test stream consumer factory"""

    def test_create_kafka_consumer_for_opensource(self, settings):
        consumer = create_stream_consumer(settings)

        assert isinstance(consumer, KafkaStreamConsumer)
        assert consumer.group_id == settings.GROUP_ID
        assert consumer.auto_offset_reset == settings.AUTO_OFFSET_RESET

    def test_overrides_passed_through(self, settings):
        consumer = create_stream_consumer(
            settings, group_id="peek-rsi-1", auto_offset_reset="latest"
        )

        assert consumer.group_id == "peek-rsi-1"
        assert consumer.auto_offset_reset == "latest"

    def test_unsupported_provider_raises_error(self, settings):
        settings.CLOUD_PROVIDER = "aws"

        with pytest.raises(ValueError, match="Unsupported cloud provider"):
            create_stream_consumer(settings)
