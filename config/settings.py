"""
Application Settings - Load from environment + YAML transport tuning

Design Philosophy:
- Service parameters (broker, topics, RSI period, group id) → environment / .env
- Kafka client tuning (timeouts, acks, backoff) → config/providers/streaming.yaml

Settings are resolved ONCE at startup (get_settings()) and handed to the
service by reference. Nothing reads os.environ inside the processing loop.

Uses Pydantic for validation and type safety
"""

from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.utils.config import get_nested, load_yaml_safe


class Settings(BaseSettings):
    """
    Application settings

    Architecture:
    - Service parameters → environment variables (.env supported)
    - Kafka client tuning → config/providers/streaming.yaml (optional)

    Usage:
        from config.settings import get_settings

        settings = get_settings()
        print(settings.BROKER)  # From env, default localhost:29092
        print(settings.KAFKA_SESSION_TIMEOUT_MS)  # From streaming.yaml
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Load YAML configs from files (cached at class level)
        if not hasattr(Settings, "_yaml_loaded"):
            Settings._streaming_config = load_yaml_safe("config/providers/streaming.yaml")
            Settings._yaml_loaded = True

    # ============================================
    # ENVIRONMENT
    # ============================================
    ENVIRONMENT: str = Field(default="local", description="Environment: local, dev, staging, prod")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    CLOUD_PROVIDER: str = Field(
        default="opensource",
        description="Stream provider: opensource (Kafka)",
    )

    # ============================================
    # STREAMING - Kafka
    # ============================================
    BROKER: str = Field(default="localhost:29092", description="Kafka bootstrap servers")
    TRADE_TOPIC: str = Field(default="trade-data", description="Inbound trade/price topic")
    RSI_TOPIC: str = Field(default="rsi-data", description="Outbound RSI topic")
    GROUP_ID: str = Field(default="rsi-service", description="Consumer group id")
    AUTO_OFFSET_RESET: Literal["earliest", "latest", "none"] = Field(
        default="earliest", description="Where to start when the group has no committed offset"
    )

    # ============================================
    # RSI CALCULATION
    # ============================================
    RSI_PERIOD: int = Field(default=14, gt=0, description="RSI look-back period")
    RSI_MAX_HISTORY: int = Field(
        default=200, gt=0, description="Prices kept per token (FIFO eviction)"
    )
    PUBLISH_TIMEOUT_SECONDS: float = Field(
        default=5.0, gt=0, description="Bounded send timeout per RSI publication"
    )

    # ============================================
    # KAFKA CLIENT TUNING (from YAML)
    # ============================================
    def _kafka(self, *keys: str, default: Any) -> Any:
        return get_nested(self._streaming_config, "kafka", *keys, default=default)

    @property
    def KAFKA_SESSION_TIMEOUT_MS(self) -> int:
        """Consumer group session timeout from streaming.yaml"""
        return self._kafka("consumer", "session_timeout_ms", default=30000)

    @property
    def KAFKA_HEARTBEAT_INTERVAL_MS(self) -> int:
        """Consumer heartbeat interval from streaming.yaml"""
        return self._kafka("consumer", "heartbeat_interval_ms", default=10000)

    @property
    def KAFKA_CONSUMER_REQUEST_TIMEOUT_MS(self) -> int:
        """Consumer request timeout from streaming.yaml"""
        return self._kafka("consumer", "request_timeout_ms", default=40000)

    @property
    def KAFKA_CONSUMER_RETRY_BACKOFF_MS(self) -> int:
        """Consumer retry backoff from streaming.yaml"""
        return self._kafka("consumer", "retry_backoff_ms", default=1000)

    @property
    def KAFKA_PRODUCER_ACKS(self) -> int | str:
        """Producer acks (0, 1 or "all") from streaming.yaml"""
        return self._kafka("producer", "acks", default="all")

    @property
    def KAFKA_PRODUCER_LINGER_MS(self) -> int:
        """Producer batching delay from streaming.yaml"""
        return self._kafka("producer", "linger_ms", default=10)

    @property
    def KAFKA_PRODUCER_REQUEST_TIMEOUT_MS(self) -> int:
        """Producer request timeout from streaming.yaml"""
        return self._kafka("producer", "request_timeout_ms", default=40000)

    @property
    def KAFKA_PRODUCER_RETRY_BACKOFF_MS(self) -> int:
        """Producer retry backoff from streaming.yaml"""
        return self._kafka("producer", "retry_backoff_ms", default=1000)

    @property
    def KAFKA_PRODUCER_COMPRESSION(self) -> str | None:
        """Producer compression codec from streaming.yaml (None = off)"""
        return self._kafka("producer", "compression_type", default=None)

    @property
    def KAFKA_PRODUCER_CLOSE_TIMEOUT_S(self) -> float:
        """Longest flush allowed when closing the producer, from streaming.yaml"""
        return float(self._kafka("producer", "close_timeout_s", default=1.0))


# Singleton pattern
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings (singleton)

    Returns:
        Settings instance

    Example:
        >>> settings = get_settings()
        >>> print(settings.TRADE_TOPIC)
        trade-data
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
