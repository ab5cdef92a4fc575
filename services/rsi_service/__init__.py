"""
RSI Service - Real-time RSI calculation

Event-driven service that:
1. Consumes trade events from Kafka
2. Keeps a bounded price history per token
3. Calculates RSI (simple sliding window)
4. Publishes RSI events to Kafka (fire-and-forget)
"""

from services.rsi_service.emitter import IndicatorEmitter, serialize_indicator
from services.rsi_service.processor import PriceEventProcessor

__all__ = ["IndicatorEmitter", "PriceEventProcessor", "serialize_indicator"]
