"""Models module - Pydantic data models"""

from .market_data import IndicatorResult, PriceTick
from .streaming import StreamMessage

__all__ = [
    "PriceTick",
    "IndicatorResult",
    "StreamMessage",
]
