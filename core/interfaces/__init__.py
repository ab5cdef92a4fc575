"""Interfaces module - Abstract base classes for stream clients and indicators"""

from .indicators import BaseIndicator
from .streaming_consumer import BaseStreamConsumer
from .streaming_producer import BaseStreamProducer

__all__ = [
    "BaseIndicator",
    "BaseStreamConsumer",
    "BaseStreamProducer",
]
