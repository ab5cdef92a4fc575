"""
Technical indicators module

Exports:
- BaseIndicator (core/interfaces/indicators.py)
- Momentum: RSI
"""

from core.interfaces.indicators import BaseIndicator
from domain.indicators.momentum import RSI

__all__ = [
    "BaseIndicator",
    "RSI",
]
