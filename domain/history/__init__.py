"""
Per-token price history

Exports:
- PriceHistoryStore: bounded FIFO price buffer per token
"""

from domain.history.price_history import DEFAULT_MAX_HISTORY, PriceHistoryStore

__all__ = ["DEFAULT_MAX_HISTORY", "PriceHistoryStore"]
