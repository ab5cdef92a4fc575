"""
Bounded per-token price history

Owned by the single ingestion loop: no locking. If the service is ever split
into concurrent per-partition consumers, give each consumer its own store.
"""

import logging
from collections import deque

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY = 200


class PriceHistoryStore:
    """
    Recent prices per token, oldest first

    Each token gets a deque(maxlen=max_history): appending to a full buffer
    drops exactly the oldest price. Tokens are created on first sight and are
    never removed, so the number of tokens grows for the process lifetime.

    Example:
        >>> store = PriceHistoryStore(max_history=3)
        >>> for p in [1.0, 2.0, 3.0, 4.0]:
        ...     store.append("abc", p)
        >>> store.view("abc")
        (2.0, 3.0, 4.0)
    """

    def __init__(self, max_history: int = DEFAULT_MAX_HISTORY):
        if max_history <= 0:
            raise ValueError(f"max_history must be positive, got {max_history}")

        self.max_history = max_history
        self._history: dict[str, deque[float]] = {}

    def append(self, token_id: str, price: float) -> deque[float]:
        """
        Record a price for token_id (get-or-create its buffer)

        Returns:
            The token's live buffer. Callers must treat it as read-only.
        """
        prices = self._history.get(token_id)
        if prices is None:
            prices = deque(maxlen=self.max_history)
            self._history[token_id] = prices
            logger.debug(f"Tracking new token {token_id} ({len(self._history)} total)")

        prices.append(price)
        return prices

    def view(self, token_id: str) -> tuple[float, ...]:
        """Snapshot of token_id's prices (empty tuple for unknown tokens)"""
        prices = self._history.get(token_id)
        return tuple(prices) if prices is not None else ()

    @property
    def token_count(self) -> int:
        """Number of distinct tokens tracked"""
        return len(self._history)

    def __len__(self) -> int:
        return len(self._history)

    def __contains__(self, token_id: object) -> bool:
        return token_id in self._history
