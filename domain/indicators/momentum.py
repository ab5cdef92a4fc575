"""
Momentum indicators

Implementations:
- RSI: Relative Strength Index (simple sliding-window form)
"""

from collections.abc import Sequence
from itertools import islice
from typing import Optional

import numpy as np

from core.interfaces.indicators import BaseIndicator


class RSI(BaseIndicator):
    """
    Relative Strength Index over a fixed trailing window

    Formula (last period + 1 prices, period deltas):
        avg_gain = sum(positive deltas) / period
        avg_loss = sum(|non-positive deltas|) / period
        RS = avg_gain / avg_loss
        RSI = 100 - (100 / (1 + RS)), or 100 when avg_loss == 0

    NOTE: plain averages over the window, not Wilder's exponential smoothing.
    Values differ from TA-Lib's RSI on the same prices.

    Interpretation:
        - RSI > 70: Overbought
        - RSI < 30: Oversold
        - RSI = 50: Neutral

    Example:
        >>> rsi = RSI(period=14)
        >>> rsi.calculate([float(p) for p in range(1, 16)])
        100.0
    """

    def __init__(self, period: int = 14):
        """
        Initialize RSI

        Args:
            period: Look-back period (default: 14)
        """
        super().__init__(period=period)

    @property
    def min_samples(self) -> int:
        return self.period + 1

    def calculate(self, prices: Sequence[float]) -> Optional[float]:
        """Calculate RSI from the most recent period + 1 prices"""
        count = len(prices)
        if count < self.min_samples:
            return None

        # deque has no slicing
        window = np.fromiter(
            islice(prices, count - self.min_samples, None),
            dtype=float,
            count=self.min_samples,
        )
        # RSI is scale-invariant; normalizing keeps deltas of huge prices finite
        scale = float(np.abs(window).max())
        if scale > 0:
            window = window / scale
        deltas = np.diff(window)

        gain_sum = float(deltas[deltas > 0].sum())
        loss_sum = float(-deltas[deltas <= 0].sum())

        avg_gain = gain_sum / self.period
        avg_loss = loss_sum / self.period

        if avg_loss == 0:
            return 100.0

        rs = avg_gain / avg_loss
        return 100.0 - (100.0 / (1.0 + rs))
