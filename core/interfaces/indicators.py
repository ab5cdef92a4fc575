"""
Abstract interface for technical indicators

Indicators work on a plain price sequence (oldest first), not on candles: the
RSI service keeps raw trade prices per token.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Optional


class BaseIndicator(ABC):
    """
    Indicator interface

    Design principle:
    - Pure calculation logic (no stream or storage dependency)
    - Testable with plain lists
    """

    def __init__(self, period: int, **kwargs):
        """
        Initialize indicator

        Args:
            period: Look-back period for calculation (positive integer)
            **kwargs: Additional indicator-specific parameters

        Raises:
            ValueError: If period is not a positive integer
        """
        if isinstance(period, bool) or not isinstance(period, int) or period <= 0:
            raise ValueError(
                f"{self.__class__.__name__}: period must be a positive integer, got {period!r}"
            )

        self.period = period
        self.name = self.__class__.__name__
        self.params = {"period": period, **kwargs}

    @property
    @abstractmethod
    def min_samples(self) -> int:
        """Number of prices needed before calculate() returns a value"""

    @abstractmethod
    def calculate(self, prices: Sequence[float]) -> Optional[float]:
        """
        Calculate indicator from a price sequence

        Args:
            prices: Prices ordered oldest → newest

        Returns:
            Indicator value (float) or None if insufficient data
        """

    def __repr__(self) -> str:
        """String representation"""
        params_str = ", ".join(f"{k}={v}" for k, v in self.params.items())
        return f"{self.name}({params_str})"
