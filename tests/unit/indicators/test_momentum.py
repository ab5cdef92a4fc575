"""
Unit tests for momentum indicators (RSI)

Tests with hand-calculated scenarios: trending up, trending down, flat, neutral
"""

import random
from collections import deque

import pytest

from domain.indicators.momentum import RSI


class TestRSIWarmup:
    """RSI needs period + 1 prices"""

    @pytest.mark.parametrize(
        "period,length",
        [(1, 0), (1, 1), (1, 2), (3, 3), (3, 4), (14, 0), (14, 13), (14, 14), (14, 15), (14, 200)],
    )
    def test_absent_iff_fewer_than_period_plus_one(self, period, length):
        """calculate() returns None exactly when len(prices) < period + 1"""
        prices = [100.0 + (i % 3) for i in range(length)]

        result = RSI(period=period).calculate(prices)

        assert (result is None) == (length < period + 1)

    def test_min_samples(self):
        assert RSI(period=14).min_samples == 15

    @pytest.mark.parametrize("period", [0, -1, 2.5, True, "14"])
    def test_invalid_period_rejected(self, period):
        with pytest.raises(ValueError, match="positive integer"):
            RSI(period=period)


class TestRSIValues:
    """Hand-calculated RSI values"""

    def test_flat_prices_give_100(self):
        """All deltas zero → avg_loss == 0 → RSI 100"""
        result = RSI(period=14).calculate([5.0] * 15)

        assert result == 100.0

    def test_strictly_rising_gives_100(self):
        """1..15: every delta +1 → RSI 100"""
        result = RSI(period=14).calculate([float(p) for p in range(1, 16)])

        assert result == 100.0

    def test_strictly_falling_gives_0(self):
        """avg_gain == 0 → RS == 0 → RSI 0"""
        prices = [100.0 - i * 0.5 for i in range(20)]

        result = RSI(period=14).calculate(prices)

        assert result == 0.0

    def test_alternating_gives_50(self):
        """10, 9, 10, 9, ... (15 samples): equal gain and loss sums → RS 1 → RSI 50"""
        prices = [10.0 if i % 2 == 0 else 9.0 for i in range(15)]

        result = RSI(period=14).calculate(prices)

        assert result == 50.0

    def test_hand_calculated(self):
        """
        period=4, prices 10, 12, 11, 14, 13
        deltas +2, -1, +3, -1 → gain 5, loss 2 → RS 2.5 → RSI 100 - 100/3.5
        """
        result = RSI(period=4).calculate([10.0, 12.0, 11.0, 14.0, 13.0])

        assert result == pytest.approx(100 - 100 / 3.5)

    def test_uses_only_trailing_window(self):
        """Older prices outside the last period + 1 do not matter"""
        rsi = RSI(period=4)
        recent = [10.0, 12.0, 11.0, 14.0, 13.0]

        with_old_history = rsi.calculate([1000.0, 1.0, 500.0] + recent)

        assert with_old_history == rsi.calculate(recent)

    def test_simple_average_not_wilder(self):
        """
        Same window after a long downtrend: a smoothed RSI would still be
        dragged down, the simple window form only sees the last 15 prices
        """
        downtrend = [200.0 - i for i in range(100)]
        uptrend = [float(100 + i) for i in range(15)]

        assert RSI(period=14).calculate(downtrend + uptrend) == 100.0

    def test_accepts_deque(self):
        prices = deque([10.0 if i % 2 == 0 else 9.0 for i in range(30)], maxlen=200)

        assert RSI(period=14).calculate(prices) == 50.0

    def test_returns_builtin_float(self):
        result = RSI(period=3).calculate([1.0, 2.0, 1.5, 1.7])

        assert type(result) is float


class TestRSIBounds:
    """RSI always stays within 0-100 bounds"""

    def test_extreme_volatility(self):
        prices = [100, 110, 95, 115, 90, 120, 85, 125, 80, 130] * 3

        result = RSI(period=14).calculate([float(p) for p in prices])

        assert result is not None
        assert 0 <= result <= 100, f"RSI out of bounds: {result}"

    def test_extreme_finite_prices(self):
        """Gains/losses near float max must not overflow into NaN"""
        prices = [0.0 if i % 2 == 0 else 1.7e308 for i in range(15)]

        assert RSI(period=14).calculate(prices) == pytest.approx(50.0)

    def test_scale_invariant(self):
        prices = [10.0, 12.0, 11.0, 14.0, 13.0]

        assert RSI(period=4).calculate([p * 1e300 for p in prices]) == pytest.approx(
            RSI(period=4).calculate(prices)
        )

    @pytest.mark.parametrize("seed", range(20))
    def test_random_non_negative_prices(self, seed):
        rng = random.Random(seed)
        prices = [rng.uniform(0, 1000) for _ in range(rng.randint(15, 200))]

        result = RSI(period=rng.randint(1, 14)).calculate(prices)

        assert result is not None
        assert 0 <= result <= 100

    def test_repr(self):
        assert repr(RSI(period=7)) == "RSI(period=7)"
