"""
Price Event Processor - per-message RSI step

Synchronous on purpose: the ingestion loop calls process() between two awaits,
so the history store is only ever touched by one coroutine.

Flow:
    payload → TradePayloadParser → PriceHistoryStore.append → RSI.calculate
            → IndicatorResult (or None)
"""

import logging
from typing import Any

from core.models.market_data import IndicatorResult
from core.validators.trade_payload import TradePayloadParser
from domain.history.price_history import DEFAULT_MAX_HISTORY, PriceHistoryStore
from domain.indicators.momentum import RSI

logger = logging.getLogger(__name__)

_PREVIEW_BYTES = 200


def _preview(payload: Any) -> str:
    """Short printable form of a payload for log lines"""
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8", errors="replace")
    text = str(payload)
    return text if len(text) <= _PREVIEW_BYTES else text[:_PREVIEW_BYTES] + "..."


class PriceEventProcessor:
    """Turn raw trade payloads into RSI results, one message at a time"""

    def __init__(self, period: int = 14, max_history: int = DEFAULT_MAX_HISTORY):
        """
        Args:
            period: RSI look-back period
            max_history: Prices kept per token
        """
        if max_history < period + 1:
            logger.warning(
                f"max_history={max_history} < period+1={period + 1}: RSI will never be emitted"
            )

        self.parser = TradePayloadParser()
        self.history = PriceHistoryStore(max_history=max_history)
        self.indicator = RSI(period=period)

    def process(self, payload: bytes | str | dict | None) -> IndicatorResult | None:
        """
        Process one inbound payload

        Returns:
            IndicatorResult when the token has enough history, otherwise None
            (including unparsable payloads, which are logged and skipped)
        """
        tick, error = self.parser.parse(payload)
        if tick is None:
            logger.warning(f"Could not parse token/price from payload ({error}): {_preview(payload)}")
            return None

        prices = self.history.append(tick.token_address, tick.price)

        rsi = self.indicator.calculate(prices)
        if rsi is None:
            logger.debug(
                f"{tick.token_address}: {len(prices)}/{self.indicator.min_samples} prices, no RSI yet"
            )
            return None

        return IndicatorResult(token_address=tick.token_address, rsi=rsi, price=tick.price)

    def get_stats(self) -> dict[str, int]:
        """Parser counters plus number of tracked tokens"""
        return {**self.parser.get_stats(), "tokens_tracked": self.history.token_count}
