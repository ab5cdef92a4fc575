"""
Validators module

Inbound payload parsing for the RSI pipeline
"""

from core.validators.trade_payload import (
    PRICE_FIELD_CANDIDATES,
    TradePayloadParser,
    extract_price_tick,
)

__all__ = ["PRICE_FIELD_CANDIDATES", "TradePayloadParser", "extract_price_tick"]
