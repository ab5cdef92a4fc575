"""
Trade payload parser

Extracts (token_address, price) from inbound trade events. Producers of the
trade topic are not uniform: the price may live under several field names and
may be a JSON number or a numeric string.
"""

import json
import logging
import math
import re
from typing import Any

from core.exceptions import ParseError
from core.models.market_data import PriceTick

logger = logging.getLogger(__name__)

# Checked in order, first usable value wins
PRICE_FIELD_CANDIDATES = ("price_in_sol", "price", "price_sol", "amount_in_sol")

# Plain decimal/exponent notation only: no whitespace, underscores or non-ASCII digits
_NUMERIC_STRING = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def _coerce_price(value: Any) -> float | None:
    """Return value as a finite float, or None if it is not a usable price"""
    if isinstance(value, bool):
        return None

    if isinstance(value, str) and not _NUMERIC_STRING.fullmatch(value):
        return None

    if not isinstance(value, (int, float, str)):
        return None

    try:
        price = float(value)
    except (ValueError, OverflowError):
        return None

    if not math.isfinite(price):
        return None
    return price


def extract_price_tick(payload: bytes | str | dict[str, Any]) -> PriceTick:
    """
    Parse one inbound payload

    Args:
        payload: Raw record value (bytes/str JSON) or an already decoded object

    Returns:
        PriceTick with token_address and price

    Raises:
        ParseError: Malformed JSON, non-object document, missing token_address
                    or no candidate field holding a usable price

    Example:
        >>> extract_price_tick(b'{"token_address": "abc", "price": "1.5"}')
        PriceTick(token_address='abc', price=1.5)
    """
    if isinstance(payload, dict):
        data = payload
    else:
        try:
            data = json.loads(payload)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ParseError(f"Malformed JSON payload: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"Expected JSON object, got {type(data).__name__}")

    token = data.get("token_address")
    if not isinstance(token, str):
        raise ParseError("Missing or non-string token_address")

    for field in PRICE_FIELD_CANDIDATES:
        if field not in data:
            continue
        price = _coerce_price(data[field])
        if price is not None:
            return PriceTick(token_address=token, price=price)

    raise ParseError(
        f"No usable price field for token {token} "
        f"(tried {', '.join(PRICE_FIELD_CANDIDATES)})"
    )


class TradePayloadParser:
    """
    Tolerant front-end over extract_price_tick()

    Features:
    - Never raises on bad input (returns the reason instead)
    - Tracks parsed/rejected counts for logging
    """

    def __init__(self):
        self.parsed_count = 0
        self.rejected_count = 0

    def parse(
        self, payload: bytes | str | dict[str, Any] | None
    ) -> tuple[PriceTick | None, str | None]:
        """
        Parse payload into a PriceTick

        Returns:
            (tick, None) if usable
            (None, "error reason") otherwise

        Example:
            >>> parser = TradePayloadParser()
            >>> tick, error = parser.parse(message.value)
            >>> if tick is None:
            ...     logger.warning(f"Skipping message: {error}")
        """
        if payload is None:
            self.rejected_count += 1
            return None, "Empty payload"

        try:
            tick = extract_price_tick(payload)
        except ParseError as e:
            self.rejected_count += 1
            return None, str(e)

        self.parsed_count += 1
        return tick, None

    def get_stats(self) -> dict[str, int]:
        """
        Get parsing statistics

        Returns:
            Dictionary with parsed_count and rejected_count
        """
        return {
            "parsed_count": self.parsed_count,
            "rejected_count": self.rejected_count,
        }
