"""
Market data models

Pydantic models for the RSI pipeline:
- PriceTick: (token, price) pair extracted from an inbound trade event
- IndicatorResult: RSI value emitted to the outbound topic
"""

import time

from pydantic import BaseModel, ConfigDict, Field


class PriceTick(BaseModel):
    """
    Price observation for one token

    Produced by the payload parser from a raw trade event
    """

    token_address: str = Field(description="Token identifier (mint / contract address)")
    price: float = Field(description="Observed price (SOL-denominated by convention)")


class IndicatorResult(BaseModel):
    """
    RSI event for the outbound topic

    Field names match the wire format one-to-one:
        {"token_address": str, "rsi": float, "price": float, "timestamp_ms": int}
    """

    model_config = ConfigDict(frozen=True)

    token_address: str = Field(description="Token identifier, also the message key")
    rsi: float = Field(ge=0.0, le=100.0, description="RSI value (0-100)")
    price: float = Field(description="Price that triggered this calculation")
    timestamp_ms: int = Field(
        default_factory=lambda: time.time_ns() // 1_000_000,
        description="Calculation time (epoch milliseconds)",
    )

    def to_dict(self) -> dict:
        """Convert to dictionary for the outbound topic"""
        return {
            "token_address": self.token_address,
            "rsi": self.rsi,
            "price": self.price,
            "timestamp_ms": self.timestamp_ms,
        }
