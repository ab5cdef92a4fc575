"""
Transport-neutral view of a consumed stream record
"""

from pydantic import BaseModel, Field


class StreamMessage(BaseModel):
    """
    One record pulled from an inbound topic

    The payload is kept as raw bytes: decoding belongs to the payload parser so
    that malformed JSON is a per-message parse failure, not a consumer error.
    """

    topic: str = Field(description="Topic the record was read from")
    partition: int = Field(description="Partition number")
    offset: int = Field(description="Offset of this record within the partition")
    key: bytes | None = Field(default=None, description="Raw record key")
    value: bytes | None = Field(default=None, description="Raw record payload")
    timestamp: int | None = Field(default=None, description="Record timestamp (epoch ms)")
