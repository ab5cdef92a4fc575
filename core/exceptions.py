"""
Service error taxonomy

Transport errors are not wrapped: they surface as aiokafka.errors.KafkaError
(or asyncio.TimeoutError for bounded sends) and are logged where they occur.
"""


class RsiServiceError(Exception):
    """Base class for errors raised by the RSI pipeline itself"""


class ParseError(RsiServiceError):
    """Inbound payload has no usable token_address/price pair"""


class SerializationError(RsiServiceError):
    """Indicator result could not be encoded to the outbound wire format"""
