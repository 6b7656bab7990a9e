"""Request and response contracts for the web layer."""

from swapintents.web.contracts.quotes import (
    AggregationResponse,
    PriceRequest,
    ProtocolInfo,
    ProtocolResult,
    QuoteRequest,
)

__all__ = [
    "PriceRequest",
    "QuoteRequest",
    "AggregationResponse",
    "ProtocolResult",
    "ProtocolInfo",
]
