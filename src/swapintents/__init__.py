"""swapintents - price and quote aggregation across swap and bridge protocols."""

from swapintents.config import Settings, get_settings
from swapintents.engine import AggregationResult, ProtocolOutcome, SwapIntents
from swapintents.errors import (
    ErrorKind,
    IntentsError,
    NoCompatibleProtocolsError,
    RequestTimeoutError,
)
from swapintents.protocols import (
    IntentProtocol,
    PriceParams,
    PriceResponse,
    ProtocolFactory,
    QuoteParams,
    QuoteResponse,
)

__version__ = "0.1.0"

__all__ = [
    "SwapIntents",
    "Settings",
    "get_settings",
    "AggregationResult",
    "ProtocolOutcome",
    "IntentProtocol",
    "ProtocolFactory",
    "PriceParams",
    "QuoteParams",
    "PriceResponse",
    "QuoteResponse",
    "ErrorKind",
    "IntentsError",
    "NoCompatibleProtocolsError",
    "RequestTimeoutError",
]
