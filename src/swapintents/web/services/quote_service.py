"""Quote service backed by the aggregation engine.

READ-ONLY: prices and quotes are fetched, nothing is signed or broadcast.
"""

import logging

from swapintents.engine.intents import SwapIntents
from swapintents.web.contracts.quotes import (
    AggregationResponse,
    PriceRequest,
    ProtocolInfo,
    QuoteRequest,
)

logger = logging.getLogger(__name__)


class QuoteService:
    """Translates web contracts to engine calls and back."""

    def __init__(self, intents: SwapIntents):
        self.intents = intents

    async def get_price(self, request: PriceRequest) -> AggregationResponse:
        """Aggregated price.

        Raises:
            NoCompatibleProtocolsError: No protocol serves the route
        """
        result = await self.intents.fetch_price(request.to_params())
        if not result.has_result:
            logger.warning(
                f"No price available for {request.network_in} -> {request.network_out}: "
                f"{result.errors}"
            )
        return AggregationResponse.from_result(result)

    async def get_quote(self, request: QuoteRequest) -> AggregationResponse:
        """Aggregated executable quote.

        Raises:
            NoCompatibleProtocolsError: No protocol serves the route
        """
        result = await self.intents.fetch_quote(request.to_params())
        if not result.has_result:
            logger.warning(
                f"No quote available for {request.network_in} -> {request.network_out}: "
                f"{result.errors}"
            )
        return AggregationResponse.from_result(result)

    def list_protocols(self) -> list[ProtocolInfo]:
        """Registered protocols and their route support."""
        return [ProtocolInfo.from_protocol(protocol) for protocol in self.intents.registry]
