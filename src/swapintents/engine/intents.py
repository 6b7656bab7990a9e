"""SwapIntents - central coordinator for price and quote aggregation.

Flow:
1. Filter registered protocols by route compatibility
2. Dispatch the request to every compatible protocol concurrently
3. Select a result (best output, or first success in race mode)
4. Quotes only: resolve the ERC-20 approval requirement if enabled

Configuration:
- method: "best" (default) or "race"
- timeout_ms: 30000 per protocol call
- include_protocols / exclude_protocols: exclusion wins
"""

import logging
import time
from typing import Any, Optional, Sequence, Union

import httpx

from swapintents.config import Settings, get_settings
from swapintents.engine.aggregator import AggregationResult, ResultAggregator
from swapintents.engine.approvals import ApprovalEnricher
from swapintents.engine.coordinator import ExecutionCoordinator, Operation, ProtocolOutcome
from swapintents.engine.matcher import get_compatible_protocols
from swapintents.errors import NoCompatibleProtocolsError
from swapintents.protocols.base import IntentProtocol, PriceParams, QuoteParams
from swapintents.protocols.factory import default_factories
from swapintents.protocols.registry import ProtocolFactory, ProtocolRegistry

logger = logging.getLogger(__name__)

_REGISTRY_KEYS = ("include_protocols", "exclude_protocols")


class SwapIntents:
    """Aggregates prices and quotes across registered protocols."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        factories: Optional[Sequence[ProtocolFactory]] = None,
        rpc_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the engine.

        Args:
            settings: Settings (defaults to the cached environment settings)
            factories: Protocol factories (defaults to the dry-run family in dry-run mode)
            rpc_transport: Optional httpx transport for approval RPC calls
        """
        self.settings = settings or get_settings()
        self._factories = (
            list(factories) if factories is not None else default_factories(self.settings)
        )
        self.registry = ProtocolRegistry(self._factories, self.settings)
        self.aggregator = ResultAggregator()
        self._rpc_transport = rpc_transport

    @property
    def coordinator(self) -> ExecutionCoordinator:
        return ExecutionCoordinator(
            timeout_ms=self.settings.timeout_ms,
            max_concurrency=self.settings.max_concurrency,
        )

    @property
    def approval_enricher(self) -> ApprovalEnricher:
        return ApprovalEnricher(
            self.settings.rpc_urls,
            rpc_timeout=self.settings.rpc_timeout_seconds,
            transport=self._rpc_transport,
        )

    async def fetch_price(self, params: PriceParams) -> AggregationResult:
        """Aggregate prices for a route.

        Raises:
            NoCompatibleProtocolsError: No registered protocol serves the route
        """
        selected, outcomes, duration = await self._run(Operation.PRICE, params)

        return AggregationResult(
            result=selected.response if selected else None,
            all_results=tuple(outcomes),
            method=self.settings.method,
            total_duration_ms=duration,
        )

    async def fetch_quote(self, params: QuoteParams) -> AggregationResult:
        """Aggregate executable quotes for a route.

        The selected quote has its approval requirement resolved when
        ``check_approvals`` is enabled.

        Raises:
            NoCompatibleProtocolsError: No registered protocol serves the route
        """
        selected, outcomes, duration = await self._run(Operation.QUOTE, params)

        result = selected.response if selected else None
        if result is not None and self.settings.check_approvals:
            result = await self.approval_enricher.enrich(result)

        return AggregationResult(
            result=result,
            all_results=tuple(outcomes),
            method=self.settings.method,
            total_duration_ms=duration,
        )

    async def _run(
        self,
        operation: Operation,
        params: Union[PriceParams, QuoteParams],
    ) -> tuple[Optional[ProtocolOutcome], list[ProtocolOutcome], int]:
        protocols = get_compatible_protocols(self.registry.snapshot().values(), params)

        if not protocols:
            raise NoCompatibleProtocolsError(params.network_in, params.network_out, operation.value)

        logger.info(
            f"Found {len(protocols)} compatible protocols for {operation.value} request "
            f"({params.network_in} -> {params.network_out}, method: {self.settings.method})"
        )

        started = time.monotonic()
        tasks = self.coordinator.dispatch(protocols, operation, params)
        selected, outcomes = await self.aggregator.collect(self.settings.method, tasks)
        duration = int((time.monotonic() - started) * 1000)

        return selected, outcomes, duration

    def get_initialized_protocols(self) -> list[str]:
        """Identifiers of the protocols currently registered."""
        return self.registry.identifiers

    def get_protocol(self, identifier: str) -> Optional[IntentProtocol]:
        """A registered protocol instance, or None."""
        return self.registry.get(identifier)

    def update_config(self, **changes: Any) -> None:
        """Merge settings changes; rebuild the registry if protocol lists changed.

        Raises:
            pydantic.ValidationError: A changed value is invalid (settings are kept)
        """
        merged = {**self.settings.model_dump(), **changes}
        self.settings = type(self.settings).model_validate(merged)

        if any(key in changes for key in _REGISTRY_KEYS):
            self.registry.rebuild(self.settings)
