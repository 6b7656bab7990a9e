"""Concurrent dispatch of price/quote calls with per-call timeouts.

Every compatible protocol gets its own task, created before any of them is
awaited. A task never raises: success, adapter failure and timeout all end up
in a ProtocolOutcome.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union

from swapintents.errors import ErrorKind, IntentsError, RequestTimeoutError
from swapintents.protocols.base import (
    IntentProtocol,
    PriceParams,
    PriceResponse,
    QuoteParams,
)

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    PRICE = "price"
    QUOTE = "quote"


@dataclass(frozen=True)
class ProtocolOutcome:
    """Result of one dispatched call: a response or an error, never both."""

    protocol: str
    response: Optional[PriceResponse] = None
    error: Optional[Exception] = None
    duration_ms: int = 0

    def __post_init__(self):
        if (self.response is None) == (self.error is None):
            raise ValueError("ProtocolOutcome needs exactly one of response or error")

    @property
    def succeeded(self) -> bool:
        return self.response is not None

    @property
    def error_message(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


class ExecutionCoordinator:
    """Fans a request out to protocols, isolating each call's failures."""

    def __init__(self, timeout_ms: int = 30000, max_concurrency: Optional[int] = None):
        """Initialize coordinator.

        Args:
            timeout_ms: Per-call timeout
            max_concurrency: Bound on simultaneous calls (None = all at once)
        """
        self.timeout_ms = timeout_ms
        self.max_concurrency = max_concurrency

    def dispatch(
        self,
        protocols: Sequence[IntentProtocol],
        operation: Operation,
        params: Union[PriceParams, QuoteParams],
    ) -> list["asyncio.Task[ProtocolOutcome]"]:
        """Start one task per protocol and return them without awaiting."""
        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None

        logger.debug(
            f"Dispatching {operation.value} to {len(protocols)} protocols "
            f"(timeout: {self.timeout_ms}ms, max concurrency: {self.max_concurrency or 'unbounded'})"
        )

        return [
            asyncio.create_task(
                self.execute(protocol, operation, params, semaphore),
                name=f"{operation.value}:{protocol.protocol}",
            )
            for protocol in protocols
        ]

    async def execute(
        self,
        protocol: IntentProtocol,
        operation: Operation,
        params: Union[PriceParams, QuoteParams],
        semaphore: Optional[asyncio.Semaphore] = None,
    ) -> ProtocolOutcome:
        """Run one call and wrap its result in an outcome."""
        started = time.monotonic()

        try:
            if semaphore is not None:
                async with semaphore:
                    response = await self._call_with_timeout(protocol, operation, params)
            else:
                response = await self._call_with_timeout(protocol, operation, params)

            self._check_response(protocol, operation, response)

        except Exception as e:
            duration = _elapsed_ms(started)
            logger.warning(
                f"{protocol.protocol} {operation.value} failed after {duration}ms: "
                f"{type(e).__name__}: {e}"
            )
            return ProtocolOutcome(protocol=protocol.protocol, error=e, duration_ms=duration)

        duration = _elapsed_ms(started)
        logger.debug(
            f"{protocol.protocol} {operation.value}: amount_out={response.amount_out} "
            f"({duration}ms)"
        )
        return ProtocolOutcome(protocol=protocol.protocol, response=response, duration_ms=duration)

    async def _call_with_timeout(
        self,
        protocol: IntentProtocol,
        operation: Operation,
        params: Union[PriceParams, QuoteParams],
    ) -> PriceResponse:
        if operation == Operation.QUOTE:
            call = protocol.fetch_quote(params)
        else:
            call = protocol.fetch_price(params)

        # wait_for cancels the call on timeout and drops its timer either way
        try:
            return await asyncio.wait_for(call, timeout=self.timeout_ms / 1000)
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(protocol.protocol, self.timeout_ms) from e

    @staticmethod
    def _check_response(
        protocol: IntentProtocol, operation: Operation, response: Optional[PriceResponse]
    ) -> None:
        kind = ErrorKind.QUOTE_NOT_FOUND if operation == Operation.QUOTE else ErrorKind.PRICE_NOT_FOUND

        if response is None:
            raise IntentsError(
                kind,
                f"{protocol.protocol} returned no {operation.value}",
                payload={"protocol": protocol.protocol},
            )

        amount_out = str(response.amount_out)
        # ASCII digits only; int() rejects e.g. superscripts
        if not (amount_out.isascii() and amount_out.isdigit()):
            raise IntentsError(
                kind,
                f"{protocol.protocol} returned a malformed amount_out: {amount_out!r}",
                payload={"protocol": protocol.protocol},
            )
