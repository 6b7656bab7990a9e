"""Price/quote request and response contracts."""

from dataclasses import asdict
from typing import Any, Optional

from pydantic import BaseModel, Field

from swapintents.engine.aggregator import AggregationResult
from swapintents.engine.coordinator import ProtocolOutcome
from swapintents.protocols.base import IntentProtocol, PriceParams, QuoteParams


class PriceRequest(BaseModel):
    """Request for an aggregated price."""

    network_in: int = Field(..., description="Source chain id")
    network_out: int = Field(..., description="Destination chain id")
    token_in: str = Field(..., min_length=1, description="Input token address")
    token_out: str = Field(..., min_length=1, description="Output token address")
    amount_in: str = Field(..., pattern=r"^[0-9]+$", description="Input amount in base units")
    sender: str = Field(..., min_length=1, description="Wallet that will swap")
    slippage: float = Field(default=0.5, ge=0, le=50, description="Slippage tolerance in percent")

    def to_params(self) -> PriceParams:
        return PriceParams(**self.model_dump())


class QuoteRequest(PriceRequest):
    """Request for an aggregated executable quote."""

    receiver: Optional[str] = Field(None, description="Recipient (defaults to sender)")

    def to_params(self) -> QuoteParams:
        return QuoteParams(**self.model_dump())


class ProtocolResult(BaseModel):
    """One protocol's outcome."""

    protocol: str
    success: bool
    response: Optional[dict[str, Any]] = None
    error: Optional[str] = None
    duration_ms: int

    @classmethod
    def from_outcome(cls, outcome: ProtocolOutcome) -> "ProtocolResult":
        return cls(
            protocol=outcome.protocol,
            success=outcome.succeeded,
            response=asdict(outcome.response) if outcome.response else None,
            error=outcome.error_message,
            duration_ms=outcome.duration_ms,
        )


class AggregationResponse(BaseModel):
    """Selected result plus every protocol outcome.

    ``success`` is False when no protocol produced a result; that is a
    "no offer available" answer, not a failed request.
    """

    success: bool
    method: str
    result: Optional[dict[str, Any]] = None
    all_results: list[ProtocolResult] = Field(default_factory=list)
    total_duration_ms: int

    @classmethod
    def from_result(cls, result: AggregationResult) -> "AggregationResponse":
        return cls(
            success=result.has_result,
            method=result.method,
            result=asdict(result.result) if result.result else None,
            all_results=[ProtocolResult.from_outcome(o) for o in result.all_results],
            total_duration_ms=result.total_duration_ms,
        )


class ProtocolInfo(BaseModel):
    """Capabilities of a registered protocol."""

    protocol: str
    chains: list[int]
    single_chain: bool
    multi_chain: bool

    @classmethod
    def from_protocol(cls, protocol: IntentProtocol) -> "ProtocolInfo":
        return cls(
            protocol=protocol.protocol,
            chains=[int(chain) for chain in protocol.chains],
            single_chain=protocol.single_chain,
            multi_chain=protocol.multi_chain,
        )
