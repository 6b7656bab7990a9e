"""Simulated protocols for dry-run mode and tests.

Quotes are deterministic: the output is the input scaled by a fixed rate and
reduced by a fee, all in integer base units. Latency and failures can be
injected per instance.
"""

import asyncio
import hashlib
import logging
from typing import TYPE_CHECKING, Optional, Sequence

from swapintents.chains import EVM_CHAINS, ChainId, is_evm_network, is_native
from swapintents.errors import ErrorKind, IntentsError
from swapintents.protocols.base import (
    Erc20Approval,
    EvmExecutionPayload,
    EvmTransactionData,
    IntentProtocol,
    PriceParams,
    PriceResponse,
    QuoteParams,
    QuoteResponse,
)

if TYPE_CHECKING:
    from swapintents.config import Settings

logger = logging.getLogger(__name__)

BPS = 10_000

# Router contract the simulated quotes ask approval for
SIMULATED_ROUTER = "0x1111111254EEB25477B68fb85Ed929f73A960582"
SIMULATED_BRIDGE = "0x2222222222222222222222222222222222222222"


class SimulatedProtocol(IntentProtocol):
    """Dry-run protocol with configurable route support and behaviour."""

    def __init__(
        self,
        protocol: str = "dry-run",
        chains: Sequence[int] = EVM_CHAINS,
        single_chain: bool = True,
        multi_chain: bool = False,
        rate_bps: int = BPS,
        fee_bps: int = 30,
        latency_ms: int = 0,
        fail_with: Optional[str] = None,
        spender: str = SIMULATED_ROUTER,
        required_credential: Optional[str] = None,
        estimated_gas: int = 150_000,
    ):
        """Initialize simulated protocol.

        Args:
            protocol: Identifier reported in responses
            chains: Chain ids served
            single_chain: Serves same-chain swaps
            multi_chain: Serves cross-chain swaps
            rate_bps: Output per input, in basis points (10000 = 1:1)
            fee_bps: Fee deducted from the output, in basis points
            latency_ms: Simulated network latency per call
            fail_with: If set, every call raises with this message
            spender: Contract quotes request approval for
            required_credential: Credential key that must be configured
            estimated_gas: Gas reported for EVM routes
        """
        self.protocol = protocol
        self.chains = tuple(chains)
        self.single_chain = single_chain
        self.multi_chain = multi_chain
        self.rate_bps = rate_bps
        self.fee_bps = fee_bps
        self.latency_ms = latency_ms
        self.fail_with = fail_with
        self.spender = spender
        self.required_credential = required_credential
        self.estimated_gas = estimated_gas

    def is_correct_config(self, settings: "Settings") -> bool:
        if self.required_credential is None:
            return True
        return bool(settings.credentials.get(self.required_credential))

    def simulate_amount_out(self, amount_in: int) -> int:
        """Apply rate then fee, rounding down at each step."""
        gross = amount_in * self.rate_bps // BPS
        return gross * (BPS - self.fee_bps) // BPS

    async def _simulate_latency(self) -> None:
        if self.latency_ms > 0:
            await asyncio.sleep(self.latency_ms / 1000)

    async def fetch_price(self, params: PriceParams) -> PriceResponse:
        """Generate a simulated price."""
        self.validate_price_params(params)
        await self._simulate_latency()

        if self.fail_with:
            raise IntentsError(
                ErrorKind.PRICE_NOT_FOUND,
                f"Failed to fetch swap price from {self.protocol}: {self.fail_with}",
                payload={"protocol": self.protocol},
            )

        amount_out = self.simulate_amount_out(int(params.amount_in))
        if amount_out <= 0:
            raise IntentsError(
                ErrorKind.PRICE_NOT_FOUND,
                f"Output amount rounds to zero on {self.protocol}",
                payload={"protocol": self.protocol},
            )

        logger.debug(f"{self.protocol} price: {params.amount_in} -> {amount_out}")

        return PriceResponse(
            protocol=self.protocol,
            network_in=params.network_in,
            network_out=params.network_out,
            token_in=params.token_in,
            token_out=params.token_out,
            amount_in=str(params.amount_in),
            amount_out=str(amount_out),
            slippage=params.slippage,
            estimated_gas=str(self.estimated_gas) if is_evm_network(params.network_in) else None,
            price_impact=0.0,
            protocol_response={
                "rate_bps": self.rate_bps,
                "fee_bps": self.fee_bps,
                "simulated": True,
            },
        )

    async def fetch_quote(self, params: QuoteParams) -> QuoteResponse:
        """Generate a simulated quote, reusing a prior price from this protocol."""
        logger.info(f"Fetching simulated quote from {self.protocol} for {params.sender}")
        self.validate_price_params(params)

        price = params.price_response
        if price is None or price.protocol != self.protocol:
            price = await self.fetch_price(params)
        elif self.fail_with:
            raise IntentsError(
                ErrorKind.QUOTE_NOT_FOUND,
                f"Failed to fetch swap quote from {self.protocol}: {self.fail_with}",
                payload={"protocol": self.protocol},
            )

        evm_payload = None
        svm_payload = None
        if is_evm_network(params.network_in):
            evm_payload = self._build_evm_payload(params, price)
        elif params.network_in == ChainId.SOLANA:
            svm_payload = [self._fake_calldata(params, price)]

        return QuoteResponse(
            protocol=self.protocol,
            network_in=params.network_in,
            network_out=params.network_out,
            token_in=params.token_in,
            token_out=params.token_out,
            amount_in=price.amount_in,
            amount_out=price.amount_out,
            slippage=params.slippage,
            estimated_gas=price.estimated_gas,
            price_impact=price.price_impact,
            protocol_response={**price.protocol_response, "quoted": True},
            sender=params.sender,
            receiver=params.recipient,
            evm_execution_payload=evm_payload,
            svm_execution_payload=svm_payload,
        )

    def _build_evm_payload(
        self, params: QuoteParams, price: PriceResponse
    ) -> EvmExecutionPayload:
        native_in = is_native(params.token_in)
        transaction = EvmTransactionData(
            to=self.spender,
            data=f"0x{self._fake_calldata(params, price)}",
            value=price.amount_in if native_in else "0",
            gas_estimate=price.estimated_gas,
        )
        approval = None
        if not native_in:
            approval = Erc20Approval(spender=self.spender, amount=price.amount_in)
        return EvmExecutionPayload(transaction_data=transaction, approval=approval)

    def _fake_calldata(self, params: QuoteParams, price: PriceResponse) -> str:
        seed = (
            f"{self.protocol}:{params.network_in}:{params.network_out}:{params.token_in}:"
            f"{params.token_out}:{price.amount_in}:{price.amount_out}:{params.recipient}"
        )
        return hashlib.sha256(seed.encode()).hexdigest()


def create_simulated_dex() -> SimulatedProtocol:
    """Same-chain EVM aggregator."""
    return SimulatedProtocol(protocol="dry-run-dex", chains=EVM_CHAINS, fee_bps=30)


def create_simulated_solana_dex() -> SimulatedProtocol:
    """Same-chain Solana aggregator."""
    return SimulatedProtocol(
        protocol="dry-run-solana",
        chains=(ChainId.SOLANA,),
        fee_bps=25,
        estimated_gas=0,
    )


def create_simulated_bridge() -> SimulatedProtocol:
    """Cross-chain bridge between EVM chains and Solana."""
    return SimulatedProtocol(
        protocol="dry-run-bridge",
        chains=EVM_CHAINS + (ChainId.SOLANA,),
        single_chain=False,
        multi_chain=True,
        fee_bps=10,
        spender=SIMULATED_BRIDGE,
    )
