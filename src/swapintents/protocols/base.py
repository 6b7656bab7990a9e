"""Abstract protocol interface and the common price/quote shapes."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from swapintents.errors import ErrorKind, IntentsError

if TYPE_CHECKING:
    from swapintents.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class PriceParams:
    """Parameters for an indicative price request.

    Amounts are base-unit integer strings (wei, lamports, ...).
    """

    network_in: int
    network_out: int
    token_in: str
    token_out: str
    amount_in: str
    sender: str
    slippage: float = 0.5  # percent

    @property
    def is_same_chain(self) -> bool:
        return self.network_in == self.network_out


@dataclass
class QuoteParams(PriceParams):
    """Parameters for an executable quote request."""

    receiver: Optional[str] = None
    price_response: Optional["PriceResponse"] = None

    @property
    def recipient(self) -> str:
        """Receiver of the output tokens (defaults to the sender)."""
        return self.receiver or self.sender


@dataclass(frozen=True)
class EvmTransactionData:
    """Unsigned EVM transaction fields."""

    to: str
    data: str
    value: str = "0"
    gas_limit: Optional[str] = None
    gas_estimate: Optional[str] = None


@dataclass(frozen=True)
class Erc20Approval:
    """Token-spend approval a quote depends on.

    ``required`` is None until either the protocol or the approval check
    resolves it.
    """

    spender: str
    amount: str
    payload: Optional[EvmTransactionData] = None
    required: Optional[bool] = None
    allowance: Optional[str] = None


@dataclass(frozen=True)
class EvmExecutionPayload:
    transaction_data: EvmTransactionData
    approval: Optional[Erc20Approval] = None


@dataclass(frozen=True)
class PriceResponse:
    """A price returned by one protocol."""

    protocol: str
    network_in: int
    network_out: int
    token_in: str
    token_out: str
    amount_in: str
    amount_out: str
    slippage: float
    estimated_gas: Optional[str] = None
    price_impact: Optional[float] = None
    protocol_response: dict[str, Any] = field(default_factory=dict)

    @property
    def amount_out_value(self) -> int:
        """Output amount as an arbitrary-precision integer."""
        return int(self.amount_out)


@dataclass(frozen=True)
class QuoteResponse(PriceResponse):
    """An executable quote returned by one protocol."""

    sender: str = ""
    receiver: str = ""
    evm_execution_payload: Optional[EvmExecutionPayload] = None
    svm_execution_payload: Optional[list[str]] = None


class IntentProtocol(ABC):
    """Abstract base class for price/quote protocols.

    Subclasses declare their identifier, the chains they serve and whether
    they handle same-chain swaps, cross-chain swaps, or both.
    """

    protocol: str = ""
    chains: tuple[int, ...] = ()
    single_chain: bool = False
    multi_chain: bool = False

    def is_correct_config(self, settings: "Settings") -> bool:
        """Check that settings carry the fields this protocol needs.

        Called once at construction; returning False excludes the protocol.
        """
        return True

    @abstractmethod
    async def fetch_price(self, params: PriceParams) -> PriceResponse:
        """
        Get an indicative price.

        Args:
            params: Route, tokens and input amount

        Returns:
            PriceResponse with amount_out in base units

        Raises:
            IntentsError (or any exception) on failure
        """
        pass

    @abstractmethod
    async def fetch_quote(self, params: QuoteParams) -> QuoteResponse:
        """
        Get an executable quote.

        Args:
            params: Route, tokens, input amount, sender and receiver

        Returns:
            QuoteResponse, with execution payload where the venue provides one
        """
        pass

    def supports_chain(self, chain_id: int) -> bool:
        return chain_id in self.chains

    def validate_price_params(self, params: PriceParams) -> None:
        """Reject requests no venue can price."""
        amount = str(params.amount_in)
        if not (amount.isascii() and amount.isdigit()):
            raise IntentsError(
                ErrorKind.INVALID_PARAMS,
                f"amount_in must be a base-unit integer string, got {amount!r}",
                payload={"protocol": self.protocol},
            )
        if int(amount) == 0:
            raise IntentsError(
                ErrorKind.INVALID_PARAMS,
                "amount_in must be greater than 0",
                payload={"protocol": self.protocol},
            )
        if params.is_same_chain and params.token_in.lower() == params.token_out.lower():
            raise IntentsError(
                ErrorKind.INVALID_PARAMS,
                "token_in and token_out must differ for same-chain swaps",
                payload={"protocol": self.protocol},
            )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(protocol={self.protocol})"
