"""Approval checks for selected EVM quotes.

For a quote whose approval descriptor is still unresolved, build the
``approve`` transaction and, when an RPC endpoint exists for the source
chain, compare the on-chain allowance with the required amount.
"""

import logging
from dataclasses import dataclass, replace
from typing import Mapping, Optional

import httpx

from swapintents.erc20 import Erc20Client, encode_approve
from swapintents.errors import RpcError
from swapintents.protocols.base import EvmTransactionData, QuoteResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApprovalRequirement:
    """Resolved (or partially resolved) approval state of a quote."""

    spender: str
    amount: str
    transaction: EvmTransactionData
    allowance: Optional[int] = None
    approval_required: Optional[bool] = None

    def apply_to(self, quote: QuoteResponse) -> QuoteResponse:
        """Copy of the quote with this requirement merged into its approval."""
        payload = quote.evm_execution_payload
        approval = replace(
            payload.approval,
            payload=self.transaction,
            required=self.approval_required,
            allowance=str(self.allowance) if self.allowance is not None else None,
        )
        return replace(quote, evm_execution_payload=replace(payload, approval=approval))


class ApprovalEnricher:
    """Resolves ERC-20 approval requirements using read-only RPC calls."""

    def __init__(
        self,
        rpc_urls: Mapping[int, str],
        rpc_timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.rpc_urls = dict(rpc_urls)
        self.rpc_timeout = rpc_timeout
        self._transport = transport

    @staticmethod
    def needs_check(quote: QuoteResponse) -> bool:
        """True when the quote carries an approval nobody has resolved yet."""
        payload = quote.evm_execution_payload
        return (
            payload is not None
            and payload.approval is not None
            and payload.approval.required is None
        )

    async def check(self, quote: QuoteResponse) -> Optional[ApprovalRequirement]:
        """Compute the approval requirement, None if the quote needs no check."""
        if not self.needs_check(quote):
            return None

        approval = quote.evm_execution_payload.approval
        try:
            amount = int(approval.amount)
            data = encode_approve(approval.spender, amount)
        except ValueError as e:
            logger.warning(f"Cannot build approval for {quote.protocol}: {e}")
            return None

        transaction = EvmTransactionData(to=quote.token_in, data=data, value="0")

        rpc_url = self.rpc_urls.get(quote.network_in)
        if not rpc_url:
            logger.debug(
                f"No RPC configured for chain {quote.network_in}, approval left unresolved"
            )
            return ApprovalRequirement(
                spender=approval.spender,
                amount=approval.amount,
                transaction=transaction,
            )

        erc20 = Erc20Client(
            quote.token_in, rpc_url, timeout=self.rpc_timeout, transport=self._transport
        )
        try:
            allowance = await erc20.allowance(quote.sender, approval.spender)
        except (RpcError, httpx.HTTPError, ValueError) as e:
            logger.warning(
                f"Allowance check failed for {quote.token_in} on chain {quote.network_in}: {e}"
            )
            return ApprovalRequirement(
                spender=approval.spender,
                amount=approval.amount,
                transaction=transaction,
            )

        required = allowance < amount
        logger.info(
            f"Approval {'required' if required else 'not required'} for {quote.protocol}: "
            f"allowance={allowance}, amount={amount}"
        )
        return ApprovalRequirement(
            spender=approval.spender,
            amount=approval.amount,
            transaction=transaction,
            allowance=allowance,
            approval_required=required,
        )

    async def enrich(self, quote: QuoteResponse) -> QuoteResponse:
        """Quote with its approval resolved where possible."""
        requirement = await self.check(quote)
        if requirement is None:
            return quote
        return requirement.apply_to(quote)
