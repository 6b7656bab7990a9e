"""Protocol contract, registry and simulated protocols.

Protocols:
- dry-run-dex: same-chain swaps on every EVM chain
- dry-run-solana: same-chain swaps on Solana
- dry-run-bridge: cross-chain transfers between EVM chains and Solana
- dry-run-rfq: opt-in RFQ desk, needs a credential
"""

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
from swapintents.protocols.dry_run import SimulatedProtocol
from swapintents.protocols.factory import DRY_RUN_FACTORIES, default_factories
from swapintents.protocols.registry import ProtocolFactory, ProtocolRegistry

__all__ = [
    # Contract and shapes
    "IntentProtocol",
    "PriceParams",
    "QuoteParams",
    "PriceResponse",
    "QuoteResponse",
    "EvmTransactionData",
    "EvmExecutionPayload",
    "Erc20Approval",
    # Registry
    "ProtocolFactory",
    "ProtocolRegistry",
    "DRY_RUN_FACTORIES",
    "default_factories",
    # Simulated protocols
    "SimulatedProtocol",
]
