"""Supported networks and chain helpers.

Chain ids follow the EVM convention where one exists; non-EVM networks use
the identifiers the bridge/aggregator APIs agree on.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class ChainId(IntEnum):
    """Known network identifiers."""

    ETHEREUM = 1
    OPTIMISM = 10
    BSC = 56
    SUI = 101
    POLYGON = 137
    SONIC = 146
    APTOS = 999
    BASE = 8453
    ARBITRUM = 42161
    AVALANCHE = 43114
    BLAST = 81457
    SOLANA = 1399811149


class VmType(str, Enum):
    EVM = "evm"
    SOLANA = "solana"
    MOVE = "move"


@dataclass(frozen=True)
class ChainConfig:
    """Static description of a network."""

    name: str
    symbol: str
    vm: VmType
    is_l2: bool = False


CHAINS: dict[ChainId, ChainConfig] = {
    ChainId.ETHEREUM: ChainConfig(name="ethereum", symbol="ETH", vm=VmType.EVM),
    ChainId.OPTIMISM: ChainConfig(name="optimism", symbol="ETH", vm=VmType.EVM, is_l2=True),
    ChainId.BSC: ChainConfig(name="bsc", symbol="BNB", vm=VmType.EVM),
    ChainId.SUI: ChainConfig(name="sui", symbol="SUI", vm=VmType.MOVE),
    ChainId.POLYGON: ChainConfig(name="polygon", symbol="POL", vm=VmType.EVM),
    ChainId.SONIC: ChainConfig(name="sonic", symbol="S", vm=VmType.EVM),
    ChainId.APTOS: ChainConfig(name="aptos", symbol="APT", vm=VmType.MOVE),
    ChainId.BASE: ChainConfig(name="base", symbol="ETH", vm=VmType.EVM, is_l2=True),
    ChainId.ARBITRUM: ChainConfig(name="arbitrum", symbol="ETH", vm=VmType.EVM, is_l2=True),
    ChainId.AVALANCHE: ChainConfig(name="avalanche", symbol="AVAX", vm=VmType.EVM),
    ChainId.BLAST: ChainConfig(name="blast", symbol="ETH", vm=VmType.EVM, is_l2=True),
    ChainId.SOLANA: ChainConfig(name="solana", symbol="SOL", vm=VmType.SOLANA),
}

EVM_CHAINS: tuple[ChainId, ...] = tuple(
    chain_id for chain_id, config in CHAINS.items() if config.vm == VmType.EVM
)

# Placeholder addresses venues use for the native asset
NATIVE_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
SOL_NATIVE_ADDRESS = "11111111111111111111111111111111"
WRAPPED_SOL_ADDRESS = "So11111111111111111111111111111111111111112"

_NATIVE_ALIASES = {"sol", "solana", "ethereum", "eth", "bsc", "binance", "avax", "avalanche"}


def get_chain(chain_id: int) -> Optional[ChainConfig]:
    """Look up a chain config, None for unknown ids."""
    try:
        return CHAINS.get(ChainId(chain_id))
    except ValueError:
        return None


def chain_name(chain_id: int) -> str:
    """Human-readable chain name (falls back to the numeric id)."""
    config = get_chain(chain_id)
    return config.name if config else str(chain_id)


def is_evm_network(chain_id: int) -> bool:
    config = get_chain(chain_id)
    return config is not None and config.vm == VmType.EVM


def is_l2_network(chain_id: int) -> bool:
    config = get_chain(chain_id)
    return config is not None and config.is_l2


def is_move_network(chain_id: int) -> bool:
    config = get_chain(chain_id)
    return config is not None and config.vm == VmType.MOVE


def is_solana_network(chain_id: int) -> bool:
    return chain_id == ChainId.SOLANA


def is_native(address: Optional[str]) -> bool:
    """Check if a token address denotes the chain's native asset."""
    if not address:
        return False

    lowered = address.lower()
    if lowered in {
        NATIVE_ADDRESS.lower(),
        ZERO_ADDRESS.lower(),
        SOL_NATIVE_ADDRESS.lower(),
        WRAPPED_SOL_ADDRESS.lower(),
    }:
        return True
    if "native" in lowered:
        return True
    return lowered in _NATIVE_ALIASES
