"""Tests for route compatibility."""

from swapintents.chains import ChainId
from swapintents.engine.matcher import get_compatible_protocols, is_compatible
from swapintents.protocols.base import PriceParams
from swapintents.protocols.dry_run import SimulatedProtocol

SAME_CHAIN = SimulatedProtocol(
    protocol="swap", chains=(ChainId.ETHEREUM, ChainId.BASE), single_chain=True
)
BRIDGE = SimulatedProtocol(
    protocol="bridge",
    chains=(ChainId.ETHEREUM, ChainId.BASE),
    single_chain=False,
    multi_chain=True,
)
BOTH = SimulatedProtocol(
    protocol="both", chains=(ChainId.ETHEREUM, ChainId.ARBITRUM), single_chain=True, multi_chain=True
)


def _params(network_in: int, network_out: int) -> PriceParams:
    return PriceParams(
        network_in=network_in,
        network_out=network_out,
        token_in="0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
        token_out="0xdAC17F958D2ee523a2206206994597C13D831ec7",
        amount_in="1000",
        sender="0x1234567890123456789012345678901234567890",
    )


class TestIsCompatible:
    def test_same_chain(self):
        assert is_compatible(SAME_CHAIN, ChainId.ETHEREUM, ChainId.ETHEREUM)
        assert not is_compatible(SAME_CHAIN, ChainId.POLYGON, ChainId.POLYGON)
        assert not is_compatible(BRIDGE, ChainId.ETHEREUM, ChainId.ETHEREUM)

    def test_cross_chain(self):
        assert is_compatible(BRIDGE, ChainId.ETHEREUM, ChainId.BASE)
        assert not is_compatible(SAME_CHAIN, ChainId.ETHEREUM, ChainId.BASE)

    def test_cross_chain_needs_both_ends(self):
        assert not is_compatible(BRIDGE, ChainId.ETHEREUM, ChainId.ARBITRUM)
        assert is_compatible(BOTH, ChainId.ARBITRUM, ChainId.ETHEREUM)


class TestGetCompatibleProtocols:
    def test_keeps_registry_order(self):
        matched = get_compatible_protocols([BOTH, SAME_CHAIN, BRIDGE], _params(1, 1))

        assert [p.protocol for p in matched] == ["both", "swap"]

    def test_no_match(self):
        assert get_compatible_protocols([SAME_CHAIN, BRIDGE], _params(56, 137)) == []
