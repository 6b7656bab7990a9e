"""Tests for the chain catalogue and SDK errors."""

from swapintents.chains import (
    NATIVE_ADDRESS,
    ChainId,
    chain_name,
    get_chain,
    is_evm_network,
    is_l2_network,
    is_move_network,
    is_native,
    is_solana_network,
)
from swapintents.errors import ErrorKind, IntentsError, NoCompatibleProtocolsError


class TestChains:
    def test_lookup(self):
        assert get_chain(ChainId.BASE).symbol == "ETH"
        assert get_chain(12345) is None
        assert chain_name(42161) == "arbitrum"
        assert chain_name(12345) == "12345"

    def test_vm_predicates(self):
        assert is_evm_network(ChainId.POLYGON)
        assert not is_evm_network(ChainId.SOLANA)
        assert is_solana_network(ChainId.SOLANA)
        assert is_move_network(ChainId.SUI)
        assert is_l2_network(ChainId.OPTIMISM)
        assert not is_l2_network(ChainId.ETHEREUM)

    def test_is_native(self):
        assert is_native(NATIVE_ADDRESS.lower())
        assert is_native("0x0000000000000000000000000000000000000000")
        assert is_native("So11111111111111111111111111111111111111112")
        assert not is_native("0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48")
        assert not is_native(None)


class TestErrors:
    def test_message_format(self):
        error = IntentsError(ErrorKind.PRICE_NOT_FOUND, "no liquidity", payload={"protocol": "x"})

        assert str(error) == "PRICE_NOT_FOUND: no liquidity"
        assert error.detail == "no liquidity"
        assert error.to_dict() == {
            "type": "PRICE_NOT_FOUND",
            "message": "PRICE_NOT_FOUND: no liquidity",
            "payload": {"protocol": "x"},
        }

    def test_no_compatible_protocols(self):
        error = NoCompatibleProtocolsError(56, 137, "quote")

        assert error.kind == ErrorKind.INVALID_PARAMS
        assert "quote from chain 56 to chain 137" in str(error)
        assert error.payload == {"network_in": 56, "network_out": 137}

    def test_initialization_kind_value(self):
        assert ErrorKind.MISSING_INITIALIZATION.value == "MISSING_INITIALIZATION_PARAMS"
