"""Pytest configuration and fixtures."""

import os

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "true"
os.environ["DRY_RUN"] = "true"
os.environ.pop("METHOD", None)
os.environ.pop("INCLUDE_PROTOCOLS", None)
os.environ.pop("EXCLUDE_PROTOCOLS", None)

from swapintents.chains import ChainId
from swapintents.config import Settings
from swapintents.protocols.base import PriceParams, QuoteParams
from swapintents.protocols.dry_run import SimulatedProtocol
from swapintents.protocols.registry import ProtocolFactory

USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
USDT = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
WALLET = "0x1234567890123456789012345678901234567890"


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def price_params() -> PriceParams:
    """Same-chain USDC -> USDT on Ethereum."""
    return PriceParams(
        network_in=ChainId.ETHEREUM,
        network_out=ChainId.ETHEREUM,
        token_in=USDC,
        token_out=USDT,
        amount_in="1000000",
        sender=WALLET,
    )


@pytest.fixture
def quote_params(price_params: PriceParams) -> QuoteParams:
    return QuoteParams(**vars(price_params))


@pytest.fixture
def make_factory():
    """Build a ProtocolFactory around a SimulatedProtocol."""

    def _make(identifier: str, opt_in: bool = False, **kwargs) -> ProtocolFactory:
        return ProtocolFactory(
            identifier,
            lambda settings: SimulatedProtocol(protocol=identifier, **kwargs),
            opt_in=opt_in,
        )

    return _make
