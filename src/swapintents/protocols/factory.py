"""Factories for the protocols a default engine starts with.

Real venue adapters are supplied by the caller as extra ProtocolFactory
entries; dry-run mode adds the simulated family.
"""

import logging

from swapintents.chains import EVM_CHAINS
from swapintents.config import Settings
from swapintents.protocols.dry_run import (
    SimulatedProtocol,
    create_simulated_bridge,
    create_simulated_dex,
    create_simulated_solana_dex,
)
from swapintents.protocols.registry import ProtocolFactory

logger = logging.getLogger(__name__)

RFQ_CREDENTIAL = "dry_run_rfq_key"


def create_simulated_rfq(settings: Settings) -> SimulatedProtocol:
    """Simulated RFQ desk: best rates, needs a key, opt-in only."""
    return SimulatedProtocol(
        protocol="dry-run-rfq",
        chains=EVM_CHAINS,
        rate_bps=10_010,
        fee_bps=5,
        required_credential=RFQ_CREDENTIAL,
    )


DRY_RUN_FACTORIES: tuple[ProtocolFactory, ...] = (
    ProtocolFactory("dry-run-dex", lambda settings: create_simulated_dex()),
    ProtocolFactory("dry-run-solana", lambda settings: create_simulated_solana_dex()),
    ProtocolFactory("dry-run-bridge", lambda settings: create_simulated_bridge()),
    ProtocolFactory("dry-run-rfq", create_simulated_rfq, opt_in=True),
)


def default_factories(settings: Settings) -> list[ProtocolFactory]:
    """Factories used when the caller does not pass its own."""
    if settings.dry_run:
        logger.info("Dry-run mode: registering simulated protocols")
        return list(DRY_RUN_FACTORIES)

    logger.warning("No protocol factories configured outside dry-run mode")
    return []
