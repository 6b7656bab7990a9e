"""Route compatibility between requests and protocols."""

from typing import Iterable

from swapintents.protocols.base import IntentProtocol, PriceParams


def is_compatible(protocol: IntentProtocol, network_in: int, network_out: int) -> bool:
    """Check whether a protocol can serve a route.

    Same-chain routes need a single-chain protocol on that chain; cross-chain
    routes need a multi-chain protocol supporting both ends.
    """
    if network_in == network_out:
        return protocol.single_chain and protocol.supports_chain(network_in)

    return (
        protocol.multi_chain
        and protocol.supports_chain(network_in)
        and protocol.supports_chain(network_out)
    )


def get_compatible_protocols(
    protocols: Iterable[IntentProtocol], params: PriceParams
) -> list[IntentProtocol]:
    """Filter protocols for a request, keeping registry order."""
    return [
        protocol
        for protocol in protocols
        if is_compatible(protocol, params.network_in, params.network_out)
    ]
