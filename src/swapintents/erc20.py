"""Minimal ERC-20 helpers: approve call data and allowance reads.

Calls are ABI-encoded by hand (selector + 32-byte words) and sent as
JSON-RPC ``eth_call`` over httpx. Nothing here signs or broadcasts.
"""

import logging
from typing import Optional

import httpx

from swapintents.errors import RpcError

logger = logging.getLogger(__name__)

ERC20_APPROVE_SELECTOR = "0x095ea7b3"  # approve(address,uint256)
ERC20_ALLOWANCE_SELECTOR = "0xdd62ed3e"  # allowance(address,address)

MAX_UINT256 = 2**256 - 1
_HEX_DIGITS = set("0123456789abcdef")


def encode_address(address: str) -> str:
    """Left-pad an address to a 32-byte ABI word."""
    raw = address.lower()
    if raw.startswith("0x"):
        raw = raw[2:]
    if len(raw) != 40 or not set(raw) <= _HEX_DIGITS:
        raise ValueError(f"Invalid EVM address: {address}")
    return raw.zfill(64)


def encode_uint256(value: int) -> str:
    if value < 0 or value > MAX_UINT256:
        raise ValueError(f"Value out of uint256 range: {value}")
    return hex(value)[2:].zfill(64)


def encode_approve(spender: str, amount: int) -> str:
    """Call data for ``approve(spender, amount)``."""
    return f"{ERC20_APPROVE_SELECTOR}{encode_address(spender)}{encode_uint256(amount)}"


def encode_allowance(owner: str, spender: str) -> str:
    """Call data for ``allowance(owner, spender)``."""
    return f"{ERC20_ALLOWANCE_SELECTOR}{encode_address(owner)}{encode_address(spender)}"


class Erc20Client:
    """Read-only client for one ERC-20 token on one chain."""

    def __init__(
        self,
        token_address: str,
        rpc_url: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize client.

        Args:
            token_address: Token contract address
            rpc_url: JSON-RPC endpoint of the token's chain
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.token_address = token_address
        self.rpc_url = rpc_url
        self.timeout = timeout
        self._transport = transport

    async def allowance(self, owner: str, spender: str) -> int:
        """Current allowance granted by owner to spender, in base units."""
        result = await self._eth_call(encode_allowance(owner, spender))

        if not isinstance(result, str) or not result.startswith("0x") or result == "0x":
            raise RpcError(
                f"Unexpected allowance result from {self.token_address}: {result!r}",
                payload={"token": self.token_address, "rpc_url": self.rpc_url},
            )

        try:
            return int(result, 16)
        except ValueError as e:
            raise RpcError(
                f"Malformed allowance result: {result!r}",
                payload={"token": self.token_address},
            ) from e

    async def _eth_call(self, data: str) -> object:
        payload = {
            "jsonrpc": "2.0",
            "method": "eth_call",
            "params": [{"to": self.token_address, "data": data}, "latest"],
            "id": 1,
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(self.rpc_url, json=payload)

        if response.status_code != 200:
            raise RpcError(
                f"RPC error: {response.status_code} - {response.text}",
                payload={"rpc_url": self.rpc_url, "status": response.status_code},
            )

        body = response.json()
        if not isinstance(body, dict):
            raise RpcError(
                f"Malformed JSON-RPC response: {body!r}",
                payload={"rpc_url": self.rpc_url},
            )
        if "error" in body:
            raise RpcError(
                f"eth_call failed: {body['error']}",
                payload={"rpc_url": self.rpc_url, "error": body["error"]},
            )

        return body.get("result")
