"""Web boundary layer for price and quote requests.

Everything in this layer is read-only: it fetches prices and prepares
unsigned transaction data, it never signs or broadcasts.
"""

__all__ = [
    "contracts",
    "services",
    "controllers",
]
