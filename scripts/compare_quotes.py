#!/usr/bin/env python3
"""Compare prices or quotes from every registered protocol for one route.

Usage:
    python scripts/compare_quotes.py 1 1 0xA0b8...eB48 0xdAC1...1ec7 1000000
    python scripts/compare_quotes.py 1 8453 0xA0b8...eB48 0x8335...2913 1000000 --quote --method race
"""

import argparse
import asyncio
import logging
import sys

from swapintents.chains import chain_name
from swapintents.config import get_settings
from swapintents.engine.intents import SwapIntents
from swapintents.errors import IntentsError
from swapintents.protocols.base import PriceParams, QuoteParams

# Colors for output
GREEN = "\033[92m"
RED = "\033[91m"
YELLOW = "\033[93m"
RESET = "\033[0m"
CHECK = "✓"
CROSS = "✗"

DEFAULT_SENDER = "0x000000000000000000000000000000000000dEaD"


def print_status(name: str, success: bool, message: str = ""):
    """Print status with color."""
    mark = f"{GREEN}{CHECK}{RESET}" if success else f"{RED}{CROSS}{RESET}"
    print(f"  {mark} {name}" + (f" - {message}" if message else ""))


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("network_in", type=int, help="Source chain id")
    parser.add_argument("network_out", type=int, help="Destination chain id")
    parser.add_argument("token_in", help="Input token address")
    parser.add_argument("token_out", help="Output token address")
    parser.add_argument("amount_in", help="Input amount in base units")
    parser.add_argument("--sender", default=DEFAULT_SENDER, help="Sender address")
    parser.add_argument("--receiver", default=None, help="Receiver address (quotes only)")
    parser.add_argument("--slippage", type=float, default=0.5, help="Slippage in percent")
    parser.add_argument("--quote", action="store_true", help="Fetch executable quotes")
    parser.add_argument("--method", choices=["best", "race"], default=None)
    parser.add_argument("--timeout-ms", type=int, default=None)
    parser.add_argument("--include", nargs="*", default=None, help="Only these protocols")
    parser.add_argument("--exclude", nargs="*", default=None, help="Never these protocols")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


async def compare(args: argparse.Namespace) -> int:
    intents = SwapIntents(get_settings())

    changes = {}
    if args.method:
        changes["method"] = args.method
    if args.timeout_ms:
        changes["timeout_ms"] = args.timeout_ms
    if args.include is not None:
        changes["include_protocols"] = args.include
    if args.exclude is not None:
        changes["exclude_protocols"] = args.exclude
    if changes:
        intents.update_config(**changes)

    operation = "quote" if args.quote else "price"
    print(
        f"\n🔎 Comparing {operation}s: {chain_name(args.network_in)} -> "
        f"{chain_name(args.network_out)} ({intents.settings.method})"
    )
    print(f"  Protocols: {', '.join(intents.get_initialized_protocols()) or 'none'}")

    fields = dict(
        network_in=args.network_in,
        network_out=args.network_out,
        token_in=args.token_in,
        token_out=args.token_out,
        amount_in=args.amount_in,
        sender=args.sender,
        slippage=args.slippage,
    )

    try:
        if args.quote:
            result = await intents.fetch_quote(QuoteParams(receiver=args.receiver, **fields))
        else:
            result = await intents.fetch_price(PriceParams(**fields))
    except IntentsError as e:
        print_status("Request rejected", False, str(e))
        return 1

    print("\n📊 Results:")
    for outcome in result.all_results:
        if outcome.succeeded:
            print_status(
                outcome.protocol, True, f"{outcome.response.amount_out} ({outcome.duration_ms}ms)"
            )
        else:
            print_status(outcome.protocol, False, f"{outcome.error_message} ({outcome.duration_ms}ms)")

    print()
    if not result.has_result:
        print(f"  {YELLOW}No protocol returned a {operation}{RESET}")
        return 1

    print(
        f"  {GREEN}Selected {result.result.protocol}{RESET}: {result.result.amount_out} "
        f"in {result.total_duration_ms}ms"
    )
    return 0


def main():
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    sys.exit(asyncio.run(compare(args)))


if __name__ == "__main__":
    main()
