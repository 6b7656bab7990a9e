"""Selection strategies over dispatched protocol calls.

- best: wait for every call, pick the largest amount_out
- race: return on the first success (or once everything failed)
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, Literal, Optional, Sequence

from swapintents.engine.coordinator import ProtocolOutcome
from swapintents.protocols.base import PriceResponse

logger = logging.getLogger(__name__)

Method = Literal["best", "race"]


@dataclass(frozen=True)
class AggregationResult:
    """Outcome of one aggregated price or quote request."""

    result: Optional[PriceResponse]
    all_results: tuple[ProtocolOutcome, ...]
    method: Method
    total_duration_ms: int

    @property
    def has_result(self) -> bool:
        return self.result is not None

    @property
    def successful(self) -> list[ProtocolOutcome]:
        return [outcome for outcome in self.all_results if outcome.succeeded]

    @property
    def errors(self) -> dict[str, str]:
        """Error message per failed protocol."""
        return {
            outcome.protocol: outcome.error_message
            for outcome in self.all_results
            if not outcome.succeeded
        }


def select_best(outcomes: Iterable[ProtocolOutcome]) -> Optional[ProtocolOutcome]:
    """Successful outcome with the greatest amount_out.

    Amounts are compared as integers; on ties the earliest outcome wins.
    """
    best: Optional[ProtocolOutcome] = None
    for outcome in outcomes:
        if not outcome.succeeded:
            continue
        if best is None or outcome.response.amount_out_value > best.response.amount_out_value:
            best = outcome
    return best


class ResultAggregator:
    """Collects outcomes from dispatched tasks according to a strategy."""

    async def collect(
        self,
        method: Method,
        tasks: Sequence["asyncio.Task[ProtocolOutcome]"],
    ) -> tuple[Optional[ProtocolOutcome], list[ProtocolOutcome]]:
        """Run a strategy; returns (selected outcome, outcomes in completion order)."""
        try:
            if method == "race":
                return await self.race(tasks)
            return await self.best(tasks)
        finally:
            self._cancel_pending(tasks)

    async def best(
        self, tasks: Sequence["asyncio.Task[ProtocolOutcome]"]
    ) -> tuple[Optional[ProtocolOutcome], list[ProtocolOutcome]]:
        """Wait for every task, then pick the largest output."""
        outcomes: list[ProtocolOutcome] = []
        for next_done in asyncio.as_completed(tasks):
            outcomes.append(await next_done)

        selected = select_best(outcomes)
        if selected:
            logger.info(
                f"Selected best result: {selected.protocol} "
                f"(amount_out: {selected.response.amount_out}, "
                f"{len([o for o in outcomes if o.succeeded])}/{len(outcomes)} succeeded)"
            )
        else:
            logger.warning(f"No protocol succeeded ({len(outcomes)} failed)")
        return selected, outcomes

    async def race(
        self, tasks: Sequence["asyncio.Task[ProtocolOutcome]"]
    ) -> tuple[Optional[ProtocolOutcome], list[ProtocolOutcome]]:
        """Return on the first success.

        Outcomes already settled when the race resolves are kept; calls still
        in flight are cancelled by collect() and never reported.
        """
        outcomes: list[ProtocolOutcome] = []
        winner: Optional[ProtocolOutcome] = None

        for next_done in asyncio.as_completed(tasks):
            outcome = await next_done
            outcomes.append(outcome)
            if outcome.succeeded:
                winner = outcome
                break

        if winner is not None:
            recorded = {id(outcome) for outcome in outcomes}
            for task in tasks:
                if task.done() and not task.cancelled():
                    late = task.result()
                    if id(late) not in recorded:
                        outcomes.append(late)

            logger.info(
                f"Race won by {winner.protocol} in {winner.duration_ms}ms "
                f"(amount_out: {winner.response.amount_out})"
            )
        else:
            logger.warning(f"Race finished without a success ({len(outcomes)} failed)")

        return winner, outcomes

    @staticmethod
    def _cancel_pending(tasks: Sequence["asyncio.Task[ProtocolOutcome]"]) -> None:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            logger.debug(f"Cancelled {len(pending)} unfinished protocol calls")
