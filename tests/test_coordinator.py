"""Tests for concurrent dispatch and per-call timeouts."""

import asyncio
from dataclasses import replace

import pytest

from swapintents.engine.aggregator import ResultAggregator
from swapintents.engine.coordinator import ExecutionCoordinator, Operation, ProtocolOutcome
from swapintents.errors import ErrorKind, IntentsError, RequestTimeoutError
from swapintents.protocols.dry_run import SimulatedProtocol


class MalformedProtocol(SimulatedProtocol):
    """Returns a non-numeric amount_out."""

    def __init__(self, protocol: str, amount_out: str = "12.5"):
        super().__init__(protocol)
        self.malformed_amount = amount_out

    async def fetch_price(self, params):
        response = await super().fetch_price(params)
        return replace(response, amount_out=self.malformed_amount)


class CountingProtocol(SimulatedProtocol):
    """Tracks how many calls run at the same time."""

    active = 0
    peak = 0

    async def fetch_price(self, params):
        CountingProtocol.active += 1
        CountingProtocol.peak = max(CountingProtocol.peak, CountingProtocol.active)
        try:
            await asyncio.sleep(0.02)
            return await super().fetch_price(params)
        finally:
            CountingProtocol.active -= 1


async def _gather(tasks):
    return await asyncio.gather(*tasks)


class TestProtocolOutcome:
    def test_requires_exactly_one(self):
        with pytest.raises(ValueError):
            ProtocolOutcome(protocol="x")
        with pytest.raises(ValueError):
            ProtocolOutcome(
                protocol="x",
                response=object(),
                error=RuntimeError("boom"),
            )


class TestExecutionCoordinator:
    """Tests for the execution coordinator."""

    @pytest.mark.asyncio
    async def test_success_outcome(self, price_params):
        coordinator = ExecutionCoordinator(timeout_ms=1000)
        tasks = coordinator.dispatch([SimulatedProtocol("a")], Operation.PRICE, price_params)

        [outcome] = await _gather(tasks)

        assert outcome.succeeded
        assert outcome.protocol == "a"
        assert outcome.response.amount_out == "997000"
        assert outcome.error is None
        assert outcome.duration_ms >= 0

    @pytest.mark.asyncio
    async def test_tasks_are_named(self, price_params):
        coordinator = ExecutionCoordinator()
        tasks = coordinator.dispatch([SimulatedProtocol("a")], Operation.QUOTE, price_params)

        assert tasks[0].get_name() == "quote:a"
        await _gather(tasks)

    @pytest.mark.asyncio
    async def test_timeout_becomes_error_outcome(self, price_params):
        """A hung call times out while the others still record their results."""
        coordinator = ExecutionCoordinator(timeout_ms=50)
        protocols = [
            SimulatedProtocol("slow", latency_ms=5000),
            SimulatedProtocol("fast"),
        ]

        outcomes = await _gather(coordinator.dispatch(protocols, Operation.PRICE, price_params))
        slow, fast = outcomes

        assert not slow.succeeded
        assert isinstance(slow.error, RequestTimeoutError)
        assert slow.error.kind == ErrorKind.TIMEOUT
        assert "50ms" in slow.error_message
        assert slow.duration_ms < 1000
        assert fast.succeeded

    @pytest.mark.asyncio
    async def test_failure_is_contained(self, price_params):
        coordinator = ExecutionCoordinator()
        protocols = [
            SimulatedProtocol("broken", fail_with="upstream 500"),
            SimulatedProtocol("ok"),
        ]

        broken, ok = await _gather(coordinator.dispatch(protocols, Operation.PRICE, price_params))

        assert isinstance(broken.error, IntentsError)
        assert broken.error.kind == ErrorKind.PRICE_NOT_FOUND
        assert "upstream 500" in broken.error_message
        assert ok.succeeded

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_contained(self, price_params):
        class Exploding(SimulatedProtocol):
            async def fetch_price(self, params):
                raise KeyError("data")

        coordinator = ExecutionCoordinator()
        [outcome] = await _gather(
            coordinator.dispatch([Exploding("boom")], Operation.PRICE, price_params)
        )

        assert isinstance(outcome.error, KeyError)

    @pytest.mark.asyncio
    async def test_malformed_amount_is_an_error(self, price_params):
        coordinator = ExecutionCoordinator()
        [outcome] = await _gather(
            coordinator.dispatch([MalformedProtocol("bad")], Operation.PRICE, price_params)
        )

        assert not outcome.succeeded
        assert outcome.error.kind == ErrorKind.PRICE_NOT_FOUND

    @pytest.mark.asyncio
    async def test_non_ascii_digits_are_an_error(self, price_params):
        """Unicode digits int() cannot parse stay inside the outcome."""
        coordinator = ExecutionCoordinator()
        protocols = [MalformedProtocol("bad", amount_out="\u00b2"), SimulatedProtocol("ok")]
        tasks = coordinator.dispatch(protocols, Operation.PRICE, price_params)

        selected, outcomes = await ResultAggregator().collect("best", tasks)

        assert selected.protocol == "ok"
        bad = next(o for o in outcomes if o.protocol == "bad")
        assert bad.error.kind == ErrorKind.PRICE_NOT_FOUND

    @pytest.mark.asyncio
    async def test_non_ascii_amount_in_is_rejected(self, price_params):
        price_params.amount_in = "\u00b2"
        coordinator = ExecutionCoordinator()
        [outcome] = await _gather(
            coordinator.dispatch([SimulatedProtocol("a")], Operation.PRICE, price_params)
        )

        assert outcome.error.kind == ErrorKind.INVALID_PARAMS

    @pytest.mark.asyncio
    async def test_quote_operation(self, quote_params):
        coordinator = ExecutionCoordinator()
        [outcome] = await _gather(
            coordinator.dispatch([SimulatedProtocol("a")], Operation.QUOTE, quote_params)
        )

        assert outcome.succeeded
        assert outcome.response.evm_execution_payload is not None

    @pytest.mark.asyncio
    async def test_max_concurrency(self, price_params):
        CountingProtocol.active = 0
        CountingProtocol.peak = 0
        coordinator = ExecutionCoordinator(max_concurrency=2)
        protocols = [CountingProtocol(f"p{i}") for i in range(5)]

        outcomes = await _gather(coordinator.dispatch(protocols, Operation.PRICE, price_params))

        assert all(o.succeeded for o in outcomes)
        assert CountingProtocol.peak == 2

    @pytest.mark.asyncio
    async def test_unbounded_by_default(self, price_params):
        CountingProtocol.active = 0
        CountingProtocol.peak = 0
        coordinator = ExecutionCoordinator()
        protocols = [CountingProtocol(f"p{i}") for i in range(5)]

        await _gather(coordinator.dispatch(protocols, Operation.PRICE, price_params))

        assert CountingProtocol.peak == 5
