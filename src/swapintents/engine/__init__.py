"""Aggregation engine.

Matcher -> coordinator (concurrent dispatch) -> aggregator (best / race)
-> approval enricher (quotes only).
"""

from swapintents.engine.aggregator import AggregationResult, ResultAggregator, select_best
from swapintents.engine.approvals import ApprovalEnricher, ApprovalRequirement
from swapintents.engine.coordinator import ExecutionCoordinator, Operation, ProtocolOutcome
from swapintents.engine.intents import SwapIntents
from swapintents.engine.matcher import get_compatible_protocols, is_compatible

__all__ = [
    "SwapIntents",
    "AggregationResult",
    "ResultAggregator",
    "select_best",
    "ApprovalEnricher",
    "ApprovalRequirement",
    "ExecutionCoordinator",
    "Operation",
    "ProtocolOutcome",
    "get_compatible_protocols",
    "is_compatible",
]
