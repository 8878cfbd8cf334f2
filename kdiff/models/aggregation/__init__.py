"""Aggregation models for multi-context workload comparison."""

from kdiff.models.aggregation.aggregation_index import (
    AggregationIndex,
    AggregationResult,
    IndexLeaf,
    MismatchSet,
    PartialFailure,
)

__all__ = [
    "AggregationIndex",
    "AggregationResult",
    "IndexLeaf",
    "MismatchSet",
    "PartialFailure",
]
