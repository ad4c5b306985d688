"""
bikecount/domain package marker.
"""

from bikecount.domain.counter_stats import (
    Coordinates,
    CounterDetail,
    CounterMetadata,
    CounterStat,
    CounterSummary,
)

__all__ = [
    "Coordinates",
    "CounterDetail",
    "CounterMetadata",
    "CounterStat",
    "CounterSummary",
]
