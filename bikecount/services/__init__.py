"""
bikecount/services package marker.
"""

from bikecount.services.detail_service import build_counter_details, counter_detail_slugs
from bikecount.services.stats_service import (
    group_by_label,
    merge_group,
    parse_coordinates,
    prepare_stats,
    span_in_days,
    stats_to_payload,
    transform_record,
)

__all__ = [
    "build_counter_details",
    "counter_detail_slugs",
    "group_by_label",
    "merge_group",
    "parse_coordinates",
    "prepare_stats",
    "span_in_days",
    "stats_to_payload",
    "transform_record",
]
