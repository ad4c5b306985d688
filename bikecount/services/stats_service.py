"""
bikecount/services/stats_service.py

Statistics pipeline: per-device summaries in, one canonical record per
logical counter out.

Pipeline
--------
1. ``transform_record`` turns each ``(id, CounterSummary)`` into an
   intermediate ``CounterStat`` carrying its normalized label.
2. ``group_by_label`` collects records sharing a normalized label, keeping
   the order in which each label first appears.
3. ``merge_group`` folds each group into one record.
4. ``prepare_stats`` orders the merged records by daily volume, highest first.

Inputs are never mutated and no I/O happens here.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Iterable, Mapping, Sequence

from pydantic import ValidationError

from bikecount.config import get_metadata_field_mapper
from bikecount.domain.counter_stats import (
    Coordinates,
    CounterMetadata,
    CounterStat,
    CounterSummary,
)
from bikecount.errors import EmptyCounterGroupError
from bikecount.logging_utils import log_event
from bikecount.mappers.metadata_field_mapper import CounterMetadataFieldMapper
from bikecount.normalization.label_normalizer import normalize_label

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400.0

INVALID_COORDINATES: Coordinates = (math.nan, math.nan)


def _parse_component(raw: str) -> float:
    try:
        return float(raw.strip())
    except ValueError:
        return math.nan


def parse_coordinates(raw: object) -> Coordinates:
    """
    Parse an upstream ``"<lon>,<lat>"`` string into ``(lat, lon)``.

    Missing or non-numeric components become ``nan``.
    """

    if not isinstance(raw, str):
        return INVALID_COORDINATES
    parts = raw.split(",")
    longitude = _parse_component(parts[0])
    latitude = _parse_component(parts[1]) if len(parts) > 1 else math.nan
    return (latitude, longitude)


def span_in_days(min_date: datetime, max_date: datetime) -> int:
    """
    Whole days between two timestamps, rounded half up.
    """

    elapsed = (max_date - min_date).total_seconds() / SECONDS_PER_DAY
    return int(math.floor(elapsed + 0.5))


def _coerce_summary(counter_id: str, raw: CounterSummary | Mapping[str, Any]) -> CounterSummary | None:
    if isinstance(raw, CounterSummary):
        return raw
    try:
        return CounterSummary.model_validate(raw)
    except ValidationError as exc:
        log_event(
            logger,
            logging.WARNING,
            "counter_record_skipped",
            counter_id=counter_id,
            reason="invalid_summary",
            errors=exc.error_count(),
        )
        return None


def transform_record(
    counter_id: str,
    summary: CounterSummary,
    metadata: Mapping[str, CounterMetadata],
    field_mapper: CounterMetadataFieldMapper,
) -> CounterStat:
    """
    Build the intermediate statistics record for one raw counter id.
    """

    record_metadata = metadata.get(counter_id)
    if record_metadata is None:
        logger.warning("No metadata for counter %r; using its id as label.", counter_id)

    name = field_mapper.lookup(record_metadata, "name")
    if not isinstance(name, str):
        logger.warning("Counter %r has no %r field; using its id as label.", counter_id, field_mapper.name)
        name = counter_id

    raw_coordinates = field_mapper.lookup(record_metadata, "coordinates")
    coordinates = parse_coordinates(raw_coordinates)
    if any(math.isnan(value) for value in coordinates):
        log_event(
            logger,
            logging.WARNING,
            "counter_coordinates_malformed",
            counter_id=counter_id,
            raw=raw_coordinates,
            coordinates=coordinates,
        )

    return CounterStat(
        id=counter_id,
        label=name,
        stripped_label=normalize_label(name),
        days=span_in_days(summary.min_date, summary.max_date),
        total=summary.total,
        day=summary.day,
        month=summary.month,
        week=summary.week,
        year=summary.year,
        days_this_year=summary.days_this_year,
        included=(),
        coordinates=coordinates,
    )


def group_by_label(records: Iterable[CounterStat]) -> dict[str, list[CounterStat]]:
    """
    Group records by normalized label in order of first appearance.
    """

    groups: dict[str, list[CounterStat]] = {}
    for record in records:
        groups.setdefault(record.stripped_label, []).append(record)
    return groups


def merge_group(stripped_label: str, members: Sequence[CounterStat]) -> CounterStat:
    """
    Fold all records of one logical counter into a single record.

    Rollups are summed; ``days_this_year`` and ``coordinates`` come from the
    first member. ``included`` lists every member's original label.
    """

    if not members:
        raise EmptyCounterGroupError(stripped_label)

    first = members[0]
    return CounterStat(
        id=stripped_label,
        label=stripped_label,
        stripped_label=stripped_label,
        days=sum(member.days for member in members),
        total=sum(member.total for member in members),
        day=sum(member.day for member in members),
        month=sum(member.month for member in members),
        week=sum(member.week for member in members),
        year=sum(member.year for member in members),
        days_this_year=first.days_this_year,
        included=tuple(member.label for member in members),
        coordinates=first.coordinates,
    )


def prepare_stats(
    summaries: Mapping[str, CounterSummary | Mapping[str, Any]],
    metadata: Mapping[str, CounterMetadata],
    field_mapper: CounterMetadataFieldMapper | None = None,
) -> list[CounterStat]:
    """
    Produce one statistics record per logical counter, busiest first.

    Records with equal daily volume keep the reverse of their grouping order.
    """

    if field_mapper is None:
        field_mapper = get_metadata_field_mapper()

    records: list[CounterStat] = []
    for counter_id, raw_summary in summaries.items():
        summary = _coerce_summary(counter_id, raw_summary)
        if summary is None:
            continue
        records.append(transform_record(counter_id, summary, metadata, field_mapper))

    groups = group_by_label(records)
    merged = [merge_group(label, members) for label, members in groups.items()]
    merged.sort(key=lambda stat: stat.day)
    merged.reverse()

    log_event(
        logger,
        logging.INFO,
        "counter_stats_prepared",
        input_counters=len(summaries),
        transformed=len(records),
        merged=len(merged),
    )
    return merged


def stats_to_payload(stats: Iterable[CounterStat]) -> list[dict[str, Any]]:
    """
    JSON-ready list for chart and page renderers.
    """

    return [stat.to_dict() for stat in stats]
