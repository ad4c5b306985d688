"""
bikecount/services/detail_service.py

Per-counter detail entries for counter pages.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from bikecount.domain.counter_stats import CounterDetail, CounterMetadata
from bikecount.mappers.metadata_field_mapper import CounterMetadataFieldMapper
from bikecount.normalization.label_normalizer import counter_slug
from bikecount.services.stats_service import parse_coordinates


def counter_detail_slugs(
    metadata: Mapping[str, CounterMetadata],
    field_mapper: CounterMetadataFieldMapper,
) -> list[str]:
    """
    Distinct page slugs for every named device, in first-seen order.
    """

    slugs: list[str] = []
    seen: set[str] = set()
    for record in metadata.values():
        name = field_mapper.lookup(record, "name")
        if not isinstance(name, str):
            continue
        slug = counter_slug(name)
        if slug and slug not in seen:
            seen.add(slug)
            slugs.append(slug)
    return slugs


def _detail_for(record: CounterMetadata, field_mapper: CounterMetadataFieldMapper) -> CounterDetail:
    name = field_mapper.lookup(record, "channel_name") or field_mapper.lookup(record, "name") or ""
    return CounterDetail(
        name=name,
        installed_on=field_mapper.lookup(record, "installation_date"),
        img=field_mapper.lookup(record, "url_photos_n1") or None,
        coordinates=parse_coordinates(field_mapper.lookup(record, "coordinates")),
    )


def _dedup_by_photo(details: Iterable[CounterDetail]) -> list[CounterDetail]:
    unique: list[CounterDetail] = []
    seen_images: set[str | None] = set()
    for detail in details:
        if detail.img in seen_images:
            continue
        seen_images.add(detail.img)
        unique.append(detail)
    return unique


def build_counter_details(
    metadata: Mapping[str, CounterMetadata],
    field_mapper: CounterMetadataFieldMapper,
) -> dict[str, list[CounterDetail]]:
    """
    Group device details by counter page slug.

    Channels sharing a photo URL are shown once; channels without a photo
    count as sharing the same missing photo, so only the first is kept.
    """

    grouped: dict[str, list[CounterDetail]] = {}
    for record in metadata.values():
        name = field_mapper.lookup(record, "name")
        if not isinstance(name, str):
            continue
        slug = counter_slug(name)
        if not slug:
            continue
        grouped.setdefault(slug, []).append(_detail_for(record, field_mapper))
    return {slug: _dedup_by_photo(details) for slug, details in grouped.items()}
