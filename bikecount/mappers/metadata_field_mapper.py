"""
bikecount/mappers/metadata_field_mapper.py

Translation from canonical counter metadata fields to the keys used by the
upstream metadata feed.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import Mapping

logger = logging.getLogger(__name__)

CANONICAL_METADATA_FIELDS: tuple[str, ...] = (
    "id",
    "name",
    "coordinates",
    "channel_id",
    "channel_name",
    "installation_date",
    "url_photos_n1",
)

ENV_PREFIX = "COUNTER_FIELD_"


def env_var_for(canonical_field: str) -> str:
    """
    Environment variable holding the upstream key for one canonical field.
    """

    return f"{ENV_PREFIX}{canonical_field.upper()}"


@dataclass(frozen=True)
class CounterMetadataFieldMapper:
    """
    Resolved canonical-to-upstream metadata key names.

    Each attribute holds the key to read from a `CounterMetadata` record.
    """

    id: str = "id"
    name: str = "name"
    coordinates: str = "coordinates"
    channel_id: str = "channel_id"
    channel_name: str = "channel_name"
    installation_date: str = "installation_date"
    url_photos_n1: str = "url_photos_n1"

    def resolve(self, canonical_field: str) -> str:
        if canonical_field not in CANONICAL_METADATA_FIELDS:
            raise KeyError(f"Unknown canonical metadata field: {canonical_field!r}")
        return getattr(self, canonical_field)

    def lookup(
        self,
        metadata: Mapping[str, str] | None,
        canonical_field: str,
        default: str | None = None,
    ) -> str | None:
        """
        Read one canonical field from a metadata record.
        """

        if not metadata:
            return default
        return metadata.get(self.resolve(canonical_field), default)

    def as_dict(self) -> dict[str, str]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


def _read_field_key(environ: Mapping[str, str], canonical_field: str) -> str | None:
    raw = environ.get(env_var_for(canonical_field))
    if not isinstance(raw, str):
        return None
    stripped = raw.strip()
    return stripped if stripped else None


def build_metadata_field_mapper(
    environ: Mapping[str, str] | None = None,
) -> CounterMetadataFieldMapper:
    """
    Build a field mapper from environment values.

    Canonical fields without a usable value keep their own name as the
    upstream key. Never raises on missing or blank configuration.
    """

    source = os.environ if environ is None else environ
    resolved: dict[str, str] = {}
    for canonical_field in CANONICAL_METADATA_FIELDS:
        configured = _read_field_key(source, canonical_field)
        if configured is None:
            logger.debug(
                "No %s configured; using %r as metadata key.",
                env_var_for(canonical_field),
                canonical_field,
            )
            resolved[canonical_field] = canonical_field
        else:
            resolved[canonical_field] = configured
    return CounterMetadataFieldMapper(**resolved)
