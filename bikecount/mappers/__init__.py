"""
bikecount/mappers package marker.
"""

from bikecount.mappers.metadata_field_mapper import (
    CANONICAL_METADATA_FIELDS,
    CounterMetadataFieldMapper,
    build_metadata_field_mapper,
    env_var_for,
)

__all__ = [
    "CANONICAL_METADATA_FIELDS",
    "CounterMetadataFieldMapper",
    "build_metadata_field_mapper",
    "env_var_for",
]
