"""
bikecount/config.py

Process-level configuration helpers.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from bikecount.mappers.metadata_field_mapper import (
    ENV_PREFIX,
    CounterMetadataFieldMapper,
    build_metadata_field_mapper,
)

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_FILENAMES: tuple[str, ...] = (".env", ".env.local")


def _parse_env_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if line.startswith("export "):
        line = line[len("export "):].lstrip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, value = line.split("=", 1)
    return key.strip(), value.strip().strip('"').strip("'")


def load_env_files(root: Path | None = None, *, prefix: str = ENV_PREFIX) -> dict[str, str]:
    """
    Apply counter field settings from `.env` then `.env.local` (if present).

    Only keys starting with `prefix` are read. Values already in the process
    environment win, and the first file defining a key wins over later ones.
    Returns the entries that were applied.
    """

    base = root or PROJECT_ROOT
    applied: dict[str, str] = {}
    for filename in ENV_FILENAMES:
        env_path = base / filename
        if not env_path.exists():
            continue

        try:
            content = env_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping unreadable env file %s: %s", env_path, exc)
            continue

        for raw_line in content.splitlines():
            entry = _parse_env_line(raw_line)
            if entry is None:
                continue
            key, value = entry
            if not key.startswith(prefix) or key in os.environ:
                continue
            os.environ[key] = value
            applied[key] = value

    if applied:
        logger.debug("Loaded counter field settings from env files: %s", sorted(applied))
    return applied


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


@lru_cache(maxsize=1)
def get_metadata_field_mapper() -> CounterMetadataFieldMapper:
    """
    Return the process-wide metadata field mapper.

    Built on first call from `COUNTER_FIELD_*` environment variables and
    reused for every later pipeline run.
    """

    _load_env_once()
    return build_metadata_field_mapper(os.environ)
