"""
bikecount/logging_utils.py

One-line JSON events for statistics pipeline runs.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any


def _jsonable(value: Any) -> Any:
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, (tuple, list)):
        return [_jsonable(item) for item in value]
    return value


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    *,
    counter_id: str | None = None,
    **fields: Any,
) -> None:
    """
    Emit one pipeline event as compact JSON.

    NaN values (unparsable coordinates) are written as null so every line
    stays valid JSON.
    """

    if not logger.isEnabledFor(level):
        return
    payload = {"event": event, **{key: _jsonable(value) for key, value in fields.items()}}
    if counter_id is not None:
        payload["counter_id"] = counter_id
    logger.log(level, json.dumps(payload, default=str, sort_keys=True, ensure_ascii=False))
