"""
bikecount/errors.py

Error types raised by the statistics pipeline.
"""

from __future__ import annotations


class EmptyCounterGroupError(RuntimeError):
    """
    Raised when a merge is attempted on a group with no members.

    Grouping always yields at least one member per label, so this signals
    an internal consistency failure rather than bad input data.
    """

    def __init__(self, label: str) -> None:
        super().__init__(f"Cannot merge counter group {label!r}: group has no members.")
        self.label = label
