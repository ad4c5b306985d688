"""
bikecount/normalization package marker.
"""

from bikecount.normalization.label_normalizer import (
    NORMALIZATION_RULES,
    RewriteRule,
    RewriteScope,
    apply_rule,
    collapse_duplicate_halves,
    counter_slug,
    normalize_label,
    slugify_label,
)

__all__ = [
    "NORMALIZATION_RULES",
    "RewriteRule",
    "RewriteScope",
    "apply_rule",
    "collapse_duplicate_halves",
    "counter_slug",
    "normalize_label",
    "slugify_label",
]
