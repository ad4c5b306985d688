"""
bikecount/normalization/label_normalizer.py

Canonical display labels for counter devices.

Upstream device names carry channel qualifiers ("IN"/"OUT", "[Bike]"),
installation prefixes ("Totem ", "Face au "), numeric indexes and compass
directions. Stripping them yields the label shared by every channel of one
logical counter, which is the merge key for statistics.

Rules run in a fixed order; later rules assume the earlier removals.
Literal rules with FIRST scope only touch the first occurrence.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Iterable, Pattern

from slugify import slugify


class RewriteScope(str, Enum):
    FIRST = "first"
    ALL = "all"


@dataclass(frozen=True)
class RewriteRule:
    """
    One text rewrite: replace `pattern` with `replacement`.

    `literal` patterns are matched verbatim; others are regular expressions.
    """

    pattern: str
    replacement: str = ""
    scope: RewriteScope = RewriteScope.FIRST
    literal: bool = True


def _remove(token: str) -> RewriteRule:
    return RewriteRule(pattern=token)


def _replace(token: str, replacement: str) -> RewriteRule:
    return RewriteRule(pattern=token, replacement=replacement)


# Device and channel qualifiers, removed once each.
DEVICE_QUALIFIER_RULES: tuple[RewriteRule, ...] = (
    _remove("Totem "),
    _remove("Face au "),
    _remove("Face "),
    _replace("Menilmontant", "Ménilmontant"),
    _remove("(prêt)"),
    _remove("Logger_IN"),
    _remove("Logger_OUT"),
    _remove("[Bike IN]"),
    _remove("[Bike OUT]"),
    _remove("Piétons IN"),
    _remove("Piétons OUT"),
    _remove("IN"),
    _remove("OUT"),
    _remove("[Bike]"),
    _remove("[Velos]"),
    _replace("porte", "Porte"),
    _remove("Vélos"),
)

PUNCTUATION_RULES: tuple[RewriteRule, ...] = (
    _replace("'", "’"),
    _replace("D’", "d’"),
)

INDEX_SUFFIX_RULE = RewriteRule(pattern=r"#.", literal=False)

DOUBLE_SPACE_RULE = RewriteRule(pattern="  ", replacement=" ", scope=RewriteScope.ALL)

LEADING_INDEX_RULE = RewriteRule(pattern=r"^[0-9]+", literal=False)

# French compass letters: Nord, Est, Sud, Ouest.
COMPASS_DIRECTION_RULE = RewriteRule(
    pattern=r"[NESO]+-[NESO]+",
    scope=RewriteScope.ALL,
    literal=False,
)

CLEANUP_RULES: tuple[RewriteRule, ...] = (
    *DEVICE_QUALIFIER_RULES,
    *PUNCTUATION_RULES,
    INDEX_SUFFIX_RULE,
    DOUBLE_SPACE_RULE,
)

DIRECTION_RULES: tuple[RewriteRule, ...] = (
    LEADING_INDEX_RULE,
    COMPASS_DIRECTION_RULE,
)

NORMALIZATION_RULES: tuple[RewriteRule, ...] = CLEANUP_RULES + DIRECTION_RULES


@lru_cache(maxsize=None)
def _compile(pattern: str) -> Pattern[str]:
    return re.compile(pattern)


def apply_rule(text: str, rule: RewriteRule) -> str:
    """
    Apply one rewrite rule to `text`.
    """

    first_only = rule.scope is RewriteScope.FIRST
    if rule.literal:
        if first_only:
            return text.replace(rule.pattern, rule.replacement, 1)
        return text.replace(rule.pattern, rule.replacement)
    count = 1 if first_only else 0
    return _compile(rule.pattern).sub(lambda _match: rule.replacement, text, count=count)


def apply_rules(text: str, rules: Iterable[RewriteRule]) -> str:
    for rule in rules:
        text = apply_rule(text, rule)
    return text


def capitalize_first(text: str) -> str:
    """
    Uppercase the first character, leaving the rest untouched.

    Characters whose uppercase form is longer (e.g. "ß") are left as they
    are so the label keeps its length.
    """

    head = text[:1].upper()
    if len(head) != 1:
        return text
    return head + text[1:]


def collapse_duplicate_halves(text: str) -> str:
    """
    Return one half of `text` when it is the same label written twice.

    The split is at `len(text) // 2`; the second half takes the extra
    character of odd-length strings. Both halves are trimmed before the
    comparison.
    """

    middle = len(text) // 2
    first = text[:middle].strip()
    second = text[middle:].strip()
    if first == second:
        return first
    return text


def normalize_label(name: object) -> str:
    """
    Convert a raw device name into its canonical counter label.

    Never raises; non-string input yields an empty label.
    """

    if not isinstance(name, str):
        return ""

    text = apply_rules(name, CLEANUP_RULES).strip()
    text = apply_rules(text, DIRECTION_RULES).strip()
    text = capitalize_first(text)
    return collapse_duplicate_halves(text)


# Characters the page slugs spell out instead of dropping.
SLUG_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("&", "and"),
)


def slugify_label(label: str) -> str:
    """
    URL-safe form of a label. Case is kept, accents are transliterated.
    """

    return slugify(label, lowercase=False, replacements=SLUG_REPLACEMENTS)


def counter_slug(name: object) -> str:
    """
    Detail page slug for a raw device name.
    """

    return slugify_label(normalize_label(name))
