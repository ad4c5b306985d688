"""
tests/test_label_normalizer.py

Unit tests for counter label normalization and page slugs.
"""

from __future__ import annotations

import re

import pytest

from bikecount.normalization.label_normalizer import (
    COMPASS_DIRECTION_RULE,
    NORMALIZATION_RULES,
    RewriteRule,
    RewriteScope,
    apply_rule,
    capitalize_first,
    collapse_duplicate_halves,
    counter_slug,
    normalize_label,
    slugify_label,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Totem 73 boulevard de Sébastopol S-N", "Boulevard de Sébastopol"),
        ("Totem 64 Rue de Rivoli O-E", "Rue de Rivoli"),
        ("Face au 48 quai de la marne NE-SO", "Quai de la marne"),
        ("12 Rue de Rivoli", "Rue de Rivoli"),
        ("Quai d'Orsay", "Quai d’Orsay"),
        ("Pont D'Austerlitz", "Pont d’Austerlitz"),
        ("Menilmontant", "Ménilmontant"),
        ("Boulevard Ménilmontant [Bike IN]", "Boulevard Ménilmontant"),
        ("Totem Cours la Reine #2", "Cours la Reine"),
        ("porte d'Orléans", "Porte d’Orléans"),
        ("Porte  de  Clichy", "Porte de Clichy"),
        ("quai de Valmy", "Quai de Valmy"),
        ("Nation NationOUT", "Nation"),
    ],
)
def test_normalize_label_known_names(raw: str, expected: str) -> None:
    assert normalize_label(raw) == expected


def test_compass_pattern_removed() -> None:
    result = normalize_label("Totem N-E Bridge")

    assert result == "Bridge"
    assert re.search(r"[NESO]-[NESO]", result) is None


def test_literal_tokens_only_remove_first_occurrence() -> None:
    assert normalize_label("Avenue IN IN") == "Avenue IN"


def test_mid_name_compass_token_leaves_double_space() -> None:
    once = normalize_label("Pont N-E Bridge")

    assert once == "Pont  Bridge"
    assert normalize_label(once) == "Pont Bridge"


def test_first_letter_with_longer_uppercase_is_kept() -> None:
    assert normalize_label("ßtraße") == "ßtraße"
    assert normalize_label("élysée") == "Élysée"


@pytest.mark.parametrize(
    "raw",
    [
        "Totem 73 boulevard de Sébastopol S-N",
        "Face au 48 quai de la marne NE-SO",
        "Quai d'Orsay",
        "Pont D'Austerlitz",
        "porte d'Orléans",
        "Totem Cours la Reine #2",
        "Nation NationOUT",
        "Totem N-E Bridge",
    ],
)
def test_normalize_label_is_idempotent(raw: str) -> None:
    once = normalize_label(raw)

    assert normalize_label(once) == once


@pytest.mark.parametrize("raw", [None, 42, ["Nation"]])
def test_non_string_input_yields_empty_label(raw: object) -> None:
    assert normalize_label(raw) == ""


def test_empty_and_whitespace_names() -> None:
    assert normalize_label("") == ""
    assert normalize_label("   ") == ""


def test_unexpected_characters_pass_through() -> None:
    assert normalize_label("Canal Saint-Martin ★") == "Canal Saint-Martin ★"


class TestCollapseDuplicateHalves:
    def test_collapses_repeated_label(self) -> None:
        assert collapse_duplicate_halves("Nation Nation") == "Nation"

    def test_odd_length_extra_character_goes_to_second_half(self) -> None:
        assert collapse_duplicate_halves("abcab") == "abcab"
        assert collapse_duplicate_halves("a a") == "a"

    def test_non_repeating_name_unchanged(self) -> None:
        assert collapse_duplicate_halves("Quai de Valmy") == "Quai de Valmy"


class TestRewriteRules:
    def test_literal_first_scope(self) -> None:
        rule = RewriteRule(pattern="IN")

        assert apply_rule("IN-IN", rule) == "-IN"

    def test_literal_all_scope(self) -> None:
        rule = RewriteRule(pattern="  ", replacement=" ", scope=RewriteScope.ALL)

        assert apply_rule("a  b  c", rule) == "a b c"

    def test_regex_all_scope(self) -> None:
        assert apply_rule("N-S quai E-O", COMPASS_DIRECTION_RULE) == " quai "

    def test_regex_replacement_is_not_expanded(self) -> None:
        rule = RewriteRule(pattern=r"(x)", replacement=r"\1", literal=False)

        assert apply_rule("x", rule) == r"\1"

    def test_rule_table_order_starts_with_device_prefixes(self) -> None:
        patterns = [rule.pattern for rule in NORMALIZATION_RULES]

        assert patterns[:3] == ["Totem ", "Face au ", "Face "]
        assert patterns.index("[Bike IN]") < patterns.index("IN")
        assert patterns[-1] == COMPASS_DIRECTION_RULE.pattern

    def test_capitalize_first_only_touches_first_character(self) -> None:
        assert capitalize_first("quai de la Loire") == "Quai de la Loire"
        assert capitalize_first("") == ""
        assert capitalize_first("ß") == "ß"


class TestSlugs:
    def test_slugify_folds_accents_and_keeps_case(self) -> None:
        assert slugify_label("Boulevard de Sébastopol") == "Boulevard-de-Sebastopol"

    def test_counter_slug_uses_normalized_label(self) -> None:
        assert counter_slug("Totem 64 Rue de Rivoli O-E") == "Rue-de-Rivoli"
        assert counter_slug("Totem Quai de Valmy IN") == "Quai-de-Valmy"

    def test_ampersand_is_spelled_out(self) -> None:
        assert counter_slug("Rue Lecourbe & Co") == "Rue-Lecourbe-and-Co"

    def test_counter_slug_of_empty_name(self) -> None:
        assert counter_slug(None) == ""
