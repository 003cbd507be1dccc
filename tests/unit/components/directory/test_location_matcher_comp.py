"""
Unit tests for deskmap.components.directory.location_matcher_comp.

Tests the office location to desk number rules:
- regex first and authoritative
- prefix (case-insensitive) second
- numeric fallback last
"""

import logging

import pytest

from deskmap.components.directory.location_matcher_comp import (
    MAX_DIGITS,
    UNMAPPED,
    OutcomeKind,
    StrategyOutcome,
    match_desk_number,
    parse_digits,
    prefix_strategy,
    regex_strategy,
)
from deskmap.helpers.dto.directory_dto import MappingRule

PREFIX_RULE = MappingRule(prefix="Desk-")
REGEX_RULE = MappingRule(prefix="Desk-", regex=r"Desk-(\d+)")


class TestParseDigits:
    """Tests for parse_digits."""

    @pytest.mark.unit
    def test_strips_everything_but_digits(self) -> None:
        assert parse_digits("A-1b2") == 12

    @pytest.mark.unit
    def test_leading_zeros_are_ignored(self) -> None:
        assert parse_digits("007") == 7

    @pytest.mark.unit
    def test_no_digits_returns_none(self) -> None:
        assert parse_digits("Room East") is None

    @pytest.mark.unit
    def test_sign_is_stripped(self) -> None:
        assert parse_digits("-5") == 5

    @pytest.mark.unit
    def test_non_ascii_digits_are_ignored(self) -> None:
        assert parse_digits("\u0661\u0662") is None
        assert parse_digits("\uff17-3") == 3

    @pytest.mark.unit
    def test_overlong_number_returns_none(self) -> None:
        assert parse_digits("1" * 5000) is None
        assert parse_digits("9" * (MAX_DIGITS + 1)) is None

    @pytest.mark.unit
    def test_leading_zeros_do_not_count_toward_length(self) -> None:
        assert parse_digits("0" * 5000 + "42") == 42
        assert parse_digits("0" * 30) == 0


class TestMatchDeskNumber:
    """Tests for match_desk_number."""

    @pytest.mark.unit
    @pytest.mark.parametrize("text", [None, "", "   ", "\t\n"])
    def test_empty_location_is_unmapped(self, text) -> None:
        assert match_desk_number(text, PREFIX_RULE) is None
        assert match_desk_number(text, REGEX_RULE) is None

    @pytest.mark.unit
    def test_prefix_match(self) -> None:
        assert match_desk_number("Desk-12", PREFIX_RULE) == 12

    @pytest.mark.unit
    def test_arabic_indic_digits_are_unmapped(self) -> None:
        assert match_desk_number("Desk-\u0661\u0662", PREFIX_RULE) is None
        assert match_desk_number("Desk-\u0661\u0662", REGEX_RULE) is None

    @pytest.mark.unit
    def test_huge_number_is_unmapped(self) -> None:
        assert match_desk_number("Desk-" + "1" * 5000, PREFIX_RULE) is None
        assert match_desk_number("1" * 5000, MappingRule()) is None

    @pytest.mark.unit
    def test_prefix_is_case_insensitive(self) -> None:
        assert match_desk_number("desk-12", PREFIX_RULE) == 12
        assert match_desk_number("DESK-12", PREFIX_RULE) == 12

    @pytest.mark.unit
    def test_surrounding_whitespace_is_trimmed(self) -> None:
        assert match_desk_number("  Desk-12  ", PREFIX_RULE) == 12

    @pytest.mark.unit
    def test_prefix_without_digits_is_unmapped(self) -> None:
        """Digits before the prefix must not leak in once the prefix matched."""
        assert match_desk_number("Desk-", PREFIX_RULE) is None
        assert match_desk_number("Desk-East", PREFIX_RULE) is None

    @pytest.mark.unit
    def test_numeric_fallback_without_prefix(self) -> None:
        assert match_desk_number("HQ 3rd floor 12", PREFIX_RULE) == 312

    @pytest.mark.unit
    def test_numeric_fallback_plain_number(self) -> None:
        assert match_desk_number("42", MappingRule(prefix=None)) == 42

    @pytest.mark.unit
    def test_no_digits_anywhere_is_unmapped(self) -> None:
        assert match_desk_number("Room East", PREFIX_RULE) is None

    @pytest.mark.unit
    def test_regex_capture_group(self) -> None:
        assert match_desk_number("Building A / Desk-7", REGEX_RULE) == 7

    @pytest.mark.unit
    def test_regex_non_match_is_authoritative(self) -> None:
        """An explicit regex that does not match means unmapped, no fallback."""
        assert match_desk_number("Office-7", REGEX_RULE) is None

    @pytest.mark.unit
    def test_regex_is_case_insensitive(self) -> None:
        assert match_desk_number("desk-9", REGEX_RULE) == 9

    @pytest.mark.unit
    def test_regex_without_group_uses_whole_match(self) -> None:
        rule = MappingRule(regex=r"D\d+")
        assert match_desk_number("Floor 2 D15", rule) == 15

    @pytest.mark.unit
    def test_regex_with_unused_optional_group_uses_whole_match(self) -> None:
        rule = MappingRule(regex=r"Seat (x)?\d+")
        assert match_desk_number("Seat 21", rule) == 21

    @pytest.mark.unit
    def test_regex_match_without_digits_is_unmapped(self) -> None:
        rule = MappingRule(prefix="Desk-", regex=r"Desk-(\w+)")
        assert match_desk_number("Desk-East 12", rule) is None

    @pytest.mark.unit
    def test_regex_takes_precedence_over_prefix(self) -> None:
        rule = MappingRule(prefix="Desk-", regex=r"Seat (\d+)")
        assert match_desk_number("Desk-3 Seat 8", rule) == 8

    @pytest.mark.unit
    def test_invalid_regex_is_unmapped_and_logged(self, caplog) -> None:
        rule = MappingRule(prefix="Desk-", regex=r"Desk-(\d+")
        with caplog.at_level(logging.WARNING):
            assert match_desk_number("Desk-5", rule) is None
        assert "Invalid mapping regex" in caplog.text

    @pytest.mark.unit
    def test_never_negative(self) -> None:
        assert match_desk_number("Desk--5", PREFIX_RULE) == 5

    @pytest.mark.unit
    def test_zero_is_returned_as_zero(self) -> None:
        assert match_desk_number("Desk-0", PREFIX_RULE) == 0

    @pytest.mark.unit
    def test_custom_strategy_order(self) -> None:
        """Strategies are consulted in the given order."""
        assert match_desk_number("Desk-3 Seat 8", REGEX_RULE, strategies=(prefix_strategy,)) == 38

    @pytest.mark.unit
    def test_all_strategies_undecided_is_unmapped(self) -> None:
        def never(text, rule):
            return StrategyOutcome(OutcomeKind.NO_MATCH)

        assert match_desk_number("Desk-1", PREFIX_RULE, strategies=(never,)) is None


class TestStrategies:
    """Tests for individual strategies."""

    @pytest.mark.unit
    def test_regex_strategy_inactive_without_regex(self) -> None:
        assert not regex_strategy("Desk-1", PREFIX_RULE).is_decisive

    @pytest.mark.unit
    def test_prefix_strategy_inactive_when_text_lacks_prefix(self) -> None:
        assert not prefix_strategy("Office-1", PREFIX_RULE).is_decisive

    @pytest.mark.unit
    def test_regex_strategy_non_match_is_decisive(self) -> None:
        assert regex_strategy("Office-7", REGEX_RULE) == UNMAPPED
