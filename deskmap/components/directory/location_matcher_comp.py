"""
Office location to desk number matching.

A directory user's officeLocation is free text ("Desk-12", "HQ 3rd floor 12",
"Room East"). The mapping rule turns it into a desk number through an ordered
list of strategies; the first strategy that reaches a decision wins:

1. regex    - active when the rule has a regex. Authoritative: a regex that
              does not match, or matches text without digits, means unmapped.
2. prefix   - active when the text starts with the rule's prefix
              (case-insensitive). Digits after the prefix, else unmapped.
3. numeric  - all digits in the text, else unmapped.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from deskmap.helpers.dto.directory_dto import MappingRule

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"[^0-9]")

# Longest digit run accepted as a desk number
MAX_DIGITS = 18


class OutcomeKind(Enum):
    MATCHED = "matched"
    UNMAPPED = "unmapped"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class StrategyOutcome:
    """Result of one strategy: a desk number, a final 'unmapped', or 'not mine'."""

    kind: OutcomeKind
    value: int | None = None

    @property
    def is_decisive(self) -> bool:
        return self.kind is not OutcomeKind.NO_MATCH


NO_MATCH = StrategyOutcome(OutcomeKind.NO_MATCH)
UNMAPPED = StrategyOutcome(OutcomeKind.UNMAPPED)

MatchStrategy = Callable[[str, MappingRule], StrategyOutcome]


def parse_digits(text: str) -> int | None:
    """
    Strip every non-digit character and parse what remains.

    Only ASCII digits count. Returns None when no digits remain or the
    number (leading zeros aside) is longer than MAX_DIGITS. Signs are
    stripped with the rest, so the result is never negative.
    """
    digits = _NON_DIGITS.sub("", text)
    if not digits:
        return None
    significant = digits.lstrip("0")
    if len(significant) > MAX_DIGITS:
        return None
    return int(significant or "0")


def _decide(text: str) -> StrategyOutcome:
    value = parse_digits(text)
    if value is None:
        return UNMAPPED
    return StrategyOutcome(OutcomeKind.MATCHED, value)


def regex_strategy(text: str, rule: MappingRule) -> StrategyOutcome:
    if not rule.regex:
        return NO_MATCH
    try:
        pattern = re.compile(rule.regex, re.IGNORECASE)
    except re.error as e:
        logger.warning(f"[LocationMatcher] Invalid mapping regex {rule.regex!r}: {e}")
        return UNMAPPED

    match = pattern.search(text)
    if match is None:
        return UNMAPPED

    candidate = match.group(1) if pattern.groups >= 1 and match.group(1) is not None else match.group(0)
    return _decide(candidate)


def prefix_strategy(text: str, rule: MappingRule) -> StrategyOutcome:
    prefix = rule.prefix
    if not prefix or not text.lower().startswith(prefix.lower()):
        return NO_MATCH
    return _decide(text[len(prefix) :])


def numeric_strategy(text: str, rule: MappingRule) -> StrategyOutcome:
    return _decide(text)


DEFAULT_STRATEGIES: tuple[MatchStrategy, ...] = (regex_strategy, prefix_strategy, numeric_strategy)


def match_desk_number(
    location_text: str | None,
    rule: MappingRule,
    strategies: tuple[MatchStrategy, ...] = DEFAULT_STRATEGIES,
) -> int | None:
    """
    Derive a desk number from an office location string.

    Args:
        location_text: Directory officeLocation value (may be None)
        rule: Active mapping rule
        strategies: Ordered strategies, first decisive outcome wins

    Returns:
        Desk number, or None when the location does not map to a desk

    Example:
        >>> match_desk_number("Desk-12", MappingRule(prefix="Desk-"))
        12
        >>> match_desk_number("Office-7", MappingRule(regex=r"Desk-(\\d+)")) is None
        True
    """
    if not location_text:
        return None
    text = location_text.strip()
    if not text:
        return None

    for strategy in strategies:
        outcome = strategy(text, rule)
        if outcome.is_decisive:
            return outcome.value
    return None
