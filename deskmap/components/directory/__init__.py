"""
Directory components: location matching, reconciliation, Graph client.
"""

from .desk_reconciler_comp import occupant_names, reconcile
from .graph_client_comp import exchange_client_credential, fetch_all_users
from .location_matcher_comp import (
    DEFAULT_STRATEGIES,
    OutcomeKind,
    StrategyOutcome,
    match_desk_number,
    numeric_strategy,
    parse_digits,
    prefix_strategy,
    regex_strategy,
)

__all__ = [
    "DEFAULT_STRATEGIES",
    "OutcomeKind",
    "StrategyOutcome",
    "exchange_client_credential",
    "fetch_all_users",
    "match_desk_number",
    "numeric_strategy",
    "occupant_names",
    "parse_digits",
    "prefix_strategy",
    "reconcile",
    "regex_strategy",
]
