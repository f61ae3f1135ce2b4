"""
Category Rule Engine: Deterministic Rule-Based Category Assignment

Pure functions for suggesting a category from a transaction's normalized
name. No database access; no side effects.
"""
from models.finance import INCOME

RENT = 101
ELECTRICITY = 111
CELL_PHONES = 114
GROCERIES = 116
COFFEE = 118
SUBSCRIPTIONS = 126
SALARY = 131
TRANSFERS = 138


def _name_contains(*needles):
    def predicate(candidate) -> bool:
        normalized = candidate.normalized_name.lower()
        return any(needle in normalized for needle in needles)
    return predicate


def _is_income(candidate) -> bool:
    return candidate.transaction_type == INCOME


# Evaluated top to bottom; the first matching predicate decides.
DEFAULT_RULES = [
    (_name_contains("rent"), RENT),
    (_name_contains("netflix", "spotify"), SUBSCRIPTIONS),
    (_name_contains("telus", "rogers", "bell"), CELL_PHONES),
    (_name_contains("hydro"), ELECTRICITY),
    (_name_contains("metro", "iga", "loblaws", "costco"), GROCERIES),
    (_name_contains("tim hortons", "starbucks"), COFFEE),
    (_name_contains("transfer", "etransfer", "e-transfer"), TRANSFERS),
    (_is_income, SALARY),
]


def evaluate_category(candidate, rules: list = None) -> int | None:
    """
    Suggest a category id for a transaction candidate.

    Args:
        candidate: Anything with ``normalized_name`` and ``transaction_type``.
        rules: Ordered ``(predicate, category_id)`` pairs. Defaults to
               DEFAULT_RULES.

    Returns:
        Matched category id or None if no rule matches.
    """
    if rules is None:
        rules = DEFAULT_RULES

    for predicate, category_id in rules:
        if predicate(candidate):
            return category_id

    return None


def resolve_category(candidate, rules: list = None) -> int | None:
    """An explicit category on the candidate wins over the heuristic guess."""
    if candidate.category_id is not None:
        return candidate.category_id
    return evaluate_category(candidate, rules)
