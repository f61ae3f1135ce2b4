import pytest

from services.category_rule_engine import (
    CELL_PHONES,
    COFFEE,
    ELECTRICITY,
    GROCERIES,
    RENT,
    SALARY,
    SUBSCRIPTIONS,
    TRANSFERS,
    evaluate_category,
    resolve_category,
)
from factories import candidate


@pytest.mark.parametrize("description, amount, expected", [
    ("April Rent", -1800, RENT),
    ("NETFLIX.COM", -16.49, SUBSCRIPTIONS),
    ("Spotify P0123", -14.99, SUBSCRIPTIONS),
    ("Rogers Wireless", -85, CELL_PHONES),
    ("Bell Canada", -60, CELL_PHONES),
    ("Hydro-Québec", -98.5, ELECTRICITY),
    ("Toronto Hydro", -70, ELECTRICITY),
    ("Costco Wholesale", -230, GROCERIES),
    ("IGA #123", -45, GROCERIES),
    ("Tim Hortons", -4.5, COFFEE),
    ("E-Transfer to Bob", -50, TRANSFERS),
    ("Employer Inc", 3985.5, SALARY),
])
def test_rules(description, amount, expected):
    assert evaluate_category(candidate(amount, description=description)) == expected


def test_no_match_for_unknown_expense():
    assert evaluate_category(candidate(-20, description="Hardware store")) is None


def test_first_matching_rule_wins():
    # "rent" is checked before the transfer markers
    assert evaluate_category(candidate(-900, description="Rent transfer")) == RENT
    # income transfers are still transfers
    assert evaluate_category(candidate(500, description="Etransfer from Bob")) == TRANSFERS


def test_explicit_category_takes_precedence():
    assert resolve_category(candidate(-16.49, description="Netflix", category_id=129)) == 129


def test_resolve_falls_back_to_heuristic():
    assert resolve_category(candidate(-16.49, description="Netflix")) == SUBSCRIPTIONS


def test_custom_rules():
    rules = [(lambda c: "acme" in c.normalized_name, 125)]

    assert evaluate_category(candidate(-5, description="ACME Corp"), rules) == 125
    assert evaluate_category(candidate(5, description="Employer"), rules) is None
