from datetime import date
from decimal import Decimal

import pytest

from helpers.normalize import (
    SKIP_INVALID_AMOUNT,
    SKIP_INVALID_DATE,
    SKIP_MISSING_DATE,
    SKIP_ZERO_AMOUNT,
    detect_transfer,
    normalize_row,
    normalize_rows,
    resolve_amount,
)
from models.finance import EXPENSE, INCOME


def test_expense_row():
    candidate, reason = normalize_row(
        {"Date": "2024-01-05", "Description": "Netflix", "Amount": "-16.49"}, "CAD"
    )

    assert reason is None
    assert candidate.date == date(2024, 1, 5)
    assert candidate.amount == Decimal("-16.49")
    assert candidate.transaction_type == EXPENSE
    assert candidate.cashflow_sign == -1
    assert candidate.normalized_name == "netflix"
    assert candidate.currency == "CAD"
    assert candidate.is_transfer is False


def test_income_row_strips_currency_symbols():
    candidate, _ = normalize_row(
        {"Date": "2024-01-10", "Description": "Employer Inc", "Amount": "$3,985.50"}, "CAD"
    )

    assert candidate.amount == Decimal("3985.50")
    assert candidate.transaction_type == INCOME
    assert candidate.cashflow_sign == 1


@pytest.mark.parametrize("row, expected", [
    ({"Credit": "100.00", "Debit": ""}, Decimal("100.00")),
    ({"Deposit": "", "Withdrawal": "40.25"}, Decimal("-40.25")),
    ({"Withdrawal": "12"}, Decimal("-12.00")),
    ({"Amount": "", "In": "5", "Out": "2"}, Decimal("3.00")),
])
def test_credit_minus_debit_when_no_amount(row, expected):
    assert resolve_amount(row) == expected


@pytest.mark.parametrize("amount", ["0", "0.00", "", "$0"])
def test_zero_or_blank_amount_is_dropped(amount):
    candidate, reason = normalize_row(
        {"Date": "2024-01-05", "Description": "Nothing", "Amount": amount}, "CAD"
    )

    assert candidate is None
    assert reason == SKIP_ZERO_AMOUNT


def test_garbage_amount_is_dropped():
    _, reason = normalize_row({"Date": "2024-01-05", "Amount": "abc"}, "CAD")

    assert reason == SKIP_INVALID_AMOUNT


@pytest.mark.parametrize("raw, expected", [
    ("2024-03-07", date(2024, 3, 7)),
    ("03/07/2024", date(2024, 3, 7)),
    ("25/12/2024", date(2024, 12, 25)),
    ("2024/03/07", date(2024, 3, 7)),
    ("07-03-2024", date(2024, 3, 7)),
    ("Mar 7, 2024", date(2024, 3, 7)),
    ("7 March 2024", date(2024, 3, 7)),
])
def test_date_formats(raw, expected):
    candidate, _ = normalize_row({"Transaction Date": raw, "Amount": "1"}, "CAD")

    assert candidate.date == expected


def test_unparseable_date_is_dropped():
    _, reason = normalize_row({"Date": "not a date", "Amount": "1"}, "CAD")

    assert reason == SKIP_INVALID_DATE


def test_missing_date_column_is_dropped():
    _, reason = normalize_row({"Amount": "1"}, "CAD")

    assert reason == SKIP_MISSING_DATE


def test_missing_description_uses_placeholder():
    candidate, _ = normalize_row({"Date": "2024-01-05", "Amount": "1", "Memo": "  "}, "CAD")

    assert candidate.description == "Transaction"
    assert candidate.normalized_name == "transaction"


@pytest.mark.parametrize("description, expected", [
    ("Interac e-Transfer to Bob", True),
    ("ETRANSFER received", True),
    ("TFSA Transfer", True),
    ("Metro", False),
])
def test_detect_transfer(description, expected):
    assert detect_transfer(description) is expected


def test_transfer_keeps_sign_of_amount():
    candidate, _ = normalize_row(
        {"Date": "2024-01-05", "Description": "E-Transfer to savings", "Amount": "-500"}, "CAD"
    )

    assert candidate.is_transfer is True
    assert candidate.cashflow_sign == -1


def test_normalize_rows_reports_every_drop():
    rows = [
        {"Date": "2024-01-05", "Description": "Netflix", "Amount": "-16.49"},
        {"Date": "2024-01-06", "Description": "Zero", "Amount": "0"},
        {"Date": "nope", "Description": "Bad", "Amount": "5"},
    ]

    candidates, skipped = normalize_rows(rows, "USD")

    assert [c.description for c in candidates] == ["Netflix"]
    assert candidates[0].currency == "USD"
    assert [reason for reason, _ in skipped] == [SKIP_ZERO_AMOUNT, SKIP_INVALID_DATE]
    assert skipped[0][1] is rows[1]
    for c in candidates:
        assert c.amount != 0
        assert c.cashflow_sign == (1 if c.amount > 0 else -1)
