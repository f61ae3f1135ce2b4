# helpers/normalize.py
from decimal import Decimal

from models.finance import EXPENSE, INCOME, TRANSFER, TransactionCandidate
from services.csv_parser import (
    AMOUNT_COLUMNS,
    CREDIT_COLUMNS,
    DATE_COLUMNS,
    DEBIT_COLUMNS,
    DESCRIPTION_COLUMNS,
    find_column,
)
from utils.dates import parse_statement_date
from utils.money import ZERO, parse_money, sign_of

DEFAULT_DESCRIPTION = "Transaction"
TRANSFER_MARKERS = ("transfer", "etransfer", "e-transfer")

# Reasons reported back in the upload result's ``skipped`` list
SKIP_ZERO_AMOUNT = "zero_amount"
SKIP_INVALID_AMOUNT = "invalid_amount"
SKIP_MISSING_DATE = "missing_date"
SKIP_INVALID_DATE = "invalid_date"


def _money_or_zero(row: dict, column: str | None) -> Decimal:
    if column is None:
        return ZERO
    raw = row.get(column) or ""
    if not raw.strip():
        return ZERO
    return parse_money(raw)


def resolve_amount(row: dict) -> Decimal:
    """Signed amount column if present and filled, otherwise ``credit - debit``."""
    amount_column = find_column(row, AMOUNT_COLUMNS)
    if amount_column is not None:
        raw = (row.get(amount_column) or "").strip()
        if raw:
            return parse_money(raw)

    credit = _money_or_zero(row, find_column(row, CREDIT_COLUMNS))
    debit = _money_or_zero(row, find_column(row, DEBIT_COLUMNS))
    return credit - debit


def resolve_description(row: dict) -> str:
    column = find_column(row, DESCRIPTION_COLUMNS)
    if column is None:
        return DEFAULT_DESCRIPTION
    return (row.get(column) or "").strip() or DEFAULT_DESCRIPTION


def detect_transaction_type(amount: Decimal) -> str:
    if amount > 0:
        return INCOME
    if amount < 0:
        return EXPENSE
    return TRANSFER


def detect_transfer(description: str) -> bool:
    lowered = description.lower()
    return any(marker in lowered for marker in TRANSFER_MARKERS)


def normalize_row(row: dict, currency: str):
    """
    Convert a raw CSV row into a TransactionCandidate.

    Returns ``(candidate, None)`` on success or ``(None, reason)`` when the
    row is dropped (no usable date, unparseable or zero amount).
    """
    date_column = find_column(row, DATE_COLUMNS)
    raw_date = (row.get(date_column) or "").strip() if date_column else ""
    if not raw_date:
        return None, SKIP_MISSING_DATE

    date = parse_statement_date(raw_date)
    if date is None:
        return None, SKIP_INVALID_DATE

    try:
        amount = resolve_amount(row)
    except ValueError:
        return None, SKIP_INVALID_AMOUNT

    if amount == 0:
        return None, SKIP_ZERO_AMOUNT

    description = resolve_description(row)
    candidate = TransactionCandidate(
        date=date,
        description=description,
        normalized_name=description.lower(),
        amount=amount,
        currency=currency,
        transaction_type=detect_transaction_type(amount),
        cashflow_sign=sign_of(amount),
        is_transfer=detect_transfer(description),
        raw=row,
    )
    return candidate, None


def normalize_rows(rows: list, currency: str):
    """Normalize every row; returns ``(candidates, skipped)`` where skipped is ``[(reason, row)]``."""
    candidates = []
    skipped = []
    for row in rows:
        candidate, reason = normalize_row(row, currency)
        if candidate is None:
            skipped.append((reason, row))
        else:
            candidates.append(candidate)
    return candidates, skipped
