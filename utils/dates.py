from datetime import date, datetime

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

# Tried in order; the first pattern yielding a real calendar date wins
STATEMENT_DATE_FORMATS = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%Y/%m/%d",
    "%d-%m-%Y",
    "%b %d, %Y",
)


def parse_statement_date(raw_date: str) -> date | None:
    """Parse a bank statement date, returning None when nothing fits."""
    if raw_date is None:
        return None
    raw_date = raw_date.strip()
    if not raw_date:
        return None

    for fmt in STATEMENT_DATE_FORMATS:
        try:
            return datetime.strptime(raw_date, fmt).date()
        except ValueError:
            continue

    try:
        return date_parser.parse(raw_date).date()
    except (ValueError, OverflowError):
        return None


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    return start_of_month(day) + relativedelta(months=1, days=-1)


def add_months(day: date, months: int) -> date:
    return day + relativedelta(months=months)
