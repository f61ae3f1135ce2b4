"""
Dashboard aggregation: cashflow buckets, category breakdown, budget and
savings snapshots for one user.

Everything is derived fresh from the stored transactions on every call;
for the same data and the same ``today`` the summary is identical.
"""
from datetime import date
from decimal import Decimal

from models.dashboard_dto import (
    BudgetSnapshot,
    CashflowPeriod,
    CashflowPoint,
    CategorySpendItem,
    DashboardFilters,
    DashboardSummary,
    DashboardTotals,
    Goal,
    SavingsSnapshot,
)
from seed_data import category_display_name
from services.category_rule_engine import TRANSFERS
from utils.dates import add_months, end_of_month, start_of_month
from utils.money import ZERO, round_money

BUCKET_COUNT = 3
MONTHLY_BUDGET = Decimal("3500")
BUDGET_CATEGORY_LIMIT = 6
UNCATEGORIZED_CATEGORY_ID = TRANSFERS


def _month_periods(today: date, count: int):
    first = start_of_month(add_months(today, -(count - 1)))
    periods = []
    for i in range(count):
        start = add_months(first, i)
        periods.append(CashflowPeriod(start, end_of_month(start), start.strftime("%Y-%m")))
    return periods


def build_cashflow_periods(timeframe: str, today: date = None, count: int = BUCKET_COUNT):
    """
    Build ``count`` trailing reporting buckets ending with the one containing ``today``.

    MONTH buckets are whole months, QUARTER buckets are three-month spans
    starting every third month back from the current one, YEAR buckets are
    calendar years. Any other timeframe (WEEK included) uses months.
    """
    today = today or date.today()

    if timeframe == "QUARTER":
        periods = []
        for i in range(count - 1, -1, -1):
            start = start_of_month(add_months(today, -3 * i))
            end = end_of_month(add_months(start, 2))
            quarter = (start.month - 1) // 3 + 1
            periods.append(CashflowPeriod(start, end, f"{start.year}-Q{quarter}"))
        return periods

    if timeframe == "YEAR":
        return [
            CashflowPeriod(date(year, 1, 1), date(year, 12, 31), str(year))
            for year in range(today.year - count + 1, today.year + 1)
        ]

    return _month_periods(today, count)


def _sum(amounts) -> Decimal:
    return sum(amounts, ZERO)


def summarize_cashflow(transactions, period: CashflowPeriod) -> CashflowPoint:
    in_period = [t for t in transactions if period.contains(t.date)]
    income = _sum(t.amount for t in in_period if t.cashflow_sign > 0)
    expenses = _sum(t.amount for t in in_period if t.cashflow_sign < 0)
    other = _sum(t.amount for t in in_period if t.cashflow_sign == 0)
    return CashflowPoint(
        period=period.label,
        income=round_money(income),
        expense=round_money(abs(expenses)),
        other=round_money(other),
    )


def category_breakdown(transactions) -> list:
    """Absolute totals per category, largest first; ties keep first-seen order."""
    totals = {}
    for transaction in transactions:
        category_id = transaction.category_id
        if category_id is None:
            category_id = UNCATEGORIZED_CATEGORY_ID
        totals[category_id] = totals.get(category_id, ZERO) + transaction.amount

    items = [
        CategorySpendItem(
            category_id=category_id,
            category_name=category_display_name(category_id),
            total=round_money(abs(total)),
        )
        for category_id, total in totals.items()
    ]
    # sorted() is stable, so equal totals stay in insertion order
    return sorted(items, key=lambda item: item.total, reverse=True)


def placeholder_goals(user_id: str) -> list:
    # TODO: replace with stored goals once a goals table exists
    return [
        Goal(
            id="goal-1",
            user_id=user_id,
            name="Emergency fund",
            target=Decimal("10000"),
            progress=Decimal("4200"),
            priority=1,
        )
    ]


def build_summary(user_id: str, transactions: list, filters: DashboardFilters,
                  today: date = None) -> DashboardSummary:
    periods = build_cashflow_periods(filters.timeframe, today)
    cashflow = [summarize_cashflow(transactions, period) for period in periods]

    latest_period = periods[-1]
    latest = [t for t in transactions if latest_period.contains(t.date)]
    breakdown = category_breakdown(latest)

    income = _sum(point.income for point in cashflow)
    expenses = _sum(point.expense for point in cashflow)
    totals = DashboardTotals(
        income=round_money(income),
        expenses=round_money(expenses),
        other=round_money(_sum(point.other for point in cashflow)),
        savings=round_money(income - expenses),
    )

    budget = BudgetSnapshot(
        monthly_budget=MONTHLY_BUDGET,
        spent_this_month=round_money(_sum(abs(t.amount) for t in latest if t.cashflow_sign < 0)),
        savings_this_month=round_money(_sum(t.amount for t in latest if t.cashflow_sign != 0)),
        categories=breakdown[:BUDGET_CATEGORY_LIMIT],
    )

    last_point = cashflow[-1]
    savings = SavingsSnapshot(
        last_period=round_money(last_point.income - last_point.expense),
        since_start=round_money(_sum(t.amount for t in transactions if t.cashflow_sign != 0)),
        goals=placeholder_goals(user_id),
    )

    return DashboardSummary(
        cashflow=cashflow,
        category_breakdown=breakdown,
        totals=totals,
        budget=budget,
        savings=savings,
    )


def summarize_dashboard(store, user_id: str, filters: DashboardFilters = None,
                        today: date = None) -> DashboardSummary:
    """Read the user's full history from ``store`` and aggregate it.

    ``filters.period_offset`` and ``filters.label_id`` are accepted but do
    not change the result.
    """
    filters = filters or DashboardFilters()
    transactions = store.user_transactions(user_id)
    return build_summary(user_id, transactions, filters, today)
