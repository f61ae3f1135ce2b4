from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional


@dataclass
class CashflowPeriod:
    """Inclusive reporting bucket."""
    start: date
    end: date
    label: str

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass
class CashflowPoint:
    period: str
    income: Decimal
    expense: Decimal
    other: Decimal


@dataclass
class CategorySpendItem:
    category_id: int
    category_name: str
    total: Decimal
    budget_target: Optional[Decimal] = None


@dataclass
class Goal:
    id: str
    user_id: str
    name: str
    target: Decimal
    progress: Decimal
    priority: int


@dataclass
class DashboardTotals:
    income: Decimal
    expenses: Decimal
    other: Decimal
    savings: Decimal


@dataclass
class BudgetSnapshot:
    monthly_budget: Decimal
    spent_this_month: Decimal
    savings_this_month: Decimal
    categories: List[CategorySpendItem] = field(default_factory=list)


@dataclass
class SavingsSnapshot:
    last_period: Decimal
    since_start: Decimal
    goals: List[Goal] = field(default_factory=list)


@dataclass
class DashboardSummary:
    cashflow: List[CashflowPoint]
    category_breakdown: List[CategorySpendItem]
    totals: DashboardTotals
    budget: BudgetSnapshot
    savings: SavingsSnapshot


@dataclass
class DashboardFilters:
    timeframe: str = "MONTH"
    period_offset: Optional[int] = None
    label_id: Optional[str] = None
