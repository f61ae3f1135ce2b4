from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

# Transaction types and category kinds share the same vocabulary
INCOME = "INCOME"
EXPENSE = "EXPENSE"
TRANSFER = "TRANSFER"
OTHER = "OTHER"


@dataclass(frozen=True)
class Category:
    id: int
    name: str
    display_name: str
    kind: str
    parent_id: Optional[int] = None


@dataclass
class User:
    id: str
    email: str
    name: Optional[str] = None
    locale: str = "en-CA"
    currency: str = "CAD"
    province: Optional[str] = None
    phone: Optional[str] = None
    password_hash: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class Session:
    token: str
    user_id: str
    expires_at: datetime


@dataclass
class Account:
    id: str
    user_id: str
    name: str
    institution: str
    type: str
    currency: str


@dataclass(frozen=True)
class TransactionCandidate:
    """A normalized statement line, not yet owned by a user or account."""
    date: date
    description: str
    normalized_name: str
    amount: Decimal
    currency: str
    transaction_type: str
    cashflow_sign: int
    is_transfer: bool = False
    is_recurring: bool = False
    category_id: Optional[int] = None
    merchant_id: Optional[str] = None
    raw: Optional[dict] = None


@dataclass
class Transaction:
    id: str
    user_id: str
    account_id: str
    date: date
    description: str
    normalized_name: str
    amount: Decimal
    currency: str
    transaction_type: str
    cashflow_sign: int
    is_transfer: bool = False
    is_recurring: bool = False
    category_id: Optional[int] = None
    merchant_id: Optional[str] = None
    raw: Optional[dict[str, Any]] = field(default=None, repr=False)
    created_at: Optional[datetime] = None


def public_user(user: User) -> dict:
    """User fields safe to send to a client."""
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "locale": user.locale,
        "currency": user.currency,
    }
