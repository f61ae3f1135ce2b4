"""Storage contract shared by the in-memory and DuckDB backends."""
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Protocol, Tuple

from models.finance import Account, Session, Transaction, TransactionCandidate, User
from models.insights import InsightFeedback, InsightModule
from services.category_rule_engine import resolve_category
from utils.money import sign_of

DEFAULT_PAGE_SIZE = 100


@dataclass
class TransactionsQuery:
    user_id: str
    start: Optional[date] = None
    end: Optional[date] = None
    categories: Optional[List[int]] = None
    accounts: Optional[List[str]] = None
    search: Optional[str] = None
    limit: Optional[int] = None
    offset: Optional[int] = None


class Store(Protocol):
    """Capability interface every storage backend satisfies."""

    demo_user_email: str

    def ensure_demo_data(self) -> bool:
        """Seed the demo household once. Returns False when it already exists."""
        ...

    def find_user_by_email(self, email: str) -> Optional[User]: ...

    def find_user_by_id(self, user_id: str) -> Optional[User]: ...

    def create_user(self, email: str, password_hash: Optional[str] = None, name: Optional[str] = None,
                    locale: str = "en-CA", currency: str = "CAD") -> User: ...

    def update_user(self, user_id: str, changes: dict) -> User: ...

    def create_session(self, user_id: str) -> Session: ...

    def delete_session(self, token: str) -> None: ...

    def get_user_by_session(self, token: str) -> Optional[User]: ...

    def list_accounts(self, user_id: str) -> List[Account]: ...

    def upsert_account(self, user_id: str, name: str, institution: str,
                       type: str, currency: str) -> Account: ...

    def create_transactions(self, user_id: str, account_id: str,
                            candidates: List[TransactionCandidate]) -> List[Transaction]: ...

    def list_transactions(self, query: TransactionsQuery) -> Tuple[List[Transaction], int]: ...

    def user_transactions(self, user_id: str) -> List[Transaction]:
        """Every transaction the user owns, oldest first."""
        ...

    def update_transaction_category(self, user_id: str, transaction_id: str,
                                    category_id: Optional[int]) -> Optional[Transaction]: ...

    def get_insight_modules(self, user_id: str) -> List[InsightModule]: ...

    def record_insight_feedback(self, user_id: str, insight_id: str, value: str,
                                comment: Optional[str] = None) -> InsightFeedback: ...


def new_id() -> str:
    return str(uuid.uuid4())


def validate_cashflow_sign(amount, cashflow_sign: int, is_transfer: bool) -> None:
    """A non-zero cashflow sign must agree with the amount; zero is kept for transfers and zero amounts."""
    if cashflow_sign not in (-1, 0, 1):
        raise ValueError(f"cashflow_sign must be -1, 0 or 1, got {cashflow_sign}")
    if cashflow_sign == 0:
        if amount != 0 and not is_transfer:
            raise ValueError("cashflow_sign 0 is reserved for transfers and zero amounts")
        return
    if cashflow_sign != sign_of(amount):
        raise ValueError(f"cashflow_sign {cashflow_sign} disagrees with amount {amount}")


def build_transaction(user_id: str, account_id: str, candidate: TransactionCandidate) -> Transaction:
    """Give a candidate its identity, owner and category (explicit first, heuristic otherwise)."""
    validate_cashflow_sign(candidate.amount, candidate.cashflow_sign, candidate.is_transfer)
    return Transaction(
        id=new_id(),
        user_id=user_id,
        account_id=account_id,
        date=candidate.date,
        description=candidate.description,
        normalized_name=candidate.normalized_name,
        amount=candidate.amount,
        currency=candidate.currency,
        transaction_type=candidate.transaction_type,
        cashflow_sign=candidate.cashflow_sign,
        is_transfer=candidate.is_transfer,
        is_recurring=candidate.is_recurring,
        category_id=resolve_category(candidate),
        merchant_id=candidate.merchant_id,
        raw=candidate.raw,
        created_at=datetime.now(),
    )


def paginate(items: list, offset: Optional[int] = None, limit: Optional[int] = None) -> list:
    start = max(offset or 0, 0)
    size = limit or DEFAULT_PAGE_SIZE
    return items[start:start + size]
