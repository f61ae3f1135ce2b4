import copy
import logging
import uuid
from dataclasses import replace
from datetime import datetime, timedelta

from config import settings
from errors import NotFoundError
from models.finance import Account, Session, User
from models.insights import InsightFeedback, InsightModule
from repositories.store import build_transaction, new_id, paginate
from seed_data import DEMO_ACCOUNT, DEMO_USER_ID, INSIGHT_MODULES, build_demo_transactions

logger = logging.getLogger(__name__)


class MemoryStore:
    """Process-local store used when the database is disabled (and in tests)."""

    def __init__(self, demo_user_email: str = None, session_ttl_days: int = None):
        self.demo_user_email = demo_user_email or settings.demo_user_email
        self.session_ttl = timedelta(days=session_ttl_days or settings.session_ttl_days)
        self.users = []
        self.accounts = []
        self.transactions = []
        self.sessions = []
        self.insights = copy.deepcopy(INSIGHT_MODULES)
        self.feedback = []

    # -----------------------------
    # Demo data
    # -----------------------------
    def ensure_demo_data(self) -> bool:
        if self.find_user_by_email(self.demo_user_email):
            logger.info("Demo data already present; skipping seed.")
            return False

        demo = User(
            id=DEMO_USER_ID,
            email=self.demo_user_email,
            name="Demo Household",
            created_at=datetime.now(),
        )
        self.users.append(demo)
        if not any(account.id == DEMO_ACCOUNT.id for account in self.accounts):
            self.accounts.append(replace(DEMO_ACCOUNT))

        seeded = self.create_transactions(demo.id, DEMO_ACCOUNT.id, build_demo_transactions())
        logger.info(f"Seeded demo user with {len(seeded)} transactions.")
        return True

    # -----------------------------
    # Users & sessions
    # -----------------------------
    def find_user_by_email(self, email):
        return next((user for user in self.users if user.email == email), None)

    def find_user_by_id(self, user_id):
        return next((user for user in self.users if user.id == user_id), None)

    def create_user(self, email, password_hash=None, name=None, locale="en-CA", currency="CAD"):
        existing = self.find_user_by_email(email)
        if existing:
            return existing
        user = User(
            id=new_id(),
            email=email,
            name=name,
            locale=locale,
            currency=currency,
            password_hash=password_hash,
            created_at=datetime.now(),
        )
        self.users.append(user)
        return user

    def update_user(self, user_id, changes):
        user = self.find_user_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        for key, value in changes.items():
            if value is not None:
                setattr(user, key, value)
        return user

    def create_session(self, user_id):
        session = Session(
            token=uuid.uuid4().hex,
            user_id=user_id,
            expires_at=datetime.now() + self.session_ttl,
        )
        self.sessions.append(session)
        return session

    def delete_session(self, token):
        self.sessions = [session for session in self.sessions if session.token != token]

    def get_user_by_session(self, token):
        now = datetime.now()
        session = next(
            (s for s in self.sessions if s.token == token and s.expires_at > now),
            None,
        )
        if session is None:
            return None
        return self.find_user_by_id(session.user_id)

    # -----------------------------
    # Accounts
    # -----------------------------
    def list_accounts(self, user_id):
        return [account for account in self.accounts if account.user_id == user_id]

    def upsert_account(self, user_id, name, institution, type, currency):
        for account in self.accounts:
            if account.user_id == user_id and account.name.lower() == name.lower():
                account.name = name
                account.institution = institution
                account.type = type
                account.currency = currency
                return account

        account = Account(
            id=new_id(),
            user_id=user_id,
            name=name,
            institution=institution,
            type=type,
            currency=currency,
        )
        self.accounts.append(account)
        return account

    # -----------------------------
    # Transactions
    # -----------------------------
    def create_transactions(self, user_id, account_id, candidates):
        if self.find_user_by_id(user_id) is None:
            raise NotFoundError(f"Unknown user {user_id}")
        if not any(a.id == account_id and a.user_id == user_id for a in self.accounts):
            raise NotFoundError(f"Unknown account {account_id}")

        # Build the whole batch before storing any of it
        created = [build_transaction(user_id, account_id, candidate) for candidate in candidates]
        self.transactions.extend(created)
        return created

    def list_transactions(self, query):
        items = [t for t in self.transactions if t.user_id == query.user_id]

        if query.start and query.end:
            items = [t for t in items if query.start <= t.date <= query.end]
        if query.categories:
            items = [t for t in items if t.category_id in query.categories]
        if query.accounts:
            items = [t for t in items if t.account_id in query.accounts]
        if query.search:
            needle = query.search.lower()
            items = [
                t for t in items
                if needle in t.description.lower() or needle in t.normalized_name.lower()
            ]

        items.sort(key=lambda t: t.date, reverse=True)
        return paginate(items, query.offset, query.limit), len(items)

    def user_transactions(self, user_id):
        items = [t for t in self.transactions if t.user_id == user_id]
        return sorted(items, key=lambda t: t.date)

    def update_transaction_category(self, user_id, transaction_id, category_id):
        transaction = next(
            (t for t in self.transactions if t.id == transaction_id and t.user_id == user_id),
            None,
        )
        if transaction is None:
            return None
        transaction.category_id = category_id
        return transaction

    # -----------------------------
    # Insights
    # -----------------------------
    def get_insight_modules(self, user_id):
        return [
            InsightModule(
                id=module.id,
                title=module.title,
                description=module.description,
                insights=[i for i in module.insights if i.user_id == user_id],
            )
            for module in self.insights
        ]

    def record_insight_feedback(self, user_id, insight_id, value, comment=None):
        feedback = InsightFeedback(
            id=new_id(),
            user_id=user_id,
            insight_id=insight_id,
            value=value,
            comment=comment,
            created_at=datetime.now(),
        )
        self.feedback.append(feedback)
        return feedback
