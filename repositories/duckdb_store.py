import logging
import uuid
from dataclasses import replace
from datetime import datetime, timedelta

from config import settings
from db import get_db, init_db
from errors import NotFoundError
from models.finance import Account, Session, User
from models.insights import InsightFeedback, InsightModule
from repositories import (
    accounts_repository,
    categories_repository,
    insights_repository,
    transactions_repository,
    users_repository,
)
from repositories.store import build_transaction, new_id
from seed_data import (
    CATEGORIES,
    DEMO_ACCOUNT,
    DEMO_USER_ID,
    INSIGHT_MODULES,
    build_demo_transactions,
)

logger = logging.getLogger(__name__)


class DuckDBStore:
    """Persistent store. Every call opens and closes its own connection."""

    def __init__(self, db_file: str = None, demo_user_email: str = None, session_ttl_days: int = None):
        self.db_file = db_file or settings.db_file
        self.demo_user_email = demo_user_email or settings.demo_user_email
        self.session_ttl = timedelta(days=session_ttl_days or settings.session_ttl_days)

    def init_schema(self):
        init_db(self.db_file)
        conn = get_db(self.db_file)
        try:
            categories_repository.seed_categories(conn, CATEGORIES)
        finally:
            conn.close()

    # -----------------------------
    # Demo data
    # -----------------------------
    def ensure_demo_data(self) -> bool:
        conn = get_db(self.db_file)
        try:
            if users_repository.get_user_by_email(conn, self.demo_user_email):
                logger.info("Demo data already present; skipping seed.")
                return False

            users_repository.insert_user(conn, User(
                id=DEMO_USER_ID,
                email=self.demo_user_email,
                name="Demo Household",
            ))
            if accounts_repository.get_account(conn, DEMO_ACCOUNT.id) is None:
                accounts_repository.insert_account(conn, replace(DEMO_ACCOUNT))
        finally:
            conn.close()

        seeded = self.create_transactions(DEMO_USER_ID, DEMO_ACCOUNT.id, build_demo_transactions())
        logger.info(f"Seeded demo user with {len(seeded)} transactions.")
        return True

    # -----------------------------
    # Users & sessions
    # -----------------------------
    def find_user_by_email(self, email):
        conn = get_db(self.db_file)
        try:
            return users_repository.get_user_by_email(conn, email)
        finally:
            conn.close()

    def find_user_by_id(self, user_id):
        conn = get_db(self.db_file)
        try:
            return users_repository.get_user_by_id(conn, user_id)
        finally:
            conn.close()

    def create_user(self, email, password_hash=None, name=None, locale="en-CA", currency="CAD"):
        conn = get_db(self.db_file)
        try:
            existing = users_repository.get_user_by_email(conn, email)
            if existing:
                return existing
            user = User(
                id=new_id(),
                email=email,
                name=name,
                locale=locale,
                currency=currency,
                password_hash=password_hash,
            )
            users_repository.insert_user(conn, user)
            return users_repository.get_user_by_id(conn, user.id)
        finally:
            conn.close()

    def update_user(self, user_id, changes):
        conn = get_db(self.db_file)
        try:
            if users_repository.get_user_by_id(conn, user_id) is None:
                raise NotFoundError("User not found")
            users_repository.update_user_fields(conn, user_id, changes)
            return users_repository.get_user_by_id(conn, user_id)
        finally:
            conn.close()

    def create_session(self, user_id):
        session = Session(
            token=uuid.uuid4().hex,
            user_id=user_id,
            expires_at=datetime.now() + self.session_ttl,
        )
        conn = get_db(self.db_file)
        try:
            users_repository.insert_session(conn, session)
        finally:
            conn.close()
        return session

    def delete_session(self, token):
        conn = get_db(self.db_file)
        try:
            users_repository.delete_session(conn, token)
        finally:
            conn.close()

    def get_user_by_session(self, token):
        conn = get_db(self.db_file)
        try:
            return users_repository.get_user_by_session(conn, token, datetime.now())
        finally:
            conn.close()

    # -----------------------------
    # Accounts
    # -----------------------------
    def list_accounts(self, user_id):
        conn = get_db(self.db_file)
        try:
            return accounts_repository.list_accounts(conn, user_id)
        finally:
            conn.close()

    def upsert_account(self, user_id, name, institution, type, currency):
        conn = get_db(self.db_file)
        try:
            account = accounts_repository.find_account_by_name(conn, user_id, name)
            if account:
                account = replace(account, name=name, institution=institution,
                                  type=type, currency=currency)
                accounts_repository.update_account(conn, account)
                return account

            account = Account(
                id=new_id(),
                user_id=user_id,
                name=name,
                institution=institution,
                type=type,
                currency=currency,
            )
            accounts_repository.insert_account(conn, account)
            return account
        finally:
            conn.close()

    # -----------------------------
    # Transactions
    # -----------------------------
    def create_transactions(self, user_id, account_id, candidates):
        conn = get_db(self.db_file)
        try:
            if users_repository.get_user_by_id(conn, user_id) is None:
                raise NotFoundError(f"Unknown user {user_id}")
            account = accounts_repository.get_account(conn, account_id)
            if account is None or account.user_id != user_id:
                raise NotFoundError(f"Unknown account {account_id}")

            created = [build_transaction(user_id, account_id, candidate) for candidate in candidates]

            # One DB transaction per batch: an upload lands entirely or not at all
            conn.begin()
            try:
                transactions_repository.insert_transactions(conn, created)
                conn.commit()
            except Exception:
                conn.rollback()
                raise
            return created
        finally:
            conn.close()

    def list_transactions(self, query):
        conn = get_db(self.db_file)
        try:
            return transactions_repository.query_transactions(conn, query)
        finally:
            conn.close()

    def user_transactions(self, user_id):
        conn = get_db(self.db_file)
        try:
            return transactions_repository.get_user_transactions(conn, user_id)
        finally:
            conn.close()

    def update_transaction_category(self, user_id, transaction_id, category_id):
        conn = get_db(self.db_file)
        try:
            transaction = transactions_repository.get_transaction_by_id(conn, transaction_id)
            if transaction is None or transaction.user_id != user_id:
                return None
            transactions_repository.update_category(conn, transaction_id, category_id)
            return replace(transaction, category_id=category_id)
        finally:
            conn.close()

    # -----------------------------
    # Insights
    # -----------------------------
    def get_insight_modules(self, user_id):
        return [
            InsightModule(
                id=module.id,
                title=module.title,
                description=module.description,
                insights=[replace(i) for i in module.insights if i.user_id == user_id],
            )
            for module in INSIGHT_MODULES
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
        conn = get_db(self.db_file)
        try:
            insights_repository.insert_feedback(conn, feedback)
        finally:
            conn.close()
        return feedback
