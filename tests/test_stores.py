from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from db import get_db
from errors import NotFoundError
from factories import candidate
from repositories import categories_repository
from repositories.store import TransactionsQuery, validate_cashflow_sign
from seed_data import CATEGORIES, DEMO_ACCOUNT, DEMO_USER_ID


def test_demo_seed_is_idempotent(store):
    assert store.ensure_demo_data() is True
    seeded = len(store.user_transactions(DEMO_USER_ID))

    assert store.ensure_demo_data() is False
    assert len(store.user_transactions(DEMO_USER_ID)) == seeded
    # 4 subscriptions x 8 months, 24 groceries, 16 dining, 6 paycheques, 1 transfer
    assert seeded == 79
    assert [a.id for a in store.list_accounts(DEMO_USER_ID)] == [DEMO_ACCOUNT.id]


def test_demo_seed_respects_cashflow_invariant(store):
    store.ensure_demo_data()

    for t in store.user_transactions(DEMO_USER_ID):
        validate_cashflow_sign(t.amount, t.cashflow_sign, t.is_transfer)


def test_create_user_returns_existing_for_same_email(store):
    first = store.create_user(email="a@example.test", name="A")
    second = store.create_user(email="a@example.test", name="B")

    assert first.id == second.id
    assert store.find_user_by_email("a@example.test").name == "A"


def test_update_user_ignores_unset_fields(store, owner):
    user, _ = owner

    updated = store.update_user(user.id, {"province": "QC", "name": None})

    assert updated.province == "QC"
    assert updated.name == "Owner"


def test_update_unknown_user(store):
    with pytest.raises(NotFoundError):
        store.update_user("missing", {"name": "x"})


def test_session_lifecycle(store, owner):
    user, _ = owner

    session = store.create_session(user.id)
    assert store.get_user_by_session(session.token).id == user.id

    store.delete_session(session.token)
    assert store.get_user_by_session(session.token) is None


def test_expired_session_is_rejected(memory_store):
    user = memory_store.create_user(email="late@example.test")
    session = memory_store.create_session(user.id)
    session.expires_at = datetime.now() - timedelta(seconds=1)

    assert memory_store.get_user_by_session(session.token) is None


def test_upsert_account_matches_name_case_insensitively(store, owner):
    user, account = owner

    again = store.upsert_account(user.id, "CHEQUING", "Other Bank", "chequing", "USD")

    assert again.id == account.id
    assert again.institution == "Other Bank"
    assert len(store.list_accounts(user.id)) == 1


def test_list_transactions_filters_and_paginates(store, owner):
    user, account = owner
    store.create_transactions(user.id, account.id, [
        candidate(-16.49, day=date(2024, 1, 5), description="Netflix"),
        candidate(-60, day=date(2024, 2, 5), description="Metro"),
        candidate(3985.5, day=date(2024, 3, 5), description="Employer Inc"),
    ])

    items, total = store.list_transactions(TransactionsQuery(user_id=user.id))
    assert total == 3
    assert [t.description for t in items] == ["Employer Inc", "Metro", "Netflix"]

    items, total = store.list_transactions(TransactionsQuery(user_id=user.id, limit=1, offset=1))
    assert total == 3
    assert [t.description for t in items] == ["Metro"]

    items, _ = store.list_transactions(TransactionsQuery(
        user_id=user.id, start=date(2024, 1, 1), end=date(2024, 2, 28)))
    assert {t.description for t in items} == {"Netflix", "Metro"}

    items, _ = store.list_transactions(TransactionsQuery(user_id=user.id, search="METRO"))
    assert [t.description for t in items] == ["Metro"]

    items, _ = store.list_transactions(TransactionsQuery(user_id=user.id, categories=[131]))
    assert [t.description for t in items] == ["Employer Inc"]


def test_category_reassignment(store, owner):
    user, account = owner
    [created] = store.create_transactions(user.id, account.id, [candidate(-20, description="Shop")])
    assert created.category_id is None

    updated = store.update_transaction_category(user.id, created.id, 121)
    assert updated.category_id == 121
    assert updated.amount == Decimal("-20")
    assert updated.cashflow_sign == -1

    cleared = store.update_transaction_category(user.id, created.id, None)
    assert cleared.category_id is None


def test_category_reassignment_is_scoped_to_owner(store, owner):
    user, account = owner
    [created] = store.create_transactions(user.id, account.id, [candidate(-20)])

    assert store.update_transaction_category("someone-else", created.id, 121) is None
    assert store.update_transaction_category(user.id, "missing", 121) is None


def test_mismatched_cashflow_sign_is_refused(store, owner):
    user, account = owner

    with pytest.raises(ValueError):
        store.create_transactions(user.id, account.id, [candidate(-20, cashflow_sign=1)])
    with pytest.raises(ValueError):
        store.create_transactions(user.id, account.id, [candidate(-20, cashflow_sign=0)])

    assert store.user_transactions(user.id) == []


def test_transfer_may_carry_zero_sign(store, owner):
    user, account = owner

    [created] = store.create_transactions(user.id, account.id, [
        candidate(-500, description="TFSA Transfer", is_transfer=True, cashflow_sign=0)
    ])

    assert created.cashflow_sign == 0


def test_account_of_another_user_is_rejected(store, owner):
    user, _ = owner
    other = store.create_user(email="other@example.test")

    with pytest.raises(NotFoundError):
        store.create_transactions(other.id, DEMO_ACCOUNT.id, [candidate(-1)])


def test_insight_modules_are_filtered_by_user(store):
    store.ensure_demo_data()

    demo_modules = store.get_insight_modules(DEMO_USER_ID)
    other_modules = store.get_insight_modules("nobody")

    assert [m.id for m in demo_modules] == ["subscriptions", "fees", "peer"]
    assert sum(len(m.insights) for m in demo_modules) == 4
    assert all(m.insights == [] for m in other_modules)


def test_record_insight_feedback(store, owner):
    user, _ = owner

    feedback = store.record_insight_feedback(user.id, "insight-spotify", "USEFUL", "thanks")

    assert feedback.value == "USEFUL"
    assert feedback.insight_id == "insight-spotify"


def test_category_seed_is_idempotent(duckdb_store):
    duckdb_store.init_schema()

    conn = get_db(duckdb_store.db_file)
    try:
        categories = categories_repository.get_all_categories(conn)
    finally:
        conn.close()

    assert categories == sorted(CATEGORIES, key=lambda c: c.id)
