from datetime import date
from decimal import Decimal

from errors import NotFoundError
from helpers.normalize import detect_transaction_type, detect_transfer
from models.finance import TransactionCandidate
from repositories.store import TransactionsQuery
from utils.money import round_money, sign_of


def get_all_transactions(store, user_id, start=None, end=None, categories=None,
                         accounts=None, search=None, limit=None, offset=None):
    """Return ``(items, total)`` for the user, newest first.

    The date window only applies when both ``start`` and ``end`` are given.
    """
    query = TransactionsQuery(
        user_id=user_id,
        start=start,
        end=end,
        categories=categories,
        accounts=accounts,
        search=search,
        limit=limit,
        offset=offset,
    )
    return store.list_transactions(query)


def update_transaction_category(store, user_id, transaction_id, category_id):
    transaction = store.update_transaction_category(user_id, transaction_id, category_id)
    if transaction is None:
        raise NotFoundError("Transaction not found")
    return transaction


def add_transaction(store, *, user_id, account_id, date: date, description: str,
                    amount: Decimal, currency: str, category_id=None,
                    is_transfer=None, is_recurring=False):
    """Service wrapper for a manually entered transaction.

    If no category is provided, the category heuristic picks one when the
    store builds the transaction.
    """
    amount = round_money(amount)
    description = description.strip()
    if is_transfer is None:
        is_transfer = detect_transfer(description)

    candidate = TransactionCandidate(
        date=date,
        description=description,
        normalized_name=description.lower(),
        amount=amount,
        currency=currency,
        transaction_type=detect_transaction_type(amount),
        cashflow_sign=sign_of(amount),
        is_transfer=is_transfer,
        is_recurring=is_recurring,
        category_id=category_id,
    )
    [transaction] = store.create_transactions(user_id, account_id, [candidate])
    return transaction
