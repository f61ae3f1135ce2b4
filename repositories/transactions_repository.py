import json

from models.finance import Transaction
from repositories.store import DEFAULT_PAGE_SIZE

# -----------------------------
# Transactions Repository
# -----------------------------

TRANSACTION_COLUMNS = (
    "id, user_id, account_id, date, description, normalized_name, amount, currency, "
    "transaction_type, cashflow_sign, is_transfer, is_recurring, category_id, "
    "merchant_id, raw, created_at"
)


def _to_transaction(row):
    return Transaction(
        id=row[0],
        user_id=row[1],
        account_id=row[2],
        date=row[3],
        description=row[4],
        normalized_name=row[5],
        amount=row[6],
        currency=row[7],
        transaction_type=row[8],
        cashflow_sign=row[9],
        is_transfer=row[10],
        is_recurring=row[11],
        category_id=row[12],
        merchant_id=row[13],
        raw=json.loads(row[14]) if row[14] else None,
        created_at=row[15],
    )


def insert_transactions(conn, transactions):
    """
    Inserts a batch of transactions.
    - conn: DuckDB connection; the caller owns the surrounding DB transaction
    - transactions: list of Transaction
    """
    if not transactions:
        return
    conn.executemany(
        f"""
        INSERT INTO transactions ({TRANSACTION_COLUMNS})
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        [
            (t.id, t.user_id, t.account_id, t.date, t.description, t.normalized_name,
             t.amount, t.currency, t.transaction_type, t.cashflow_sign, t.is_transfer,
             t.is_recurring, t.category_id, t.merchant_id,
             json.dumps(t.raw) if t.raw is not None else None, t.created_at)
            for t in transactions
        ]
    )


def query_transactions(conn, query):
    """
    Returns ``(page, total)`` for a TransactionsQuery, newest first.
    """
    where = ["user_id = ?"]
    params = [query.user_id]

    if query.start and query.end:
        where.append("date BETWEEN ? AND ?")
        params.extend([query.start, query.end])
    if query.categories:
        where.append(f"category_id IN ({', '.join('?' for _ in query.categories)})")
        params.extend(query.categories)
    if query.accounts:
        where.append(f"account_id IN ({', '.join('?' for _ in query.accounts)})")
        params.extend(query.accounts)
    if query.search:
        where.append("(lower(description) LIKE ? OR lower(normalized_name) LIKE ?)")
        needle = f"%{query.search.lower()}%"
        params.extend([needle, needle])

    clause = " AND ".join(where)
    total = conn.execute(
        f"SELECT COUNT(*) FROM transactions WHERE {clause}", params
    ).fetchone()[0]

    rows = conn.execute(
        f"""
        SELECT {TRANSACTION_COLUMNS}
        FROM transactions
        WHERE {clause}
        ORDER BY date DESC, rowid
        LIMIT ? OFFSET ?
        """,
        params + [query.limit or DEFAULT_PAGE_SIZE, max(query.offset or 0, 0)]
    ).fetchall()

    return [_to_transaction(r) for r in rows], total


def get_user_transactions(conn, user_id):
    """All of a user's transactions, oldest first, insertion order within a day."""
    rows = conn.execute(
        f"""
        SELECT {TRANSACTION_COLUMNS}
        FROM transactions
        WHERE user_id = ?
        ORDER BY date, rowid
        """,
        (user_id,)
    ).fetchall()
    return [_to_transaction(r) for r in rows]


def get_transaction_by_id(conn, transaction_id):
    row = conn.execute(
        f"SELECT {TRANSACTION_COLUMNS} FROM transactions WHERE id = ?",
        (transaction_id,)
    ).fetchone()
    return _to_transaction(row) if row else None


def update_category(conn, transaction_id, new_category):
    """
    Updates the category of a transaction.
    - conn: DuckDB connection (from get_db() or passed in)
    - transaction_id: ID of the transaction to update
    - new_category: category id, or None to clear it
    """
    conn.execute(
        """
        UPDATE transactions
        SET category_id = ?
        WHERE id = ?
        """,
        (new_category, transaction_id)
    )
