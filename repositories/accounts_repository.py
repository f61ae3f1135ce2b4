from models.finance import Account

# -----------------------------
# Accounts Repository
# -----------------------------

ACCOUNT_COLUMNS = "id, user_id, name, institution, type, currency"


def _to_account(row):
    return Account(
        id=row[0],
        user_id=row[1],
        name=row[2],
        institution=row[3],
        type=row[4],
        currency=row[5],
    )


def insert_account(conn, account: Account):
    conn.execute(
        f"INSERT INTO accounts ({ACCOUNT_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
        (account.id, account.user_id, account.name, account.institution,
         account.type, account.currency)
    )


def get_account(conn, account_id):
    row = conn.execute(
        f"SELECT {ACCOUNT_COLUMNS} FROM accounts WHERE id = ?", (account_id,)
    ).fetchone()
    return _to_account(row) if row else None


def find_account_by_name(conn, user_id, name):
    """Case-insensitive lookup of a user's account by display name."""
    row = conn.execute(
        f"SELECT {ACCOUNT_COLUMNS} FROM accounts WHERE user_id = ? AND lower(name) = lower(?)",
        (user_id, name)
    ).fetchone()
    return _to_account(row) if row else None


def update_account(conn, account: Account):
    conn.execute(
        """
        UPDATE accounts
        SET name = ?, institution = ?, type = ?, currency = ?
        WHERE id = ?
        """,
        (account.name, account.institution, account.type, account.currency, account.id)
    )


def list_accounts(conn, user_id):
    """Return a user's accounts ordered by name."""
    rows = conn.execute(
        f"SELECT {ACCOUNT_COLUMNS} FROM accounts WHERE user_id = ? ORDER BY name",
        (user_id,)
    ).fetchall()
    return [_to_account(r) for r in rows]
