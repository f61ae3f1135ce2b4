from models.finance import Session, User

# -----------------------------
# Users & Sessions Repository
# -----------------------------

USER_COLUMNS = "id, email, name, locale, currency, province, phone, password_hash, created_at"
EDITABLE_FIELDS = ("name", "locale", "currency", "province", "phone")


def _to_user(row):
    return User(
        id=row[0],
        email=row[1],
        name=row[2],
        locale=row[3],
        currency=row[4],
        province=row[5],
        phone=row[6],
        password_hash=row[7],
        created_at=row[8],
    )


def insert_user(conn, user: User):
    conn.execute(
        """
        INSERT INTO users (id, email, name, locale, currency, province, phone, password_hash)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (user.id, user.email, user.name, user.locale, user.currency,
         user.province, user.phone, user.password_hash)
    )


def get_user_by_email(conn, email):
    row = conn.execute(
        f"SELECT {USER_COLUMNS} FROM users WHERE email = ?", (email,)
    ).fetchone()
    return _to_user(row) if row else None


def get_user_by_id(conn, user_id):
    row = conn.execute(
        f"SELECT {USER_COLUMNS} FROM users WHERE id = ?", (user_id,)
    ).fetchone()
    return _to_user(row) if row else None


def update_user_fields(conn, user_id, changes: dict):
    """Apply the non-None editable fields in ``changes``; other keys are ignored."""
    updates = [(k, v) for k, v in changes.items() if k in EDITABLE_FIELDS and v is not None]
    if not updates:
        return
    assignments = ", ".join(f"{key} = ?" for key, _ in updates)
    conn.execute(
        f"UPDATE users SET {assignments} WHERE id = ?",
        [value for _, value in updates] + [user_id]
    )


def insert_session(conn, session: Session):
    conn.execute(
        "INSERT INTO sessions (token, user_id, expires_at) VALUES (?, ?, ?)",
        (session.token, session.user_id, session.expires_at)
    )


def delete_session(conn, token):
    conn.execute("DELETE FROM sessions WHERE token = ?", (token,))


def get_user_by_session(conn, token, now):
    """Return the session's user if the token exists and has not expired."""
    row = conn.execute(
        f"""
        SELECT {', '.join('u.' + c.strip() for c in USER_COLUMNS.split(','))}
        FROM sessions s
        JOIN users u ON s.user_id = u.id
        WHERE s.token = ? AND s.expires_at > ?
        """,
        (token, now)
    ).fetchone()
    return _to_user(row) if row else None
