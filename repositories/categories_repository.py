from models.finance import Category


def seed_categories(conn, categories):
    """
    Insert reference categories that are not already present.

    Args:
        conn: Database connection.
        categories: Iterable of Category.
    """
    for category in categories:
        conn.execute(
            """
            INSERT INTO categories (id, name, display_name, kind, parent_id)
            SELECT ?, ?, ?, ?, ?
            WHERE NOT EXISTS (SELECT 1 FROM categories WHERE id = ?)
            """,
            (category.id, category.name, category.display_name, category.kind,
             category.parent_id, category.id)
        )


def get_all_categories(conn):
    """
    Return all categories sorted by id.

    Args:
        conn: Database connection.

    Returns:
        List of Category.
    """
    rows = conn.execute("""
        SELECT id, name, display_name, kind, parent_id
        FROM categories
        ORDER BY id
    """).fetchall()

    return [
        Category(id=r[0], name=r[1], display_name=r[2], kind=r[3], parent_id=r[4])
        for r in rows
    ]
