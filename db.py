import duckdb
import logging

from config import settings

logger = logging.getLogger(__name__)


# -----------------------------
# Get a DB connection
# -----------------------------
def get_db(db_file: str = None):
    """
    Returns a new DuckDB connection.
    """
    return duckdb.connect(db_file or settings.db_file)


# -----------------------------
# Initialize database schema
# -----------------------------
def init_db(db_file: str = None):
    conn = get_db(db_file)
    try:
        conn.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id VARCHAR PRIMARY KEY,
            email VARCHAR NOT NULL UNIQUE,
            name VARCHAR,
            locale VARCHAR NOT NULL DEFAULT 'en-CA',
            currency VARCHAR NOT NULL DEFAULT 'CAD',
            province VARCHAR,
            phone VARCHAR,
            password_hash VARCHAR,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        logger.info("Users table ensured.")

        conn.execute("""
        CREATE TABLE IF NOT EXISTS sessions (
            token VARCHAR PRIMARY KEY,
            user_id VARCHAR NOT NULL,
            expires_at TIMESTAMP NOT NULL
        );
        """)
        logger.info("Sessions table ensured.")

        conn.execute("""
        CREATE TABLE IF NOT EXISTS accounts (
            id VARCHAR PRIMARY KEY,
            user_id VARCHAR NOT NULL,
            name VARCHAR NOT NULL,
            institution VARCHAR,
            type VARCHAR,
            currency VARCHAR NOT NULL
        );
        """)
        logger.info("Accounts table ensured.")

        conn.execute("""
        CREATE TABLE IF NOT EXISTS categories (
            id INTEGER PRIMARY KEY,
            name VARCHAR NOT NULL,
            display_name VARCHAR NOT NULL,
            kind VARCHAR CHECK(kind IN ('INCOME','EXPENSE','TRANSFER','OTHER')),
            parent_id INTEGER
        );
        """)
        logger.info("Categories table ensured.")

        conn.execute("""
        CREATE TABLE IF NOT EXISTS transactions (
            id VARCHAR PRIMARY KEY,
            user_id VARCHAR NOT NULL,
            account_id VARCHAR NOT NULL,
            merchant_id VARCHAR,
            category_id INTEGER,
            normalized_name VARCHAR NOT NULL,
            description VARCHAR NOT NULL,
            amount DECIMAL(12,2) NOT NULL,
            currency VARCHAR NOT NULL,
            transaction_type VARCHAR CHECK(transaction_type IN ('INCOME','EXPENSE','TRANSFER','OTHER')),
            cashflow_sign INTEGER NOT NULL CHECK(cashflow_sign IN (-1, 0, 1)),
            date DATE NOT NULL,
            is_transfer BOOLEAN DEFAULT FALSE,
            is_recurring BOOLEAN DEFAULT FALSE,
            raw VARCHAR,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        logger.info("Transactions table ensured.")

        conn.execute("""
        CREATE TABLE IF NOT EXISTS insight_feedback (
            id VARCHAR PRIMARY KEY,
            user_id VARCHAR NOT NULL,
            insight_id VARCHAR NOT NULL,
            value VARCHAR NOT NULL,
            comment VARCHAR,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        logger.info("Insight feedback table ensured.")

        # Indexes
        conn.execute("CREATE INDEX IF NOT EXISTS idx_tx_user_date ON transactions(user_id, date);")
        conn.execute("CREATE INDEX IF NOT EXISTS idx_tx_category ON transactions(category_id);")
        logger.info("Indexes created/ensured.")
    finally:
        conn.close()
        logger.info("Database setup complete and connection closed.")
