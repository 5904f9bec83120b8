"""
db/init_db.py
-------------
Creates the state store table if it does not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import transaction
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- One JSON document per storage key: the whole finance state of a user
CREATE TABLE IF NOT EXISTS finance_state (
    storage_key     VARCHAR(100) PRIMARY KEY,
    data            JSONB NOT NULL,
    updated_at      TIMESTAMPTZ DEFAULT NOW()
);
"""


def create_tables() -> None:
    """
    Execute the schema SQL.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    try:
        with transaction() as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
