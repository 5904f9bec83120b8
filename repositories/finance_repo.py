"""
repositories/finance_repo.py
----------------------------
Data access for the persisted FinanceState.
The state is kept as a single JSON document per storage key in the
`finance_state` table, the server-side counterpart of the web client's
localStorage entry.
"""

import json

from psycopg2.extras import Json

from config import STORAGE_KEY
from db.connection import get_connection, release_connection, transaction
from models.finance_state import FinanceState
from utils.logger import get_logger

logger = get_logger(__name__)


class FinanceRepository:
    """Load/save interface for the finance state blob."""

    def __init__(self, storage_key: str = STORAGE_KEY):
        self.storage_key = storage_key

    # ── READ ──────────────────────────────────────────────

    def load(self) -> FinanceState:
        """
        Fetch the stored state.

        Returns:
            The stored FinanceState, or the default empty state when
            nothing has been saved under this key yet.
        """
        sql = "SELECT data FROM finance_state WHERE storage_key = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (self.storage_key,))
                row = cur.fetchone()
        finally:
            release_connection(conn)

        if row is None:
            logger.info(f"No stored state under '{self.storage_key}', using defaults")
            return FinanceState.default()
        data = row[0]
        if isinstance(data, str):
            data = json.loads(data)
        return FinanceState.from_dict(data)

    # ── WRITE ─────────────────────────────────────────────

    def save(self, state: FinanceState) -> None:
        """Insert or replace the stored state."""
        sql = """
            INSERT INTO finance_state (storage_key, data, updated_at)
            VALUES (%s, %s, NOW())
            ON CONFLICT (storage_key)
            DO UPDATE SET data = EXCLUDED.data, updated_at = NOW();
        """
        try:
            with transaction() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (self.storage_key, Json(state.to_dict())))
            logger.info(f"Saved state v{state.version} under '{self.storage_key}'")
        except Exception as e:
            logger.error(f"Failed to save state '{self.storage_key}': {e}")
            raise
