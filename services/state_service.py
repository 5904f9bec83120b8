"""
services/state_service.py
-------------------------
State management for the finance aggregate.

Every mutation builds a new FinanceState (copy-on-write), bumps its
version and saves it through the repository. Readers holding the previous
state keep a consistent snapshot.
"""

from models.finance_state import COLLECTIONS, FinanceState
from models.record import RecordId
from repositories.finance_repo import FinanceRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class FinanceStateService:
    """
    Owns writes to the finance state.

    Responsibilities:
        - Load the current state.
        - Replace it wholesale.
        - Add, update and delete records of one collection.
        - Guard record invariants on write.
    """

    def __init__(self, repo: FinanceRepository | None = None):
        self.repo = repo or FinanceRepository()
        self._state: FinanceState | None = None

    @property
    def state(self) -> FinanceState:
        """Current state, loaded lazily from the repository."""
        if self._state is None:
            self._state = self.repo.load()
        return self._state

    def load(self) -> FinanceState:
        """(Re)load the state from the repository."""
        self._state = self.repo.load()
        return self._state

    def replace(self, state: FinanceState) -> FinanceState:
        """Swap in a whole new state (keeps versions increasing)."""
        current = self.state.version
        if state.version <= current:
            state = FinanceState.from_dict({**state.to_dict(), "version": current + 1})
        return self._commit(state)

    def next_id(self, collection: str) -> int:
        """One more than the largest numeric id of a collection (1 when empty)."""
        ids = [r.id for r in self.state.collection(collection) if isinstance(r.id, int)]
        return max(ids, default=0) + 1

    def add_record(self, collection: str, payload: dict) -> FinanceState:
        """
        Append a record built from a raw payload.

        Args:
            collection: Persisted collection key ('incomes', 'expenses',
                'loans', 'debts', 'creditCards', 'goals').
            payload: The record in its stored (camelCase) form.

        Raises:
            ValueError: Unknown collection, or a loan paying more than its total.
        """
        record = self._build(collection, payload)
        records = self.state.collection(collection) + (record,)
        logger.info(f"Adding {record.kind} #{record.id}")
        return self._commit(self.state.with_collection(collection, records))

    def update_record(self, collection: str, payload: dict) -> FinanceState:
        """Replace the record whose id matches `payload['id']`."""
        record = self._build(collection, payload)
        current = self.state.collection(collection)
        if not any(r.id == record.id for r in current):
            logger.warning(f"Cannot update {record.kind} #{record.id}: not found")
            return self.state
        records = [record if r.id == record.id else r for r in current]
        logger.info(f"Updating {record.kind} #{record.id}")
        return self._commit(self.state.with_collection(collection, records))

    def delete_record(self, collection: str, record_id: RecordId) -> bool:
        """
        Remove a record by id.

        Returns:
            True if a record was removed.
        """
        current = self.state.collection(collection)
        records = [r for r in current if r.id != record_id]
        if len(records) == len(current):
            logger.warning(f"Cannot delete {collection} #{record_id}: not found")
            return False
        self._commit(self.state.with_collection(collection, records))
        logger.info(f"Deleted {collection} #{record_id}")
        return True

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _build(collection: str, payload: dict):
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {collection}")
        record = COLLECTIONS[collection][1].from_dict(payload)

        if record.kind == "loan" and record.paid > record.total:
            raise ValueError(
                f"Loan #{record.id} paid amount {record.paid:.2f} exceeds its total {record.total:.2f}"
            )
        if record.kind == "credit_card" and record.current_debt > record.credit_limit:
            logger.warning(f"Credit card #{record.id} debt is above its credit limit")
        return record

    def _commit(self, state: FinanceState) -> FinanceState:
        self.repo.save(state)
        self._state = state
        return state
