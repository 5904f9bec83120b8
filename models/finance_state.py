"""
models/finance_state.py
-----------------------
The FinanceState aggregate: every persisted record of one user.

The aggregate is immutable. Writers build a new state (see
services.state_service) instead of mutating collections in place, so a
projection running over a state never observes a half-applied change.
"""

from dataclasses import dataclass, field, replace

from models.credit_card import CreditCard
from models.debt import LegacyDebt
from models.expense import Expense
from models.goal import Goal
from models.income import Income
from models.loan import Loan

# Persisted collection key -> (attribute name, record class)
COLLECTIONS = {
    "incomes": ("incomes", Income),
    "expenses": ("expenses", Expense),
    "loans": ("loans", Loan),
    "debts": ("debts", LegacyDebt),
    "creditCards": ("credit_cards", CreditCard),
    "goals": ("goals", Goal),
}


@dataclass(frozen=True)
class FinanceState:
    """
    Attributes:
        incomes, expenses, loans, debts, credit_cards, goals: record tuples.
        version: Incremented on every mutation; projection caches key on it.
    """
    incomes: tuple[Income, ...] = ()
    expenses: tuple[Expense, ...] = ()
    loans: tuple[Loan, ...] = ()
    debts: tuple[LegacyDebt, ...] = ()
    credit_cards: tuple[CreditCard, ...] = ()
    goals: tuple[Goal, ...] = ()
    version: int = 0
    extra: dict = field(default_factory=dict, repr=False, compare=False, hash=False)

    @classmethod
    def default(cls) -> "FinanceState":
        """The empty state used when nothing has been stored yet."""
        return cls()

    @classmethod
    def from_dict(cls, data: dict | None) -> "FinanceState":
        """
        Build a state from the persisted JSON document.

        Missing collections load as empty; entries that are not JSON
        objects are dropped.
        """
        data = dict(data or {})
        kwargs = {}
        for key, (attr, record_cls) in COLLECTIONS.items():
            items = data.pop(key, None) or []
            kwargs[attr] = tuple(
                record_cls.from_dict(item) for item in items if isinstance(item, dict)
            )
        version = data.pop("version", 0)
        kwargs["version"] = version if isinstance(version, int) else 0
        return cls(extra=data, **kwargs)

    def to_dict(self) -> dict:
        payload = dict(self.extra)
        for key, (attr, _) in COLLECTIONS.items():
            payload[key] = [record.to_dict() for record in getattr(self, attr)]
        payload["version"] = self.version
        return payload

    def collection(self, key: str) -> tuple:
        """Return the records of a persisted collection key (e.g. 'creditCards')."""
        if key not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {key}")
        return getattr(self, COLLECTIONS[key][0])

    def with_collection(self, key: str, records) -> "FinanceState":
        """Return a copy with one collection replaced and the version bumped."""
        if key not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {key}")
        return replace(self, **{COLLECTIONS[key][0]: tuple(records)}, version=self.version + 1)
