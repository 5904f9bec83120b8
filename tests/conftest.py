"""Pytest fixtures for testing"""

from datetime import date

import pytest

from models.finance_state import FinanceState

# Saturday; ISO week Oct 5-11, first fortnight Oct 1-15
NOW = date(2026, 10, 10)


class FakeRepository:
    """In-memory stand-in for FinanceRepository."""

    def __init__(self, state: FinanceState | None = None):
        self.state = state or FinanceState.default()
        self.saved: list[FinanceState] = []
        self.loads = 0

    def load(self) -> FinanceState:
        self.loads += 1
        return self.state

    def save(self, state: FinanceState) -> None:
        self.saved.append(state)
        self.state = state


@pytest.fixture
def now() -> date:
    return NOW


@pytest.fixture
def sample_data() -> dict:
    """Stored document with one record of every kind, as the web client saves it"""
    return {
        "incomes": [
            {"id": 1, "amount": 20000, "date": "2026-01-15", "frequency": "mensual",
             "source": "Salario", "company": "ACME", "notes": "quincena doble en dic"},
            {"id": 2, "amount": 5000, "date": "2026-10-03", "frequency": "único", "source": "Bono"},
        ],
        "expenses": [
            {"id": 1, "amount": 8000, "date": "2026-09-20", "category": "Hogar",
             "description": "Renta", "frequency": "mensual"},
            {"id": 2, "amount": 450, "date": "2026-10-12", "category": "Alimentación",
             "description": "Súper", "frequency": "único"},
            {"id": 3, "amount": 300, "date": "2026-10-11", "category": "Transporte",
             "description": "Gasolina", "frequency": "único", "paymentMethod": "Efectivo"},
        ],
        "loans": [
            # 100 per installment, 4 paid, next installment Oct 14
            {"id": 7, "name": "Auto", "total": 1200, "paid": 450, "duration": 12,
             "frequency": "mensual", "startDate": "2026-05-14"},
        ],
        "debts": [
            {"id": 1, "name": "Tienda", "amount": 3000, "installments": 6,
             "frequency": "mensual", "startDate": "2026-03-10"},
        ],
        "creditCards": [
            {"id": 4, "bank": "BBVA", "cardName": "Oro", "creditLimit": 30000,
             "currentDebt": 5000, "minPayment": 600, "paymentDate": "2026-01-25"},
        ],
        "goals": [
            {"id": 1, "name": "Viaje", "targetAmount": 10000, "currentAmount": 10000},
            {"id": 2, "name": "Fondo", "targetAmount": 20000, "currentAmount": 6000},
        ],
    }


@pytest.fixture
def sample_state(sample_data) -> FinanceState:
    return FinanceState.from_dict(sample_data)


@pytest.fixture
def fake_repo(sample_state) -> FakeRepository:
    return FakeRepository(sample_state)


@pytest.fixture
def make_repo():
    """Factory for FakeRepository instances around arbitrary states"""
    return FakeRepository
