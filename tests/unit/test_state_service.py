"""Unit tests for copy-on-write state management"""

import pytest

from models.finance_state import FinanceState
from services.state_service import FinanceStateService


def test_add_record_is_copy_on_write(fake_repo, sample_state):
    """Test adding builds a new versioned state and saves it"""
    service = FinanceStateService(fake_repo)
    updated = service.add_record("incomes", {"id": 3, "amount": 800, "date": "2026-10-01",
                                             "frequency": "único", "source": "Venta"})

    assert updated.version == sample_state.version + 1
    assert len(updated.incomes) == 3
    assert len(sample_state.incomes) == 2
    assert fake_repo.saved == [updated]
    assert service.state is updated


def test_loan_paying_more_than_total_is_rejected(fake_repo):
    """Test invalid loans are refused before anything is saved"""
    service = FinanceStateService(fake_repo)

    with pytest.raises(ValueError):
        service.add_record("loans", {"id": 8, "name": "x", "total": 100, "paid": 150,
                                     "duration": 2, "startDate": "2026-01-01"})
    assert fake_repo.saved == []


def test_unknown_collection_is_rejected(fake_repo):
    """Test unknown collection names raise"""
    with pytest.raises(ValueError):
        FinanceStateService(fake_repo).add_record("wallets", {"id": 1})


def test_update_record(fake_repo):
    """Test updating replaces the record with the same id"""
    service = FinanceStateService(fake_repo)
    updated = service.update_record("goals", {"id": 2, "name": "Fondo",
                                              "targetAmount": 20000, "currentAmount": 9000})

    assert [g.current_amount for g in updated.goals] == [10000, 9000]
    assert len(fake_repo.saved) == 1


def test_update_missing_record_keeps_state(fake_repo, sample_state):
    """Test updating an unknown id changes nothing"""
    service = FinanceStateService(fake_repo)

    assert service.update_record("goals", {"id": 99, "name": "x"}) is sample_state
    assert fake_repo.saved == []


def test_delete_record(fake_repo):
    """Test deleting by id reports whether something was removed"""
    service = FinanceStateService(fake_repo)

    assert service.delete_record("expenses", 2) is True
    assert [e.id for e in service.state.expenses] == [1, 3]
    assert service.delete_record("expenses", 2) is False
    assert len(fake_repo.saved) == 1


def test_replace_keeps_versions_increasing(make_repo):
    """Test a replacement state never reuses an older version"""
    repo = make_repo(FinanceState(version=5))
    service = FinanceStateService(repo)

    replaced = service.replace(FinanceState.from_dict({"goals": [{"id": 1, "name": "x"}]}))

    assert replaced.version == 6
    assert len(replaced.goals) == 1


def test_next_id(fake_repo, make_repo):
    """Test ids continue after the largest numeric id"""
    assert FinanceStateService(fake_repo).next_id("expenses") == 4
    assert FinanceStateService(make_repo()).next_id("goals") == 1

    mixed = FinanceState.from_dict({"goals": [{"id": "a1"}, {"id": 6}]})
    assert FinanceStateService(make_repo(mixed)).next_id("goals") == 7
