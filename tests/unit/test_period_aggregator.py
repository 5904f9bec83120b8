"""Unit tests for window totals, rolling projections and breakdowns"""

import logging

import pytest

from models.finance_state import FinanceState
from models.frequency import ALL, ANNUAL, MONTHLY
from models.payment_event import CARD_EVENT, EXPENSE_EVENT, LOAN_EVENT
from models.projection import NO_DATA_LABEL
from services.frequency_calendar import FORTNIGHT, MONTH, WEEK, window_for
from services.obligation_projector import project_payments
from services.period_aggregator import (
    category_breakdown,
    history_series,
    item_breakdown,
    project_monthly_series,
    window_total,
)


def test_window_totals(sample_state, now):
    """Test week, fortnight and month totals split by type"""
    week = window_total(sample_state, now, WEEK)
    assert week.total == 300
    assert week.type_total(EXPENSE_EVENT) == 300

    fortnight = window_total(sample_state, now, FORTNIGHT)
    assert fortnight.total == 850
    assert fortnight.type_total(EXPENSE_EVENT) == 750
    assert fortnight.type_total(LOAN_EVENT) == 100

    month = window_total(sample_state, now, MONTH)
    assert month.total == 9450
    assert month.by_type == {EXPENSE_EVENT: 8750, LOAN_EVENT: 100, CARD_EVENT: 600}
    assert len(month.events) == 5


def test_month_loan_total_matches_schedule(sample_state, now):
    """Test the month loan total equals the loan events of the schedule due this month"""
    start, end = window_for(MONTH, now)
    scheduled = sum(
        e.amount for e in project_payments(sample_state, now)
        if e.type == LOAN_EVENT and start <= e.due_date <= end
    )
    assert round(scheduled, 2) == window_total(sample_state, now, MONTH).type_total(LOAN_EVENT)


def test_unknown_filter_key(sample_state, now):
    """Test an unknown window key is rejected"""
    with pytest.raises(ValueError):
        window_total(sample_state, now, "quarter")


def test_monthly_series(sample_state, now):
    """Test income, loan, card and savings buckets for six months"""
    series = project_monthly_series(sample_state, now, 6)

    assert series.labels == ("oct 26", "nov 26", "dic 26", "ene 27", "feb 27", "mar 27")
    assert series.income == (20000,) * 6
    assert series.loan_payments == (100,) * 6
    assert series.card_payments == (600,) * 6
    assert series.savings == (19300,) * 6


def test_monthly_series_income_rules(now):
    """Test fortnightly incomes count twice and other frequencies are not projected"""
    state = FinanceState.from_dict({"incomes": [
        {"id": 1, "amount": 1000, "date": "2026-01-01", "frequency": "quincenal"},
        {"id": 2, "amount": 500, "date": "2026-01-01", "frequency": "semanal"},
        {"id": 3, "amount": 700, "date": "2026-12-10", "frequency": "mensual",
         "endDate": "2027-01-31"},
    ]})
    series = project_monthly_series(state, now, 6)

    assert series.income == (2000, 2000, 2700, 2700, 2000, 2000)


def test_monthly_series_savings_never_negative(now):
    """Test savings floor at zero when payments exceed income"""
    state = FinanceState.from_dict({
        "incomes": [{"id": 1, "amount": 100, "date": "2026-01-01", "frequency": "mensual"}],
        "creditCards": [{"id": 1, "bank": "B", "cardName": "C", "currentDebt": 900,
                         "minPayment": 300, "paymentDate": "2026-11-05"}],
    })
    series = project_monthly_series(state, now, 3)

    assert series.card_payments == (0, 300, 300)
    assert series.savings == (100, 0, 0)


def test_monthly_series_card_on_day_31(now, caplog):
    """Test a card due on the 31st skips months without that day and logs each one"""
    state = FinanceState.from_dict({"creditCards": [
        {"id": 9, "bank": "Banorte", "cardName": "Clásica", "currentDebt": 4000,
         "minPayment": 600, "paymentDate": "2026-01-31"},
    ]})

    with caplog.at_level(logging.WARNING):
        series = project_monthly_series(state, now, 6)

    assert series.card_payments == (600, 0, 600, 600, 0, 600)
    assert "Skipping credit card #9: payment day 31 does not exist in 2026-11" in caplog.text
    assert "Skipping credit card #9: payment day 31 does not exist in 2027-02" in caplog.text


def test_monthly_series_is_idempotent(sample_state, now):
    """Test repeated projections are identical"""
    first = project_monthly_series(sample_state, now, 6)
    second = project_monthly_series(sample_state, now, 6)

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_monthly_series_rejects_non_positive_periods(sample_state, now):
    """Test periods must be positive"""
    with pytest.raises(ValueError):
        project_monthly_series(sample_state, now, 0)


def test_malformed_loan_is_isolated(now, caplog):
    """Test a zero-duration loan contributes nothing while valid loans still count"""
    state = FinanceState.from_dict({"loans": [
        {"id": 1, "name": "A", "total": 1200, "duration": 12, "startDate": "2026-09-12"},
        {"id": 2, "name": "Roto", "total": 5000, "duration": 0, "startDate": "2026-09-01"},
        {"id": 3, "name": "B", "total": 3000, "duration": 6, "startDate": "2026-09-20"},
    ]})

    with caplog.at_level(logging.WARNING):
        month = window_total(state, now, MONTH)
        series = project_monthly_series(state, now, 2)

    assert month.type_total(LOAN_EVENT) == 600
    assert series.loan_payments == (600, 600)
    assert "Skipping loan #2: duration must be positive" in caplog.text


def test_chart_data_shape(sample_state, now):
    """Test the bar chart payload shape"""
    data = project_monthly_series(sample_state, now, 2).to_chart_data()

    assert data["labels"] == ["oct 26", "nov 26"]
    assert [d["label"] for d in data["datasets"]] == ["Ingresos", "Préstamos", "Tarjetas", "Ahorro"]
    assert data["datasets"][3]["data"] == [19300, 19300]


def test_category_breakdown(sample_state):
    """Test per-category totals in the fixed category order"""
    pie = category_breakdown(sample_state, ALL)

    assert pie.labels == ("Transporte", "Alimentación", "Hogar")
    assert pie.values == (300, 450, 8000)
    assert pie.total == 8750

    monthly = category_breakdown(sample_state, MONTHLY)
    assert monthly.to_chart_data() == {"labels": ["Hogar"], "values": [8000]}


def test_category_breakdown_folds_unknown_categories():
    """Test unknown categories are summed under Otros"""
    state = FinanceState.from_dict({"expenses": [
        {"id": 1, "amount": 50, "date": "2026-10-01", "category": "Mascotas"},
        {"id": 2, "amount": 25, "date": "2026-10-02", "category": "Otros"},
        {"id": 3, "amount": "n/a", "date": "2026-10-02", "category": "Salud"},
    ]})
    pie = category_breakdown(state)

    assert pie.labels == ("Otros",)
    assert pie.values == (75,)


def test_category_breakdown_without_data(sample_state):
    """Test an empty filter yields exactly one placeholder slice"""
    pie = category_breakdown(sample_state, ANNUAL)

    assert pie.labels == (NO_DATA_LABEL,)
    assert pie.values == (1,)
    assert pie.is_placeholder
    assert pie.total == 0


def test_category_total_never_exceeds_inputs(sample_state):
    """Test the breakdown total is bounded by the filtered expense amounts"""
    refunds = FinanceState.from_dict({"expenses": [
        {"id": 1, "amount": 100, "date": "2026-10-01", "category": "Hogar"},
        {"id": 2, "amount": -60, "date": "2026-10-02", "category": "Hogar"},
        {"id": 3, "amount": -60, "date": "2026-10-03", "category": "Salud"},
    ]})
    for state in (sample_state, refunds):
        for frequency in (ALL, MONTHLY, "único", ANNUAL):
            pie = category_breakdown(state, frequency)
            inputs = sum(
                e.amount for e in state.expenses
                if frequency == ALL or e.frequency == frequency
            )
            assert pie.total <= inputs


def test_category_breakdown_nets_refunds():
    """Test negative expenses offset their category and negative totals are kept"""
    state = FinanceState.from_dict({"expenses": [
        {"id": 1, "amount": 100, "date": "2026-10-01", "category": "Hogar"},
        {"id": 2, "amount": -60, "date": "2026-10-02", "category": "Hogar"},
        {"id": 3, "amount": -60, "date": "2026-10-03", "category": "Salud"},
        {"id": 4, "amount": 30, "date": "2026-10-04", "category": "Ropa"},
        {"id": 5, "amount": -30, "date": "2026-10-05", "category": "Ropa"},
    ]})
    pie = category_breakdown(state)

    assert pie.labels == ("Salud", "Hogar")
    assert pie.values == (-60, 40)
    assert pie.total == -20
    assert not pie.is_placeholder


def test_item_breakdown(sample_state):
    """Test one slice per expense plus one per loan"""
    pie = item_breakdown(sample_state, ALL)

    assert pie.labels == (
        "Hogar – Renta", "Alimentación – Súper", "Transporte – Gasolina", "Auto (Préstamo)",
    )
    assert pie.values == (8000, 450, 300, 100)
    assert item_breakdown(FinanceState()).is_placeholder


def test_history_series(sample_state, now):
    """Test past months bucket incomes, expenses and loan installments"""
    history = history_series(sample_state, now, 6)

    assert history.labels == ("may 26", "jun 26", "jul 26", "ago 26", "sep 26", "oct 26")
    assert history.income == (0, 0, 0, 0, 0, 5000)
    assert history.expenses == (100, 100, 100, 100, 8100, 850)


def test_history_series_logs_zero_duration_loan(now, caplog):
    """Test a loan with no chart installments is skipped with a warning"""
    state = FinanceState.from_dict({"loans": [
        {"id": 5, "name": "Roto", "total": 5000, "duration": 0, "startDate": "2026-09-01"},
    ]})

    with caplog.at_level(logging.WARNING):
        history = history_series(state, now, 3)

    assert history.expenses == (0, 0, 0)
    assert "Skipping loan #5: duration must be positive" in caplog.text
