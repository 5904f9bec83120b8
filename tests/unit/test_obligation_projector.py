"""Unit tests for the upcoming payment schedule"""

import logging
from datetime import date

from models.credit_card import CreditCard
from models.finance_state import FinanceState
from models.payment_event import CARD_EVENT, EXPENSE_EVENT, LOAN_EVENT
from services.obligation_projector import (
    MIN_PAYMENT_LABEL,
    ONE_OFF_LABEL,
    events_for_day,
    next_card_due_date,
    project_payments,
    total_due,
)


def _card(payment_date: str, **overrides) -> CreditCard:
    data = {"id": 4, "bank": "BBVA", "cardName": "Oro", "currentDebt": 5000,
            "minPayment": 600, "paymentDate": payment_date}
    data.update(overrides)
    return CreditCard.from_dict(data)


def test_schedule_is_sorted_by_due_date(sample_state, now):
    """Test events come out ascending across every source"""
    events = project_payments(sample_state, now)

    assert [e.due_date for e in events] == [
        date(2026, 10, 11), date(2026, 10, 12), date(2026, 10, 14),
        date(2026, 10, 20), date(2026, 10, 25),
    ]
    assert [e.type for e in events] == [
        EXPENSE_EVENT, EXPENSE_EVENT, LOAN_EVENT, EXPENSE_EVENT, CARD_EVENT,
    ]
    assert total_due(events) == 9450


def test_ties_keep_expense_loan_card_order():
    """Test events due the same day keep insertion order"""
    state = FinanceState.from_dict({
        "creditCards": [{"id": 1, "bank": "B", "cardName": "C", "currentDebt": 100,
                         "minPayment": 50, "paymentDate": "2026-01-15"}],
        "loans": [{"id": 2, "name": "L", "total": 600, "duration": 6,
                   "startDate": "2026-10-15"}],
        "expenses": [{"id": 3, "amount": 80, "date": "2026-11-15",
                      "description": "Seguro", "frequency": "único"}],
    })
    events = project_payments(state, date(2026, 11, 10))

    assert {e.due_date for e in events} == {date(2026, 11, 15)}
    assert [e.type for e in events] == [EXPENSE_EVENT, LOAN_EVENT, CARD_EVENT]


def test_loan_event_labels(sample_state, now):
    """Test loan events carry the installment number"""
    loan_event = next(e for e in project_payments(sample_state, now) if e.type == LOAN_EVENT)

    assert loan_event.id == "7-loan-5"
    assert loan_event.payment_type == "Cuota 5/12"
    assert loan_event.amount == 100


def test_one_off_expenses_due_today_or_later():
    """Test past one-off expenses are dropped and today's are kept"""
    state = FinanceState.from_dict({"expenses": [
        {"id": 1, "amount": 10, "date": "2026-10-09", "frequency": "único"},
        {"id": 2, "amount": 20, "date": "2026-10-10", "frequency": "único"},
    ]})
    events = project_payments(state, date(2026, 10, 10))

    assert [e.id for e in events] == [2]
    assert events[0].payment_type == ONE_OFF_LABEL


def test_recurring_expense_next_payment():
    """Test recurring expenses step once from their date or use the cached next date"""
    state = FinanceState.from_dict({"expenses": [
        {"id": 1, "amount": 100, "date": "2026-10-03", "frequency": "semanal"},
        {"id": 2, "amount": 200, "date": "2026-09-01", "frequency": "mensual",
         "nextPaymentDate": "2026-10-30"},
        {"id": 3, "amount": 300, "date": "2026-09-15", "frequency": "mensual",
         "endDate": "2026-10-01"},
    ]})
    events = project_payments(state, date(2026, 10, 10))

    assert [(e.id, e.due_date) for e in events] == [
        (1, date(2026, 10, 10)),
        (2, date(2026, 10, 30)),
    ]
    assert events[0].payment_type == "Próximo pago (semanal)"


def test_expense_without_date_is_skipped(caplog):
    """Test expenses with unparsable dates are logged and left out"""
    state = FinanceState.from_dict({"expenses": [
        {"id": 5, "amount": 10, "date": "mañana", "frequency": "único"},
    ]})
    with caplog.at_level(logging.WARNING):
        assert project_payments(state, date(2026, 10, 10)) == []
    assert "Skipping expense #5" in caplog.text


def test_card_rolls_over_after_payment_day():
    """Test a card paying on the 5th rolls to next month once the 5th has passed"""
    card = _card("2026-01-05")

    assert next_card_due_date(card, date(2026, 10, 10)) == date(2026, 11, 5)
    assert next_card_due_date(card, date(2026, 10, 3)) == date(2026, 10, 5)


def test_card_payment_day_missing_from_month_is_skipped(caplog):
    """Test day 31 in a 30-day month is reported instead of building a bad date"""
    card = _card("2026-01-31")

    with caplog.at_level(logging.WARNING):
        assert next_card_due_date(card, date(2026, 11, 10)) is None
    assert "payment day 31 does not exist in 2026-11" in caplog.text
    assert next_card_due_date(card, date(2026, 10, 10)) == date(2026, 10, 31)


def test_card_events_need_debt_and_minimum():
    """Test cards without debt or minimum payment generate nothing"""
    state = FinanceState(credit_cards=(
        _card("2026-01-20"),
        _card("2026-01-21", id=5, currentDebt=0),
        _card("2026-01-22", id=6, minPayment=0),
    ))
    events = project_payments(state, date(2026, 10, 10))

    assert [e.id for e in events] == ["4-card"]
    assert events[0].payment_type == MIN_PAYMENT_LABEL
    assert events[0].name == "Oro (BBVA)"


def test_card_does_not_pay_before_its_anchor():
    """Test a card anchored in the future starts paying on its anchor"""
    card = _card("2026-12-05")
    assert next_card_due_date(card, date(2026, 10, 10)) == date(2026, 12, 5)


def test_events_for_day(sample_state):
    """Test calendar events match monthly items by day of month"""
    assert events_for_day(sample_state, date(2026, 11, 20))[0].title == "Hogar"

    debt_events = events_for_day(sample_state, date(2026, 11, 10))
    assert len(debt_events) == 1
    assert debt_events[0].title == "Tienda"
    assert debt_events[0].amount == 500

    assert events_for_day(sample_state, date(2026, 11, 1)) == []
