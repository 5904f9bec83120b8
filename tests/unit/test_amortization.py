"""Unit tests for loan installment tracking"""

import logging
from dataclasses import replace
from datetime import date

import pytest

from models.frequency import BIMONTHLY, MONTHLY, WEEKLY
from models.loan import Loan
from services import amortization


@pytest.fixture
def loan() -> Loan:
    return Loan(id=1, name="Laptop", total=1200, duration=12,
                frequency=MONTHLY, start_date=date(2026, 1, 15))


def test_installment_figures_before_and_after_payments(loan):
    """Test installment amount, installments paid and remaining balance"""
    assert amortization.installment_amount(loan) == 100
    assert amortization.installments_paid(loan) == 0
    assert amortization.remaining(loan) == 1200

    partly_paid = replace(loan, paid=450)
    assert amortization.installments_paid(partly_paid) == 4
    assert amortization.remaining(partly_paid) == 750
    assert amortization.remaining_installments(partly_paid) == 8


def test_total_payments_scaling():
    """Test duration scaling per frequency"""
    weekly = Loan(id=1, name="a", total=1200, duration=3, frequency=WEEKLY)
    bimonthly = Loan(id=2, name="b", total=1200, duration=6, frequency=BIMONTHLY)

    assert amortization.total_payments(weekly) == 12
    assert amortization.total_payments(bimonthly) == 6
    assert amortization.chart_installment_count(6, BIMONTHLY) == 3
    assert amortization.chart_installment_count(7, BIMONTHLY) == 4
    assert amortization.chart_installment_count(3, WEEKLY) == 12


def test_installments_paid_tolerates_repeating_decimals():
    """Test two thirds of a three-installment loan counts as two installments"""
    loan = Loan(id=1, name="x", total=1000, duration=3, frequency=MONTHLY,
                start_date=date(2026, 1, 1), paid=1000 / 3 * 2)
    assert amortization.installments_paid(loan) == 2


def test_next_due_date_from_start(loan):
    """Test the next installment falls paid+1 steps after the start date"""
    assert amortization.next_due_date(loan) == date(2026, 2, 15)
    assert amortization.next_due_date(replace(loan, paid=450)) == date(2026, 6, 15)


def test_next_due_date_from_last_payment(loan):
    """Test a recorded payment date becomes the schedule anchor"""
    paid = replace(loan, paid=300, last_payment_date=date(2026, 3, 3))
    assert amortization.next_due_date(paid) == date(2026, 4, 3)


def test_settled_loan_has_no_next_due_date(loan):
    """Test settled loans drop out of every schedule"""
    settled = replace(loan, paid=1200)

    assert amortization.is_settled(settled)
    assert amortization.next_due_date(settled) is None
    assert amortization.installment_dates(settled) == []
    assert amortization.installment_dates_in_range(settled, date(2026, 1, 1), date(2027, 12, 31)) == []


def test_zero_duration_is_guarded(caplog):
    """Test zero-duration loans yield zero amounts and are logged, not raised"""
    broken = Loan(id=9, name="Roto", total=1000, duration=0, start_date=date(2026, 1, 1))

    with caplog.at_level(logging.WARNING):
        assert amortization.installment_amount(broken) == 0
        assert amortization.installments_paid(broken) == 0
        assert amortization.next_due_date(broken) is None

    assert "Skipping loan #9: duration must be positive" in caplog.text


def test_missing_start_date_is_invalid():
    """Test loans without a start date fail validation"""
    loan = Loan(id=3, name="x", total=500, duration=5)
    assert amortization.validation_error(loan) == "start date is missing or unparsable"
    assert not amortization.is_valid(loan)


def test_installment_dates_continue_after_paid(loan):
    """Test the listing covers every unpaid installment, month-end clamped"""
    month_end = Loan(id=2, name="x", total=300, duration=3, frequency=MONTHLY,
                     start_date=date(2026, 1, 31), paid=100)
    assert amortization.installment_dates(month_end) == [date(2026, 3, 31), date(2026, 4, 30)]
    assert len(amortization.installment_dates(loan)) == 12


def test_installment_dates_in_range(loan):
    """Test only unpaid installments inside the window are returned"""
    dates = amortization.installment_dates_in_range(loan, date(2026, 3, 1), date(2026, 5, 31))
    assert dates == [date(2026, 3, 15), date(2026, 4, 15), date(2026, 5, 15)]

    # the 13th step after the start is past the last installment
    tail = amortization.installment_dates_in_range(loan, date(2026, 12, 1), date(2027, 3, 31))
    assert tail == [date(2026, 12, 15), date(2027, 1, 15)]
