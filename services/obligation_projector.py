"""
services/obligation_projector.py
--------------------------------
Merges expenses, loan installments and credit-card minimum payments into
one schedule of upcoming PaymentEvents.

Every figure that talks about "payments due" (the upcoming list, the
week/fortnight/month totals, the dashboard loan card) is derived from
`project_payments`, so they cannot disagree with each other.
"""

from datetime import date
from typing import Iterable, Optional

from models.credit_card import CreditCard
from models.expense import Expense
from models.finance_state import FinanceState
from models.frequency import MONTHLY
from models.loan import Loan
from models.payment_event import (
    CARD_EVENT,
    EXPENSE_EVENT,
    LOAN_EVENT,
    CalendarEvent,
    PaymentEvent,
)
from services import amortization
from services.frequency_calendar import add_months, next_occurrence
from utils.logger import get_logger, log_skipped
from utils.parsing import as_date, safe_float

logger = get_logger(__name__)

ONE_OFF_LABEL = "Pago único"
MIN_PAYMENT_LABEL = "Pago mínimo"


def project_payments(state: FinanceState, now: date) -> list[PaymentEvent]:
    """
    Build the schedule of upcoming payments.

    Args:
        state: The finance aggregate (read only).
        now: Reference day; only payments due on or after it are included.

    Returns:
        PaymentEvents sorted by due date. Ties keep insertion order:
        expenses first, then loans, then credit cards.
    """
    now = as_date(now)
    events: list[PaymentEvent] = []
    events.extend(_expense_events(state.expenses, now))
    events.extend(_loan_events(state.loans, now))
    events.extend(_card_events(state.credit_cards, now))
    return sorted(events, key=lambda e: e.due_date)


def total_due(events: Iterable[PaymentEvent]) -> float:
    """Sum of event amounts; non-numeric amounts count as 0."""
    return sum(safe_float(e.amount) for e in events)


# ── Expenses ──────────────────────────────────────────────

def next_expense_date(expense: Expense) -> Optional[date]:
    """
    Next payment date of an expense.

    One-off expenses are due on their date. Recurring ones use the cached
    `next_payment_date` when it is set, otherwise one step after `date`.
    """
    if expense.is_one_off():
        return expense.date
    if expense.next_payment_date is not None:
        return expense.next_payment_date
    if expense.date is None:
        return None
    return next_occurrence(expense.date, expense.frequency)


def _expense_events(expenses: Iterable[Expense], now: date) -> list[PaymentEvent]:
    events = []
    for exp in expenses:
        due = next_expense_date(exp)
        if due is None:
            log_skipped(logger, "expense", exp.id, "date is missing or unparsable")
            continue
        if exp.end_date is not None and due > exp.end_date:
            continue
        if due < now:
            continue
        events.append(PaymentEvent(
            id=exp.id,
            type=EXPENSE_EVENT,
            name=exp.description,
            amount=exp.amount,
            due_date=due,
            payment_type=ONE_OFF_LABEL if exp.is_one_off() else f"Próximo pago ({exp.frequency})",
            category=exp.category,
        ))
    return events


# ── Loans ─────────────────────────────────────────────────

def _loan_events(loans: Iterable[Loan], now: date) -> list[PaymentEvent]:
    events = []
    for loan in loans:
        due = amortization.next_due_date(loan)
        if due is None or due < now:
            continue
        number = amortization.installments_paid(loan) + 1
        count = amortization.total_payments(loan)
        events.append(PaymentEvent(
            id=f"{loan.id}-loan-{number}",
            type=LOAN_EVENT,
            name=loan.name,
            amount=amortization.installment_amount(loan),
            due_date=due,
            payment_type=f"Cuota {number}/{count}",
            category=loan.category,
        ))
    return events


# ── Credit cards ──────────────────────────────────────────

def card_has_payment_due(card: CreditCard) -> bool:
    """A card only generates payments while it carries debt and a minimum."""
    return card.min_payment > 0 and card.current_debt > 0


def card_due_in_month(card: CreditCard, year: int, month: int) -> Optional[date]:
    """
    The card's payment day inside a given month.

    Returns None (and logs) when that day does not exist in the month,
    e.g. day 31 in a 30-day month.
    """
    try:
        return date(year, month, card.payment_date.day)
    except ValueError:
        log_skipped(
            logger, "credit card", card.id,
            f"payment day {card.payment_date.day} does not exist in {year}-{month:02d}",
        )
        return None


def next_card_due_date(card: CreditCard, now: date) -> Optional[date]:
    """
    First occurrence of the card's payment day-of-month on or after `now`
    (and not before the card's own anchor date). Rolls to the next month
    when this month's payment day has already passed.
    """
    if card.payment_date is None:
        log_skipped(logger, "credit card", card.id, "payment date is missing or unparsable")
        return None
    start = max(as_date(now), card.payment_date)
    due = card_due_in_month(card, start.year, start.month)
    if due is None:
        return None
    if due < start:
        following = add_months(start.replace(day=1), 1)
        due = card_due_in_month(card, following.year, following.month)
    return due


def _card_events(cards: Iterable[CreditCard], now: date) -> list[PaymentEvent]:
    events = []
    for card in cards:
        if not card_has_payment_due(card):
            continue
        due = next_card_due_date(card, now)
        if due is None:
            continue
        events.append(PaymentEvent(
            id=f"{card.id}-card",
            type=CARD_EVENT,
            name=card.display_name,
            amount=card.min_payment,
            due_date=due,
            payment_type=MIN_PAYMENT_LABEL,
            category="Deudas",
        ))
    return events


# ── Calendar ──────────────────────────────────────────────

def events_for_day(state: FinanceState, day: date) -> list[CalendarEvent]:
    """
    Monthly obligations whose anchor day-of-month matches `day`.

    Used by the payment calendar: monthly expenses and monthly legacy debts.
    """
    events = []
    for exp in state.expenses:
        if exp.frequency == MONTHLY and exp.date is not None and exp.date.day == day.day:
            events.append(CalendarEvent(type=EXPENSE_EVENT, title=exp.category, amount=exp.amount))
    for debt in state.debts:
        if debt.frequency == MONTHLY and debt.start_date is not None and debt.start_date.day == day.day:
            events.append(CalendarEvent(type="deuda", title=debt.name, amount=debt.installment_amount))
    return events
