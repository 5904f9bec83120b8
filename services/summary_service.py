"""
services/summary_service.py
---------------------------
Figures for the dashboard summary cards: income, expenses and balance of
the current month, loan installments due this month and goal progress.
"""

from datetime import date

from models.finance_state import FinanceState
from models.frequency import ONE_OFF
from models.payment_event import LOAN_EVENT
from models.projection import MonthSummary
from services.frequency_calendar import MONTH, month_bounds, periods_per_month
from services.period_aggregator import window_total
from utils.parsing import as_date


def _active_in_month(start: date | None, end: date | None, month_start: date, month_end: date) -> bool:
    if start is None:
        return False
    return start <= month_end and (end is None or end >= month_start)


def _in_month(day: date | None, month_start: date) -> bool:
    return day is not None and (day.year, day.month) == (month_start.year, month_start.month)


def month_income(state: FinanceState, now: date) -> float:
    """
    Income of the month containing `now`.

    One-off incomes count when dated in the month; recurring incomes count
    once, at face value, when active at some point of the month.
    """
    month_start, month_end = month_bounds(as_date(now))
    total = 0.0
    for inc in state.incomes:
        if inc.frequency == ONE_OFF:
            if _in_month(inc.date, month_start):
                total += inc.amount
        elif _active_in_month(inc.date, inc.end_date, month_start, month_end):
            total += inc.amount
    return total


def month_expenses(state: FinanceState, now: date) -> float:
    """
    Expenses of the month containing `now`; recurring expenses are scaled
    by the fixed occurrences-per-month table (weekly x4, annual x1/12...).
    """
    month_start, month_end = month_bounds(as_date(now))
    total = 0.0
    for exp in state.expenses:
        if exp.is_one_off():
            if _in_month(exp.date, month_start):
                total += exp.amount
        elif _active_in_month(exp.date, exp.end_date, month_start, month_end):
            total += exp.amount * periods_per_month(exp.frequency)
    return total


def month_summary(state: FinanceState, now: date) -> MonthSummary:
    """Build every summary card for the month containing `now`."""
    now = as_date(now)
    goals = state.goals
    progress = [goal.progress for goal in goals]
    average = round(sum(progress) / len(progress)) if progress else 0

    return MonthSummary(
        income=round(month_income(state, now), 2),
        expenses=round(month_expenses(state, now), 2),
        loan_payments=window_total(state, now, MONTH).type_total(LOAN_EVENT),
        goals_completed=sum(1 for goal in goals if goal.is_reached()),
        goals_total=len(goals),
        average_goal_progress=average,
    )
