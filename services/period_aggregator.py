"""
services/period_aggregator.py
-----------------------------
Buckets obligations into report-ready totals.

    - window_total:           payments due this week / fortnight / month.
    - project_monthly_series: income, loan and card payments and the
                              leftover savings for the coming months.
    - category_breakdown:     expenses per category (pie chart).
    - item_breakdown:         one slice per expense and per loan (pie chart).
    - history_series:         income vs expenses of the last months.

Records with unparsable dates or non-numeric amounts contribute 0; they
never abort an aggregate.
"""

from collections import defaultdict
from datetime import date

from models.expense import DEFAULT_CATEGORY, EXPENSE_CATEGORIES
from models.finance_state import FinanceState
from models.frequency import ALL, FORTNIGHTLY, MONTHLY
from models.payment_event import EVENT_TYPES
from models.projection import HistorySeries, MonthlySeries, PeriodTotal, PieBreakdown
from services import amortization
from services.frequency_calendar import (
    add_months,
    first_of_month,
    last_of_month,
    month_index,
    month_label,
    nth_occurrence,
    periods_per_month,
    window_for,
)
from services.obligation_projector import (
    card_due_in_month,
    card_has_payment_due,
    project_payments,
    total_due,
)
from utils.logger import get_logger, log_skipped
from utils.parsing import as_date

logger = get_logger(__name__)

# Only these income frequencies feed the rolling projection
PROJECTED_INCOME_FREQUENCIES = (MONTHLY, FORTNIGHTLY)


def _money(value: float) -> float:
    return round(value, 2)


def _check_periods(periods: int) -> None:
    if periods <= 0:
        raise ValueError(f"periods must be positive, got {periods}")


def _matches(frequency: str, frequency_filter: str) -> bool:
    return frequency_filter == ALL or frequency == frequency_filter


# ── Window totals ─────────────────────────────────────────

def window_total(state: FinanceState, now: date, filter_key: str) -> PeriodTotal:
    """
    Total of the projected payments due inside the window around `now`.

    Args:
        state: The finance aggregate.
        now: Reference day.
        filter_key: 'week' (ISO week, Monday start), 'fortnight'
            (days 1-15 / 16-end) or 'month'.

    Returns:
        A PeriodTotal with the grand total, a per-type breakdown
        ('gasto', 'préstamo', 'tarjeta') and the events themselves.

    Raises:
        ValueError: For an unknown filter key.
    """
    now = as_date(now)
    start, end = window_for(filter_key, now)
    events = tuple(e for e in project_payments(state, now) if start <= e.due_date <= end)

    by_type = {event_type: 0.0 for event_type in EVENT_TYPES}
    for event in events:
        by_type[event.type] = by_type.get(event.type, 0.0) + total_due([event])

    return PeriodTotal(
        filter_key=filter_key,
        start=start,
        end=end,
        total=_money(total_due(events)),
        by_type={k: _money(v) for k, v in by_type.items()},
        events=events,
    )


# ── Rolling monthly projection ────────────────────────────

def project_monthly_series(state: FinanceState, now: date, periods: int = 6) -> MonthlySeries:
    """
    Project the next `periods` calendar months, starting with the current one.

    income:        monthly and fortnightly incomes active in each month,
                   scaled by the fixed-ratio table (fortnightly counts twice).
    loan_payments: every unpaid installment due in the month.
    card_payments: the minimum payment of each indebted card, once per
                   month from its anchor date on.
    savings:       max(0, income - (loan_payments + card_payments)).
    """
    _check_periods(periods)
    window_start = first_of_month(as_date(now))
    months = [add_months(window_start, i) for i in range(periods)]
    window_end = last_of_month(months[-1])

    income = [0.0] * periods
    loans = [0.0] * periods
    cards = [0.0] * periods

    for inc in state.incomes:
        if inc.frequency not in PROJECTED_INCOME_FREQUENCIES:
            continue
        if inc.date is None:
            log_skipped(logger, "income", inc.id, "date is missing or unparsable")
            continue
        per_month = inc.amount * periods_per_month(inc.frequency)
        for i, month_start in enumerate(months):
            started = inc.date <= last_of_month(month_start)
            not_ended = inc.end_date is None or inc.end_date >= month_start
            if started and not_ended:
                income[i] += per_month

    for loan in state.loans:
        dates = amortization.installment_dates_in_range(loan, window_start, window_end)
        if not dates:
            continue
        amount = amortization.installment_amount(loan)
        for due in dates:
            loans[month_index(due, window_start)] += amount

    for card in state.credit_cards:
        if not card_has_payment_due(card):
            continue
        if card.payment_date is None:
            log_skipped(logger, "credit card", card.id, "payment date is missing or unparsable")
            continue
        for i, month_start in enumerate(months):
            if last_of_month(month_start) < card.payment_date:
                continue
            due = card_due_in_month(card, month_start.year, month_start.month)
            if due is not None and due >= card.payment_date:
                cards[i] += card.min_payment

    savings = [max(0.0, income[i] - (loans[i] + cards[i])) for i in range(periods)]

    return MonthlySeries(
        labels=tuple(month_label(m) for m in months),
        income=tuple(_money(v) for v in income),
        loan_payments=tuple(_money(v) for v in loans),
        card_payments=tuple(_money(v) for v in cards),
        savings=tuple(_money(v) for v in savings),
    )


# ── Pie breakdowns ────────────────────────────────────────

def category_breakdown(state: FinanceState, frequency_filter: str = ALL) -> PieBreakdown:
    """
    Expense amounts per category for one frequency ('general' = all).

    Unknown category strings fold into "Otros". Amounts are summed with
    their sign (refunds recorded as negative expenses offset their
    category), and every category with a non-zero total is emitted, in
    the fixed category order.
    """
    totals = {category: 0.0 for category in EXPENSE_CATEGORIES}
    for exp in state.expenses:
        if not _matches(exp.frequency, frequency_filter):
            continue
        category = exp.category if exp.category in totals else DEFAULT_CATEGORY
        totals[category] += exp.amount

    slices = [(category, _money(total)) for category, total in totals.items() if _money(total) != 0]
    if not slices:
        return PieBreakdown.empty()
    return PieBreakdown(
        labels=tuple(label for label, _ in slices),
        values=tuple(value for _, value in slices),
    )


def item_breakdown(state: FinanceState, frequency_filter: str = ALL) -> PieBreakdown:
    """One slice per expense and one per loan installment amount."""
    labels, values = [], []
    for exp in state.expenses:
        if _matches(exp.frequency, frequency_filter):
            labels.append(f"{exp.category} – {exp.description}")
            values.append(_money(exp.amount))

    for loan in state.loans:
        if not _matches(loan.frequency, frequency_filter):
            continue
        count = amortization.chart_installment_count(loan.duration, loan.frequency)
        labels.append(f"{loan.name} (Préstamo)")
        values.append(_money(loan.total / count) if count > 0 else 0.0)

    if not labels:
        return PieBreakdown.empty()
    return PieBreakdown(labels=tuple(labels), values=tuple(values))


# ── History ───────────────────────────────────────────────

def history_series(state: FinanceState, now: date, periods: int = 6) -> HistorySeries:
    """
    Income vs expenses of the last `periods` months, ending with the
    current one. Incomes and expenses count in the month of their date;
    loans add every installment of their chart schedule (first installment
    on the start date).
    """
    _check_periods(periods)
    current = first_of_month(as_date(now))
    origin = add_months(current, -(periods - 1))
    income = defaultdict(float)
    expenses = defaultdict(float)

    def bucket(day: date) -> int | None:
        idx = month_index(day, origin)
        return idx if 0 <= idx < periods else None

    for inc in state.incomes:
        idx = bucket(inc.date) if inc.date else None
        if idx is not None:
            income[idx] += inc.amount

    for exp in state.expenses:
        idx = bucket(exp.date) if exp.date else None
        if idx is not None:
            expenses[idx] += exp.amount

    for loan in state.loans:
        if loan.start_date is None:
            log_skipped(logger, "loan", loan.id, "start date is missing or unparsable")
            continue
        count = amortization.chart_installment_count(loan.duration, loan.frequency)
        if count <= 0:
            log_skipped(logger, "loan", loan.id, "duration must be positive")
            continue
        amount = loan.total / count
        for i in range(count):
            due = nth_occurrence(loan.start_date, loan.frequency, i)
            if month_index(due, origin) >= periods:
                break
            idx = bucket(due)
            if idx is not None:
                expenses[idx] += amount

    return HistorySeries(
        labels=tuple(month_label(add_months(origin, i)) for i in range(periods)),
        income=tuple(_money(income[i]) for i in range(periods)),
        expenses=tuple(_money(expenses[i]) for i in range(periods)),
    )
