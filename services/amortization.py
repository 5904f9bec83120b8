"""
services/amortization.py
------------------------
Installment tracking for loans.

A loan is described by its total, a duration and a frequency; `paid` is
the cumulative amount already paid. Everything else (installment size,
installments paid, remaining balance, next due date) is derived here.

Two scaling tables exist on purpose and must not be merged:
    - AMORTIZATION_PERIODS_PER_DURATION drives every balance/schedule
      computation (duration is already expressed in installments for the
      bimonthly and longer frequencies).
    - CHART_INSTALLMENT_DIVISORS is what the chart views have always used
      for the same frequencies (duration in months, divided and rounded up).
"""

import math
from datetime import date
from typing import Optional

from models.frequency import (
    ANNUAL,
    BIMONTHLY,
    FORTNIGHTLY,
    MONTHLY,
    QUARTERLY,
    SEMIANNUAL,
    WEEKLY,
)
from models.loan import Loan
from services.frequency_calendar import nth_occurrence, occurrences_in_range
from utils.logger import get_logger, log_skipped

logger = get_logger(__name__)

AMORTIZATION_PERIODS_PER_DURATION = {
    WEEKLY: 4,
    FORTNIGHTLY: 2,
    MONTHLY: 1,
}

CHART_INSTALLMENT_DIVISORS = {
    BIMONTHLY: 2,
    QUARTERLY: 3,
    SEMIANNUAL: 6,
    ANNUAL: 12,
}

# Tolerance for paid / installment ratios such as 1000 / (1000 / 3)
_RATIO_EPSILON = 1e-9


def total_payments(loan: Loan) -> int:
    """Number of installments the loan is split into."""
    return max(0, loan.duration) * AMORTIZATION_PERIODS_PER_DURATION.get(loan.frequency, 1)


def chart_installment_count(duration: int, frequency: str) -> int:
    """Installment count as computed by the chart views."""
    duration = max(0, duration)
    if frequency in CHART_INSTALLMENT_DIVISORS:
        return math.ceil(duration / CHART_INSTALLMENT_DIVISORS[frequency])
    return duration * AMORTIZATION_PERIODS_PER_DURATION.get(frequency, 1)


def installment_amount(loan: Loan) -> float:
    """Size of one installment; 0 when the loan has no installments."""
    count = total_payments(loan)
    return loan.total / count if count > 0 else 0.0


def installments_paid(loan: Loan) -> int:
    """Whole installments covered by the cumulative paid amount."""
    amount = installment_amount(loan)
    if amount <= 0 or loan.paid <= 0:
        return 0
    return math.floor(loan.paid / amount + _RATIO_EPSILON)


def remaining(loan: Loan) -> float:
    """Outstanding balance (total - paid)."""
    return loan.total - loan.paid


def is_settled(loan: Loan) -> bool:
    """True once every installment is covered or nothing is owed."""
    return installments_paid(loan) >= total_payments(loan) or remaining(loan) <= 0


def remaining_installments(loan: Loan) -> int:
    return max(0, total_payments(loan) - installments_paid(loan))


def validation_error(loan: Loan) -> Optional[str]:
    """Reason a loan cannot be projected, or None if it is usable."""
    if loan.total <= 0:
        return "total must be positive"
    if loan.duration <= 0:
        return "duration must be positive"
    if loan.start_date is None:
        return "start date is missing or unparsable"
    return None


def is_valid(loan: Loan) -> bool:
    """Check a loan and log it when it has to be left out."""
    reason = validation_error(loan)
    if reason:
        log_skipped(logger, "loan", loan.id, reason)
        return False
    if loan.paid > loan.total:
        logger.warning(f"Loan #{loan.id} has paid {loan.paid:.2f} above its total {loan.total:.2f}")
    return True


def _schedule_anchor(loan: Loan) -> tuple[date, int]:
    """
    Anchor date and the step offset of the first unpaid installment.

    Installment k (1-based) falls k steps after the start date. Once a
    payment date has been recorded, the schedule continues from it instead.
    """
    if loan.last_payment_date is not None:
        return loan.last_payment_date, 0
    return loan.start_date, installments_paid(loan)


def next_due_date(loan: Loan) -> Optional[date]:
    """
    Due date of the next unpaid installment.

    Returns None for settled loans and for loans that fail validation.
    """
    if not is_valid(loan) or is_settled(loan):
        return None
    anchor, offset = _schedule_anchor(loan)
    return nth_occurrence(anchor, loan.frequency, offset + 1)


def installment_dates(loan: Loan) -> list[date]:
    """Due dates of every unpaid installment, ascending."""
    if not is_valid(loan) or is_settled(loan):
        return []
    anchor, offset = _schedule_anchor(loan)
    return [
        nth_occurrence(anchor, loan.frequency, offset + k)
        for k in range(1, remaining_installments(loan) + 1)
    ]


def installment_dates_in_range(loan: Loan, range_start: date, range_end: date) -> list[date]:
    """Unpaid installment due dates falling inside [range_start, range_end]."""
    if not is_valid(loan) or is_settled(loan):
        return []
    anchor, offset = _schedule_anchor(loan)
    first_due = nth_occurrence(anchor, loan.frequency, offset + 1)
    last_due = nth_occurrence(anchor, loan.frequency, offset + remaining_installments(loan))
    return occurrences_in_range(
        anchor, loan.frequency, last_due, max(range_start, first_due), range_end
    )
