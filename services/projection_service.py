"""
services/projection_service.py
------------------------------
Facade over the projection core for the presentation layer.

Loads the current state from the repository and memoizes every result on
(state fingerprint, operation, arguments). The fingerprint is a digest of
the whole stored document, so any write to it, from this bot or from the
web client, invalidates the cache. Results are immutable, so a cached
value can be handed out repeatedly.
"""

import hashlib
import json
from datetime import date
from typing import Callable

from config import PROJECTION_PERIODS
from models.finance_state import FinanceState
from models.frequency import ALL
from models.payment_event import PaymentEvent, ReportRow
from models.projection import HistorySeries, MonthlySeries, MonthSummary, PeriodTotal, PieBreakdown
from repositories.finance_repo import FinanceRepository
from services import obligation_projector, period_aggregator, summary_service
from services.export_service import to_report_rows
from utils.logger import get_logger
from utils.parsing import as_date

logger = get_logger(__name__)

# Entries kept for one fingerprint before the cache starts over
MAX_CACHE_ENTRIES = 128


def state_fingerprint(state: FinanceState) -> str:
    """Digest of the state's stored form; equal documents share a fingerprint."""
    payload = json.dumps(state.to_dict(), sort_keys=True, default=str, ensure_ascii=False)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class ProjectionService:
    """Cached read-side access to every projection."""

    def __init__(self, repo: FinanceRepository | None = None):
        self.repo = repo or FinanceRepository()
        self._cache: dict = {}
        self._cached_fingerprint: str | None = None

    def state(self) -> FinanceState:
        return self.repo.load()

    def _cached(self, state: FinanceState, name: str, args: tuple, compute: Callable):
        fingerprint = state_fingerprint(state)
        if fingerprint != self._cached_fingerprint or len(self._cache) >= MAX_CACHE_ENTRIES:
            self._cache.clear()
            self._cached_fingerprint = fingerprint
        key = (name, args)
        if key not in self._cache:
            self._cache[key] = compute()
        else:
            logger.debug(f"Cache hit for {name}{args}")
        return self._cache[key]

    # ── Projections ───────────────────────────────────────

    def upcoming_payments(self, now: date | None = None) -> tuple[PaymentEvent, ...]:
        """Every payment due from `now` on, ascending."""
        state, now = self.state(), as_date(now or date.today())
        return self._cached(
            state, "upcoming", (now,),
            lambda: tuple(obligation_projector.project_payments(state, now)),
        )

    def due_within(self, days: int, now: date | None = None) -> tuple[PaymentEvent, ...]:
        """Payments due in the next `days` days (inclusive)."""
        now = as_date(now or date.today())
        return tuple(e for e in self.upcoming_payments(now) if (e.due_date - now).days <= days)

    def period_total(self, filter_key: str, now: date | None = None) -> PeriodTotal:
        state, now = self.state(), as_date(now or date.today())
        return self._cached(
            state, "period_total", (filter_key, now),
            lambda: period_aggregator.window_total(state, now, filter_key),
        )

    def monthly_series(self, now: date | None = None, periods: int = PROJECTION_PERIODS) -> MonthlySeries:
        state, now = self.state(), as_date(now or date.today())
        return self._cached(
            state, "monthly_series", (now, periods),
            lambda: period_aggregator.project_monthly_series(state, now, periods),
        )

    def history_series(self, now: date | None = None, periods: int = PROJECTION_PERIODS) -> HistorySeries:
        state, now = self.state(), as_date(now or date.today())
        return self._cached(
            state, "history_series", (now, periods),
            lambda: period_aggregator.history_series(state, now, periods),
        )

    def category_breakdown(self, frequency_filter: str = ALL) -> PieBreakdown:
        state = self.state()
        return self._cached(
            state, "category_breakdown", (frequency_filter,),
            lambda: period_aggregator.category_breakdown(state, frequency_filter),
        )

    def item_breakdown(self, frequency_filter: str = ALL) -> PieBreakdown:
        state = self.state()
        return self._cached(
            state, "item_breakdown", (frequency_filter,),
            lambda: period_aggregator.item_breakdown(state, frequency_filter),
        )

    def month_summary(self, now: date | None = None) -> MonthSummary:
        state, now = self.state(), as_date(now or date.today())
        return self._cached(
            state, "month_summary", (now,),
            lambda: summary_service.month_summary(state, now),
        )

    def report_rows(self) -> tuple[ReportRow, ...]:
        state = self.state()
        return self._cached(state, "report_rows", (), lambda: tuple(to_report_rows(state)))
