"""
models/projection.py
--------------------
Report structures produced by the period aggregator and the summary
service. Each one knows how to render itself into the data shapes the
chart layer consumes:

    bar / line charts: {"labels": [...], "datasets": [{"label", "data"}]}
    pie charts:        {"labels": [...], "values": [...]}
"""

from dataclasses import dataclass
from datetime import date

from models.payment_event import PaymentEvent

NO_DATA_LABEL = "Sin datos"


@dataclass(frozen=True)
class PeriodTotal:
    """Projected payments falling inside one week / fortnight / month window."""
    filter_key: str
    start: date
    end: date
    total: float
    by_type: dict
    events: tuple[PaymentEvent, ...] = ()

    def type_total(self, event_type: str) -> float:
        return self.by_type.get(event_type, 0.0)

    def to_dict(self) -> dict:
        return {
            "filterKey": self.filter_key,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "total": self.total,
            "byType": dict(self.by_type),
            "events": [e.to_dict() for e in self.events],
        }


@dataclass(frozen=True)
class MonthlySeries:
    """Rolling projection of the coming months."""
    labels: tuple[str, ...]
    income: tuple[float, ...]
    loan_payments: tuple[float, ...]
    card_payments: tuple[float, ...]
    savings: tuple[float, ...]

    def to_dict(self) -> dict:
        return {
            "labels": list(self.labels),
            "income": list(self.income),
            "loanPayments": list(self.loan_payments),
            "cardPayments": list(self.card_payments),
            "savings": list(self.savings),
        }

    def to_chart_data(self) -> dict:
        return {
            "labels": list(self.labels),
            "datasets": [
                {"label": "Ingresos", "data": list(self.income)},
                {"label": "Préstamos", "data": list(self.loan_payments)},
                {"label": "Tarjetas", "data": list(self.card_payments)},
                {"label": "Ahorro", "data": list(self.savings)},
            ],
        }


@dataclass(frozen=True)
class HistorySeries:
    """Income vs expenses of the last months (current month last)."""
    labels: tuple[str, ...]
    income: tuple[float, ...]
    expenses: tuple[float, ...]

    def to_chart_data(self) -> dict:
        return {
            "labels": list(self.labels),
            "datasets": [
                {"label": "Ingresos", "data": list(self.income)},
                {"label": "Gastos", "data": list(self.expenses)},
            ],
        }


@dataclass(frozen=True)
class PieBreakdown:
    """
    Slices of a pie chart.

    When there is nothing to show the breakdown holds a single
    placeholder slice ("Sin datos", 1) so charts never render empty;
    `total` ignores that placeholder.
    """
    labels: tuple[str, ...]
    values: tuple[float, ...]
    is_placeholder: bool = False

    @classmethod
    def empty(cls) -> "PieBreakdown":
        return cls(labels=(NO_DATA_LABEL,), values=(1,), is_placeholder=True)

    @property
    def total(self) -> float:
        return 0.0 if self.is_placeholder else sum(self.values)

    def to_chart_data(self) -> dict:
        return {"labels": list(self.labels), "values": list(self.values)}


@dataclass(frozen=True)
class MonthSummary:
    """Figures shown on the dashboard summary cards."""
    income: float
    expenses: float
    loan_payments: float
    goals_completed: int
    goals_total: int
    average_goal_progress: int

    @property
    def balance(self) -> float:
        return self.income - self.expenses

    def to_dict(self) -> dict:
        return {
            "income": self.income,
            "expenses": self.expenses,
            "balance": self.balance,
            "loanPayments": self.loan_payments,
            "goalsCompleted": self.goals_completed,
            "goalsTotal": self.goals_total,
            "averageGoalProgress": self.average_goal_progress,
        }
