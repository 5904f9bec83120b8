"""
services/report_service.py
--------------------------
Turns projections into the text messages sent by the bot.
All figures come from ProjectionService; this module only formats them.
"""

from datetime import date

from config import DEFAULT_CURRENCY, PROJECTION_PERIODS, UPCOMING_LIMIT
from models.frequency import ALL
from models.payment_event import CARD_EVENT, EXPENSE_EVENT, LOAN_EVENT
from services.frequency_calendar import FORTNIGHT, MONTH, WEEK
from services.obligation_projector import total_due
from services.projection_service import ProjectionService
from utils.parsing import as_date

WINDOW_TITLES = {
    WEEK: "esta semana",
    FORTNIGHT: "esta quincena",
    MONTH: "este mes",
}

TYPE_TITLES = {
    EXPENSE_EVENT: "Gastos",
    LOAN_EVENT: "Préstamos",
    CARD_EVENT: "Tarjetas",
}


def fmt_money(amount: float) -> str:
    return f"${amount:,.2f} {DEFAULT_CURRENCY}"


class ReportService:
    """Formats dashboard-style reports as plain text."""

    def __init__(self, projections: ProjectionService | None = None):
        self.projections = projections or ProjectionService()

    def upcoming_text(self, now: date | None = None, limit: int = UPCOMING_LIMIT) -> str:
        """Next `limit` payments plus the total of the whole schedule."""
        now = as_date(now or date.today())
        events = self.projections.upcoming_payments(now)
        if not events:
            return "✅ No hay pagos pendientes."

        lines = ["📅 Próximos pagos:\n"]
        for e in events[:limit]:
            lines.append(f"  • {e.due_date:%d/%m/%Y} | {e.name} | {fmt_money(e.amount)}")
            lines.append(f"    {e.payment_type}")
        if len(events) > limit:
            lines.append(f"\n  ... y {len(events) - limit} pagos más")
        lines.append(f"\n💸 Total pendiente: {fmt_money(total_due(events))}")
        return "\n".join(lines)

    def window_text(self, filter_key: str, now: date | None = None) -> str:
        """Payments due this week / fortnight / month, split by type."""
        period = self.projections.period_total(filter_key, now)
        lines = [
            f"🗓️ Pagos de {WINDOW_TITLES[filter_key]} "
            f"({period.start:%d/%m} - {period.end:%d/%m}):\n"
        ]
        for event_type, title in TYPE_TITLES.items():
            lines.append(f"  • {title}: {fmt_money(period.type_total(event_type))}")
        lines.append(f"\n💸 Total: {fmt_money(period.total)}")
        return "\n".join(lines)

    def projection_text(self, now: date | None = None, periods: int = PROJECTION_PERIODS) -> str:
        series = self.projections.monthly_series(now, periods)
        lines = [f"📈 Proyección de {periods} meses:\n"]
        for i, label in enumerate(series.labels):
            lines.append(
                f"  {label}: ingresos {fmt_money(series.income[i])}, "
                f"préstamos {fmt_money(series.loan_payments[i])}, "
                f"tarjetas {fmt_money(series.card_payments[i])}, "
                f"ahorro {fmt_money(series.savings[i])}"
            )
        return "\n".join(lines)

    def history_text(self, now: date | None = None, periods: int = PROJECTION_PERIODS) -> str:
        history = self.projections.history_series(now, periods)
        lines = [f"📊 Ingresos vs gastos, últimos {periods} meses:\n"]
        for label, income, expenses in zip(history.labels, history.income, history.expenses):
            lines.append(f"  {label}: +{fmt_money(income)} / -{fmt_money(expenses)}")
        return "\n".join(lines)

    def categories_text(self, frequency_filter: str = ALL) -> str:
        breakdown = self.projections.category_breakdown(frequency_filter)
        if breakdown.is_placeholder:
            return f"📭 No hay gastos registrados ({frequency_filter})."

        lines = [f"📂 Gastos por categoría ({frequency_filter}):\n"]
        for label, value in zip(breakdown.labels, breakdown.values):
            pct = value / breakdown.total * 100 if breakdown.total > 0 else 0
            lines.append(f"  • {label}: {fmt_money(value)} ({pct:.0f}%)")
        lines.append(f"\n💸 Total: {fmt_money(breakdown.total)}")
        return "\n".join(lines)

    def summary_text(self, now: date | None = None) -> str:
        now = as_date(now or date.today())
        s = self.projections.month_summary(now)
        return "\n".join([
            f"📊 Resumen de {now:%m/%Y}:\n",
            f"💰 Ingresos del mes: {fmt_money(s.income)}",
            f"💸 Gastos del mes: {fmt_money(s.expenses)}",
            f"📈 Balance: {fmt_money(s.balance)}",
            f"🏦 Pagos de préstamos este mes: {fmt_money(s.loan_payments)}",
            f"🎯 Metas: {s.goals_completed}/{s.goals_total} completadas "
            f"(promedio {s.average_goal_progress}%)",
        ])

    def reminder_text(self, days: int, now: date | None = None) -> str | None:
        """Reminder for payments due in the next `days` days, or None if there are none."""
        now = as_date(now or date.today())
        due = self.projections.due_within(days, now)
        if not due:
            return None

        lines = ["⏰ Pagos próximos a vencer:\n"]
        for e in due:
            when = "hoy" if e.due_date == now else f"el {e.due_date:%d/%m}"
            lines.append(f"  • {e.name}: {fmt_money(e.amount)} ({e.payment_type}), {when}")
        lines.append(f"\n💸 Total: {fmt_money(total_due(due))}")
        return "\n".join(lines)
