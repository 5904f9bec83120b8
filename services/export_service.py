"""
services/export_service.py
---------------------------
Generates CSV and Excel exports of the finance state.
"""

import io
from datetime import date

import pandas as pd

from models.finance_state import FinanceState
from models.frequency import MONTHLY, ONE_OFF
from models.payment_event import CARD_EVENT, EXPENSE_EVENT, LOAN_EVENT, ReportRow
from repositories.finance_repo import FinanceRepository
from services import amortization
from utils.logger import get_logger

logger = get_logger(__name__)

INCOME_ROW = "ingreso"


def to_report_rows(state: FinanceState) -> list[ReportRow]:
    """
    Flatten the state into export rows (date, type, name, amount, category).

    Incomes and expenses use their own date and amount, loans their start
    date and total, credit cards their payment date and current debt.
    """
    rows = [
        ReportRow(inc.date, INCOME_ROW, inc.source or "Sin fuente", inc.amount)
        for inc in state.incomes
    ]
    rows += [
        ReportRow(exp.date, EXPENSE_EVENT, exp.description or "Sin descripción", exp.amount, exp.category)
        for exp in state.expenses
    ]
    rows += [
        ReportRow(loan.start_date, LOAN_EVENT, loan.name or "Sin nombre", loan.total, loan.category)
        for loan in state.loans
    ]
    rows += [
        ReportRow(card.payment_date, CARD_EVENT, card.display_name, card.current_debt, "Deudas")
        for card in state.credit_cards
    ]
    return rows


def _sheets(state: FinanceState, today: date) -> dict[str, pd.DataFrame]:
    """One DataFrame per workbook sheet, with the column sets users know."""
    incomes = [
        {
            "Fecha": inc.date.isoformat() if inc.date else "",
            "Fuente": inc.source or "Sin fuente",
            "Empresa": inc.company or "N/A",
            "Monto": inc.amount,
            "Frecuencia": inc.frequency or ONE_OFF,
            "Notas": inc.extra.get("notes", ""),
        }
        for inc in state.incomes
    ]
    expenses = [
        {
            "Fecha": exp.date.isoformat() if exp.date else "",
            "Categoría": exp.category or "Sin categoría",
            "Descripción": exp.description or "Sin descripción",
            "Tipo": exp.extra.get("type", "manual"),
            "Monto": exp.amount,
            "Frecuencia": exp.frequency or ONE_OFF,
            "Notas": exp.extra.get("notes", ""),
        }
        for exp in state.expenses
    ]
    loans = [
        {
            "Nombre": loan.name or "Sin nombre",
            "MontoTotal": loan.total,
            "Cuotas": amortization.total_payments(loan),
            "Pagado": loan.paid,
            "Restante": amortization.remaining(loan),
            "Frecuencia": loan.frequency or MONTHLY,
            "FechaInicio": loan.start_date.isoformat() if loan.start_date else "",
            "Estado": "Pagado" if amortization.is_settled(loan) else "Pendiente",
        }
        for loan in state.loans
    ]
    cards = [
        {
            "Nombre": card.card_name or "Sin nombre",
            "Banco": card.bank or "N/A",
            "Límite": card.credit_limit,
            "Deuda": card.current_debt,
            "PagoMínimo": card.min_payment,
            "FechaPago": card.payment_date.isoformat() if card.payment_date else "",
            "Estado": (
                "Próximo pago"
                if card.payment_date and card.payment_date.day >= today.day
                else "Por vencer"
            ),
        }
        for card in state.credit_cards
    ]
    goals = [
        {
            "Meta": goal.name or "Sin nombre",
            "Objetivo": goal.target_amount,
            "Actual": goal.current_amount,
            "Progreso": f"{goal.progress:.2f}%",
            "FechaInicio": goal.start_date.isoformat() if goal.start_date else "",
            "FechaMeta": goal.deadline.isoformat() if goal.deadline else "",
            "Estado": "Alcanzada" if goal.is_reached() else "En progreso",
        }
        for goal in state.goals
    ]
    return {
        "Ingresos": pd.DataFrame(incomes),
        "Gastos": pd.DataFrame(expenses),
        "Préstamos": pd.DataFrame(loans),
        "Tarjetas": pd.DataFrame(cards),
        "Metas": pd.DataFrame(goals),
    }


class ExportService:
    """Generates downloadable financial reports in CSV and Excel formats."""

    def __init__(self, repo: FinanceRepository | None = None):
        self.repo = repo or FinanceRepository()

    def export_csv(self, state: FinanceState | None = None) -> io.BytesIO:
        """
        Export the report rows as a CSV file.

        Returns:
            A BytesIO buffer containing UTF-8 (with BOM) CSV data.
        """
        state = state or self.repo.load()
        rows = [row.to_dict() for row in to_report_rows(state)]
        df = pd.DataFrame(rows, columns=["date", "type", "name", "amount", "category"])

        buffer = io.BytesIO()
        df.to_csv(buffer, index=False, encoding="utf-8-sig")
        buffer.seek(0)
        logger.info(f"Exported {len(rows)} rows as CSV")
        return buffer

    def export_excel(self, state: FinanceState | None = None, today: date | None = None) -> io.BytesIO:
        """
        Export the whole state as an Excel (.xlsx) workbook.

        Sheets: Ingresos, Gastos, Préstamos, Tarjetas, Metas and a Resumen
        sheet with the report-row totals per type.
        """
        state = state or self.repo.load()
        today = today or date.today()

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            for name, df in _sheets(state, today).items():
                df.to_excel(writer, sheet_name=name, index=False)

            rows = pd.DataFrame([row.to_dict() for row in to_report_rows(state)])
            if not rows.empty:
                summary = rows.groupby("type")["amount"].sum().reset_index()
                summary.columns = ["Tipo", "Total"]
                summary.to_excel(writer, sheet_name="Resumen", index=False)

        buffer.seek(0)
        logger.info(f"Exported state v{state.version} as Excel")
        return buffer
