"""
handlers/record_handler.py
---------------------------
Handles the commands that write records: /add_expense, /add_income and
/delete. Delegates all state changes to FinanceStateService.
"""

from datetime import date

from telegram import Update
from telegram.ext import ContextTypes

from models.expense import EXPENSE_CATEGORIES
from models.frequency import EXPENSE_FREQUENCIES, INCOME_FREQUENCIES, ONE_OFF
from services.report_service import fmt_money
from services.state_service import FinanceStateService
from utils.logger import get_logger
from utils.parsing import is_number, safe_float

logger = get_logger(__name__)
state_service = FinanceStateService()

# /delete <tipo> <id>
RECORD_TYPES = {
    "ingreso": "incomes",
    "gasto": "expenses",
    "prestamo": "loans",
    "préstamo": "loans",
    "deuda": "debts",
    "tarjeta": "creditCards",
    "meta": "goals",
}

ADD_EXPENSE_USAGE = (
    "⚠️ Uso: /add_expense <monto> <categoría> [frecuencia] [descripción]\n"
    "Ejemplo: /add_expense 450 Alimentación único Súper\n\n"
    f"Categorías: {', '.join(EXPENSE_CATEGORIES)}"
)
ADD_INCOME_USAGE = (
    "⚠️ Uso: /add_income <monto> [frecuencia] [fuente]\n"
    "Ejemplo: /add_income 20000 mensual Salario"
)
DELETE_USAGE = (
    "⚠️ Uso: /delete <tipo> <id>\n"
    "Ejemplo: /delete gasto 5\n\n"
    f"Tipos: {', '.join(sorted(set(RECORD_TYPES) - {'préstamo'}))}"
)


def _match_category(text: str) -> str | None:
    for category in EXPENSE_CATEGORIES:
        if category.lower() == text.lower():
            return category
    return None


def _split_frequency(args: list[str], allowed: tuple[str, ...]) -> tuple[str, str]:
    """Take an optional leading frequency; the rest of the words are free text."""
    if args and args[0].lower() in allowed:
        return args[0].lower(), " ".join(args[1:])
    return ONE_OFF, " ".join(args)


async def _save(update: Update, collection: str, payload: dict) -> int | None:
    """Add a record under the next free id; returns the id, or None after replying with the error."""
    try:
        state_service.load()
        payload = {"id": state_service.next_id(collection), **payload}
        state_service.add_record(collection, payload)
    except Exception as e:
        logger.error(f"Failed to add record to {collection}: {e}")
        await update.message.reply_text("❌ No se pudo guardar el registro.")
        return None
    return payload["id"]


async def add_expense_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /add_expense command - register an expense dated today.

    Negative amounts are accepted and recorded as refunds.
    """
    args = context.args or []
    if len(args) < 2 or not is_number(args[0]):
        await update.message.reply_text(ADD_EXPENSE_USAGE)
        return

    category = _match_category(args[1])
    if category is None:
        await update.message.reply_text(f"⚠️ Categoría desconocida: {args[1]}\n\n{ADD_EXPENSE_USAGE}")
        return

    amount = safe_float(args[0])
    frequency, description = _split_frequency(args[2:], EXPENSE_FREQUENCIES)
    record_id = await _save(update, "expenses", {
        "amount": amount,
        "date": date.today().isoformat(),
        "category": category,
        "description": description,
        "frequency": frequency,
    })
    if record_id is not None:
        await update.message.reply_text(
            f"💸 Gasto #{record_id} registrado: {fmt_money(amount)} en {category} ({frequency})"
        )


async def add_income_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /add_income command - register an income dated today."""
    args = context.args or []
    if not args or not is_number(args[0]):
        await update.message.reply_text(ADD_INCOME_USAGE)
        return

    amount = safe_float(args[0])
    frequency, source = _split_frequency(args[1:], INCOME_FREQUENCIES)
    record_id = await _save(update, "incomes", {
        "amount": amount,
        "date": date.today().isoformat(),
        "frequency": frequency,
        "source": source,
    })
    if record_id is not None:
        await update.message.reply_text(
            f"💰 Ingreso #{record_id} registrado: {fmt_money(amount)} ({frequency})"
        )


async def delete_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /delete <tipo> <id> command - delete a record.
    Usage: /delete gasto 5
    """
    args = context.args or []
    if len(args) < 2 or args[0].lower() not in RECORD_TYPES:
        await update.message.reply_text(DELETE_USAGE)
        return

    try:
        record_id = int(args[1])
    except ValueError:
        await update.message.reply_text("⚠️ El id debe ser un número entero.")
        return

    collection = RECORD_TYPES[args[0].lower()]
    try:
        state_service.load()
        deleted = state_service.delete_record(collection, record_id)
    except Exception as e:
        logger.error(f"Failed to delete {collection} #{record_id}: {e}")
        await update.message.reply_text("❌ No se pudo eliminar el registro.")
        return

    if deleted:
        await update.message.reply_text(f"🗑️ {args[0].capitalize()} #{record_id} eliminado.")
    else:
        await update.message.reply_text(f"⚠️ No existe {args[0].lower()} con id {record_id}.")
