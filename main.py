"""
main.py
-------
Entry point for the FinanzApp Telegram bot.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Configure and start the Telegram bot with all handlers.
    - Set up the daily payment reminder job.
"""

from datetime import time as dt_time

from telegram import BotCommand
from telegram.ext import Application, CommandHandler

from config import NOTIFY_CHAT_IDS, REMINDER_DAYS_AHEAD, TELEGRAM_BOT_TOKEN
from db.connection import close_pool, init_pool
from db.init_db import create_tables
from handlers.export_handler import export_csv_command, export_excel_command
from handlers.record_handler import add_expense_command, add_income_command, delete_command
from handlers.report_handler import (
    categories_command,
    fortnight_command,
    history_command,
    month_command,
    projection_command,
    summary_command,
    upcoming_command,
    week_command,
)
from handlers.start_handler import help_command, start_command
from services.report_service import ReportService
from utils.logger import get_logger

logger = get_logger(__name__)


async def send_reminders(context) -> None:
    """
    Scheduled job: send the payments due in the next days to every
    configured chat. Runs daily at 09:00 AM.
    """
    text = ReportService().reminder_text(REMINDER_DAYS_AHEAD)
    if text is None:
        logger.info("No payments due soon, no reminders sent")
        return

    for chat_id in NOTIFY_CHAT_IDS:
        try:
            await context.bot.send_message(chat_id=chat_id, text=text)
            logger.info(f"Sent payment reminder to chat {chat_id}")
        except Exception as e:
            logger.error(f"Failed to send reminder to {chat_id}: {e}")


async def set_bot_commands(application: Application) -> None:
    """Register bot commands menu in Telegram on startup."""
    commands = [
        BotCommand("start", "🚀 Iniciar el bot"),
        BotCommand("help", "📖 Ver la ayuda"),
        BotCommand("upcoming", "📅 Próximos pagos"),
        BotCommand("week", "🗓️ Pagos de la semana"),
        BotCommand("fortnight", "🗓️ Pagos de la quincena"),
        BotCommand("month", "🗓️ Pagos del mes"),
        BotCommand("summary", "📊 Resumen del mes"),
        BotCommand("projection", "📈 Proyección mensual"),
        BotCommand("history", "📊 Ingresos vs gastos"),
        BotCommand("categories", "📂 Gastos por categoría"),
        BotCommand("add_expense", "💸 Registrar un gasto"),
        BotCommand("add_income", "💰 Registrar un ingreso"),
        BotCommand("delete", "🗑️ Eliminar un registro"),
        BotCommand("export_csv", "📄 Exportar CSV"),
        BotCommand("export_excel", "📊 Exportar Excel"),
    ]
    await application.bot.set_my_commands(commands)
    logger.info("Bot commands menu registered successfully.")


def main() -> None:
    """Initialize and run the bot."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    init_pool()
    create_tables()

    # ── 2. Build the Telegram application ─────────────────
    logger.info("Starting Telegram bot...")
    app = Application.builder().token(TELEGRAM_BOT_TOKEN).post_init(set_bot_commands).build()

    # ── 3. Register command handlers ──────────────────────
    app.add_handler(CommandHandler("start", start_command))
    app.add_handler(CommandHandler("help", help_command))
    app.add_handler(CommandHandler("upcoming", upcoming_command))
    app.add_handler(CommandHandler("week", week_command))
    app.add_handler(CommandHandler("fortnight", fortnight_command))
    app.add_handler(CommandHandler("month", month_command))
    app.add_handler(CommandHandler("summary", summary_command))
    app.add_handler(CommandHandler("projection", projection_command))
    app.add_handler(CommandHandler("history", history_command))
    app.add_handler(CommandHandler("categories", categories_command))
    app.add_handler(CommandHandler("add_expense", add_expense_command))
    app.add_handler(CommandHandler("add_income", add_income_command))
    app.add_handler(CommandHandler("delete", delete_command))
    app.add_handler(CommandHandler("export_csv", export_csv_command))
    app.add_handler(CommandHandler("export_excel", export_excel_command))

    # ── 4. Schedule jobs ──────────────────────────────────
    job_queue = app.job_queue
    if job_queue:
        job_queue.run_daily(
            send_reminders,
            time=dt_time(hour=9, minute=0),
            name="daily_reminders",
        )
        logger.info(f"Scheduled daily reminders (09:00) for {len(NOTIFY_CHAT_IDS)} chats")

    # ── 5. Start polling ──────────────────────────────────
    logger.info("🚀 FinanzApp bot is running! Press Ctrl+C to stop.")
    app.run_polling(drop_pending_updates=True, allowed_updates=["message"])

    # ── 6. Cleanup on shutdown ────────────────────────────
    close_pool()
    logger.info("FinanzApp bot stopped.")


if __name__ == "__main__":
    main()
