"""
handlers/export_handler.py
---------------------------
Handles data export commands (CSV, Excel).
Delegates to ExportService.
"""

from datetime import date

from telegram import Update
from telegram.ext import ContextTypes

from services.export_service import ExportService
from utils.logger import get_logger

logger = get_logger(__name__)
export_service = ExportService()


async def export_csv_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /export_csv command - send every record as CSV rows."""
    today = date.today()
    await update.message.reply_text("📄 Preparando archivo CSV...")

    try:
        buffer = export_service.export_csv()
        await update.message.reply_document(
            document=buffer,
            filename=f"finanzas_{today:%Y-%m-%d}.csv",
            caption="📊 Tus datos financieros - CSV",
        )
    except Exception as e:
        logger.error(f"CSV export failed: {e}")
        await update.message.reply_text("❌ Hubo un problema al exportar. Intenta de nuevo.")


async def export_excel_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /export_excel command - send the full workbook."""
    today = date.today()
    await update.message.reply_text("📊 Preparando archivo Excel...")

    try:
        buffer = export_service.export_excel(today=today)
        await update.message.reply_document(
            document=buffer,
            filename=f"finanzas_{today:%Y-%m-%d}.xlsx",
            caption="📊 Tus datos financieros - Excel",
        )
    except Exception as e:
        logger.error(f"Excel export failed: {e}")
        await update.message.reply_text("❌ Hubo un problema al exportar. Intenta de nuevo.")
