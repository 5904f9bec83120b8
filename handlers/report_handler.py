"""
handlers/report_handler.py
---------------------------
Handles the payment and report commands.
Delegates text to ReportService and images to ChartService.
"""

from telegram import Update
from telegram.ext import ContextTypes

from models.frequency import ALL, EXPENSE_FREQUENCIES
from services.chart_service import ChartService
from services.frequency_calendar import FORTNIGHT, MONTH, WEEK
from services.report_service import ReportService
from utils.logger import get_logger

logger = get_logger(__name__)
report_service = ReportService()
chart_service = ChartService()

CATEGORY_FILTERS = (ALL,) + EXPENSE_FREQUENCIES


async def upcoming_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /upcoming command - next payments and pending total."""
    await update.message.reply_text(report_service.upcoming_text())


async def week_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /week command - payments due this week."""
    await update.message.reply_text(report_service.window_text(WEEK))


async def fortnight_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /fortnight command - payments due this fortnight."""
    await update.message.reply_text(report_service.window_text(FORTNIGHT))


async def month_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /month command - payments due this month."""
    await update.message.reply_text(report_service.window_text(MONTH))


async def summary_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /summary command - dashboard cards of the current month."""
    await update.message.reply_text(report_service.summary_text())


async def projection_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /projection command - rolling projection as text and bar chart."""
    await update.message.reply_text(report_service.projection_text())

    try:
        series = report_service.projections.monthly_series()
        buf = chart_service.render_bar(series.to_chart_data(), "📈 Proyección mensual")
    except Exception as e:
        logger.error(f"Projection chart failed: {e}")
        await update.message.reply_text("❌ No se pudo generar la gráfica.")
        return
    if buf:
        await update.message.reply_photo(photo=buf, caption="📈 Ingresos, pagos y ahorro proyectados")


async def history_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /history command - income vs expenses of the last months."""
    await update.message.reply_text(report_service.history_text())

    try:
        history = report_service.projections.history_series()
        buf = chart_service.render_bar(history.to_chart_data(), "📊 Ingresos vs gastos")
    except Exception as e:
        logger.error(f"History chart failed: {e}")
        await update.message.reply_text("❌ No se pudo generar la gráfica.")
        return
    if buf:
        await update.message.reply_photo(photo=buf, caption="📊 Últimos meses")


async def categories_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /categories command - expenses per category as a pie chart.

    Usage:
        /categories           → every expense
        /categories mensual   → only monthly expenses
    """
    frequency = context.args[0].lower() if context.args else ALL
    if frequency not in CATEGORY_FILTERS:
        await update.message.reply_text(
            f"⚠️ Uso: /categories [frecuencia]\nOpciones: {', '.join(CATEGORY_FILTERS)}"
        )
        return

    await update.message.reply_text(report_service.categories_text(frequency))

    breakdown = report_service.projections.category_breakdown(frequency)
    if breakdown.is_placeholder:
        return
    try:
        buf = chart_service.render_pie(breakdown.to_chart_data(), f"📂 Gastos por categoría ({frequency})")
    except Exception as e:
        logger.error(f"Category chart failed: {e}")
        await update.message.reply_text("❌ No se pudo generar la gráfica.")
        return
    if buf:
        await update.message.reply_photo(photo=buf, caption="📂 Distribución de gastos")
