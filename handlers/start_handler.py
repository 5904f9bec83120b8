"""
handlers/start_handler.py
--------------------------
Handles /start and /help commands.
"""

from telegram import Update
from telegram.ext import ContextTypes

from utils.logger import get_logger

logger = get_logger(__name__)

HELP_TEXT = """
🤖 *FinanzApp*
Consulta tus pagos, proyecciones y reportes 💰

*📅 Pagos:*
/upcoming - Próximos pagos y total pendiente
/week - Pagos de esta semana
/fortnight - Pagos de esta quincena
/month - Pagos de este mes

*📈 Reportes:*
/summary - Resumen del mes
/projection - Proyección de los próximos meses
/history - Ingresos vs gastos de los últimos meses
/categories - Gastos por categoría (ej: /categories mensual)

*✏️ Registros:*
/add\\_expense - Registrar un gasto (ej: /add\\_expense 450 Alimentación único Súper)
/add\\_income - Registrar un ingreso (ej: /add\\_income 20000 mensual Salario)
/delete - Eliminar un registro (ej: /delete gasto 5)

*📄 Exportar:*
/export\\_csv - Exportar datos en CSV
/export\\_excel - Exportar datos en Excel
"""


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command - show welcome message."""
    user = update.effective_user
    logger.info(f"User {user.id} ({user.first_name}) started the bot.")

    await update.message.reply_text(
        f"¡Hola {user.first_name}! 👋\n"
        f"Soy tu asistente de finanzas personales.\n"
        f"Te aviso de tus pagos y te muestro tus proyecciones.\n\n"
        f"Escribe /help para ver todos los comandos.",
        parse_mode="Markdown",
    )


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command - show all available commands."""
    await update.message.reply_text(HELP_TEXT, parse_mode="Markdown")
