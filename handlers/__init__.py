"""
handlers/ - Presentation Layer
================================
Telegram bot handlers. Each handler receives a command, asks the
report/export/chart services for the answer and sends it back.
Only record_handler writes, through FinanceStateService.
"""
