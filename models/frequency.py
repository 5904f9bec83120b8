"""
models/frequency.py
-------------------
Recurrence units used by every record. Values are the Spanish labels the
web client persisted, so stored data loads without translation.
"""

ONE_OFF = "único"
DAILY = "diario"
WEEKLY = "semanal"
FORTNIGHTLY = "quincenal"
MONTHLY = "mensual"
BIMONTHLY = "bimestral"
QUARTERLY = "trimestral"
SEMIANNUAL = "semestral"
ANNUAL = "anual"

INCOME_FREQUENCIES = (ONE_OFF, DAILY, WEEKLY, FORTNIGHTLY, MONTHLY)
EXPENSE_FREQUENCIES = (
    ONE_OFF, WEEKLY, FORTNIGHTLY, MONTHLY,
    BIMONTHLY, QUARTERLY, SEMIANNUAL, ANNUAL,
)
LOAN_FREQUENCIES = (
    WEEKLY, FORTNIGHTLY, MONTHLY,
    BIMONTHLY, QUARTERLY, SEMIANNUAL, ANNUAL,
)
CARD_FREQUENCIES = (MONTHLY, FORTNIGHTLY)

# Pseudo-frequency used by chart filters to mean "every record"
ALL = "general"
