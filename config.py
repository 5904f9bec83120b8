"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── Telegram ──────────────────────────────────────────────
TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")

_raw_chat_ids = os.getenv("NOTIFY_CHAT_IDS", "")
NOTIFY_CHAT_IDS: list[int] = (
    [int(cid.strip()) for cid in _raw_chat_ids.split(",") if cid.strip()]
    if _raw_chat_ids
    else []
)

# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "finanzapp")
DB_USER: str = os.getenv("DB_USER", "finanzapp_user")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = (
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

# Key of the persisted state blob (same key the web app used in localStorage)
STORAGE_KEY: str = os.getenv("STORAGE_KEY", "finanzapp_data")

# ── Projections ───────────────────────────────────────────
PROJECTION_PERIODS: int = int(os.getenv("PROJECTION_PERIODS", "6"))
UPCOMING_LIMIT: int = int(os.getenv("UPCOMING_LIMIT", "5"))
REMINDER_DAYS_AHEAD: int = int(os.getenv("REMINDER_DAYS_AHEAD", "2"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── Currency ──────────────────────────────────────────────
DEFAULT_CURRENCY: str = "MXN"
