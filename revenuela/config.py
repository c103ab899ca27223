"""
Centralized configuration — env vars and engine constants.
"""
import os


# ── Database ─────────────────────────────────────────────────────────────────
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///local.db')

# ── Flask ────────────────────────────────────────────────────────────────────
SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-change-me')
SERVICE_NAME = 'revenuela-backend'

# ── Lead ids ─────────────────────────────────────────────────────────────────
LEAD_ID_PREFIX = 'RVN-'

# ── Page sizes ───────────────────────────────────────────────────────────────
JOURNEY_PAGE_SIZE = 50
LEADS_PAGE_SIZE = 500
RECENT_JOURNEYS_LIMIT = 5

# ── Money ────────────────────────────────────────────────────────────────────
DEFAULT_CURRENCY = 'EUR'

# ── Lead sources written by the import paths ─────────────────────────────────
SOURCE_MANUAL = 'Manual'
SOURCE_CSV_IMPORT = 'CSV Import'

# ── Integration connection status values ─────────────────────────────────────
STATUS_CONNECTED = 'connected'
STATUS_NOT_CONNECTED = 'not_connected'
