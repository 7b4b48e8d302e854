import os

from .config import DB_CONFIG, Config

# Dev convenience secret; production has no fallback.
SESSION_SECRET = os.getenv("SESSION_SECRET", "dev-secret-key-at-least-32-chars-long-123456")

LEDGER_ID = Config.LEDGER_ID
MONGO_URI = Config.MONGO_URI
MONGO_DB = Config.MONGO_DB

MAIL_SERVICE = Config.MAIL_SERVICE
MAIL_USER = Config.MAIL_USER
MAIL_PASSWORD = Config.MAIL_PASSWORD

DEBUG = True
SECURE_COOKIES = False

VERIFY_WHITELIST = Config.VERIFY_WHITELIST
RATE_LIMITS = Config.RATE_LIMITS

# If enabled, ledger tables are created on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
