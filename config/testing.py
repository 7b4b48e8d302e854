import os

SESSION_SECRET = "test-secret-key-at-least-32-chars-long"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_ledger_test"),
}
LEDGER_ID = "attendance-test"

MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
MONGO_DB = "portal_test"

MAIL_SERVICE = "outlook"
MAIL_USER = "noreply@example.com"
MAIL_PASSWORD = "test-mail-password"

DEBUG = False
TESTING = True
SECURE_COOKIES = False

VERIFY_WHITELIST = True
RATE_LIMITS = {}

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
