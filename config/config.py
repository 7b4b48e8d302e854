import os


class Config:
    """Shared defaults; each environment module overrides what it needs."""

    # Ledger (MySQL-backed tabular store)
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "attendance_ledger")
    LEDGER_ID = os.environ.get("LEDGER_ID", "attendance")

    # Document store
    MONGO_URI = os.environ.get("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DB = os.environ.get("MONGO_DB", "portal")

    # Outbound mail: gmail | outlook | office365
    MAIL_SERVICE = os.environ.get("MAIL_SERVICE", "outlook")
    MAIL_USER = os.environ.get("MAIL_USER", "")
    MAIL_PASSWORD = os.environ.get("MAIL_PASSWORD", "")

    VERIFY_WHITELIST = bool(int(os.environ.get("VERIFY_WHITELIST", "1")))
    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))

    RATE_LIMITS = {
        "send_code": os.environ.get("RATE_LIMIT_SEND_CODE", "5/minute"),
        "verify_code": os.environ.get("RATE_LIMIT_VERIFY_CODE", "20/minute"),
        "login": os.environ.get("RATE_LIMIT_LOGIN", "10/minute"),
    }


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}
