import os

from .config import DB_CONFIG, Config

SESSION_SECRET = os.getenv("SESSION_SECRET")

LEDGER_ID = Config.LEDGER_ID
MONGO_URI = Config.MONGO_URI
MONGO_DB = Config.MONGO_DB

MAIL_SERVICE = Config.MAIL_SERVICE
MAIL_USER = Config.MAIL_USER
MAIL_PASSWORD = Config.MAIL_PASSWORD

DEBUG = False
SECURE_COOKIES = True

VERIFY_WHITELIST = Config.VERIFY_WHITELIST
RATE_LIMITS = Config.RATE_LIMITS

AUTO_INIT_DB = Config.AUTO_INIT_DB
