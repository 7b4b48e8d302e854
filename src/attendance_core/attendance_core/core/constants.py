"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
SESSION_COOKIE_NAME = "session"
LEGACY_COOKIE_NAMES = ("ui_role", "admin", "userRole")

LOCAL_TIMEZONE = "Asia/Manila"

LEDGER_HEADER = ["Name", "ID Number", "Year Level", "Section", "Timestamp"]
LEDGER_COLUMNS = "A:E"
LEDGER_HEADER_RANGE = "A1:E1"
MISSING_CELL = "N/A"

CODE_LENGTH = 6
CODE_TTL_MINUTES = 10
CODE_MAX_ATTEMPTS = 5
CODE_RESEND_COOLDOWN_SECONDS = 60

MIN_PASSWORD_LENGTH = 6
UNKNOWN_NAME = "Unknown Name"

WHITELIST_COLLECTION = "allowed_student_ids"
AGGREGATE_COLLECTION = "attendance_stats"
VERIFICATION_COLLECTION = "verification_codes"
USERS_COLLECTION = "users"
ACTIVITY_COLLECTION = "activitylogs"
