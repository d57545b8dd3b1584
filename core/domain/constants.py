"""
Domain constants - ledger amounts, limits and other static data.
Centralized here for easy modification. Runtime overrides live in config.settings.
"""

# === Points Ledger ===
WELCOME_BONUS = 100              # granted at registration
TOURNAMENT_JOIN_POINTS = 10      # granted when joining a tournament
CLAIM_RETRY_ATTEMPTS = 3         # read-validate-commit attempts per claim
LEDGER_RETRY_ATTEMPTS = 3        # conditional credit attempts per earn

# === Sessions ===
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72          # bcrypt only reads the first 72 bytes
TOKEN_TTL_DAYS = 7
JWT_ALGORITHM = "HS256"

# Limits
MIN_USERNAME_LENGTH = 2
MAX_USERNAME_LENGTH = 50
MAX_DESCRIPTION_LENGTH = 500
DEFAULT_ACTIVITY_LIMIT = 10
DASHBOARD_ACTIVITY_LIMIT = 5
MAX_ACTIVITY_LIMIT = 100

# Tournaments that still accept participants
JOINABLE_TOURNAMENT_STATUSES = ("upcoming", "active")

# Rough shape check only - deliverability is not our concern
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

# === Rate Limiting (requests per interval, per client and route) ===
RATE_LIMIT_REQUESTS = 120        # general API calls per minute
RATE_LIMIT_SENSITIVE = 10        # login / register / claim per minute
RATE_LIMIT_INTERVAL_SECONDS = 60
