import os
from datetime import timedelta
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

DATABASE_URL = os.getenv(
    "ADMIN_GATEWAY_DATABASE_URL", f"sqlite:///{BASE_DIR}/admin_gateway.db"
)

# DEV default only: set ADMIN_GATEWAY_SECRET_KEY in any real deployment.
SECRET_KEY = os.getenv("ADMIN_GATEWAY_SECRET_KEY", "change-me-in-production")
ALGORITHM = "HS256"
ID_TOKEN_EXPIRE = timedelta(minutes=int(os.getenv("ADMIN_GATEWAY_TOKEN_MINUTES", "60")))

CORS_ORIGINS = [
    o.strip() for o in os.getenv("ADMIN_GATEWAY_CORS_ORIGINS", "*").split(",") if o.strip()
]

LOG_LEVEL = os.getenv("ADMIN_GATEWAY_LOG_LEVEL", "INFO").upper()

# Identity provider
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72  # bcrypt input limit

# Listing
DEFAULT_USERS_PAGE_SIZE = 100
MAX_USERS_PAGE_SIZE = 1000

# Enrollment ids
ENROLLMENT_ID_PREFIX = "ENR_"
ADMIN_PAYMENT_ID_PREFIX = "ADMIN_"
