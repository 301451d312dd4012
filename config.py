"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DATABASE_URL: str = os.getenv("DATABASE_URL", "postgresql://localhost:5432/ladderbot")
DATABASE_USER: str = os.getenv("DATABASE_USER", "")

# "require" encrypts the connection without verifying the server certificate.
DB_SSLMODE: str = os.getenv("DB_SSLMODE", "require")
DB_MIN_CONN: int = int(os.getenv("DB_MIN_CONN", "1"))
DB_MAX_CONN: int = int(os.getenv("DB_MAX_CONN", "5"))

# ── Ladder API ────────────────────────────────────────────
LADDER_URL: str = os.getenv("LADDER_URL", "https://alttprladder.com/api/v1/PublicAPI/")

_raw_timeout = os.getenv("LADDER_TIMEOUT", "")
LADDER_TIMEOUT: float | None = float(_raw_timeout) if _raw_timeout.strip() else None

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
