"""
Runtime configuration read from the environment.
"""

import os
from typing import List

DATABASE_URL = os.getenv("DATABASE_URL")

PGHOST = os.getenv("PGHOST", "localhost")
PGPORT = os.getenv("PGPORT", "5432")
PGDATABASE = os.getenv("PGDATABASE", "quizfunnel")
PGUSER = os.getenv("PGUSER", "postgres")
PGPASSWORD = os.getenv("PGPASSWORD", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Countdown shown next to the discounted offer
TIMER_DURATION_SECONDS = int(os.getenv("TIMER_DURATION_SECONDS", "600"))

STRIPE_PRICE_MONTHLY = os.getenv("STRIPE_PRICE_MONTHLY_995", "price_monthly_placeholder")
STRIPE_PRICE_QUARTERLY = os.getenv("STRIPE_PRICE_QUARTERLY_2395", "price_quarterly_placeholder")


def get_cors_origins() -> List[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
