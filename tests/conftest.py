# tests/conftest.py
import os

# Settings are read once at import time; keep tests off the real database and the limiter
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_PER_SECOND", "0")
os.environ.setdefault("DEFAULT_TIMEZONE", "UTC")
os.environ.setdefault("SLOT_INTERVAL_MINUTES", "15")
os.environ.setdefault("MIN_BOOKING_LEAD_MINUTES", "60")
