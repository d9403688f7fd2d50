import os

from dotenv import load_dotenv

# Override=True so changes in .env take effect on process reload.
#
# Tests set DISABLE_DOTENV=1 so a developer's .env can't leak into the in-memory DB.
if os.getenv("DISABLE_DOTENV") != "1":
    load_dotenv(override=True)

_TRUTHY = {"1", "true", "True", "yes", "YES"}

# Everything lives in process memory by default; a restart starts from an empty store.
# The in-memory store is per process: run a single worker.
DATABASE_URL = (os.getenv("DATABASE_URL") or "").strip() or "sqlite+pysqlite:///:memory:"

# Auth / JWT
# NOTE: keep a default for local dev so the server can boot even if SECRET_KEY isn't set.
SECRET_KEY = os.getenv("SECRET_KEY", "dev_secret_change_me")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)) or "1440")

# -------------------- Screening --------------------
# Horizontal drag distance a card must travel before release counts as a decision.
SWIPE_THRESHOLD = float(os.getenv("SWIPE_THRESHOLD", "100") or "100")

# Populate demo accounts/jobs/applications at startup.
SEED_DEMO_DATA = (os.getenv("SEED_DEMO_DATA", "1") or "1").strip() in _TRUTHY

LOG_LEVEL = (os.getenv("LOG_LEVEL", "INFO") or "INFO").strip().upper()
