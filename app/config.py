import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Falls back to a local SQLite file so the API can boot without Postgres
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./cleaning_jobs.db")

# Recurring job generation
# How many weeks of jobs a single generate-jobs call covers when the caller omits weeksAhead
JOB_GENERATION_DEFAULT_WEEKS_AHEAD = int(os.getenv("JOB_GENERATION_DEFAULT_WEEKS_AHEAD", "4"))
# Upper bound accepted from the API - keeps one run to a year of jobs
JOB_GENERATION_MAX_WEEKS_AHEAD = int(os.getenv("JOB_GENERATION_MAX_WEEKS_AHEAD", "52"))
# Used when a schedule day has no startTime / durationMinutes of its own
JOB_DEFAULT_START_TIME = os.getenv("JOB_DEFAULT_START_TIME", "09:00")
JOB_DEFAULT_DURATION_MINUTES = int(os.getenv("JOB_DEFAULT_DURATION_MINUTES", "120"))

# Currency code stamped on jobs when the contract has none
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "GBP")
