import os
from dotenv import load_dotenv

load_dotenv()

# --- Living Apps record store ---
LIVING_APPS_BASE_URL = os.getenv("LIVING_APPS_BASE_URL", "https://my.living-apps.de/rest").rstrip("/")
LIVING_APPS_COOKIE = os.getenv("LIVING_APPS_COOKIE", "")  # raw Cookie header of the logged-in session
LIVING_APPS_TIMEOUT = float(os.getenv("LIVING_APPS_TIMEOUT", "10"))

# --- Collection (app) identifiers ---
HABITS_APP_ID = os.getenv("HABITS_APP_ID", "6980ab411df14e26ef90fad2")
HABIT_LOGS_APP_ID = os.getenv("HABIT_LOGS_APP_ID", "6980ab417ea92a137dca8cf8")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
