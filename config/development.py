import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# "memory" keeps everything in process; "mysql" uses DB_CONFIG below
STORAGE = os.getenv("STORAGE", "memory").lower()

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance"),
}

INSIGHT_API_KEY = os.getenv("INSIGHT_API_KEY", "")
INSIGHT_MODEL = os.getenv("INSIGHT_MODEL", "gemini-2.5-flash")
INSIGHT_ENDPOINT = os.getenv("INSIGHT_ENDPOINT", "https://generativelanguage.googleapis.com/v1beta")
INSIGHT_TIMEOUT_SECONDS = float(os.getenv("INSIGHT_TIMEOUT_SECONDS", "20"))
INSIGHT_LANGUAGE = os.getenv("INSIGHT_LANGUAGE", "English")

ALERT_STREAK_THRESHOLD = int(os.getenv("ALERT_STREAK_THRESHOLD", "3"))
CLASS_RANKING_LIMIT = int(os.getenv("CLASS_RANKING_LIMIT", "3"))

SCHOOL_NAME = os.getenv("SCHOOL_NAME", "Demo Secondary School")
SCHOOL_TOWN = os.getenv("SCHOOL_TOWN", "Demo Town")
SCHOOL_YEAR = os.getenv("SCHOOL_YEAR", "2024/2025")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
# Load the demo roster on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
