import os

SECRET_KEY = "test-secret"

STORAGE = "memory"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance_test"),
}

# No key: the insight generator fails fast and the fallback text is shown
INSIGHT_API_KEY = ""
INSIGHT_MODEL = "gemini-2.5-flash"
INSIGHT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta"
INSIGHT_TIMEOUT_SECONDS = 1.0
INSIGHT_LANGUAGE = "English"

ALERT_STREAK_THRESHOLD = 3
CLASS_RANKING_LIMIT = 3

SCHOOL_NAME = "Test School"
SCHOOL_TOWN = "Test Town"
SCHOOL_YEAR = "2024/2025"

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
