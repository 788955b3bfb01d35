"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

# (session_id, start, end, is_morning)
SESSION_SLOTS = (
    (1, time(8, 0), time(9, 0), True),
    (2, time(9, 0), time(10, 0), True),
    (3, time(10, 0), time(11, 0), True),
    (4, time(11, 0), time(12, 0), True),
    (5, time(13, 0), time(14, 0), False),
    (6, time(14, 0), time(15, 0), False),
    (7, time(15, 0), time(16, 0), False),
)

DAYS_OF_WEEK = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday")

SUBJECTS = (
    "Arabic Language",
    "Mathematics",
    "Physical Sciences",
    "Natural and Life Sciences",
    "French Language",
    "English Language",
    "History and Geography",
    "Islamic Studies",
    "Philosophy",
    "Amazigh Language",
    "Computer Science",
    "Technology (Civil Engineering)",
    "Technology (Mechanical Engineering)",
    "Technology (Electrical Engineering)",
    "Technology (Process Engineering)",
    "Accounting and Finance",
    "Economics and Management",
    "Law",
    "Spanish Language",
    "German Language",
    "Italian Language",
    "Physical Education",
)

DEFAULT_ROOM = "Unassigned room"
DEFAULT_ALERT_STREAK_THRESHOLD = 3
DEFAULT_CLASS_RANKING_LIMIT = 3
UNKNOWN_CLASS_NAME = "unknown"

ADMIN_USER_ID = "admin-1"
ADMIN_USER_NAME = "School Principal"

INSIGHT_LOADING_MESSAGE = "Analyzing attendance data..."
INSIGHT_EMPTY_MESSAGE = (
    "Welcome to the attendance system. Start recording session attendance "
    "and the smart analysis will appear here."
)
INSIGHT_FALLBACK_MESSAGE = "AI analysis is not available right now."
