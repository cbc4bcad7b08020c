"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 1440

DEFAULT_RECURRENCE_DAYS = 90
MAX_RECURRENCE_DATES = 365
MONTHLY_STRIDE_DAYS = 30

DEFAULT_SHIFT_TYPE = "regular"
CONFLICT_REASON_OVERLAP = "Time overlap"

DEFAULT_LOCK_TIMEOUT_SECONDS = 5

ABILITY_SCORE_MIN = 1
ABILITY_SCORE_MAX = 5
DEFAULT_ABILITY_SCORE = 3
# Lowest total score for each rank, best first; anything lower is rank D
ABILITY_RANK_THRESHOLDS = ((23, "S"), (20, "A"), (16, "B"), (11, "C"))

WEEKDAY_NAMES = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")
DEFAULT_PREFERRED_START = "09:00"
DEFAULT_PREFERRED_END = "18:00"
