"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_SHIFT_START = time(9, 0)
DEFAULT_SHIFT_END = time(17, 0)
DEFAULT_STANDARD_HOURS_PER_DAY = 8.0

DEFAULT_RECENT_DAYS = 7
DEFAULT_AVAILABLE_MONTHS = 12
DEFAULT_UPCOMING_HOLIDAY_DAYS = 90
DEFAULT_UPCOMING_EVENT_DAYS = 30

MIN_PAYROLL_YEAR = 2000
MAX_WORKING_DAYS_PER_MONTH = 31
