"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_GOOD_THRESHOLD = 80
DEFAULT_WARNING_THRESHOLD = 60
DEFAULT_REPORT_DAYS = 30
DATE_FORMAT = "%Y-%m-%d"
