"""Application constants."""

USER_AGENT = "event-manager/1.0 (+attendee-outreach)"
DEFAULT_DATETIME_FORMAT = "%m/%d/%y %H:%M"
BAD_PHONE_NUMBER = "Bad number"
INVALID_DATE = "Invalid date information"
LOOKUP_FALLBACK_MESSAGE = (
    "You can find your representatives by visiting "
    "www.commoncause.org/take-action/find-elected-officials"
)
WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
BANNER = "Event Manager Initialized!"
REPORT_TITLE_WIDTH = 35
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "record_id",
    "event",
    "status",
    "duration_ms",
    "rows_in",
    "rows_out",
    "error_code",
    "message",
)
