"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

NANOS_PER_MILLI = 1_000_000
MILLIS_PER_DAY = 24 * 60 * 60 * 1000

# Weeks run Thursday -> Wednesday (JS-style weekday numbering, Sunday=0).
BUSINESS_WEEK_START_WEEKDAY = 4
DAYS_PER_WEEK = 7

EXPIRING_SOON_DAYS = 30

APPRAISAL_INTERVAL_MONTHS = 3
APPRAISAL_DUE_SOON_DAYS = 14

STOCK_ARCHIVE_AFTER_DAYS = 7

DEFAULT_QUERY_STALE_SECONDS = 30.0

# Historical category markers embedded at the start of Shift.department.
PAID_LEAVE_PREFIX = "[PAID-LEAVE] "
UNPAID_LEAVE_PREFIX = "[UNPAID-LEAVE] "
SICKNESS_PREFIX = "[SICKNESS] "

PAYROLL_CSV_HEADERS = (
    "Employee Name",
    "Worked Hours",
    "Paid Leave Hours",
    "Unpaid Leave Hours",
    "Sickness Hours",
    "Holiday Days",
)

EXPERIENCE_OPTIONS = (
    "Milton General",
    "The Happy Institute",
    "The Dollhouse",
    "Wizard Of Oz",
    "St Georges General",
    "Break The Bank",
    "Marvellous Magic School",
    "Riddled",
    "Hell House",
    "The Don's Revenge",
    "Whodunit",
    "Battle Masters",
    "FEC General",
    "Time Raiders",
    "Laser Quest",
    "Retro Arcade",
    "7 Sins",
    "CSI Disco",
    "CSI Mafia",
    "Karaoke Lounge",
    "Karaoke Disco",
    "Like TV Game Show",
    "Splatter Room",
)

INVENTORY_LOCATIONS = ("Bar", "FEC Cafe", "Battle Masters")

BADGE_CATEGORIES = ("Attendance", "Performance", "Experience", "Team", "Milestone")

# Training titles name the experience last: "Game Master - Hell House".
TRAINING_TITLE_SEPARATOR = " - "
