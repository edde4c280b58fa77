"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "Asia/Manila"
DEFAULT_WORK_DAYS = "MON,TUE,WED,THU,FRI"
DEFAULT_GRACE_MINUTES = 5
DEFAULT_OVERVIEW_DAYS = 30
MAX_REPORT_DAYS = 1830

# Lifetime check-ins a member needs before their average is graded.
ONBOARDING_THRESHOLD = 3

METRIC_MIN = 0
METRIC_MAX = 10

READINESS_GREEN_MIN = 70
READINESS_YELLOW_MIN = 40

ATTENDANCE_POINTS_GREEN = 100
ATTENDANCE_POINTS_YELLOW = 75
ATTENDANCE_POINTS_ABSENT = 0

READINESS_WEIGHT = 0.6
COMPLIANCE_WEIGHT = 0.4

TEAM_AT_RISK_SCORE = 70
TEAM_CRITICAL_SCORE = 60
TREND_THRESHOLD = 3

MEMBER_AT_RISK_READINESS = 60

# Per-metric cut-offs used by the "top reasons" breakdown.
STRESS_HIGH = 6
SLEEP_LOW = 5
MOOD_LOW = 5
PHYSICAL_LOW = 5

SUDDEN_CHANGE_MIN_HISTORY = 3
SUDDEN_CHANGE_HISTORY_DAYS = 7
SUDDEN_CHANGE_DROP = -10
