"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_WORK_START_TIME = "09:30"
DEFAULT_WORK_END_TIME = "18:30"
DEFAULT_LATE_THRESHOLD_MINUTES = 15
DEFAULT_EARLY_OUT_THRESHOLD_MINUTES = 15
MAX_THRESHOLD_MINUTES = 120

DEFAULT_CIVIL_UTC_OFFSET = "+05:30"

# Optional trailing fields of a punch line: verify type, in/out, work code, reserved.
DEFAULT_VERIFICATION_METHOD = 1
DEFAULT_IN_OUT_FLAG = 0
DEFAULT_WORK_CODE = 1
DEFAULT_RESERVED = 0

DIRECTORY_RECORD_SIZE_DEFAULT = 64
DIRECTORY_NAME_SCAN_START = 10
DIRECTORY_NAME_SCAN_END = 50

PASTED_FILE_NAME = "pasted-data.txt"
