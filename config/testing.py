DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

DIFF_EPSILON = None
WEEKLY_TARGET_HOURS = None
OPEN_PUNCH_POLICY = "EXCLUDE"

CALENDAR_PALETTE = None
ICS_PRODID = None
ICS_UID_DOMAIN = "test.invalid"

SNAPSHOT_PATH = None
