from .config import Config

DEBUG = True
LOG_LEVEL = "DEBUG"

DIFF_EPSILON = Config.DIFF_EPSILON
WEEKLY_TARGET_HOURS = Config.WEEKLY_TARGET_HOURS
OPEN_PUNCH_POLICY = Config.OPEN_PUNCH_POLICY

CALENDAR_PALETTE = Config.CALENDAR_PALETTE
ICS_PRODID = Config.ICS_PRODID
ICS_UID_DOMAIN = Config.ICS_UID_DOMAIN

SNAPSHOT_PATH = Config.SNAPSHOT_PATH
