import os


def _float(name):
    value = os.environ.get(name)
    return float(value) if value else None


def _palette(name):
    value = os.environ.get(name)
    if not value:
        return None
    return tuple(c.strip() for c in value.split(",") if c.strip())


class Config:
    """Settings shared by every environment, read from the process environment.

    Unset values stay None and fall back to the package defaults.
    """

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    DIFF_EPSILON = _float("DIFF_EPSILON")
    WEEKLY_TARGET_HOURS = _float("WEEKLY_TARGET_HOURS")
    # EXCLUDE (log and skip) or STRICT (fail on the first open punch)
    OPEN_PUNCH_POLICY = os.environ.get("OPEN_PUNCH_POLICY", "EXCLUDE").upper()

    CALENDAR_PALETTE = _palette("CALENDAR_PALETTE")
    ICS_PRODID = os.environ.get("ICS_PRODID") or None
    ICS_UID_DOMAIN = os.environ.get("ICS_UID_DOMAIN") or None

    # JSON export of punches/timesheet/leave records; empty sources when unset
    SNAPSHOT_PATH = os.environ.get("SNAPSHOT_PATH") or None
