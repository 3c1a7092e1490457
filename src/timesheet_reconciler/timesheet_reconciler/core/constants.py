"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SECONDS_PER_HOUR = 3600

# Hours. Far below punch clock resolution, large enough to absorb float error.
DEFAULT_DIFF_EPSILON = 1e-6

DEFAULT_WEEKLY_TARGET_HOURS = 38.5

DEFAULT_PALETTE = ("#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd", "#8c564b")

DEFAULT_ICS_PRODID = "-//Timesheet Reconciler//Leave Calendar//EN"
DEFAULT_ICS_UID_DOMAIN = "timesheet-reconciler.local"

CSV_MIMETYPE = "text/csv"
ICS_MIMETYPE = "text/calendar"

# Leave statuses that lose to any other status for the same calendar slot.
INACTIVE_LEAVE_STATUSES = frozenset({"cancelled", "rejected"})
