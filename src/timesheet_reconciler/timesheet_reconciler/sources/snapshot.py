from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import DataSourceUnavailable
from ..leave.model import LeaveSpan
from ..punches.model import PunchInterval
from ..timesheets.model import TimesheetEntry
from .memory import InMemoryLeaveSource, InMemoryPunchSource, InMemoryTimesheetSource

logger = logging.getLogger(__name__)


def _punch(r: dict[str, Any]) -> PunchInterval:
    return PunchInterval(
        employee_id=int(r["employee_id"]),
        punch_in=datetime.fromisoformat(r["punch_in"]),
        punch_out=datetime.fromisoformat(r["punch_out"]) if r.get("punch_out") else None,
    )


def _entry(r: dict[str, Any]) -> TimesheetEntry:
    return TimesheetEntry(
        employee_id=int(r["employee_id"]),
        date=parse_iso_date(r["date"]),
        project=str(r["project"]),
        activity=str(r["activity"]),
        duration_seconds=int(r["duration_seconds"]),
        comment=r.get("comment"),
    )


def _leave(r: dict[str, Any]) -> LeaveSpan:
    return LeaveSpan(
        employee_id=int(r["employee_id"]),
        employee_name=str(r["employee_name"]),
        leave_type=str(r["leave_type"]),
        status=str(r["status"]),
        start_date=parse_iso_date(r["start_date"]),
        end_date=parse_iso_date(r["end_date"]),
    )


class SnapshotSources:
    """Record sources backed by a JSON export of punches, bookings and leave.

    Expected layout::

        {"punches": [...], "timesheet": [...], "leave": [...]}

    The file is read on every call so a refreshed export is picked up without
    restarting the app.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def _load(self) -> tuple[InMemoryPunchSource, InMemoryTimesheetSource, InMemoryLeaveSource]:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            punches = [_punch(r) for r in raw.get("punches", [])]
            entries = [_entry(r) for r in raw.get("timesheet", [])]
            spans = [_leave(r) for r in raw.get("leave", [])]
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("Cannot read snapshot %s: %s", self._path, e)
            raise DataSourceUnavailable(f"Snapshot {self._path} is unavailable: {e}") from e

        return InMemoryPunchSource(punches), InMemoryTimesheetSource(entries), InMemoryLeaveSource(spans)

    def list_punches(self, **kwargs):
        return self._load()[0].list_punches(**kwargs)

    def list_entries(self, **kwargs):
        return self._load()[1].list_entries(**kwargs)

    def list_leave(self, **kwargs):
        return self._load()[2].list_leave(**kwargs)
