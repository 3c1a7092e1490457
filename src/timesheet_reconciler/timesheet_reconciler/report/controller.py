from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Optional

from flask import Flask, jsonify, request

from ..core.constants import CSV_MIMETYPE, ICS_MIMETYPE
from ..core.exceptions import (
    DataSourceUnavailable,
    InvalidInterval,
    SerializationError,
    ValidationError,
)
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    reports = container.report_assembler

    def _parse_date(name: str) -> Optional[date]:
        value = (request.args.get(name) or "").strip()
        if not value:
            return None
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            raise ValidationError(f"'{name}' must be a YYYY-MM-DD date")

    def _employee_id(*, required: bool = True) -> Optional[int]:
        value = (request.args.get("employee_id") or "").strip()
        if not value:
            if required:
                raise ValidationError("'employee_id' is required")
            return None
        try:
            return int(value)
        except ValueError:
            raise ValidationError("'employee_id' must be an integer")

    def _attachment(body: str, *, mimetype: str, filename: str):
        return app.response_class(
            body.encode("utf-8"),
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    def _suffix(start: Optional[date], end: Optional[date]) -> str:
        return f"{start.strftime('%Y%m%d') if start else 'x'}_{end.strftime('%Y%m%d') if end else 'x'}"

    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(InvalidInterval)
    def _invalid_interval(e: InvalidInterval):
        return jsonify({"success": False, "message": str(e)}), 422

    @app.errorhandler(DataSourceUnavailable)
    def _source_unavailable(e: DataSourceUnavailable):
        logger.error("Data source unavailable: %s", e)
        return jsonify({"success": False, "message": "Data source unavailable"}), 503

    @app.errorhandler(SerializationError)
    def _serialization_error(e: SerializationError):
        logger.error("Export failed: %s", e)
        return jsonify({"success": False, "message": str(e)}), 500

    @app.route("/attendance-diff", methods=["GET"], endpoint="attendance_diff")
    def attendance_diff():
        rows = reports.attendance_diff(employee_id=_employee_id(), start=_parse_date("from"), end=_parse_date("to"))
        return jsonify(
            {
                "empty": not rows,
                "rows": [
                    {
                        "date": r.date.isoformat(),
                        "attended": round(r.attended_hours, 2),
                        "booked": round(r.booked_hours, 2),
                        "difference": round(r.difference_hours, 2),
                    }
                    for r in rows
                ],
            }
        )

    @app.route("/attendance-diff.csv", methods=["GET"], endpoint="attendance_diff_csv")
    def attendance_diff_csv():
        start, end = _parse_date("from"), _parse_date("to")
        body = reports.attendance_diff_csv(employee_id=_employee_id(), start=start, end=end)
        return _attachment(body, mimetype=CSV_MIMETYPE, filename=f"attendance_diff_{_suffix(start, end)}.csv")

    @app.route("/weekly-hours", methods=["GET"], endpoint="weekly_hours")
    def weekly_hours():
        report = reports.weekly_hours(employee_id=_employee_id(), start=_parse_date("from"), end=_parse_date("to"))
        return jsonify(
            {
                "empty": not report.rows,
                "rows": [
                    {
                        "date": r.work_date.isoformat(),
                        "week": r.iso_week_key,
                        "attended": round(r.attended_hours, 2),
                        "hours_per_week": round(r.hours_per_week, 2),
                        "difference_per_week": round(r.difference_per_week, 2),
                    }
                    for r in report.rows
                ],
                "weeks": [
                    {
                        "week": w.iso_week_key,
                        "week_start": w.week_start.isoformat(),
                        "total_hours": round(w.total_hours, 2),
                        "difference_from_target": round(w.difference_from_target, 2),
                    }
                    for w in report.weeks
                ],
            }
        )

    @app.route("/weekly-hours.csv", methods=["GET"], endpoint="weekly_hours_csv")
    def weekly_hours_csv():
        start, end = _parse_date("from"), _parse_date("to")
        body = reports.weekly_hours_csv(employee_id=_employee_id(), start=start, end=end)
        return _attachment(body, mimetype=CSV_MIMETYPE, filename=f"weekly_hours_{_suffix(start, end)}.csv")

    @app.route("/timesheet", methods=["GET"], endpoint="timesheet")
    def timesheet():
        report = reports.timesheet(employee_id=_employee_id(), start=_parse_date("from"), end=_parse_date("to"))
        return jsonify(
            {
                "empty": not report.rows,
                "total_hours": round(report.total_hours, 2),
                "rows": [
                    {
                        "employee_id": r.employee_id,
                        "date": r.date.isoformat(),
                        "hours": round(r.hours, 2),
                        "overall": round(r.overall_hours, 2),
                        "project": r.project,
                        "activity": r.activity,
                        "comment": r.comment,
                    }
                    for r in report.rows
                ],
            }
        )

    @app.route("/timesheet.csv", methods=["GET"], endpoint="timesheet_csv")
    def timesheet_csv():
        start, end = _parse_date("from"), _parse_date("to")
        body = reports.timesheet_csv(employee_id=_employee_id(), start=start, end=end)
        return _attachment(body, mimetype=CSV_MIMETYPE, filename=f"timesheet_{_suffix(start, end)}.csv")

    @app.route("/leave-calendar", methods=["GET"], endpoint="leave_calendar")
    def leave_calendar():
        calendar = reports.leave_calendar(
            start=_parse_date("from"),
            end=_parse_date("to"),
            employee_id=_employee_id(required=False),
        )
        return jsonify(
            {
                "empty": not calendar.events,
                "events": [e.to_dict() for e in calendar.events],
                "legend": calendar.legend,
            }
        )

    @app.route("/leave-calendar.ics", methods=["GET"], endpoint="leave_calendar_ics")
    def leave_calendar_ics():
        start, end = _parse_date("from"), _parse_date("to")
        body = reports.leave_calendar_ics(
            start=start,
            end=end,
            employee_id=_employee_id(required=False),
            generated_at=datetime.now(timezone.utc),
        )
        return _attachment(body, mimetype=ICS_MIMETYPE, filename=f"leave_calendar_{_suffix(start, end)}.ics")
