from __future__ import annotations

import json
import uuid
from datetime import datetime, time, timezone
from typing import Iterable, Optional

from icalendar import Calendar, Event, vDate, vText

from ..core.constants import DEFAULT_ICS_PRODID, DEFAULT_ICS_UID_DOMAIN, ICS_MIMETYPE
from ..core.exceptions import SerializationError
from ..leave.model import CalendarEvent


class IcsExporter:
    """iCalendar 2.0 document with one all-day VEVENT per calendar event.

    Escaping, 75-octet folding and CRLF endings are done by ``icalendar``.
    DTSTAMP is ``generated_at`` when given, otherwise midnight UTC of the
    event's first day, so the same events always give the same text.
    """

    mimetype = ICS_MIMETYPE

    def __init__(self, *, uid_domain: str = DEFAULT_ICS_UID_DOMAIN):
        self._uid_domain = uid_domain

    def uid_for(self, event: CalendarEvent) -> str:
        key = json.dumps([event.employee_name, event.leave_type, event.start_date.isoformat()])
        return f"{uuid.uuid5(uuid.NAMESPACE_URL, key)}@{self._uid_domain}"

    @staticmethod
    def _vevent(event: CalendarEvent, uid: str, dtstamp: datetime) -> Event:
        vevent = Event()
        vevent.add("uid", uid)
        vevent.add("dtstamp", dtstamp)
        vevent.add("summary", vText(event.title))
        vevent.add("description", vText(f"{event.leave_type} ({event.status})"))
        vevent.add("categories", vText(event.leave_type))
        vevent.add("status", "CONFIRMED")
        vevent.add("transp", "TRANSPARENT")
        vevent.add("class", "PUBLIC")
        vevent.add("dtstart", vDate(event.start_date))
        vevent.add("dtend", vDate(event.end_date))
        return vevent

    def export(
        self,
        events: Iterable[CalendarEvent],
        prod_id: str = DEFAULT_ICS_PRODID,
        *,
        generated_at: Optional[datetime] = None,
    ) -> str:
        if not prod_id or not prod_id.strip():
            raise SerializationError("prod_id must not be empty")

        cal = Calendar()
        cal.add("prodid", prod_id)
        cal.add("version", "2.0")
        cal.add("calscale", "GREGORIAN")
        cal.add("method", "PUBLISH")

        seen_uids: set[str] = set()
        for event in events:
            uid = self.uid_for(event)
            if uid in seen_uids:
                raise SerializationError(
                    f"Duplicate calendar UID for {event.employee_name!r} / {event.leave_type!r}"
                    f" starting {event.start_date.isoformat()}"
                )
            seen_uids.add(uid)
            dtstamp = generated_at or datetime.combine(event.start_date, time(), tzinfo=timezone.utc)
            cal.add_component(self._vevent(event, uid, dtstamp))

        try:
            return cal.to_ical().decode("utf-8")
        except UnicodeEncodeError as e:
            raise SerializationError(f"Cannot encode calendar as UTF-8: {e}") from e
