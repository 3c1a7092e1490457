from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Iterable, Sequence

from ..core.constants import DEFAULT_PALETTE
from ..core.exceptions import ValidationError
from .model import CalendarEvent, LeaveSpan


@dataclass
class ColorTable:
    """Employee -> color assignments for a single calendar build."""

    palette: Sequence[str]
    colors: dict[str, str] = field(default_factory=dict)

    def color_for(self, employee_name: str) -> str:
        color = self.colors.get(employee_name)
        if color is None:
            color = self.palette[len(self.colors) % len(self.palette)]
            self.colors[employee_name] = color
        return color


class LeaveEventBuilder:
    def build(self, leave_spans: Iterable[LeaveSpan], palette: Sequence[str] = DEFAULT_PALETTE) -> list[CalendarEvent]:
        events, _ = self.build_with_colors(leave_spans, palette)
        return events

    def build_with_colors(
        self,
        leave_spans: Iterable[LeaveSpan],
        palette: Sequence[str] = DEFAULT_PALETTE,
    ) -> tuple[list[CalendarEvent], ColorTable]:
        """Build events and return the color table used, e.g. for a legend.

        Spans repeating (employee, leave_type, status, start_date) are dropped,
        the first one wins. Colors follow first appearance in ``leave_spans``.
        """

        if not palette:
            raise ValidationError("palette must contain at least one color")

        table = ColorTable(palette=tuple(palette))
        seen: set[tuple] = set()
        events: list[CalendarEvent] = []

        for span in leave_spans:
            key = (span.employee_name, span.leave_type, span.status, span.start_date)
            if key in seen:
                continue
            seen.add(key)

            if span.end_date < span.start_date:
                raise ValidationError(
                    f"Leave of {span.employee_name} ends {span.end_date.isoformat()}"
                    f" before it starts {span.start_date.isoformat()}"
                )

            events.append(
                CalendarEvent(
                    title=f"{span.employee_name} - {span.leave_type}",
                    start_date=span.start_date,
                    end_date=span.end_date + timedelta(days=1),
                    color=table.color_for(span.employee_name),
                    employee_name=span.employee_name,
                    leave_type=span.leave_type,
                    status=span.status,
                )
            )

        return events, table
