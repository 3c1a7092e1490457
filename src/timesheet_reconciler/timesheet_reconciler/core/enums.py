from __future__ import annotations

from enum import Enum


class OpenPunchPolicy(str, Enum):
    """How aggregators treat a punch that has no punch_out yet."""

    EXCLUDE = "EXCLUDE"
    STRICT = "STRICT"


class ColumnKind(str, Enum):
    """Cell formatting applied by the CSV exporter."""

    TEXT = "text"
    HOURS = "hours"
    DATE = "date"
