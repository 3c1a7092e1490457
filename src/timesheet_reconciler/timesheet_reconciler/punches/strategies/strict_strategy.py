from __future__ import annotations

from typing import Optional

from ...core.enums import OpenPunchPolicy
from ...core.exceptions import InvalidInterval
from ..model import PunchInterval
from .base import OpenPunchStrategy


class StrictOpenPunchStrategy(OpenPunchStrategy):
    """Fail on the first open punch."""

    policy = OpenPunchPolicy.STRICT

    def on_open_punch(self, punch: PunchInterval) -> Optional[float]:
        raise InvalidInterval(
            f"Open punch for employee {punch.employee_id} at {punch.punch_in.isoformat()} has no punch_out",
            punch=punch,
        )
