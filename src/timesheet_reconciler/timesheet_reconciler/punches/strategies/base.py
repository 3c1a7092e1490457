from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...core.enums import OpenPunchPolicy
from ...core.exceptions import InvalidInterval
from ..model import PunchInterval


class OpenPunchStrategy(ABC):
    """Strategy Pattern: decide what an open punch contributes to a sum."""

    policy: OpenPunchPolicy

    def attended_seconds(self, punch: PunchInterval) -> Optional[float]:
        """Seconds to add for ``punch``, or None when it is left out of the sum."""
        if punch.is_open:
            return self.on_open_punch(punch)

        seconds = punch.duration_seconds
        if seconds < 0:
            raise InvalidInterval(
                f"punch_out {punch.punch_out.isoformat()} is before punch_in {punch.punch_in.isoformat()}"
                f" (employee {punch.employee_id})",
                punch=punch,
            )
        return seconds

    @abstractmethod
    def on_open_punch(self, punch: PunchInterval) -> Optional[float]:
        raise NotImplementedError
