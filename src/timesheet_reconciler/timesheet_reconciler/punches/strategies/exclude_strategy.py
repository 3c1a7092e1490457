from __future__ import annotations

import logging
from typing import Optional

from ...core.enums import OpenPunchPolicy
from ..model import PunchInterval
from .base import OpenPunchStrategy

logger = logging.getLogger(__name__)


class ExcludeOpenPunchStrategy(OpenPunchStrategy):
    """Leave open punches out of every sum, logging each one."""

    policy = OpenPunchPolicy.EXCLUDE

    def on_open_punch(self, punch: PunchInterval) -> Optional[float]:
        logger.warning(
            "Excluding open punch for employee_id=%s punched in at %s (no punch_out)",
            punch.employee_id,
            punch.punch_in.isoformat(),
        )
        return None
