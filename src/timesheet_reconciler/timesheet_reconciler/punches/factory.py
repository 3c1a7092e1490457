from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import OpenPunchPolicy
from ..core.exceptions import ValidationError
from .strategies.base import OpenPunchStrategy
from .strategies.exclude_strategy import ExcludeOpenPunchStrategy
from .strategies.strict_strategy import StrictOpenPunchStrategy


@dataclass
class OpenPunchStrategyFactory:
    """Factory Pattern: map a configured policy to its strategy."""

    def for_policy(self, policy: OpenPunchPolicy | str) -> OpenPunchStrategy:
        try:
            policy = OpenPunchPolicy(policy.strip().upper())
        except (AttributeError, ValueError):
            raise ValidationError(f"Unknown open punch policy: {policy!r}")

        if policy == OpenPunchPolicy.STRICT:
            return StrictOpenPunchStrategy()
        return ExcludeOpenPunchStrategy()
