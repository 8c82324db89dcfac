from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..core.constants import DEFAULT_GOOD_THRESHOLD, DEFAULT_WARNING_THRESHOLD
from ..core.enums import Standing


class StandingPolicy(ABC):
    """Strategy: map an attendance rate (0-100) to a standing."""

    @abstractmethod
    def classify(self, rate: int) -> Standing:
        raise NotImplementedError


@dataclass(frozen=True)
class ThresholdStandingPolicy(StandingPolicy):
    """rate >= good -> GOOD, warning <= rate < good -> WARNING, else CRITICAL."""

    good: int = DEFAULT_GOOD_THRESHOLD
    warning: int = DEFAULT_WARNING_THRESHOLD

    def __post_init__(self):
        if not 0 <= self.warning <= self.good <= 100:
            raise ValueError(f"Invalid standing thresholds good={self.good} warning={self.warning}")

    def classify(self, rate: int) -> Standing:
        if rate >= self.good:
            return Standing.GOOD
        if rate >= self.warning:
            return Standing.WARNING
        return Standing.CRITICAL
