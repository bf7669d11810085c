from __future__ import annotations

from dataclasses import dataclass

from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import DayStatusStrategy
from .strategies.comp_strategy import CompStrategy
from .strategies.incomplete_strategy import IncompleteStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class DayStatusStrategyFactory:
    """Factory Pattern: choose the day strategy from the punch count."""

    def for_day(self, *, punch_count: int, is_comp: bool = False) -> DayStatusStrategy:
        if is_comp:
            return CompStrategy()
        if punch_count == 0:
            return AbsentStrategy()
        if punch_count % 2 == 0:
            return PresentStrategy()
        return IncompleteStrategy()
