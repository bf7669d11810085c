from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import MANUAL_VERIFICATION_LABEL, verification_label


@dataclass(frozen=True)
class PunchEvent:
    """One observed swipe from the time clock.

    `timestamp` is always timezone-aware. The in/out flag, work code and
    reserved fields are carried through from the device but never used to
    derive attendance.
    """

    employee_id: int
    timestamp: datetime
    verification_method: int = 1
    in_out_flag: int = 0
    work_code: int = 1
    reserved: int = 0
    is_edited: bool = False

    @property
    def verification_label(self) -> str:
        if self.is_edited:
            return MANUAL_VERIFICATION_LABEL
        return verification_label(self.verification_method)

    def sort_key(self) -> tuple:
        return (self.timestamp, self.verification_method, self.in_out_flag, self.work_code, self.reserved, self.is_edited)
