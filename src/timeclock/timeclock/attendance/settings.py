from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from ..common.datetime_utils import time_to_minutes
from ..common.validators import require_hhmm, require_int_in_range
from ..core.constants import (
    DEFAULT_EARLY_OUT_THRESHOLD_MINUTES,
    DEFAULT_LATE_THRESHOLD_MINUTES,
    DEFAULT_WORK_END_TIME,
    DEFAULT_WORK_START_TIME,
    MAX_THRESHOLD_MINUTES,
)
from ..core.exceptions import ValidationError

_JSON_KEYS = {
    "work_start_time": "workStartTime",
    "work_end_time": "workEndTime",
    "late_threshold_minutes": "lateThresholdMinutes",
    "early_out_threshold_minutes": "earlyOutThresholdMinutes",
}


@dataclass(frozen=True)
class AttendanceSettings:
    """Working hours and grace windows used to flag each day."""

    work_start_time: str = DEFAULT_WORK_START_TIME
    work_end_time: str = DEFAULT_WORK_END_TIME
    late_threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES
    early_out_threshold_minutes: int = DEFAULT_EARLY_OUT_THRESHOLD_MINUTES

    @property
    def work_start_minutes(self) -> int:
        return time_to_minutes(self.work_start_time)

    @property
    def work_end_minutes(self) -> int:
        return time_to_minutes(self.work_end_time)

    @property
    def shift_minutes(self) -> int:
        return self.work_end_minutes - self.work_start_minutes

    @classmethod
    def from_mapping(
        cls,
        data: Optional[Mapping[str, Any]],
        *,
        defaults: Optional["AttendanceSettings"] = None,
    ) -> "AttendanceSettings":
        """Merge a caller mapping over the defaults, one field at a time.

        Accepts the camelCase keys of the JSON contract as well as the
        attribute names. Missing or None values keep the default.
        """
        base = defaults or cls()
        if data is not None and not isinstance(data, Mapping):
            raise ValidationError("settings must be an object")
        values = {f.name: getattr(base, f.name) for f in fields(cls)}
        if data:
            for attr, json_key in _JSON_KEYS.items():
                raw = data.get(json_key, data.get(attr))
                if raw is not None and raw != "":
                    values[attr] = raw

        settings = cls(
            work_start_time=require_hhmm(values["work_start_time"], "workStartTime"),
            work_end_time=require_hhmm(values["work_end_time"], "workEndTime"),
            late_threshold_minutes=require_int_in_range(
                values["late_threshold_minutes"], "lateThresholdMinutes", 0, MAX_THRESHOLD_MINUTES
            ),
            early_out_threshold_minutes=require_int_in_range(
                values["early_out_threshold_minutes"], "earlyOutThresholdMinutes", 0, MAX_THRESHOLD_MINUTES
            ),
        )
        if settings.shift_minutes <= 0:
            raise ValidationError("workEndTime must be later than workStartTime")
        return settings

    def to_dict(self) -> dict:
        return {json_key: getattr(self, attr) for attr, json_key in _JSON_KEYS.items()}
