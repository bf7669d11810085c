"""Line parser for time-clock punch logs.

Expected layout (fields separated by tabs or two or more spaces)::

    USER_ID  DATE TIME  VERIFY_TYPE  IN_OUT  WORK_CODE  RESERVED
    5\t2025-12-01 09:47:09\t1\t0\t1\t0

The wall-clock digits are civil time in the configured UTC offset.
"""

from __future__ import annotations

import io
import logging
import re
from datetime import datetime
from typing import Iterable, Iterator, Optional

from ..common.datetime_utils import parse_utc_offset
from ..core.constants import (
    DEFAULT_CIVIL_UTC_OFFSET,
    DEFAULT_IN_OUT_FLAG,
    DEFAULT_RESERVED,
    DEFAULT_VERIFICATION_METHOD,
    DEFAULT_WORK_CODE,
)
from .model import PunchEvent

logger = logging.getLogger(__name__)

_FIELD_SEPARATOR = re.compile(r"\t+|\s{2,}")


def iter_text_lines(buffer: bytes) -> Iterator[str]:
    """Yield trimmed, non-empty lines from a UTF-8 buffer one at a time."""
    stream = io.TextIOWrapper(io.BytesIO(buffer), encoding="utf-8", errors="replace", newline=None)
    for raw in stream:
        line = raw.strip()
        if line:
            yield line


def _optional_int(tokens: list[str], index: int, default: int) -> int:
    if index >= len(tokens):
        return default
    try:
        return int(tokens[index])
    except ValueError:
        return default


class PunchLineParser:
    def __init__(self, utc_offset: str = DEFAULT_CIVIL_UTC_OFFSET):
        self._tz = parse_utc_offset(utc_offset)
        total_minutes = int(self._tz.utcoffset(None).total_seconds()) // 60
        sign = "-" if total_minutes < 0 else "+"
        hours, minutes = divmod(abs(total_minutes), 60)
        self._offset_suffix = f"{sign}{hours:02d}:{minutes:02d}"

    @property
    def tz(self):
        return self._tz

    def parse_line(self, line: str) -> Optional[PunchEvent]:
        """Parse one line, or return None (and log) when it cannot be used."""
        text = (line or "").strip()
        if not text:
            return None

        tokens = [t for t in _FIELD_SEPARATOR.split(text) if t]
        if len(tokens) < 2:
            logger.warning("Skipping punch line with too few fields: %r", text)
            return None

        try:
            employee_id = int(tokens[0])
        except ValueError:
            logger.warning("Skipping punch line with non-numeric user id: %r", text)
            return None

        if ":" in tokens[1]:
            stamp = tokens[1]
            next_index = 2
        elif len(tokens) > 2:
            stamp = f"{tokens[1]} {tokens[2]}"
            next_index = 3
        else:
            logger.warning("Skipping punch line without a time of day: %r", text)
            return None

        timestamp = self._parse_timestamp(stamp)
        if timestamp is None:
            logger.warning("Skipping punch line with invalid timestamp %r: %r", stamp, text)
            return None

        return PunchEvent(
            employee_id=employee_id,
            timestamp=timestamp,
            verification_method=_optional_int(tokens, next_index, DEFAULT_VERIFICATION_METHOD),
            in_out_flag=_optional_int(tokens, next_index + 1, DEFAULT_IN_OUT_FLAG),
            work_code=_optional_int(tokens, next_index + 2, DEFAULT_WORK_CODE),
            reserved=_optional_int(tokens, next_index + 3, DEFAULT_RESERVED),
        )

    def iter_events(self, lines: Iterable[str]) -> Iterator[PunchEvent]:
        """Lazily parse lines in order, dropping the ones that fail."""
        for line in lines:
            event = self.parse_line(line)
            if event is not None:
                yield event

    def parse(self, buffer: bytes) -> list[PunchEvent]:
        return list(self.iter_events(iter_text_lines(buffer)))

    def _parse_timestamp(self, stamp: str) -> Optional[datetime]:
        # The civil offset is appended so the digits are read as local wall-clock time.
        try:
            return datetime.fromisoformat(f"{stamp.strip()}{self._offset_suffix}")
        except ValueError:
            return None
