"""Record layout of the fixed-size binary user directory.

Devices do not tag the file with a format version, so the record size is
guessed from the total length. Callers that know the layout can pass an
explicit `RecordLayout` instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.constants import (
    DIRECTORY_NAME_SCAN_END,
    DIRECTORY_NAME_SCAN_START,
    DIRECTORY_RECORD_SIZE_DEFAULT,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordLayout:
    record_size: int = DIRECTORY_RECORD_SIZE_DEFAULT
    name_scan_start: int = DIRECTORY_NAME_SCAN_START
    name_scan_end: int = DIRECTORY_NAME_SCAN_END

    def record_count(self, length: int) -> int:
        return length // self.record_size


def detect_record_size(length: int) -> int:
    """72 if the length divides by 72, 66 if it divides by 66 but not 64, else 64."""
    if length % 72 == 0:
        return 72
    if length % 64 != 0 and length % 66 == 0:
        return 66
    return DIRECTORY_RECORD_SIZE_DEFAULT


def detect_layout(length: int) -> RecordLayout:
    size = detect_record_size(length)
    if size != DIRECTORY_RECORD_SIZE_DEFAULT:
        logger.info("Detected %d-byte record alignment for user data file (%d bytes)", size, length)
    if length % size != 0:
        logger.warning(
            "User data file size (%d) is not a multiple of %d; trailing %d bytes ignored",
            length,
            size,
            length % size,
        )
    return RecordLayout(record_size=size)
