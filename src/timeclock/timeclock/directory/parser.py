from __future__ import annotations

import logging
from typing import Optional

from ..core.exceptions import IngestionError
from .layout import RecordLayout, detect_layout
from .model import EmployeeDirectoryEntry

logger = logging.getLogger(__name__)

_NUL = 0x00


def _is_printable(byte: int) -> bool:
    return 0x20 <= byte <= 0x7E


def _is_digit(byte: int) -> bool:
    return 0x30 <= byte <= 0x39


class NameDirectoryParser:
    """Heuristic parser for the binary employee directory export.

    Each fixed-size record holds a printable ASCII name somewhere in the
    scan window, followed later in the record by the employee id written
    as ASCII digits. Records that yield no name are skipped; an empty
    result means the wrong file was supplied.
    """

    def __init__(self, layout: Optional[RecordLayout] = None):
        self._layout = layout

    def parse(self, buffer: bytes) -> dict[int, str]:
        return {entry.employee_id: entry.name for entry in self.parse_entries(buffer)}

    def parse_entries(self, buffer: bytes) -> list[EmployeeDirectoryEntry]:
        layout = self._layout or detect_layout(len(buffer))
        count = layout.record_count(len(buffer))

        by_id: dict[int, EmployeeDirectoryEntry] = {}
        for index in range(count):
            offset = index * layout.record_size
            record = buffer[offset : offset + layout.record_size]
            entry = self.parse_record(record, index, layout)
            if entry is not None:
                # Last record wins when ids collide.
                by_id[entry.employee_id] = entry

        if not by_id:
            raise IngestionError("No valid user records found in user data file")

        logger.info("Loaded %d user mappings from %d records", len(by_id), count)
        return list(by_id.values())

    def parse_record(self, record: bytes, index: int, layout: RecordLayout) -> Optional[EmployeeDirectoryEntry]:
        window_end = min(layout.name_scan_end, len(record))
        name_start = next(
            (i for i in range(layout.name_scan_start, window_end) if _is_printable(record[i])),
            None,
        )
        if name_start is None:
            return None

        end = name_start
        while end < len(record) and record[end] != _NUL and _is_printable(record[end]):
            end += 1
        raw_name = record[name_start:end].decode("ascii")
        name = raw_name.strip()
        if not name:
            return None

        employee_id = self._scan_employee_id(record, name_start + len(name))
        if employee_id is None:
            employee_id = index + 1
            logger.warning("User ID not found in record %d, using index-based ID: %d", index, employee_id)
            return EmployeeDirectoryEntry(employee_id=employee_id, name=name, record_index=index, id_from_index=True)

        return EmployeeDirectoryEntry(employee_id=employee_id, name=name, record_index=index)

    @staticmethod
    def _scan_employee_id(record: bytes, start: int) -> Optional[int]:
        digits = ""
        for byte in record[start:]:
            if _is_digit(byte):
                digits += chr(byte)
                continue
            if digits:
                value = int(digits)
                if value > 0:
                    return value
                digits = ""
        # A digit run that reaches the end of the record is never closed.
        return None
