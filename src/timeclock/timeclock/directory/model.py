from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EmployeeDirectoryEntry:
    """One employee id -> display name mapping read from a directory export."""

    employee_id: int
    name: str
    record_index: int
    id_from_index: bool = False


@dataclass(frozen=True)
class Employee:
    """Employee known to the persisted store, keyed by the device id."""

    biometric_id: int
    name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or f"Employee {self.biometric_id}"

    def to_dict(self) -> dict:
        return {"biometricId": self.biometric_id, "name": self.name}
