from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Daily attendance status; values are part of the JSON contract."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    INCOMPLETE = "INCOMPLETE"
    COMP = "COMP"


class PunchType(str, Enum):
    """Role of a punch inferred from its position in the sorted day."""

    IN = "IN"
    OUT = "OUT"


VERIFICATION_LABELS = {
    0: "Password",
    1: "Fingerprint",
    2: "Card",
    3: "Password + Fingerprint",
    4: "Card + Fingerprint",
    15: "Face",
}

MANUAL_VERIFICATION_LABEL = "Manual"


def verification_label(code: int) -> str:
    """Display label for a device verification code."""
    return VERIFICATION_LABELS.get(code, f"Type {code}")
