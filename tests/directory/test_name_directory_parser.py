from __future__ import annotations

import pytest

from conftest import directory_record
from src.timeclock.timeclock.core.exceptions import IngestionError
from src.timeclock.timeclock.directory.layout import RecordLayout, detect_record_size
from src.timeclock.timeclock.directory.parser import NameDirectoryParser


@pytest.mark.parametrize(
    "length, expected",
    [
        (72 * 3, 72),
        (66 * 3, 66),
        (64 * 3, 64),
        (64 * 9, 72),  # 576 divides by both 64 and 72
        (66 * 32, 64),  # 2112 divides by both 66 and 64
        (130, 64),
    ],
)
def test_detect_record_size(length, expected):
    assert detect_record_size(length) == expected


def test_parses_names_and_ids_from_64_byte_records():
    buffer = directory_record(64, "ALICE", "5", index=0) + directory_record(64, "Bob Smith", "12", index=1)

    assert NameDirectoryParser().parse(buffer) == {5: "ALICE", 12: "Bob Smith"}


def test_parses_72_byte_records():
    buffer = b"".join(directory_record(72, f"USER{i}", str(100 + i), index=i) for i in range(3))

    assert NameDirectoryParser().parse(buffer) == {100: "USER0", 101: "USER1", 102: "USER2"}


def test_parses_66_byte_records():
    buffer = b"".join(directory_record(66, f"EMP{i}", str(i + 1), index=i) for i in range(3))

    assert NameDirectoryParser().parse(buffer) == {1: "EMP0", 2: "EMP1", 3: "EMP2"}


def test_trailing_partial_record_is_ignored():
    buffer = directory_record(64, "ALICE", "5") + b"\x00ZZZZZZZZZZZZZZZZZZZZ"

    assert NameDirectoryParser().parse(buffer) == {5: "ALICE"}


def test_missing_id_falls_back_to_record_index():
    buffer = directory_record(64, "ALICE", "5", index=0) + directory_record(64, "NOID", None, index=1)

    entries = {e.employee_id: e for e in NameDirectoryParser().parse_entries(buffer)}

    assert entries[2].name == "NOID"
    assert entries[2].id_from_index is True
    assert entries[5].id_from_index is False


def test_digits_before_the_name_are_not_used_as_id():
    record = bytearray(directory_record(64, "CAROL"))
    record[1] = ord("9")

    assert NameDirectoryParser().parse(bytes(record)) == {1: "CAROL"}


def test_zero_digit_run_is_skipped_for_next_positive_run():
    record = bytearray(directory_record(64, "DAVE"))
    record[30:31] = b"0"
    record[40:42] = b"42"

    assert NameDirectoryParser().parse(bytes(record)) == {42: "DAVE"}


def test_digit_run_reaching_record_end_is_not_complete():
    record = bytearray(directory_record(64, "ERIN"))
    record[61:64] = b"777"

    assert NameDirectoryParser().parse(bytes(record)) == {1: "ERIN"}


def test_records_without_printable_name_are_skipped():
    blank = bytes(64)
    buffer = blank + directory_record(64, "FRANK", "8", index=1)

    assert NameDirectoryParser().parse(buffer) == {8: "FRANK"}


def test_whitespace_only_name_is_skipped():
    buffer = directory_record(64, "   ", "3") + directory_record(64, "GINA", "4", index=1)

    assert NameDirectoryParser().parse(buffer) == {4: "GINA"}


def test_later_record_wins_on_id_collision():
    buffer = directory_record(64, "OLD NAME", "7", index=0) + directory_record(64, "NEW NAME", "7", index=1)

    assert NameDirectoryParser().parse(buffer) == {7: "NEW NAME"}


def test_no_valid_records_is_a_hard_failure():
    with pytest.raises(IngestionError, match="No valid user records"):
        NameDirectoryParser().parse(bytes(64 * 4))


def test_empty_buffer_is_a_hard_failure():
    with pytest.raises(IngestionError):
        NameDirectoryParser().parse(b"")


def test_explicit_layout_overrides_detection():
    # 144 bytes would be detected as two 72-byte records.
    buffer = directory_record(48, "HANK", "9", id_offset=40) * 3
    layout = RecordLayout(record_size=48, name_scan_start=10, name_scan_end=40)

    assert NameDirectoryParser(layout).parse(buffer) == {9: "HANK"}
