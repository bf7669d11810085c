"""Example: build a report straight from the service layer (no Flask, no database).

    python -m examples.example_usage C001.dat user.dat
"""

import json
import sys
from pathlib import Path

from src.timeclock.timeclock.attendance.service import AttendanceService


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        raise SystemExit(2)

    attendance_path = Path(sys.argv[1])
    user_file = Path(sys.argv[2]).read_bytes() if len(sys.argv) > 2 else None

    report = AttendanceService().process_file(attendance_path.read_bytes(), attendance_path.name, None, user_file)
    for user in report.users:
        print(
            f"{user.employee_id:>5} {user.user_name or '-':<20} "
            f"present={user.present_days} absent={user.absent_days} incomplete={user.incomplete_days} "
            f"worked={user.total_working_hours}h{user.total_working_minutes:02d}m avg={user.average_hours_per_day}"
        )
    print(json.dumps(report.to_dict()["dateRange"]))


if __name__ == "__main__":
    main()
