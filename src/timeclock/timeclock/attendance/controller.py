from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http_utils import json_errors, parse_json_field
from ..core.exceptions import ValidationError
from ..container import Container

ATTENDANCE_EXTENSIONS = (".dat", ".txt", ".csv")


def _extension(file_name: str) -> str:
    return "." + file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""


def _validate_upload_names(attendance_name: str, user_name: str) -> None:
    if _extension(attendance_name) not in ATTENDANCE_EXTENSIONS:
        raise ValidationError(f"Invalid attendance file type. Supported: {', '.join(ATTENDANCE_EXTENSIONS)}")
    if not attendance_name.upper().startswith("C"):
        raise ValidationError('Attendance file name must start with "C" (e.g., C001.dat)')
    if _extension(user_name) != ".dat":
        raise ValidationError("User file must be a .dat file")
    if not user_name.lower().startswith("user"):
        raise ValidationError('User file name must start with "user" (e.g., user.dat)')


def _require_upload(field: str):
    storage = request.files.get(field)
    if storage is None or not storage.filename:
        raise ValidationError(f"{field} is required")
    return storage


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/attendance/upload", methods=["POST"], endpoint="attendance_upload")
    @json_errors("Failed to process files")
    def upload():
        if not request.files.get("attendanceFile") or not request.files.get("userFile"):
            raise ValidationError("Both attendance file and user file are required")
        attendance_file = _require_upload("attendanceFile")
        user_file = _require_upload("userFile")
        _validate_upload_names(attendance_file.filename, user_file.filename)

        settings = parse_json_field(request.form.get("settings"), "settings")
        report = service.process_file(
            attendance_file.read(),
            attendance_file.filename,
            settings,
            user_file.read(),
        )
        return jsonify(
            {
                "success": True,
                "message": f"Successfully processed {report.total_records} records for {report.unique_users} users",
                "report": report.to_dict(),
            }
        )

    @app.route("/attendance/parse-text", methods=["POST"], endpoint="attendance_parse_text")
    @json_errors("Failed to parse data")
    def parse_text():
        body = request.get_json(silent=True) or {}
        report = service.parse_text(body.get("data") or "", body.get("settings"))
        return jsonify(
            {
                "success": True,
                "message": f"Successfully processed {report.total_records} records",
                "report": report.to_dict(),
            }
        )

    @app.route("/v2/attendance/report", methods=["GET"], endpoint="v2_report")
    @json_errors("Failed to build report")
    def month_report():
        try:
            year = int(request.args["year"])
            month = int(request.args["month"])
        except (KeyError, ValueError):
            raise ValidationError("year and month query parameters are required")
        report = service.get_month_report(year, month, request.args.to_dict())
        return jsonify(report.to_dict())

    @app.route("/v2/attendance/employees", methods=["GET"], endpoint="v2_employees")
    @json_errors("Failed to list employees")
    def employees():
        return jsonify([e.to_dict() for e in service.list_employees()])

    @app.route("/v2/attendance/upload-users", methods=["POST"], endpoint="v2_upload_users")
    @json_errors("Failed to upload users")
    def upload_users():
        result = service.import_directory(_require_upload("file").read())
        return jsonify({"success": True, **result})

    @app.route("/v2/attendance/upload-attendance", methods=["POST"], endpoint="v2_upload_attendance")
    @json_errors("Failed to upload attendance")
    def upload_attendance():
        result = service.import_punches(_require_upload("file").read())
        return jsonify({"success": True, **result})

    @app.route("/v2/attendance/mark-comp-off", methods=["POST"], endpoint="v2_mark_comp_off")
    @json_errors("Failed to mark COMP off")
    def mark_comp_off():
        body = request.get_json(silent=True) or {}
        record = service.mark_comp_off(_int_field(body, "userId"), body.get("date") or "")
        return jsonify({"success": True, "record": record.to_dict()})

    @app.route("/v2/attendance/clear-comp-off", methods=["POST"], endpoint="v2_clear_comp_off")
    @json_errors("Failed to clear COMP off")
    def clear_comp_off():
        body = request.get_json(silent=True) or {}
        record = service.clear_comp_off(_int_field(body, "userId"), body.get("date") or "")
        return jsonify({"success": True, "record": record.to_dict()})

    @app.route("/v2/attendance/add-punch", methods=["POST"], endpoint="v2_add_punch")
    @json_errors("Failed to add punch")
    def add_punch():
        body = request.get_json(silent=True) or {}
        record = service.add_punch(
            _int_field(body, "userId"),
            body.get("date") or "",
            body.get("time") or "",
            manual=bool(body.get("isManual", True)),
        )
        return jsonify({"success": True, "record": record.to_dict()})

    @app.route("/v2/attendance/delete-punch", methods=["DELETE"], endpoint="v2_delete_punch")
    @json_errors("Failed to delete punch")
    def delete_punch():
        body = request.get_json(silent=True) or {}
        record = service.delete_punch(_int_field(body, "userId"), body.get("punchTime") or "")
        return jsonify({"success": True, "record": record.to_dict()})


def _int_field(body: dict, field: str) -> int:
    try:
        return int(body[field])
    except (KeyError, TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")
