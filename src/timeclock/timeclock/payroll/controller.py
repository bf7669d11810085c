from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http_utils import json_errors
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/attendance/payout", methods=["POST"], endpoint="attendance_payout")
    @json_errors("Failed to calculate payout")
    def payout():
        body = request.get_json(silent=True) or {}
        breakdown = container.payout_service.calculate_from_payload(body)
        return jsonify({"success": True, "payout": breakdown.to_dict()})
