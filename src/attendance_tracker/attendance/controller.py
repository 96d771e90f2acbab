from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_iso_date, parse_request_date
from ..common.http import json_body
from ..common.validators import require_int
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/daily", methods=["GET"], endpoint="daily_attendance")
    def daily_attendance():
        day = parse_request_date(request.args.get("date"))
        if day is None:
            raise ValidationError("date is required")
        return jsonify([e.to_dict() for e in service.attendance_for_date(day)])

    @app.route("/api/attendance/save", methods=["POST"], endpoint="save_attendance")
    def save_attendance():
        data = json_body()
        day = parse_request_date(data.get("date"))
        if day is None:
            raise ValidationError("date is required")
        entries = data.get("entries")
        if not isinstance(entries, list):
            raise ValidationError("entries must be a list")

        report = service.save_daily_attendance(day, entries)
        return jsonify(report.to_dict()), 201

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="mark_attendance")
    def mark_attendance():
        data = json_body()
        student_id = require_int(data.get("studentId"), "studentId")
        entry = service.mark_attendance(student_id, data.get("status"), parse_request_date(data.get("date")))
        return jsonify(entry.to_dict())

    @app.route("/api/attendance/report", methods=["GET"], endpoint="attendance_report")
    def attendance_report():
        report = service.build_report(parse_request_date(request.args.get("date")))
        return jsonify(report.to_dict())

    @app.route("/api/attendance/dates", methods=["GET"], endpoint="attendance_dates")
    def attendance_dates():
        return jsonify([format_iso_date(d) for d in service.available_dates()])
