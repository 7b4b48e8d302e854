from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..container import Container
from .model import CheckIn


def register(app: Flask, container: Container) -> None:
    recorder = container.attendance_recorder
    gate = container.gate

    @app.route("/api/attendance", methods=["POST"], endpoint="record_attendance")
    def record_attendance():
        data = request.get_json(silent=True) or {}
        check_in = CheckIn(
            name=data.get("name", ""),
            identity_id=data.get("idNumber", ""),
            year_level=data.get("yearLevel", ""),
            section=data.get("section", ""),
            sheet_date=data.get("sheetDate") or None,
        )
        result = recorder.record_attendance(check_in, gate.current_session())
        return jsonify({"success": result.success, "sheet": result.partition_key}), 201

    @app.route("/api/attendance", methods=["GET"], endpoint="get_attendance")
    def get_attendance():
        records = recorder.get_attendance(request.args.get("sheetDate", ""), gate.current_session())
        return jsonify(
            [
                {
                    "id": r.id,
                    "name": r.name,
                    "idNumber": r.identity_id,
                    "yearLevel": r.year_level,
                    "section": r.section,
                    "timestamp": r.timestamp,
                }
                for r in records
            ]
        )

    @app.route("/api/attendance/sheets", methods=["GET"], endpoint="attendance_sheets")
    def attendance_sheets():
        return jsonify(recorder.list_partitions(gate.current_session()))

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    def attendance_stats():
        aggregate = recorder.get_aggregate(request.args.get("sheetDate", ""), gate.current_session())
        data = asdict(aggregate)
        data["last_updated"] = aggregate.last_updated.isoformat() if aggregate.last_updated else None
        return jsonify(data)
