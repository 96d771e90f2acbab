from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_request_date
from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    def list_students():
        students = container.roster_service.list_students()
        return jsonify([s.to_dict() for s in students])

    @app.route("/api/students", methods=["POST"], endpoint="add_student")
    def add_student():
        data = json_body()
        creation_date = parse_request_date(data.get("creationDate"), "creationDate")
        student = container.roster_service.add_student(data.get("name", ""), creation_date)
        return jsonify(student.to_dict()), 201

    @app.route("/api/students/search", methods=["GET"], endpoint="search_students")
    def search_students():
        students = container.roster_service.search_students(request.args.get("name", ""))
        return jsonify([s.to_dict() for s in students])

    @app.route("/api/students/<int:student_id>", methods=["DELETE"], endpoint="remove_student")
    def remove_student(student_id: int):
        changed = container.roster_service.remove_student(student_id)
        return jsonify({"id": student_id, "filesUpdated": changed})
