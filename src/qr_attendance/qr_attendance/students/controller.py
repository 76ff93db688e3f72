from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import current_student, json_body, staff_required
from ..container import Container
from ..core.constants import SCAN_TICKET_KEY, STUDENT_SESSION_KEY

_STUDENT_FIELDS = ("student_id", "first_name", "last_name", "middle_name", "course", "year_level", "section")
_FORM_KEYS = {
    "student_id": "studentId",
    "first_name": "firstName",
    "last_name": "lastName",
    "middle_name": "middleName",
    "course": "course",
    "year_level": "yearLevel",
    "section": "section",
}


def _student_fields(data: dict) -> dict:
    return {name: data.get(_FORM_KEYS[name]) for name in _STUDENT_FIELDS}


def register(app: Flask, container: Container) -> None:
    @app.route("/student/login", methods=["POST"], endpoint="student_login")
    def student_login():
        data = json_body()
        student = container.student_auth_service.login(data.get("studentId", ""))
        session.pop(SCAN_TICKET_KEY, None)
        session[STUDENT_SESSION_KEY] = student.to_dict()
        return jsonify({"success": True, "student": student.to_dict()})

    @app.route("/student/logout", methods=["POST"], endpoint="student_logout")
    def student_logout():
        container.student_auth_service.logout(current_student())
        session.pop(STUDENT_SESSION_KEY, None)
        session.pop(SCAN_TICKET_KEY, None)
        return jsonify({"success": True})

    @app.route("/student/register", methods=["POST"], endpoint="student_register")
    def student_register():
        uid = container.student_service.register(**_student_fields(json_body()))
        return (
            jsonify(
                {
                    "success": True,
                    "uid": uid,
                    "message": "Registration submitted. Please wait for admin approval.",
                }
            ),
            201,
        )

    @app.route("/admin/students", methods=["POST"], endpoint="admin_add_student")
    @staff_required
    def admin_add_student():
        uid = container.student_service.add_student(**_student_fields(json_body()))
        return jsonify({"success": True, "uid": uid}), 201

    @app.route("/admin/students/pending", methods=["GET"], endpoint="admin_pending_students")
    @staff_required
    def admin_pending_students():
        students = container.student_service.list_pending()
        return jsonify({"success": True, "students": [s.to_dict() for s in students]})

    @app.route("/admin/students/<uid>/approve", methods=["POST"], endpoint="admin_approve_student")
    @staff_required
    def admin_approve_student(uid: str):
        container.student_service.approve(uid)
        return jsonify({"success": True})

    @app.route("/admin/students/<uid>/reject", methods=["POST"], endpoint="admin_reject_student")
    @staff_required
    def admin_reject_student(uid: str):
        container.student_service.reject(uid)
        return jsonify({"success": True})
