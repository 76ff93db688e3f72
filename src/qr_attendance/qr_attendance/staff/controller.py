from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import STAFF_ROLE, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/staff/login", methods=["POST"], endpoint="staff_login")
    def staff_login():
        data = json_body()
        username = container.staff_auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        session["role"] = STAFF_ROLE
        session["name"] = username
        return jsonify({"success": True, "username": username})

    @app.route("/staff/logout", methods=["POST"], endpoint="staff_logout")
    def staff_logout():
        session.pop("role", None)
        session.pop("name", None)
        return jsonify({"success": True})
