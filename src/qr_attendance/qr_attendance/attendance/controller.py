from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_unix
from ..common.web import current_student, json_body, json_error, student_required
from ..container import Container
from ..core.constants import SCAN_TICKET_KEY, SCAN_TICKET_MAX_AGE_SECONDS
from ..core.enums import AttendanceType
from ..core.exceptions import TokenExpiredError
from ..tokens.imaging import decode_image


def register(app: Flask, container: Container) -> None:
    def _inspect(code: str):
        # Any failure here leaves the previous ticket discarded; the student rescans.
        session.pop(SCAN_TICKET_KEY, None)
        ticket = container.attendance_service.inspect(code)
        session[SCAN_TICKET_KEY] = {
            "eventId": ticket.event.event_id,
            "type": ticket.attendance_type.value,
            "inspectedAt": now_unix(),
        }
        return jsonify({"success": True, "step": "confirm", "ticket": ticket.to_dict()})

    @app.route("/scan", methods=["POST"], endpoint="scan")
    @student_required
    def scan():
        code = str(json_body().get("code") or "").strip()
        if not code:
            return json_error("QR code content is empty", 400, code="malformed_payload")
        return _inspect(code)

    @app.route("/scan/image", methods=["POST"], endpoint="scan_image")
    @student_required
    def scan_image():
        upload = request.files.get("image")
        if upload is None:
            return json_error("No image uploaded", 400, code="malformed_payload")

        try:
            codes = decode_image(upload.stream)
        except (OSError, SyntaxError):
            # unreadable or truncated upload; Pillow reports broken PNG chunks as SyntaxError
            return json_error("Uploaded file is not an image", 400, code="malformed_payload")
        if not codes:
            return json_error("No QR code found in the image", 400, code="malformed_payload")
        return _inspect(codes[0])

    @app.route("/scan/confirm", methods=["POST"], endpoint="scan_confirm")
    @student_required
    def scan_confirm():
        ticket = session.pop(SCAN_TICKET_KEY, None)
        if not ticket:
            return json_error("There is no scanned code to confirm", 400, code="no_ticket")
        if now_unix() - float(ticket.get("inspectedAt", 0)) > SCAN_TICKET_MAX_AGE_SECONDS:
            raise TokenExpiredError()

        result = container.attendance_service.confirm(
            ticket["eventId"],
            AttendanceType(ticket["type"]),
            current_student(),
        )
        return jsonify({"success": True, "step": "success", "result": result.to_dict(), "message": result.message})

    @app.route("/student/history", methods=["GET"], endpoint="student_history")
    @student_required
    def student_history():
        student = current_student()
        history = container.history_service.for_student(student.student_id)
        return jsonify({"success": True, "student": student.to_dict(), "history": history.to_dict()})
