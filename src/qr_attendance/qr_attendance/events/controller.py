from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request
from werkzeug.utils import secure_filename

from ..common.datetime_utils import now_local
from ..common.web import json_body, staff_required
from ..common.validators import require_choice
from ..container import Container
from ..core.enums import AttendanceType, StatusFilter
from ..tokens.imaging import render_png

_EVENT_KEYS = {
    "title": "title",
    "event_date": "eventDate",
    "venue": "venue",
    "sign_in_start": "signInStart",
    "sign_in_end": "signInEnd",
    "sign_out_start": "signOutStart",
    "sign_out_end": "signOutEnd",
    "grace_period_minutes": "gracePeriodMinutes",
    "status": "status",
    "description": "description",
}


def _event_fields(data: dict) -> dict:
    return {name: data.get(key) for name, key in _EVENT_KEYS.items()}


def _format_time(record) -> str:
    return record.timestamp.strftime("%I:%M %p") if record else "N/A"


def register(app: Flask, container: Container) -> None:
    def _requested_type() -> AttendanceType:
        return require_choice(request.args.get("type", AttendanceType.SIGN_IN.value), AttendanceType, "type")

    @app.route("/events", methods=["GET"], endpoint="list_events")
    @staff_required
    def list_events():
        events = container.event_service.list_events()
        return jsonify({"success": True, "events": [e.to_dict() for e in events]})

    @app.route("/events", methods=["POST"], endpoint="create_event")
    @staff_required
    def create_event():
        event_id = container.event_service.create_event(**_event_fields(json_body()))
        return jsonify({"success": True, "eventId": event_id}), 201

    @app.route("/events/<event_id>", methods=["GET"], endpoint="get_event")
    @staff_required
    def get_event(event_id: str):
        return jsonify({"success": True, "event": container.event_service.get_event(event_id).to_dict()})

    @app.route("/events/<event_id>", methods=["PUT"], endpoint="update_event")
    @staff_required
    def update_event(event_id: str):
        container.event_service.update_event(event_id, **_event_fields(json_body()))
        return jsonify({"success": True})

    @app.route("/events/<event_id>", methods=["DELETE"], endpoint="delete_event")
    @staff_required
    def delete_event(event_id: str):
        container.event_service.delete_event(event_id)
        return jsonify({"success": True})

    @app.route("/events/<event_id>/qr", methods=["GET"], endpoint="event_qr")
    @staff_required
    def event_qr(event_id: str):
        """Current rotating payload for the display device; it polls again after `redrawSeconds`."""
        event = container.event_service.get_event(event_id)
        attendance_type = _requested_type()

        payload, countdown = container.token_generator.snapshot(event.event_id, attendance_type)
        return jsonify(
            {
                "success": True,
                "payload": payload.to_dict(),
                "secondsRemaining": countdown.seconds_remaining,
                "redrawSeconds": container.redraw_seconds,
                "validitySeconds": container.token_generator.window_seconds,
            }
        )

    @app.route("/events/<event_id>/qr.png", methods=["GET"], endpoint="event_qr_png")
    @staff_required
    def event_qr_png(event_id: str):
        event = container.event_service.get_event(event_id)
        payload = container.token_generator.generate(event.event_id, _requested_type())
        return app.response_class(
            render_png(payload),
            mimetype="image/png",
            headers={"Cache-Control": "no-store"},
        )

    def _filtered_summary(event_id: str):
        summary = container.summary_service.build_summary(event_id)
        status = require_choice(request.args.get("status", StatusFilter.ALL.value), StatusFilter, "status")
        rows = container.summary_service.filter_rows(
            summary.records,
            search=request.args.get("search", ""),
            status=status,
        )
        return summary, rows

    @app.route("/events/<event_id>/summary", methods=["GET"], endpoint="event_summary")
    @staff_required
    def event_summary(event_id: str):
        summary, rows = _filtered_summary(event_id)
        data = summary.to_dict()
        data["records"] = [r.to_dict() for r in rows]
        data["shown"] = len(rows)
        return jsonify({"success": True, "summary": data})

    @app.route("/events/<event_id>/summary.csv", methods=["GET"], endpoint="event_summary_csv")
    @staff_required
    def event_summary_csv(event_id: str):
        summary, rows = _filtered_summary(event_id)

        out = io.StringIO()
        writer = csv.writer(out, quoting=csv.QUOTE_ALL)
        writer.writerow(["Student ID", "Name", "Course", "Year", "Section", "Sign-In", "Sign-Out", "Status"])
        for r in rows:
            s = r.student
            writer.writerow(
                [
                    s.student_id,
                    f"{s.last_name}, {s.first_name}",
                    s.course or "",
                    s.year_level or "",
                    s.section or "",
                    _format_time(r.sign_in),
                    _format_time(r.sign_out),
                    r.status.value,
                ]
            )

        filename = secure_filename(f"attendance-{summary.event.title or 'report'}-{now_local().strftime('%Y-%m-%d')}.csv")
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
