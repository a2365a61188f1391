from __future__ import annotations

from flask import Flask, request, session

from ..common.web import admin_required, current_s_number, fail, login_required, ok, payload, student_required
from ..container import Container
from ..core.enums import RequestStatus


def register(app: Flask, container: Container) -> None:
    @app.route("/api/hours/requests", methods=["POST"], endpoint="submit_hour_request")
    @student_required
    def submit_hour_request():
        data = payload()
        created = container.hour_request_service.submit(
            student_s_number=current_s_number(),
            student_name=session.get("name", ""),
            event_name=data.get("event_name", ""),
            event_date=data.get("event_date", ""),
            hours_requested=data.get("hours_requested"),
            description=data.get("description", ""),
            image_name=data.get("image_name"),
        )
        return ok(created, 201)

    @app.route("/api/hours/requests", methods=["GET"], endpoint="my_hour_requests")
    @login_required
    def my_hour_requests():
        return ok(container.hour_request_service.list_for_student(current_s_number()))

    @app.route("/api/admin/hours/requests", methods=["GET"], endpoint="admin_hour_requests")
    @admin_required
    def admin_hour_requests():
        raw_status = (request.args.get("status") or "").strip().lower()
        if raw_status and raw_status not in {s.value for s in RequestStatus}:
            return fail("Unknown status filter")
        status = RequestStatus(raw_status) if raw_status else None
        return ok(container.hour_request_service.list_all(status=status))

    @app.route("/api/admin/hours/requests/<request_id>/decision", methods=["POST"], endpoint="decide_hour_request")
    @admin_required
    def decide_hour_request(request_id: str):
        data = payload()
        result = container.hour_request_service.decide(
            request_id=request_id,
            decision=data.get("decision", ""),
            admin_notes=data.get("admin_notes", ""),
            reviewed_by=session.get("name", "Admin"),
            override_hours=data.get("override_hours"),
        )
        return ok(result)

    @app.route("/api/admin/students/<s_number>/hours/audit", methods=["GET"], endpoint="audit_student_hours")
    @admin_required
    def audit_student_hours(s_number: str):
        audit = container.hour_request_service.audit_balance(s_number)
        return ok(audit, consistent=audit.consistent)
