from __future__ import annotations

from flask import Flask, session

from ..common.web import admin_required, login_required, ok, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/events", methods=["GET"], endpoint="events")
    def events():
        return ok(container.event_service.list_events())

    @app.route("/api/events/<event_id>", methods=["GET"], endpoint="event_detail")
    def event_detail(event_id: str):
        return ok(container.event_service.get_event(event_id))

    @app.route("/api/events/<event_id>/signup", methods=["POST"], endpoint="event_signup")
    @login_required
    def event_signup(event_id: str):
        data = payload()
        attendee = container.event_service.sign_up(
            event_id=event_id,
            name=data.get("name") or session.get("name", ""),
            email=data.get("email", ""),
        )
        return ok(attendee, 201)

    @app.route("/api/events/<event_id>/signup", methods=["DELETE"], endpoint="event_unregister")
    @login_required
    def event_unregister(event_id: str):
        container.event_service.unregister(event_id=event_id, email=payload().get("email", ""))
        return ok()

    @app.route("/api/admin/events", methods=["POST"], endpoint="admin_create_event")
    @admin_required
    def admin_create_event():
        event = container.event_service.create_event(payload(), created_by=session.get("name", "admin"))
        return ok(event, 201)

    @app.route("/api/admin/events/<event_id>", methods=["PUT"], endpoint="admin_update_event")
    @admin_required
    def admin_update_event(event_id: str):
        return ok(container.event_service.update_event(event_id, payload()))

    @app.route("/api/admin/events/<event_id>", methods=["DELETE"], endpoint="admin_delete_event")
    @admin_required
    def admin_delete_event(event_id: str):
        container.event_service.delete_event(event_id)
        return ok()

    @app.route("/api/admin/events/<event_id>/attendees", methods=["GET"], endpoint="admin_event_attendees")
    @admin_required
    def admin_event_attendees(event_id: str):
        return ok(container.event_service.attendees(event_id))
