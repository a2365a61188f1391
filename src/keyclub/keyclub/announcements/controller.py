from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, ok, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/announcements", methods=["GET"], endpoint="announcements")
    def announcements():
        return ok(container.announcement_service.list_announcements())

    @app.route("/api/admin/announcements", methods=["POST"], endpoint="admin_create_announcement")
    @admin_required
    def admin_create_announcement():
        data = payload()
        created = container.announcement_service.create(title=data.get("title", ""), message=data.get("message", ""))
        return ok(created, 201)

    @app.route("/api/admin/announcements/<announcement_id>", methods=["DELETE"], endpoint="admin_delete_announcement")
    @admin_required
    def admin_delete_announcement(announcement_id: str):
        container.announcement_service.delete(announcement_id)
        return ok()
