from __future__ import annotations

from flask import Flask, session

from ..common.web import admin_required, ok, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/support", methods=["POST"], endpoint="submit_support_question")
    def submit_support_question():
        data = payload()
        question = container.support_service.submit(
            name=data.get("name", ""),
            subject=data.get("subject", ""),
            message=data.get("message", ""),
            s_number=data.get("s_number") or session.get("s_number"),
            user_type=data.get("user_type", "student"),
        )
        return ok(question, 201)

    @app.route("/api/admin/support", methods=["GET"], endpoint="admin_support_questions")
    @admin_required
    def admin_support_questions():
        return ok(container.support_service.list_all())

    @app.route("/api/admin/support/<question_id>/response", methods=["POST"], endpoint="admin_respond_support")
    @admin_required
    def admin_respond_support(question_id: str):
        data = payload()
        updated = container.support_service.respond(
            question_id,
            response=data.get("response", ""),
            status=data.get("status", "answered"),
        )
        return ok(updated)
