from __future__ import annotations

from flask import Flask, session

from ..common.web import admin_required, current_s_number, login_required, ok, payload
from ..container import Container
from .service import SessionUser


def register(app: Flask, container: Container) -> None:
    def _start_session(user: SessionUser) -> None:
        session.clear()
        session["s_number"] = user.s_number
        session["name"] = user.name
        session["role"] = user.role.value

    @app.route("/api/auth/register", methods=["POST"], endpoint="register")
    def register_student():
        data = payload()
        user = container.auth_service.register(
            data.get("s_number", ""),
            data.get("password", ""),
            data.get("name", ""),
        )
        _start_session(user)
        return ok(user, 201)

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = payload()
        user = container.auth_service.login(data.get("s_number", ""), data.get("password", ""))
        _start_session(user)
        return ok(user)

    @app.route("/api/auth/admin-login", methods=["POST"], endpoint="admin_login")
    def admin_login():
        data = payload()
        user = container.auth_service.admin_login(data.get("email", ""), data.get("password", ""))
        _start_session(user)
        return ok(user)

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok()

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return ok({"s_number": session["s_number"], "name": session.get("name"), "role": session.get("role")})

    @app.route("/api/auth/change-password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        data = payload()
        container.auth_service.change_password(
            current_s_number(),
            data.get("old_password", ""),
            data.get("new_password", ""),
        )
        return ok()

    @app.route("/api/students/me", methods=["GET"], endpoint="my_student_record")
    @login_required
    def my_student_record():
        return ok(container.student_service.get_student(current_s_number()))

    @app.route("/api/admin/students", methods=["GET"], endpoint="admin_students")
    @admin_required
    def admin_students():
        return ok(container.student_service.list_students())

    @app.route("/api/admin/students/<s_number>/reset-password", methods=["POST"], endpoint="admin_reset_password")
    @admin_required
    def admin_reset_password(s_number: str):
        container.auth_service.reset_password(s_number, payload().get("new_password", ""))
        return ok(message="Password reset successfully")
