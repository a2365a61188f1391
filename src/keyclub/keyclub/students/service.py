from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from werkzeug.security import check_password_hash

from ..common.datetime_utils import now_utc
from ..common.passwords import hash_password, verify_password
from ..common.validators import normalize_s_number, require_min_length, require_non_empty, require_s_number
from ..core.constants import PASSWORD_MIN_LENGTH
from ..core.enums import AccountStatus, Role
from ..core.exceptions import (
    AuthenticationError,
    GatewayError,
    NotFoundError,
    ValidationError,
)
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    s_number: str
    name: str
    role: Role
    total_hours: float = 0.0


class AuthService:
    """Use cases: register, log in and manage student passwords."""

    def __init__(
        self,
        students: StudentRepository,
        *,
        admin_email: str = "",
        admin_password_hash: str = "",
    ):
        self._students = students
        self._admin_email = (admin_email or "").strip().lower()
        self._admin_password_hash = admin_password_hash or ""

    def register(self, s_number: str, password: str, name: str = "") -> SessionUser:
        s_number = require_s_number(s_number)
        require_min_length(password, "Password", PASSWORD_MIN_LENGTH)
        name = (name or "").strip()

        student = self._students.get_by_s_number(s_number)
        if not student:
            logger.info("Creating student record for %s", s_number)
            student = self._students.create(s_number=s_number, name=name or s_number)

        if self._students.get_auth_user(s_number):
            raise ValidationError("Account already exists. Please use the login page.")

        self._students.create_auth_user(s_number=s_number, password_hash=hash_password(password))

        display_name = name or student.name
        self._students.update(
            s_number,
            {
                "name": display_name,
                "account_status": AccountStatus.ACTIVE.value,
                "account_created": now_utc().isoformat(),
            },
        )
        logger.info("Registration completed for %s", s_number)
        return SessionUser(s_number=s_number, name=display_name, role=Role.STUDENT, total_hours=student.total_hours)

    def login(self, s_number: str, password: str) -> SessionUser:
        s_number = normalize_s_number(s_number)

        auth_user = self._students.get_auth_user(s_number)
        if not auth_user:
            raise AuthenticationError("No account found. Please register first.")

        if not verify_password(password, auth_user.password_hash):
            raise AuthenticationError("Incorrect password.")

        student = self._students.get_by_s_number(s_number)
        if not student:
            raise NotFoundError("Student record not found.")

        self._students.update(s_number, {"last_login": now_utc().isoformat()})
        return SessionUser(
            s_number=s_number,
            name=student.name,
            role=student.role,
            total_hours=student.total_hours,
        )

    def admin_login(self, email: str, password: str) -> SessionUser:
        email = (email or "").strip().lower()
        if not self._admin_email or not self._admin_password_hash:
            raise AuthenticationError("Admin login is not configured")

        try:
            ok = email == self._admin_email and check_password_hash(self._admin_password_hash, password or "")
        except ValueError:
            # e.g. a placeholder hash with an unknown method
            ok = False

        if not ok:
            raise AuthenticationError("Invalid admin credentials")
        return SessionUser(s_number="admin", name="Admin User", role=Role.ADMIN)

    def change_password(self, s_number: str, old_password: str, new_password: str) -> None:
        s_number = normalize_s_number(s_number)
        require_min_length(new_password, "Password", PASSWORD_MIN_LENGTH)

        auth_user = self._students.get_auth_user(s_number)
        if not auth_user:
            raise NotFoundError("Account not found")

        if not verify_password(old_password, auth_user.password_hash):
            raise AuthenticationError("Current password is incorrect")

        self._students.update_password_hash(s_number, hash_password(new_password))

    def reset_password(self, s_number: str, new_password: str) -> None:
        """Admin reset. The follow-up student update is best effort."""

        s_number = normalize_s_number(require_non_empty(s_number, "S-Number"))
        require_min_length(new_password, "Password", PASSWORD_MIN_LENGTH)

        if not self._students.get_by_s_number(s_number):
            raise NotFoundError("Student not found in system")
        if not self._students.get_auth_user(s_number):
            raise NotFoundError("No account found for this S-Number")

        if not self._students.update_password_hash(s_number, hash_password(new_password)):
            raise NotFoundError("No account found for this S-Number")

        try:
            self._students.update(
                s_number,
                {
                    "last_password_reset": now_utc().isoformat(),
                    "account_status": AccountStatus.ACTIVE.value,
                },
            )
        except GatewayError:
            logger.warning("Password reset for %s succeeded but the student record was not updated", s_number)


class StudentService:
    """Use case: look up students (admin screens, balances)."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def get_student(self, s_number: str) -> Student:
        student = self._students.get_by_s_number(normalize_s_number(s_number))
        if not student:
            raise NotFoundError("Student not found")
        return student

    def list_students(self) -> Sequence[Student]:
        return self._students.list_all()

    def get_total_hours(self, s_number: str) -> float:
        return self.get_student(s_number).total_hours
