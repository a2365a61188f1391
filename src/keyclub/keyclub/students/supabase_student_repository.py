from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from ..common.datetime_utils import now_utc, parse_timestamp
from ..core.enums import AccountStatus, Role
from ..gateway import rest_base
from ..gateway.connection import SupabaseConnection
from ..gateway.rest_base import eq, first_or_none
from .model import AuthUser, Student
from .repository import StudentRepository


def row_to_student(r: Dict[str, Any]) -> Student:
    return Student(
        s_number=str(r["s_number"]).lower(),
        name=r.get("name") or "",
        total_hours=float(r.get("total_hours") or 0),
        account_status=AccountStatus(r.get("account_status") or AccountStatus.PENDING.value),
        role=Role(r.get("role") or Role.STUDENT.value),
        email=r.get("email"),
        student_id=str(r["id"]) if r.get("id") is not None else None,
        last_login=parse_timestamp(r.get("last_login")),
        last_hour_update=parse_timestamp(r.get("last_hour_update")),
    )


class SupabaseStudentRepository(StudentRepository):
    def __init__(self, conn_factory: SupabaseConnection):
        self._conn_factory = conn_factory

    def get_by_s_number(self, s_number: str) -> Optional[Student]:
        rows = rest_base.select(self._conn_factory, "students", filters={"s_number": eq(s_number.lower())}, limit=1)
        r = first_or_none(rows)
        return row_to_student(r) if r else None

    def list_all(self) -> Sequence[Student]:
        rows = rest_base.select(self._conn_factory, "students", order="name.asc")
        return [row_to_student(r) for r in rows]

    def create(self, *, s_number: str, name: str, email: Optional[str] = None, total_hours: float = 0.0) -> Student:
        r = rest_base.insert(
            self._conn_factory,
            "students",
            {
                "s_number": s_number.lower(),
                "name": name,
                "email": email,
                "total_hours": total_hours,
                "account_status": AccountStatus.PENDING.value,
            },
        )
        return row_to_student(r)

    def update(self, s_number: str, values: Mapping[str, Any]) -> Optional[Student]:
        rows = rest_base.update(self._conn_factory, "students", values, filters={"s_number": eq(s_number.lower())})
        r = first_or_none(rows)
        return row_to_student(r) if r else None

    def get_auth_user(self, s_number: str) -> Optional[AuthUser]:
        rows = rest_base.select(self._conn_factory, "auth_users", filters={"s_number": eq(s_number.lower())}, limit=1)
        r = first_or_none(rows)
        if not r:
            return None
        return AuthUser(
            s_number=str(r["s_number"]).lower(),
            password_hash=r.get("password_hash") or "",
            auth_id=str(r["id"]) if r.get("id") is not None else None,
        )

    def create_auth_user(self, *, s_number: str, password_hash: str) -> AuthUser:
        r = rest_base.insert(
            self._conn_factory,
            "auth_users",
            {"s_number": s_number.lower(), "password_hash": password_hash},
        )
        return AuthUser(
            s_number=str(r["s_number"]).lower(),
            password_hash=r["password_hash"],
            auth_id=str(r["id"]) if r.get("id") is not None else None,
        )

    def update_password_hash(self, s_number: str, password_hash: str) -> bool:
        rows = rest_base.update(
            self._conn_factory,
            "auth_users",
            {"password_hash": password_hash, "updated_at": now_utc().isoformat()},
            filters={"s_number": eq(s_number.lower())},
        )
        return bool(rows)
