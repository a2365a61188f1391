from __future__ import annotations

from datetime import date
from typing import Any, Dict, Mapping, Optional, Sequence

from ..common.datetime_utils import now_utc, parse_date, parse_timestamp
from ..core.enums import MeetingType, SessionType
from ..gateway import rest_base
from ..gateway.connection import SupabaseConnection
from ..gateway.rest_base import eq, first_or_none
from .model import AttendanceRecord, Meeting
from .repository import AttendanceRepository, MeetingRepository


def row_to_meeting(r: Dict[str, Any]) -> Meeting:
    return Meeting(
        meeting_id=str(r["id"]),
        meeting_date=parse_date(r.get("meeting_date")),
        meeting_type=MeetingType(r.get("meeting_type") or MeetingType.MORNING.value),
        attendance_code=r.get("attendance_code") or "",
        is_open=bool(r.get("is_open")),
        created_by=r.get("created_by"),
        created_at=parse_timestamp(r.get("created_at")),
    )


def row_to_attendance(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=str(r["id"]),
        meeting_id=str(r["meeting_id"]),
        student_s_number=str(r.get("student_s_number") or "").lower(),
        attendance_code=r.get("attendance_code") or "",
        session_type=SessionType(r.get("session_type") or SessionType.BOTH.value),
        submitted_at=parse_timestamp(r.get("submitted_at")),
    )


class SupabaseMeetingRepository(MeetingRepository):
    def __init__(self, conn_factory: SupabaseConnection):
        self._conn_factory = conn_factory

    def get(self, meeting_id: str) -> Optional[Meeting]:
        rows = rest_base.select(self._conn_factory, "meetings", filters={"id": eq(meeting_id)}, limit=1)
        r = first_or_none(rows)
        return row_to_meeting(r) if r else None

    def list_meetings(self, *, only_open: bool = False) -> Sequence[Meeting]:
        filters = {"is_open": eq(True)} if only_open else {}
        rows = rest_base.select(self._conn_factory, "meetings", filters=filters, order="meeting_date.desc")
        return [row_to_meeting(r) for r in rows]

    def create(
        self,
        *,
        meeting_date: date,
        meeting_type: MeetingType,
        attendance_code: str,
        is_open: bool,
        created_by: str,
    ) -> Meeting:
        r = rest_base.insert(
            self._conn_factory,
            "meetings",
            {
                "meeting_date": meeting_date.isoformat(),
                "meeting_type": meeting_type.value,
                "attendance_code": attendance_code,
                "is_open": bool(is_open),
                "created_by": created_by,
                "created_at": now_utc().isoformat(),
            },
        )
        return row_to_meeting(r)

    def update(self, meeting_id: str, values: Mapping[str, Any]) -> Optional[Meeting]:
        payload = dict(values)
        payload["updated_at"] = now_utc().isoformat()
        rows = rest_base.update(self._conn_factory, "meetings", payload, filters={"id": eq(meeting_id)})
        r = first_or_none(rows)
        return row_to_meeting(r) if r else None

    def delete(self, meeting_id: str) -> bool:
        return bool(rest_base.delete(self._conn_factory, "meetings", filters={"id": eq(meeting_id)}))


class SupabaseAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: SupabaseConnection):
        self._conn_factory = conn_factory

    def find(self, *, meeting_id: str, student_s_number: str) -> Sequence[AttendanceRecord]:
        rows = rest_base.select(
            self._conn_factory,
            "meeting_attendance",
            filters={"meeting_id": eq(meeting_id), "student_s_number": eq(student_s_number.lower())},
        )
        return [row_to_attendance(r) for r in rows]

    def create(
        self,
        *,
        meeting_id: str,
        student_s_number: str,
        attendance_code: str,
        session_type: SessionType,
    ) -> AttendanceRecord:
        r = rest_base.insert(
            self._conn_factory,
            "meeting_attendance",
            {
                "meeting_id": meeting_id,
                "student_s_number": student_s_number.lower(),
                "attendance_code": attendance_code,
                "session_type": session_type.value,
                "submitted_at": now_utc().isoformat(),
            },
        )
        return row_to_attendance(r)

    def list_for_meeting(self, meeting_id: str) -> Sequence[AttendanceRecord]:
        rows = rest_base.select(
            self._conn_factory,
            "meeting_attendance",
            filters={"meeting_id": eq(meeting_id)},
            order="submitted_at.asc",
        )
        return [row_to_attendance(r) for r in rows]

    def list_for_student(self, student_s_number: str) -> Sequence[AttendanceRecord]:
        rows = rest_base.select(
            self._conn_factory,
            "meeting_attendance",
            filters={"student_s_number": eq(student_s_number.lower())},
            order="submitted_at.asc",
        )
        return [row_to_attendance(r) for r in rows]

    def delete_for_meeting(self, meeting_id: str) -> int:
        return len(rest_base.delete(self._conn_factory, "meeting_attendance", filters={"meeting_id": eq(meeting_id)}))
