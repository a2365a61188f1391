from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import MeetingType, SessionType
from .model import AttendanceRecord, Meeting


class MeetingRepository(Protocol):
    def get(self, meeting_id: str) -> Optional[Meeting]:
        raise NotImplementedError

    def list_meetings(self, *, only_open: bool = False) -> Sequence[Meeting]:
        """Newest meeting date first."""

        raise NotImplementedError

    def create(
        self,
        *,
        meeting_date: date,
        meeting_type: MeetingType,
        attendance_code: str,
        is_open: bool,
        created_by: str,
    ) -> Meeting:
        raise NotImplementedError

    def update(self, meeting_id: str, values: Mapping[str, Any]) -> Optional[Meeting]:
        raise NotImplementedError

    def delete(self, meeting_id: str) -> bool:
        raise NotImplementedError


class AttendanceRepository(Protocol):
    def find(self, *, meeting_id: str, student_s_number: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        meeting_id: str,
        student_s_number: str,
        attendance_code: str,
        session_type: SessionType,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def list_for_meeting(self, meeting_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_student(self, student_s_number: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def delete_for_meeting(self, meeting_id: str) -> int:
        raise NotImplementedError
