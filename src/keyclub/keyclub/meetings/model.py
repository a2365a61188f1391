from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import MeetingType, SessionType


@dataclass(frozen=True)
class Meeting:
    """A club meeting; attendance is accepted only while ``is_open``."""

    meeting_id: str
    meeting_date: Optional[date]
    meeting_type: MeetingType
    attendance_code: str
    is_open: bool
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceRecord:
    attendance_id: str
    meeting_id: str
    student_s_number: str
    attendance_code: str
    session_type: SessionType
    submitted_at: Optional[datetime]


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model for admin attendance lists (record joined with student name)."""

    record: AttendanceRecord
    student_name: str


@dataclass(frozen=True)
class AttendanceHistoryRow:
    """Read-model for a student's history (record joined with its meeting)."""

    record: AttendanceRecord
    meeting: Optional[Meeting]
