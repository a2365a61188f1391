from __future__ import annotations

import logging
import random
from datetime import date
from typing import Any, Dict, Optional, Sequence, Union

from ..common.datetime_utils import parse_iso_date
from ..common.validators import normalize_s_number, parse_bool, require_non_empty
from ..core.constants import ATTENDANCE_CODE_ALPHABET, ATTENDANCE_CODE_LENGTH
from ..core.enums import MeetingType, SessionType
from ..core.exceptions import (
    AlreadySubmittedError,
    GatewayError,
    InvalidCodeError,
    MeetingClosedError,
    NotFoundError,
    ValidationError,
)
from ..students.repository import StudentRepository
from .model import AttendanceHistoryRow, AttendanceRecord, AttendanceRow, Meeting
from .repository import AttendanceRepository, MeetingRepository

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


def generate_code(rng: Optional[random.Random] = None) -> str:
    """Random attendance code, 6 characters of [A-Z0-9].

    Not unique across meetings and not meant to be a secret of any strength.
    """

    rng = rng or random
    return "".join(rng.choice(ATTENDANCE_CODE_ALPHABET) for _ in range(ATTENDANCE_CODE_LENGTH))


class MeetingService:
    def __init__(self, meetings: MeetingRepository, attendance: AttendanceRepository, students: StudentRepository):
        self._meetings = meetings
        self._attendance = attendance
        self._students = students

    @staticmethod
    def _parse_meeting_type(value: Union[MeetingType, str]) -> MeetingType:
        try:
            return MeetingType((value.value if isinstance(value, MeetingType) else str(value or "")).strip().lower())
        except ValueError:
            raise ValidationError("Meeting type must be 'morning' or 'afternoon'")

    @staticmethod
    def _parse_session_type(value: Union[SessionType, str, None]) -> SessionType:
        if value is None or value == "":
            return SessionType.BOTH
        try:
            return SessionType((value.value if isinstance(value, SessionType) else str(value)).strip().lower())
        except ValueError:
            raise ValidationError("Session type must be 'morning', 'afternoon' or 'both'")

    @staticmethod
    def _parse_meeting_date(value: Union[date, str]) -> date:
        if isinstance(value, date):
            return value
        if not isinstance(value, str):
            raise ValidationError("Meeting date must be YYYY-MM-DD")
        try:
            return parse_iso_date(require_non_empty(value, "Meeting date"))
        except ValueError:
            raise ValidationError("Meeting date must be YYYY-MM-DD")

    @staticmethod
    def _parse_code(value) -> str:
        if not isinstance(value, str):
            raise ValidationError("Attendance code must be text")
        return require_non_empty(value, "Attendance code")

    def _require_meeting(self, meeting_id: str) -> Meeting:
        meeting = self._meetings.get(str(meeting_id))
        if not meeting:
            raise NotFoundError("Meeting not found")
        return meeting

    # ----- admin -----

    def create_meeting(
        self,
        *,
        meeting_date: Union[date, str],
        meeting_type: Union[MeetingType, str],
        created_by: str,
        attendance_code: Optional[str] = None,
        is_open: Union[bool, str] = False,
    ) -> Meeting:
        if attendance_code is None or (isinstance(attendance_code, str) and not attendance_code.strip()):
            code = generate_code()
        else:
            code = self._parse_code(attendance_code)
        meeting = self._meetings.create(
            meeting_date=self._parse_meeting_date(meeting_date),
            meeting_type=self._parse_meeting_type(meeting_type),
            attendance_code=code,
            is_open=parse_bool(is_open, "is_open"),
            created_by=(created_by or "").strip() or "admin",
        )
        logger.info("Meeting %s created for %s", meeting.meeting_id, meeting.meeting_date)
        return meeting

    def update_meeting(self, meeting_id: str, **fields: Any) -> Meeting:
        values: Dict[str, Any] = {}
        if "attendance_code" in fields:
            values["attendance_code"] = self._parse_code(fields["attendance_code"])
        if "is_open" in fields:
            values["is_open"] = parse_bool(fields["is_open"], "is_open")
        if "meeting_type" in fields:
            values["meeting_type"] = self._parse_meeting_type(fields["meeting_type"]).value
        if "meeting_date" in fields:
            values["meeting_date"] = self._parse_meeting_date(fields["meeting_date"]).isoformat()
        if not values:
            raise ValidationError("Nothing to update")

        updated = self._meetings.update(str(meeting_id), values)
        if not updated:
            raise NotFoundError("Meeting not found")
        return updated

    def open_meeting(self, meeting_id: str) -> Meeting:
        return self.update_meeting(meeting_id, is_open=True)

    def close_meeting(self, meeting_id: str) -> Meeting:
        return self.update_meeting(meeting_id, is_open=False)

    def regenerate_code(self, meeting_id: str) -> Meeting:
        return self.update_meeting(meeting_id, attendance_code=generate_code())

    def delete_meeting(self, meeting_id: str) -> None:
        meeting = self._require_meeting(meeting_id)
        removed = self._attendance.delete_for_meeting(meeting.meeting_id)
        logger.info("Deleted %d attendance records for meeting %s", removed, meeting.meeting_id)
        if not self._meetings.delete(meeting.meeting_id):
            raise NotFoundError("Meeting not found")

    def get_meeting(self, meeting_id: str) -> Meeting:
        return self._require_meeting(meeting_id)

    def list_meetings(self) -> Sequence[Meeting]:
        return self._meetings.list_meetings()

    def list_open_meetings(self) -> Sequence[Meeting]:
        return self._meetings.list_meetings(only_open=True)

    def meeting_attendance(self, meeting_id: str) -> Sequence[AttendanceRow]:
        rows = []
        for record in self._attendance.list_for_meeting(str(meeting_id)):
            student = self._students.get_by_s_number(record.student_s_number)
            if not student:
                logger.warning("No student found for attendance record %s", record.attendance_id)
            rows.append(AttendanceRow(record=record, student_name=student.name if student else "Unknown Student"))
        return rows

    # ----- students -----

    def submit_attendance(
        self,
        *,
        meeting_id: str,
        student_s_number: str,
        supplied_code: str,
        session_type: Union[SessionType, str, None] = SessionType.BOTH,
    ) -> AttendanceRecord:
        s_number = normalize_s_number(require_non_empty(student_s_number, "S-Number"))
        session = self._parse_session_type(session_type)

        meeting = self._require_meeting(meeting_id)
        if not meeting.is_open:
            raise MeetingClosedError("Attendance submission is closed for this meeting")
        if not supplied_code or meeting.attendance_code != supplied_code:
            raise InvalidCodeError("Invalid attendance code")

        if self._attendance.find(meeting_id=meeting.meeting_id, student_s_number=s_number):
            raise AlreadySubmittedError("You have already submitted attendance for this meeting")

        try:
            record = self._attendance.create(
                meeting_id=meeting.meeting_id,
                student_s_number=s_number,
                attendance_code=supplied_code,
                session_type=session,
            )
        except GatewayError as e:
            # unique (meeting_id, student_s_number) index hit by a concurrent submit
            if e.code == UNIQUE_VIOLATION:
                raise AlreadySubmittedError("You have already submitted attendance for this meeting") from e
            raise

        logger.info("Attendance recorded for %s at meeting %s", s_number, meeting.meeting_id)
        return record

    def student_history(self, s_number: str) -> Sequence[AttendanceHistoryRow]:
        rows = []
        for record in self._attendance.list_for_student(normalize_s_number(s_number)):
            meeting = self._meetings.get(record.meeting_id)
            if not meeting:
                logger.warning("No meeting found for attendance record %s", record.attendance_id)
            rows.append(AttendanceHistoryRow(record=record, meeting=meeting))
        return rows

    def missed_meetings(self, s_number: str, *, today: Optional[date] = None) -> Sequence[Meeting]:
        """Past meetings (strictly before today) the student has no record for."""

        today = today or date.today()
        attended = {r.meeting_id for r in self._attendance.list_for_student(normalize_s_number(s_number))}
        return [
            m
            for m in self._meetings.list_meetings()
            if m.meeting_id not in attended and m.meeting_date is not None and m.meeting_date < today
        ]
