from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .announcements.repository import AnnouncementRepository
from .announcements.service import AnnouncementService
from .announcements.supabase_announcement_repository import SupabaseAnnouncementRepository
from .events.repository import EventRepository
from .events.service import EventService
from .events.supabase_event_repository import SupabaseEventRepository
from .gateway.connection import GatewayConfig, SupabaseConnection
from .hours.repository import HourRequestRepository
from .hours.service import HourRequestService
from .hours.supabase_hour_request_repository import SupabaseHourRequestRepository
from .meetings.repository import AttendanceRepository, MeetingRepository
from .meetings.service import MeetingService
from .meetings.supabase_meeting_repository import SupabaseAttendanceRepository, SupabaseMeetingRepository
from .students.repository import StudentRepository
from .students.service import AuthService, StudentService
from .students.supabase_student_repository import SupabaseStudentRepository
from .support.repository import SupportQuestionRepository
from .support.service import SupportService
from .support.supabase_support_repository import SupabaseSupportQuestionRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[SupabaseConnection]

    students_repo: StudentRepository
    hour_requests_repo: HourRequestRepository
    meetings_repo: MeetingRepository
    attendance_repo: AttendanceRepository
    events_repo: EventRepository
    announcements_repo: AnnouncementRepository
    support_repo: SupportQuestionRepository

    auth_service: AuthService
    student_service: StudentService
    hour_request_service: HourRequestService
    meeting_service: MeetingService
    event_service: EventService
    announcement_service: AnnouncementService
    support_service: SupportService


def assemble_container(
    *,
    students_repo: StudentRepository,
    hour_requests_repo: HourRequestRepository,
    meetings_repo: MeetingRepository,
    attendance_repo: AttendanceRepository,
    events_repo: EventRepository,
    announcements_repo: AnnouncementRepository,
    support_repo: SupportQuestionRepository,
    admin_email: str = "",
    admin_password_hash: str = "",
    conn: Optional[SupabaseConnection] = None,
) -> Container:
    """Wire services over the given repositories (any implementation)."""

    return Container(
        conn=conn,
        students_repo=students_repo,
        hour_requests_repo=hour_requests_repo,
        meetings_repo=meetings_repo,
        attendance_repo=attendance_repo,
        events_repo=events_repo,
        announcements_repo=announcements_repo,
        support_repo=support_repo,
        auth_service=AuthService(
            students_repo,
            admin_email=admin_email,
            admin_password_hash=admin_password_hash,
        ),
        student_service=StudentService(students_repo),
        hour_request_service=HourRequestService(hour_requests_repo, students_repo),
        meeting_service=MeetingService(meetings_repo, attendance_repo, students_repo),
        event_service=EventService(events_repo),
        announcement_service=AnnouncementService(announcements_repo),
        support_service=SupportService(support_repo),
    )


def build_container(*, supabase_config: dict[str, Any], admin_email: str = "", admin_password_hash: str = "") -> Container:
    config = GatewayConfig(
        url=str(supabase_config["url"]),
        api_key=str(supabase_config["api_key"]),
        timeout=float(supabase_config.get("timeout", 20)),
    )
    conn = SupabaseConnection.get_instance(config)

    return assemble_container(
        conn=conn,
        students_repo=SupabaseStudentRepository(conn),
        hour_requests_repo=SupabaseHourRequestRepository(conn),
        meetings_repo=SupabaseMeetingRepository(conn),
        attendance_repo=SupabaseAttendanceRepository(conn),
        events_repo=SupabaseEventRepository(conn),
        announcements_repo=SupabaseAnnouncementRepository(conn),
        support_repo=SupabaseSupportQuestionRepository(conn),
        admin_email=admin_email,
        admin_password_hash=admin_password_hash,
    )
