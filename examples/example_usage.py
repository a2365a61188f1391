"""Example: using the service layer directly (no Flask).

Lists pending hour requests and each student's open meetings.
"""

import importlib

from config import get_settings_module

from src.keyclub.keyclub.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        supabase_config=settings.SUPABASE_CONFIG,
        admin_email=settings.ADMIN_EMAIL,
        admin_password_hash=settings.ADMIN_PASSWORD_HASH,
    )

    for req in container.hour_request_service.list_all():
        print(f"{req.request_id}: {req.student_s_number} {req.event_name} {req.hours_requested}h [{req.status.value}]")

    for meeting in container.meeting_service.list_open_meetings():
        print(f"open meeting {meeting.meeting_id} on {meeting.meeting_date} ({meeting.meeting_type.value})")


if __name__ == "__main__":
    main()
