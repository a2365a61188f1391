from __future__ import annotations

import pytest

from src.keyclub.keyclub.announcements.service import AnnouncementService
from src.keyclub.keyclub.core.exceptions import NotFoundError, ValidationError
from tests.fakes import FakeAnnouncementsRepo


def test_create_list_delete():
    svc = AnnouncementService(FakeAnnouncementsRepo())
    created = svc.create(title=" Meeting moved ", message="Room 204 this week")

    assert created.title == "Meeting moved"
    assert [a.announcement_id for a in svc.list_announcements()] == [created.announcement_id]

    svc.delete(created.announcement_id)
    assert svc.list_announcements() == []
    with pytest.raises(NotFoundError):
        svc.delete(created.announcement_id)


def test_title_and_message_required():
    svc = AnnouncementService(FakeAnnouncementsRepo())
    with pytest.raises(ValidationError):
        svc.create(title="", message="x")
    with pytest.raises(ValidationError):
        svc.create(title="x", message="   ")
