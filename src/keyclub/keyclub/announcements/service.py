from __future__ import annotations

from typing import Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from .model import Announcement
from .repository import AnnouncementRepository


class AnnouncementService:
    def __init__(self, announcements: AnnouncementRepository):
        self._announcements = announcements

    def list_announcements(self) -> Sequence[Announcement]:
        return self._announcements.list_all()

    def create(self, *, title: str, message: str) -> Announcement:
        return self._announcements.create(
            title=require_non_empty(title, "Title"),
            message=require_non_empty(message, "Message"),
        )

    def delete(self, announcement_id: str) -> None:
        if not self._announcements.delete(str(announcement_id)):
            raise NotFoundError("Announcement not found")
