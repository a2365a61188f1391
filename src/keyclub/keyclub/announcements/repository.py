from __future__ import annotations

from typing import Protocol, Sequence

from .model import Announcement


class AnnouncementRepository(Protocol):
    def list_all(self) -> Sequence[Announcement]:
        """Newest first."""

        raise NotImplementedError

    def create(self, *, title: str, message: str) -> Announcement:
        raise NotImplementedError

    def delete(self, announcement_id: str) -> bool:
        raise NotImplementedError

