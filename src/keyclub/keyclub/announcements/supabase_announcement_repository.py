from __future__ import annotations

from typing import Any, Dict, Sequence

from ..common.datetime_utils import now_utc, parse_timestamp
from ..gateway import rest_base
from ..gateway.connection import SupabaseConnection
from ..gateway.rest_base import eq
from .model import Announcement
from .repository import AnnouncementRepository


def row_to_announcement(r: Dict[str, Any]) -> Announcement:
    return Announcement(
        announcement_id=str(r["id"]),
        title=r.get("title") or "",
        message=r.get("message") or "",
        date=parse_timestamp(r.get("date")),
    )


class SupabaseAnnouncementRepository(AnnouncementRepository):
    def __init__(self, conn_factory: SupabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Announcement]:
        rows = rest_base.select(self._conn_factory, "announcements", order="date.desc")
        return [row_to_announcement(r) for r in rows]

    def create(self, *, title: str, message: str) -> Announcement:
        r = rest_base.insert(
            self._conn_factory,
            "announcements",
            {"title": title, "message": message, "date": now_utc().isoformat()},
        )
        return row_to_announcement(r)

    def delete(self, announcement_id: str) -> bool:
        return bool(rest_base.delete(self._conn_factory, "announcements", filters={"id": eq(announcement_id)}))
