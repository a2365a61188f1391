from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_utc, parse_date, parse_timestamp
from ..core.constants import DEFAULT_EVENT_COLOR
from ..gateway import rest_base
from ..gateway.connection import SupabaseConnection
from ..gateway.rest_base import eq, first_or_none, in_
from .model import Event, EventAttendee
from .repository import EventRepository


def row_to_event(r: Dict[str, Any]) -> Event:
    return Event(
        event_id=str(r["id"]),
        title=r.get("title") or "",
        description=r.get("description") or "",
        location=r.get("location") or "",
        event_date=parse_date(r.get("event_date")),
        start_time=r.get("start_time"),
        end_time=r.get("end_time"),
        capacity=int(r.get("capacity") or 0),
        color=r.get("color") or DEFAULT_EVENT_COLOR,
        created_by=r.get("created_by"),
        created_at=parse_timestamp(r.get("created_at")),
    )


def row_to_attendee(r: Dict[str, Any]) -> EventAttendee:
    return EventAttendee(
        attendee_id=str(r["id"]),
        event_id=str(r["event_id"]),
        name=r.get("name") or "",
        email=r.get("email") or "",
        registered_at=parse_timestamp(r.get("registered_at")),
    )


class SupabaseEventRepository(EventRepository):
    def __init__(self, conn_factory: SupabaseConnection):
        self._conn_factory = conn_factory

    def list_events(self) -> Sequence[Event]:
        rows = rest_base.select(self._conn_factory, "events", order="event_date.asc")
        return [row_to_event(r) for r in rows]

    def get(self, event_id: str) -> Optional[Event]:
        r = first_or_none(rest_base.select(self._conn_factory, "events", filters={"id": eq(event_id)}, limit=1))
        return row_to_event(r) if r else None

    def create(self, values: Mapping[str, Any]) -> Event:
        payload = dict(values)
        payload["created_at"] = now_utc().isoformat()
        return row_to_event(rest_base.insert(self._conn_factory, "events", payload))

    def update(self, event_id: str, values: Mapping[str, Any]) -> Optional[Event]:
        payload = dict(values)
        payload["updated_at"] = now_utc().isoformat()
        r = first_or_none(rest_base.update(self._conn_factory, "events", payload, filters={"id": eq(event_id)}))
        return row_to_event(r) if r else None

    def delete(self, event_id: str) -> bool:
        return bool(rest_base.delete(self._conn_factory, "events", filters={"id": eq(event_id)}))

    def list_attendees(self, event_ids: Iterable[str]) -> Sequence[EventAttendee]:
        ids = list(event_ids)
        if not ids:
            return []
        rows = rest_base.select(
            self._conn_factory,
            "event_attendees",
            filters={"event_id": in_(ids)},
            order="registered_at.asc",
        )
        return [row_to_attendee(r) for r in rows]

    def find_attendee(self, *, event_id: str, email: str) -> Optional[EventAttendee]:
        rows = rest_base.select(
            self._conn_factory,
            "event_attendees",
            filters={"event_id": eq(event_id), "email": eq(email)},
            limit=1,
        )
        r = first_or_none(rows)
        return row_to_attendee(r) if r else None

    def add_attendee(self, *, event_id: str, name: str, email: str) -> EventAttendee:
        r = rest_base.insert(
            self._conn_factory,
            "event_attendees",
            {"event_id": event_id, "name": name, "email": email, "registered_at": now_utc().isoformat()},
        )
        return row_to_attendee(r)

    def remove_attendee(self, *, event_id: str, email: str) -> bool:
        rows = rest_base.delete(
            self._conn_factory,
            "event_attendees",
            filters={"event_id": eq(event_id), "email": eq(email)},
        )
        return bool(rows)

    def remove_all_attendees(self, event_id: str) -> None:
        rest_base.delete(self._conn_factory, "event_attendees", filters={"event_id": eq(event_id)})
