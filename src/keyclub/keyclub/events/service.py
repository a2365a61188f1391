from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any, Dict, Mapping, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_email, require_non_empty
from ..core.constants import DEFAULT_EVENT_COLOR
from ..core.exceptions import GatewayError, NotFoundError, ValidationError
from .model import Event, EventAttendee
from .repository import EventRepository

logger = logging.getLogger(__name__)


class EventService:
    def __init__(self, events: EventRepository):
        self._events = events

    @staticmethod
    def _event_values(data: Mapping[str, Any]) -> Dict[str, Any]:
        title = require_non_empty(data.get("title", ""), "Title")

        raw_date = data.get("date") or data.get("event_date")
        if isinstance(raw_date, date):
            event_date = raw_date
        else:
            try:
                event_date = parse_iso_date(require_non_empty(raw_date or "", "Date"))
            except ValueError:
                raise ValidationError("Date must be YYYY-MM-DD")

        try:
            capacity = int(data.get("capacity") or 0)
        except (TypeError, ValueError):
            raise ValidationError("Capacity must be a whole number")
        if capacity <= 0:
            raise ValidationError("Capacity must be greater than zero")

        return {
            "title": title,
            "description": (data.get("description") or "").strip(),
            "location": (data.get("location") or "").strip(),
            "event_date": event_date.isoformat(),
            "start_time": data.get("start_time") or data.get("startTime"),
            "end_time": data.get("end_time") or data.get("endTime"),
            "capacity": capacity,
            "color": data.get("color") or DEFAULT_EVENT_COLOR,
        }

    def list_events(self) -> Sequence[Event]:
        events = list(self._events.list_events())
        if not events:
            return []

        try:
            attendees = self._events.list_attendees([e.event_id for e in events])
        except GatewayError:
            logger.warning("Could not load event attendees; continuing without them")
            attendees = []

        by_event: Dict[str, list] = {}
        for a in attendees:
            by_event.setdefault(a.event_id, []).append(a)
        return [replace(e, attendees=tuple(by_event.get(e.event_id, []))) for e in events]

    def get_event(self, event_id: str) -> Event:
        event = self._events.get(str(event_id))
        if not event:
            raise NotFoundError("Event not found")
        try:
            attendees = self._events.list_attendees([event.event_id])
        except GatewayError:
            logger.warning("Could not load attendees for event %s", event.event_id)
            attendees = []
        return replace(event, attendees=tuple(attendees))

    def create_event(self, data: Mapping[str, Any], *, created_by: str = "admin") -> Event:
        values = self._event_values(data)
        values["created_by"] = created_by
        event = self._events.create(values)
        logger.info("Event %s created: %s", event.event_id, event.title)
        return event

    def update_event(self, event_id: str, data: Mapping[str, Any]) -> Event:
        updated = self._events.update(str(event_id), self._event_values(data))
        if not updated:
            raise NotFoundError("Event not found")
        return updated

    def delete_event(self, event_id: str) -> None:
        self._events.remove_all_attendees(str(event_id))
        if not self._events.delete(str(event_id)):
            raise NotFoundError("Event not found")

    def attendees(self, event_id: str) -> Sequence[EventAttendee]:
        return self._events.list_attendees([str(event_id)])

    def sign_up(self, *, event_id: str, name: str, email: str) -> EventAttendee:
        name = require_non_empty(name, "Name")
        email = require_email(email)

        if self._events.find_attendee(event_id=str(event_id), email=email):
            raise ValidationError("You are already registered for this event")

        event = self.get_event(event_id)
        if event.is_full:
            raise ValidationError("Event is at full capacity")

        return self._events.add_attendee(event_id=event.event_id, name=name, email=email)

    def unregister(self, *, event_id: str, email: str) -> None:
        if not self._events.remove_attendee(event_id=str(event_id), email=(email or "").strip()):
            raise NotFoundError("You are not registered for this event")
