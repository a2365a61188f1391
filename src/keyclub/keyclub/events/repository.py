from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Protocol, Sequence

from .model import Event, EventAttendee


class EventRepository(Protocol):
    def list_events(self) -> Sequence[Event]:
        """Events ordered by date, without attendees."""

        raise NotImplementedError

    def get(self, event_id: str) -> Optional[Event]:
        raise NotImplementedError

    def create(self, values: Mapping[str, Any]) -> Event:
        raise NotImplementedError

    def update(self, event_id: str, values: Mapping[str, Any]) -> Optional[Event]:
        raise NotImplementedError

    def delete(self, event_id: str) -> bool:
        raise NotImplementedError

    def list_attendees(self, event_ids: Iterable[str]) -> Sequence[EventAttendee]:
        raise NotImplementedError

    def find_attendee(self, *, event_id: str, email: str) -> Optional[EventAttendee]:
        raise NotImplementedError

    def add_attendee(self, *, event_id: str, name: str, email: str) -> EventAttendee:
        raise NotImplementedError

    def remove_attendee(self, *, event_id: str, email: str) -> bool:
        raise NotImplementedError

    def remove_all_attendees(self, event_id: str) -> None:
        raise NotImplementedError
