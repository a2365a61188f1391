from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class EventAttendee:
    attendee_id: str
    event_id: str
    name: str
    email: str
    registered_at: Optional[datetime] = None


@dataclass(frozen=True)
class Event:
    """A volunteer event students can sign up for, up to ``capacity``."""

    event_id: str
    title: str
    description: str
    location: str
    event_date: Optional[date]
    start_time: Optional[str]
    end_time: Optional[str]
    capacity: int
    color: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    attendees: Tuple[EventAttendee, ...] = field(default_factory=tuple)

    @property
    def is_full(self) -> bool:
        return len(self.attendees) >= self.capacity
