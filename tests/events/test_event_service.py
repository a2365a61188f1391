from __future__ import annotations

from datetime import date

import pytest

from src.keyclub.keyclub.core.constants import DEFAULT_EVENT_COLOR
from src.keyclub.keyclub.core.exceptions import GatewayError, NotFoundError, ValidationError
from src.keyclub.keyclub.events.service import EventService
from tests.fakes import FakeEventsRepo


def _event_data(**overrides):
    data = {
        "title": "Beach cleanup",
        "description": "Bring gloves",
        "location": "Pier 3",
        "date": "2026-04-11",
        "capacity": 2,
    }
    data.update(overrides)
    return data


def _service():
    repo = FakeEventsRepo()
    return EventService(repo), repo


def test_create_event_applies_defaults():
    svc, _ = _service()
    event = svc.create_event(_event_data(), created_by="Ms. Lee")

    assert event.event_date == date(2026, 4, 11)
    assert event.color == DEFAULT_EVENT_COLOR
    assert event.created_by == "Ms. Lee"


@pytest.mark.parametrize(
    "overrides",
    [{"title": " "}, {"date": "04/11/2026"}, {"date": None}, {"capacity": 0}, {"capacity": "many"}],
)
def test_create_event_validation(overrides):
    svc, _ = _service()
    with pytest.raises(ValidationError):
        svc.create_event(_event_data(**overrides))


def test_sign_up_until_capacity():
    svc, _ = _service()
    event = svc.create_event(_event_data(capacity=2))

    svc.sign_up(event_id=event.event_id, name="Ana", email="ana@example.com")
    svc.sign_up(event_id=event.event_id, name="Ben", email="ben@example.com")

    with pytest.raises(ValidationError, match="full capacity"):
        svc.sign_up(event_id=event.event_id, name="Cy", email="cy@example.com")
    assert [a.name for a in svc.get_event(event.event_id).attendees] == ["Ana", "Ben"]


def test_duplicate_sign_up_is_rejected():
    svc, _ = _service()
    event = svc.create_event(_event_data())
    svc.sign_up(event_id=event.event_id, name="Ana", email="ana@example.com")

    with pytest.raises(ValidationError, match="already registered"):
        svc.sign_up(event_id=event.event_id, name="Ana", email="ana@example.com")


def test_sign_up_for_unknown_event():
    svc, _ = _service()
    with pytest.raises(NotFoundError):
        svc.sign_up(event_id="99", name="Ana", email="ana@example.com")


def test_unregister():
    svc, _ = _service()
    event = svc.create_event(_event_data())
    svc.sign_up(event_id=event.event_id, name="Ana", email="ana@example.com")

    svc.unregister(event_id=event.event_id, email="ana@example.com")

    assert svc.attendees(event.event_id) == []
    with pytest.raises(NotFoundError):
        svc.unregister(event_id=event.event_id, email="ana@example.com")


def test_list_events_survives_attendee_failure():
    svc, repo = _service()
    svc.create_event(_event_data())
    repo.attendee_error = GatewayError("boom", status_code=500)

    events = svc.list_events()

    assert len(events) == 1
    assert events[0].attendees == ()


def test_list_events_groups_attendees():
    svc, _ = _service()
    first = svc.create_event(_event_data(date="2026-04-11"))
    second = svc.create_event(_event_data(date="2026-05-02", title="Park day"))
    svc.sign_up(event_id=second.event_id, name="Ana", email="ana@example.com")

    events = {e.event_id: e for e in svc.list_events()}

    assert events[first.event_id].attendees == ()
    assert len(events[second.event_id].attendees) == 1


def test_update_and_delete_event():
    svc, repo = _service()
    event = svc.create_event(_event_data())
    svc.sign_up(event_id=event.event_id, name="Ana", email="ana@example.com")

    updated = svc.update_event(event.event_id, _event_data(title="Dune cleanup", capacity=5))
    assert updated.title == "Dune cleanup"
    assert updated.capacity == 5

    svc.delete_event(event.event_id)
    assert repo.events == {}
    assert repo.attendees == []
    with pytest.raises(NotFoundError):
        svc.update_event(event.event_id, _event_data())
