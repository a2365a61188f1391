from __future__ import annotations

import json

import httpx
import pytest

from src.keyclub.keyclub.core.enums import RequestStatus
from src.keyclub.keyclub.core.exceptions import GatewayError, NetworkError
from src.keyclub.keyclub.gateway import rest_base
from src.keyclub.keyclub.gateway.connection import GatewayConfig, SupabaseConnection
from src.keyclub.keyclub.hours.supabase_hour_request_repository import SupabaseHourRequestRepository


def _conn(handler):
    config = GatewayConfig(url="https://club.example.co/", api_key="anon-key", timeout=5)
    return SupabaseConnection(config, transport=httpx.MockTransport(handler))


def test_select_sends_credentials_filters_and_order():
    seen = {}

    def handler(request: httpx.Request):
        seen["request"] = request
        return httpx.Response(200, json=[{"id": 1}])

    rows = rest_base.select(
        _conn(handler),
        "students",
        filters={"s_number": rest_base.eq("s123456")},
        order="name.asc",
        limit=1,
    )

    request = seen["request"]
    assert rows == [{"id": 1}]
    assert request.url.path == "/rest/v1/students"
    assert request.url.params["s_number"] == "eq.s123456"
    assert request.url.params["order"] == "name.asc"
    assert request.url.params["limit"] == "1"
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["authorization"] == "Bearer anon-key"


def test_filter_builders():
    assert rest_base.eq(True) == "eq.true"
    assert rest_base.eq(False) == "eq.false"
    assert rest_base.in_(["1", "2"]) == "in.(1,2)"


def test_insert_posts_list_and_returns_first_row():
    seen = {}

    def handler(request: httpx.Request):
        seen["body"] = json.loads(request.content)
        seen["prefer"] = request.headers.get("prefer")
        return httpx.Response(201, json=[{"id": 7, "title": "Hi"}])

    row = rest_base.insert(_conn(handler), "announcements", {"title": "Hi"})

    assert row == {"id": 7, "title": "Hi"}
    assert seen["body"] == [{"title": "Hi"}]
    assert seen["prefer"] == "return=representation"


def test_insert_without_returned_row_is_an_error():
    conn = _conn(lambda request: httpx.Response(201, content=b""))
    with pytest.raises(GatewayError):
        rest_base.insert(conn, "announcements", {"title": "Hi"})


def test_error_response_becomes_gateway_error_with_code():
    body = {"code": "23505", "message": "duplicate key value violates unique constraint " + "x" * 400}
    conn = _conn(lambda request: httpx.Response(409, json=body))

    with pytest.raises(GatewayError) as exc_info:
        rest_base.insert(conn, "meeting_attendance", {"meeting_id": "1"})

    err = exc_info.value
    assert err.status_code == 409
    assert err.code == "23505"
    assert len(err.body) == 200


def test_non_json_error_body_has_no_code():
    conn = _conn(lambda request: httpx.Response(500, text="Internal Server Error"))
    with pytest.raises(GatewayError) as exc_info:
        rest_base.select(conn, "students")
    assert exc_info.value.code is None
    assert exc_info.value.body == "Internal Server Error"


def test_transport_failure_becomes_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError):
        rest_base.select(_conn(handler), "students")


def test_conditional_decide_filters_on_pending():
    seen = {}

    def handler(request: httpx.Request):
        seen["request"] = request
        return httpx.Response(200, json=[])

    repo = SupabaseHourRequestRepository(_conn(handler))
    result = repo.decide(request_id="5", status=RequestStatus.APPROVED, reviewed_by="Admin", admin_notes="")

    request = seen["request"]
    assert result is None
    assert request.method == "PATCH"
    assert request.url.params["id"] == "eq.5"
    assert request.url.params["status"] == "eq.pending"
    assert json.loads(request.content)["status"] == "approved"


def test_hour_request_rows_are_mapped():
    row = {
        "id": 3,
        "student_s_number": "S123456",
        "student_name": "Ana",
        "event_name": "Food bank",
        "event_date": "2026-02-28",
        "hours_requested": "2.5",
        "description": "Sorted cans",
        "status": "Approved",
        "submitted_at": "2026-03-01T10:00:00Z",
    }
    repo = SupabaseHourRequestRepository(_conn(lambda request: httpx.Response(200, json=[row])))

    req = repo.get("3")

    assert req.request_id == "3"
    assert req.student_s_number == "s123456"
    assert req.hours_requested == 2.5
    assert req.status == RequestStatus.APPROVED
    assert req.submitted_at.tzinfo is not None


def test_approval_writes_credited_hours():
    seen = {}

    def handler(request: httpx.Request):
        seen["body"] = json.loads(request.content)
        row = {"id": 5, "student_s_number": "s123456", "hours_requested": 5, "status": "approved", "approved_hours": 3}
        return httpx.Response(200, json=[row])

    repo = SupabaseHourRequestRepository(_conn(handler))
    result = repo.decide(
        request_id="5",
        status=RequestStatus.APPROVED,
        reviewed_by="Admin",
        admin_notes="",
        approved_hours=3.0,
    )

    assert seen["body"]["approved_hours"] == 3.0
    assert result.approved_hours == 3.0
    assert result.credited_hours == 3.0
