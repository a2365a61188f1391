from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import now_utc, parse_date, parse_timestamp
from ..core.enums import RequestStatus
from ..gateway import rest_base
from ..gateway.connection import SupabaseConnection
from ..gateway.rest_base import eq, first_or_none
from .model import HourRequest
from .repository import HourRequestRepository


def row_to_request(r: Dict[str, Any]) -> HourRequest:
    return HourRequest(
        request_id=str(r["id"]),
        student_s_number=str(r.get("student_s_number") or r.get("s_number") or "").lower(),
        student_name=r.get("student_name") or "",
        event_name=r.get("event_name") or "",
        event_date=parse_date(r.get("event_date")),
        hours_requested=float(r.get("hours_requested") or 0),
        description=r.get("description") or "",
        status=RequestStatus(str(r.get("status") or RequestStatus.PENDING.value).strip().lower()),
        submitted_at=parse_timestamp(r.get("submitted_at")),
        image_name=r.get("image_name"),
        admin_notes=r.get("admin_notes"),
        reviewed_by=r.get("reviewed_by"),
        reviewed_at=parse_timestamp(r.get("reviewed_at")),
        approved_hours=float(r["approved_hours"]) if r.get("approved_hours") is not None else None,
    )


class SupabaseHourRequestRepository(HourRequestRepository):
    def __init__(self, conn_factory: SupabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        student_s_number: str,
        student_name: str,
        event_name: str,
        event_date: date,
        hours_requested: float,
        description: str,
        image_name: Optional[str] = None,
    ) -> HourRequest:
        row: Dict[str, Any] = {
            "student_s_number": student_s_number.lower(),
            "student_name": student_name,
            "event_name": event_name,
            "event_date": event_date.isoformat(),
            "hours_requested": float(hours_requested),
            "description": description,
            "status": RequestStatus.PENDING.value,
            "submitted_at": now_utc().isoformat(),
        }
        if image_name:
            row["image_name"] = image_name
        return row_to_request(rest_base.insert(self._conn_factory, "hour_requests", row))

    def get(self, request_id: str) -> Optional[HourRequest]:
        rows = rest_base.select(self._conn_factory, "hour_requests", filters={"id": eq(request_id)}, limit=1)
        r = first_or_none(rows)
        return row_to_request(r) if r else None

    def list_requests(
        self,
        *,
        student_s_number: Optional[str] = None,
        status: Optional[RequestStatus] = None,
    ) -> Sequence[HourRequest]:
        filters: Dict[str, str] = {}
        if student_s_number is not None:
            filters["student_s_number"] = eq(student_s_number.lower())
        if status is not None:
            filters["status"] = eq(status.value)

        rows = rest_base.select(self._conn_factory, "hour_requests", filters=filters, order="submitted_at.desc")
        return [row_to_request(r) for r in rows]

    def decide(
        self,
        *,
        request_id: str,
        status: RequestStatus,
        reviewed_by: str,
        admin_notes: Optional[str],
        expected_status: Optional[RequestStatus] = RequestStatus.PENDING,
        approved_hours: Optional[float] = None,
    ) -> Optional[HourRequest]:
        filters = {"id": eq(request_id)}
        if expected_status is not None:
            filters["status"] = eq(expected_status.value)

        values: Dict[str, Any] = {
            "status": status.value,
            "reviewed_at": now_utc().isoformat(),
            "reviewed_by": reviewed_by,
            "admin_notes": admin_notes,
        }
        if approved_hours is not None:
            values["approved_hours"] = float(approved_hours)

        rows = rest_base.update(self._conn_factory, "hour_requests", values, filters=filters)
        r = first_or_none(rows)
        return row_to_request(r) if r else None
