from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import HourRequest


class HourRequestRepository(Protocol):
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
        raise NotImplementedError

    def get(self, request_id: str) -> Optional[HourRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        student_s_number: Optional[str] = None,
        status: Optional[RequestStatus] = None,
    ) -> Sequence[HourRequest]:
        """Newest first (by submission time)."""

        raise NotImplementedError

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
        """Write the review fields, and ``approved_hours`` when given.

        Only rows currently in ``expected_status`` are touched (None disables
        the check). Returns the updated request, or None when nothing matched.
        """

        raise NotImplementedError
