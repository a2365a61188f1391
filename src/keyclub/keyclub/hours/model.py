from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class HourRequest:
    """A student's claim for volunteer-service hours awaiting review."""

    request_id: str
    student_s_number: str
    student_name: str
    event_name: str
    event_date: Optional[date]
    hours_requested: float
    description: str
    status: RequestStatus
    submitted_at: Optional[datetime]
    image_name: Optional[str] = None
    admin_notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    # hours actually credited at approval (override or requested)
    approved_hours: Optional[float] = None

    @property
    def credited_hours(self) -> float:
        return self.approved_hours if self.approved_hours is not None else self.hours_requested


@dataclass(frozen=True)
class ApprovalResult:
    """Outcome of a review decision.

    ``balance_updated`` is False for rejections and for approvals whose hours
    could not be credited (invalid amount, unknown student).
    """

    request: HourRequest
    request_updated: bool
    balance_updated: bool
    hours_credited: float = 0.0


@dataclass(frozen=True)
class BalanceAudit:
    s_number: str
    recorded_hours: float
    approved_hours: float

    @property
    def consistent(self) -> bool:
        return abs(self.recorded_hours - self.approved_hours) < 1e-9
