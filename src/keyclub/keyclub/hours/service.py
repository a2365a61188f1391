from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence, Union

from ..common.datetime_utils import now_utc, parse_iso_date
from ..common.validators import normalize_s_number, parse_positive_number, require_non_empty
from ..core.constants import MAX_HOURS_PER_REQUEST
from ..core.enums import RequestStatus
from ..core.exceptions import (
    AlreadyDecidedError,
    GatewayError,
    InvalidAmountError,
    NotFoundError,
    ValidationError,
)
from ..students.repository import StudentRepository
from .model import ApprovalResult, BalanceAudit, HourRequest
from .repository import HourRequestRepository

logger = logging.getLogger(__name__)

# PostgREST error codes surfaced from Postgres
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


class HourRequestService:
    """Hour-request lifecycle: submit, list, approve/reject.

    Approval writes the review fields first and then credits the student's
    running total. The two writes are independent calls: if the second one
    fails the request stays approved and the error propagates.
    """

    def __init__(self, requests: HourRequestRepository, students: StudentRepository):
        self._requests = requests
        self._students = students

    @staticmethod
    def _parse_decision(decision: str) -> RequestStatus:
        normalized = (decision or "").strip().lower()
        if normalized == RequestStatus.APPROVED.value:
            return RequestStatus.APPROVED
        if normalized == RequestStatus.REJECTED.value:
            return RequestStatus.REJECTED
        raise ValidationError("Decision must be 'approved' or 'rejected'")

    @staticmethod
    def _parse_event_date(value: Union[date, str]) -> date:
        if isinstance(value, date):
            return value
        try:
            return parse_iso_date(require_non_empty(value, "Event date"))
        except ValueError:
            raise ValidationError("Event date must be YYYY-MM-DD")

    @staticmethod
    def _credit_amount(req: HourRequest, override_hours) -> float:
        """Hours to credit: a positive override wins over the requested amount."""

        hours = parse_positive_number(override_hours)
        if hours is None:
            hours = parse_positive_number(req.hours_requested)
        if hours is None:
            raise InvalidAmountError(
                f"Invalid amount on approved request {req.request_id} "
                f"(requested={req.hours_requested!r}, override={override_hours!r})"
            )
        return hours

    def submit(
        self,
        *,
        student_s_number: str,
        event_name: str,
        event_date: Union[date, str],
        hours_requested,
        description: str,
        student_name: str = "",
        image_name: Optional[str] = None,
    ) -> HourRequest:
        s_number = normalize_s_number(require_non_empty(student_s_number, "S-Number"))
        event_name = require_non_empty(event_name, "Event name")
        description = require_non_empty(description, "Description")
        work_date = self._parse_event_date(event_date)

        hours = parse_positive_number(hours_requested)
        if hours is None or hours > MAX_HOURS_PER_REQUEST:
            raise ValidationError(f"Please enter a valid number of hours (0.1 - {MAX_HOURS_PER_REQUEST}.0)")

        try:
            created = self._requests.create(
                student_s_number=s_number,
                student_name=(student_name or "").strip(),
                event_name=event_name,
                event_date=work_date,
                hours_requested=hours,
                description=description,
                image_name=(image_name or "").strip() or None,
            )
        except GatewayError as e:
            if e.code == FOREIGN_KEY_VIOLATION:
                raise NotFoundError("Student not found in system. Please contact your Key Club sponsor.") from e
            if e.code == UNIQUE_VIOLATION:
                raise ValidationError("Duplicate request detected. Please check if this request was already submitted.") from e
            raise

        logger.info("Hour request %s submitted by %s for %.2f hours", created.request_id, s_number, hours)
        return created

    def list_for_student(self, s_number: str) -> Sequence[HourRequest]:
        return self._requests.list_requests(student_s_number=normalize_s_number(s_number))

    def list_all(self, *, status: Optional[RequestStatus] = None) -> Sequence[HourRequest]:
        return self._requests.list_requests(status=status)

    def decide(
        self,
        *,
        request_id: str,
        decision: str,
        admin_notes: str = "",
        reviewed_by: str = "Admin",
        override_hours=None,
    ) -> ApprovalResult:
        status = self._parse_decision(decision)

        req = self._requests.get(str(request_id))
        if not req:
            raise NotFoundError("Hour request not found")
        if req.status != RequestStatus.PENDING:
            raise AlreadyDecidedError(f"Request has already been {req.status.value}")

        hours = None
        student = None
        if status == RequestStatus.APPROVED:
            try:
                hours = self._credit_amount(req, override_hours)
            except InvalidAmountError as e:
                logger.error("%s; balance not updated", e)
            else:
                student = self._students.get_by_s_number(req.student_s_number)
                if not student:
                    logger.error("Student %s not found; approved request %s was not credited", req.student_s_number, req.request_id)
                    hours = None

        updated = self._requests.decide(
            request_id=req.request_id,
            status=status,
            reviewed_by=(reviewed_by or "").strip() or "Admin",
            admin_notes=(admin_notes or "").strip(),
            expected_status=RequestStatus.PENDING,
            # what the balance is about to receive; 0 when nothing will be credited
            approved_hours=(hours or 0.0) if status == RequestStatus.APPROVED else None,
        )
        if not updated:
            # another reviewer got there between our read and write
            raise AlreadyDecidedError("Request has already been reviewed")

        if hours is None:
            return ApprovalResult(request=updated, request_updated=True, balance_updated=False)

        new_total = float(student.total_hours or 0) + hours
        try:
            self._students.update(
                student.s_number,
                {"total_hours": new_total, "last_hour_update": now_utc().isoformat()},
            )
        except GatewayError:
            logger.error(
                "Request %s is approved but crediting %.2f hours to %s failed",
                updated.request_id,
                hours,
                student.s_number,
            )
            raise

        logger.info("Credited %.2f hours to %s (total %.2f)", hours, student.s_number, new_total)
        return ApprovalResult(request=updated, request_updated=True, balance_updated=True, hours_credited=hours)

    def audit_balance(self, s_number: str) -> BalanceAudit:
        """Compare the stored total with the hours credited by approved requests."""

        s_number = normalize_s_number(s_number)
        student = self._students.get_by_s_number(s_number)
        if not student:
            raise NotFoundError("Student not found")

        approved = self._requests.list_requests(student_s_number=s_number, status=RequestStatus.APPROVED)
        return BalanceAudit(
            s_number=s_number,
            recorded_hours=float(student.total_hours or 0),
            approved_hours=sum(r.credited_hours for r in approved),
        )
