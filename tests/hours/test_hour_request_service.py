from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from src.keyclub.keyclub.core.enums import RequestStatus
from src.keyclub.keyclub.core.exceptions import AlreadyDecidedError, GatewayError, NotFoundError, ValidationError
from src.keyclub.keyclub.hours.service import HourRequestService
from src.keyclub.keyclub.students.model import Student
from tests.fakes import FakeHourRequestsRepo, FakeStudentsRepo


def _setup(total_hours=0.0):
    students = FakeStudentsRepo([Student(s_number="s123456", name="Ana", total_hours=total_hours)])
    requests = FakeHourRequestsRepo()
    return HourRequestService(requests, students), requests, students


def _submit(svc, hours=5, s_number="s123456"):
    return svc.submit(
        student_s_number=s_number,
        student_name="Ana",
        event_name="Food bank",
        event_date="2026-02-28",
        hours_requested=hours,
        description="Sorted cans",
    )


def test_submit_creates_pending_request_without_touching_balance():
    svc, _, students = _setup()
    req = _submit(svc)

    assert req.status == RequestStatus.PENDING
    assert req.hours_requested == 5.0
    assert req.event_date == date(2026, 2, 28)
    assert students.updates == []


def test_submit_canonicalizes_s_number():
    svc, _, _ = _setup()
    req = _submit(svc, s_number="  S123456 ")
    assert req.student_s_number == "s123456"


@pytest.mark.parametrize("hours", [0, -1, 24.5, "abc", None, float("nan"), float("inf")])
def test_submit_rejects_out_of_range_hours(hours):
    svc, _, _ = _setup()
    with pytest.raises(ValidationError):
        _submit(svc, hours=hours)


def test_submit_requires_event_name_and_description():
    svc, _, _ = _setup()
    with pytest.raises(ValidationError):
        svc.submit(
            student_s_number="s123456",
            event_name="  ",
            event_date="2026-02-28",
            hours_requested=2,
            description="x",
        )
    with pytest.raises(ValidationError):
        svc.submit(
            student_s_number="s123456",
            event_name="Cleanup",
            event_date="2026-02-28",
            hours_requested=2,
            description="",
        )


def test_resubmission_for_same_event_is_allowed():
    svc, requests, _ = _setup()
    _submit(svc)
    _submit(svc)
    assert len(requests.requests) == 2


def test_submit_maps_unknown_student_foreign_key_error():
    svc, requests, _ = _setup()
    requests.create_error = GatewayError("fk", status_code=409, code="23503")
    with pytest.raises(NotFoundError):
        _submit(svc)


def test_lists_are_newest_first():
    svc, _, _ = _setup()
    first = _submit(svc)
    second = _submit(svc)

    mine = svc.list_for_student("S123456")
    assert [r.request_id for r in mine] == [second.request_id, first.request_id]
    assert [r.request_id for r in svc.list_all()] == [second.request_id, first.request_id]


def test_approval_credits_requested_hours():
    svc, _, students = _setup()
    req = _submit(svc, hours=5)

    result = svc.decide(request_id=req.request_id, decision="approved", admin_notes="ok", reviewed_by="Ms. Lee")

    assert result.request_updated and result.balance_updated
    assert result.hours_credited == 5.0
    assert result.request.status == RequestStatus.APPROVED
    assert result.request.reviewed_by == "Ms. Lee"
    assert students.get_by_s_number("s123456").total_hours == 5.0
    assert "last_hour_update" in students.updates[-1][1]


def test_decision_string_is_normalized():
    svc, _, students = _setup(total_hours=1.5)
    req = _submit(svc, hours=2)

    svc.decide(request_id=req.request_id, decision="  APPROVED ")

    assert students.get_by_s_number("s123456").total_hours == 3.5


def test_unknown_decision_is_rejected():
    svc, _, _ = _setup()
    req = _submit(svc)
    with pytest.raises(ValidationError):
        svc.decide(request_id=req.request_id, decision="maybe")


def test_second_approval_is_refused_and_balance_not_doubled():
    svc, _, students = _setup()
    req = _submit(svc, hours=5)
    svc.decide(request_id=req.request_id, decision="approved")

    with pytest.raises(AlreadyDecidedError):
        svc.decide(request_id=req.request_id, decision="approved")

    assert students.get_by_s_number("s123456").total_hours == 5.0


def test_approved_request_cannot_be_flipped_to_rejected():
    svc, requests, _ = _setup()
    req = _submit(svc)
    svc.decide(request_id=req.request_id, decision="approved")

    with pytest.raises(AlreadyDecidedError):
        svc.decide(request_id=req.request_id, decision="rejected")
    assert requests.get(req.request_id).status == RequestStatus.APPROVED


def test_lost_race_on_conditional_update_is_reported():
    svc, requests, students = _setup()
    req = _submit(svc)

    original_decide = requests.decide

    def decide_after_other_admin(**kwargs):
        original_decide(**{**kwargs, "status": RequestStatus.REJECTED})
        return original_decide(**kwargs)

    requests.decide = decide_after_other_admin
    with pytest.raises(AlreadyDecidedError):
        svc.decide(request_id=req.request_id, decision="approved")
    assert students.updates == []


def test_rejection_does_not_touch_balance():
    svc, _, students = _setup(total_hours=3)
    req = _submit(svc)

    result = svc.decide(request_id=req.request_id, decision="rejected", admin_notes="no proof")

    assert result.request.status == RequestStatus.REJECTED
    assert result.request.admin_notes == "no proof"
    assert not result.balance_updated
    assert students.get_by_s_number("s123456").total_hours == 3.0


def test_override_hours_replace_requested_hours():
    svc, _, students = _setup()
    req = _submit(svc, hours=5)

    result = svc.decide(request_id=req.request_id, decision="approved", override_hours="3.5")

    assert result.hours_credited == 3.5
    assert students.get_by_s_number("s123456").total_hours == 3.5


@pytest.mark.parametrize("override", [0, -2, "nope", float("nan")])
def test_invalid_override_falls_back_to_requested_hours(override):
    svc, _, students = _setup()
    req = _submit(svc, hours=4)

    svc.decide(request_id=req.request_id, decision="approved", override_hours=override)

    assert students.get_by_s_number("s123456").total_hours == 4.0


def test_invalid_stored_amount_approves_but_skips_balance(caplog):
    svc, requests, students = _setup(total_hours=2)
    req = _submit(svc)
    requests.requests[req.request_id] = replace(req, hours_requested=0.0)

    result = svc.decide(request_id=req.request_id, decision="approved")

    assert result.request.status == RequestStatus.APPROVED
    assert result.request_updated and not result.balance_updated
    assert students.get_by_s_number("s123456").total_hours == 2.0
    assert "Invalid amount" in caplog.text


def test_missing_student_approves_without_credit():
    svc, _, students = _setup()
    req = _submit(svc, s_number="s999999")

    result = svc.decide(request_id=req.request_id, decision="approved")

    assert result.request_updated and not result.balance_updated
    assert students.updates == []


def test_unknown_request_is_not_found():
    svc, _, _ = _setup()
    with pytest.raises(NotFoundError):
        svc.decide(request_id="404", decision="approved")


def test_failed_balance_write_leaves_request_approved_and_balance_diverged():
    svc, requests, students = _setup()
    req = _submit(svc, hours=5)
    students.fail_updates_with = GatewayError("boom", status_code=500)

    with pytest.raises(GatewayError):
        svc.decide(request_id=req.request_id, decision="approved")

    assert requests.get(req.request_id).status == RequestStatus.APPROVED
    students.fail_updates_with = None
    audit = svc.audit_balance("s123456")
    assert audit.recorded_hours == 0.0
    assert audit.approved_hours == 5.0
    assert not audit.consistent


def test_audit_is_consistent_after_sequential_approvals():
    svc, _, _ = _setup()
    for hours in (5, 2.5, 1):
        req = _submit(svc, hours=hours)
        svc.decide(request_id=req.request_id, decision="approved")
    rejected = _submit(svc, hours=8)
    svc.decide(request_id=rejected.request_id, decision="rejected")

    audit = svc.audit_balance("s123456")
    assert audit.recorded_hours == 8.5
    assert audit.consistent


def test_audit_counts_override_hours_as_credited():
    svc, requests, _ = _setup()
    req = _submit(svc, hours=5)

    svc.decide(request_id=req.request_id, decision="approved", override_hours=3)

    assert requests.get(req.request_id).approved_hours == 3.0
    audit = svc.audit_balance("s123456")
    assert audit.recorded_hours == 3.0
    assert audit.approved_hours == 3.0
    assert audit.consistent


def test_uncredited_approval_records_zero_hours():
    svc, requests, _ = _setup(total_hours=2)
    req = _submit(svc)
    requests.requests[req.request_id] = replace(req, hours_requested=-1.0)

    svc.decide(request_id=req.request_id, decision="approved")

    assert requests.get(req.request_id).approved_hours == 0.0
    assert svc.audit_balance("s123456").approved_hours == 0.0


def test_rejection_records_no_credited_hours():
    svc, requests, _ = _setup()
    req = _submit(svc)
    svc.decide(request_id=req.request_id, decision="rejected")
    assert requests.get(req.request_id).approved_hours is None
