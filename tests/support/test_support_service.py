from __future__ import annotations

import pytest

from src.keyclub.keyclub.core.exceptions import NotFoundError, ValidationError
from src.keyclub.keyclub.support.service import SupportService
from tests.fakes import FakeSupportRepo


def test_submit_and_respond():
    svc = SupportService(FakeSupportRepo())
    question = svc.submit(name="Ana", s_number=" S123456", subject="Hours", message="Where are my hours?")

    assert question.s_number == "s123456"
    assert question.user_type == "student"

    answered = svc.respond(question.question_id, response="Pending review")
    assert answered.response == "Pending review"
    assert answered.status == "answered"
    assert svc.list_all() == [answered]


def test_anonymous_question_has_no_s_number():
    svc = SupportService(FakeSupportRepo())
    question = svc.submit(name="Parent", subject="Dates", message="When is the gala?", user_type="guest")
    assert question.s_number is None
    assert question.user_type == "guest"


def test_validation_and_missing_question():
    svc = SupportService(FakeSupportRepo())
    with pytest.raises(ValidationError):
        svc.submit(name="Ana", subject="", message="x")
    with pytest.raises(NotFoundError):
        svc.respond("42", response="hello")
