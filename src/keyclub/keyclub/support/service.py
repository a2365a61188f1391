from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import normalize_s_number, require_non_empty
from ..core.exceptions import NotFoundError
from .model import SupportQuestion
from .repository import SupportQuestionRepository


class SupportService:
    def __init__(self, questions: SupportQuestionRepository):
        self._questions = questions

    def submit(
        self,
        *,
        name: str,
        subject: str,
        message: str,
        s_number: Optional[str] = None,
        user_type: str = "student",
    ) -> SupportQuestion:
        return self._questions.create(
            name=require_non_empty(name, "Name"),
            s_number=normalize_s_number(s_number) or None,
            subject=require_non_empty(subject, "Subject"),
            message=require_non_empty(message, "Message"),
            user_type=(user_type or "").strip() or "student",
        )

    def list_all(self) -> Sequence[SupportQuestion]:
        return self._questions.list_all()

    def respond(self, question_id: str, *, response: str, status: str = "answered") -> SupportQuestion:
        updated = self._questions.update(
            str(question_id),
            {
                "response": require_non_empty(response, "Response"),
                "status": (status or "").strip() or "answered",
                "responded_at": now_utc().isoformat(),
            },
        )
        if not updated:
            raise NotFoundError("Support question not found")
        return updated
