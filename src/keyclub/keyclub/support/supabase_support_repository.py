from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_timestamp
from ..gateway import rest_base
from ..gateway.connection import SupabaseConnection
from ..gateway.rest_base import eq, first_or_none
from .model import SupportQuestion
from .repository import SupportQuestionRepository


def row_to_question(r: Dict[str, Any]) -> SupportQuestion:
    return SupportQuestion(
        question_id=str(r["id"]),
        name=r.get("name") or "",
        s_number=r.get("s_number"),
        subject=r.get("subject") or "",
        message=r.get("message") or "",
        user_type=r.get("user_type") or "student",
        status=r.get("status"),
        response=r.get("response"),
        submitted_at=parse_timestamp(r.get("submitted_at")),
    )


class SupabaseSupportQuestionRepository(SupportQuestionRepository):
    def __init__(self, conn_factory: SupabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, name: str, s_number: Optional[str], subject: str, message: str, user_type: str) -> SupportQuestion:
        r = rest_base.insert(
            self._conn_factory,
            "support_questions",
            {"name": name, "s_number": s_number, "subject": subject, "message": message, "user_type": user_type},
        )
        return row_to_question(r)

    def list_all(self) -> Sequence[SupportQuestion]:
        rows = rest_base.select(self._conn_factory, "support_questions", order="submitted_at.desc")
        return [row_to_question(r) for r in rows]

    def update(self, question_id: str, values: Mapping[str, Any]) -> Optional[SupportQuestion]:
        rows = rest_base.update(self._conn_factory, "support_questions", values, filters={"id": eq(question_id)})
        r = first_or_none(rows)
        return row_to_question(r) if r else None
