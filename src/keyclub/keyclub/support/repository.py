from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import SupportQuestion


class SupportQuestionRepository(Protocol):
    def create(self, *, name: str, s_number: Optional[str], subject: str, message: str, user_type: str) -> SupportQuestion:
        raise NotImplementedError

    def list_all(self) -> Sequence[SupportQuestion]:
        raise NotImplementedError

    def update(self, question_id: str, values: Mapping[str, Any]) -> Optional[SupportQuestion]:
        raise NotImplementedError
