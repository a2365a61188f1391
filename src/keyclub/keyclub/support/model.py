from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class SupportQuestion:
    """A question sent to club officers from the contact form."""

    question_id: str
    name: str
    s_number: Optional[str]
    subject: str
    message: str
    user_type: str = "student"
    status: Optional[str] = None
    response: Optional[str] = None
    submitted_at: Optional[datetime] = None
