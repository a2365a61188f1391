from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AccountStatus, Role


@dataclass(frozen=True)
class Student:
    """Domain entity: a club member, keyed by S-Number.

    Note: Plain data object, no gateway access here.
    """

    s_number: str
    name: str
    total_hours: float = 0.0
    account_status: AccountStatus = AccountStatus.PENDING
    role: Role = Role.STUDENT
    email: Optional[str] = None
    student_id: Optional[str] = None
    last_login: Optional[datetime] = None
    last_hour_update: Optional[datetime] = None


@dataclass(frozen=True)
class AuthUser:
    s_number: str
    password_hash: str
    auth_id: Optional[str] = None
