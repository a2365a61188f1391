from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Who is acting: club admin or a student member."""

    ADMIN = "admin"
    STUDENT = "student"


class AccountStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"


class RequestStatus(str, Enum):
    """Review state of an hour request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class MeetingType(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"


class SessionType(str, Enum):
    """Which part of a meeting the student reports attending."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    BOTH = "both"
