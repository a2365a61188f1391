from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import AuthUser, Student


class StudentRepository(Protocol):
    """Repository interface for students and their login credentials.

    Note (DIP): services depend on this interface, not on the REST gateway.
    """

    def get_by_s_number(self, s_number: str) -> Optional[Student]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def create(self, *, s_number: str, name: str, email: Optional[str] = None, total_hours: float = 0.0) -> Student:
        raise NotImplementedError

    def update(self, s_number: str, values: Mapping[str, Any]) -> Optional[Student]:
        """Patch the student row; returns None when no row matched."""

        raise NotImplementedError

    def get_auth_user(self, s_number: str) -> Optional[AuthUser]:
        raise NotImplementedError

    def create_auth_user(self, *, s_number: str, password_hash: str) -> AuthUser:
        raise NotImplementedError

    def update_password_hash(self, s_number: str, password_hash: str) -> bool:
        raise NotImplementedError
