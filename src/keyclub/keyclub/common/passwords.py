"""Salted SHA-256 password digests for student accounts.

Stored format is ``<hex digest>:<salt>`` where the digest covers
``plaintext + salt``. This is the format already present in the
``auth_users`` table, so it is kept as-is; it is a single unstretched round
and is not suitable for anything beyond a club demo.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Optional

from werkzeug.security import gen_salt

from ..core.constants import SALT_LENGTH

logger = logging.getLogger(__name__)


def _digest(plaintext: str, salt: str) -> str:
    return hashlib.sha256((plaintext + salt).encode("utf-8")).hexdigest()


def hash_password(plaintext: str) -> str:
    salt = gen_salt(SALT_LENGTH)
    return f"{_digest(plaintext, salt)}:{salt}"


def verify_password(plaintext: str, stored: Optional[str]) -> bool:
    if not stored or ":" not in stored:
        logger.warning("Stored password hash is malformed")
        return False

    expected, salt = stored.split(":", 1)
    return hmac.compare_digest(_digest(plaintext or "", salt), expected)
