from __future__ import annotations

import hashlib
import re

from src.keyclub.keyclub.common.passwords import hash_password, verify_password


def test_hash_format_is_digest_colon_salt():
    stored = hash_password("secret1")
    digest, salt = stored.split(":", 1)
    assert re.fullmatch(r"[0-9a-f]{64}", digest)
    assert len(salt) == 12


def test_verify_round_trip():
    stored = hash_password("secret1")
    assert verify_password("secret1", stored)
    assert not verify_password("secret2", stored)


def test_same_password_gets_different_salts():
    assert hash_password("secret1") != hash_password("secret1")


def test_existing_stored_hashes_verify():
    # rows written before this service use sha256(plaintext + salt) too
    stored = hashlib.sha256(b"abcxyz").hexdigest() + ":xyz"
    assert verify_password("abc", stored)
    assert not verify_password("abcx", stored)


def test_malformed_hash_is_rejected(caplog):
    assert not verify_password("secret1", "nocolonhere")
    assert not verify_password("secret1", "")
    assert not verify_password("secret1", None)
    assert "malformed" in caplog.text
