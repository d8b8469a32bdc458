from __future__ import annotations

from uuid import uuid4

import pytest

from knowledge_api.core.errors import AuthenticationError, ErrorCode
from knowledge_api.core.security import create_access_token, decode_access_token, hash_password, verify_password


def test_password_hash_round_trip():
    encoded = hash_password("secret1", iterations=1000)
    assert encoded.startswith("pbkdf2_sha256$1000$")
    assert verify_password("secret1", encoded)
    assert not verify_password("secret2", encoded)


def test_password_hashes_are_salted():
    assert hash_password("secret1", iterations=1000) != hash_password("secret1", iterations=1000)


@pytest.mark.parametrize("encoded", ["", "plaintext", "bcrypt$10$aa$bb", "pbkdf2_sha256$x$zz$00"])
def test_verify_rejects_unknown_encodings(encoded):
    assert verify_password("secret1", encoded) is False


def test_token_claims():
    user_id = uuid4()
    claims = decode_access_token(create_access_token(user_id, "ann@x.com", "admin"))
    assert claims.id == user_id
    assert claims.email == "ann@x.com"
    assert claims.role == "admin"


def test_tampered_token_is_rejected():
    token = create_access_token(uuid4(), "ann@x.com")
    header, payload, signature = token.split(".")
    with pytest.raises(AuthenticationError) as excinfo:
        decode_access_token(f"{header}.{payload}.{signature[::-1]}")
    assert excinfo.value.code == ErrorCode.UNAUTHORIZED
