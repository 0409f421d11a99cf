"""Tests for token issuance and verification"""
from jose import jwt

from adminauth.config import settings
from adminauth.utils.jwt_utils import TokenFailure, create_access_token, verify_access_token


def _issue(**overrides) -> str:
    claims = {
        "admin_id": "adm_123",
        "email": "admin@x.com",
        "role": "super_admin",
        "permissions": ["orders:view"],
    }
    claims.update(overrides)
    return create_access_token(**claims)


def test_issue_and_verify():
    result = verify_access_token(_issue())
    assert result.ok
    assert result.failure is None
    claims = result.claims
    assert claims["sub"] == "adm_123"
    assert claims["adminId"] == "adm_123"
    assert claims["email"] == "admin@x.com"
    assert claims["role"] == "super_admin"
    assert claims["permissions"] == ["orders:view"]
    assert claims["type"] == "admin"
    assert claims["exp"] - claims["iat"] == settings.JWT_EXPIRE_SECONDS


def test_each_token_has_unique_jti():
    first = verify_access_token(_issue()).claims
    second = verify_access_token(_issue()).claims
    assert first["jti"] != second["jti"]


def test_default_expiry_is_seven_days():
    assert settings.JWT_EXPIRE_SECONDS == 7 * 24 * 3600


def test_malformed_token():
    for token in ["", "not-a-jwt", "a.b.c", "abc.def"]:
        result = verify_access_token(token)
        assert not result.ok
        assert result.failure is TokenFailure.MALFORMED
        assert result.claims is None


def test_wrong_signing_key():
    claims = verify_access_token(_issue()).claims
    forged = jwt.encode(claims, "some-other-secret-that-is-long-enough-000", algorithm="HS256")
    assert verify_access_token(forged).failure is TokenFailure.SIGNATURE_INVALID


def test_tampered_payload():
    header, payload, signature = _issue().split(".")
    other_payload = _issue(role="manager").split(".")[1]
    tampered = ".".join([header, other_payload, signature])
    assert verify_access_token(tampered).failure is TokenFailure.SIGNATURE_INVALID


def test_expired_token(monkeypatch):
    monkeypatch.setattr(settings, "JWT_EXPIRE_SECONDS", -60)
    assert verify_access_token(_issue()).failure is TokenFailure.EXPIRED


def test_non_admin_token_type_is_rejected():
    claims = verify_access_token(_issue()).claims
    claims["type"] = "agent"
    token = jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    assert verify_access_token(token).failure is TokenFailure.MALFORMED
