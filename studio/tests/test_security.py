from studio.security import PasswordService, SessionService, UploadTokenService


def test_password_hash_and_verify() -> None:
    service = PasswordService()
    hashed = service.hash("secret123")
    assert hashed != "secret123"
    assert service.verify(hashed, "secret123")
    assert not service.verify(hashed, "wrong-password")


def test_password_verify_rejects_garbage_hash() -> None:
    assert not PasswordService().verify("not-a-hash", "secret123")


def test_session_token_round_trip_carries_only_user_id() -> None:
    service = SessionService(secret="s1")
    data = service.parse(service.create("user-1"))
    assert data["user_id"] == "user-1"
    assert "role" not in data


def test_tampered_or_foreign_session_tokens_are_rejected() -> None:
    service = SessionService(secret="s1")
    token = service.create("user-1")
    assert service.parse(token + "x") is None
    assert SessionService(secret="s2").parse(token) is None
    assert service.parse("garbage") is None


def test_expired_session_token_is_rejected() -> None:
    token = SessionService(secret="s1").create("user-1")
    assert SessionService(secret="s1", max_age=-1).parse(token) is None


def test_upload_tokens_are_scoped_to_their_salt() -> None:
    uploads = UploadTokenService(secret="s1")
    token = uploads.create("uploads/abc.png", "user-1")
    assert uploads.parse(token)["key"] == "uploads/abc.png"
    # A session token signed with the same secret is not a valid upload token
    assert uploads.parse(SessionService(secret="s1").create("user-1")) is None
