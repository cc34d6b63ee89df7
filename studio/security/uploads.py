"""Signed, expiring tokens for direct object uploads."""

from __future__ import annotations

from typing import Optional

from itsdangerous import BadSignature, URLSafeTimedSerializer

from studio.core.config import SESSION_SECRET, UPLOAD_URL_EXPIRY_SECONDS


class UploadTokenService:
    def __init__(self, *, secret: str = SESSION_SECRET, max_age: int = UPLOAD_URL_EXPIRY_SECONDS) -> None:
        self.serializer = URLSafeTimedSerializer(secret_key=secret, salt="studio-upload")
        self.max_age = max_age

    def create(self, key: str, user_id: str) -> str:
        return self.serializer.dumps({"key": key, "user_id": user_id})

    def parse(self, token: str) -> Optional[dict]:
        # SignatureExpired is a BadSignature
        try:
            data = self.serializer.loads(token, max_age=self.max_age)
        except BadSignature:
            return None
        if not isinstance(data, dict) or not data.get("key"):
            return None
        return data
