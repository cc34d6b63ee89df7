"""Cookie-based session management using itsdangerous."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from itsdangerous import BadSignature, URLSafeTimedSerializer

from studio.core.config import SESSION_COOKIE_MAX_AGE, SESSION_COOKIE_NAME, SESSION_SECRET


class SessionService:
    """Issues and parses signed session tokens.

    The token only carries the user id; role and profile are reloaded from the
    database on every request so that changes take effect immediately.
    """

    def __init__(
        self,
        *,
        secret: str = SESSION_SECRET,
        cookie_name: str = SESSION_COOKIE_NAME,
        max_age: int = SESSION_COOKIE_MAX_AGE,
    ) -> None:
        self.serializer = URLSafeTimedSerializer(secret_key=secret, salt="studio-session")
        self.cookie_name = cookie_name
        self.max_age = max_age

    def create(self, user_id: str) -> str:
        payload = {
            "user_id": user_id,
            "issued_at": datetime.now(timezone.utc).isoformat(),
        }
        return self.serializer.dumps(payload)

    def parse(self, token: str) -> Optional[dict]:
        try:
            data = self.serializer.loads(token, max_age=self.max_age)
        except BadSignature:
            return None
        if not isinstance(data, dict):
            return None
        return data
