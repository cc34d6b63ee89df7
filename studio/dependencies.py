"""Request-scoped and process-wide providers injected into the route handlers.

Everything except the database session is built once per process. Tests swap
any of them out through ``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Iterator

from sqlalchemy.orm import Session

from .adapters.auth import AuthProvider, LocalAuthProvider
from .adapters.storage import LocalStorageBackend, StorageBackend, SupabaseStorageBackend
from .core import config
from .core.copywriter import Copywriter, make_copywriter
from .core.image_gen import ImageGenerator
from .core.template_gen import TemplateGenerator
from .db.session import get_session
from .security import UploadTokenService


def db_session() -> Iterator[Session]:
    with get_session() as session:
        yield session


@lru_cache(maxsize=None)
def get_storage() -> StorageBackend:
    if config.STORAGE_PROVIDER != "supabase":
        return LocalStorageBackend(config.OBJECTS_DIR)

    required = {"SUPABASE_URL": config.SUPABASE_URL, "SUPABASE_SERVICE_ROLE_KEY": config.SUPABASE_SERVICE_ROLE_KEY}
    unset = [name for name, value in required.items() if not value]
    if unset:
        raise RuntimeError(f"STORAGE_PROVIDER=supabase needs {' and '.join(unset)}")
    return SupabaseStorageBackend(
        url=config.SUPABASE_URL,
        bucket=config.SUPABASE_BUCKET,
        service_role_key=config.SUPABASE_SERVICE_ROLE_KEY,
    )


@lru_cache(maxsize=None)
def get_auth_provider() -> AuthProvider:
    return LocalAuthProvider()


def get_upload_tokens() -> UploadTokenService:
    return UploadTokenService()


@lru_cache(maxsize=None)
def get_copywriter() -> Copywriter:
    return make_copywriter(config.TEXT_PROVIDER)


@lru_cache(maxsize=None)
def get_image_generator() -> ImageGenerator:
    return ImageGenerator()


@lru_cache(maxsize=None)
def get_template_generator() -> TemplateGenerator:
    return TemplateGenerator()
