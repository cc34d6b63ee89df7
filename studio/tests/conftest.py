"""Shared fixtures: a throwaway SQLite database, local storage and fake AI providers."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional

import pytest

_TMP_ROOT = Path(tempfile.mkdtemp(prefix="studio-tests-"))

# Configuration is read at import time, so it must be in place before studio is imported
os.environ["DATABASE_DSN"] = f"sqlite:///{_TMP_ROOT / 'studio.db'}"
os.environ["STUDIO_DATA_ROOT"] = str(_TMP_ROOT / "data")
os.environ["STORAGE_PROVIDER"] = "local"
os.environ["TEXT_PROVIDER"] = "gemini"
os.environ["ALLOW_REGISTRATION"] = "true"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["GEMINI_API_KEY"] = ""
os.environ["GOOGLE_AI_API_KEY"] = ""
os.environ["ANTHROPIC_API_KEY"] = ""

from fastapi.testclient import TestClient  # noqa: E402

from studio.api import app as studio_app  # noqa: E402
from studio.core.copywriter import Copywriter  # noqa: E402
from studio.core.genai_client import GenerationError  # noqa: E402
from studio.core.image_gen import ImageGenerator, ImageResult  # noqa: E402
from studio.core.template_gen import TemplateGenerator  # noqa: E402
from studio.db.session import Base, SessionLocal, engine  # noqa: E402
from studio.dependencies import (  # noqa: E402
    get_copywriter,
    get_image_generator,
    get_template_generator,
)
from studio.schemas import GeneratedTemplate, TextVariant  # noqa: E402

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32

SIMPLE_TEMPLATE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="400" height="200">'
    '<image href="{{image}}" width="400" height="200"/>'
    "<text>{{headline}}</text><text>{{subheadline}}</text><text>{{cta}}</text>"
    "</svg>"
)


class FakeCopywriter(Copywriter):
    provider = "fake"

    def __init__(self, variants: Optional[List[TextVariant]] = None, error: Optional[str] = None) -> None:
        self.variants = variants if variants is not None else [
            TextVariant(headline="Fresh Deals", subheadline="Save on everything", cta="Shop"),
            TextVariant(headline="Big & Bold", subheadline="New season arrivals", cta="Browse"),
        ]
        self.error = error
        self.calls: List[Dict] = []

    def generate(self, context, count, constraints=None):
        self.calls.append({"context": context, "count": count, "constraints": constraints})
        if self.error:
            raise GenerationError(self.error)
        return list(self.variants)


class FakeImageGenerator(ImageGenerator):
    def __init__(self, count: Optional[int] = None, error: Optional[str] = None) -> None:
        super().__init__(api_key="unused")
        self.count = count
        self.error = error
        self.calls: List[Dict] = []

    def generate_backgrounds(self, context, count, seed_image_url=None):
        self.calls.append({"context": context, "count": count, "seed_image_url": seed_image_url})
        if self.error:
            raise GenerationError(self.error)
        total = self.count if self.count is not None else count
        return [ImageResult(data=PNG_BYTES, mime_type="image/png") for _ in range(total)]


class FakeTemplateGenerator(TemplateGenerator):
    def __init__(self, error: Optional[str] = None) -> None:
        super().__init__(api_key="unused")
        self.error = error
        self.calls: List[Dict] = []

    def generate_from_image(self, image_bytes, mime_type, *, asset_name, project):
        self.calls.append(
            {"image_bytes": image_bytes, "mime_type": mime_type, "asset_name": asset_name, "project": project}
        )
        if self.error:
            raise GenerationError(self.error)
        return GeneratedTemplate.model_validate(
            {
                "templateSvg": '<svg xmlns="http://www.w3.org/2000/svg"><text>{{headline}}</text></svg>',
                "templateFonts": [{"family": "Inter"}],
                "defaultBindings": {"headline": "From the master", "cta": "Go"},
                "styleHints": {"palette": ["#000000"], "brand": "Generated"},
            }
        )


@pytest.fixture(autouse=True)
def database() -> Iterator[None]:
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app():
    yield studio_app
    studio_app.dependency_overrides.clear()


@pytest.fixture
def make_client(app) -> Iterator[Callable[[], TestClient]]:
    clients: List[TestClient] = []

    def _make() -> TestClient:
        client = TestClient(app)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


def register(client: TestClient, email: str, password: str = "secret123", name: Optional[str] = None) -> Dict:
    payload = {"email": email, "password": password}
    if name:
        payload["name"] = name
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]["user"]


@pytest.fixture
def admin_client(make_client) -> TestClient:
    client = make_client()
    register(client, "admin@example.com", name="Admin")
    return client


@pytest.fixture
def user_client(make_client, admin_client) -> TestClient:
    client = make_client()
    register(client, "user@example.com", name="User")
    return client


@pytest.fixture
def other_client(make_client, admin_client) -> TestClient:
    client = make_client()
    register(client, "other@example.com", name="Other")
    return client


@pytest.fixture
def fake_copywriter(app) -> FakeCopywriter:
    fake = FakeCopywriter()
    app.dependency_overrides[get_copywriter] = lambda: fake
    return fake


@pytest.fixture
def fake_images(app) -> FakeImageGenerator:
    fake = FakeImageGenerator()
    app.dependency_overrides[get_image_generator] = lambda: fake
    return fake


@pytest.fixture
def fake_templates(app) -> FakeTemplateGenerator:
    fake = FakeTemplateGenerator()
    app.dependency_overrides[get_template_generator] = lambda: fake
    return fake


def create_hierarchy(client: TestClient, template_svg: str = SIMPLE_TEMPLATE) -> Dict[str, Dict]:
    """Create a client, project and asset owned by the caller."""

    client_record = client.post("/api/clients", json={"name": "Acme"}).json()["data"]
    project = client.post(
        "/api/projects",
        json={"clientId": client_record["id"], "name": "Launch", "brief": "Spring launch"},
    ).json()["data"]
    asset = client.post(
        "/api/assets",
        json={
            "projectId": project["id"],
            "name": "Banner",
            "templateSvg": template_svg,
            "defaultBindings": {"headline": "Default headline", "subheadline": "Default sub", "cta": "Go"},
            "styleHints": {"palette": ["#112233"], "brand": "Acme"},
        },
    ).json()["data"]
    return {"client": client_record, "project": project, "asset": asset}
