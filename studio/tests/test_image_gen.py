from types import SimpleNamespace
from typing import List

import pytest

from studio.core.genai_client import GenerationError
from studio.core.image_gen import ImageGenerator, ImageResult
from studio.schemas import AssetContext
from studio.tests.conftest import PNG_BYTES

CONTEXT = AssetContext(name="Banner", project_name="Launch", client_name="Acme")


class FlakyImageGenerator(ImageGenerator):
    """Succeeds or fails per call according to ``outcomes``."""

    def __init__(self, outcomes: List[bool]) -> None:
        super().__init__(api_key="unused")
        self.outcomes = list(outcomes)
        self.prompts: List[str] = []

    def generate_image(self, prompt, client=None):
        self.prompts.append(prompt)
        if not self.outcomes.pop(0):
            raise GenerationError("safety filter")
        return ImageResult(data=PNG_BYTES, mime_type="image/png")


@pytest.fixture(autouse=True)
def offline_client(monkeypatch):
    monkeypatch.setattr("studio.core.image_gen.gemini_client", lambda api_key=None: object())


def test_failed_images_are_skipped(caplog) -> None:
    generator = FlakyImageGenerator([True, False, True])
    with caplog.at_level("WARNING", logger="studio.core.image_gen"):
        results = generator.generate_backgrounds(CONTEXT, 3)
    assert len(results) == 2
    assert len(generator.prompts) == 3
    assert "Failed to generate image 2 of 3" in caplog.text


def test_no_successful_images_is_an_error() -> None:
    generator = FlakyImageGenerator([False, False])
    with pytest.raises(GenerationError, match="Failed to generate any images"):
        generator.generate_backgrounds(CONTEXT, 2)


def test_seed_image_is_mentioned_in_the_prompt() -> None:
    generator = FlakyImageGenerator([True])
    generator.generate_backgrounds(CONTEXT, 1, seed_image_url="/api/objects/uploads/seed.png")
    assert "Acme" in generator.prompts[0]
    assert "/api/objects/uploads/seed.png" in generator.prompts[0]


def _fake_client(parts):
    response = SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))])
    return SimpleNamespace(models=SimpleNamespace(generate_content=lambda **kwargs: response))


def test_generate_image_reads_inline_data() -> None:
    parts = [
        SimpleNamespace(inline_data=None, text="Here you go"),
        SimpleNamespace(inline_data=SimpleNamespace(data=PNG_BYTES, mime_type="image/png")),
    ]
    result = ImageGenerator(api_key="unused").generate_image("prompt", client=_fake_client(parts))
    assert result == ImageResult(data=PNG_BYTES, mime_type="image/png")


def test_generate_image_without_image_parts() -> None:
    parts = [SimpleNamespace(inline_data=None, text="I cannot draw that")]
    with pytest.raises(GenerationError, match="No image data"):
        ImageGenerator(api_key="unused").generate_image("prompt", client=_fake_client(parts))
