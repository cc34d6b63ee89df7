import pytest

from studio.storage.objects import (
    ObjectPathError,
    generated_image_key,
    guess_content_type,
    key_from_reference,
    new_upload_key,
    object_path,
    public_url,
    sniff_content_type,
    validate_key,
)


@pytest.mark.parametrize("key", ["", "/uploads/a.png", "uploads/../a.png", "uploads//a.png", "uploads\\a.png", "./a"])
def test_unsafe_keys_are_rejected(key: str) -> None:
    with pytest.raises(ObjectPathError):
        validate_key(key)


def test_references_resolve_to_keys() -> None:
    assert key_from_reference("/objects/uploads/a.png") == "uploads/a.png"
    assert key_from_reference("/api/objects/generated/x/y.png") == "generated/x/y.png"
    assert key_from_reference("uploads/a.png") == "uploads/a.png"
    assert key_from_reference("https://example.com/a.png") is None
    assert key_from_reference("data:image/png;base64,AAAA") is None


def test_path_and_url_forms() -> None:
    assert object_path("uploads/a.png") == "/objects/uploads/a.png"
    assert public_url("uploads/a.png") == "/api/objects/uploads/a.png"


def test_generated_keys() -> None:
    assert new_upload_key("photo.JPG").endswith(".jpg")
    assert new_upload_key(None, "image/webp").endswith(".webp")
    assert new_upload_key("page.html", "text/html").startswith("uploads/")
    assert "." not in new_upload_key("page.html", "text/html")
    assert new_upload_key("logo.exe", "image/png").endswith(".png")
    key = generated_image_key("asset-1", "image/png")
    assert key.startswith("generated/asset-1/") and key.endswith(".png")


def test_content_type_detection() -> None:
    assert sniff_content_type(b"\x89PNG\r\n\x1a\nrest") == "image/png"
    assert sniff_content_type(b"\xff\xd8\xff\xe0") == "image/jpeg"
    assert sniff_content_type(b"  <svg xmlns='x'/>") == "image/svg+xml"
    assert sniff_content_type(b"hello") is None
    assert guess_content_type("uploads/abc", b"\x89PNG\r\n\x1a\n") == "image/png"
    assert guess_content_type("uploads/abc", b"hello") == "application/octet-stream"
