from studio.tests.conftest import PNG_BYTES


def test_upload_url_flow(user_client) -> None:
    response = user_client.post("/api/objects/upload", json={"filename": "hero.png", "contentType": "image/png"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["uploadURL"].startswith("http://testserver/api/objects/upload/")
    assert data["objectPath"].startswith("/objects/uploads/")
    assert data["objectPath"].endswith(".png")

    stored = user_client.put(data["uploadURL"], content=PNG_BYTES, headers={"Content-Type": "image/png"})
    assert stored.status_code == 200
    stored_data = stored.json()["data"]
    assert stored_data["objectPath"] == data["objectPath"]
    assert stored_data["size"] == len(PNG_BYTES)
    assert stored_data["url"] == "/api" + data["objectPath"]

    fetched = user_client.get(stored_data["url"])
    assert fetched.status_code == 200
    assert fetched.content == PNG_BYTES
    assert fetched.headers["content-type"] == "image/png"


def test_upload_url_without_body(user_client) -> None:
    response = user_client.post("/api/objects/upload")
    assert response.status_code == 200
    assert response.json()["data"]["objectPath"].startswith("/objects/uploads/")


def test_upload_url_requires_login(make_client) -> None:
    assert make_client().post("/api/objects/upload").status_code == 401


def test_forged_upload_token_is_rejected(user_client) -> None:
    response = user_client.put("/api/objects/upload/not-a-token", content=PNG_BYTES)
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


def test_empty_upload_is_rejected(user_client) -> None:
    upload_url = user_client.post("/api/objects/upload").json()["data"]["uploadURL"]
    response = user_client.put(upload_url, content=b"")
    assert response.status_code == 400


def test_multipart_upload(user_client, make_client) -> None:
    response = user_client.post("/api/objects", files={"file": ("logo.png", PNG_BYTES, "image/png")})
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["contentType"] == "image/png"
    assert data["url"].startswith("/api/objects/uploads/")

    # Stored objects are served without a session
    assert make_client().get(data["url"]).content == PNG_BYTES


def test_missing_object(user_client) -> None:
    response = user_client.get("/api/objects/uploads/missing.png")
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "File not found"


def test_html_upload_is_stored_without_its_extension(user_client, make_client) -> None:
    payload = b"<script>alert(document.cookie)</script>"
    response = user_client.post("/api/objects", files={"file": ("evil.html", payload, "text/html")})
    assert response.status_code == 201
    url = response.json()["data"]["url"]
    assert not url.endswith(".html")

    served = make_client().get(url)
    assert served.status_code == 200
    assert served.headers["content-type"] == "application/octet-stream"
    assert served.headers["x-content-type-options"] == "nosniff"
    assert served.headers["content-disposition"] == "attachment"
    assert served.headers["content-security-policy"] == "sandbox"


def test_svg_is_served_sandboxed(user_client) -> None:
    svg = b'<svg xmlns="http://www.w3.org/2000/svg"><script>alert(1)</script></svg>'
    url = user_client.post("/api/objects", files={"file": ("art.svg", svg, "image/svg+xml")}).json()["data"]["url"]
    assert url.endswith(".svg")

    served = user_client.get(url)
    assert served.headers["content-type"] == "image/svg+xml"
    assert served.headers["content-security-policy"] == "sandbox"
    assert served.headers["x-content-type-options"] == "nosniff"
    assert "content-disposition" not in served.headers


def test_raster_images_are_served_inline(user_client) -> None:
    url = user_client.post("/api/objects", files={"file": ("a.png", PNG_BYTES, "image/png")}).json()["data"]["url"]
    served = user_client.get(url)
    assert served.headers["x-content-type-options"] == "nosniff"
    assert "content-security-policy" not in served.headers


def test_upload_url_ignores_unknown_extensions(user_client) -> None:
    data = user_client.post("/api/objects/upload", json={"filename": "page.html"}).json()["data"]
    assert "." not in data["objectPath"].rsplit("/", 1)[-1]


def test_empty_multipart_upload_is_rejected(user_client) -> None:
    response = user_client.post("/api/objects", files={"file": ("empty.png", b"", "image/png")})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REQUEST"


def test_oversized_uploads_are_rejected(user_client, monkeypatch) -> None:
    monkeypatch.setattr("studio.routes.objects.MAX_UPLOAD_BYTES", 8)

    multipart = user_client.post("/api/objects", files={"file": ("big.png", PNG_BYTES, "image/png")})
    assert multipart.status_code == 400
    assert "8 byte limit" in multipart.json()["error"]["message"]

    upload_url = user_client.post("/api/objects/upload").json()["data"]["uploadURL"]
    direct = user_client.put(upload_url, content=PNG_BYTES)
    assert direct.status_code == 400
    assert "8 byte limit" in direct.json()["error"]["message"]
