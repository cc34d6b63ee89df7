from studio.tests.conftest import PNG_BYTES, create_hierarchy


def test_generate_text(user_client, fake_copywriter) -> None:
    records = create_hierarchy(user_client)
    response = user_client.post(
        "/api/generate/text",
        json={"assetId": records["asset"]["id"], "count": 2, "constraints": {"bannedPhrases": ["cheap"]}},
    )
    assert response.status_code == 200
    variants = response.json()["data"]["variants"]
    assert variants[0] == {"headline": "Fresh Deals", "subheadline": "Save on everything", "cta": "Shop"}
    assert fake_copywriter.calls[0]["count"] == 2
    assert fake_copywriter.calls[0]["constraints"].banned_phrases == ["cheap"]
    assert fake_copywriter.calls[0]["context"].default_bindings["headline"] == "Default headline"


def test_generate_text_count_is_bounded(user_client, fake_copywriter) -> None:
    records = create_hierarchy(user_client)
    response = user_client.post("/api/generate/text", json={"assetId": records["asset"]["id"], "count": 11})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_missing_api_key_is_a_gateway_error(user_client) -> None:
    records = create_hierarchy(user_client)
    text = user_client.post("/api/generate/text", json={"assetId": records["asset"]["id"]})
    assert text.status_code == 502
    assert text.json()["error"]["code"] == "GENERATION_FAILED"

    image = user_client.post("/api/generate/image", json={"assetId": records["asset"]["id"]})
    assert image.status_code == 502


def test_generate_images_are_stored(user_client, fake_images) -> None:
    records = create_hierarchy(user_client)
    asset_id = records["asset"]["id"]
    response = user_client.post(
        "/api/generate/image",
        json={"assetId": asset_id, "count": 2, "seedImageUrl": "/api/objects/uploads/seed.png"},
    )
    assert response.status_code == 200
    images = response.json()["data"]["images"]
    assert len(images) == 2
    assert all(url.startswith(f"/api/objects/generated/{asset_id}/") for url in images)
    assert fake_images.calls[0]["seed_image_url"] == "/api/objects/uploads/seed.png"
    assert user_client.get(images[0]).content == PNG_BYTES


def test_generate_image_rejects_bad_seed_url(user_client, fake_images) -> None:
    records = create_hierarchy(user_client)
    response = user_client.post(
        "/api/generate/image", json={"assetId": records["asset"]["id"], "seedImageUrl": "ftp://example.com/x.png"}
    )
    assert response.status_code == 400


def test_generate_image_failure(user_client, fake_images) -> None:
    fake_images.error = "Failed to generate any images"
    records = create_hierarchy(user_client)
    response = user_client.post("/api/generate/image", json={"assetId": records["asset"]["id"]})
    assert response.status_code == 502
    assert response.json()["error"]["message"] == "Failed to generate any images"
