from studio.routes.system import router as system_router


def test_health(make_client) -> None:
    response = make_client().get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_system_config(make_client) -> None:
    data = make_client().get("/api/system/config").json()["data"]
    assert data == {"registrationEnabled": True, "textProvider": "gemini", "storageProvider": "local"}


def test_providers_report_missing_keys(make_client) -> None:
    data = make_client().get("/api/system/providers").json()["data"]
    assert data["storage"] == {"provider": "local", "status": "ok"}
    assert data["text"] == {"provider": "gemini", "status": "unconfigured"}
    assert data["image"] == {"provider": "gemini", "status": "unconfigured"}


def test_unknown_route_uses_error_envelope(make_client) -> None:
    response = make_client().get("/api/nope")
    assert response.status_code == 404
    assert response.json()["ok"] is False
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_system_router_exposes_providers_and_config() -> None:
    assert sorted(route.path for route in system_router.routes) == ["/system/config", "/system/providers"]
