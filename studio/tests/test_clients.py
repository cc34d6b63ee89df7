from studio.tests.conftest import create_hierarchy


def test_create_and_list_clients(user_client) -> None:
    response = user_client.post("/api/clients", json={"name": "  Acme  ", "description": "Widgets"})
    assert response.status_code == 201
    created = response.json()["data"]
    assert created["name"] == "Acme"
    assert created["description"] == "Widgets"
    assert {"id", "createdByUserId", "createdAt", "updatedAt"} <= set(created)

    listed = user_client.get("/api/clients").json()["data"]
    assert [client["id"] for client in listed] == [created["id"]]


def test_empty_name_is_a_validation_error(user_client) -> None:
    response = user_client.post("/api/clients", json={"name": ""})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_users_only_see_their_own_clients(user_client, other_client, admin_client) -> None:
    mine = user_client.post("/api/clients", json={"name": "Mine"}).json()["data"]
    theirs = other_client.post("/api/clients", json={"name": "Theirs"}).json()["data"]

    assert [c["name"] for c in user_client.get("/api/clients").json()["data"]] == ["Mine"]
    assert user_client.get(f"/api/clients/{theirs['id']}").status_code == 404
    assert user_client.patch(f"/api/clients/{theirs['id']}", json={"name": "Hijacked"}).status_code == 404
    assert user_client.delete(f"/api/clients/{theirs['id']}").status_code == 404

    admin_names = {c["name"] for c in admin_client.get("/api/clients").json()["data"]}
    assert admin_names == {"Mine", "Theirs"}
    assert admin_client.get(f"/api/clients/{mine['id']}").status_code == 200


def test_unknown_client_is_not_found(user_client) -> None:
    response = user_client.get("/api/clients/00000000-0000-0000-0000-000000000000")
    assert response.status_code == 404
    assert response.json()["error"] == {"code": "NOT_FOUND", "message": "Client not found"}


def test_update_client(user_client) -> None:
    created = user_client.post("/api/clients", json={"name": "Acme", "description": "Old"}).json()["data"]

    renamed = user_client.patch(f"/api/clients/{created['id']}", json={"name": "Acme Corp"}).json()["data"]
    assert renamed["name"] == "Acme Corp"
    assert renamed["description"] == "Old"

    cleared = user_client.patch(f"/api/clients/{created['id']}", json={"description": None}).json()["data"]
    assert cleared["description"] is None


def test_admin_can_update_any_client(user_client, admin_client) -> None:
    created = user_client.post("/api/clients", json={"name": "Acme"}).json()["data"]
    response = admin_client.patch(f"/api/clients/{created['id']}", json={"name": "Renamed by admin"})
    assert response.status_code == 200
    assert response.json()["data"]["createdByUserId"] == created["createdByUserId"]


def test_delete_client_cascades(user_client) -> None:
    records = create_hierarchy(user_client)
    variant = user_client.post(
        "/api/variants", json={"assetId": records["asset"]["id"], "bindings": {"headline": "Hi"}}
    ).json()["data"]

    response = user_client.delete(f"/api/clients/{records['client']['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["message"] == "Client deleted successfully"

    assert user_client.get(f"/api/projects/{records['project']['id']}").status_code == 404
    assert user_client.get(f"/api/assets/{records['asset']['id']}").status_code == 404
    assert user_client.get(f"/api/variants/{variant['id']}").status_code == 404
