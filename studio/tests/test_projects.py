from studio.tests.conftest import create_hierarchy


def _client(http, name="Acme"):
    return http.post("/api/clients", json={"name": name}).json()["data"]


def test_create_project_embeds_client(user_client) -> None:
    client = _client(user_client)
    response = user_client.post(
        "/api/projects",
        json={"clientId": client["id"], "name": "Launch", "description": "Q1", "brief": "Young audience"},
    )
    assert response.status_code == 201
    project = response.json()["data"]
    assert project["clientId"] == client["id"]
    assert project["client"]["name"] == "Acme"
    assert project["brief"] == "Young audience"
    assert project["archived"] is None


def test_project_for_invisible_client_is_rejected(user_client, other_client) -> None:
    foreign = _client(other_client, "Foreign")
    response = user_client.post("/api/projects", json={"clientId": foreign["id"], "name": "Nope"})
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Client not found"


def test_filter_by_client(user_client) -> None:
    first = _client(user_client, "First")
    second = _client(user_client, "Second")
    user_client.post("/api/projects", json={"clientId": first["id"], "name": "A"})
    user_client.post("/api/projects", json={"clientId": second["id"], "name": "B"})

    listed = user_client.get("/api/projects", params={"clientId": first["id"]}).json()["data"]
    assert [project["name"] for project in listed] == ["A"]
    assert len(user_client.get("/api/projects").json()["data"]) == 2


def test_archive_hides_project_until_requested(user_client) -> None:
    records = create_hierarchy(user_client)
    project_id = records["project"]["id"]

    archived = user_client.post(f"/api/projects/{project_id}/archive").json()["data"]
    assert archived["archived"] is not None

    assert user_client.get("/api/projects").json()["data"] == []
    with_archived = user_client.get("/api/projects", params={"includeArchived": "true"}).json()["data"]
    assert [project["id"] for project in with_archived] == [project_id]

    restored = user_client.post(f"/api/projects/{project_id}/unarchive").json()["data"]
    assert restored["archived"] is None
    assert len(user_client.get("/api/projects").json()["data"]) == 1


def test_move_project_between_clients(user_client, other_client) -> None:
    records = create_hierarchy(user_client)
    target = _client(user_client, "Target")
    foreign = _client(other_client, "Foreign")
    project_id = records["project"]["id"]

    moved = user_client.patch(f"/api/projects/{project_id}", json={"clientId": target["id"]}).json()["data"]
    assert moved["clientId"] == target["id"]
    assert moved["client"]["name"] == "Target"

    blocked = user_client.patch(f"/api/projects/{project_id}", json={"clientId": foreign["id"]})
    assert blocked.status_code == 404


def test_other_users_cannot_see_projects(user_client, other_client, admin_client) -> None:
    records = create_hierarchy(user_client)
    project_id = records["project"]["id"]

    assert other_client.get(f"/api/projects/{project_id}").status_code == 404
    assert other_client.get("/api/projects").json()["data"] == []
    assert admin_client.get(f"/api/projects/{project_id}").status_code == 200


def test_delete_project(user_client) -> None:
    records = create_hierarchy(user_client)
    project_id = records["project"]["id"]
    assert user_client.delete(f"/api/projects/{project_id}").status_code == 200
    assert user_client.get(f"/api/projects/{project_id}").status_code == 404
    assert user_client.get(f"/api/assets/{records['asset']['id']}").status_code == 404
    assert user_client.get(f"/api/clients/{records['client']['id']}").status_code == 200
