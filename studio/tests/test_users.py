def _user_id(http) -> str:
    return http.get("/api/me").json()["data"]["user"]["id"]


def test_admin_lists_users(admin_client, user_client) -> None:
    response = admin_client.get("/api/users")
    assert response.status_code == 200
    users = response.json()["data"]
    assert {user["email"]: user["role"] for user in users} == {
        "admin@example.com": "ADMIN",
        "user@example.com": "USER",
    }
    assert "passwordHash" not in users[0]


def test_regular_users_cannot_manage_users(user_client) -> None:
    response = user_client.get("/api/users")
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"
    assert user_client.patch(f"/api/users/{_user_id(user_client)}", json={"role": "ADMIN"}).status_code == 403


def test_promotion_takes_effect_immediately(admin_client, user_client) -> None:
    user_id = _user_id(user_client)
    response = admin_client.patch(f"/api/users/{user_id}", json={"role": "ADMIN", "name": "  Promoted  "})
    assert response.status_code == 200
    assert response.json()["data"]["role"] == "ADMIN"
    assert response.json()["data"]["name"] == "Promoted"

    assert user_client.get("/api/me").json()["data"]["user"]["role"] == "ADMIN"
    assert user_client.get("/api/users").status_code == 200


def test_last_admin_cannot_be_demoted(admin_client, user_client) -> None:
    admin_id = _user_id(admin_client)
    response = admin_client.patch(f"/api/users/{admin_id}", json={"role": "USER"})
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Cannot demote the last admin"

    admin_client.patch(f"/api/users/{_user_id(user_client)}", json={"role": "ADMIN"})
    demoted = admin_client.patch(f"/api/users/{admin_id}", json={"role": "USER"})
    assert demoted.status_code == 200
    assert admin_client.get("/api/users").status_code == 403


def test_unknown_user(admin_client) -> None:
    response = admin_client.patch("/api/users/00000000-0000-0000-0000-000000000000", json={"name": "x"})
    assert response.status_code == 404
