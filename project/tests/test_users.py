# tests/test_users.py

NEW_USER = {
    "username": "joana",
    "password": "segredo123",
    "name": "Joana Lima",
    "email": "joana@example.com",
    "role": "editor",
}


def create(client, **overrides):
    payload = dict(NEW_USER, **overrides)
    return client.post("/api/users", json=payload)


def test_list_users_has_admin_without_hash(admin_client):
    body = admin_client.get("/api/users").json()
    assert body["success"] is True
    assert body["total"] == 1
    assert body["users"][0]["username"] == "admin"
    assert "password_hash" not in body["users"][0]


def test_create_user(admin_client):
    response = create(admin_client)
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["username"] == "joana"
    assert user["role"] == "editor"
    assert "password_hash" not in user
    assert admin_client.get("/api/users").json()["total"] == 2


def test_created_user_can_log_in(admin_client, client):
    create(admin_client)
    admin_client.post("/api/auth/logout")
    response = client.post("/api/auth/login", json={"username": "joana", "password": "segredo123"})
    assert response.status_code == 200


def test_duplicate_username_is_400(admin_client):
    create(admin_client)
    response = create(admin_client, email="outra@example.com")
    assert response.status_code == 400
    assert response.json()["message"] == "Nome de usuário já está em uso"


def test_create_user_validation(admin_client):
    assert create(admin_client, username="jo").status_code == 400
    assert create(admin_client, password="123").status_code == 400
    assert create(admin_client, email="sem-arroba").status_code == 400
    assert create(admin_client, name="").status_code == 400


def test_partial_update_keeps_other_fields(admin_client):
    user_id = create(admin_client).json()["user"]["id"]
    response = admin_client.put(f"/api/users/{user_id}", json={"name": "Joana L."})
    assert response.status_code == 200

    user = admin_client.get(f"/api/users/{user_id}").json()["user"]
    assert user["name"] == "Joana L."
    assert user["email"] == "joana@example.com"
    assert user["username"] == "joana"
    assert user["role"] == "editor"


def test_null_field_does_not_overwrite(admin_client):
    user_id = create(admin_client).json()["user"]["id"]
    admin_client.put(f"/api/users/{user_id}", json={"email": None, "role": "admin"})
    user = admin_client.get(f"/api/users/{user_id}").json()["user"]
    assert user["email"] == "joana@example.com"
    assert user["role"] == "admin"


def test_password_change_is_rehashed(admin_client, client):
    user_id = create(admin_client).json()["user"]["id"]
    admin_client.put(f"/api/users/{user_id}", json={"password": "novasenha"})
    admin_client.post("/api/auth/logout")

    assert client.post("/api/auth/login", json={"username": "joana", "password": "segredo123"}).status_code == 401
    assert client.post("/api/auth/login", json={"username": "joana", "password": "novasenha"}).status_code == 200


def test_update_to_taken_username_is_400(admin_client):
    user_id = create(admin_client).json()["user"]["id"]
    response = admin_client.put(f"/api/users/{user_id}", json={"username": "admin"})
    assert response.status_code == 400


def test_update_own_username_unchanged_is_ok(admin_client):
    user_id = create(admin_client).json()["user"]["id"]
    response = admin_client.put(f"/api/users/{user_id}", json={"username": "joana"})
    assert response.status_code == 200


def test_update_missing_user_is_404(admin_client):
    assert admin_client.put("/api/users/999", json={"name": "X"}).status_code == 404


def test_overlong_user_fields_are_400(admin_client):
    assert create(admin_client, username="u" * 101).status_code == 400
    assert create(admin_client, name="n" * 256).status_code == 400
    assert create(admin_client, role="r" * 51).status_code == 400
    user_id = create(admin_client).json()["user"]["id"]
    assert admin_client.put(f"/api/users/{user_id}", json={"username": "u" * 101}).status_code == 400
