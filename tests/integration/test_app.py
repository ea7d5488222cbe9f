import pytest

from auth.tokens import TokenVerifier


def _register(client, username="bob", password="hunter2"):
    return client.post("/register", json={"username": username, "password": password})


def _token(client, username="bob", password="hunter2"):
    _register(client, username, password)
    resp = client.post("/login", json={"username": username, "password": password})
    assert resp.status_code == 200
    return resp.json()["token"]


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


def test_end_to_end_register_login_gate(client):
    """
    Outcome:
        register bob -> ok; login bob -> token; wrong password -> rejected;
        protected route without header -> 401; with token -> admitted as bob.
    """
    reg = _register(client)
    assert reg.status_code == 200

    login = client.post("/login", json={"username": "bob", "password": "hunter2"})
    assert login.status_code == 200
    assert login.json()["message"] == "Login successful"
    token = login.json()["token"]

    bad = client.post("/login", json={"username": "bob", "password": "wrongpass"})
    assert bad.status_code == 400

    missing = client.get("/me")
    assert missing.status_code == 401
    assert missing.json() == {"detail": "Missing token"}

    admitted = client.get("/me", headers=_auth(token))
    assert admitted.status_code == 200
    assert admitted.json()["username"] == "bob"


def test_root_and_health(client):
    root = client.get("/")
    assert root.status_code == 200
    assert root.text == "Universal Loot API is live"
    assert client.get("/health").json() == {"status": "ok"}


def test_register_response_never_contains_hash(client, storage):
    resp = _register(client)
    data = resp.json()
    assert data["message"] == "User registered"
    assert data["user"] == {"id": 1, "username": "bob"}
    stored_hash = storage.find_user_by_username("bob").password_hash
    assert stored_hash not in resp.text
    assert "hunter2" not in resp.text


def test_register_duplicate_is_conflict(client):
    assert _register(client).status_code == 200
    dup = _register(client, password="different")
    assert dup.status_code == 409
    assert dup.json() == {"detail": "Username already exists"}


@pytest.mark.parametrize(
    "body",
    [{}, {"username": "bob"}, {"password": "pw"}, {"username": "", "password": "pw"}, {"username": "bob", "password": ""}],
)
def test_register_missing_fields_is_bad_request(client, body):
    resp = client.post("/register", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"detail": "Username and password required"}


def test_login_failures_are_indistinguishable(client):
    _register(client)
    unknown = client.post("/login", json={"username": "ghost", "password": "hunter2"})
    wrong = client.post("/login", json={"username": "bob", "password": "nope"})
    assert unknown.status_code == wrong.status_code == 400
    assert unknown.json() == wrong.json() == {"detail": "Invalid username or password"}


def test_issued_token_carries_identity(client, test_secret):
    token = _token(client)
    ident = TokenVerifier(test_secret).verify(token)
    assert ident.username == "bob"
    assert ident.id == 1


def test_items_public_read_protected_write(client):
    assert client.get("/items").json() == []

    unauth = client.post("/items", json={"name": "sword", "quantity": 1, "price": 9.5})
    assert unauth.status_code == 401

    token = _token(client)
    created = client.post("/items", json={"name": "sword", "quantity": 1, "price": 9.5}, headers=_auth(token))
    assert created.status_code == 200
    item = created.json()
    assert item == {"id": 1, "name": "sword", "quantity": 1, "price": 9.5}

    assert client.get("/items").json() == [item]


def test_item_update_and_delete(client):
    token = _token(client)
    item = client.post("/items", json={"name": "sword", "quantity": 1, "price": 9.5}, headers=_auth(token)).json()

    upd = client.put(f"/items/{item['id']}", json={"name": "long sword", "quantity": 2, "price": 15}, headers=_auth(token))
    assert upd.status_code == 200
    assert upd.json()["name"] == "long sword"

    gone = client.delete(f"/items/{item['id']}", headers=_auth(token))
    assert gone.status_code == 200
    assert gone.json() == {"message": f"Item {item['id']} deleted"}
    assert client.get("/items").json() == []


def test_item_update_delete_missing_is_404(client):
    token = _token(client)
    assert client.put("/items/999", json={"name": "x"}, headers=_auth(token)).status_code == 404
    assert client.delete("/items/999", headers=_auth(token)).status_code == 404


@pytest.mark.parametrize(
    "method, path",
    [("post", "/items"), ("put", "/items/1"), ("delete", "/items/1"), ("get", "/me")],
)
def test_every_protected_route_rejects_bad_token(client, method, path):
    kwargs = {"headers": _auth("not-a-real-token")}
    if method in ("post", "put"):
        kwargs["json"] = {"name": "x"}
    resp = getattr(client, method)(path, **kwargs)
    assert resp.status_code == 403
    assert resp.json() == {"detail": "Invalid token"}
