import pytest


@pytest.mark.parametrize(
    "method, path, body",
    [
        ("POST", "/users", {"email": "a@b.c", "name": "A"}),
        ("GET", "/users/1", None),
        ("PUT", "/users/1", {"name": "B"}),
        ("DELETE", "/users/1", None),
        ("POST", "/profiles", {"user_id": 1, "bio": "", "age": 1}),
        ("GET", "/profiles/1", None),
        ("GET", "/health", None),
    ],
)
def test_storage_error_is_bare_500(failing_client, method, path, body):
    r = failing_client.request(method, path, json=body)
    assert r.status_code == 500
    assert r.content == b""


def test_validation_runs_before_storage(failing_client):
    assert failing_client.put("/users/1", json={"name": ""}).status_code == 400
    assert failing_client.post("/profiles", json={"user_id": 0}).status_code == 400
    assert failing_client.get("/users/abc").status_code == 400


def test_root_and_health(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["service"] == "users-profiles-api"

    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy"}


def test_unknown_path_is_bare_404(client):
    r = client.get("/nowhere")
    assert r.status_code == 404
    assert r.content == b""
