def test_create_and_read_back(client):
    r = client.post("/profiles", json={"user_id": 3, "bio": "Mathematician", "age": 36})
    assert r.status_code == 201
    profile_id = r.json()["id"]
    assert profile_id > 0

    r = client.get(f"/profiles/{profile_id}")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/json")
    assert r.json() == {"id": profile_id, "user_id": 3, "bio": "Mathematician", "age": 36}


def test_unknown_user_is_accepted(client):
    # no user 9999 exists; ownership is never checked
    r = client.post("/profiles", json={"user_id": 9999, "bio": "", "age": 0})
    assert r.status_code == 201


def test_zero_user_id_rejected(client, profile_repo):
    for body in (
        {"user_id": 0, "bio": "x", "age": 20},
        {"user_id": 0, "bio": "", "age": 0},
        {"bio": "no owner", "age": 50},
    ):
        r = client.post("/profiles", json=body)
        assert r.status_code == 400, body
        assert r.content == b""
    assert profile_repo.get(1) is None


def test_malformed_json_rejected(client, profile_repo):
    headers = {"Content-Type": "application/json"}
    for body in (b"{", b'{"user_id": "7"}', b'{"user_id": 7, "age": 1.5}', b'"text"'):
        r = client.post("/profiles", content=body, headers=headers)
        assert r.status_code == 400, body
    assert profile_repo.get(1) is None


def test_read_missing_profile(client):
    r = client.get("/profiles/77")
    assert r.status_code == 404
    assert r.content == b""


def test_read_invalid_ids(client):
    for path in (
        "/profiles/", "/profiles/abc", "/profiles/2/x",
        "/profiles/%201", "/profiles/1.0", "/profiles/1_0", "/profiles/-99999999999999999999",
    ):
        assert client.get(path).status_code == 400, path


def test_unsupported_methods(client):
    assert client.get("/profiles").status_code == 405
    assert client.put("/profiles", json={}).status_code == 405
    assert client.put("/profiles/1", json={}).status_code == 405
    assert client.delete("/profiles/1").status_code == 405
    assert client.post("/profiles/1", json={}).status_code == 405


def test_body_decoded_regardless_of_content_type(client):
    body = b'{"user_id": 5, "bio": "x", "age": 40}'
    r = client.post("/profiles", content=body, headers={"Content-Type": "application/x-www-form-urlencoded"})
    assert r.status_code == 201
    assert client.get(f"/profiles/{r.json()['id']}").json()["user_id"] == 5


def test_null_body_has_zero_user_id(client):
    assert client.post("/profiles", content=b"null").status_code == 400


def test_integers_limited_to_64_bits(client, profile_repo):
    for body in ({"user_id": 2**63, "bio": "", "age": 1}, {"user_id": 1, "bio": "", "age": -(2**63) - 1}):
        assert client.post("/profiles", json=body).status_code == 400
    assert profile_repo.get(1) is None

    r = client.post("/profiles", json={"user_id": 2**63 - 1, "bio": "", "age": 1})
    assert r.status_code == 201
