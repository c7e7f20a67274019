def test_malformed_json_is_bad_request(client, auth_headers):
    resp = client.post(
        "/users",
        content=b"{not json",
        headers={**auth_headers, "Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    assert resp.json()["error"] == {"code": "BAD_REQUEST", "message": "Invalid request body"}


def test_schema_violation_lists_details(client):
    resp = client.post("/products", json={"name": "", "price": -1, "stock": 1, "categoryId": "1"})

    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"] == "Validation failed"
    assert {tuple(d["loc"])[-1] for d in error["details"]} >= {"name", "price"}


def test_unknown_route(client):
    resp = client.get("/nope")

    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


def test_not_found_entity(client):
    resp = client.get("/products/missing")

    assert resp.status_code == 404
    assert resp.json() == {"error": {"code": "NOT_FOUND", "message": "Product not found"}}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
