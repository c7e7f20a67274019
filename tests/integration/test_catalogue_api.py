class TestProductsApi:
    def test_list_envelope_and_camel_case(self, client):
        resp = client.get("/products")

        assert resp.status_code == 200
        body = resp.json()
        assert body["total"] == 3
        assert (body["limit"], body["offset"]) == (10, 0)
        first = next(p for p in body["items"] if p["id"] == "1")
        assert first["categoryId"] == "2"
        assert first["price"] == 2499.99
        assert first["imageUrls"] == ["https://example.com/macbook.jpg"]
        assert "createdAt" in first and "updatedAt" in first

    def test_filter_sort_paginate(self, client):
        resp = client.get("/products", params={"sortBy": "price", "order": "desc", "limit": 2})
        assert [p["id"] for p in resp.json()["items"]] == ["1", "2"]

        cheap = client.get("/products", params={"maxPrice": 100})
        assert [p["id"] for p in cheap.json()["items"]] == ["3"]

        phones = client.get("/products", params={"categoryId": "3"})
        assert phones.json()["total"] == 1

        by_text = client.get("/products", params={"name": "titanium"})
        assert [p["id"] for p in by_text.json()["items"]] == ["2"]

    def test_limit_bounds(self, client):
        assert client.get("/products", params={"limit": 0}).status_code == 400
        assert client.get("/products", params={"limit": 101}).status_code == 400
        assert client.get("/products", params={"offset": -1}).status_code == 400

    def test_crud(self, client):
        created = client.post(
            "/products",
            json={"name": "Hoodie", "price": 49.5, "stock": 12, "categoryId": "4"},
        )
        assert created.status_code == 201
        product = created.json()
        assert product["description"] == ""
        assert product["imageUrls"] == []

        patched = client.patch(f"/products/{product['id']}", json={"stock": 3})
        assert patched.json()["stock"] == 3
        assert patched.json()["name"] == "Hoodie"

        assert client.delete(f"/products/{product['id']}").status_code == 204
        assert client.get(f"/products/{product['id']}").status_code == 404

    def test_create_with_unknown_category(self, client):
        resp = client.post("/products", json={"name": "X", "price": 1, "stock": 1, "categoryId": "99"})

        assert resp.status_code == 404
        assert resp.json()["error"]["message"] == "Category not found"


class TestCategoriesApi:
    def test_tree(self, client):
        tree = client.get("/categories/tree").json()

        by_name = {node["name"]: node for node in tree}
        assert set(by_name) == {"Electronics", "Clothing"}
        assert [c["name"] for c in by_name["Electronics"]["children"]] == ["Laptops", "Smartphones"]
        assert by_name["Electronics"]["children"][0]["parentId"] == "1"
        assert by_name["Clothing"]["children"] == []

    def test_create_and_move(self, client):
        created = client.post("/categories", json={"name": "Tablets", "parentId": "1"})
        assert created.status_code == 201
        cat_id = created.json()["id"]

        moved = client.patch(f"/categories/{cat_id}", json={"parentId": None})
        assert moved.json()["parentId"] is None

    def test_cycle_rejected(self, client):
        resp = client.patch("/categories/1", json={"parentId": "2"})

        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_delete(self, client):
        assert client.delete("/categories/4").status_code == 204
        assert client.delete("/categories/4").status_code == 404
