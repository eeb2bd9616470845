"""API tests for the product catalogue."""

import uuid

from tests.conftest import API

PRODUCTS = f"{API}/products"


def create(client, payload):
    response = client.post(PRODUCTS, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestProductCrud:
    def test_create_and_read(self, client, product_payload):
        created = create(client, product_payload("P1"))

        response = client.get(f"{PRODUCTS}/{created['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["code"] == "P1"
        assert body["data"]["price"] == 12.5

    def test_duplicate_code_conflicts(self, client, product_payload):
        create(client, product_payload("P1"))

        response = client.post(PRODUCTS, json=product_payload("P1", name="Other"))

        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Product with this code already exists"

    def test_missing_fields_are_invalid_input(self, client):
        response = client.post(PRODUCTS, json={"name": "No code"})

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "INVALID_INPUT"
        assert body["details"]["errors"]

    def test_unknown_product_is_not_found(self, client):
        response = client.get(f"{PRODUCTS}/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_update(self, client, product_payload):
        created = create(client, product_payload("P1"))

        response = client.put(
            f"{PRODUCTS}/{created['id']}", json={"stock": 42, "name": "Renamed"}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["stock"] == 42
        assert data["name"] == "Renamed"
        assert data["code"] == "P1"

    def test_update_to_taken_code_conflicts(self, client, product_payload):
        create(client, product_payload("P1"))
        second = create(client, product_payload("P2"))

        response = client.put(f"{PRODUCTS}/{second['id']}", json={"code": "P1"})

        assert response.status_code == 409

    def test_null_for_required_field_is_invalid(self, client, product_payload):
        created = create(client, product_payload("P1"))

        for field in ("name", "code", "price", "stock"):
            response = client.put(f"{PRODUCTS}/{created['id']}", json={field: None})

            assert response.status_code == 400, field
            assert response.json()["error_code"] == "INVALID_INPUT"

        stored = client.get(f"{PRODUCTS}/{created['id']}").json()["data"]
        assert stored["name"] == "Product P1"

    def test_description_can_be_cleared(self, client, product_payload):
        created = create(client, product_payload("P1", description="Crunchy"))

        response = client.put(
            f"{PRODUCTS}/{created['id']}", json={"description": None}
        )

        assert response.status_code == 200
        assert response.json()["data"]["description"] is None

    def test_delete(self, client, product_payload):
        created = create(client, product_payload("P1"))

        response = client.delete(f"{PRODUCTS}/{created['id']}")
        assert response.status_code == 200
        assert response.json() == {"success": True}

        assert client.get(f"{PRODUCTS}/{created['id']}").status_code == 404
        assert client.delete(f"{PRODUCTS}/{created['id']}").status_code == 404


class TestProductListing:
    def test_newest_first_by_default(self, client, product_payload):
        for code in ("A1", "B2", "C3"):
            create(client, product_payload(code))

        body = client.get(PRODUCTS).json()

        assert body["total"] == 3
        assert [p["code"] for p in body["data"]] == ["C3", "B2", "A1"]

    def test_search_matches_name_or_code(self, client, product_payload):
        create(client, product_payload("APPLE-1", name="Green apple"))
        create(client, product_payload("PEAR-1", name="Pear"))
        create(client, product_payload("X-9", name="Pineapple juice"))

        body = client.get(PRODUCTS, params={"search": "apple"}).json()

        assert body["total"] == 2
        assert {p["code"] for p in body["data"]} == {"APPLE-1", "X-9"}

    def test_sort_by_field(self, client, product_payload):
        create(client, product_payload("B", price=5.0))
        create(client, product_payload("A", price=1.0))
        create(client, product_payload("C", price=3.0))

        body = client.get(PRODUCTS, params={"sortBy": "price", "order": "asc"}).json()

        assert [p["code"] for p in body["data"]] == ["A", "C", "B"]

    def test_invalid_sort_field(self, client):
        response = client.get(PRODUCTS, params={"sortBy": "hashed_password"})

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "sortBy"

    def test_invalid_order(self, client):
        response = client.get(PRODUCTS, params={"order": "sideways"})

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "order"

    def test_export_returns_full_listing(self, client, product_payload):
        create(client, product_payload("P1"))
        create(client, product_payload("P2"))

        body = client.get(f"{PRODUCTS}/export").json()

        assert body["success"] is True
        assert body["total"] == 2


class TestProductBulk:
    def test_duplicate_inside_batch_fails_alone(self, client, product_payload):
        response = client.post(
            f"{PRODUCTS}/bulk",
            json=[product_payload("P1"), product_payload("P1", name="Again")],
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert (body["total"], body["created"], body["failed"]) == (2, 1, 1)
        assert body["data"]["successful"][0]["index"] == 0
        assert body["data"]["successful"][0]["data"]["code"] == "P1"
        failure = body["data"]["failed"][0]
        assert failure["index"] == 1
        assert failure["identifying_field"] == "P1"
        assert failure["error_message"] == "Product with this code already exists"

    def test_all_created(self, client, product_payload):
        response = client.post(
            f"{PRODUCTS}/bulk", json=[product_payload("P1"), product_payload("P2")]
        )

        body = response.json()
        assert body["success"] is True
        assert body["created"] == 2
        assert client.get(PRODUCTS).json()["total"] == 2

    def test_empty_batch_is_rejected(self, client):
        response = client.post(f"{PRODUCTS}/bulk", json=[])

        assert response.status_code == 400
        assert response.json()["message"] == "Payload must be a non-empty array"

    def test_non_array_is_rejected(self, client, product_payload):
        response = client.post(f"{PRODUCTS}/bulk", json=product_payload("P1"))

        assert response.status_code == 400
