"""HTTP round trips against the real stack on in-memory SQLite."""

API = "/api/v1"


def create(client, path: str, payload: dict) -> dict:
    response = client.post(f"{API}{path}", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestEntityEndpoints:

    def test_category_crud(self, api_client):
        created = create(api_client, "/product-categories", {"name": "Tools", "description": "Hand tools"})
        category_id = created["id"]

        fetched = api_client.get(f"{API}/product-categories/{category_id}")
        assert fetched.status_code == 200
        assert fetched.json()["data"]["name"] == "Tools"

        updated = api_client.put(f"{API}/product-categories/{category_id}", json={"name": "Power tools"})
        assert updated.status_code == 200
        assert updated.json()["data"]["name"] == "Power tools"

        assert api_client.delete(f"{API}/product-categories/{category_id}").status_code == 204
        assert api_client.get(f"{API}/product-categories/{category_id}").status_code == 404

    def test_duplicate_name_conflicts(self, api_client):
        create(api_client, "/supplier-categories", {"name": "Hardware"})

        response = api_client.post(f"{API}/supplier-categories", json={"name": "Hardware"})

        assert response.status_code == 409
        assert response.json()["data"]["code"] == "duplicate"

    def test_invalid_model_is_bad_request(self, api_client):
        response = api_client.post(f"{API}/users", json={"username": "jo", "email": "not-an-email"})

        assert response.status_code == 400
        assert response.json()["data"]["code"] == "invalid_data"

    def test_zero_id_is_bad_request(self, api_client):
        response = api_client.get(f"{API}/products/0")

        assert response.status_code == 400
        assert response.json()["data"]["code"] == "zero_id"

    def test_empty_list(self, api_client):
        response = api_client.get(f"{API}/addresses")

        assert response.status_code == 200
        assert response.json() == {"status": 200, "message": "Address list retrieved", "data": []}

    def test_product_with_unknown_supplier(self, api_client):
        response = api_client.post(f"{API}/products", json={
            "supplier_id": 999, "product_name": "Drill", "manufacturer": "Tools Inc",
            "cost_price": 10, "sale_price": 12, "stock_quantity": 1,
        })

        assert response.status_code == 400
        assert response.json()["data"]["code"] == "invalid_foreign_key"

    def test_request_id_is_echoed(self, api_client):
        response = api_client.get(f"{API}/clients", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"


class TestClientEndpoints:

    def test_versioned_update(self, api_client):
        client = create(api_client, "/clients", {"name": "Acme", "email": "buy@acme.com"})
        client_id = client["id"]
        assert client["version"] == 1

        ok = api_client.put(f"{API}/clients/{client_id}",
                            json={"name": "Acme SA", "email": "buy@acme.com", "version": 1})
        assert ok.status_code == 200
        assert ok.json()["data"]["version"] == 2

        stale = api_client.put(f"{API}/clients/{client_id}",
                               json={"name": "Acme Ltd", "email": "buy@acme.com", "version": 1})
        assert stale.status_code == 409
        assert stale.json()["data"]["code"] == "version_conflict"

    def test_create_ignores_client_supplied_id_and_version(self, api_client):
        """
        Behavior:
          - The body carries `id` and `version`; both are server-managed.
          - The row gets a database-assigned id and starts at version 1, and a
            later plain insert does not collide with the rejected id.
        """
        data = create(api_client, "/clients", {"name": "Acme", "email": "buy@acme.com", "id": 500, "version": 42})

        assert data["id"] != 500
        assert data["version"] == 1
        assert api_client.get(f"{API}/clients/500").status_code == 404
        create(api_client, "/clients", {"name": "Beta", "email": "buy@beta.com"})

    def test_update_without_status_keeps_client_disabled(self, api_client):
        client = create(api_client, "/clients", {"name": "Acme", "email": "buy@acme.com"})
        assert api_client.patch(f"{API}/clients/{client['id']}/disable").status_code == 204

        response = api_client.put(f"{API}/clients/{client['id']}",
                                  json={"name": "Acme SA", "email": "buy@acme.com", "version": 2})

        assert response.status_code == 200
        assert response.json()["data"]["status"] is False
        assert response.json()["data"]["version"] == 3

    def test_update_id_mismatch(self, api_client):
        client = create(api_client, "/clients", {"name": "Acme", "email": "buy@acme.com"})

        response = api_client.put(f"{API}/clients/{client['id']}",
                                  json={"id": client["id"] + 1, "name": "Acme", "version": 1})

        assert response.status_code == 400

    def test_filter_status_and_version(self, api_client):
        first = create(api_client, "/clients", {"name": "Alpha Foods", "email": "a@alpha.com"})
        create(api_client, "/clients", {"name": "Beta Motors", "email": "b@beta.com"})

        found = api_client.get(f"{API}/clients/filter", params={"name": "alpha", "limit": 0, "offset": -3})
        assert found.status_code == 200
        assert [c["id"] for c in found.json()["data"]] == [first["id"]]

        assert api_client.patch(f"{API}/clients/{first['id']}/disable").status_code == 204
        inactive = api_client.get(f"{API}/clients/filter", params={"status": "false"}).json()["data"]
        assert [c["id"] for c in inactive] == [first["id"]]

        version = api_client.get(f"{API}/clients/{first['id']}/version").json()["data"]
        assert version == {"id": first["id"], "version": 2}

        assert api_client.patch(f"{API}/clients/{first['id']}/enable").status_code == 204

    def test_exists(self, api_client):
        client = create(api_client, "/clients", {"name": "Acme", "email": "buy@acme.com"})

        assert api_client.get(f"{API}/clients/{client['id']}/exists").json()["data"]["exists"] is True
        assert api_client.get(f"{API}/clients/{client['id'] + 50}/exists").json()["data"]["exists"] is False

    def test_status_toggle_on_missing_client(self, api_client):
        assert api_client.patch(f"{API}/clients/999/enable").status_code == 404


class TestRelationEndpoints:

    def test_relation_lifecycle(self, api_client):
        supplier = create(api_client, "/suppliers", {"name": "Parts Supplier"})
        category = create(api_client, "/supplier-categories", {"name": "Hardware"})
        base = f"{API}/suppliers/{supplier['id']}/categories"
        body = {"relation": {"supplier_id": supplier["id"], "category_id": category["id"]}}

        first = api_client.post(base, json=body)
        second = api_client.post(base, json=body)
        assert first.status_code == 201
        assert first.json()["message"] == "Supplier category relation created"
        assert second.status_code == 200
        assert second.json()["message"] == "Supplier category relation already exists"
        assert second.json()["data"]["category_id"] == category["id"]

        listed = api_client.get(base).json()["data"]
        assert [r["category_id"] for r in listed] == [category["id"]]

        by_category = api_client.get(f"{API}/categories/{category['id']}/suppliers").json()["data"]
        assert [r["supplier_id"] for r in by_category] == [supplier["id"]]

        assert api_client.get(f"{base}/{category['id']}").json()["data"] == {"exists": True}

        assert api_client.delete(f"{base}/{category['id']}").status_code == 204
        assert api_client.delete(f"{base}/{category['id']}").status_code == 404
        assert api_client.delete(base).status_code == 204
        assert api_client.get(f"{base}/{category['id']}").json()["data"] == {"exists": False}

    def test_missing_relation_payload(self, api_client):
        response = api_client.post(f"{API}/products/1/categories", json={})

        assert response.status_code == 400
        assert response.json()["data"]["fields"] == ["relation"]

    def test_parent_mismatch(self, api_client):
        response = api_client.post(f"{API}/users/1/categories",
                                   json={"relation": {"user_id": 2, "category_id": 3}})

        assert response.status_code == 400

    def test_zero_child_id(self, api_client):
        response = api_client.post(f"{API}/products/1/categories", json={"relation": {"category_id": 0}})

        assert response.status_code == 400
        assert response.json()["data"]["code"] == "zero_id"

    def test_unknown_child(self, api_client):
        supplier = create(api_client, "/suppliers", {"name": "Parts Supplier"})

        response = api_client.post(f"{API}/suppliers/{supplier['id']}/contacts",
                                   json={"relation": {"contact_id": 12345}})

        assert response.status_code == 400
        assert response.json()["data"]["code"] == "invalid_foreign_key"


class TestAggregateEndpoints:

    def _payload(self, category_ids: list[int]) -> dict:
        return {
            "supplier": {"name": "Parts Supplier", "cnpj": "11.222.333/0001-44"},
            "address": {"street": "Rua das Flores", "city": "Sao Paulo", "state": "SP",
                        "country": "Brasil", "postal_code": "01310-100"},
            "contact": {"contact_name": "Ana Souza", "email": "ana@parts.com"},
            "categories": [{"id": i} for i in category_ids],
        }

    def test_supplier_full(self, api_client):
        category = create(api_client, "/supplier-categories", {"name": "Hardware"})

        data = create(api_client, "/suppliers/full", self._payload([category["id"]]))

        supplier_id = data["supplier"]["id"]
        assert data["address"]["supplier_id"] == supplier_id
        assert data["contact"]["supplier_id"] == supplier_id
        contacts = api_client.get(f"{API}/suppliers/{supplier_id}/contacts").json()["data"]
        assert [c["contact_id"] for c in contacts] == [data["contact"]["id"]]

    def test_supplier_full_ignores_client_supplied_ids(self, api_client):
        category = create(api_client, "/supplier-categories", {"name": "Hardware"})
        payload = self._payload([category["id"]])
        payload["supplier"].update({"id": 700, "version": 9})
        payload["contact"]["id"] = 701

        data = create(api_client, "/suppliers/full", payload)

        assert data["supplier"]["id"] != 700
        assert data["supplier"]["version"] == 1
        assert data["contact"]["id"] != 701

    def test_supplier_full_is_atomic(self, api_client):
        category = create(api_client, "/supplier-categories", {"name": "Hardware"})

        response = api_client.post(f"{API}/suppliers/full", json=self._payload([category["id"], 9999]))

        assert response.status_code == 400
        assert api_client.get(f"{API}/suppliers").json()["data"] == []
        assert api_client.get(f"{API}/addresses").json()["data"] == []
        assert api_client.get(f"{API}/contacts").json()["data"] == []

    def test_supplier_full_requires_categories(self, api_client):
        response = api_client.post(f"{API}/suppliers/full", json=self._payload([]))

        assert response.status_code == 400
        assert response.json()["data"]["fields"] == ["categories"]

    def test_user_full(self, api_client):
        category = create(api_client, "/user-categories", {"name": "Staff"})

        data = create(api_client, "/users/full", {
            "user": {"username": "joana", "email": "joana@example.com"},
            "address": {"street": "Av. Brasil", "city": "Recife", "state": "PE",
                        "country": "Brasil", "postal_code": "50000000"},
            "contact": {"contact_name": "Joana Reis"},
            "categories": [{"id": category["id"]}],
        })

        assert data["address"]["user_id"] == data["user"]["id"]
        assert data["categories"] == [{"id": category["id"], "name": None}]
