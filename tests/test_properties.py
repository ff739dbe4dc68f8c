class TestPropertyCreation:
    """Tests for creating properties"""

    def test_create_property_success(self, client):
        data = {
            "code": "OAK",
            "name": "Oak Residences",
            "address": "4 Oak Lane",
            "description": "Six two-bedroom flats",
        }

        response = client.post("/api/properties", json=data)

        assert response.status_code == 201
        prop = response.json()
        assert prop["code"] == "OAK"
        assert prop["description"] == "Six two-bedroom flats"
        assert "id" in prop
        assert "created_at" in prop

    def test_create_property_missing_fields(self, client):
        response = client.post("/api/properties", json={"name": "No Address"})

        assert response.status_code == 400
        fields = {issue["field"] for issue in response.json()["detail"]}
        assert fields == {"code", "address"}

    def test_create_property_empty_name(self, client):
        response = client.post("/api/properties", json={"code": "X", "name": "", "address": "Y"})

        assert response.status_code == 400


class TestPropertyRetrieval:
    def test_list_empty_properties(self, client):
        response = client.get("/api/properties")

        assert response.status_code == 200
        assert response.json() == {"properties": [], "total": 0}

    def test_list_properties_with_counts(self, client, property_id, unit_id, tenant_id):
        client.post("/api/units", json={"property_id": property_id, "code": "A2", "name": "Apartment 2", "rent_amount": 900})
        client.post(
            "/api/expenses",
            json={"property_id": property_id, "description": "Roof", "amount": 500, "category": "Repairs", "date": "2024-02-01"},
        )

        prop = client.get("/api/properties").json()["properties"][0]

        assert prop["unit_count"] == 2
        assert prop["expense_count"] == 1
        assert prop["active_tenant_count"] == 1

    def test_get_property_detail(self, client, property_id, unit_id):
        prop = client.get(f"/api/properties/{property_id}").json()

        assert prop["id"] == property_id
        assert [u["id"] for u in prop["units"]] == [unit_id]
        assert prop["unit_count"] == 1
        assert prop["expenses"] == []

    def test_get_nonexistent_property(self, client):
        assert client.get("/api/properties/99999").status_code == 404


class TestPropertyUpdateDelete:
    def test_update_property(self, client, property_id):
        response = client.patch(f"/api/properties/{property_id}", json={"name": "Sunset Towers"})

        assert response.status_code == 200
        assert response.json()["name"] == "Sunset Towers"
        assert response.json()["code"] == "SUN"

    def test_update_clears_description(self, client):
        prop = client.post(
            "/api/properties",
            json={"code": "OAK", "name": "Oak", "address": "4 Oak Lane", "description": "Old text"},
        ).json()

        response = client.patch(f"/api/properties/{prop['id']}", json={"description": None, "name": None})

        assert response.status_code == 200
        assert response.json()["description"] is None
        assert response.json()["name"] == "Oak"

    def test_delete_property_removes_expenses(self, client, property_id):
        client.post(
            "/api/expenses",
            json={"property_id": property_id, "description": "Paint", "amount": 80, "category": "Maintenance", "date": "2024-02-01"},
        )

        assert client.delete(f"/api/properties/{property_id}").status_code == 204
        assert client.get("/api/expenses").json()["total"] == 0

    def test_delete_property_with_units_fails(self, client, property_id, unit_id):
        response = client.delete(f"/api/properties/{property_id}")

        assert response.status_code == 500
        assert client.get(f"/api/properties/{property_id}").status_code == 200

    def test_delete_nonexistent_property(self, client):
        assert client.delete("/api/properties/99999").status_code == 404
