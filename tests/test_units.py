from conftest import payment_payload


class TestUnitCreation:
    """Tests for creating units"""

    def test_create_unit_success(self, client, property_id):
        response = client.post(
            "/api/units",
            json={"property_id": property_id, "code": "B2", "name": "Bungalow 2", "rent_amount": 950.50},
        )

        assert response.status_code == 201
        unit = response.json()
        assert unit["code"] == "B2"
        assert unit["rent_amount"] == 950.50
        assert unit["status"] == "vacant"
        assert unit["property"]["id"] == property_id

    def test_create_unit_unknown_property(self, client):
        response = client.post(
            "/api/units",
            json={"property_id": 99999, "code": "X", "name": "X", "rent_amount": 100},
        )

        assert response.status_code == 404

    def test_create_unit_requires_positive_rent(self, client, property_id):
        response = client.post(
            "/api/units",
            json={"property_id": property_id, "code": "X", "name": "X", "rent_amount": 0},
        )

        assert response.status_code == 400
        assert response.json()["detail"][0]["field"] == "rent_amount"


class TestUnitRetrieval:
    def test_list_units_with_counts(self, client, tenant_id, unit_id):
        client.post("/api/payments", json=payment_payload(tenant_id, unit_id))

        data = client.get("/api/units").json()

        assert data["total"] == 1
        unit = data["units"][0]
        assert unit["active_tenant_count"] == 1
        assert unit["tenant_count"] == 1
        assert unit["payment_count"] == 1
        assert unit["property"]["name"] == "Sunset Apartments"

    def test_get_unit_detail(self, client, tenant_id, unit_id):
        unit = client.get(f"/api/units/{unit_id}").json()

        assert unit["id"] == unit_id
        assert [t["id"] for t in unit["tenants"]] == [tenant_id]
        assert unit["payments"] == []

    def test_get_nonexistent_unit(self, client):
        assert client.get("/api/units/99999").status_code == 404


class TestUnitUpdateDelete:
    def test_update_unit(self, client, unit_id):
        response = client.patch(f"/api/units/{unit_id}", json={"rent_amount": 1300, "name": "Apt 1"})

        assert response.status_code == 200
        assert response.json()["rent_amount"] == 1300
        assert response.json()["name"] == "Apt 1"

    def test_delete_vacant_unit(self, client, unit_id):
        assert client.delete(f"/api/units/{unit_id}").status_code == 204
        assert client.get(f"/api/units/{unit_id}").status_code == 404

    def test_delete_unit_with_tenant_fails(self, client, tenant_id, unit_id):
        """Referenced units can't be deleted; reported as a server error"""
        response = client.delete(f"/api/units/{unit_id}")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
        assert client.get(f"/api/units/{unit_id}").status_code == 200

    def test_delete_nonexistent_unit(self, client):
        assert client.delete("/api/units/99999").status_code == 404
