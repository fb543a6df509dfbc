"""Tests for product attribute endpoints."""

from fastapi.testclient import TestClient


class TestProductAttributes:
    """Tests for reading and replacing product attributes."""

    def test_replace_and_get(self, client: TestClient, color: dict, seed) -> None:
        """PUT stores the selection and GET returns it grouped."""
        ids = seed(products=(("shirt", None),))

        response = client.put(
            f"/products/{ids['shirt']}/attributes",
            json={"color": ["red", "blue"]},
        )

        assert response.status_code == 200
        assert response.json() == {
            "product_id": ids["shirt"],
            "attributes": {"color": ["red", "blue"]},
            "dropped_attributes": [],
            "dropped_values": {},
        }
        stored = client.get(f"/products/{ids['shirt']}/attributes").json()
        assert stored == {"product_id": ids["shirt"], "attributes": {"color": ["red", "blue"]}}

    def test_dropped_names_reported(self, client: TestClient, color: dict, seed) -> None:
        """Unknown attributes and values are reported, not stored."""
        ids = seed(products=(("shirt", None),))

        response = client.put(
            f"/products/{ids['shirt']}/attributes",
            json={"color": ["red", "purple"], "flavor": ["vanilla"]},
        )

        data = response.json()
        assert data["attributes"] == {"color": ["red"]}
        assert data["dropped_attributes"] == ["flavor"]
        assert data["dropped_values"] == {"color": ["purple"]}

    def test_replace_overwrites(self, client: TestClient, color: dict, seed) -> None:
        """A second PUT replaces the first selection."""
        ids = seed(products=(("shirt", None),))
        path = f"/products/{ids['shirt']}/attributes"

        client.put(path, json={"color": ["red"]})
        client.put(path, json={"color": ["blue"]})

        assert client.get(path).json()["attributes"] == {"color": ["blue"]}

    def test_unknown_product(self, client: TestClient, color: dict) -> None:
        """Replacing attributes of a missing product returns 404."""
        response = client.put("/products/999/attributes", json={"color": ["red"]})

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    def test_get_unknown_product_empty(self, client: TestClient) -> None:
        """A product without assignments has an empty mapping."""
        response = client.get("/products/999/attributes")

        assert response.status_code == 200
        assert response.json() == {"product_id": 999, "attributes": {}}
