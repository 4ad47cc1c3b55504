"""
End-to-end tests for the catalog REST API.

This test module verifies that:
1. Every endpoint answers with the camelCase JSON shape the client decodes
2. Creation endpoints answer 201 and validation failures answer 400 with details
3. Missing records answer 404 and duplicate e-mails 409, always with a message
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app
from catalog import store
from catalog.demo_data import DEMO_USER_ID, demo_recipes, demo_users


@pytest.fixture
def client():
    """Create a test client over a freshly seeded store."""
    store.seed_data(demo_users(), demo_recipes())
    return TestClient(app)


def recipe_payload(**overrides):
    payload = {
        "ownerId": DEMO_USER_ID,
        "title": "Crêpes",
        "servings": 4,
        "tags": ["Dessert"],
        "steps": ["Mélanger la farine, les œufs et le lait.", "Cuire à la poêle."],
        "ingredients": [
            {"name": "Farine", "quantity": 250, "unit": "g"},
            {"name": "Œufs", "quantity": 3, "unit": "unité(s)"},
        ],
    }
    payload.update(overrides)
    return payload


class TestHealth:
    """Tests for GET /api/health."""

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "timestamp" in data


class TestUsersEndpoints:
    """Tests for the users endpoints."""

    def test_list_users(self, client):
        response = client.get("/api/users")
        assert response.status_code == 200
        users = response.json()["users"]
        assert len(users) == 1
        assert users[0]["id"] == DEMO_USER_ID
        assert users[0]["fullName"] == "Marie Dupont"
        assert users[0]["plan"] == "premium"

    def test_get_user(self, client):
        response = client.get(f"/api/users/{DEMO_USER_ID}")
        assert response.status_code == 200
        assert response.json()["email"] == "marie@example.com"

    def test_get_unknown_user(self, client):
        response = client.get("/api/users/missing")
        assert response.status_code == 404
        assert "message" in response.json()

    def test_create_user(self, client):
        response = client.post(
            "/api/users",
            json={"email": "Bob@Example.com", "fullName": "  Bob Martin "},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "bob@example.com"
        assert data["fullName"] == "Bob Martin"
        assert data["plan"] == "free"
        assert "createdAt" in data

    def test_create_user_duplicate_email(self, client):
        response = client.post(
            "/api/users",
            json={"email": "MARIE@example.com", "fullName": "Marie Bis"},
        )
        assert response.status_code == 409
        assert "message" in response.json()

    def test_create_user_invalid(self, client):
        response = client.post("/api/users", json={"email": "nope", "fullName": "B"})
        assert response.status_code == 400
        data = response.json()
        assert data["message"]
        assert isinstance(data["details"], list) and data["details"]


class TestRecipesEndpoints:
    """Tests for the recipes endpoints."""

    def test_list_recipes(self, client):
        response = client.get("/api/recipes")
        assert response.status_code == 200
        recipes = response.json()["recipes"]
        assert [r["id"] for r in recipes] == ["salade-cesar", "lasagnes", "tarte-pommes"]
        first = recipes[0]
        for key in ("ownerId", "isFavorite", "sharedCount", "createdAt", "updatedAt", "ingredients", "steps"):
            assert key in first

    def test_get_recipe(self, client):
        response = client.get("/api/recipes/lasagnes")
        assert response.status_code == 200
        data = response.json()
        assert data["servings"] == 6
        assert data["ingredients"][0] == {
            "id": "lasagnes-pasta",
            "name": "Pâtes à lasagnes",
            "quantity": 250,
            "unit": "g",
        }

    def test_get_unknown_recipe(self, client):
        response = client.get("/api/recipes/missing")
        assert response.status_code == 404
        assert response.json()["message"]

    def test_create_recipe(self, client):
        response = client.post("/api/recipes", json=recipe_payload())
        assert response.status_code == 201
        data = response.json()
        assert data["ownerId"] == DEMO_USER_ID
        assert data["isFavorite"] is False
        assert data["sharedCount"] == 0
        assert data["category"] == "Dessert"
        assert data["createdAt"] == data["updatedAt"]

        listed = client.get("/api/recipes").json()["recipes"]
        assert listed[0]["id"] == data["id"]

    def test_create_recipe_unknown_owner(self, client):
        response = client.post("/api/recipes", json=recipe_payload(ownerId="nobody"))
        assert response.status_code == 404

    @pytest.mark.parametrize(
        "overrides",
        [
            {"title": "C"},
            {"servings": 0},
            {"steps": []},
            {"ingredients": []},
            {"ingredients": [{"name": "Sel", "quantity": -1, "unit": "g"}]},
        ],
        ids=["short-title", "zero-servings", "no-steps", "no-ingredients", "negative-quantity"],
    )
    def test_create_recipe_invalid(self, client, overrides):
        response = client.post("/api/recipes", json=recipe_payload(**overrides))
        assert response.status_code == 400
        assert response.json()["details"]
        assert len(client.get("/api/recipes").json()["recipes"]) == 3

    def test_update_favorite(self, client):
        response = client.patch("/api/recipes/tarte-pommes/favorite", json={"favorite": True})
        assert response.status_code == 200
        data = response.json()
        assert data["isFavorite"] is True
        assert data["updatedAt"] > "2024-02-22T18:45:00"

    def test_update_favorite_requires_boolean(self, client):
        response = client.patch("/api/recipes/tarte-pommes/favorite", json={"favorite": "yes"})
        assert response.status_code == 400

    def test_update_favorite_unknown_recipe(self, client):
        response = client.patch("/api/recipes/missing/favorite", json={"favorite": True})
        assert response.status_code == 404
