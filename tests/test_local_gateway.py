"""
Tests for the in-memory local gateway.

These tests verify that:
- Created recipes and users get unique identifiers and fresh timestamps
- New recipes are prepended with favorite=False, sharedCount=0 and a category
- set_favorite flips the flag and refreshes updatedAt only
- Unknown identifiers are no-ops returning None instead of raising
"""

from datetime import datetime, timezone

import pytest

from catalog.demo_data import DEMO_USER_ID, demo_recipes, demo_users
from catalog.gateways import LocalGateway, WorkingSet, generate_id
from catalog.models import CreateRecipeInput, CreateUserInput


@pytest.fixture
def working_set():
    return WorkingSet(users=demo_users(), recipes=demo_recipes())


@pytest.fixture
def gateway(working_set):
    return LocalGateway(working_set)


def recipe_input(owner_id=DEMO_USER_ID, **overrides):
    data = {
        "owner_id": owner_id,
        "title": "Crêpes",
        "servings": 4,
        "tags": ["Dessert", "Facile"],
        "steps": ["Mélanger", "Cuire"],
        "ingredients": [
            {"name": "Farine", "quantity": 250, "unit": "g"},
            {"name": "Œufs", "quantity": 3, "unit": "unité(s)"},
        ],
    }
    data.update(overrides)
    return CreateRecipeInput(**data)


class TestGenerateId:
    """Test cases for identifier generation."""

    def test_ids_are_unique(self):
        ids = set()
        for _ in range(1000):
            ids.add(generate_id("recipe", ids))
        assert len(ids) == 1000

    def test_id_has_prefix(self):
        assert generate_id("user", set()).startswith("user-")


class TestLocalRecipes:
    """Recipe operations on the local gateway."""

    @pytest.mark.asyncio
    async def test_create_recipe_prepends_new_recipe(self, gateway, working_set):
        existing_ids = {recipe.id for recipe in working_set.recipes}

        recipe = await gateway.create_recipe(recipe_input())

        assert working_set.recipes[0] is recipe
        assert len(working_set.recipes) == 4
        assert recipe.id not in existing_ids
        assert recipe.created_at == recipe.updated_at
        assert recipe.is_favorite is False
        assert recipe.shared_count == 0
        assert recipe.category == "Dessert"
        assert recipe.owner_id == DEMO_USER_ID

    @pytest.mark.asyncio
    async def test_create_recipe_gives_ingredients_unique_ids(self, gateway):
        recipe = await gateway.create_recipe(recipe_input())
        ids = [ingredient.id for ingredient in recipe.ingredients]
        assert len(set(ids)) == len(ids) == 2
        assert [i.quantity for i in recipe.ingredients] == [250, 3]

    @pytest.mark.asyncio
    async def test_create_recipe_without_tags_has_no_category(self, gateway):
        recipe = await gateway.create_recipe(recipe_input(tags=[]))
        assert recipe.tags == []
        assert recipe.category is None

    @pytest.mark.asyncio
    async def test_two_recipes_created_back_to_back_have_distinct_ids(self, gateway):
        first = await gateway.create_recipe(recipe_input())
        second = await gateway.create_recipe(recipe_input())
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_create_recipe_with_unknown_owner_is_noop(self, gateway, working_set):
        result = await gateway.create_recipe(recipe_input(owner_id="nobody"))
        assert result is None
        assert len(working_set.recipes) == 3

    @pytest.mark.asyncio
    async def test_set_favorite_refreshes_updated_at(self, gateway, working_set):
        before = working_set.find_recipe("tarte-pommes")

        updated = await gateway.set_favorite("tarte-pommes", True)

        assert updated.is_favorite is True
        assert updated.updated_at > before.updated_at
        assert updated.created_at == before.created_at
        assert working_set.find_recipe("tarte-pommes").is_favorite is True
        # Position in the working set is kept
        assert working_set.recipes[1].id == "tarte-pommes"

    @pytest.mark.asyncio
    async def test_set_favorite_unknown_recipe_is_noop(self, gateway, working_set):
        snapshot = list(working_set.recipes)
        assert await gateway.set_favorite("missing", True) is None
        assert working_set.recipes == snapshot

    @pytest.mark.asyncio
    async def test_get_recipe(self, gateway):
        assert (await gateway.get_recipe("lasagnes")).title == "Lasagnes maison"
        assert await gateway.get_recipe("missing") is None

    @pytest.mark.asyncio
    async def test_list_recipes_most_recently_updated_first(self, gateway):
        recipes = await gateway.list_recipes()
        assert [r.id for r in recipes] == ["salade-cesar", "lasagnes", "tarte-pommes"]


class TestLocalUsers:
    """User operations on the local gateway."""

    @pytest.mark.asyncio
    async def test_create_user_normalizes_email(self, gateway, working_set):
        user = await gateway.create_user(CreateUserInput(email="Bob@Example.com", full_name="Bob Martin"))
        assert user.email == "bob@example.com"
        assert user.created_at <= datetime.now(timezone.utc)
        assert working_set.find_user(user.id) is user

    @pytest.mark.asyncio
    async def test_create_user_with_existing_email_returns_existing(self, gateway, working_set):
        user = await gateway.create_user(CreateUserInput(email="MARIE@example.com", full_name="Other Marie"))
        assert user.id == DEMO_USER_ID
        assert len(working_set.users) == 1

    @pytest.mark.asyncio
    async def test_get_unknown_user_returns_none(self, gateway):
        assert await gateway.get_user("missing") is None
        assert (await gateway.get_user(DEMO_USER_ID)).full_name == "Marie Dupont"

    def test_add_user_keeps_existing_record(self, gateway, working_set):
        existing = working_set.users[0]
        assert gateway.add_user(existing.model_copy(update={"full_name": "Changed"})) is existing
        assert len(working_set.users) == 1
