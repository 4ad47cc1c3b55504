"""
In-memory catalog store backing the REST service.

This module keeps users and recipes in process-local lists. It is suitable for
development and demos; data is lost on restart.

The store:
- Returns deep copies, so callers never hold references to stored records
- Treats e-mail addresses as unique, case-insensitively
- Lists recipes most recently updated first and inserts new recipes at the front
- Raises StoreError with an HTTP status for missing or conflicting records
"""

import logging
import uuid
from typing import List, Optional

from catalog.models import CreateRecipeInput, CreateUserInput, Ingredient, Recipe, User, utc_now

logger = logging.getLogger(__name__)

# In-memory store
_USERS: List[User] = []
_RECIPES: List[Recipe] = []


class StoreError(Exception):
    """
    Error raised by the store for requests it cannot satisfy.

    Attributes:
        message: Human-readable message returned to API clients
        status_code: HTTP status to answer with (404 not found, 409 conflict)
    """

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def seed_data(users: List[User], recipes: List[Recipe]) -> None:
    """Replace the store contents with copies of the given users and recipes."""
    _USERS[:] = [user.model_copy(deep=True) for user in users]
    _RECIPES[:] = [recipe.model_copy(deep=True) for recipe in recipes]
    logger.info("Catalog store seeded with %d users and %d recipes", len(_USERS), len(_RECIPES))


def _get_user_record(user_id: str) -> Optional[User]:
    return next((user for user in _USERS if user.id == user_id), None)


def _get_recipe_index(recipe_id: str) -> Optional[int]:
    return next((index for index, recipe in enumerate(_RECIPES) if recipe.id == recipe_id), None)


def list_users() -> List[User]:
    return [user.model_copy(deep=True) for user in _USERS]


def find_user_by_id(user_id: str) -> Optional[User]:
    user = _get_user_record(user_id)
    return user.model_copy(deep=True) if user else None


def create_user(data: CreateUserInput) -> User:
    """
    Create a user.

    Raises:
        StoreError 409: If a user with the same e-mail (case-insensitive) exists
    """
    email = data.email.strip().lower()
    if any(user.email.lower() == email for user in _USERS):
        raise StoreError("A user with this e-mail already exists.", 409)

    user = User(
        id=str(uuid.uuid4()),
        email=email,
        full_name=data.full_name.strip(),
        plan=data.plan,
        created_at=utc_now(),
    )
    _USERS.append(user)
    return user.model_copy(deep=True)


def list_recipes() -> List[Recipe]:
    """Return all recipes, most recently updated first."""
    ordered = sorted(_RECIPES, key=lambda recipe: recipe.updated_at, reverse=True)
    return [recipe.model_copy(deep=True) for recipe in ordered]


def find_recipe_by_id(recipe_id: str) -> Optional[Recipe]:
    index = _get_recipe_index(recipe_id)
    return _RECIPES[index].model_copy(deep=True) if index is not None else None


def create_recipe(data: CreateRecipeInput) -> Recipe:
    """
    Create a recipe for an existing user.

    Text fields are trimmed, blank tags and steps dropped, and every ingredient gets
    its own identifier. The category is the first tag.

    Raises:
        StoreError 404: If the owner does not exist
    """
    if _get_user_record(data.owner_id) is None:
        raise StoreError("The specified user was not found.", 404)

    now = utc_now()
    tags = [tag.strip() for tag in data.tags if tag.strip()]
    recipe = Recipe(
        id=str(uuid.uuid4()),
        owner_id=data.owner_id,
        title=data.title.strip(),
        description=(data.description or "").strip() or None,
        servings=data.servings,
        time=(data.time or "").strip() or None,
        difficulty=(data.difficulty or "").strip() or None,
        tags=tags,
        category=tags[0] if tags else None,
        is_favorite=False,
        shared_count=0,
        ingredients=[
            Ingredient(
                id=str(uuid.uuid4()),
                name=ingredient.name.strip(),
                quantity=ingredient.quantity,
                unit=ingredient.unit.strip(),
            )
            for ingredient in data.ingredients
        ],
        steps=[step.strip() for step in data.steps if step.strip()],
        created_at=now,
        updated_at=now,
    )
    _RECIPES.insert(0, recipe)
    logger.info("Created recipe %s for user %s", recipe.id, recipe.owner_id)
    return recipe.model_copy(deep=True)


def update_recipe_favorite(recipe_id: str, favorite: bool) -> Recipe:
    """
    Set the favorite flag of a recipe and refresh its updated_at.

    Raises:
        StoreError 404: If the recipe does not exist
    """
    index = _get_recipe_index(recipe_id)
    if index is None:
        raise StoreError("Recipe not found.", 404)

    updated = _RECIPES[index].model_copy(update={"is_favorite": favorite, "updated_at": utc_now()})
    _RECIPES[index] = updated
    return updated.model_copy(deep=True)
