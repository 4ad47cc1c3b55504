"""
Local gateway operating on an in-memory working set.

This is the offline fallback used by the session controller when the backend is
unreachable. It mirrors the backend behavior (identifier generation, timestamps,
trimming, newest-first insertion) without any I/O.

The local gateway never raises for unknown identifiers: those calls are no-ops that
return None (or the closest existing record) and log a warning, so the offline path
cannot crash the client.

# NOTE: Changes made here live only as long as the process. Nothing is written back
    to the backend when it becomes reachable again.
"""

import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from catalog.models import (
    CreateRecipeInput,
    CreateUserInput,
    Ingredient,
    Recipe,
    User,
    utc_now,
)

from .base import BaseGateway

logger = logging.getLogger(__name__)

# Process-wide, so two gateways over different working sets never hand out the same id
_ID_COUNTER = itertools.count(1)


@dataclass
class WorkingSet:
    """Users and recipes currently held in memory, newest recipe first."""
    users: List[User] = field(default_factory=list)
    recipes: List[Recipe] = field(default_factory=list)

    def find_user(self, user_id: str) -> Optional[User]:
        return next((user for user in self.users if user.id == user_id), None)

    def find_recipe(self, recipe_id: str) -> Optional[Recipe]:
        return next((recipe for recipe in self.recipes if recipe.id == recipe_id), None)

    def replace_recipe(self, recipe: Recipe) -> None:
        """Replace the recipe with the same id in place, keeping its position."""
        for index, existing in enumerate(self.recipes):
            if existing.id == recipe.id:
                self.recipes[index] = recipe
                return


def generate_id(prefix: str, existing_ids: set) -> str:
    """
    Generate an identifier unique among existing_ids.

    Built from a nanosecond timestamp plus a process-wide counter; drawn again in the
    unlikely case it still collides with an existing record.

    Args:
        prefix: Identifier prefix (e.g. "recipe", "user")
        existing_ids: Identifiers already in use

    Returns:
        New identifier like "recipe-1718035200123456789-7"
    """
    while True:
        candidate = f"{prefix}-{time.time_ns()}-{next(_ID_COUNTER)}"
        if candidate not in existing_ids:
            return candidate


class LocalGateway(BaseGateway):
    """
    Gateway over a caller-supplied WorkingSet.

    All coroutines complete without suspending; they are async only to share the
    BaseGateway interface with RemoteGateway.
    """
    name = "local"

    def __init__(self, working_set: WorkingSet) -> None:
        self.working_set = working_set

    async def list_users(self) -> List[User]:
        return list(self.working_set.users)

    async def get_user(self, user_id: str) -> Optional[User]:
        user = self.working_set.find_user(user_id)
        if user is None:
            logger.warning("Local gateway: unknown user id %r", user_id)
        return user

    async def create_user(self, data: CreateUserInput) -> User:
        """
        Create a user in the working set.

        If a user with the same e-mail (case-insensitive) exists, it is returned as is.
        """
        email = data.email.strip().lower()
        existing = next((user for user in self.working_set.users if user.email.lower() == email), None)
        if existing is not None:
            logger.warning("Local gateway: user with e-mail %r already exists, keeping it", email)
            return existing

        user = User(
            id=generate_id("user", {user.id for user in self.working_set.users}),
            email=email,
            full_name=data.full_name.strip(),
            plan=data.plan,
            created_at=utc_now(),
        )
        self.working_set.users.append(user)
        logger.debug("Local gateway: created user %s", user.id)
        return user

    def add_user(self, user: User) -> User:
        """
        Put an existing user record (e.g. the signed-in profile) into the working set.

        Returns:
            The record now in the working set (the existing one if the id is known)
        """
        existing = self.working_set.find_user(user.id)
        if existing is not None:
            return existing
        self.working_set.users.append(user)
        logger.info("Local gateway: materialized user %s", user.id)
        return user

    async def list_recipes(self) -> List[Recipe]:
        return sorted(self.working_set.recipes, key=lambda recipe: recipe.updated_at, reverse=True)

    async def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        recipe = self.working_set.find_recipe(recipe_id)
        if recipe is None:
            logger.warning("Local gateway: unknown recipe id %r", recipe_id)
        return recipe

    async def create_recipe(self, data: CreateRecipeInput) -> Optional[Recipe]:
        """
        Create a recipe and prepend it to the working set.

        Returns:
            The new recipe, or None if the owner is not in the working set
        """
        if self.working_set.find_user(data.owner_id) is None:
            logger.warning("Local gateway: cannot create recipe, unknown owner %r", data.owner_id)
            return None

        recipe_id = generate_id("recipe", {recipe.id for recipe in self.working_set.recipes})
        now = utc_now()
        tags = [tag.strip() for tag in data.tags if tag.strip()]
        recipe = Recipe(
            id=recipe_id,
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
                    id=f"{recipe_id}-ingredient-{index}",
                    name=ingredient.name.strip(),
                    quantity=ingredient.quantity,
                    unit=ingredient.unit.strip(),
                )
                for index, ingredient in enumerate(data.ingredients)
            ],
            steps=[step.strip() for step in data.steps if step.strip()],
            created_at=now,
            updated_at=now,
        )
        self.working_set.recipes.insert(0, recipe)
        logger.debug("Local gateway: created recipe %s", recipe.id)
        return recipe

    async def set_favorite(self, recipe_id: str, favorite: bool) -> Optional[Recipe]:
        recipe = self.working_set.find_recipe(recipe_id)
        if recipe is None:
            logger.warning("Local gateway: cannot set favorite, unknown recipe id %r", recipe_id)
            return None
        updated = recipe.model_copy(update={"is_favorite": favorite, "updated_at": utc_now()})
        self.working_set.replace_recipe(updated)
        return updated
