"""
Session controller for the recipe catalog client.

The controller owns the working set shown by the presentation layer (recipes, users,
active user, selected recipe, displayed serving count) and decides which gateway each
operation goes through:

- Startup loads users and recipes from the remote gateway concurrently. If either call
  fails, the session switches to offline mode on the built-in demo dataset.
- Favorite toggles are optimistic: the flag flips in the working set first and is
  reverted if the backend call fails.
- Recipe creation goes to the backend when online and is synthesized locally otherwise.
- Any gateway failure during a mutation switches the session to offline mode for the
  rest of its lifetime (no reconnection).

Connectivity state machine:

    start() ──ok──> ONLINE ──GatewayFailure on a mutation──> OFFLINE
       └──GatewayFailure──────────────────────────────────> OFFLINE

The controller is a plain object passed explicitly to presentation code; nothing here
is module-global, so it can be driven directly from tests.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from catalog.browse import CatalogStats, compute_stats, filter_recipes
from catalog.demo_data import demo_recipes, demo_user, demo_users
from catalog.gateways import BaseGateway, GatewayFailure, LocalGateway, RemoteGateway, WorkingSet
from catalog.models import CreateRecipeInput, Ingredient, Recipe, RecipeDraft, User
from catalog.scaling import MAX_SERVINGS, MIN_SERVINGS, clamp_servings, format_quantity, scale_ingredients

logger = logging.getLogger(__name__)

OFFLINE_STARTUP_MESSAGE = "Server unreachable: working offline with the demo recipes."
CONNECTION_LOST_MESSAGE = "Connection to the server lost: changes are now kept on this device only."


class ConnectivityState(str, Enum):
    """Whether the session talks to the backend."""
    ONLINE = "online"
    OFFLINE = "offline"


@dataclass(frozen=True)
class IngredientLine:
    """An ingredient ready for display: name, formatted quantity and unit."""
    id: str
    name: str
    quantity: str
    unit: str


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of the session handed to presentation code."""
    recipes: Tuple[Recipe, ...]
    users: Tuple[User, ...]
    active_user: Optional[User]
    selected_recipe: Optional[Recipe]
    servings: int
    state: Optional[ConnectivityState]
    loading: bool
    status_message: Optional[str]


class SessionController:
    """
    Owns the working set and the online/offline status of one client session.

    Attributes:
        remote: Gateway used while online
        local: Gateway over the session's own working set, used while offline
    """

    def __init__(self, remote: BaseGateway, profile: Optional[User] = None) -> None:
        """
        Args:
            remote: Gateway to the backend (usually a RemoteGateway)
            profile: Signed-in user; recipes created in this session are owned by it.
                     Defaults to the demo user.
        """
        self.remote = remote
        self._profile = profile or demo_user()
        self._working_set = WorkingSet()
        self.local = LocalGateway(self._working_set)
        self._state: Optional[ConnectivityState] = None
        self._loading = True
        self._status_message: Optional[str] = None
        self._selected_recipe_id: Optional[str] = None
        self._servings = MIN_SERVINGS
        # One lock per recipe id so overlapping toggles on the same recipe run in order
        self._recipe_locks: Dict[str, asyncio.Lock] = {}

    @property
    def state(self) -> Optional[ConnectivityState]:
        """Connectivity state, None until start() has resolved."""
        return self._state

    @property
    def is_online(self) -> bool:
        return self._state is ConnectivityState.ONLINE

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def status_message(self) -> Optional[str]:
        return self._status_message

    @property
    def recipes(self) -> List[Recipe]:
        return list(self._working_set.recipes)

    @property
    def users(self) -> List[User]:
        return list(self._working_set.users)

    @property
    def active_user(self) -> User:
        """The signed-in user, as known in the working set when present."""
        return self._working_set.find_user(self._profile.id) or self._profile

    @property
    def selected_recipe(self) -> Optional[Recipe]:
        if self._selected_recipe_id is None:
            return None
        return self._working_set.find_recipe(self._selected_recipe_id)

    @property
    def servings(self) -> int:
        """Serving count currently displayed for the selected recipe."""
        return self._servings

    def clear_status_message(self) -> None:
        self._status_message = None

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            recipes=tuple(self._working_set.recipes),
            users=tuple(self._working_set.users),
            active_user=self.active_user,
            selected_recipe=self.selected_recipe,
            servings=self._servings,
            state=self._state,
            loading=self._loading,
            status_message=self._status_message,
        )

    def _go_offline(self, message: str) -> None:
        if self._state is not ConnectivityState.OFFLINE:
            logger.warning("Switching session to offline mode")
        self._state = ConnectivityState.OFFLINE
        self._status_message = message

    async def start(self) -> ConnectivityState:
        """
        Load users and recipes and decide the connectivity state.

        Both reads are issued concurrently and must succeed for the session to be
        online. On any GatewayFailure the working set is seeded with the demo dataset
        instead. The first recipe is selected afterwards.

        Returns:
            The resulting connectivity state

        Raises:
            Exception: Anything raised by the gateway that is not a GatewayFailure
        """
        self._loading = True
        try:
            results = await asyncio.gather(
                self.remote.list_users(),
                self.remote.list_recipes(),
                return_exceptions=True,
            )
            errors = [result for result in results if isinstance(result, BaseException)]
            for error in errors:
                if not isinstance(error, GatewayFailure):
                    raise error

            if errors:
                logger.warning("Initial load failed (%s), using demo data", errors[0])
                self._working_set.users[:] = demo_users()
                self._working_set.recipes[:] = demo_recipes()
                self._go_offline(OFFLINE_STARTUP_MESSAGE)
            else:
                users, recipes = results
                self._working_set.users[:] = users
                self._working_set.recipes[:] = recipes
                self._state = ConnectivityState.ONLINE
                logger.info("Session online: %d users, %d recipes", len(users), len(recipes))

            if self._working_set.recipes:
                self._select(self._working_set.recipes[0])
        finally:
            self._loading = False
        return self._state

    def _select(self, recipe: Recipe) -> None:
        self._selected_recipe_id = recipe.id
        # Base servings as stored; only the +/- controls are bounded to MAX_SERVINGS
        self._servings = max(recipe.servings, MIN_SERVINGS)

    def select_recipe(self, recipe_id: str) -> Optional[Recipe]:
        """
        Select a recipe and reset the displayed servings to its base servings.

        Returns:
            The selected recipe, or None if the id is unknown (previous selection kept)
        """
        recipe = self._working_set.find_recipe(recipe_id)
        if recipe is None:
            logger.debug("Ignoring selection of unknown recipe %r", recipe_id)
            return None
        self._select(recipe)
        return recipe

    def set_servings(self, servings: int) -> int:
        """Set the displayed serving count, clamped to [1, 20]."""
        self._servings = clamp_servings(servings)
        return self._servings

    def increase_servings(self) -> int:
        """Add one serving; no-op at MAX_SERVINGS."""
        if self._servings < MAX_SERVINGS:
            self._servings += 1
        return self._servings

    def decrease_servings(self) -> int:
        """Remove one serving; no-op at MIN_SERVINGS."""
        if self._servings > MIN_SERVINGS:
            self._servings -= 1
        return self._servings

    def scaled_ingredients(self) -> List[Ingredient]:
        """Ingredients of the selected recipe for the displayed serving count."""
        recipe = self.selected_recipe
        if recipe is None:
            return []
        return scale_ingredients(recipe, self._servings)

    def formatted_ingredients(self, decimal_separator: Optional[str] = None) -> List[IngredientLine]:
        """Scaled ingredients of the selected recipe, with quantities formatted for display."""
        return [
            IngredientLine(
                id=ingredient.id,
                name=ingredient.name,
                quantity=format_quantity(ingredient.quantity, decimal_separator),
                unit=ingredient.unit,
            )
            for ingredient in self.scaled_ingredients()
        ]

    def search(self, term: str) -> List[Recipe]:
        return filter_recipes(self._working_set.recipes, term)

    def favorites(self) -> List[Recipe]:
        return [recipe for recipe in self._working_set.recipes if recipe.is_favorite]

    def stats(self) -> CatalogStats:
        return compute_stats(self._working_set.recipes)

    def _lock_for(self, recipe_id: str) -> asyncio.Lock:
        lock = self._recipe_locks.get(recipe_id)
        if lock is None:
            lock = self._recipe_locks[recipe_id] = asyncio.Lock()
        return lock

    def _set_favorite_flag(self, recipe: Recipe, favorite: bool) -> None:
        self._working_set.replace_recipe(recipe.model_copy(update={"is_favorite": favorite}))

    async def toggle_favorite(self, recipe_id: str) -> Optional[Recipe]:
        """
        Flip the favorite flag of a recipe.

        Online, the flag flips in the working set before the backend call and is
        reverted if the call fails; the session then goes offline. Offline, the flip
        goes through the local gateway and is the whole operation.

        Returns:
            The recipe as it ends up in the working set, or None if the id is unknown
        """
        # Recipes are never removed, so an id known here is still known under the lock
        if self._working_set.find_recipe(recipe_id) is None:
            logger.debug("Ignoring favorite toggle of unknown recipe %r", recipe_id)
            return None

        async with self._lock_for(recipe_id):
            recipe = self._working_set.find_recipe(recipe_id)
            previous = recipe.is_favorite
            favorite = not previous

            if not self.is_online:
                return await self.local.set_favorite(recipe_id, favorite)

            self._set_favorite_flag(recipe, favorite)
            try:
                await self.remote.set_favorite(recipe_id, favorite)
            except GatewayFailure as e:
                logger.warning("Favorite toggle of %s failed, rolling back: %s", recipe_id, e)
                current = self._working_set.find_recipe(recipe_id)
                if current is not None:
                    self._set_favorite_flag(current, previous)
                self._go_offline(CONNECTION_LOST_MESSAGE)

            return self._working_set.find_recipe(recipe_id)

    async def create_recipe(self, draft: RecipeDraft) -> Recipe:
        """
        Create a recipe owned by the active user, select it and show its base servings.

        Online, the backend creates it (canonical id and timestamps). If that fails the
        session goes offline and the recipe is created locally instead, after making
        sure the active user exists in the working set.

        Args:
            draft: Validated recipe draft

        Returns:
            The created recipe, first in the working set
        """
        data = CreateRecipeInput.from_draft(draft, owner_id=self._profile.id)

        if self.is_online:
            try:
                recipe = await self.remote.create_recipe(data)
            except GatewayFailure as e:
                logger.warning("Recipe creation on the server failed, creating it locally: %s", e)
                self._go_offline(CONNECTION_LOST_MESSAGE)
            else:
                self._working_set.recipes.insert(0, recipe)
                self._select(recipe)
                logger.info("Created recipe %s on the server", recipe.id)
                return recipe

        self.local.add_user(self._profile)
        recipe = await self.local.create_recipe(data)
        self._select(recipe)
        logger.info("Created recipe %s locally", recipe.id)
        return recipe

    async def aclose(self) -> None:
        """Release the remote gateway's HTTP client, if any."""
        close = getattr(self.remote, "aclose", None)
        if close is not None:
            await close()


def create_session(
    profile: Optional[User] = None,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> SessionController:
    """
    Build a session controller wired to the configured backend.

    Args:
        profile: Signed-in user (default: the demo user)
        base_url: Backend base URL (default: CATALOG_BACKEND_URL)
        timeout: Request timeout in seconds (default: CATALOG_REQUEST_TIMEOUT)

    Returns:
        A SessionController; call `await session.start()` before using it
    """
    return SessionController(RemoteGateway(base_url=base_url, timeout=timeout), profile=profile)
