"""
Base gateway abstract class for catalog data access.

This module defines the interface shared by the two data gateways:
- RemoteGateway: HTTP calls against the backend REST API
- LocalGateway: in-memory operations on the session's working set

Both expose the same coroutine capability set so the session controller can await
either one the same way. The controller picks which gateway to call; a single
operation never mixes the two.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from catalog.models import CreateRecipeInput, CreateUserInput, Recipe, User


class GatewayFailure(Exception):
    """
    Raised by the remote gateway when a backend call does not succeed.

    Covers network/transport errors, non-2xx responses and malformed payloads.
    The session controller reacts by switching to offline mode; it is never retried.

    Attributes:
        operation: Gateway capability that failed (e.g. "set_favorite")
        cause: Underlying exception
        status_code: HTTP status code when the backend answered, else None
        message: Error message from the backend body ({"message": ...}) if any
    """

    def __init__(
        self,
        operation: str,
        cause: BaseException,
        status_code: Optional[int] = None,
        message: Optional[str] = None,
    ) -> None:
        self.operation = operation
        self.cause = cause
        self.status_code = status_code
        self.message = message
        detail = message or str(cause) or type(cause).__name__
        if status_code is not None:
            detail = f"HTTP {status_code}: {detail}"
        super().__init__(f"{operation} failed: {detail}")


class BaseGateway(ABC):
    """
    Abstract base class for catalog data gateways.

    Attributes:
        name: Short identifier used in logs ("remote" or "local")
    """
    name: str

    @abstractmethod
    async def list_users(self) -> List[User]:
        """Return all users."""
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[User]:
        """Return the user with the given id (None when the local gateway does not know it)."""
        pass

    @abstractmethod
    async def create_user(self, data: CreateUserInput) -> Optional[User]:
        """Create a user and return it with its identifier and creation timestamp."""
        pass

    @abstractmethod
    async def list_recipes(self) -> List[Recipe]:
        """Return all recipes, most recently updated first."""
        pass

    @abstractmethod
    async def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        """Return the recipe with the given id (None when the local gateway does not know it)."""
        pass

    @abstractmethod
    async def create_recipe(self, data: CreateRecipeInput) -> Optional[Recipe]:
        """
        Create a recipe owned by data.owner_id.

        Returns:
            The created recipe with its canonical identifier and timestamps
        """
        pass

    @abstractmethod
    async def set_favorite(self, recipe_id: str, favorite: bool) -> Optional[Recipe]:
        """
        Set the favorite flag of a recipe.

        Returns:
            The updated recipe (its updated_at refreshed)
        """
        pass
