"""
Remote gateway talking to the catalog backend over HTTP.

Every capability maps to exactly one request against the backend REST API:

    list_users    GET   /api/users                -> {"users": [...]}
    get_user      GET   /api/users/{id}           -> User
    create_user   POST  /api/users                -> 201 User
    list_recipes  GET   /api/recipes              -> {"recipes": [...]}
    get_recipe    GET   /api/recipes/{id}         -> Recipe
    create_recipe POST  /api/recipes              -> 201 Recipe
    set_favorite  PATCH /api/recipes/{id}/favorite -> Recipe
    health        GET   /api/health               -> {"status": "ok", "timestamp": ...}

Any transport error, non-2xx response or payload that does not match the models is
raised as GatewayFailure. No retries: the session controller falls back to the local
gateway instead.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from catalog.config import ClientConfig
from catalog.models import CreateRecipeInput, CreateUserInput, Recipe, User

from .base import BaseGateway, GatewayFailure

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> Optional[str]:
    """Extract {"message": ...} from an error response body, if present."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None


class RemoteGateway(BaseGateway):
    """
    Gateway backed by the REST API.

    Uses an httpx.AsyncClient. The client is created from configuration unless one is
    injected (tests pass a client over httpx.MockTransport or httpx.ASGITransport);
    an injected client is not closed by aclose().
    """
    name = "remote"

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """
        Args:
            base_url: Backend base URL (default: CATALOG_BACKEND_URL)
            client: Pre-configured AsyncClient to use instead of creating one
            timeout: Request timeout in seconds (default: CATALOG_REQUEST_TIMEOUT,
                     or the httpx default when unset)
        """
        if client is not None:
            self._client = client
            self._owns_client = False
        else:
            client_kwargs: Dict[str, Any] = {
                "base_url": base_url or ClientConfig.get_backend_url(),
            }
            timeout = timeout if timeout is not None else ClientConfig.get_request_timeout()
            if timeout is not None:
                client_kwargs["timeout"] = timeout
            self._client = httpx.AsyncClient(**client_kwargs)
            self._owns_client = True

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "RemoteGateway":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send one request and return the decoded JSON body.

        Raises:
            GatewayFailure: On transport errors, non-2xx responses or invalid JSON
        """
        logger.debug("%s: %s %s", operation, method, path)
        try:
            response = await self._client.request(method, path, json=json)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            message = _error_message(e.response)
            logger.warning("%s: backend returned %d (%s)", operation, status_code, message or "no message")
            raise GatewayFailure(operation, e, status_code=status_code, message=message) from e
        except httpx.HTTPError as e:
            # ConnectError, timeouts and other transport-level failures
            logger.warning("%s: backend unreachable: %s", operation, e)
            raise GatewayFailure(operation, e) from e
        except ValueError as e:
            logger.warning("%s: backend returned invalid JSON: %s", operation, e)
            raise GatewayFailure(operation, e) from e

    @staticmethod
    def _decode(operation: str, decoder, payload: Any) -> Any:
        """Run decoder over a payload, turning shape or validation errors into GatewayFailure."""
        try:
            return decoder(payload)
        except (ValidationError, KeyError, TypeError) as e:
            logger.warning("%s: unexpected payload shape: %s", operation, e)
            raise GatewayFailure(operation, e) from e

    async def list_users(self) -> List[User]:
        payload = await self._request("list_users", "GET", "/api/users")
        return self._decode(
            "list_users",
            lambda body: [User.model_validate(item) for item in body["users"]],
            payload,
        )

    async def get_user(self, user_id: str) -> User:
        payload = await self._request("get_user", "GET", f"/api/users/{quote(user_id, safe='')}")
        return self._decode("get_user", User.model_validate, payload)

    async def create_user(self, data: CreateUserInput) -> User:
        payload = await self._request(
            "create_user",
            "POST",
            "/api/users",
            json=data.model_dump(mode="json", by_alias=True),
        )
        return self._decode("create_user", User.model_validate, payload)

    async def list_recipes(self) -> List[Recipe]:
        payload = await self._request("list_recipes", "GET", "/api/recipes")
        return self._decode(
            "list_recipes",
            lambda body: [Recipe.model_validate(item) for item in body["recipes"]],
            payload,
        )

    async def get_recipe(self, recipe_id: str) -> Recipe:
        payload = await self._request("get_recipe", "GET", f"/api/recipes/{quote(recipe_id, safe='')}")
        return self._decode("get_recipe", Recipe.model_validate, payload)

    async def create_recipe(self, data: CreateRecipeInput) -> Recipe:
        payload = await self._request(
            "create_recipe",
            "POST",
            "/api/recipes",
            json=data.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return self._decode("create_recipe", Recipe.model_validate, payload)

    async def set_favorite(self, recipe_id: str, favorite: bool) -> Recipe:
        payload = await self._request(
            "set_favorite",
            "PATCH",
            f"/api/recipes/{quote(recipe_id, safe='')}/favorite",
            json={"favorite": favorite},
        )
        return self._decode("set_favorite", Recipe.model_validate, payload)

    async def health(self) -> Dict[str, Any]:
        """
        Call the backend liveness endpoint.

        Returns:
            The health payload, e.g. {"status": "ok", "timestamp": "..."}

        Raises:
            GatewayFailure: If the backend is unreachable or does not report status "ok"
        """
        payload = await self._request("health", "GET", "/api/health")
        if not isinstance(payload, dict) or payload.get("status") != "ok":
            raise GatewayFailure("health", ValueError(f"unexpected health payload: {payload!r}"))
        return payload
