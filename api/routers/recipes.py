"""
Recipes router.

- GET /api/recipes - List recipes, most recently updated first
- GET /api/recipes/{recipe_id} - Get one recipe
- POST /api/recipes - Create a recipe for an existing user
- PATCH /api/recipes/{recipe_id}/favorite - Set the favorite flag
"""

from fastapi import APIRouter, status

from api.schemas import CreateRecipeRequest, ErrorResponse, FavoriteUpdate, RecipeListResponse
from catalog import store
from catalog.models import Recipe
from catalog.store import StoreError

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get("", response_model=RecipeListResponse, summary="List recipes")
def list_recipes() -> RecipeListResponse:
    return RecipeListResponse(recipes=store.list_recipes())


@router.get(
    "/{recipe_id}",
    response_model=Recipe,
    responses={404: {"model": ErrorResponse}},
    summary="Get a recipe",
)
def get_recipe(recipe_id: str) -> Recipe:
    recipe = store.find_recipe_by_id(recipe_id)
    if recipe is None:
        raise StoreError("Recipe not found.", status.HTTP_404_NOT_FOUND)
    return recipe


@router.post(
    "",
    response_model=Recipe,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
    summary="Create a recipe",
)
def create_recipe(payload: CreateRecipeRequest) -> Recipe:
    """
    Create a recipe owned by payload.ownerId.

    Returns 404 if the owner does not exist.
    """
    return store.create_recipe(payload)


@router.patch(
    "/{recipe_id}/favorite",
    response_model=Recipe,
    responses={404: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
    summary="Set the favorite flag of a recipe",
)
def update_favorite(recipe_id: str, payload: FavoriteUpdate) -> Recipe:
    return store.update_recipe_favorite(recipe_id, payload.favorite)
