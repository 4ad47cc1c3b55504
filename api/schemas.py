"""
Pydantic schemas for FastAPI request and response models.

Request bodies reuse the catalog input models, so the client validates drafts with the
same rules the API enforces; the favorite flag is a strict boolean. Responses are the
catalog models themselves, serialized with their camelCase aliases.

The schemas include:
- CreateUserRequest: body of POST /api/users
- CreateRecipeRequest: body of POST /api/recipes
- FavoriteUpdate: body of PATCH /api/recipes/{id}/favorite
- UserListResponse / RecipeListResponse: list envelopes
- HealthResponse: liveness payload
- ErrorResponse: {message, details?} error body
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from catalog.models import CreateRecipeInput, CreateUserInput, Recipe, User


class CreateUserRequest(CreateUserInput):
    """Sign-up request."""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "email": "marie@example.com",
                "fullName": "Marie Dupont",
                "plan": "premium",
            }
        },
    )


class CreateRecipeRequest(CreateRecipeInput):
    """Recipe creation request."""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "ownerId": "user-marie",
                "title": "Crêpes",
                "servings": 4,
                "tags": ["Dessert"],
                "steps": ["Mélanger la farine, les œufs et le lait.", "Cuire à la poêle."],
                "ingredients": [
                    {"name": "Farine", "quantity": 250, "unit": "g"},
                    {"name": "Œufs", "quantity": 3, "unit": "unité(s)"},
                ],
            }
        },
    )


class FavoriteUpdate(BaseModel):
    """Favorite flag update."""
    favorite: StrictBool = Field(..., description="New favorite flag")


class UserListResponse(BaseModel):
    users: List[User]


class RecipeListResponse(BaseModel):
    recipes: List[Recipe]


class HealthResponse(BaseModel):
    status: str = Field(..., description="Always 'ok' when the service answers")
    timestamp: datetime = Field(..., description="Current server time")


class ErrorResponse(BaseModel):
    """Error body returned for every non-2xx response."""
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Any] = Field(None, description="Validation details (400 only)")
