"""
User and recipe models for the catalog.

This module defines the canonical schemas shared by the client (gateways, session
controller) and the backend (store, REST service).

# NOTE: Python attributes are snake_case; the JSON wire format uses camelCase aliases
    (ownerId, isFavorite, sharedCount, createdAt, updatedAt, fullName). Dump with
    by_alias=True when talking to the backend or returning API responses.

Ingredient quantities are always stored relative to the recipe's base servings.
Scaling to another serving count is a read-time transformation (see catalog.scaling).
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def utc_now() -> datetime:
    """Current instant as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class SubscriptionPlan(str, Enum):
    """Subscription tier of a user."""
    FREE = "free"
    PREMIUM = "premium"


class User(BaseModel):
    """A catalog user. Created once on sign-up, read-only afterwards."""
    id: str = Field(..., description="Unique user identifier")
    email: str = Field(..., description="E-mail address, unique (case-insensitive)")
    full_name: str = Field(..., alias="fullName", description="Display name")
    plan: SubscriptionPlan = Field(default=SubscriptionPlan.FREE, description="Subscription tier")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp")

    model_config = ConfigDict(populate_by_name=True)


class Ingredient(BaseModel):
    """
    An ingredient line of a recipe.

    Quantity is not range-checked here: inputs are validated through IngredientDraft,
    and the scaler floors malformed negative values at zero.
    """
    id: str = Field(..., description="Identifier, unique within its recipe")
    name: str = Field(..., min_length=1, description="Ingredient name")
    quantity: float = Field(..., description="Quantity for the recipe's base servings")
    unit: str = Field(..., min_length=1, description="Free-form unit (g, ml, unité, ...)")


class Recipe(BaseModel):
    """A recipe owned by a user."""
    id: str = Field(..., description="Unique recipe identifier")
    owner_id: str = Field(..., alias="ownerId", description="Identifier of the owning user")
    title: str = Field(..., min_length=1, description="Recipe title")
    description: Optional[str] = Field(None, description="Short description")
    servings: int = Field(..., description="Base servings the ingredient quantities are calibrated for")
    time: Optional[str] = Field(None, description="Preparation time label (e.g. '1h30')")
    difficulty: Optional[str] = Field(None, description="Difficulty label")
    tags: List[str] = Field(default_factory=list, description="Ordered tags, first one is the primary category")
    category: Optional[str] = Field(None, description="Primary category (first tag)")
    is_favorite: bool = Field(default=False, alias="isFavorite", description="Favorite flag")
    shared_count: int = Field(default=0, ge=0, alias="sharedCount", description="Number of shares (informational)")
    ingredients: List[Ingredient] = Field(default_factory=list, description="Ordered ingredient lines")
    steps: List[str] = Field(default_factory=list, description="Ordered preparation steps")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp, never changes")
    updated_at: datetime = Field(..., alias="updatedAt", description="Last mutation timestamp")

    model_config = ConfigDict(populate_by_name=True)


class CreateUserInput(BaseModel):
    """Sign-up input (body of POST /api/users)."""
    email: EmailStr = Field(..., description="E-mail address")
    full_name: str = Field(..., min_length=2, alias="fullName", description="Display name")
    plan: SubscriptionPlan = Field(default=SubscriptionPlan.FREE, description="Subscription tier")

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class IngredientDraft(BaseModel):
    """An ingredient line as entered by the user, before it gets an identifier."""
    name: str = Field(..., min_length=1, description="Ingredient name")
    quantity: float = Field(..., ge=0, description="Quantity for the recipe's base servings")
    unit: str = Field(..., min_length=1, description="Free-form unit")

    model_config = ConfigDict(str_strip_whitespace=True)


class RecipeDraft(BaseModel):
    """
    A new recipe as entered by the user.

    Strings are trimmed. Blank tags and steps are dropped. A draft with a title under
    two characters, no step or no ingredient is rejected with a ValidationError before
    anything is sent or stored, with the same rules the backend applies.
    """
    title: str = Field(..., min_length=2, description="Recipe title (at least 2 characters)")
    description: Optional[str] = Field(None, description="Short description")
    servings: int = Field(..., ge=1, description="Base servings")
    time: Optional[str] = Field(None, description="Preparation time label")
    difficulty: Optional[str] = Field(None, description="Difficulty label")
    tags: List[str] = Field(default_factory=list, description="Ordered tags")
    steps: List[str] = Field(..., min_length=1, description="Ordered preparation steps")
    ingredients: List[IngredientDraft] = Field(..., min_length=1, description="Ordered ingredient lines")

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    @field_validator("description", "time", "difficulty")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None

    @field_validator("tags")
    @classmethod
    def _drop_blank_tags(cls, value: List[str]) -> List[str]:
        return [tag.strip() for tag in value if tag.strip()]

    @field_validator("steps")
    @classmethod
    def _drop_blank_steps(cls, value: List[str]) -> List[str]:
        steps = [step.strip() for step in value if step.strip()]
        if not steps:
            raise ValueError("At least one non-empty step is required")
        return steps


class CreateRecipeInput(RecipeDraft):
    """Recipe creation input (body of POST /api/recipes): a draft plus its owner."""
    owner_id: str = Field(..., min_length=1, alias="ownerId", description="Identifier of the owning user")

    @classmethod
    def from_draft(cls, draft: RecipeDraft, owner_id: str) -> "CreateRecipeInput":
        return cls(owner_id=owner_id, **draft.model_dump())
