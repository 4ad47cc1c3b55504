"""
Recipe search and catalog statistics.

Read-only helpers over a list of recipes, used by the session controller to feed the
home screen: the search box and the counters (recipes, favorites, shares).
"""

from dataclasses import dataclass
from typing import List

from catalog.models import Recipe


@dataclass(frozen=True)
class CatalogStats:
    """Counters shown on the home screen."""
    total_recipes: int
    total_favorites: int
    total_shared: int


def recipe_matches(recipe: Recipe, term: str) -> bool:
    """
    Check whether a recipe matches a normalized (trimmed, lowercase) search term.

    A recipe matches when the term is contained in its title, in any tag or in any
    ingredient name.
    """
    if term in recipe.title.lower():
        return True
    if any(term in tag.lower() for tag in recipe.tags):
        return True
    return any(term in ingredient.name.lower() for ingredient in recipe.ingredients)


def filter_recipes(recipes: List[Recipe], term: str) -> List[Recipe]:
    """
    Filter recipes by a free-text search term, case-insensitively.

    Args:
        recipes: Recipes to filter, order is preserved
        term: Search term; blank terms return every recipe

    Returns:
        Matching recipes

    Examples:
        >>> [r.id for r in filter_recipes(demo_recipes(), "parmesan")]
        ['salade-cesar']
    """
    normalized = (term or "").strip().lower()
    if not normalized:
        return list(recipes)
    return [recipe for recipe in recipes if recipe_matches(recipe, normalized)]


def compute_stats(recipes: List[Recipe]) -> CatalogStats:
    """Count recipes, favorites and total shares."""
    return CatalogStats(
        total_recipes=len(recipes),
        total_favorites=sum(1 for recipe in recipes if recipe.is_favorite),
        total_shared=sum(recipe.shared_count for recipe in recipes),
    )
