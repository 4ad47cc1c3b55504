"""
Serving-based ingredient scaling.

Stored ingredient quantities always correspond to the recipe's base servings. When the
user picks another serving count, quantities are recomputed proportionally at read time:

    ratio  = target_servings / max(base_servings, 1)
    scaled = max(round_half_up(quantity * ratio * 10) / 10, 0)

i.e. rounded to one decimal place (halves rounded up, not to even) and floored at zero.

Example:
    >>> recipe.servings, recipe.ingredients[0].quantity
    (6, 250.0)
    >>> [i.quantity for i in scale_ingredients(recipe, 4)][:1]
    [166.7]
"""

import math
from typing import List, Optional

from catalog.config import ClientConfig
from catalog.models import Ingredient, Recipe

MIN_SERVINGS = 1
MAX_SERVINGS = 20


def _round_one_decimal(value: float) -> float:
    # floor(x + 0.5) rounds halves up; round() would round them to even
    return math.floor(value * 10 + 0.5) / 10


def scale_quantity(quantity: float, ratio: float) -> float:
    """
    Scale a single quantity by ratio, rounded to one decimal and never negative.

    Args:
        quantity: Stored quantity (for the base servings)
        ratio: target_servings / base_servings

    Returns:
        Scaled quantity, >= 0
    """
    scaled = _round_one_decimal(quantity * ratio)
    # Also normalizes -0.0 to 0.0
    return scaled if scaled > 0 else 0.0


def scale_ingredients(recipe: Recipe, target_servings: int) -> List[Ingredient]:
    """
    Compute the ingredient list of a recipe for another serving count.

    The recipe is not modified. Order, identifiers, names and units are preserved;
    only quantities change.

    Args:
        recipe: Recipe whose servings and ingredients are used
        target_servings: Serving count to scale to (UI-bounded to [1, 20])

    Returns:
        New list of Ingredient with scaled quantities
    """
    # A base of 0 (or anything below 1) behaves as 1
    ratio = target_servings / max(recipe.servings or 1, 1)
    return [
        ingredient.model_copy(update={"quantity": scale_quantity(ingredient.quantity, ratio)})
        for ingredient in recipe.ingredients
    ]


def format_quantity(quantity: float, decimal_separator: Optional[str] = None) -> str:
    """
    Format a quantity for display.

    Integers render without a decimal point, anything else with exactly one decimal
    digit using the locale decimal separator.

    Args:
        quantity: Quantity to format
        decimal_separator: Separator to use (default: CATALOG_DECIMAL_SEPARATOR, ",")

    Returns:
        Display string, e.g. "125" or "166,7"

    Examples:
        >>> format_quantity(125.0)
        '125'
        >>> format_quantity(166.7, decimal_separator=".")
        '166.7'
    """
    if float(quantity).is_integer():
        return str(int(quantity))
    separator = decimal_separator if decimal_separator is not None else ClientConfig.get_decimal_separator()
    return f"{quantity:.1f}".replace(".", separator)


def clamp_servings(servings: int) -> int:
    """Clamp a serving count to [MIN_SERVINGS, MAX_SERVINGS]."""
    return max(MIN_SERVINGS, min(MAX_SERVINGS, servings))
