"""
Built-in demo dataset.

One demo user and three demo recipes. Used to seed the backend store and as the
working set when the client falls back to offline mode.

# NOTE: Always go through demo_users() / demo_recipes(): they return fresh copies, so
    mutations in one session never leak into another.
"""

from datetime import datetime
from typing import List

from catalog.models import Ingredient, Recipe, SubscriptionPlan, User

DEMO_USER_ID = "user-marie"

_DEMO_USER = User(
    id=DEMO_USER_ID,
    email="marie@example.com",
    full_name="Marie Dupont",
    plan=SubscriptionPlan.PREMIUM,
    created_at=datetime.fromisoformat("2024-01-15T10:00:00+00:00"),
)

_DEMO_RECIPES = [
    Recipe(
        id="lasagnes",
        owner_id=DEMO_USER_ID,
        title="Lasagnes maison",
        description=(
            "Des lasagnes traditionnelles faites maison avec une sauce tomate mijotée "
            "et une béchamel onctueuse."
        ),
        servings=6,
        time="1h30",
        tags=["Plat principal", "Italien"],
        difficulty="Difficulté moyenne",
        category="Plat principal",
        is_favorite=True,
        shared_count=2,
        ingredients=[
            Ingredient(id="lasagnes-pasta", name="Pâtes à lasagnes", quantity=250, unit="g"),
            Ingredient(id="lasagnes-meat", name="Viande hachée", quantity=400, unit="g"),
            Ingredient(id="lasagnes-sauce", name="Sauce tomate", quantity=500, unit="ml"),
            Ingredient(id="lasagnes-bechamel", name="Béchamel", quantity=400, unit="ml"),
            Ingredient(id="lasagnes-cheese", name="Fromage râpé", quantity=200, unit="g"),
            Ingredient(id="lasagnes-onion", name="Oignon", quantity=1, unit="unité"),
        ],
        steps=[
            "Préchauffer le four à 180°C. Faire cuire les pâtes à lasagnes selon les indications du paquet.",
            "Dans une poêle, faire revenir l'oignon haché puis ajouter la viande hachée. Cuire 10 minutes.",
            "Ajouter la sauce tomate à la viande et laisser mijoter 15 minutes.",
            "Dans un plat à gratin, alterner couches de pâtes, viande et béchamel. Terminer par le fromage.",
            "Enfourner 25-30 minutes jusqu'à ce que le dessus soit doré. Laisser reposer 5 minutes avant de servir.",
        ],
        created_at=datetime.fromisoformat("2024-02-12T10:15:00+00:00"),
        updated_at=datetime.fromisoformat("2024-03-02T09:30:00+00:00"),
    ),
    Recipe(
        id="tarte-pommes",
        owner_id=DEMO_USER_ID,
        title="Tarte aux pommes",
        description="Une tarte aux pommes fondante parfumée à la cannelle, parfaite pour le goûter.",
        servings=8,
        time="45min",
        tags=["Dessert", "Facile"],
        difficulty="Facile",
        category="Dessert",
        is_favorite=False,
        shared_count=1,
        ingredients=[
            Ingredient(id="tarte-pate", name="Pâte brisée", quantity=1, unit="unité"),
            Ingredient(id="tarte-pommes", name="Pommes", quantity=5, unit="unité(s)"),
            Ingredient(id="tarte-sucre", name="Sucre", quantity=60, unit="g"),
            Ingredient(id="tarte-beurre", name="Beurre", quantity=30, unit="g"),
            Ingredient(id="tarte-cannelle", name="Cannelle", quantity=1, unit="c.à.c"),
        ],
        steps=[
            "Préchauffer le four à 180°C. Étaler la pâte dans un moule et la piquer avec une fourchette.",
            "Éplucher les pommes, les couper en lamelles et les disposer sur la pâte.",
            "Saupoudrer de sucre et de cannelle. Parsemer de petits morceaux de beurre.",
            "Cuire 35 minutes jusqu'à obtenir une belle coloration dorée.",
        ],
        created_at=datetime.fromisoformat("2024-01-08T15:20:00+00:00"),
        updated_at=datetime.fromisoformat("2024-02-22T18:45:00+00:00"),
    ),
    Recipe(
        id="salade-cesar",
        owner_id=DEMO_USER_ID,
        title="Salade César",
        description="Une salade César rapide avec sa sauce maison et des croûtons croustillants.",
        servings=4,
        time="15min",
        tags=["Entrée", "Rapide"],
        difficulty="Facile",
        category="Entrée",
        is_favorite=False,
        shared_count=0,
        ingredients=[
            Ingredient(id="cesar-laitue", name="Laitue romaine", quantity=1, unit="unité"),
            Ingredient(id="cesar-poulet", name="Blancs de poulet", quantity=2, unit="unité(s)"),
            Ingredient(id="cesar-parmesan", name="Parmesan", quantity=60, unit="g"),
            Ingredient(id="cesar-croutons", name="Croûtons", quantity=80, unit="g"),
            Ingredient(id="cesar-sauce", name="Sauce César", quantity=120, unit="ml"),
        ],
        steps=[
            "Cuire les blancs de poulet dans une poêle puis les couper en lamelles.",
            "Préparer la sauce César en mélangeant mayonnaise, ail, parmesan et jus de citron.",
            "Mélanger la laitue, le poulet, les croûtons et napper de sauce.",
            "Servir avec des copeaux de parmesan.",
        ],
        created_at=datetime.fromisoformat("2024-03-10T08:10:00+00:00"),
        updated_at=datetime.fromisoformat("2024-03-10T08:10:00+00:00"),
    ),
]


def demo_user() -> User:
    """Return a fresh copy of the demo user."""
    return _DEMO_USER.model_copy(deep=True)


def demo_users() -> List[User]:
    """Return fresh copies of the demo users (a single user)."""
    return [demo_user()]


def demo_recipes() -> List[Recipe]:
    """Return fresh deep copies of the three demo recipes."""
    return [recipe.model_copy(deep=True) for recipe in _DEMO_RECIPES]
