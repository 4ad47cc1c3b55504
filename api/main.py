"""
FastAPI application for the recipe catalog API.

This module defines the REST service the catalog client talks to:
- GET /api/health: Liveness check
- GET /api/users, GET /api/users/{id}, POST /api/users: Users (see api/routers/users.py)
- GET /api/recipes, GET /api/recipes/{id}, POST /api/recipes,
  PATCH /api/recipes/{id}/favorite: Recipes (see api/routers/recipes.py)

Every error answers with {"message": ..., "details"?: ...}:
- 400 for request validation failures (details lists the invalid fields)
- 404 / 409 for missing or conflicting records (StoreError)
- 500 with a generic message for anything unexpected

Run the API with:
    python -m api.main
or
    uvicorn api.main:app --reload --port 4000

Access API documentation at:
    http://localhost:4000/docs (Swagger UI)
"""

# Import config early to load .env and configure logging before anything reads the environment
from api.config import BackendConfig

import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.routers import recipes, users
from api.schemas import HealthResponse
from catalog import store
from catalog.demo_data import demo_recipes, demo_users
from catalog.models import utc_now
from catalog.store import StoreError

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Recipe Catalog API",
    description="Backend API storing users and recipes for the recipe catalog client",
    version="1.0.0",
    openapi_tags=[
        {"name": "users", "description": "Sign-up and user lookup."},
        {"name": "recipes", "description": "Recipe listing, creation and favorites."},
        {"name": "health", "description": "Liveness check."},
    ],
)

app.include_router(users.router)
app.include_router(recipes.router)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Invalid request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid data.", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected server error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error."},
    )


@app.get("/api/health", response_model=HealthResponse, tags=["health"])
def health() -> HealthResponse:
    """
    Health check endpoint.

    Returns:
        {"status": "ok", "timestamp": <current server time>}. Liveness only.
    """
    return HealthResponse(status="ok", timestamp=utc_now())


if BackendConfig.seed_demo_data():
    store.seed_data(demo_users(), demo_recipes())


if __name__ == "__main__":
    port = BackendConfig.get_port()
    logger.info("Recipe catalog API listening on http://localhost:%d", port)
    uvicorn.run(app, host="0.0.0.0", port=port)
