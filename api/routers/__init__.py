"""API routers for the catalog REST service."""
