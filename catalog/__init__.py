"""
Core modules for the recipe catalog client.

This package contains:
- models: Users, recipes, ingredients and creation inputs
- scaling: Serving-based ingredient scaling and quantity formatting
- gateways: Remote (HTTP) and local (in-memory) data gateways
- session: Session controller owning the working set and online/offline status
- browse: Recipe search and catalog statistics
- store: In-memory store backing the REST service
"""
