"""Storefront: product catalog backend with simulated recommendations.

This package provides a small HTTP backend for a storefront: account signup
and login, product catalog CRUD with image uploads, and simulated
recommendation endpoints. All state lives in flat JSON files.

Modules:
    api: FastAPI application and REST API endpoints
    services: Auth, catalog and simulation logic
    storage: JSON file stores and the image upload sink
"""

__version__ = "0.1.0"
