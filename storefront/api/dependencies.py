"""FastAPI dependencies resolving the services built by ``create_app``.

Stores and services are created once per application and kept on
``app.state``, so each app instance (and each test) owns its own files.
"""

from fastapi import Request

from storefront.services.auth import AuthService
from storefront.services.catalog import CatalogService
from storefront.services.simulation import SimulationService


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


def get_simulation_service(request: Request) -> SimulationService:
    return request.app.state.simulation_service
