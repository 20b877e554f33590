"""Shared fixtures for the Storefront tests.

Every test gets its own data and upload directories under ``tmp_path`` so
no test ever touches ``products.json`` or ``users.json`` in the repo.
"""

import io
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from storefront.api.main import create_app
from storefront.config import Settings
from storefront.services.auth import AuthService
from storefront.services.catalog import CatalogService
from storefront.storage.json_store import JsonStore
from storefront.storage.uploads import UploadSink


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        DATA_DIR=tmp_path / "data",
        UPLOAD_DIR=tmp_path / "uploads",
        PUBLIC_DIR=tmp_path / "public",
    )


@pytest.fixture
def client(settings: Settings) -> TestClient:
    return TestClient(create_app(settings))


@pytest.fixture
def products_store(tmp_path: Path) -> JsonStore:
    return JsonStore(tmp_path / "products.json")


@pytest.fixture
def users_store(tmp_path: Path) -> JsonStore:
    return JsonStore(tmp_path / "users.json")


@pytest.fixture
def upload_sink(tmp_path: Path) -> UploadSink:
    sink = UploadSink(tmp_path / "uploads")
    sink.ensure_exists()
    return sink


@pytest.fixture
def auth_service(users_store: JsonStore) -> AuthService:
    return AuthService(users_store)


@pytest.fixture
def catalog(products_store: JsonStore, upload_sink: UploadSink) -> CatalogService:
    return CatalogService(products_store, upload_sink)


@pytest.fixture
def png_bytes() -> bytes:
    """A few bytes standing in for an image; content is never inspected."""
    return b"\x89PNG\r\n\x1a\nfake-image-data"


@pytest.fixture
def image_stream(png_bytes: bytes) -> io.BytesIO:
    return io.BytesIO(png_bytes)
