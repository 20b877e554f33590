"""Tests for the FastAPI application endpoints.

This module contains integration tests for the Storefront API endpoints:
health check, auth, product CRUD and the simulated AI endpoints.
"""

import json
import logging

from fastapi.testclient import TestClient

from storefront.config import Settings


def _signup(client: TestClient, email: str = "ann@example.com", password: str = "secret"):
    return client.post(
        "/auth/signup",
        json={"name": "Ann", "email": email, "password": password},
    )


def _upload(client: TestClient, files=None, **fields):
    data = {"name": "Mug", "price": "12.5"}
    data.update(fields)
    return client.post("/upload", data=data, files=files)


def test_ping_endpoint(client: TestClient):
    """Test that the /ping endpoint returns correct status and JSON."""
    response = client.get("/ping")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_request_id_header(client: TestClient):
    response = client.get("/ping")

    assert response.headers.get("X-Request-ID")


def test_app_creates_store_files(client: TestClient, settings: Settings):
    """Store files start out as empty JSON arrays."""
    assert json.loads(settings.products_path.read_text()) == []
    assert json.loads(settings.users_path.read_text()) == []
    assert settings.UPLOAD_DIR.is_dir()


def test_signup_endpoint(client: TestClient):
    response = _signup(client)

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Signup success"
    assert data["user"]["email"] == "ann@example.com"
    assert "password" not in data["user"]
    assert "createdAt" in data["user"]


def test_signup_duplicate_email(client: TestClient, settings: Settings):
    _signup(client)

    response = _signup(client)

    assert response.status_code == 400
    assert response.json()["message"] == "Email already registered"
    assert len(json.loads(settings.users_path.read_text())) == 1


def test_signup_missing_fields(client: TestClient):
    response = client.post("/auth/signup", json={"name": "Ann"})

    assert response.status_code == 400
    assert response.json()["message"] == "Name, email, and password required"


def test_signup_without_body(client: TestClient):
    response = client.post("/auth/signup")

    assert response.status_code == 400


def test_login_endpoint(client: TestClient):
    user = _signup(client).json()["user"]

    response = client.post(
        "/auth/login", json={"email": "ann@example.com", "password": "secret"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Login success"
    assert data["token"] == f"token-{user['id']}"
    assert data["user"] == user


def test_login_invalid_credentials(client: TestClient):
    _signup(client)

    response = client.post(
        "/auth/login", json={"email": "ann@example.com", "password": "wrong"}
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"


def test_login_missing_fields(client: TestClient):
    response = client.post("/auth/login", json={"email": "ann@example.com"})

    assert response.status_code == 400
    assert response.json()["message"] == "Email and password required"


def test_products_initially_empty(client: TestClient):
    response = client.get("/products")

    assert response.status_code == 200
    assert response.json() == []


def test_upload_then_list(client: TestClient):
    """A created product is listed with defaulted fields applied."""
    response = _upload(client)

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Product uploaded!"
    product = data["product"]
    assert product["category"] == "Uncategorized"
    assert product["description"] == ""
    assert product["image"] is None

    listed = client.get("/products").json()
    assert [p["id"] for p in listed] == [product["id"]]
    assert listed[0]["price"] == 12.5


def test_upload_with_image_is_served(client: TestClient):
    response = _upload(
        client, files={"image": ("mug.png", b"image-bytes", "image/png")}
    )

    image = response.json()["product"]["image"]
    assert image.startswith("/uploads/")
    assert image.endswith("-mug.png")

    served = client.get(image)
    assert served.status_code == 200
    assert served.content == b"image-bytes"


def test_upload_missing_price(client: TestClient):
    response = client.post("/upload", data={"name": "Mug"})

    assert response.status_code == 400
    assert response.json()["message"] == "Name and price are required"


def test_update_product(client: TestClient):
    product = _upload(client, description="Blue").json()["product"]

    response = client.put(f"/products/{product['id']}", json={"price": 50})

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Product updated"
    updated = data["product"]
    assert updated["price"] == 50
    assert isinstance(updated["price"], int)
    assert updated["name"] == "Mug"
    assert updated["description"] == "Blue"
    assert updated["createdAt"] == product["createdAt"]


def test_update_product_string_price(client: TestClient):
    product = _upload(client).json()["product"]

    response = client.put(f"/products/{product['id']}", json={"price": "7.25"})

    assert response.json()["product"]["price"] == 7.25


def test_update_unknown_product(client: TestClient):
    response = client.put("/products/missing", json={"name": "X"})

    assert response.status_code == 404
    assert response.json()["message"] == "Product not found"


def test_delete_product_removes_image(client: TestClient, settings: Settings):
    product = _upload(
        client, files={"image": ("mug.png", b"image-bytes", "image/png")}
    ).json()["product"]
    image_file = settings.UPLOAD_DIR / product["image"].rsplit("/", 1)[1]
    assert image_file.exists()

    response = client.delete(f"/products/{product['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Product deleted"}
    assert client.get("/products").json() == []
    assert not image_file.exists()


def test_delete_unknown_product_leaves_store(client: TestClient, settings: Settings):
    _upload(client)
    before = settings.products_path.read_text()

    response = client.delete("/products/missing")

    assert response.status_code == 404
    assert settings.products_path.read_text() == before


def test_feature_importance_endpoint(client: TestClient):
    response = client.get("/ai/feature-importance")

    assert response.status_code == 200
    data = response.json()
    assert data[0] == {"feature": "Purchase History", "importance": 34}
    assert len(data) == 5


def test_cluster_endpoint(client: TestClient):
    response = client.get("/ai/cluster", params={"user": "ann"})

    assert response.status_code == 200
    data = response.json()
    assert data["user"] == "ann"
    assert data["cluster"] in {
        "Tech Enthusiast",
        "Fashion Lover",
        "Budget Shopper",
        "Lifestyle Shopper",
    }


def test_cluster_endpoint_without_user(client: TestClient):
    assert client.get("/ai/cluster").json()["user"] == "Unknown"


def test_recommend_endpoint(client: TestClient):
    """Never more than 5 items, all from the current catalog."""
    for i in range(8):
        _upload(client, name=f"Product {i}")
    catalog_ids = {p["id"] for p in client.get("/products").json()}

    response = client.get("/ai/recommend")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 5
    for item in data:
        assert item["id"] in catalog_ids
        assert 60 <= item["aiScore"] <= 100


def test_recommend_endpoint_empty_catalog(client: TestClient):
    assert client.get("/ai/recommend").json() == []


def test_model_eval_endpoint(client: TestClient):
    response = client.get("/ai/model-eval")

    assert response.status_code == 200
    assert response.json() == {
        "rmse": 0.83,
        "mae": 0.57,
        "precisionAtK": 0.89,
        "note": "Simulated evaluation metrics",
    }


def test_public_directory_is_served(settings: Settings):
    from storefront.api.main import create_app

    settings.PUBLIC_DIR.mkdir(parents=True)
    (settings.PUBLIC_DIR / "index.html").write_text("<h1>shop</h1>")
    client = TestClient(create_app(settings))

    assert client.get("/").text == "<h1>shop</h1>"
    assert client.get("/ping").json() == {"status": "ok"}


def test_whole_number_price_stays_integer(client: TestClient, settings: Settings):
    """Prices stored as JSON integers are returned as integers."""
    product = _upload(client, price="20").json()["product"]
    assert isinstance(product["price"], int)

    client.put(f"/products/{product['id']}", json={"price": 50.0})

    stored = json.loads(settings.products_path.read_text())[0]
    listed = client.get("/products").json()[0]
    assert stored["price"] == 50 and isinstance(stored["price"], int)
    assert listed["price"] == 50 and isinstance(listed["price"], int)


def test_listing_returns_records_exactly_as_stored(
    client: TestClient, settings: Settings
):
    """Older records with extra keys and no createdAt are passed through."""
    legacy = [{"id": "1", "name": "Legacy", "price": 5, "image": None, "rating": 4}]
    settings.products_path.write_text(json.dumps(legacy))

    listed = client.get("/products")
    recommended = client.get("/ai/recommend")

    assert listed.status_code == 200
    assert listed.json() == legacy
    assert recommended.status_code == 200
    [scored] = recommended.json()
    assert {k: v for k, v in scored.items() if k != "aiScore"} == legacy[0]
    assert 60 <= scored["aiScore"] <= 100


def test_update_legacy_record_keeps_unknown_keys(
    client: TestClient, settings: Settings
):
    legacy = [{"id": "1", "name": "Legacy", "price": 5, "image": None, "rating": 4}]
    settings.products_path.write_text(json.dumps(legacy))

    response = client.put("/products/1", json={"name": "Renamed"})

    assert response.status_code == 200
    assert response.json()["product"] == {**legacy[0], "name": "Renamed"}


def test_request_log_records_route_template(client: TestClient, caplog):
    """Requests are logged under their route template with status and size."""
    with caplog.at_level(logging.INFO, logger="storefront.api.main"):
        client.delete("/products/does-not-exist")
        client.get("/ping")

    handled = [r for r in caplog.records if r.getMessage() == "Request handled"]
    delete_log, ping_log = handled[-2], handled[-1]
    assert delete_log.route == "/products/{product_id}"
    assert delete_log.path == "/products/does-not-exist"
    assert delete_log.status_code == 404
    assert delete_log.levelno == logging.WARNING
    assert ping_log.route == "/ping"
    assert ping_log.levelno == logging.INFO
    assert ping_log.response_bytes == len(b'{"status":"ok"}')
