"""Product catalog CRUD over the products store.

Product images go through the upload sink on create and are removed from
disk together with the product on delete.
"""

import logging
import math
from typing import Any, BinaryIO, Dict, List, Mapping, Optional, Union

from storefront.api.exceptions import NotFoundError, ValidationError
from storefront.services.records import new_record_id, utc_timestamp
from storefront.storage.json_store import Record, Repository
from storefront.storage.uploads import UploadSink

# Configure module logger
logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = ""
DEFAULT_CATEGORY = "Uncategorized"

# Text fields an update may change; id, createdAt and image are fixed
EDITABLE_TEXT_FIELDS = ("name", "description", "category")


def to_number(value: Any) -> float:
    """Coerce a submitted price the way JavaScript's ``Number()`` does.

    ``None`` and blank strings become 0, numeric strings are parsed, anything
    else becomes NaN.
    """
    if value is None:
        return 0.0
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if "_" in text:
            return math.nan
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def json_number(value: float) -> Optional[Union[int, float]]:
    """Return the value as it is persisted: whole numbers as int, NaN as null."""
    if not math.isfinite(value):
        return None
    if value.is_integer():
        return int(value)
    return value


class CatalogService:
    """Lists, creates, edits and deletes products."""

    def __init__(self, products: Repository, uploads: UploadSink):
        self.products = products
        self.uploads = uploads

    def list(self) -> List[Record]:
        """Return every product in storage order."""
        return self.products.load()

    def create(
        self,
        name: Optional[str],
        price: Any,
        description: Optional[str] = None,
        category: Optional[str] = None,
        image_filename: Optional[str] = None,
        image_file: Optional[BinaryIO] = None,
    ) -> Record:
        """Add a product, storing its image first when one is supplied.

        Args:
            name: Product name (required).
            price: Submitted price (required); coerced with ``to_number``.
            description: Optional description, defaults to "".
            category: Optional category, defaults to "Uncategorized".
            image_filename: Client filename of the uploaded image.
            image_file: Binary stream of the uploaded image.

        Returns:
            The created product record.

        Raises:
            ValidationError: If name or price is missing.
        """
        if not name or price is None or price == "":
            raise ValidationError("Name and price are required")

        image = None
        if image_file is not None:
            image = self.uploads.save(image_filename, image_file)

        product = {
            "id": new_record_id(),
            "name": name,
            "price": json_number(to_number(price)),
            "description": description or DEFAULT_DESCRIPTION,
            "category": category or DEFAULT_CATEGORY,
            "image": image,
            "createdAt": utc_timestamp(),
        }

        try:
            with self.products.transaction() as products:
                products.append(product)
        except Exception:
            if image is not None:
                self.uploads.delete(image)
            raise

        logger.info(
            "Product created",
            extra={"product_id": product["id"], "has_image": image is not None},
        )
        return product

    def update(self, product_id: str, fields: Mapping[str, Any]) -> Record:
        """Merge submitted fields into an existing product.

        ``fields`` must only contain the keys the client actually sent. For
        name, description and category a null value keeps the current value.
        A present price is always coerced, so null becomes 0.

        Raises:
            NotFoundError: If no product has ``product_id``.
        """
        with self.products.transaction() as products:
            product = _find(products, product_id)
            if product is None:
                raise NotFoundError("Product", product_id)

            for key in EDITABLE_TEXT_FIELDS:
                if fields.get(key) is not None:
                    product[key] = fields[key]

            if "price" in fields:
                product["price"] = json_number(to_number(fields["price"]))

        logger.info(
            "Product updated",
            extra={"product_id": product_id, "fields": sorted(fields)},
        )
        return product

    def delete(self, product_id: str) -> None:
        """Remove a product and its image file.

        The image is only removed once the store has been saved, so a failed
        save never leaves a record pointing at a deleted file.

        Raises:
            NotFoundError: If no product has ``product_id``; the store is
                left untouched.
        """
        with self.products.transaction() as products:
            product = _find(products, product_id)
            if product is None:
                raise NotFoundError("Product", product_id)

            image = product.get("image")
            products[:] = [p for p in products if p.get("id") != product_id]

        if image:
            self.uploads.delete(image)

        logger.info("Product deleted", extra={"product_id": product_id})


def _find(products: List[Record], product_id: str) -> Optional[Dict[str, Any]]:
    return next((p for p in products if p.get("id") == product_id), None)
