"""Product catalog endpoints for the Storefront API.

Products are created through a multipart form (``POST /upload``) so an
image can be attached; edits and deletes use the product id in the path.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from storefront.api.dependencies import get_catalog_service
from storefront.api.schemas import (
    MessageResponse,
    ProductResponse,
    ProductUpdate,
)
from storefront.services.catalog import CatalogService

# Configure module logger
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(tags=["products"])


@router.get("/products")
def list_products(
    catalog: CatalogService = Depends(get_catalog_service),
) -> List[Dict[str, Any]]:
    """Return every product in storage order, exactly as stored."""
    return catalog.list()


@router.post(
    "/upload",
    response_model=ProductResponse,
    response_model_exclude_unset=True,
)
def upload_product(
    name: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    catalog: CatalogService = Depends(get_catalog_service),
) -> ProductResponse:
    """Create a product from a multipart form, storing the image if present.

    Example:
        POST /upload (multipart) name=Mug price=12.5 image=@mug.png
        Returns the created product with image "/uploads/<ts>-mug.png".
    """
    has_image = image is not None and bool(image.filename)
    product = catalog.create(
        name=name,
        price=price,
        description=description,
        category=category,
        image_filename=image.filename if has_image else None,
        image_file=image.file if has_image else None,
    )
    return ProductResponse(message="Product uploaded!", product=product)


@router.put(
    "/products/{product_id}",
    response_model=ProductResponse,
    response_model_exclude_unset=True,
)
def update_product(
    product_id: str,
    payload: Optional[ProductUpdate] = None,
    catalog: CatalogService = Depends(get_catalog_service),
) -> ProductResponse:
    """Edit name, price, description or category of a product.

    Only the keys present in the body are applied; the image cannot be
    changed here.
    """
    fields = payload.model_dump(exclude_unset=True) if payload else {}
    product = catalog.update(product_id, fields)
    return ProductResponse(message="Product updated", product=product)


@router.delete("/products/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: str,
    catalog: CatalogService = Depends(get_catalog_service),
) -> MessageResponse:
    """Delete a product and its image file."""
    catalog.delete(product_id)
    return MessageResponse(message="Product deleted")
