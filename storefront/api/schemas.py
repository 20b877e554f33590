"""Request and response models for the Storefront API.

Request models declare every field optional: presence checks happen in the
services so that a missing field is reported as 400 with the same message
whether the key is absent, null or empty.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    """Body of ``POST /auth/signup``."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    """Body of ``POST /auth/login``."""

    email: Optional[str] = None
    password: Optional[str] = None


class ProductUpdate(BaseModel):
    """Body of ``PUT /products/{product_id}``.

    Only the keys actually sent are applied; see ``CatalogService.update``.
    """

    name: Optional[str] = None
    price: Optional[Union[float, str]] = None
    description: Optional[str] = None
    category: Optional[str] = None


class User(BaseModel):
    """A user as returned to clients (never includes the password)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Unique user ID")
    name: str
    email: str
    created_at: str = Field(..., alias="createdAt")


class Product(BaseModel):
    """A catalog product as stored in ``products.json``.

    Stored records are passed through as they are: keys this model does not
    declare are kept, and fields missing from older records stay absent when
    routes serialize with ``response_model_exclude_unset``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Union[str, int] = Field(..., description="Unique product ID")
    name: Optional[str] = None
    price: Optional[Union[int, float]] = Field(
        None, description="Price; null when the submitted value was not a number"
    )
    description: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = Field(
        None, description="Reference path under /uploads, or null"
    )
    created_at: Optional[str] = Field(None, alias="createdAt")


class SignupResponse(BaseModel):
    message: str
    user: User


class LoginResponse(BaseModel):
    message: str
    token: str
    user: User


class ProductResponse(BaseModel):
    message: str
    product: Product


class MessageResponse(BaseModel):
    message: str


class FeatureImportance(BaseModel):
    feature: str
    importance: int


class ClusterResponse(BaseModel):
    user: str
    cluster: str
    description: str


class ModelEvalResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rmse: float
    mae: float
    precision_at_k: float = Field(..., alias="precisionAtK")
    note: str


class ErrorResponse(BaseModel):
    """Body returned for every handled error."""

    error: str
    message: str
    details: dict = Field(default_factory=dict)
