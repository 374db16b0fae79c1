"""Product API schemas.

Bodies only enforce JSON types; name/price business rules live in
ProductEntity so HTTP and direct callers share one set of checks.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ProductCreateRequest(BaseModel):
    """Request body for POST /product. Any id sent by the client is ignored."""

    id: int | None = Field(default=None, description="Ignored; the store assigns ids")
    name: str = Field(..., description="Product name (must not be blank)")
    price: Decimal = Field(..., description="Price, strictly positive")


class ProductUpdateRequest(BaseModel):
    """Request body for PUT /product. id is required (checked by the service)."""

    id: int | None = Field(default=None, description="Id of the product to update")
    name: str = Field(..., description="New product name (must not be blank)")
    price: Decimal = Field(..., description="New price, strictly positive")


class ProductResponse(BaseModel):
    """Product in create/get/update/list responses. price is rendered as a string."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: Decimal
