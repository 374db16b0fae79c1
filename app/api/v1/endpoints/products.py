"""Product API: thin routes delegating to ProductService (cache-aside CRUD)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from app.api.v1.dependencies import get_product_service, get_product_service_for_write
from app.application.use_cases.products import ProductService
from app.core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from app.schemas.product import (
    ProductCreateRequest,
    ProductResponse,
    ProductUpdateRequest,
)

router = APIRouter()


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    body: ProductCreateRequest,
    product_svc: Annotated[ProductService, Depends(get_product_service_for_write)],
):
    """Create a product; the store assigns its id."""
    created = await product_svc.create_product(name=body.name, price=body.price)
    return ProductResponse.model_validate(created)


@router.get("", response_model=list[ProductResponse])
async def list_products(
    product_svc: Annotated[ProductService, Depends(get_product_service)],
    skip: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
):
    """List products ordered by id (read from the store, not cached)."""
    products = await product_svc.list_products(skip=skip, limit=limit)
    return [ProductResponse.model_validate(p) for p in products]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    product_svc: Annotated[ProductService, Depends(get_product_service)],
):
    """Get product by id (served from cache when present)."""
    product = await product_svc.get_product(product_id)
    return ProductResponse.model_validate(product)


@router.put("", response_model=ProductResponse)
async def update_product(
    body: ProductUpdateRequest,
    product_svc: Annotated[ProductService, Depends(get_product_service_for_write)],
):
    """Replace name and price of an existing product (id in body)."""
    updated = await product_svc.update_product(
        body.id, name=body.name, price=body.price
    )
    return ProductResponse.model_validate(updated)


@router.delete("/{product_id}", status_code=204)
async def delete_product(
    product_id: int,
    product_svc: Annotated[ProductService, Depends(get_product_service_for_write)],
) -> Response:
    """Delete product and evict it from the cache."""
    await product_svc.delete_product(product_id)
    return Response(status_code=204)
