"""Product management router.

Endpoints:
    GET    /api/products/            List products (by name)
    GET    /api/products/expiring    Products expiring within the configured window
    GET    /api/products/{id}        Single product
    POST   /api/products/            Create product
    PATCH  /api/products/{id}        Update product (range re-validated)
    DELETE /api/products/{id}        Delete product
"""

from datetime import date, timedelta

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.middleware.exceptions import (
    BusinessLogicError,
    ResourceInUseError,
    ResourceNotFoundError,
)
from app.models.product import Product
from app.models.shipment import Shipment
from app.schemas.product import ProductCreate, ProductOut, ProductUpdate
from app.utils.cache import invalidate_cache

router = APIRouter()


async def _get_product(db: AsyncSession, product_id: str) -> Product:
    product = await db.get(Product, product_id)
    if product is None:
        raise ResourceNotFoundError("Product", product_id)
    return product


@router.get("/", response_model=list[ProductOut])
async def list_products(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Product).order_by(Product.name))
    return result.scalars().all()


@router.get("/expiring", response_model=list[ProductOut])
async def list_expiring_products(db: AsyncSession = Depends(get_db)):
    """Products whose expiry date falls within the window (expired ones included)."""
    cutoff = date.today() + timedelta(days=settings.expiry_window_days)
    result = await db.execute(
        select(Product)
        .where(Product.expiry_date.is_not(None), Product.expiry_date <= cutoff)
        .order_by(Product.expiry_date)
    )
    return result.scalars().all()


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(product_id: str, db: AsyncSession = Depends(get_db)):
    return await _get_product(db, product_id)


@router.post("/", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
async def create_product(body: ProductCreate, db: AsyncSession = Depends(get_db)):
    product = Product(**body.model_dump())
    db.add(product)
    await db.flush()
    await invalidate_cache("stats:*")
    return product


@router.patch("/{product_id}", response_model=ProductOut)
async def update_product(
    product_id: str,
    body: ProductUpdate,
    db: AsyncSession = Depends(get_db),
):
    product = await _get_product(db, product_id)

    updates = body.model_dump(exclude_unset=True)
    min_temp = updates.get("min_temp", product.min_temp)
    max_temp = updates.get("max_temp", product.max_temp)
    if min_temp is None or max_temp is None:
        raise BusinessLogicError("Safe range bounds cannot be null", "INVALID_TEMPERATURE_RANGE")
    if min_temp > max_temp:
        raise BusinessLogicError(
            f"min_temp ({min_temp}) must not exceed max_temp ({max_temp})",
            "INVALID_TEMPERATURE_RANGE",
        )

    for key, value in updates.items():
        setattr(product, key, value)
    await db.flush()
    return product


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: str, db: AsyncSession = Depends(get_db)):
    product = await _get_product(db, product_id)
    in_use = await db.scalar(
        select(Shipment.id).where(Shipment.product_id == product_id).limit(1)
    )
    if in_use:
        raise ResourceInUseError("Product", product_id, "shipments")
    await db.delete(product)
    await db.flush()
    await invalidate_cache("stats:*")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
