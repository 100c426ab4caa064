"""
Products API Endpoints

REST API over the product catalog. Deleting a product only marks it
inactive, which removes it from every analytics view.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, Field
from sqlalchemy import select, func, and_
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from order_analytics.config import Settings
from order_analytics.database.connection import get_db_dependency
from order_analytics.database.models import ProductRecord
from order_analytics.serving.api.dependencies import get_app_settings

router = APIRouter()
logger = structlog.get_logger(__name__)


class ProductResponse(BaseModel):
    """Product response"""
    id: int
    name: str
    description: Optional[str]
    price: float
    stock_quantity: int
    category: Optional[str]
    image_url: Optional[str]
    active: bool
    created_at: Optional[datetime]

    @classmethod
    def from_product(cls, product: Any) -> "ProductResponse":
        """Build from an analytics Product or a ProductRecord row."""
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=float(product.price),
            stock_quantity=product.stock_quantity,
            category=product.category,
            image_url=product.image_url,
            active=product.active,
            created_at=product.created_at,
        )


class ProductRequest(BaseModel):
    """Product fields accepted on create and replace"""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    stock_quantity: int = Field(0, ge=0)
    category: Optional[str] = Field(None, max_length=100)
    image_url: Optional[str] = Field(None, max_length=500)
    active: bool = True


async def _get_or_404(db: AsyncSession, product_id: int) -> ProductRecord:
    product = await db.get(ProductRecord, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


async def _fetch(db: AsyncSession, *conditions, order_by=ProductRecord.name) -> List[ProductResponse]:
    query = select(ProductRecord)
    if conditions:
        query = query.where(and_(*conditions))
    result = await db.execute(query.order_by(order_by, ProductRecord.id))
    return [ProductResponse.from_product(p) for p in result.scalars().all()]


@router.get("", response_model=List[ProductResponse])
async def list_active_products(
    db: AsyncSession = Depends(get_db_dependency),
) -> List[ProductResponse]:
    """List active products."""
    return await _fetch(db, ProductRecord.active == True)


@router.get("/available", response_model=List[ProductResponse])
async def list_available_products(
    db: AsyncSession = Depends(get_db_dependency),
) -> List[ProductResponse]:
    """Active products with stock on hand."""
    return await _fetch(db, ProductRecord.active == True, ProductRecord.stock_quantity > 0)


@router.get("/low-stock", response_model=List[ProductResponse])
async def list_low_stock_products(
    threshold: Optional[int] = Query(None, ge=0),
    db: AsyncSession = Depends(get_db_dependency),
    settings: Settings = Depends(get_app_settings),
) -> List[ProductResponse]:
    """Active products at or below the low-stock threshold, scarcest first."""
    limit = threshold if threshold is not None else settings.analytics.low_stock_threshold
    return await _fetch(
        db,
        ProductRecord.active == True,
        ProductRecord.stock_quantity <= limit,
        order_by=ProductRecord.stock_quantity,
    )


@router.get("/categories", response_model=List[str])
async def list_categories(
    db: AsyncSession = Depends(get_db_dependency),
) -> List[str]:
    """Distinct named categories."""
    result = await db.execute(
        select(ProductRecord.category)
        .where(ProductRecord.category.is_not(None))
        .distinct()
        .order_by(ProductRecord.category)
    )
    return list(result.scalars().all())


@router.get("/count", response_model=int)
async def count_active_products(
    db: AsyncSession = Depends(get_db_dependency),
) -> int:
    """Number of active products."""
    total = await db.execute(
        select(func.count(ProductRecord.id)).where(ProductRecord.active == True)
    )
    return total.scalar() or 0


@router.get("/search", response_model=List[ProductResponse])
async def search_products_by_name(
    query: str,
    db: AsyncSession = Depends(get_db_dependency),
) -> List[ProductResponse]:
    """Products whose name contains the query, ignoring case."""
    return await _fetch(db, ProductRecord.name.ilike(f"%{query}%"))


@router.get("/price-range", response_model=List[ProductResponse])
async def list_products_by_price_range(
    min_price: Decimal = Query(..., ge=0),
    max_price: Decimal = Query(..., ge=0),
    db: AsyncSession = Depends(get_db_dependency),
) -> List[ProductResponse]:
    """Products priced within [min_price, max_price], cheapest first."""
    if min_price > max_price:
        raise HTTPException(status_code=400, detail="min_price must not exceed max_price")
    return await _fetch(
        db,
        ProductRecord.price >= min_price,
        ProductRecord.price <= max_price,
        order_by=ProductRecord.price,
    )


@router.get("/category/{category}", response_model=List[ProductResponse])
async def list_products_by_category(
    category: str,
    db: AsyncSession = Depends(get_db_dependency),
) -> List[ProductResponse]:
    """Products in one category."""
    return await _fetch(db, ProductRecord.category == category)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_db_dependency),
) -> ProductResponse:
    """Get product details."""
    return ProductResponse.from_product(await _get_or_404(db, product_id))


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: ProductRequest,
    db: AsyncSession = Depends(get_db_dependency),
) -> ProductResponse:
    """Add a product to the catalog."""
    product = ProductRecord(**payload.model_dump())
    db.add(product)
    await db.flush()
    await db.refresh(product)

    logger.info("Product created", product_id=product.id, category=product.category)
    return ProductResponse.from_product(product)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    payload: ProductRequest,
    db: AsyncSession = Depends(get_db_dependency),
) -> ProductResponse:
    """Replace every editable field of a product."""
    product = await _get_or_404(db, product_id)
    for field, value in payload.model_dump().items():
        setattr(product, field, value)
    await db.flush()
    await db.refresh(product)

    logger.info("Product updated", product_id=product_id)
    return ProductResponse.from_product(product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(get_db_dependency),
) -> Response:
    """Soft delete: the product stays stored but is marked inactive."""
    product = await _get_or_404(db, product_id)
    product.active = False
    await db.flush()

    logger.info("Product deactivated", product_id=product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
