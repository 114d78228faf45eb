from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from storefront.core.errors import NotFoundError, InvalidInputError
from storefront.db.session import get_db
from storefront.schemas.product import (
    ProductCreate,
    ProductResponse,
    ProductVariationCreate,
    ProductVariationResponse,
    ProductWithVariationsResponse,
)
from storefront.services.catalog import create_product, create_product_variation, get_products, get_product


router = APIRouter(prefix="/api/v1", tags=["products"])


@router.get("/products", response_model=list[ProductResponse])
async def list_products(
    category: Optional[str] = None,
    limit: Optional[int] = Query(None, gt=0),
    offset: Optional[int] = Query(None, ge=0),
    db: AsyncSession = Depends(get_db)
):
    return await get_products(db, category=category, limit=limit, offset=offset)


@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def add_product(data: ProductCreate, db: AsyncSession = Depends(get_db)):
    try:
        return await create_product(db, data)
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/products/{product_id}", response_model=ProductWithVariationsResponse)
async def read_product(product_id: int, db: AsyncSession = Depends(get_db)):
    product = await get_product(db, product_id)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product


@router.post("/variations", response_model=ProductVariationResponse, status_code=status.HTTP_201_CREATED)
async def add_variation(data: ProductVariationCreate, db: AsyncSession = Depends(get_db)):
    try:
        return await create_product_variation(db, data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
