import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from storefront.core.errors import NotFoundError, InvalidInputError
from storefront.db.models import Product, ProductVariation
from storefront.schemas.product import (
    ProductCreate,
    ProductResponse,
    ProductVariationCreate,
    ProductVariationResponse,
    ProductWithVariationsResponse,
)

logger = logging.getLogger(__name__)


async def get_product_by_id(db: AsyncSession, product_id: int) -> Optional[Product]:
    result = await db.execute(select(Product).where(Product.id == product_id))
    return result.scalar_one_or_none()


async def get_variation_by_id(db: AsyncSession, variation_id: int) -> Optional[ProductVariation]:
    result = await db.execute(select(ProductVariation).where(ProductVariation.id == variation_id))
    return result.scalar_one_or_none()


async def create_product(db: AsyncSession, data: ProductCreate) -> ProductResponse:
    if data.base_price <= 0:
        raise InvalidInputError("base_price must be greater than 0")

    product = Product(
        name=data.name,
        description=data.description,
        base_price=data.base_price,
        category=data.category,
        image_url=data.image_url
    )
    db.add(product)
    await db.commit()
    await db.refresh(product)
    logger.info(f"Created product id={product.id} name={product.name!r} category={product.category}")

    return ProductResponse.model_validate(product)


async def create_product_variation(db: AsyncSession, data: ProductVariationCreate) -> ProductVariationResponse:
    if data.stock_quantity < 0:
        raise InvalidInputError("stock_quantity must be >= 0")

    product = await get_product_by_id(db, data.product_id)
    if not product:
        raise NotFoundError(f"Product with id {data.product_id} not found")

    result = await db.execute(select(ProductVariation.id).where(ProductVariation.sku == data.sku))
    if result.scalar_one_or_none() is not None:
        logger.warning(f"Variation create rejected, sku already exists: {data.sku}")
        raise InvalidInputError(f"SKU {data.sku} already exists")

    variation = ProductVariation(
        product_id=data.product_id,
        size=data.size,
        color=data.color,
        price_adjustment=data.price_adjustment,
        stock_quantity=data.stock_quantity,
        sku=data.sku
    )
    db.add(variation)
    await db.commit()
    await db.refresh(variation)
    logger.info(f"Created variation id={variation.id} sku={variation.sku} for product={data.product_id}")

    return ProductVariationResponse.model_validate(variation)


async def get_products(
    db: AsyncSession,
    category: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None
) -> list[ProductResponse]:
    query = select(Product)
    if category:
        query = query.where(Product.category == category)
    query = query.order_by(Product.id)
    if offset:
        query = query.offset(offset)
    if limit:
        query = query.limit(limit)

    result = await db.execute(query)
    products = result.scalars().all()
    logger.debug(f"Found {len(products)} products, category={category}, limit={limit}, offset={offset}")

    return [ProductResponse.model_validate(product) for product in products]


async def get_product(db: AsyncSession, product_id: int) -> Optional[ProductWithVariationsResponse]:
    """Product with all of its variations, or None when it does not exist."""
    result = await db.execute(
        select(Product)
        .options(selectinload(Product.variations))
        .execution_options(populate_existing=True)
        .where(Product.id == product_id)
    )
    product = result.scalar_one_or_none()
    if not product:
        return None

    return ProductWithVariationsResponse.model_validate(product)
