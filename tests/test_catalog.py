import pytest
from decimal import Decimal

from storefront.core.errors import NotFoundError, InvalidInputError
from storefront.schemas.product import ProductCreate, ProductVariationCreate
from storefront.services.catalog import (
    create_product,
    create_product_variation,
    get_products,
    get_product,
    get_variation_by_id,
)


async def create_tshirt(db_session, category="shirts"):
    return await create_product(db_session, ProductCreate(
        name="Classic Cotton T-Shirt",
        description=None,
        base_price=Decimal("19.99"),
        category=category,
        image_url=None
    ))


@pytest.mark.asyncio
async def test_create_product(db_session):
    product = await create_tshirt(db_session)

    assert product.id
    assert product.name == "Classic Cotton T-Shirt"
    assert product.description is None
    assert product.base_price == Decimal("19.99")
    assert product.created_at is not None


@pytest.mark.asyncio
async def test_create_variation(db_session):
    product = await create_tshirt(db_session)

    variation = await create_product_variation(db_session, ProductVariationCreate(
        product_id=product.id,
        size="S",
        color="Black",
        price_adjustment=Decimal("-2.00"),
        stock_quantity=8,
        sku="TSHIRT-BLACK-S"
    ))

    assert variation.product_id == product.id
    assert variation.price_adjustment == Decimal("-2.00")
    assert (await get_variation_by_id(db_session, variation.id)).sku == "TSHIRT-BLACK-S"


@pytest.mark.asyncio
async def test_create_variation_for_missing_product(db_session):
    with pytest.raises(NotFoundError, match="Product with id 999999 not found"):
        await create_product_variation(db_session, ProductVariationCreate(
            product_id=999999, size="S", color="Black", sku="NOPE-S"
        ))


@pytest.mark.asyncio
async def test_create_variation_duplicate_sku(db_session, variation):
    with pytest.raises(InvalidInputError, match="already exists"):
        await create_product_variation(db_session, ProductVariationCreate(
            product_id=variation.product_id, size="L", color="Red", sku=variation.sku
        ))


@pytest.mark.asyncio
async def test_get_products_filters_and_paginates(db_session):
    for _ in range(3):
        await create_tshirt(db_session)
    await create_tshirt(db_session, category="pants")

    assert len(await get_products(db_session)) == 4
    assert len(await get_products(db_session, category="pants")) == 1
    assert len(await get_products(db_session, category="shirts", limit=2)) == 2

    all_products = await get_products(db_session)
    page = await get_products(db_session, limit=2, offset=1)
    assert [p.id for p in page] == [p.id for p in all_products[1:3]]


@pytest.mark.asyncio
async def test_get_product_with_variations(db_session, variation):
    product = await get_product(db_session, variation.product_id)

    assert product.id == variation.product_id
    assert [v.sku for v in product.variations] == [variation.sku]


@pytest.mark.asyncio
async def test_get_product_missing(db_session):
    assert await get_product(db_session, 999999) is None
