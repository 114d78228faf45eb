import pytest
from decimal import Decimal

from storefront.core.errors import InvalidInputError
from storefront.services.catalog import get_products, get_product
from storefront.services.seed import seed_products, SAMPLE_PRODUCTS, SAMPLE_VARIATIONS


@pytest.mark.asyncio
async def test_seed_products(db_session):
    result = await seed_products(db_session)

    assert result.products_created == len(SAMPLE_PRODUCTS) == 7
    assert result.variations_created == len(SAMPLE_VARIATIONS) == 33

    products = await get_products(db_session)
    assert len(products) == 7

    scarf = next(p for p in products if p.name == "Silk Scarf Collection")
    detail = await get_product(db_session, scarf.id)
    adjustments = {v.sku: v.price_adjustment for v in detail.variations}
    assert adjustments["SCARF-SOLID-OS"] == Decimal("-5.00")


@pytest.mark.asyncio
async def test_seed_refuses_non_empty_catalog(db_session):
    await seed_products(db_session)

    with pytest.raises(InvalidInputError):
        await seed_products(db_session)
