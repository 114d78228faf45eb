import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from storefront.core.errors import InvalidInputError
from storefront.db.models import Product, ProductVariation
from storefront.schemas.product import SeedResponse

logger = logging.getLogger(__name__)


SAMPLE_PRODUCTS = [
    {
        "name": "Classic Cotton T-Shirt",
        "description": "Comfortable 100% cotton t-shirt perfect for everyday wear.",
        "base_price": Decimal("19.99"),
        "category": "shirts",
        "image_url": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=500",
    },
    {
        "name": "Denim Slim Fit Jeans",
        "description": "Premium denim jeans with a modern slim fit.",
        "base_price": Decimal("89.99"),
        "category": "pants",
        "image_url": "https://images.unsplash.com/photo-1542272604-787c3835535d?w=500",
    },
    {
        "name": "Summer Floral Dress",
        "description": "Light and breezy floral dress perfect for summer occasions.",
        "base_price": Decimal("79.99"),
        "category": "dresses",
        "image_url": "https://images.unsplash.com/photo-1595777457583-95e059d581b8?w=500",
    },
    {
        "name": "Leather Bomber Jacket",
        "description": "Stylish genuine leather bomber jacket for a timeless look.",
        "base_price": Decimal("199.99"),
        "category": "jackets",
        "image_url": "https://images.unsplash.com/photo-1551028719-00167b16eac5?w=500",
    },
    {
        "name": "Wool Blend Sweater",
        "description": "Cozy wool blend sweater ideal for cooler weather.",
        "base_price": Decimal("65.99"),
        "category": "shirts",
        "image_url": "https://images.unsplash.com/photo-1576995853123-5a10305d93c0?w=500",
    },
    {
        "name": "Silk Scarf Collection",
        "description": "Elegant silk scarf available in multiple patterns.",
        "base_price": Decimal("45.99"),
        "category": "accessories",
        "image_url": "https://images.unsplash.com/photo-1601925260368-ae2f83cf8b7f?w=500",
    },
    {
        "name": "High-Waisted Trousers",
        "description": "Professional high-waisted trousers for office wear.",
        "base_price": Decimal("95.99"),
        "category": "pants",
        "image_url": "https://images.unsplash.com/photo-1594633312681-425c7b97ccd1?w=500",
    },
]

# (product index, size, color, price adjustment, stock, sku)
SAMPLE_VARIATIONS = [
    (0, "S", "White", "0.00", 15, "TSHIRT-WHITE-S"),
    (0, "M", "White", "0.00", 20, "TSHIRT-WHITE-M"),
    (0, "L", "White", "0.00", 12, "TSHIRT-WHITE-L"),
    (0, "S", "Black", "2.00", 8, "TSHIRT-BLACK-S"),
    (0, "M", "Black", "2.00", 0, "TSHIRT-BLACK-M"),
    (0, "L", "Black", "2.00", 5, "TSHIRT-BLACK-L"),
    (1, "30", "Blue", "0.00", 10, "JEANS-BLUE-30"),
    (1, "32", "Blue", "0.00", 15, "JEANS-BLUE-32"),
    (1, "34", "Blue", "0.00", 12, "JEANS-BLUE-34"),
    (1, "32", "Black", "10.00", 0, "JEANS-BLACK-32"),
    (1, "34", "Black", "10.00", 8, "JEANS-BLACK-34"),
    (2, "XS", "Pink", "0.00", 6, "DRESS-PINK-XS"),
    (2, "S", "Pink", "0.00", 10, "DRESS-PINK-S"),
    (2, "M", "Pink", "0.00", 8, "DRESS-PINK-M"),
    (2, "S", "Blue", "5.00", 12, "DRESS-BLUE-S"),
    (2, "M", "Blue", "5.00", 0, "DRESS-BLUE-M"),
    (3, "S", "Brown", "0.00", 4, "JACKET-BROWN-S"),
    (3, "M", "Brown", "0.00", 6, "JACKET-BROWN-M"),
    (3, "L", "Brown", "0.00", 3, "JACKET-BROWN-L"),
    (3, "M", "Black", "25.00", 5, "JACKET-BLACK-M"),
    (3, "L", "Black", "25.00", 0, "JACKET-BLACK-L"),
    (4, "S", "Gray", "0.00", 12, "SWEATER-GRAY-S"),
    (4, "M", "Gray", "0.00", 15, "SWEATER-GRAY-M"),
    (4, "L", "Gray", "0.00", 9, "SWEATER-GRAY-L"),
    (4, "M", "Navy", "8.00", 7, "SWEATER-NAVY-M"),
    (5, "One Size", "Floral", "0.00", 20, "SCARF-FLORAL-OS"),
    (5, "One Size", "Geometric", "5.00", 15, "SCARF-GEO-OS"),
    (5, "One Size", "Solid", "-5.00", 0, "SCARF-SOLID-OS"),
    (6, "28", "Navy", "0.00", 8, "TROUSER-NAVY-28"),
    (6, "30", "Navy", "0.00", 12, "TROUSER-NAVY-30"),
    (6, "32", "Navy", "0.00", 10, "TROUSER-NAVY-32"),
    (6, "30", "Black", "10.00", 6, "TROUSER-BLACK-30"),
    (6, "32", "Black", "10.00", 0, "TROUSER-BLACK-32"),
]


async def seed_products(db: AsyncSession) -> SeedResponse:
    """Insert the sample clothing catalog. Refuses to run on a non-empty catalog."""
    count_result = await db.execute(select(func.count(Product.id)))
    if count_result.scalar():
        raise InvalidInputError("Catalog already contains products")

    products = [Product(**data) for data in SAMPLE_PRODUCTS]
    db.add_all(products)
    await db.flush()

    variations = [
        ProductVariation(
            product_id=products[index].id,
            size=size,
            color=color,
            price_adjustment=Decimal(adjustment),
            stock_quantity=stock,
            sku=sku
        )
        for index, size, color, adjustment, stock, sku in SAMPLE_VARIATIONS
    ]
    db.add_all(variations)
    await db.commit()
    logger.info(f"Seeded {len(products)} products and {len(variations)} variations")

    return SeedResponse(
        message="Sample products and variations seeded successfully",
        products_created=len(products),
        variations_created=len(variations)
    )
