"""
Cart engine.

Carts are keyed by an opaque session id and created lazily on the first add.
Line items are unique per (cart, variation): adding the same variation again
increments the existing row, while update sets the quantity outright.

Both "find or create" steps are single INSERT .. ON CONFLICT statements
against the unique constraints on carts.session_id and
cart_items(cart_id, product_variation_id), so concurrent adds for the same
session and variation always converge on one row.
"""
import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from storefront.core.errors import NotFoundError, InvalidInputError
from storefront.db.models import Cart, CartItem, Product, ProductVariation
from storefront.schemas.cart import (
    CartItemWithDetails,
    CartItemUpdated,
    CartItemRemoved,
    CartItemNotFound,
    UpdateCartItemResult,
    RemoveFromCartResponse,
)
from storefront.schemas.product import ProductResponse, ProductVariationResponse
from storefront.services.catalog import get_variation_by_id
from storefront.services.pricing import price_item

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _upsert(db: AsyncSession, model):
    dialect = db.get_bind().dialect.name
    try:
        return _UPSERT_INSERTS[dialect](model)
    except KeyError:
        raise RuntimeError(f"Cart upserts are not supported on the {dialect} dialect") from None


def _to_details(item: CartItem, variation: ProductVariation, product: Product) -> CartItemWithDetails:
    return CartItemWithDetails(
        id=item.id,
        cart_id=item.cart_id,
        product_variation_id=item.product_variation_id,
        quantity=item.quantity,
        product=ProductResponse.model_validate(product),
        variation=ProductVariationResponse.model_validate(variation),
        total_price=price_item(product, variation, item.quantity),
        created_at=item.created_at,
        updated_at=item.updated_at
    )


def _details_query():
    # populate_existing: upserts bypass the identity map, so rows already
    # loaded in this session must be refreshed from the database.
    return (
        select(CartItem, ProductVariation, Product)
        .select_from(CartItem)
        .join(ProductVariation, CartItem.product_variation_id == ProductVariation.id)
        .join(Product, ProductVariation.product_id == Product.id)
        .order_by(CartItem.id)
        .execution_options(populate_existing=True)
    )


async def get_cart_item_details(db: AsyncSession, cart_item_id: int) -> CartItemWithDetails:
    result = await db.execute(_details_query().where(CartItem.id == cart_item_id))
    row = result.first()
    if not row:
        raise NotFoundError("Cart item not found")

    item, variation, product = row
    return _to_details(item, variation, product)


async def get_or_create_cart_id(db: AsyncSession, session_id: str) -> int:
    """Atomic get-or-insert of the cart for a session. Does not commit."""
    now = datetime.utcnow()
    stmt = _upsert(db, Cart).values(session_id=session_id, created_at=now, updated_at=now)
    stmt = stmt.on_conflict_do_update(
        index_elements=[Cart.session_id],
        set_={"updated_at": now}
    ).returning(Cart.id)

    result = await db.execute(stmt)
    return result.scalar_one()


async def add_to_cart(
    db: AsyncSession,
    session_id: str,
    product_variation_id: int,
    quantity: int
) -> CartItemWithDetails:
    if quantity < 1:
        raise InvalidInputError("Quantity must be greater than 0")

    # Checked before any write so a failed add never creates a cart row.
    variation = await get_variation_by_id(db, product_variation_id)
    if not variation:
        raise NotFoundError("Product variation not found")

    cart_id = await get_or_create_cart_id(db, session_id)

    now = datetime.utcnow()
    stmt = _upsert(db, CartItem).values(
        cart_id=cart_id,
        product_variation_id=product_variation_id,
        quantity=quantity,
        created_at=now,
        updated_at=now
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[CartItem.cart_id, CartItem.product_variation_id],
        set_={
            "quantity": CartItem.quantity + stmt.excluded.quantity,
            "updated_at": now
        }
    ).returning(CartItem.id)

    result = await db.execute(stmt)
    cart_item_id = result.scalar_one()
    await db.commit()
    logger.info(
        f"Added to cart: session={session_id}, cart_item_id={cart_item_id}, "
        f"variation_id={product_variation_id}, quantity=+{quantity}"
    )

    return await get_cart_item_details(db, cart_item_id)


async def get_cart(db: AsyncSession, session_id: str) -> list[CartItemWithDetails]:
    """Priced line items for a session; empty when the session has no cart."""
    result = await db.execute(
        _details_query()
        .join(Cart, CartItem.cart_id == Cart.id)
        .where(Cart.session_id == session_id)
    )
    items = [_to_details(item, variation, product) for item, variation, product in result.all()]
    logger.debug(f"Loaded cart for session={session_id}: {len(items)} items")
    return items


async def update_cart_item(db: AsyncSession, cart_item_id: int, quantity: int) -> UpdateCartItemResult:
    """
    Set a line item's quantity to exactly ``quantity``.

    A quantity of zero deletes the item and yields CartItemRemoved. That is a
    normal outcome, not an error; only a missing item yields CartItemNotFound.
    """
    if quantity < 0:
        raise InvalidInputError("Quantity must be >= 0")

    if quantity == 0:
        result = await db.execute(delete(CartItem).where(CartItem.id == cart_item_id))
        await db.commit()
        if result.rowcount == 0:
            return CartItemNotFound(cart_item_id=cart_item_id)
        logger.info(f"Removed cart item {cart_item_id} (quantity set to 0)")
        return CartItemRemoved(cart_item_id=cart_item_id)

    result = await db.execute(select(CartItem).where(CartItem.id == cart_item_id))
    cart_item = result.scalar_one_or_none()
    if not cart_item:
        return CartItemNotFound(cart_item_id=cart_item_id)

    cart_item.quantity = quantity
    cart_item.updated_at = datetime.utcnow()
    await db.commit()
    logger.info(f"Updated cart item {cart_item_id}: quantity={quantity}")

    return CartItemUpdated(item=await get_cart_item_details(db, cart_item_id))


async def remove_from_cart(db: AsyncSession, cart_item_id: int) -> RemoveFromCartResponse:
    result = await db.execute(delete(CartItem).where(CartItem.id == cart_item_id))
    await db.commit()

    success = result.rowcount > 0
    if success:
        logger.info(f"Removed cart item {cart_item_id}")
    else:
        logger.debug(f"Remove requested for missing cart item {cart_item_id}")
    return RemoveFromCartResponse(success=success)


async def clear_cart(db: AsyncSession, session_id: str) -> int:
    """Delete every line item of the session's cart. The cart row is kept."""
    result = await db.execute(select(Cart.id).where(Cart.session_id == session_id))
    cart_id = result.scalar_one_or_none()
    if cart_id is None:
        return 0

    result = await db.execute(delete(CartItem).where(CartItem.cart_id == cart_id))
    await db.commit()
    logger.info(f"Cleared cart for session={session_id}: {result.rowcount} items removed")
    return result.rowcount
