from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, Union

from storefront.api.dependencies import get_session_id, resolve_session_id
from storefront.core.errors import NotFoundError, InvalidInputError
from storefront.db.session import get_db
from storefront.schemas.cart import (
    CartItemAdd,
    CartItemUpdate,
    CartItemWithDetails,
    CartItemUpdated,
    CartItemRemoved,
    CartItemNotFound,
    CartResponse,
    ClearCartResponse,
    RemoveFromCartResponse,
)
from storefront.services.cart import add_to_cart, get_cart, update_cart_item, remove_from_cart, clear_cart
from storefront.services.pricing import cart_total

router = APIRouter(prefix="/api/v1/cart", tags=["cart"])


@router.get("", response_model=CartResponse)
async def read_cart(
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    """Get current shopping cart."""
    items = await get_cart(db, session_id)
    return CartResponse(
        session_id=session_id,
        items=items,
        total=cart_total(item.total_price for item in items),
        item_count=sum(item.quantity for item in items)
    )


@router.post("/items", response_model=CartItemWithDetails)
async def add_item(
    request: Request,
    item: CartItemAdd,
    x_session_id: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db)
):
    """Add a variation to the cart, merging with an existing line item."""
    session_id = resolve_session_id(request, item.session_id, x_session_id)
    try:
        return await add_to_cart(db, session_id, item.product_variation_id, item.quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.patch("/items/{cart_item_id}", response_model=Union[CartItemUpdated, CartItemRemoved])
async def update_item(
    cart_item_id: int,
    item: CartItemUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Set a line item's quantity. Zero removes it and answers ``{"status": "removed"}``."""
    try:
        result = await update_cart_item(db, cart_item_id, item.quantity)
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if isinstance(result, CartItemNotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cart item not found")
    return result


@router.delete("/items/{cart_item_id}", response_model=RemoveFromCartResponse)
async def remove_item(cart_item_id: int, db: AsyncSession = Depends(get_db)):
    return await remove_from_cart(db, cart_item_id)


@router.post("/clear", response_model=ClearCartResponse)
async def clear(
    session_id: str = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    """Clear entire cart."""
    removed = await clear_cart(db, session_id)
    return ClearCartResponse(session_id=session_id, removed=removed)
