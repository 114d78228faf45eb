from pydantic import BaseModel, Field
from decimal import Decimal
from datetime import datetime
from typing import List, Literal, Optional, Union

from storefront.schemas.product import ProductResponse, ProductVariationResponse


class CartItemAdd(BaseModel):
    product_variation_id: int
    quantity: int = Field(1, gt=0)
    session_id: Optional[str] = Field(None, min_length=1, max_length=255)


class CartItemUpdate(BaseModel):
    quantity: int = Field(..., ge=0)


class CartItemWithDetails(BaseModel):
    id: int
    cart_id: int
    product_variation_id: int
    quantity: int
    product: ProductResponse
    variation: ProductVariationResponse
    total_price: Decimal
    created_at: datetime
    updated_at: datetime


class CartItemUpdated(BaseModel):
    status: Literal["updated"] = "updated"
    item: CartItemWithDetails


class CartItemRemoved(BaseModel):
    """Quantity was set to zero and the line item is gone."""
    status: Literal["removed"] = "removed"
    cart_item_id: int


class CartItemNotFound(BaseModel):
    status: Literal["not_found"] = "not_found"
    cart_item_id: int


UpdateCartItemResult = Union[CartItemUpdated, CartItemRemoved, CartItemNotFound]


class RemoveFromCartResponse(BaseModel):
    success: bool


class CartResponse(BaseModel):
    session_id: str
    items: List[CartItemWithDetails]
    total: Decimal
    item_count: int


class ClearCartResponse(BaseModel):
    session_id: str
    removed: int
