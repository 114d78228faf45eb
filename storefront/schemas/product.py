from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal
from datetime import datetime


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    base_price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    category: str = Field(..., min_length=1, max_length=100)
    image_url: Optional[str] = None


class ProductVariationCreate(BaseModel):
    product_id: int
    size: str = Field(..., min_length=1, max_length=20)
    color: str = Field(..., min_length=1, max_length=50)
    price_adjustment: Decimal = Field(Decimal("0.00"), max_digits=10, decimal_places=2)
    stock_quantity: int = Field(0, ge=0)
    sku: str = Field(..., min_length=1, max_length=100)


class ProductResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    base_price: Decimal
    category: str
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProductVariationResponse(BaseModel):
    id: int
    product_id: int
    size: str
    color: str
    price_adjustment: Decimal
    stock_quantity: int
    sku: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProductWithVariationsResponse(ProductResponse):
    variations: List[ProductVariationResponse] = []


class SeedResponse(BaseModel):
    message: str
    products_created: int
    variations_created: int
