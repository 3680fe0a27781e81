# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime

# upper bound of an Integer column
MAX_QUANTITY = 2**31 - 1


class CustomerCreate(BaseModel):
    """Schema for registering a customer."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str | None = Field(None, max_length=30)


class CustomerOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductCreate(BaseModel):
    """Schema for a catalogue product; price must be > 0."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    category_id: int | None = Field(None, gt=0)


class ProductOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    price: Decimal
    category_id: int | None = None

    model_config = ConfigDict(from_attributes=True)


class StoreCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    address: str | None = Field(None, max_length=255)


class StoreOut(BaseModel):
    id: int
    name: str
    address: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ItemIn(BaseModel):
    """Schema for adding a product to the cart."""

    product_id: int = Field(..., gt=0, description="Product ID (must be > 0)")
    quantity: int = Field(..., gt=0, description="Quantity (must be > 0)")


class CartItemOut(BaseModel):
    """One cart line (response)."""

    cart_id: int
    customer_id: int
    product_id: int
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    added_at: datetime


class CartOut(BaseModel):
    """Whole cart of a customer (response)."""

    customer_id: int
    items: List[CartItemOut]
    total: Decimal


class CheckoutOut(BaseModel):
    order_id: int


class OrderDetailOut(BaseModel):
    product_id: int
    quantity: int
    unit_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    """Schema for an order (response)."""

    id: int
    customer_id: int
    status: str
    total: Decimal
    created_at: datetime
    payment_method_id: int | None = None
    paid_at: datetime | None = None
    details: List[OrderDetailOut] = []


class PaymentMethodCreate(BaseModel):
    method_type: str = Field(..., pattern=r"^(CARD|PAYPAL|BANK_TRANSFER)$")
    provider: str | None = Field(None, max_length=100)
    last_four: str | None = Field(None, pattern=r"^\d{4}$")
    is_default: bool = False


class PaymentMethodOut(BaseModel):
    id: int
    customer_id: int
    method_type: str
    provider: str | None = None
    last_four: str | None = None
    is_default: bool

    model_config = ConfigDict(from_attributes=True)


class InventoryCreate(BaseModel):
    store_id: int = Field(..., gt=0)
    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., ge=0, le=MAX_QUANTITY, description="Stock on hand (must be >= 0)")
    location: str | None = Field(None, max_length=100)


class InventoryUpdate(BaseModel):
    """Full replacement of an inventory record's mutable fields."""

    quantity: int = Field(..., ge=0, le=MAX_QUANTITY)
    location: str | None = Field(None, max_length=100)


class InventoryOut(BaseModel):
    store_id: int
    product_id: int
    quantity: int
    location: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CartClearedOut(BaseModel):
    customer_id: int
    removed_items: int


class ShipmentCreate(BaseModel):
    order_id: int = Field(..., gt=0)
    carrier: str = Field(..., min_length=1, max_length=50)
    tracking_number: str | None = Field(None, min_length=1, max_length=50)
    tracking_url: str | None = Field(None, max_length=255)


class ShipmentEventOut(BaseModel):
    event_type: str
    location: str | None = None
    notes: str | None = None
    occurred_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ShipmentOut(BaseModel):
    id: int
    order_id: int
    carrier: str
    tracking_number: str | None = None
    tracking_url: str | None = None
    status: str
    shipped_at: datetime
    delivered_at: datetime | None = None
    events: List[ShipmentEventOut] = []


class CategoryIn(BaseModel):
    """Create or replace a category. Names are unique, case-insensitively."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    parent_id: int | None = Field(None, gt=0)


class CategoryOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    parent_id: int | None = None

    model_config = ConfigDict(from_attributes=True)


class SupplierIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    contact_name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str | None = Field(None, max_length=30)


class SupplierOut(BaseModel):
    id: int
    name: str
    contact_name: str | None = None
    email: str | None = None
    phone: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ReviewCreate(BaseModel):
    # rating range is checked by ReviewService
    customer_id: int = Field(..., gt=0)
    product_id: int = Field(..., gt=0)
    rating: int
    comment: str | None = Field(None, max_length=2000)


class ReviewUpdate(BaseModel):
    rating: int
    comment: str | None = Field(None, max_length=2000)


class ReviewOut(BaseModel):
    id: int
    customer_id: int
    product_id: int
    rating: int
    comment: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AverageRatingOut(BaseModel):
    product_id: int
    average_rating: float | None = None
    review_count: int


class PromotionIn(BaseModel):
    """
    PERCENT promotions need discount_percent in (0, 100],
    FIXED promotions need a positive discount_amount.
    Ranges are checked by PromotionService.
    """

    code: str = Field(..., min_length=1, max_length=50)
    description: str | None = None
    promo_type: str = Field(..., max_length=10)
    discount_percent: Decimal | None = None
    discount_amount: Decimal | None = None
    start_date: datetime
    end_date: datetime


class PromotionOut(BaseModel):
    id: int
    code: str
    description: str | None = None
    promo_type: str
    discount_percent: Decimal | None = None
    discount_amount: Decimal | None = None
    start_date: datetime
    end_date: datetime
    active: bool

    model_config = ConfigDict(from_attributes=True)
