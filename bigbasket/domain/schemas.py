# bigbasket/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from decimal import Decimal
from datetime import datetime


class ProductIn(BaseModel):
    """Schema dla dodawania produktu do katalogu (admin)."""

    id: Optional[int] = Field(None, gt=0, description="ID produktu; nadawane przez store gdy brak")
    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0, decimal_places=2)
    stock_quantity: int = Field(0, ge=0)
    discount_percentage: Decimal = Field(Decimal("0"), ge=0, le=100)
    gst_percentage: Decimal = Field(Decimal("0"), ge=0, le=100)


class Product(BaseModel):
    """Pelny rekord katalogu, widoczny tylko dla admina."""

    id: int
    name: str
    price: Decimal
    stock_quantity: int
    discount_percentage: Decimal
    gst_percentage: Decimal

    model_config = ConfigDict(from_attributes=True)


class ProductForCustomer(BaseModel):
    """Projekcja produktu dla klienta: bez stanu magazynu, rabatu i GST."""

    id: int
    name: str
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class CartItem(BaseModel):
    product_id: int = Field(..., gt=0, description="ID produktu (musi być > 0)")
    quantity: int = Field(..., gt=0, description="Ilość produktu (musi być > 0)")

    model_config = ConfigDict(from_attributes=True)


class Cart(BaseModel):
    id: Optional[int] = None
    customer_id: int
    status: str = "ACTIVE"
    items: List[CartItem] = Field(default_factory=list)
    expires_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AddToCartIn(BaseModel):
    """Schema dla dodawania produktu do koszyka: dokladnie jedna pozycja."""

    customer_id: int = Field(..., gt=0, description="ID klienta (musi być > 0)")
    items: List[CartItem] = Field(..., min_length=1, max_length=1)


class OrderItem(BaseModel):
    product_id: int
    name: str
    quantity: int
    unit_price: Decimal
    discount_percentage: Decimal
    gst_percentage: Decimal
    line_total: Decimal

    model_config = ConfigDict(from_attributes=True)


class Order(BaseModel):
    """Rachunek wygenerowany z aktywnego koszyka."""

    id: Optional[int] = None
    customer_id: int
    cart_id: Optional[int] = None
    status: str = "BILLED"
    items: List[OrderItem] = Field(default_factory=list)
    subtotal: Decimal = Decimal("0.00")
    discount_total: Decimal = Decimal("0.00")
    gst_total: Decimal = Decimal("0.00")
    total: Decimal = Decimal("0.00")
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
