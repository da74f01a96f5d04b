"""
Domain models for the customer analysis system.

Design decisions:
- Using Pydantic for validation and serialization
- All models are frozen: immutable once constructed, hashable, equal by value
- Product carries optional catalog attributes; the orchestrator only uses it
  as an opaque value, the reference strategies and templates read the rest
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class Customer(BaseModel):
    """
    Customer entity - a potential recipient of offers.

    Credit is the amount the customer can spend, used by credit-based
    analysis strategies.
    """
    id: int = Field(..., description="Unique customer identifier")
    name: str = Field(..., description="Customer display name")
    credit: int = Field(..., ge=0, description="Available credit")

    model_config = ConfigDict(frozen=True)


class Product(BaseModel):
    """
    Product entity from the catalog.

    Only `id` is required; it is the key used to look the product up in
    the record store.
    """
    id: int = Field(..., description="Unique product identifier")
    name: Optional[str] = Field(default=None, description="Product display name")
    category: Optional[str] = Field(default=None, description="Product category")
    price: Optional[float] = Field(default=None, ge=0, description="Current price")

    model_config = ConfigDict(frozen=True)

    @property
    def display_name(self) -> str:
        return self.name or f"product #{self.id}"


class Purchase(BaseModel):
    """A past purchase, used as input by history-based strategies."""
    customer_id: int = Field(..., description="Reference to customer")
    product_id: int = Field(..., description="Reference to product")

    model_config = ConfigDict(frozen=True)


class Offer(BaseModel):
    """
    An offer binding one customer to one product.

    Two offers for the same customer/product pair are equal. The offer is
    the unit that is persisted and then announced.
    """
    customer: Customer = Field(..., description="Customer receiving the offer")
    product: Product = Field(..., description="Product being offered")

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> str:
        """Storage key, unique per (product, customer) pair."""
        return f"{self.product.id}:{self.customer.id}"

    def __str__(self) -> str:
        return f"Offer({self.product.display_name} -> {self.customer.name})"
