"""
Pydantic Models - Supabase rows and API payloads

- Catalog entities (products, variants)
- Order request/response schemas for /api/create-order
- Paginated product listing response
"""

from decimal import Decimal
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storefront.cart.models import CartLine, LineKind
from storefront.services.money import to_decimal


# ============================================================
# Catalog
# ============================================================

class ProductVariant(BaseModel):
    """Color/size variant of a product."""
    model_config = ConfigDict(extra="ignore")

    id: Union[int, str]
    product_id: Optional[Union[int, str]] = None
    color_name: Optional[str] = None
    size: Optional[str] = None
    stock: int = 0
    image_url: Optional[str] = None
    variant_image_url: Optional[str] = None

    @property
    def display_image(self) -> Optional[str]:
        return self.image_url or self.variant_image_url


class Product(BaseModel):
    """Product row, optionally joined with its variants."""
    model_config = ConfigDict(extra="ignore")

    id: Union[int, str]
    name: str
    description: Optional[str] = None
    base_price: Decimal = Decimal("0")
    product_type: Optional[str] = None  # SIMPLE | VARIANT | BUNDLE
    image_url: Optional[str] = None
    category: Optional[str] = None
    tag: Optional[str] = None
    product_variants: List[ProductVariant] = Field(default_factory=list)

    @field_validator("base_price", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        return to_decimal(v)

    @field_validator("product_variants", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return v or []

    def find_variant(self, color_name: Optional[str] = None, size: Optional[str] = None) -> Optional[ProductVariant]:
        """First variant matching the selection; unset fields on a variant match anything."""
        return next(
            (
                v for v in self.product_variants
                if (not v.color_name or v.color_name == color_name)
                and (not v.size or v.size == size)
            ),
            None,
        )


class ProductPage(BaseModel):
    """One page of the catalog listing."""
    products: List[dict]
    total_products: int = Field(serialization_alias="totalProducts")
    current_page: int = Field(serialization_alias="currentPage")
    has_next_page: bool = Field(serialization_alias="hasNextPage")


# ============================================================
# Orders
# ============================================================

class OrderItemType(str, Enum):
    """Item types understood by the stock check and order_items."""
    SIMPLE = "SIMPLE"
    VARIANT = "VARIANT"
    BUNDLE = "BUNDLE"  # product id plus the variants it is built from


class OrderLineIn(BaseModel):
    """Cart line as posted by the storefront at checkout."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Union[int, str]
    name: str = ""
    price: Decimal
    quantity: int
    type: OrderItemType = OrderItemType.SIMPLE
    color_name: Optional[str] = None
    size: Optional[str] = None
    image_url: Optional[str] = None
    component_variant_ids: List[Union[int, str]] = Field(default_factory=list, alias="componentVariantIds")

    @field_validator("component_variant_ids", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return v or []

    @classmethod
    def from_cart_line(cls, line: CartLine) -> "OrderLineIn":
        return cls(
            id=line.identity,
            name=line.name,
            price=line.price,
            quantity=line.quantity,
            type=OrderItemType(line.kind.value),
            color_name=line.color_name,
            size=line.size,
            image_url=line.image_url or None,
        )

    def to_line(self) -> CartLine:
        """Cart line for this item. Bundles have no cart counterpart."""
        if self.type is OrderItemType.BUNDLE:
            raise ValueError("Bundle items cannot be held as cart lines")
        return CartLine(
            identity=self.id,
            name=self.name,
            price=self.price,
            image_url=self.image_url or "",
            kind=LineKind(self.type.value),
            color_name=self.color_name,
            size=self.size,
            quantity=self.quantity,
        )


class CreateOrderRequest(BaseModel):
    cart_items: List[OrderLineIn] = Field(default_factory=list, alias="cartItems")
    total: Optional[Decimal] = None


class CreateOrderResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: Union[int, str] = Field(alias="orderId")
