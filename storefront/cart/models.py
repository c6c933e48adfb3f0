"""Cart models with Decimal-based pricing."""
import json
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Iterator, Optional, Tuple

from storefront.errors import PersistenceLoadError
from storefront.services.money import round_money


class LineKind(str, Enum):
    """What a cart line points at in the catalog."""
    SIMPLE = "SIMPLE"  # keyed on the product id
    VARIANT = "VARIANT"  # keyed on the variant id (color/size)


def _parse_price(value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise PersistenceLoadError(f"Invalid price: {value!r}")
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise PersistenceLoadError(f"Invalid price: {value!r}")
    if not price.is_finite() or price < 0:
        raise PersistenceLoadError(f"Invalid price: {value!r}")
    return price


def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise PersistenceLoadError(f"Field '{key}' must be a string")
    return value


@dataclass(frozen=True)
class CartLine:
    """Single product or variant entry in the cart."""
    identity: str
    name: str
    price: Decimal
    image_url: str = ""
    kind: LineKind = LineKind.SIMPLE
    color_name: Optional[str] = None
    size: Optional[str] = None
    quantity: int = 1

    def __post_init__(self):
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "identity", str(self.identity))
        object.__setattr__(self, "kind", LineKind(self.kind))
        if not isinstance(self.price, Decimal):
            object.__setattr__(self, "price", Decimal(str(self.price)))
        if self.kind is LineKind.SIMPLE:
            object.__setattr__(self, "color_name", None)
            object.__setattr__(self, "size", None)

    @classmethod
    def simple(cls, identity, name: str, price, image_url: str = "") -> "CartLine":
        """Line for a product sold without variants."""
        return cls(identity=identity, name=name, price=price, image_url=image_url)

    @classmethod
    def variant(
        cls,
        identity,
        name: str,
        price,
        image_url: str = "",
        color_name: Optional[str] = None,
        size: Optional[str] = None,
    ) -> "CartLine":
        """Line for one color/size variant; identity is the variant id."""
        return cls(
            identity=identity,
            name=name,
            price=price,
            image_url=image_url,
            kind=LineKind.VARIANT,
            color_name=color_name,
            size=size,
        )

    @property
    def is_variant(self) -> bool:
        return self.kind is LineKind.VARIANT

    @property
    def subtotal(self) -> Decimal:
        """Unrounded price * quantity."""
        return self.price * self.quantity

    def with_quantity(self, quantity: int) -> "CartLine":
        return replace(self, quantity=quantity)

    def to_dict(self) -> dict:
        """Convert to a plain record for the snapshot."""
        data = {
            "identity": self.identity,
            "name": self.name,
            "price": str(self.price),
            "image_url": self.image_url,
            "kind": self.kind.value,
            "quantity": self.quantity,
        }
        if self.is_variant:
            data["color_name"] = self.color_name
            data["size"] = self.size
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "CartLine":
        """
        Create from a snapshot record.

        Records written before lines carried an explicit kind use `id` as
        identity and are tagged VARIANT when they have a color or size.

        Raises:
            PersistenceLoadError: record is missing fields or has bad values
        """
        if not isinstance(data, dict):
            raise PersistenceLoadError("Cart line must be an object")

        identity = data.get("identity", data.get("id"))
        if isinstance(identity, bool) or not isinstance(identity, (str, int)) or identity == "":
            raise PersistenceLoadError("Cart line has no identity")

        name = data.get("name")
        if not isinstance(name, str):
            raise PersistenceLoadError(f"Cart line {identity} has no name")

        if "price" not in data:
            raise PersistenceLoadError(f"Cart line {identity} has no price")
        price = _parse_price(data["price"])

        quantity = data.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise PersistenceLoadError(f"Cart line {identity} has invalid quantity {quantity!r}")

        image_url = _optional_str(data, "image_url") or ""
        color_name = _optional_str(data, "color_name")
        size = _optional_str(data, "size")

        raw_kind = data.get("kind")
        if raw_kind is None:
            kind = LineKind.VARIANT if (color_name or size) else LineKind.SIMPLE
        else:
            try:
                kind = LineKind(raw_kind)
            except ValueError:
                raise PersistenceLoadError(f"Unknown cart line kind {raw_kind!r}")

        return cls(
            identity=identity,
            name=name,
            price=price,
            image_url=image_url,
            kind=kind,
            color_name=color_name,
            size=size,
            quantity=quantity,
        )


@dataclass(frozen=True)
class CartState:
    """Ordered, identity-unique sequence of cart lines.

    Every transition returns a new state; lines keep their insertion order.
    """
    lines: Tuple[CartLine, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "lines", tuple(self.lines))

    def __iter__(self) -> Iterator[CartLine]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def get(self, identity) -> Optional[CartLine]:
        identity = str(identity)
        return next((line for line in self.lines if line.identity == identity), None)

    @property
    def total_items(self) -> int:
        """Total number of units in cart."""
        return sum(line.quantity for line in self.lines)

    @property
    def total_price(self) -> Decimal:
        """Sum of line subtotals, never rounded."""
        return sum((line.subtotal for line in self.lines), Decimal("0"))

    @property
    def display_total(self) -> Decimal:
        """Total rounded to cents for display and order submission."""
        return round_money(self.total_price)

    # Transitions

    def add(self, item: CartLine) -> "CartState":
        if self.get(item.identity) is not None:
            return CartState(tuple(
                line.with_quantity(line.quantity + 1) if line.identity == item.identity else line
                for line in self.lines
            ))
        return CartState(self.lines + (item.with_quantity(1),))

    def remove(self, identity) -> "CartState":
        identity = str(identity)
        return CartState(tuple(line for line in self.lines if line.identity != identity))

    def set_quantity(self, identity, quantity: int) -> "CartState":
        if quantity < 1:
            return self.remove(identity)
        identity = str(identity)
        return CartState(tuple(
            line.with_quantity(quantity) if line.identity == identity else line
            for line in self.lines
        ))

    # Snapshot

    def to_list(self) -> list:
        return [line.to_dict() for line in self.lines]

    def to_snapshot(self) -> str:
        """Serialize to the JSON snapshot stored under the cart key."""
        return json.dumps(self.to_list(), ensure_ascii=False)

    @classmethod
    def from_list(cls, records: Any) -> "CartState":
        if not isinstance(records, list):
            raise PersistenceLoadError("Cart snapshot must be a list")
        lines = [CartLine.from_dict(record) for record in records]
        identities = [line.identity for line in lines]
        if len(set(identities)) != len(identities):
            raise PersistenceLoadError("Cart snapshot has duplicate identities")
        return cls(tuple(lines))

    @classmethod
    def from_snapshot(cls, raw: str) -> "CartState":
        """
        Parse a stored snapshot.

        Raises:
            PersistenceLoadError: not JSON, not a list, or a malformed line
        """
        try:
            records = json.loads(raw)
        except (ValueError, TypeError, RecursionError) as e:
            raise PersistenceLoadError(f"Cart snapshot is not valid JSON: {e}")
        return cls.from_list(records)


def line_from_product(product, variant=None) -> CartLine:
    """
    Build the cart line for a catalog product.

    With a variant, the line is keyed on the variant id and carries its
    color and size; the price is the parent product's base price.
    """
    if variant is None:
        return CartLine.simple(
            identity=product.id,
            name=product.name,
            price=product.base_price,
            image_url=product.image_url or "",
        )
    return CartLine.variant(
        identity=variant.id,
        name=product.name,
        price=product.base_price,
        image_url=variant.display_image or product.image_url or "",
        color_name=variant.color_name,
        size=variant.size,
    )
