"""Storefront domain types.

All types are immutable dataclasses. Prices are ``Decimal`` so that
cart totals never pick up float rounding noise.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid price: {value!r}") from None


@dataclass(frozen=True)
class Product:
    """A product as listed by ``categories-with-products``."""

    id: int | str
    name: str
    price: Decimal
    unit: str = ""
    image: str = ""

    @classmethod
    def from_dict(cls, raw: dict) -> Product:
        return cls(
            id=raw["id"],
            name=raw.get("name", ""),
            price=_to_decimal(raw.get("price", 0)),
            unit=raw.get("unit") or "",
            image=raw.get("image") or "",
        )


@dataclass(frozen=True)
class Category:
    id: int | str
    name: str
    products: tuple[Product, ...] = ()

    @classmethod
    def from_dict(cls, raw: dict) -> Category:
        return cls(
            id=raw["id"],
            name=raw.get("name", ""),
            products=tuple(Product.from_dict(p) for p in raw.get("products") or []),
        )


@dataclass(frozen=True)
class LineItem:
    """One product/quantity pairing in a cart.

    ``quantity`` is the full amount for this product, never a delta.
    """

    id: int | str
    name: str
    price: Decimal
    quantity: int = 1
    unit: str = ""
    image: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", _to_decimal(self.price))

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity

    def with_quantity(self, quantity: int) -> LineItem:
        return replace(self, quantity=quantity)

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> LineItem:
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            quantity=quantity,
            unit=product.unit,
            image=product.image,
        )

    @classmethod
    def from_dict(cls, raw: dict) -> LineItem:
        return cls(
            id=raw["id"],
            name=raw.get("name", ""),
            price=_to_decimal(raw.get("price", 0)),
            quantity=int(raw.get("quantity", 1)),
            unit=raw.get("unit") or "",
            image=raw.get("image") or "",
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.price),
            "quantity": self.quantity,
            "unit": self.unit,
            "image": self.image,
        }


@dataclass(frozen=True)
class Zone:
    """A delivery coverage area owned by the zone directory."""

    id: int | str
    name: str

    @classmethod
    def from_dict(cls, raw: dict) -> Zone:
        return cls(id=raw["id"], name=raw["name"])


@dataclass(frozen=True)
class CustomerDetails:
    """Delivery contact entered on the checkout form. Never persisted."""

    name: str = ""
    address: str = ""
    phone: str = ""

    def to_dict(self) -> dict:
        return {"name": self.name, "address": self.address, "phone": self.phone}


@dataclass(frozen=True)
class OrderLine:
    product_id: int | str
    quantity: int


@dataclass(frozen=True)
class OrderRequest:
    """Payload for ``POST /orders``; built per attempt and only transmitted."""

    zone_id: int | str
    items: tuple[OrderLine, ...]
    customer: CustomerDetails

    @classmethod
    def build(
        cls,
        zone: Zone,
        items: tuple[LineItem, ...],
        customer: CustomerDetails,
    ) -> OrderRequest:
        return cls(
            zone_id=zone.id,
            items=tuple(OrderLine(it.id, it.quantity) for it in items),
            customer=customer,
        )

    def to_payload(self) -> dict:
        return {
            "zone_id": self.zone_id,
            "product": [
                {"product_id": line.product_id, "quantity": line.quantity}
                for line in self.items
            ],
            "customer": self.customer.to_dict(),
        }


@dataclass(frozen=True)
class OrderSummary:
    """A row of the customer's order history."""

    id: int | str
    total_amount: Decimal
    status: str
    created_at: str | None = field(default=None, compare=False)

    @classmethod
    def from_dict(cls, raw: dict) -> OrderSummary:
        return cls(
            id=raw["id"],
            total_amount=_to_decimal(raw.get("total_amount", 0)),
            status=raw.get("status", ""),
            created_at=raw.get("created_at"),
        )
