"""Domain layer: cart aggregate, validation, types and collaborator interfaces."""

from .cart import Cart
from .errors import (
    HttpError,
    OrderSubmitError,
    StorefrontError,
    ZoneError,
    ZoneFetchError,
    ZoneNotFound,
)
from .models import (
    Category,
    CustomerDetails,
    LineItem,
    OrderLine,
    OrderRequest,
    OrderSummary,
    Product,
    Zone,
)
from .ports import Catalog, OrderGateway, ZoneDirectory
from .validation import validate, validate_phone

__all__ = [
    "Cart",
    "Catalog",
    "Category",
    "CustomerDetails",
    "HttpError",
    "LineItem",
    "OrderGateway",
    "OrderLine",
    "OrderRequest",
    "OrderSubmitError",
    "OrderSummary",
    "Product",
    "StorefrontError",
    "Zone",
    "ZoneDirectory",
    "ZoneError",
    "ZoneFetchError",
    "ZoneNotFound",
    "validate",
    "validate_phone",
]
