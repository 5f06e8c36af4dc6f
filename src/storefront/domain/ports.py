"""Collaborator protocols used by the checkout engine.

The orchestrator and zone resolver depend only on these interfaces, so
tests and alternative front ends can plug in their own implementations.
``storefront.infra.api.StorefrontApi`` implements all three.
"""

from __future__ import annotations

from typing import Protocol

from .models import Category, OrderRequest, OrderSummary, Product, Zone


class ZoneDirectory(Protocol):
    """Source of the full list of delivery zones."""

    def list_zones(self) -> list[Zone]:
        """Return every zone currently known to the service.

        Raises:
            HttpError: If the directory cannot be fetched.
        """
        ...


class OrderGateway(Protocol):
    """Accepts order submissions on behalf of an authenticated customer."""

    def submit_order(self, order: OrderRequest, token: str) -> dict:
        """Send ``order`` with bearer ``token``.

        Returns the decoded response body.

        Raises:
            HttpError: On transport failure or a non-2xx response.
        """
        ...


class Catalog(Protocol):
    """Read-only product listing used by the browsing pages."""

    def list_categories(self) -> list[Category]:
        ...

    def list_category_products(self, category_id: int | str) -> list[Product]:
        ...

    def list_orders(self, token: str) -> list[OrderSummary]:
        ...
