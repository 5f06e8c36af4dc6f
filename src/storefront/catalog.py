"""Helpers for the product listing pages."""

from .domain.models import Category

FEATURED_KEYWORD = "Vegetables"
HOME_PAGE_LIMIT = 14


def sort_categories(
    categories: list[Category], featured: str = FEATURED_KEYWORD,
) -> list[Category]:
    """Move categories whose name contains ``featured`` to the front.

    The sort is stable, so relative order inside each group is kept.
    """
    return sorted(categories, key=lambda c: featured not in c.name)


def home_page_sections(
    categories: list[Category], limit: int = HOME_PAGE_LIMIT,
) -> list[Category]:
    """Featured-first categories, each trimmed to ``limit`` products."""
    return [
        Category(id=c.id, name=c.name, products=c.products[:limit])
        for c in sort_categories(categories)
    ]
