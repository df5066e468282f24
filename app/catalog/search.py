"""
==============================================================================
Catalog Search Module
==============================================================================

Pure search predicate over the catalog.

Match Rules:
-----------
- A product matches when the query is a case-insensitive substring of its
  name OR of its category
- The empty query matches every product
- The query is used as typed: whitespace is not trimmed, so " " only matches
  products whose name or category contains a space
- Results keep catalog order

==============================================================================
"""

from __future__ import annotations

from typing import Iterable, List

from .models import Product


def matches(product: Product, query: str) -> bool:
    """Check whether a single product matches the query."""
    needle = query.casefold()
    return needle in product.name.casefold() or needle in product.category.casefold()


def filter_products(catalog: Iterable[Product], query: str) -> List[Product]:
    """
    Return the products matching the query, in catalog order.

    Args:
        catalog: Products in display order
        query: Search text as typed

    Returns:
        Ordered subsequence of the catalog

    Example:
        >>> [p.name for p in filter_products(catalog, "RICE")]
        ['Basmati Rice']
    """
    if query == "":
        return list(catalog)

    return [product for product in catalog if matches(product, query)]
