"""
==============================================================================
Product Store Module
==============================================================================

Authoritative in-memory collection of the seller's products.

Features:
---------
- Ordered, read-only view of the catalog (insertion order = display order)
- All-or-nothing loads: invalid input leaves the previous catalog in place
- Duplicate identifier rejection
- Identifier lookup index
- Synchronous change notification for derived views

==============================================================================
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from pydantic import ValidationError

from app.core import exceptions
from .models import Product


# Module logger
logger = logging.getLogger(__name__)

CatalogListener = Callable[[Tuple[Product, ...]], None]


class ProductStore:
    """
    In-memory product store with atomic replacement.

    The collection and its identifier index are swapped together in a single
    assignment, so readers never see a half-loaded catalog.

    Example:
        >>> store = ProductStore()
        >>> store.load([tomatoes, rice])
        >>> [p.name for p in store.products]
        ['Fresh Tomatoes', 'Basmati Rice']
    """

    def __init__(self, products: Optional[Iterable[Union[Product, Dict[str, Any]]]] = None) -> None:
        self._snapshot: Tuple[Tuple[Product, ...], Dict[str, Product]] = ((), {})
        self._listeners: List[CatalogListener] = []

        if products is not None:
            self.load(products)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def products(self) -> Tuple[Product, ...]:
        """Get all products in display order."""
        return self._snapshot[0]

    def __len__(self) -> int:
        return len(self._snapshot[0])

    def __iter__(self) -> Iterator[Product]:
        return iter(self._snapshot[0])

    # =========================================================================
    # LOADING
    # =========================================================================

    def load(self, products: Iterable[Union[Product, Dict[str, Any]]]) -> Tuple[Product, ...]:
        """
        Replace the catalog with the given products.

        Args:
            products: Ordered products, as Product instances or raw dicts

        Returns:
            The new catalog

        Raises:
            AppException: INVALID_PRODUCT or DUPLICATE_PRODUCT_ID; the
                previous catalog is kept in both cases
            Exception: Whatever a listener raised; the previous catalog is
                restored and re-announced to every listener first
        """
        parsed = self._parse(products)

        counts = Counter(product.id for product in parsed)
        duplicates = [product_id for product_id, count in counts.items() if count > 1]
        if duplicates:
            logger.warning(f"Rejected catalog load, duplicate ids: {duplicates}")
            raise exceptions.duplicate_product_id(duplicates)

        catalog = tuple(parsed)
        previous = self._snapshot
        self._snapshot = (catalog, {product.id: product for product in catalog})

        try:
            self._notify(catalog)
        except Exception:
            logger.error("Catalog listener failed, restoring previous catalog")
            self._snapshot = previous
            self._notify(previous[0])
            raise

        logger.info(f"✅ Loaded {len(catalog)} products")
        return catalog

    @staticmethod
    def _parse(products: Iterable[Union[Product, Dict[str, Any]]]) -> List[Product]:
        parsed = []
        for position, item in enumerate(products):
            if isinstance(item, Product):
                parsed.append(item)
                continue
            try:
                parsed.append(Product.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Rejected catalog load, invalid product at {position}")
                raise exceptions.invalid_product(position, str(e)) from e
        return parsed

    # =========================================================================
    # CHANGE NOTIFICATION
    # =========================================================================

    def subscribe(self, listener: CatalogListener) -> None:
        """Register a callback invoked with the new catalog after each load."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: CatalogListener) -> None:
        """Remove a previously registered callback."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, catalog: Tuple[Product, ...]) -> None:
        for listener in list(self._listeners):
            listener(catalog)

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def find_by_id(self, product_id: str) -> Optional[Product]:
        """Find product by identifier."""
        return self._snapshot[1].get(product_id)

    def get(self, product_id: str) -> Product:
        """
        Get product by identifier.

        Raises:
            AppException: PRODUCT_NOT_FOUND
        """
        product = self.find_by_id(product_id)
        if product is None:
            raise exceptions.product_not_found(product_id)
        return product

    def get_stats(self) -> Dict:
        """Get catalog statistics."""
        stats = {
            "total_products": len(self),
            "total_units": sum(p.quantity for p in self.products),
            "categories": {},
            "statuses": {},
        }

        for product in self.products:
            stats["categories"][product.category] = stats["categories"].get(product.category, 0) + 1
            stats["statuses"][product.status.value] = stats["statuses"].get(product.status.value, 0) + 1

        return stats

