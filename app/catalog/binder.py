"""
==============================================================================
Presentation Binder Module
==============================================================================

Maps the catalog, the current query and the view mode into the render model
consumed by the rendering layer. The render model is self-contained: the
renderer never looks anything up on its own.

Empty States:
------------
An empty listing is reported with one of two kinds:
- EMPTY_CATALOG: the store holds no products at all
- NO_MATCHES: products exist but none match the query
Both offer the same add-product navigation target.

Ratings:
--------
Ratings are external input (Product.rating_tenths, tenths of a star). Products
without one show the configured default rating.

==============================================================================
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Sequence, Union

from app.config import Settings, get_settings
from .metrics import MetricsAggregator
from .models import (
    EmptyState,
    EmptyStateKind,
    Product,
    ProductCard,
    RatingDisplay,
    RenderModel,
    StoreHeader,
    ViewMode,
)
from .search import filter_products


# Module logger
logger = logging.getLogger(__name__)

MAX_STARS = 5


def rating_display(rating_tenths: int) -> RatingDisplay:
    """
    Star rating for display.

    Filled stars are the whole-star part clamped to 1-5; the label shows the
    unclamped rating with its tenths digit, e.g. 44 -> 4 stars, "(4.4)".
    Ratings below one star still fill one star, so 3 -> 1 star, "(0.3)".
    """
    whole, tenths = divmod(rating_tenths, 10)
    filled = min(MAX_STARS, max(1, whole))
    return RatingDisplay(
        rating_tenths=rating_tenths,
        filled_stars=filled,
        stars=[star <= filled for star in range(1, MAX_STARS + 1)],
        label=f"({whole}.{tenths})",
    )


def format_price(price: Union[int, float, Decimal], currency_symbol: str) -> str:
    """Price with currency symbol and thousands separators."""
    if isinstance(price, int) or price == int(price):
        return f"{currency_symbol}{int(price):,}"
    return f"{currency_symbol}{price:,.2f}".rstrip("0").rstrip(".")


class PresentationBinder:
    """
    Builds the render model for the catalog screen.

    Example:
        >>> binder = PresentationBinder()
        >>> model = binder.bind(store.products, "rice", ViewMode.GRID)
        >>> [card.name for card in model.items]
        ['Basmati Rice']
    """

    def __init__(
        self,
        aggregator: Optional[MetricsAggregator] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._aggregator = aggregator or MetricsAggregator(self._settings)

    def bind(self, catalog: Sequence[Product], query: str, view_mode: ViewMode) -> RenderModel:
        """
        Build the render model.

        Args:
            catalog: Full catalog in display order
            query: Current search text
            view_mode: Current layout density

        Returns:
            RenderModel for the renderer
        """
        visible = filter_products(catalog, query)
        items = [self.card_for(product) for product in visible]

        return RenderModel(
            header=self._header(catalog),
            summary=self._aggregator.aggregate_summary(catalog),
            query=query,
            view_mode=view_mode,
            items=items,
            is_empty=not items,
            empty_state=self._empty_state(catalog, query) if not items else None,
        )

    def card_for(self, product: Product) -> ProductCard:
        """Display record for one product."""
        rating_tenths = product.rating_tenths
        if rating_tenths is None:
            rating_tenths = self._settings.default_rating_tenths

        return ProductCard(
            id=product.id,
            name=product.name,
            category=product.category,
            price=product.price,
            price_display=format_price(product.price, self._settings.currency_symbol),
            quantity=product.quantity,
            stock_label=f"Stock: {product.quantity}",
            status=product.status,
            language=product.language,
            description=product.description or None,
            badge=self._settings.marketplace_label,
            rating=rating_display(rating_tenths),
            metrics=self._aggregator.snapshot_for(product),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )

    def _header(self, catalog: Sequence[Product]) -> StoreHeader:
        return StoreHeader(
            title=self._settings.store_title,
            product_count=len(catalog),
            subtitle=f"{len(catalog)} products live",
        )

    def _empty_state(self, catalog: Sequence[Product], query: str) -> EmptyState:
        if not catalog:
            kind = EmptyStateKind.EMPTY_CATALOG
            message = "Start adding products to your store"
        else:
            kind = EmptyStateKind.NO_MATCHES
            message = f"No products match '{query}'"

        logger.debug(f"Empty listing: {kind.value}")
        return EmptyState(
            kind=kind,
            title="No Products Found",
            message=message,
            action_label="Add Product",
            action_path=self._settings.add_product_path,
        )
