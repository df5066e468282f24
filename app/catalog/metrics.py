"""
==============================================================================
Metrics Aggregator Module
==============================================================================

Summary and per-product engagement figures for the storefront dashboard.

There is no event store behind these numbers. Sales, view, wishlist and order
figures are illustrative constants taken from configuration; only the active
product count is derived from the catalog. Summary figures always describe the
whole catalog, never the current search result.

==============================================================================
"""

from __future__ import annotations

from typing import Optional, Sequence

from app.config import Settings, get_settings
from .models import AnalyticsNotice, CatalogSummary, MetricsSnapshot, Product


class MetricsAggregator:
    """
    Computes the dashboard summary and per-product snapshots.

    Attributes:
        _settings: Source of the illustrative figures

    Example:
        >>> aggregator = MetricsAggregator()
        >>> aggregator.aggregate_summary(store.products).active_product_count
        2
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    def aggregate_summary(self, catalog: Sequence[Product]) -> CatalogSummary:
        """
        Summarize the full catalog.

        Args:
            catalog: The whole catalog, not a filtered subset
        """
        return CatalogSummary(
            total_sales_figure=self._settings.metrics_total_sales,
            active_product_count=len(catalog),
            total_view_count=self._settings.metrics_total_views,
            total_order_count=self._settings.metrics_total_orders,
        )

    def snapshot_for(self, product: Product) -> MetricsSnapshot:
        """Engagement figures for one product, visible or not."""
        return MetricsSnapshot(
            views=self._settings.metrics_product_views,
            wishlist_adds=self._settings.metrics_product_wishlist_adds,
            orders=self._settings.metrics_product_orders,
        )

    def analytics_notice(self, product: Product) -> AnalyticsNotice:
        """Notification payload shown when the seller inspects a product."""
        snapshot = self.snapshot_for(product)
        return AnalyticsNotice(
            product_id=product.id,
            title="📊 Product Analytics",
            description=(
                f"{product.name}: {snapshot.views} views, "
                f"{snapshot.wishlist_adds} wishlisted, {snapshot.orders} orders"
            ),
            metrics=snapshot,
        )
