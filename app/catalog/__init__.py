"""
==============================================================================
Catalog Package - Storefront Catalog Engine
==============================================================================

In-memory product catalog with search, view-mode and metrics for the seller
storefront screen.

Classes:
--------
- Product: Pydantic model for products
- ProductStore: Authoritative in-memory collection
- ViewModeController: Grid/list layout density
- MetricsAggregator: Summary and per-product engagement figures
- PresentationBinder: Render model builder
- CatalogScreen: Owner of the mutable screen state

==============================================================================
"""

from .models import (
    AnalyticsNotice,
    CatalogSummary,
    EmptyState,
    EmptyStateKind,
    MetricsSnapshot,
    Product,
    ProductCard,
    ProductStatus,
    RatingDisplay,
    RenderModel,
    ViewMode,
)
from .store import ProductStore
from .search import filter_products, matches
from .view_mode import ViewModeController
from .metrics import MetricsAggregator
from .binder import PresentationBinder, format_price, rating_display
from .screen import CatalogScreen, get_screen, init_screen
from .loader import load_products_file

__all__ = [
    "AnalyticsNotice",
    "CatalogSummary",
    "EmptyState",
    "EmptyStateKind",
    "MetricsSnapshot",
    "Product",
    "ProductCard",
    "ProductStatus",
    "RatingDisplay",
    "RenderModel",
    "ViewMode",
    "ProductStore",
    "get_screen",
    "init_screen",
    "filter_products",
    "matches",
    "ViewModeController",
    "MetricsAggregator",
    "PresentationBinder",
    "format_price",
    "rating_display",
    "CatalogScreen",
    "load_products_file",
]
