"""
==============================================================================
Catalog Screen Module
==============================================================================

Explicit owner of the mutable screen state: the catalog store, the search
query and the view mode. Every state change recomputes the render model
synchronously, so render() always reflects the latest command.

Commands:
--------
- load(products)        replace the catalog
- set_query(text)       update the search text
- select_grid/list()    switch layout density
- inspect(product_id)   analytics notice for one product

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from app.config import Settings, get_settings
from .binder import PresentationBinder
from .metrics import MetricsAggregator
from .models import AnalyticsNotice, CatalogSummary, Product, RenderModel, ViewMode
from .store import ProductStore
from .view_mode import ViewModeController


# Module logger
logger = logging.getLogger(__name__)


class CatalogScreen:
    """
    Seller catalog screen state.

    Attributes:
        store: Product store, subscribed to for catalog changes
        view_mode: Layout density controller
        query: Current search text

    Example:
        >>> screen = CatalogScreen(ProductStore(products))
        >>> screen.set_query("rice")
        >>> [card.name for card in screen.render().items]
        ['Basmati Rice']
    """

    def __init__(
        self,
        store: ProductStore,
        settings: Optional[Settings] = None,
        aggregator: Optional[MetricsAggregator] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._store = store
        self._aggregator = aggregator or MetricsAggregator(self._settings)
        self._binder = PresentationBinder(self._aggregator, self._settings)
        self._view_mode = ViewModeController(self._settings.default_view_mode)
        self._query = ""
        self._render_model = self._bind()

        self._store.subscribe(self._on_catalog_changed)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def store(self) -> ProductStore:
        return self._store

    @property
    def query(self) -> str:
        return self._query

    @property
    def view_mode(self) -> ViewMode:
        return self._view_mode.current()

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def load(self, products: Iterable[Union[Product, Dict[str, Any]]]) -> Tuple[Product, ...]:
        """Replace the catalog; the store notifies this screen on success."""
        return self._store.load(products)

    def set_query(self, query: str) -> RenderModel:
        """Update the search text as typed."""
        self._query = query
        return self._refresh()

    def set_view_mode(self, mode: Union[ViewMode, str]) -> RenderModel:
        """Switch layout density; an unknown mode is rejected."""
        if self._view_mode.set(mode):
            logger.info(f"View mode set to {self.view_mode.value}")
            return self._refresh()
        return self._render_model

    def select_grid(self) -> RenderModel:
        return self.set_view_mode(ViewMode.GRID)

    def select_list(self) -> RenderModel:
        return self.set_view_mode(ViewMode.LIST)

    def inspect(self, product_id: str) -> AnalyticsNotice:
        """Analytics notice for a product, whether or not it is visible."""
        product = self._store.get(product_id)
        return self._aggregator.analytics_notice(product)

    # =========================================================================
    # VIEWS
    # =========================================================================

    def render(self) -> RenderModel:
        """Current render model."""
        return self._render_model

    def summary(self) -> CatalogSummary:
        return self._aggregator.aggregate_summary(self._store.products)

    def close(self) -> None:
        """Stop listening to the store."""
        self._store.unsubscribe(self._on_catalog_changed)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _on_catalog_changed(self, catalog: Tuple[Product, ...]) -> None:
        logger.debug(f"Catalog changed, {len(catalog)} products")
        self._refresh()

    def _bind(self) -> RenderModel:
        return self._binder.bind(self._store.products, self._query, self._view_mode.current())

    def _refresh(self) -> RenderModel:
        self._render_model = self._bind()
        return self._render_model


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

_screen_instance: Optional[CatalogScreen] = None


def get_screen() -> Optional[CatalogScreen]:
    """Get the global screen instance."""
    return _screen_instance


def init_screen(
    products: Optional[Iterable[Union[Product, Dict[str, Any]]]] = None,
    settings: Optional[Settings] = None,
) -> CatalogScreen:
    """
    Initialize the global screen with a fresh store.

    Args:
        products: Initial catalog (empty when None)
        settings: Settings override (global settings when None)

    Returns:
        CatalogScreen instance
    """
    global _screen_instance
    if _screen_instance is not None:
        _screen_instance.close()
    _screen_instance = CatalogScreen(ProductStore(products), settings=settings)
    return _screen_instance
