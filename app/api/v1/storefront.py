"""
==============================================================================
Storefront Endpoints
==============================================================================

Endpoints driving the seller catalog screen: render model, search text,
view mode, catalog replacement and the per-product analytics notice.

==============================================================================
"""

from fastapi import APIRouter, Depends

from app.catalog.screen import CatalogScreen
from app.core.dependencies import get_catalog_screen
from app.schemas.storefront import (
    AnalyticsResponse,
    CatalogLoad,
    QueryUpdate,
    ScreenResponse,
    ViewModeUpdate,
)


router = APIRouter(prefix="/storefront", tags=["Storefront"])


class StorefrontController:
    """Controller for storefront screen operations."""

    def __init__(self, screen: CatalogScreen):
        self._screen = screen

    def render(self) -> ScreenResponse:
        """Current render model."""
        return ScreenResponse(screen=self._screen.render())

    def set_query(self, request: QueryUpdate) -> ScreenResponse:
        """Update search text."""
        return ScreenResponse(screen=self._screen.set_query(request.query))

    def set_view_mode(self, request: ViewModeUpdate) -> ScreenResponse:
        """Switch layout density."""
        return ScreenResponse(screen=self._screen.set_view_mode(request.view_mode))

    def load_catalog(self, request: CatalogLoad) -> ScreenResponse:
        """Replace the catalog."""
        self._screen.load(request.products)
        return ScreenResponse(screen=self._screen.render())

    def get_summary(self) -> dict:
        """Whole-catalog summary."""
        return {
            "success": True,
            "summary": self._screen.summary().model_dump()
        }

    def get_stats(self) -> dict:
        """Catalog statistics."""
        return {
            "success": True,
            "stats": self._screen.store.get_stats()
        }

    def inspect(self, product_id: str) -> AnalyticsResponse:
        """Analytics notice for one product."""
        return AnalyticsResponse(notice=self._screen.inspect(product_id))


@router.get("", response_model=ScreenResponse, response_model_exclude_none=True)
async def get_storefront(screen: CatalogScreen = Depends(get_catalog_screen)):
    """Get the render model for the catalog screen."""
    return StorefrontController(screen).render()


@router.put("/query", response_model=ScreenResponse, response_model_exclude_none=True)
async def update_query(
    request: QueryUpdate,
    screen: CatalogScreen = Depends(get_catalog_screen)
):
    """Update the search text."""
    return StorefrontController(screen).set_query(request)


@router.put("/view-mode", response_model=ScreenResponse, response_model_exclude_none=True)
async def update_view_mode(
    request: ViewModeUpdate,
    screen: CatalogScreen = Depends(get_catalog_screen)
):
    """Select grid or list layout."""
    return StorefrontController(screen).set_view_mode(request)


@router.put("/catalog", response_model=ScreenResponse, response_model_exclude_none=True)
async def load_catalog(
    request: CatalogLoad,
    screen: CatalogScreen = Depends(get_catalog_screen)
):
    """Replace the whole catalog. Invalid input leaves the old catalog in place."""
    return StorefrontController(screen).load_catalog(request)


@router.get("/summary")
async def get_summary(screen: CatalogScreen = Depends(get_catalog_screen)):
    """Get summary figures for the whole catalog."""
    return StorefrontController(screen).get_summary()


@router.get("/stats")
async def get_stats(screen: CatalogScreen = Depends(get_catalog_screen)):
    """Get catalog statistics by category and status."""
    return StorefrontController(screen).get_stats()


@router.get("/products/{product_id}/analytics", response_model=AnalyticsResponse)
async def inspect_product(
    product_id: str,
    screen: CatalogScreen = Depends(get_catalog_screen)
):
    """Get the analytics notice for a product."""
    return StorefrontController(screen).inspect(product_id)
