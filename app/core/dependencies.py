"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection for the storefront endpoints.

Usage Examples:
--------------
    @router.get("/storefront")
    async def get_screen(screen: CatalogScreen = Depends(get_catalog_screen)):
        return screen.render()

==============================================================================
"""

from __future__ import annotations

import logging

from app.catalog.screen import CatalogScreen, get_screen
from app.core import exceptions


# Module logger
logger = logging.getLogger(__name__)


def get_catalog_screen() -> CatalogScreen:
    """
    Get the storefront screen.

    Raises:
        AppException: CATALOG_NOT_LOADED before startup has initialized it
    """
    screen = get_screen()
    if screen is None:
        logger.error("Storefront screen requested before initialization")
        raise exceptions.catalog_not_loaded()
    return screen
