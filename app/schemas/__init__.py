"""
==============================================================================
Schemas Package
==============================================================================

Pydantic schemas for API request/response validation.

==============================================================================
"""

from .storefront import (
    AnalyticsResponse,
    CatalogLoad,
    QueryUpdate,
    ScreenResponse,
    ViewModeUpdate,
)

__all__ = [
    "AnalyticsResponse",
    "CatalogLoad",
    "QueryUpdate",
    "ScreenResponse",
    "ViewModeUpdate",
]
