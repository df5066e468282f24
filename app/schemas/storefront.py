"""
==============================================================================
Storefront Schemas Module
==============================================================================

Request and response schemas for the storefront screen endpoints.

==============================================================================
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from app.catalog.models import AnalyticsNotice, RenderModel


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class QueryUpdate(BaseModel):
    """Search text as typed; whitespace is kept."""
    query: str = Field(default="")


class ViewModeUpdate(BaseModel):
    """Layout density selection, checked by the view-mode controller."""
    view_mode: str


class CatalogLoad(BaseModel):
    """Replacement catalog, validated product by product by the store."""
    products: List[Dict[str, Any]] = Field(default_factory=list)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class ScreenResponse(BaseModel):
    """Render model wrapper."""
    success: bool = Field(default=True)
    screen: RenderModel


class AnalyticsResponse(BaseModel):
    """Inspect action response."""
    success: bool = Field(default=True)
    notice: AnalyticsNotice
