"""
==============================================================================
Product Models Module
==============================================================================

Pydantic models for catalog items and the storefront render model.

Products are frozen: the storefront only reads and displays them. Price and
quantity keep the exact numeric type they were supplied with, so a product
read back from the store compares equal to the one that was loaded.

==============================================================================
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Any, List, Optional, Union

from pydantic import (
    AllowInfNan,
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    Strict,
    StrictInt,
    field_validator,
    model_validator,
)


Price = Union[
    StrictInt,
    Annotated[float, Strict(), AllowInfNan(False)],
    Annotated[Decimal, Strict(), AllowInfNan(False)],
]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProductStatus(str, enum.Enum):
    """
    Listing availability.

    - IN_STOCK: Listed and purchasable
    - OUT_OF_STOCK: Listed, no stock left
    - LOW_STOCK: Listed, stock running out
    - DRAFT: Not yet published
    """

    IN_STOCK = "in-stock"
    OUT_OF_STOCK = "out-of-stock"
    LOW_STOCK = "low-stock"
    DRAFT = "draft"


class ViewMode(str, enum.Enum):
    """Layout density of the product listing."""

    GRID = "grid"
    LIST = "list"


class Product(BaseModel):
    """
    Product model for catalog items.

    Attributes:
        id: Stable identifier, unique within the catalog
        name: Product display name
        price: Non-negative price (int, float or Decimal, kept as given)
        quantity: Stock count
        category: Category name, displayed and searched
        description: Optional free text
        status: Listing availability
        language: Locale tag the text fields are written in
        created_at: Creation timestamp
        updated_at: Last update timestamp, never before created_at
        rating_tenths: External rating in tenths of a star (0-50)
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )

    id: str = Field(..., min_length=1, description="Product identifier")
    name: str = Field(..., min_length=1, description="Product name")
    price: Price = Field(..., description="Unit price")
    quantity: StrictInt = Field(..., ge=0, description="Units in stock")
    category: str = Field(..., min_length=1, description="Category")
    description: Optional[str] = Field(default=None, description="Description")
    status: ProductStatus = Field(default=ProductStatus.IN_STOCK)
    language: str = Field(default="en", min_length=1, description="Locale tag")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    rating_tenths: Optional[int] = Field(default=None, ge=0, le=50)

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: Union[int, float, Decimal]) -> Union[int, float, Decimal]:
        if v < 0:
            raise ValueError("Price cannot be negative")
        return v

    @model_validator(mode="before")
    @classmethod
    def default_timestamps(cls, data: Any) -> Any:
        """
        A product that was never updated carries its creation time; one with
        only an update time was created then.
        """
        if not isinstance(data, dict):
            return data

        created_at = data.get("created_at") or data.get("updated_at") or _utcnow()
        updated_at = data.get("updated_at") or created_at
        return {**data, "created_at": created_at, "updated_at": updated_at}

    @model_validator(mode="after")
    def check_timestamps(self) -> "Product":
        if (self.created_at.tzinfo is None) != (self.updated_at.tzinfo is None):
            raise ValueError("created_at and updated_at must both be naive or both be aware")
        if self.updated_at < self.created_at:
            raise ValueError("updated_at cannot be earlier than created_at")
        return self


# =============================================================================
# METRICS
# =============================================================================

class MetricsSnapshot(BaseModel):
    """Per-product engagement figures."""

    model_config = ConfigDict(frozen=True)

    views: NonNegativeInt
    wishlist_adds: NonNegativeInt
    orders: NonNegativeInt


class CatalogSummary(BaseModel):
    """Aggregate figures over the whole catalog, independent of search."""

    model_config = ConfigDict(frozen=True)

    total_sales_figure: NonNegativeInt
    active_product_count: NonNegativeInt
    total_view_count: NonNegativeInt
    total_order_count: NonNegativeInt


class AnalyticsNotice(BaseModel):
    """Transient notification payload for the inspect action."""

    product_id: str
    title: str
    description: str
    metrics: MetricsSnapshot


# =============================================================================
# RENDER MODEL
# =============================================================================

class RatingDisplay(BaseModel):
    """Star rating as displayed on a product card."""

    rating_tenths: int = Field(..., ge=0, le=50)
    filled_stars: int = Field(..., ge=1, le=5)
    stars: List[bool]
    label: str


class ProductCard(BaseModel):
    """Everything the renderer needs to draw one product."""

    id: str
    name: str
    category: str
    price: Price
    price_display: str
    quantity: int
    stock_label: str
    status: ProductStatus
    language: str
    description: Optional[str] = None
    badge: str
    rating: RatingDisplay
    metrics: MetricsSnapshot
    created_at: datetime
    updated_at: datetime


class EmptyStateKind(str, enum.Enum):
    """Why the listing has nothing to show."""

    EMPTY_CATALOG = "empty-catalog"
    NO_MATCHES = "no-matches"


class EmptyState(BaseModel):
    """Empty listing placeholder with the add-product affordance."""

    kind: EmptyStateKind
    title: str
    message: str
    action_label: str
    action_path: str


class StoreHeader(BaseModel):
    """Store heading and live product count."""

    title: str
    product_count: int
    subtitle: str


class RenderModel(BaseModel):
    """Complete description of the catalog screen."""

    header: StoreHeader
    summary: CatalogSummary
    query: str
    view_mode: ViewMode
    items: List[ProductCard]
    is_empty: bool
    empty_state: Optional[EmptyState] = None
