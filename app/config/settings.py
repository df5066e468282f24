"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management for the storefront using Pydantic Settings.

This module implements the Singleton pattern to ensure a single global
configuration instance throughout the application lifecycle.

Features:
---------
- Environment variable loading with type validation
- .env file support for local development
- Illustrative engagement metrics kept as configuration constants

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

Metrics:
--------
The storefront has no event store. View, wishlist and order figures are
placeholder constants shown on the dashboard; they are never derived from
real user interactions. Override them with METRICS_* environment variables.

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        host: Server bind address
        port: Server port number
        products_file: Path to the initial catalog JSON
        cors_origins: Allowed CORS origins (JSON array string)
        store_title: Heading shown above the catalog
        currency_symbol: Prefix for formatted prices
        marketplace_label: Badge shown on every product card
        add_product_path: Navigation target offered by the empty state
        default_view_mode: Layout density on startup (grid/list)
        default_rating_tenths: Rating used when a product carries none
        metrics_*: Illustrative engagement figures

    Example:
        >>> settings = Settings()
        >>> print(settings.store_title)
        'My Flipkart Store'
    """

    # =========================================================================
    # PYDANTIC SETTINGS CONFIGURATION
    # =========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Storefront Catalog API",
        description="Display name for the application"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Server bind address"
    )

    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Server port number"
    )

    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # CATALOG SETTINGS
    # =========================================================================
    products_file: str = Field(
        default="data/products.json",
        description="Path to the initial catalog JSON"
    )

    store_title: str = Field(
        default="My Flipkart Store",
        min_length=1,
        description="Heading shown above the catalog"
    )

    currency_symbol: str = Field(
        default="₹",
        description="Prefix for formatted prices"
    )

    marketplace_label: str = Field(
        default="Flipkart Listed",
        description="Badge shown on every product card"
    )

    add_product_path: str = Field(
        default="/add-product",
        description="Navigation target offered when no products are shown"
    )

    default_view_mode: str = Field(
        default="grid",
        description="Initial layout density: grid or list"
    )

    default_rating_tenths: int = Field(
        default=44,
        ge=0,
        le=50,
        description="Rating in tenths of a star for products without one"
    )

    # =========================================================================
    # ILLUSTRATIVE METRICS
    # =========================================================================
    metrics_total_sales: int = Field(
        default=12450,
        ge=0,
        description="Sales-to-date figure shown in the summary"
    )

    metrics_total_views: int = Field(
        default=1234,
        ge=0,
        description="Cumulative view count shown in the summary"
    )

    metrics_total_orders: int = Field(
        default=15,
        ge=0,
        description="Cumulative order count shown in the summary"
    )

    metrics_product_views: int = Field(
        default=45,
        ge=0,
        description="Views shown on every product card"
    )

    metrics_product_wishlist_adds: int = Field(
        default=12,
        ge=0,
        description="Wishlist additions shown on every product card"
    )

    metrics_product_orders: int = Field(
        default=3,
        ge=0,
        description="Orders shown on every product card"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """
        Validate and normalize application environment.

        Unknown values fall back to 'development' with a warning.
        """
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("default_view_mode")
    @classmethod
    def validate_default_view_mode(cls, value: str) -> str:
        """
        Validate the startup view mode.

        Raises:
            ValueError: If the mode is not grid or list
        """
        normalized = value.lower().strip()
        if normalized not in {"grid", "list"}:
            raise ValueError(
                f"Unsupported view mode: {value}. Supported: grid, list"
            )
        return normalized

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def products_path(self) -> Path:
        """Get products file as Path object."""
        return Path(self.products_file)

    @property
    def cors_origins_list(self) -> List[str]:
        """
        Parse CORS origins from JSON string to list.

        Returns:
            List of allowed origin strings
        """
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
            return ["*"]
        except json.JSONDecodeError:
            logger.warning(
                f"Invalid CORS origins JSON: {self.cors_origins}, "
                "defaulting to ['*']"
            )
            return ["*"]

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"debug={self.debug})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance (singleton pattern).

    Returns:
        Global Settings instance
    """
    settings = Settings()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
