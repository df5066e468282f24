"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides settings, sample catalog, store, screen and client fixtures.

==============================================================================
"""

import pytest
from datetime import datetime, timezone
from typing import Generator, List

from fastapi.testclient import TestClient

from app.config import Settings
from app.catalog import CatalogScreen, Product, ProductStore
from app.catalog.screen import init_screen
from app.main import app


CREATED_AT = datetime(2026, 1, 1, tzinfo=timezone.utc)


# ============================================================================
# SETTINGS FIXTURES
# ============================================================================

@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


# ============================================================================
# CATALOG FIXTURES
# ============================================================================

@pytest.fixture
def tomatoes() -> Product:
    return Product(
        id="1",
        name="Fresh Tomatoes",
        price=80,
        quantity=50,
        category="Vegetables",
        description="Farm-fresh organic tomatoes, perfect for cooking and salads.",
        status="in-stock",
        language="en",
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
    )


@pytest.fixture
def rice() -> Product:
    return Product(
        id="2",
        name="Basmati Rice",
        price=120,
        quantity=25,
        category="Grains",
        description="Premium quality basmati rice, aged for perfect aroma.",
        status="in-stock",
        language="en",
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
    )


@pytest.fixture
def products(tomatoes: Product, rice: Product) -> List[Product]:
    """The two-product reference catalog."""
    return [tomatoes, rice]


@pytest.fixture
def store(products: List[Product]) -> ProductStore:
    return ProductStore(products)


@pytest.fixture
def screen(store: ProductStore, settings: Settings) -> CatalogScreen:
    return CatalogScreen(store, settings=settings)


# ============================================================================
# CLIENT FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def client(tomatoes: Product, rice: Product, settings: Settings) -> Generator[TestClient, None, None]:
    """Test client with a fresh screen holding the reference catalog."""
    with TestClient(app) as test_client:
        init_screen([tomatoes, rice], settings=settings)
        yield test_client
