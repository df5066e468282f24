"""
==============================================================================
Catalog Engine Tests
==============================================================================

Tests for the product store, search, view mode, metrics, presentation
binder and screen state.

==============================================================================
"""

import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.catalog import (
    CatalogScreen,
    EmptyStateKind,
    MetricsAggregator,
    PresentationBinder,
    Product,
    ProductStatus,
    ProductStore,
    ViewMode,
    ViewModeController,
    filter_products,
    format_price,
    load_products_file,
    rating_display,
)
from app.config import Settings
from app.core import AppException


def make_product(product_id: str, name: str, category: str, **fields) -> Product:
    return Product(id=product_id, name=name, category=category,
                   price=fields.pop("price", 10), quantity=fields.pop("quantity", 1), **fields)


class TestProductModel:
    """Tests for the Product model."""

    def test_defaults(self):
        product = make_product("p1", "Onions", "Vegetables")
        assert product.status == ProductStatus.IN_STOCK
        assert product.language == "en"
        assert product.description is None
        assert product.updated_at == product.created_at

    def test_price_type_preserved(self):
        assert type(make_product("a", "A", "C", price=80).price) is int
        assert type(make_product("b", "B", "C", price=80.5).price) is float
        assert type(make_product("c", "C", "C", price=Decimal("80.50")).price) is Decimal

    def test_string_price_rejected(self):
        with pytest.raises(ValidationError):
            make_product("a", "A", "C", price="80")

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            make_product("a", "A", "C", price=-1)

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            make_product("a", "A", "C", quantity=-1)

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            make_product("a", "", "C")

    def test_updated_before_created_rejected(self):
        created = datetime(2026, 1, 2, tzinfo=timezone.utc)
        with pytest.raises(ValidationError):
            make_product("a", "A", "C", created_at=created, updated_at=created - timedelta(days=1))

    @pytest.mark.parametrize("price", [
        float("inf"), float("-inf"), float("nan"), Decimal("Infinity"), Decimal("NaN"),
    ])
    def test_non_finite_price_rejected(self, price):
        with pytest.raises(ValidationError):
            make_product("a", "A", "C", price=price)

    @pytest.mark.parametrize("updated", [
        datetime(2025, 6, 1, tzinfo=timezone.utc),
        datetime(2025, 6, 1),
    ])
    def test_created_at_follows_updated_at(self, updated):
        product = make_product("a", "A", "C", updated_at=updated)
        assert product.created_at == updated
        assert product.updated_at == updated

    def test_rating_range(self):
        with pytest.raises(ValidationError):
            make_product("a", "A", "C", rating_tenths=51)

    def test_frozen(self, tomatoes):
        with pytest.raises(ValidationError):
            tomatoes.name = "Rotten Tomatoes"


class TestProductStore:
    """Tests for ProductStore."""

    def test_round_trip(self, products):
        store = ProductStore()
        store.load(products)
        assert list(store.products) == products
        for loaded, original in zip(store.products, products):
            assert loaded == original
            assert type(loaded.price) is type(original.price)
            assert type(loaded.quantity) is type(original.quantity)

    def test_insertion_order(self, rice, tomatoes):
        store = ProductStore([rice, tomatoes])
        assert [p.id for p in store.products] == ["2", "1"]

    def test_empty_load(self, store):
        store.load([])
        assert store.products == ()
        assert len(store) == 0

    def test_duplicate_ids_rejected(self, store, products, tomatoes):
        duplicate = make_product("1", "Cherry Tomatoes", "Vegetables")
        with pytest.raises(AppException) as exc_info:
            store.load([tomatoes, duplicate])
        assert exc_info.value.code == "DUPLICATE_PRODUCT_ID"
        assert exc_info.value.details["product_ids"] == ["1"]
        assert list(store.products) == products

    def test_invalid_record_rejected(self, store, products):
        with pytest.raises(AppException) as exc_info:
            store.load([{"id": "9", "name": "Salt", "price": 5, "quantity": 1, "category": "Spices"},
                        {"id": "10", "name": "Sugar", "price": "cheap", "quantity": 1, "category": "Sweets"}])
        assert exc_info.value.code == "INVALID_PRODUCT"
        assert exc_info.value.details["position"] == 1
        assert list(store.products) == products

    def test_non_finite_price_load_rejected(self, store, products):
        with pytest.raises(AppException) as exc_info:
            store.load([{"id": "9", "name": "Salt", "price": float("inf"), "quantity": 1, "category": "Spices"}])
        assert exc_info.value.code == "INVALID_PRODUCT"
        assert list(store.products) == products

    def test_load_from_dicts(self):
        store = ProductStore()
        store.load([{"id": "9", "name": "Salt", "price": 5, "quantity": 1, "category": "Spices"}])
        assert store.get("9").name == "Salt"

    def test_listeners_notified(self, store, tomatoes):
        received = []
        store.subscribe(received.append)
        store.load([tomatoes])
        assert received == [(tomatoes,)]

    def test_listeners_not_notified_on_failure(self, store, tomatoes):
        received = []
        store.subscribe(received.append)
        with pytest.raises(AppException):
            store.load([tomatoes, tomatoes])
        assert received == []

    def test_unsubscribe(self, store, tomatoes):
        received = []
        store.subscribe(received.append)
        store.unsubscribe(received.append)
        store.load([tomatoes])
        assert received == []

    def test_failing_listener_restores_catalog(self, store, products, tomatoes):
        received = []

        def reject_single(catalog):
            if len(catalog) == 1:
                raise RuntimeError("listener failed")

        store.subscribe(reject_single)
        store.subscribe(received.append)
        with pytest.raises(RuntimeError):
            store.load([tomatoes])
        assert list(store.products) == products
        assert store.find_by_id("2") is not None
        assert received == [tuple(products)]

    def test_get_missing(self, store):
        with pytest.raises(AppException) as exc_info:
            store.get("404")
        assert exc_info.value.code == "PRODUCT_NOT_FOUND"
        assert exc_info.value.status_code == 404
        assert store.find_by_id("404") is None

    def test_stats(self, store):
        stats = store.get_stats()
        assert stats["total_products"] == 2
        assert stats["total_units"] == 75
        assert stats["categories"] == {"Vegetables": 1, "Grains": 1}
        assert stats["statuses"] == {"in-stock": 2}


class TestSearch:
    """Tests for filter_products."""

    def test_empty_query_is_identity(self, products):
        assert filter_products(products, "") == products

    @pytest.mark.parametrize("query", ["tomato", "TOMATO", "veget", "Fresh"])
    def test_matches_name_or_category(self, tomatoes, query):
        assert filter_products([tomatoes], query) == [tomatoes]

    def test_no_match(self, tomatoes):
        assert filter_products([tomatoes], "rice") == []

    def test_category_match(self, products, rice):
        assert filter_products(products, "grain") == [rice]

    def test_preserves_order(self):
        catalog = [
            make_product("1", "Red Apples", "Fruit"),
            make_product("2", "Potatoes", "Vegetables"),
            make_product("3", "Green Apples", "Fruit"),
            make_product("4", "Apple Juice", "Drinks"),
        ]
        assert [p.id for p in filter_products(catalog, "apple")] == ["1", "3", "4"]
        assert [p.id for p in filter_products(catalog, "fruit")] == ["1", "3"]

    def test_whitespace_not_trimmed(self, products, rice):
        onions = make_product("3", "Onions", "Vegetables")
        catalog = products + [onions]
        assert filter_products(catalog, " ") == products
        assert filter_products(catalog, " rice") == [rice]
        assert filter_products(catalog, "rice ") == []

    def test_pure(self, products):
        first = filter_products(products, "ri")
        second = filter_products(products, "ri")
        assert first == second
        assert len(products) == 2


class TestViewMode:
    """Tests for ViewModeController."""

    def test_default_grid(self):
        assert ViewModeController().current() == ViewMode.GRID

    def test_set_list(self):
        controller = ViewModeController()
        assert controller.set("list") is True
        assert controller.current() == ViewMode.LIST

    def test_set_same_is_noop(self):
        controller = ViewModeController()
        assert controller.set(ViewMode.GRID) is False
        assert controller.set(ViewMode.GRID) is False
        assert controller.current() == ViewMode.GRID

    def test_select_commands(self):
        controller = ViewModeController()
        controller.select_list()
        assert controller.current() == ViewMode.LIST
        controller.select_grid()
        assert controller.current() == ViewMode.GRID

    @pytest.mark.parametrize("value", ["table", "GRID", "", None, 1])
    def test_invalid_rejected(self, value):
        controller = ViewModeController(ViewMode.LIST)
        with pytest.raises(AppException) as exc_info:
            controller.set(value)
        assert exc_info.value.code == "INVALID_VIEW_MODE"
        assert controller.current() == ViewMode.LIST


class TestMetrics:
    """Tests for MetricsAggregator."""

    def test_summary(self, settings, products):
        summary = MetricsAggregator(settings).aggregate_summary(products)
        assert summary.total_sales_figure == 12450
        assert summary.active_product_count == 2
        assert summary.total_view_count == 1234
        assert summary.total_order_count == 15

    def test_summary_empty(self, settings):
        assert MetricsAggregator(settings).aggregate_summary([]).active_product_count == 0

    def test_snapshot(self, settings, rice):
        snapshot = MetricsAggregator(settings).snapshot_for(rice)
        assert (snapshot.views, snapshot.wishlist_adds, snapshot.orders) == (45, 12, 3)

    def test_configured_figures(self, rice):
        settings = Settings(_env_file=None, metrics_product_views=7, metrics_total_sales=0)
        aggregator = MetricsAggregator(settings)
        assert aggregator.snapshot_for(rice).views == 7
        assert aggregator.aggregate_summary([rice]).total_sales_figure == 0

    def test_analytics_notice(self, settings, tomatoes):
        notice = MetricsAggregator(settings).analytics_notice(tomatoes)
        assert notice.product_id == "1"
        assert notice.title == "📊 Product Analytics"
        assert notice.description == "Fresh Tomatoes: 45 views, 12 wishlisted, 3 orders"


class TestRatingAndPrice:
    """Tests for display helpers."""

    def test_default_rating(self):
        rating = rating_display(44)
        assert rating.filled_stars == 4
        assert rating.stars == [True, True, True, True, False]
        assert rating.label == "(4.4)"

    def test_rating_clamped_low(self):
        rating = rating_display(3)
        assert rating.filled_stars == 1
        assert rating.label == "(0.3)"

    def test_rating_zero_fills_one_star(self):
        rating = rating_display(0)
        assert rating.filled_stars == 1
        assert rating.stars == [True, False, False, False, False]
        assert rating.label == "(0.0)"

    def test_rating_max(self):
        rating = rating_display(50)
        assert rating.filled_stars == 5
        assert rating.label == "(5.0)"

    @pytest.mark.parametrize("price,expected", [
        (80, "₹80"),
        (12450, "₹12,450"),
        (80.0, "₹80"),
        (80.5, "₹80.5"),
        (99.99, "₹99.99"),
        (Decimal("1234.25"), "₹1,234.25"),
    ])
    def test_format_price(self, price, expected):
        assert format_price(price, "₹") == expected


class TestPresentationBinder:
    """Tests for PresentationBinder."""

    def test_bind_all(self, settings, products):
        model = PresentationBinder(settings=settings).bind(products, "", ViewMode.GRID)
        assert [card.name for card in model.items] == ["Fresh Tomatoes", "Basmati Rice"]
        assert model.is_empty is False
        assert model.empty_state is None
        assert model.view_mode == ViewMode.GRID
        assert model.header.title == "My Flipkart Store"
        assert model.header.subtitle == "2 products live"

    def test_card_fields(self, settings, tomatoes):
        card = PresentationBinder(settings=settings).card_for(tomatoes)
        assert card.price == 80
        assert card.price_display == "₹80"
        assert card.stock_label == "Stock: 50"
        assert card.badge == "Flipkart Listed"
        assert card.rating.label == "(4.4)"
        assert card.metrics.views == 45
        assert card.description.startswith("Farm-fresh")

    def test_card_uses_product_rating(self, settings):
        product = make_product("9", "Ghee", "Dairy", rating_tenths=37)
        card = PresentationBinder(settings=settings).card_for(product)
        assert card.rating.filled_stars == 3
        assert card.rating.label == "(3.7)"

    def test_missing_description_omitted(self, settings):
        product = make_product("9", "Ghee", "Dairy")
        card = PresentationBinder(settings=settings).card_for(product)
        assert card.description is None
        assert "description" not in card.model_dump(exclude_none=True)

    def test_view_mode_does_not_filter(self, settings, products):
        binder = PresentationBinder(settings=settings)
        grid = binder.bind(products, "rice", ViewMode.GRID)
        listing = binder.bind(products, "rice", ViewMode.LIST)
        assert grid.items == listing.items

    def test_empty_catalog_state(self, settings):
        model = PresentationBinder(settings=settings).bind([], "", ViewMode.GRID)
        assert model.items == []
        assert model.is_empty is True
        assert model.empty_state.kind == EmptyStateKind.EMPTY_CATALOG
        assert model.empty_state.action_path == "/add-product"
        assert model.summary.active_product_count == 0

    def test_no_matches_state(self, settings, products):
        model = PresentationBinder(settings=settings).bind(products, "zzz-no-match", ViewMode.LIST)
        assert model.items == []
        assert model.is_empty is True
        assert model.empty_state.kind == EmptyStateKind.NO_MATCHES
        assert "zzz-no-match" in model.empty_state.message
        assert model.empty_state.action_path == "/add-product"
        assert model.summary.active_product_count == 2


class TestCatalogScreen:
    """End-to-end tests for CatalogScreen."""

    def test_search_rice(self, screen):
        model = screen.set_query("rice")
        assert [card.name for card in model.items] == ["Basmati Rice"]
        assert model.summary.active_product_count == 2
        assert screen.summary().active_product_count == 2

    def test_search_no_match(self, screen):
        model = screen.set_query("zzz-no-match")
        assert model.items == []
        assert model.empty_state is not None
        assert model.summary.active_product_count == 2

    def test_render_reflects_last_command(self, screen):
        screen.set_query("tomato")
        screen.select_list()
        model = screen.render()
        assert model.query == "tomato"
        assert model.view_mode == ViewMode.LIST
        assert [card.id for card in model.items] == ["1"]

    def test_set_grid_twice(self, screen):
        first = screen.select_grid()
        second = screen.select_grid()
        assert first == second
        assert screen.view_mode == ViewMode.GRID

    def test_invalid_view_mode_keeps_state(self, screen):
        screen.select_list()
        with pytest.raises(AppException):
            screen.set_view_mode("mosaic")
        assert screen.view_mode == ViewMode.LIST
        assert screen.render().view_mode == ViewMode.LIST

    def test_load_recomputes(self, screen, rice):
        screen.set_query("tomato")
        screen.load([rice])
        model = screen.render()
        assert model.items == []
        assert model.empty_state.kind == EmptyStateKind.NO_MATCHES
        assert model.summary.active_product_count == 1

    def test_load_empty(self, screen):
        screen.load([])
        model = screen.render()
        assert model.items == []
        assert model.empty_state.kind == EmptyStateKind.EMPTY_CATALOG
        assert model.summary.active_product_count == 0

    def test_failed_load_keeps_render(self, screen, tomatoes):
        before = screen.render()
        with pytest.raises(AppException):
            screen.load([tomatoes, tomatoes])
        assert screen.render() == before
        assert len(screen.store) == 2

    def test_failing_listener_keeps_screen_in_step(self, screen, rice):
        def reject_single(catalog):
            if len(catalog) == 1:
                raise RuntimeError("listener failed")

        before = screen.render()
        screen.store.subscribe(reject_single)
        with pytest.raises(RuntimeError):
            screen.load([rice])
        assert len(screen.store) == 2
        assert screen.render() == before
        assert len(screen.render().items) == len(screen.store)

    def test_inspect_hidden_product(self, screen):
        screen.set_query("rice")
        notice = screen.inspect("1")
        assert notice.description == "Fresh Tomatoes: 45 views, 12 wishlisted, 3 orders"

    def test_inspect_missing(self, screen):
        with pytest.raises(AppException) as exc_info:
            screen.inspect("404")
        assert exc_info.value.code == "PRODUCT_NOT_FOUND"

    def test_default_view_mode_from_settings(self, store):
        screen = CatalogScreen(store, settings=Settings(_env_file=None, default_view_mode="list"))
        assert screen.view_mode == ViewMode.LIST

    def test_close_stops_updates(self, screen, rice):
        screen.close()
        screen.load([rice])
        assert len(screen.render().items) == 2


class TestLoader:
    """Tests for load_products_file."""

    def test_list_file(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps([{"id": "1", "name": "Salt", "price": 5,
                                     "quantity": 3, "category": "Spices"}]), encoding="utf-8")
        records = load_products_file(path)
        assert ProductStore(records).get("1").quantity == 3

    def test_wrapped_file(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps({"products": []}), encoding="utf-8")
        assert load_products_file(path) == []

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(AppException) as exc_info:
            load_products_file(path)
        assert exc_info.value.code == "INVALID_CATALOG_FILE"

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps({"items": []}), encoding="utf-8")
        with pytest.raises(AppException):
            load_products_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_products_file(tmp_path / "missing.json")


class TestSettings:
    """Tests for Settings validation."""

    def test_view_mode_normalized(self):
        assert Settings(_env_file=None, default_view_mode="LIST").default_view_mode == "list"

    def test_view_mode_invalid(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_view_mode="mosaic")

    def test_unknown_env_falls_back(self):
        assert Settings(_env_file=None, app_env="qa").app_env == "development"
