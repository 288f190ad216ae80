"""Tests for the Product aggregate: catalogue fields and stock movements."""

import pytest
from protean.exceptions import ValidationError
from storefront.catalogue.product import Product, ProductAdded, StockRestocked
from storefront.shared.errors import InsufficientStock


def _product(**overrides):
    values = {
        "name": "Espresso Cup",
        "description": "Double-walled glass cup",
        "category": "Kitchen",
        "price": 12.5,
        "stock_quantity": 5,
    }
    values.update(overrides)
    return Product.add(**values)


class TestProductAdd:
    def test_add_sets_fields(self):
        product = _product(image_url="https://example.com/cup.jpg")

        assert product.name == "Espresso Cup"
        assert product.category == "Kitchen"
        assert product.price == 12.5
        assert product.stock_quantity == 5
        assert product.image_url == "https://example.com/cup.jpg"
        assert product.created_at is not None

    def test_add_raises_product_added_event(self):
        product = _product()

        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductAdded)
        assert event.product_id == str(product.id)
        assert event.stock_quantity == 5

    def test_stock_defaults_to_zero(self):
        product = Product(name="Mug", description="Stoneware", category="Kitchen", price=8.0)
        assert product.stock_quantity == 0

    def test_free_products_are_allowed(self):
        assert _product(price=0.0).price == 0.0


class TestProductValidation:
    @pytest.mark.parametrize("field_name", ["name", "description", "category", "price"])
    def test_required_fields(self, field_name):
        with pytest.raises(ValidationError):
            _product(**{field_name: None})

    @pytest.mark.parametrize("field_name", ["name", "description", "category"])
    def test_blank_text_is_rejected(self, field_name):
        with pytest.raises(ValidationError):
            _product(**{field_name: "   "})

    def test_negative_price_is_rejected(self):
        with pytest.raises(ValidationError):
            _product(price=-0.01)

    def test_negative_stock_is_rejected(self):
        with pytest.raises(ValidationError):
            _product(stock_quantity=-1)


class TestReserve:
    def test_reserve_decrements_stock(self):
        product = _product(stock_quantity=5)
        product.reserve(3)
        assert product.stock_quantity == 2

    def test_reserve_entire_stock(self):
        product = _product(stock_quantity=5)
        product.reserve(5)
        assert product.stock_quantity == 0

    def test_reserve_more_than_available_fails_without_change(self):
        product = _product(stock_quantity=2)

        with pytest.raises(InsufficientStock) as exc_info:
            product.reserve(3)

        exc = exc_info.value
        assert exc.product_id == str(product.id)
        assert exc.product_name == "Espresso Cup"
        assert exc.requested == 3
        assert exc.available == 2
        assert exc.message == "Insufficient stock for product: Espresso Cup"
        assert product.stock_quantity == 2

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_reserve_requires_positive_quantity(self, quantity):
        product = _product()
        with pytest.raises(ValidationError):
            product.reserve(quantity)
        assert product.stock_quantity == 5


class TestReleaseAndRestock:
    def test_release_increments_stock(self):
        product = _product(stock_quantity=1)
        product.release(4)
        assert product.stock_quantity == 5

    def test_release_requires_positive_quantity(self):
        with pytest.raises(ValidationError):
            _product().release(0)

    def test_restock_raises_event(self):
        product = _product(stock_quantity=1)
        product._events.clear()

        product.restock(9)

        assert product.stock_quantity == 10
        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, StockRestocked)
        assert event.quantity == 9
        assert event.previous_stock == 1
        assert event.new_stock == 10


class TestUpdateDetails:
    def test_only_given_fields_change(self):
        product = _product()
        product.update_details(price=15.0, category="Tableware")

        assert product.price == 15.0
        assert product.category == "Tableware"
        assert product.name == "Espresso Cup"
        assert product.stock_quantity == 5

    def test_image_can_be_cleared(self):
        product = _product(image_url="https://example.com/cup.jpg")
        product.update_details(image_url=None)
        assert product.image_url is None
