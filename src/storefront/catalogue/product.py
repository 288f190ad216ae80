"""Product aggregate root and its domain events."""

from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.errors import InsufficientStock

_UNSET = object()


@storefront.aggregate
class Product:
    """A sellable catalogue item carrying the single authoritative stock counter.

    `stock_quantity` changes only through `reserve`, `release` and `restock`;
    `update_details` touches the descriptive fields and the price, never stock.
    Orders capture the price at reservation time, so repricing a product does
    not affect orders already placed.
    """

    name: String(required=True, max_length=255)
    description: Text(required=True)
    category: String(required=True, max_length=100)
    price: Float(required=True, min_value=0.0)
    stock_quantity: Integer(default=0, min_value=0)
    image_url: String(max_length=1000)
    created_at: DateTime(default=datetime.now)

    @invariant.post
    def descriptive_fields_cannot_be_blank(self):
        for field_name in ("name", "description", "category"):
            value = getattr(self, field_name)
            if value is not None and not value.strip():
                raise ValidationError({field_name: [f"Product {field_name} cannot be blank"]})

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock_quantity is not None and self.stock_quantity < 0:
            raise ValidationError({"stock_quantity": ["Stock quantity cannot be negative"]})

    @classmethod
    def add(cls, name, description, category, price, stock_quantity=0, image_url=None):
        product = cls(
            name=name,
            description=description,
            category=category,
            price=price,
            stock_quantity=stock_quantity,
            image_url=image_url,
            created_at=datetime.now(),
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=name,
                category=category,
                price=price,
                stock_quantity=stock_quantity,
            )
        )
        return product

    def update_details(
        self,
        name=_UNSET,
        description=_UNSET,
        category=_UNSET,
        price=_UNSET,
        image_url=_UNSET,
    ):
        if name is not _UNSET:
            self.name = name
        if description is not _UNSET:
            self.description = description
        if category is not _UNSET:
            self.category = category
        if price is not _UNSET:
            self.price = price
        if image_url is not _UNSET:
            self.image_url = image_url

    # -------------------------------------------------------------------
    # Stock movements
    # -------------------------------------------------------------------
    def reserve(self, quantity):
        """Take `quantity` units out of stock, or fail without touching it."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        if self.stock_quantity < quantity:
            raise InsufficientStock(
                product_id=self.id,
                product_name=self.name,
                requested=quantity,
                available=self.stock_quantity,
            )

        self.stock_quantity -= quantity

    def release(self, quantity):
        """Put `quantity` previously reserved units back into stock."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        self.stock_quantity += quantity

    def restock(self, quantity):
        previous = self.stock_quantity
        self.release(quantity)
        self.raise_(
            StockRestocked(
                product_id=self.id,
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock_quantity,
                restocked_at=datetime.now(),
            )
        )


@storefront.event(part_of=Product)
class ProductAdded:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)
    stock_quantity: Integer(required=True)


@storefront.event(part_of=Product)
class StockRestocked:
    """Units were added to a product's stock outside any order."""

    __version__ = 1

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)
    restocked_at: DateTime(required=True)
