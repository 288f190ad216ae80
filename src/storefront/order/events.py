"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """An order was accepted and stock was reserved for every line."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    items: Text(required=True)  # JSON: list of {product_id, quantity, price_at_purchase}
    item_count: Integer(required=True)
    total_amount: Float(required=True)
    placed_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id: Identifier(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    changed_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    """An order was cancelled before shipping; its stock went back to inventory."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    previous_status: String(required=True)
    released_items: Text(required=True)  # JSON: list of {product_id, quantity}
    cancelled_at: DateTime(required=True)
