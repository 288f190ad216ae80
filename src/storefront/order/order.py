"""Order aggregate, its line items and the customer snapshot taken at checkout."""

import json
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from storefront.order.status import OrderStatus, assert_transition

_CENTS = Decimal("0.01")


def to_money(amount) -> Decimal:
    """Exact decimal for a stored float amount, rounded to cents."""
    return Decimal(str(amount)).quantize(_CENTS, rounding=ROUND_HALF_UP)


@storefront.value_object(part_of="Order")
class CustomerDetails:
    """Contact and delivery details as given at checkout.

    Copied onto the order so that later changes to the user do not rewrite
    what the order was placed with.
    """

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    shipping_address: Text(required=True)


@storefront.entity(part_of="Order")
class OrderItem:
    """One order line. `product_id` is a plain reference; the product may later
    be edited or removed from the catalogue without affecting the line."""

    product_id: Identifier(required=True)
    product_name: String(required=True, max_length=255)
    quantity: Integer(required=True, min_value=1)
    price_at_purchase: Float(required=True, min_value=0.0)

    @property
    def line_total(self) -> Decimal:
        return to_money(self.price_at_purchase) * self.quantity


@storefront.aggregate
class Order:
    user_id: Identifier(required=True)
    customer: ValueObject(CustomerDetails, required=True)
    status: String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items: HasMany(OrderItem)
    total_amount: Float(required=True, min_value=0.0)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def place(cls, user_id, customer_name, customer_email, shipping_address, lines):
        """Build a PENDING order from already-reserved lines.

        `lines` are dicts with `product_id`, `product_name`, `quantity` and
        `price_at_purchase`. The total is summed once here and never
        recomputed from catalogue prices.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        items = [OrderItem(**line) for line in lines]
        total = sum((item.line_total for item in items), Decimal("0"))
        now = datetime.now()

        order = cls(
            user_id=user_id,
            customer=CustomerDetails(
                name=customer_name,
                email=customer_email,
                shipping_address=shipping_address,
            ),
            status=OrderStatus.PENDING.value,
            items=items,
            total_amount=float(total.quantize(_CENTS)),
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                user_id=user_id,
                items=json.dumps(
                    [
                        {
                            "product_id": str(item.product_id),
                            "quantity": item.quantity,
                            "price_at_purchase": item.price_at_purchase,
                        }
                        for item in items
                    ]
                ),
                item_count=len(items),
                total_amount=order.total_amount,
                placed_at=now,
            )
        )
        return order

    @property
    def current_status(self) -> OrderStatus:
        return OrderStatus(self.status)

    def change_status(self, requested) -> OrderStatus:
        """Move to `requested`, raising the status policy's rejection if it is not allowed."""
        target = assert_transition(self.current_status, requested)
        previous = self.status
        now = datetime.now()

        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )

        if target == OrderStatus.CANCELLED:
            self.raise_(
                OrderCancelled(
                    order_id=self.id,
                    user_id=self.user_id,
                    previous_status=previous,
                    released_items=json.dumps(
                        [{"product_id": str(item.product_id), "quantity": item.quantity} for item in self.items]
                    ),
                    cancelled_at=now,
                )
            )

        return target
