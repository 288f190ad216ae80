"""Persistence for orders and the line items they own."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order, OrderItem
from storefront.shared.errors import OrderNotFound


@storefront.repository(part_of=Order)
class OrderRepository:
    """Repository for `Order`.

    `add` stores the order together with its items, and doubles as the update
    for an order that already exists.
    """

    def get_order(self, order_id) -> Order:
        if not order_id:
            raise OrderNotFound(order_id)
        try:
            return self.get(str(order_id))
        except ObjectNotFoundError as exc:
            raise OrderNotFound(order_id) from exc

    def delete_order(self, order: Order) -> None:
        """Remove the order and every item it owns."""
        item_dao = current_domain.repository_for(OrderItem)._dao
        for item in list(order.items):
            item_dao.delete(item)

        self._dao.delete(order)

    def list_all(self, user_id=None) -> list[Order]:
        """Orders in the order they were placed, optionally for one user only."""
        query = self._dao.query.limit(None)
        if user_id:
            query = query.filter(user_id=str(user_id))

        return sorted(query.all().items, key=lambda order: order.created_at)
