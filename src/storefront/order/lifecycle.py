"""Order lifecycle: placing, advancing, cancelling and deleting orders.

Each mutating operation runs in its own explicit unit of work spanning the
inventory store and the order repository, so an operation either commits all
of its stock movements together with the order write, or none of them.
"""

from collections.abc import Callable, Iterable, Mapping

from protean.core.unit_of_work import UnitOfWork
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.catalogue.inventory import InventoryStore
from storefront.catalogue.product import Product
from storefront.customer.user import User
from storefront.order.order import Order
from storefront.order.repository import OrderRepository
from storefront.order.status import OrderStatus, can_transition
from storefront.shared.errors import ReservationRollbackFailed
from storefront.utils.logging import get_logger, log_context

logger = get_logger(__name__)


def _parse_line(line) -> tuple[str, int]:
    if isinstance(line, Mapping):
        product_id, quantity = line.get("product_id"), line.get("quantity")
    else:
        try:
            product_id, quantity = line
        except (TypeError, ValueError):
            raise ValidationError({"items": [f"Each item needs a product_id and a quantity, got {line!r}"]}) from None

    if not product_id:
        raise ValidationError({"items": ["Each item needs a product_id"]})

    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError({"items": [f"Quantity must be at least 1 for product {product_id}"]})

    return str(product_id), quantity


class OrderLifecycle:
    """Entry point for every order operation.

    `user_lookup` resolves a user id to a user or raises `UserNotFound`. It
    defaults to the `User` repository.
    """

    def __init__(self, user_lookup: Callable | None = None):
        self._user_lookup = user_lookup

    @property
    def inventory(self) -> InventoryStore:
        return current_domain.repository_for(Product)

    @property
    def orders(self) -> OrderRepository:
        return current_domain.repository_for(Order)

    def resolve_user(self, user_id):
        if self._user_lookup is not None:
            return self._user_lookup(user_id)
        return current_domain.repository_for(User).resolve(user_id)

    # -------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------
    def create_order(
        self,
        user_id,
        customer_name: str,
        customer_email: str,
        shipping_address: str,
        items: Iterable,
    ) -> Order:
        """Reserve stock for every line and persist a PENDING order.

        The user is resolved first. `items` is then read as a non-empty
        sequence of `(product_id, quantity)` pairs or mappings with those
        keys, reserved in the given order. If any line fails, every
        reservation made so far is released before the error propagates.
        """
        with log_context(user_id=str(user_id)):
            with UnitOfWork():
                self.resolve_user(user_id)

                requested = [_parse_line(line) for line in items or ()]
                if not requested:
                    raise ValidationError({"items": ["An order needs at least one item"]})

                reserved: list[tuple[str, int]] = []
                try:
                    lines = []
                    for product_id, quantity in requested:
                        product = self.inventory.try_reserve(product_id, quantity)
                        reserved.append((product_id, quantity))
                        lines.append(
                            {
                                "product_id": product_id,
                                "product_name": product.name,
                                "quantity": quantity,
                                "price_at_purchase": product.price,
                            }
                        )

                    order = Order.place(
                        user_id=str(user_id),
                        customer_name=customer_name,
                        customer_email=customer_email,
                        shipping_address=shipping_address,
                        lines=lines,
                    )
                    self.orders.add(order)
                except Exception as exc:
                    logger.warning(
                        "order_rejected",
                        reason=getattr(exc, "message", str(exc)),
                        released=len(reserved),
                    )
                    self._roll_back(reserved)
                    raise

            logger.info(
                "order_placed",
                order_id=str(order.id),
                item_count=len(lines),
                total_amount=order.total_amount,
            )
        return order

    def update_status(self, order_id, requested_status) -> Order:
        """Move an order to `requested_status`.

        A cancellation puts every item's quantity back into stock; those
        releases commit together with the new status.
        """
        with log_context(order_id=str(order_id)):
            with UnitOfWork():
                order = self.orders.get_order(order_id)
                previous = order.current_status

                decision = can_transition(previous, requested_status)
                if not decision.allowed:
                    logger.warning(
                        "status_change_rejected",
                        current_status=previous.value,
                        requested_status=requested_status,
                        reason=decision.reason.message,
                    )
                    raise decision.reason

                if decision.is_cancellation:
                    # Every product must still exist before any stock goes back
                    for item in order.items:
                        self.inventory.get_product(item.product_id)
                    for item in order.items:
                        self.inventory.release(item.product_id, item.quantity)

                order.change_status(decision.target)
                self.orders.add(order)

            logger.info(
                "order_cancelled" if decision.is_cancellation else "order_status_changed",
                previous_status=previous.value,
                new_status=order.status,
            )
        return order

    def cancel_order(self, order_id) -> Order:
        return self.update_status(order_id, OrderStatus.CANCELLED.value)

    def delete_order(self, order_id) -> None:
        """Delete the order and its items. Stock is not restored."""
        with log_context(order_id=str(order_id)):
            with UnitOfWork():
                order = self.orders.get_order(order_id)
                self.orders.delete_order(order)

            logger.info("order_deleted", status=order.status)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get_order(self, order_id) -> Order:
        return self.orders.get_order(order_id)

    def list_orders(self, user_id=None) -> list[Order]:
        return self.orders.list_all(user_id=user_id)

    # -------------------------------------------------------------------
    # Compensation
    # -------------------------------------------------------------------
    def _roll_back(self, reserved: list[tuple[str, int]]) -> None:
        for product_id, quantity in reversed(reserved):
            try:
                self.inventory.release(product_id, quantity)
            except Exception as exc:
                logger.error(
                    "reservation_rollback_failed",
                    product_id=product_id,
                    quantity=quantity,
                    exc_info=True,
                )
                raise ReservationRollbackFailed(product_id, quantity) from exc
