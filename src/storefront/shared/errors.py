"""Business-rule failures raised by the order lifecycle and its collaborators.

Lookups that miss derive from Protean's `ObjectNotFoundError`; rule
violations derive from Protean's `ValidationError` and carry the usual
field-keyed `messages` dict. Every error also exposes a human readable
`message` and the structured values a caller needs to explain the failure.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class UserNotFound(ObjectNotFoundError):
    def __init__(self, user_id):
        self.user_id = str(user_id)
        self.message = f"User not found: {self.user_id}"
        super().__init__(self.message)


class ProductNotFound(ObjectNotFoundError):
    def __init__(self, product_id):
        self.product_id = str(product_id)
        self.message = f"Product not found: {self.product_id}"
        super().__init__(self.message)


class OrderNotFound(ObjectNotFoundError):
    def __init__(self, order_id):
        self.order_id = str(order_id)
        self.message = f"Order not found: {self.order_id}"
        super().__init__(self.message)


class InsufficientStock(ValidationError):
    """Requested quantity exceeds the product's current stock."""

    def __init__(self, product_id, product_name, requested, available):
        self.product_id = str(product_id)
        self.product_name = product_name
        self.requested = requested
        self.available = available
        self.message = f"Insufficient stock for product: {product_name}"
        super().__init__({"quantity": [self.message]})


class InvalidStatus(ValidationError):
    """Requested status is not one of the recognized order statuses."""

    def __init__(self, value, allowed):
        self.value = value
        self.allowed = tuple(allowed)
        self.message = f"Invalid status: '{value}'. Allowed values: {list(self.allowed)}"
        super().__init__({"status": [self.message]})


class OrderFinalized(ValidationError):
    """The order sits in a terminal status and accepts no further transitions."""

    def __init__(self, current_status):
        self.current_status = current_status
        self.message = f"Cannot change status of {current_status.lower()} order"
        super().__init__({"status": [self.message]})


class IllegalCancellation(ValidationError):
    def __init__(self, current_status):
        self.current_status = current_status
        self.message = f"Can only cancel PENDING or PROCESSING orders. Current status: {current_status}"
        super().__init__({"status": [self.message]})


class ReservationRollbackFailed(RuntimeError):
    """Releasing stock reserved earlier in a failed request did not succeed.

    Raised instead of the business error that triggered the rollback, chained
    to the fault that interrupted it.
    """

    def __init__(self, product_id, quantity):
        self.product_id = str(product_id)
        self.quantity = quantity
        super().__init__(f"Could not release {quantity} unit(s) of product {self.product_id}")
