"""Order status state machine.

    PENDING ──► PROCESSING ──► SHIPPED ──► DELIVERED
       │            │
       └────────────┴──► CANCELLED

Forward moves may skip states (PENDING straight to SHIPPED is allowed).
DELIVERED and CANCELLED are terminal. Cancellation is only possible before
shipping, and it is the only transition that touches stock.

Everything here is pure: no repositories, no unit of work.
"""

from dataclasses import dataclass
from enum import Enum

from protean.exceptions import ValidationError

from storefront.shared.errors import IllegalCancellation, InvalidStatus, OrderFinalized


class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


ALLOWED_STATUSES = tuple(status.value for status in OrderStatus)

_ALIASES = {"CANCELED": OrderStatus.CANCELLED.value}

_CANCELLABLE_STATES = {OrderStatus.PENDING, OrderStatus.PROCESSING}
_TERMINAL_STATES = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}


@dataclass(frozen=True)
class TransitionDecision:
    """Outcome of checking a requested status change.

    `target` is set when the move is allowed; `reason` holds the error to
    raise when it is not.
    """

    current: OrderStatus
    target: OrderStatus | None = None
    reason: ValidationError | None = None

    @property
    def allowed(self) -> bool:
        return self.reason is None

    @property
    def is_cancellation(self) -> bool:
        return self.target == OrderStatus.CANCELLED


def normalize(value) -> OrderStatus:
    """Map free-form input onto an `OrderStatus`.

    Surrounding whitespace and case are ignored, and the American spelling
    "CANCELED" is accepted. Anything else raises `InvalidStatus`.
    """
    if isinstance(value, OrderStatus):
        return value

    candidate = value.strip().upper() if isinstance(value, str) else ""
    candidate = _ALIASES.get(candidate, candidate)

    if candidate not in ALLOWED_STATUSES:
        raise InvalidStatus(value, ALLOWED_STATUSES)

    return OrderStatus(candidate)


def can_transition(current, requested) -> TransitionDecision:
    """Decide whether an order in `current` may move to `requested`."""
    current = normalize(current)

    try:
        target = normalize(requested)
    except InvalidStatus as exc:
        return TransitionDecision(current=current, reason=exc)

    if current == OrderStatus.DELIVERED:
        return TransitionDecision(current=current, reason=OrderFinalized(current.value))

    if target == OrderStatus.CANCELLED:
        if current not in _CANCELLABLE_STATES:
            return TransitionDecision(current=current, reason=IllegalCancellation(current.value))
        return TransitionDecision(current=current, target=target)

    if current in _TERMINAL_STATES:
        return TransitionDecision(current=current, reason=OrderFinalized(current.value))

    return TransitionDecision(current=current, target=target)


def assert_transition(current, requested) -> OrderStatus:
    """Like `can_transition`, but raise the rejection and return the target."""
    decision = can_transition(current, requested)
    if not decision.allowed:
        raise decision.reason
    return decision.target
