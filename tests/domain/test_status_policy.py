"""Tests for the order status state machine."""

import pytest
from storefront.order.status import (
    ALLOWED_STATUSES,
    OrderStatus,
    TransitionDecision,
    assert_transition,
    can_transition,
    normalize,
)
from storefront.shared.errors import IllegalCancellation, InvalidStatus, OrderFinalized


class TestNormalize:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("PENDING", OrderStatus.PENDING),
            ("shipped", OrderStatus.SHIPPED),
            ("  Processing \n", OrderStatus.PROCESSING),
            ("cancelled", OrderStatus.CANCELLED),
            ("CANCELED", OrderStatus.CANCELLED),
            (" canceled ", OrderStatus.CANCELLED),
        ],
    )
    def test_accepts_case_whitespace_and_alias(self, raw, expected):
        assert normalize(raw) == expected

    def test_passes_enum_members_through(self):
        assert normalize(OrderStatus.DELIVERED) is OrderStatus.DELIVERED

    @pytest.mark.parametrize("raw", ["", "   ", "SHIPPING", "done", None, 3])
    def test_rejects_unknown_values(self, raw):
        with pytest.raises(InvalidStatus) as exc_info:
            normalize(raw)

        assert exc_info.value.value == raw
        assert exc_info.value.allowed == ALLOWED_STATUSES

    def test_allowed_statuses_are_the_five_states(self):
        assert ALLOWED_STATUSES == ("PENDING", "PROCESSING", "SHIPPED", "DELIVERED", "CANCELLED")


class TestForwardTransitions:
    @pytest.mark.parametrize(
        "current, requested",
        [
            ("PENDING", "PROCESSING"),
            ("PENDING", "SHIPPED"),
            ("PENDING", "DELIVERED"),
            ("PROCESSING", "SHIPPED"),
            ("PROCESSING", "DELIVERED"),
            ("SHIPPED", "DELIVERED"),
        ],
    )
    def test_forward_moves_are_allowed_including_skips(self, current, requested):
        decision = can_transition(current, requested)

        assert decision.allowed
        assert decision.target == OrderStatus(requested)
        assert not decision.is_cancellation

    def test_moving_back_is_not_blocked(self):
        decision = can_transition("SHIPPED", "PROCESSING")
        assert decision.allowed
        assert decision.target == OrderStatus.PROCESSING

    def test_same_status_is_allowed(self):
        assert can_transition("PROCESSING", "processing").allowed


class TestCancellation:
    @pytest.mark.parametrize("current", ["PENDING", "PROCESSING"])
    def test_cancel_allowed_before_shipping(self, current):
        decision = can_transition(current, "CANCELLED")

        assert decision.allowed
        assert decision.is_cancellation

    def test_alias_cancels_too(self):
        decision = can_transition("PENDING", "canceled")
        assert decision.target == OrderStatus.CANCELLED

    def test_cancel_rejected_once_shipped(self):
        decision = can_transition("SHIPPED", "CANCELLED")

        assert not decision.allowed
        assert isinstance(decision.reason, IllegalCancellation)
        assert decision.reason.current_status == "SHIPPED"

    def test_cancelling_a_cancelled_order_is_illegal(self):
        decision = can_transition("CANCELLED", "CANCELLED")
        assert isinstance(decision.reason, IllegalCancellation)


class TestTerminalStates:
    @pytest.mark.parametrize("requested", ["PENDING", "PROCESSING", "SHIPPED", "DELIVERED", "CANCELLED", "CANCELED"])
    def test_delivered_rejects_everything(self, requested):
        decision = can_transition("DELIVERED", requested)

        assert not decision.allowed
        assert isinstance(decision.reason, OrderFinalized)

    @pytest.mark.parametrize("requested", ["PENDING", "PROCESSING", "SHIPPED", "DELIVERED"])
    def test_cancelled_rejects_non_cancel_targets(self, requested):
        decision = can_transition("CANCELLED", requested)
        assert isinstance(decision.reason, OrderFinalized)

    def test_invalid_value_is_reported_before_terminal_state(self):
        decision = can_transition("DELIVERED", "bogus")
        assert isinstance(decision.reason, InvalidStatus)


class TestAssertTransition:
    def test_returns_target(self):
        assert assert_transition("PENDING", " shipped ") == OrderStatus.SHIPPED

    def test_raises_reason(self):
        with pytest.raises(OrderFinalized) as exc_info:
            assert_transition("DELIVERED", "SHIPPED")

        assert exc_info.value.message == "Cannot change status of delivered order"

    def test_decision_is_immutable(self):
        decision = can_transition("PENDING", "SHIPPED")
        assert isinstance(decision, TransitionDecision)

        with pytest.raises(AttributeError):
            decision.target = OrderStatus.DELIVERED
